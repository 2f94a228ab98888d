from functools import wraps
import inspect

from litespring.config.logger import get_logger


def LoggerBinding(name: str = None):
    """
    Inject a StructuredLogger, configured from Settings, into a component's constructor.

    The wrapped constructor still works without arguments, so the container
    can build the component through its zero-argument factory.
    """
    def decorator(cls):
        orig_init = cls.__init__
        accepts_logger = "logger" in inspect.signature(orig_init).parameters

        @wraps(orig_init)
        def __init__(self, *args, **kwargs):
            logger = kwargs.pop("logger", None) or get_logger(name or cls.__name__)
            if accepts_logger:
                orig_init(self, *args, logger=logger, **kwargs)
            else:
                orig_init(self, *args, **kwargs)
                self.logger = logger

        cls.__init__ = __init__
        return cls
    return decorator
