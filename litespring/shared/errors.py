# litespring/shared/errors.py
from typing import Any, Optional


class LiteSpringError(Exception):
    """Base class for every error raised by the framework."""


class DescriptorError(LiteSpringError):
    """
    Invalid component metadata.

    Raised while describing a component, e.g. an ``Autowired`` field whose
    dependency type cannot be determined or a ``RequestMapping`` without a path.
    """


class InstantiationError(LiteSpringError):
    """
    A component's zero-argument constructor raised or could not be called.

    Bootstrap records these and carries on with the remaining components.
    """

    def __init__(self, component_type: type, cause: BaseException):
        self.component_type = component_type
        self.cause = cause
        super().__init__(
            f"Could not instantiate component {component_type.__name__}: {cause!r}"
        )


class InvocationError(LiteSpringError):
    """
    A handler raised while serving a request.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, component_type: type, handler: str, request: Any, reason: Optional[str] = None):
        self.component_type = component_type
        self.handler = handler
        self.request = request
        message = f"Handler {component_type.__name__}.{handler} failed for {request.path!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
