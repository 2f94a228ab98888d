from litespring.shared.annotations.core import Autowired, Component, RequestMapping
from litespring.shared.annotations.logging import LoggerBinding

__all__ = ["Autowired", "Component", "LoggerBinding", "RequestMapping"]
