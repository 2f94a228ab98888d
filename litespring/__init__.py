"""
LiteSpring - a small IoC container with an annotation-driven request dispatcher.
"""

from litespring.litespring import BootstrapReport, LiteSpring
from litespring.shared.annotations import Autowired, Component, LoggerBinding, RequestMapping
from litespring.shared.errors import (
    DescriptorError,
    InstantiationError,
    InvocationError,
    LiteSpringError,
)
from litespring.shared.http import Request, Response

__all__ = [
    "Autowired",
    "BootstrapReport",
    "Component",
    "DescriptorError",
    "InstantiationError",
    "InvocationError",
    "LiteSpring",
    "LiteSpringError",
    "LoggerBinding",
    "Request",
    "RequestMapping",
    "Response",
]
