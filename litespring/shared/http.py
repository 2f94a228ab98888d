"""
Request and response values handed to and returned by handlers.
No transport is involved; an HTTP server would translate to and from these.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Request:
    method: str
    path: str


@dataclass(frozen=True)
class Response:
    """
    Handler result. The body is copied and exposed read-only.

    Responses compare by value but are unhashable, since the body may hold
    unhashable values.
    """

    status_code: int = 200
    body: Mapping[str, Any] = field(default_factory=dict)

    __hash__ = None

    def __post_init__(self):
        object.__setattr__(self, "body", MappingProxyType(dict(self.body)))
