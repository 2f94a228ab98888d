"""
Request dispatch.

A request goes through three steps: a ResolutionPolicy picks the component
type, the component's handlers are scanned in declaration order for an exact
path match, and the match is invoked. A miss at any step returns ``None``.
A handler that raises is reported and re-raised as ``InvocationError``.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Type

from litespring.shared.errors import InvocationError
from litespring.shared.http import Request, Response
from litespring.shared.metadata import ComponentDescriptor, HandlerDescriptor
from litespring.shared.registry import ComponentRegistry


class ResolutionPolicy(ABC):
    """Maps a request to the component type that should serve it."""

    @abstractmethod
    def resolve(self, request: Request) -> Optional[Type]:
        pass


class FixedTargetPolicy(ResolutionPolicy):
    """Send every request to the same component type."""

    def __init__(self, target: Type):
        self.target = target

    def resolve(self, request: Request) -> Optional[Type]:
        return self.target


class RouteTablePolicy(ResolutionPolicy):
    """
    Exact path to component lookup.

    Built once from the handlers of all registered components. The first
    component to declare a path owns it; later declarations are reported as
    duplicates and ignored.
    """

    def __init__(self, routes: Mapping[str, Type]):
        self._routes: Dict[str, Type] = dict(routes)

    @classmethod
    def build(
        cls,
        descriptors: Iterable[ComponentDescriptor],
        registry: ComponentRegistry,
        logger=None,
        warn_on_duplicates: bool = True,
    ) -> "RouteTablePolicy":
        routes: Dict[str, Type] = {}
        for descriptor in descriptors:
            if descriptor.type not in registry:
                continue
            for handler in descriptor.handlers:
                owner = routes.get(handler.path)
                if owner is None:
                    routes[handler.path] = descriptor.type
                elif owner is not descriptor.type and logger is not None and warn_on_duplicates:
                    logger.warning(
                        f"Duplicate route {handler.path!r} on {descriptor.name}; "
                        f"already served by {owner.__name__}",
                    )
        return cls(routes)

    def resolve(self, request: Request) -> Optional[Type]:
        return self._routes.get(request.path)

    def routes(self) -> List[Tuple[str, Type]]:
        return list(self._routes.items())


class Dispatcher:
    def __init__(
        self,
        registry: ComponentRegistry,
        descriptors: Mapping[Type, ComponentDescriptor],
        policy: ResolutionPolicy,
        logger=None,
    ):
        self.registry = registry
        self.descriptors = descriptors
        self.policy = policy
        self.logger = logger

    def dispatch(self, request: Request) -> Optional[Response]:
        component_type = self.policy.resolve(request)
        if component_type is None:
            return self._miss(request, "no component for path")

        instance = self.registry.lookup(component_type)
        if instance is None:
            return self._miss(request, f"{component_type.__name__} is not registered")

        handler = self.find_handler(component_type, request.path)
        if handler is None:
            return self._miss(request, f"no handler on {component_type.__name__}")

        return self._invoke(component_type, instance, handler, request)

    def find_handler(self, component_type: Type, path: str) -> Optional[HandlerDescriptor]:
        """First handler, in declaration order, whose path equals ``path``."""
        descriptor = self.descriptors.get(component_type)
        if descriptor is None:
            return None
        for handler in descriptor.handlers:
            if handler.path == path:
                return handler
        return None

    def _invoke(self, component_type: Type, instance, handler: HandlerDescriptor, request: Request) -> Response:
        try:
            response = getattr(instance, handler.name)(request)
        except Exception as exc:
            self._report(component_type, handler, request, exc)
            raise InvocationError(component_type, handler.name, request, repr(exc)) from exc

        if not isinstance(response, Response):
            exc = TypeError(
                f"{component_type.__name__}.{handler.name} returned "
                f"{type(response).__name__}, expected Response"
            )
            self._report(component_type, handler, request, exc)
            raise InvocationError(component_type, handler.name, request, str(exc)) from exc
        return response

    def _report(self, component_type: Type, handler: HandlerDescriptor, request: Request, exc: Exception):
        if self.logger is None:
            return
        self.logger.error(
            f"Handler {component_type.__name__}.{handler.name} failed",
            path=request.path,
            method=request.method,
            error=repr(exc),
        )

    def _miss(self, request: Request, reason: str) -> None:
        if self.logger is not None:
            self.logger.debug(f"No handler for {request.method} {request.path}: {reason}")
        return None
