# litespring/litespring.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from litespring.config.logger import get_logger
from litespring.config.settings import Settings
from litespring.shared.dispatcher import Dispatcher, ResolutionPolicy, RouteTablePolicy
from litespring.shared.errors import InstantiationError
from litespring.shared.http import Request, Response
from litespring.shared.metadata import ComponentDescriptor, describe_all
from litespring.shared.registry import ComponentRegistry
from litespring.shared.wiring import WiringEngine, WiringGap


@dataclass
class BootstrapReport:
    registered: List[Type] = field(default_factory=list)
    skipped: List[Type] = field(default_factory=list)
    failures: List[InstantiationError] = field(default_factory=list)
    gaps: List[WiringGap] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class LiteSpring:
    """
    Container and request dispatcher.

    Bootstrap runs in two phases so that wiring never sees a half-built graph:
      1. instantiate every component and register it under its own type
      2. autowire every registered instance once

    After bootstrap the registry is only read, by ``get`` and ``handle_request``.
    """

    def __init__(
        self,
        *components: Union[Type, ComponentDescriptor],
        settings: Optional[Settings] = None,
        logger=None,
        policy: Optional[ResolutionPolicy] = None,
    ):
        self.settings = settings or Settings()
        self.logger = logger or get_logger("LiteSpring", self.settings)
        self.registry = ComponentRegistry()
        self.report = BootstrapReport()

        self._ordered: Tuple[ComponentDescriptor, ...] = describe_all(components)
        self.descriptors: Dict[Type, ComponentDescriptor] = {d.type: d for d in self._ordered}
        self.wiring = WiringEngine(self.registry, self.descriptors)

        self.logger.info("Starting LiteSpring bootstrap...")
        self.bootstrap()

        self.policy = policy or RouteTablePolicy.build(
            self._ordered,
            self.registry,
            logger=self.logger,
            warn_on_duplicates=self.settings.container.warn_on_duplicate_routes,
        )
        self.dispatcher = Dispatcher(self.registry, self.descriptors, self.policy, logger=self.logger)
        self.logger.info(
            "LiteSpring ready",
            components=len(self.registry),
            failures=len(self.report.failures),
            gaps=len(self.report.gaps),
        )

    # -------------------------
    # Main bootstrap flow
    # -------------------------
    def bootstrap(self) -> BootstrapReport:
        self._instantiate_all()
        self._autowire_all()
        return self.report

    def _instantiate_all(self) -> None:
        for descriptor in self._ordered:
            if not descriptor.component:
                self.report.skipped.append(descriptor.type)
                self.logger.debug(f"Skipping {descriptor.name}: not marked as a component")
                continue

            try:
                instance = self._instantiate(descriptor)
            except InstantiationError as exc:
                self.report.failures.append(exc)
                self.logger.error(str(exc), component=descriptor.name)
                continue

            self.registry.register(descriptor.type, instance)
            self.report.registered.append(descriptor.type)
            self.logger.debug(f"Registered component: {descriptor.name}")

    def _instantiate(self, descriptor: ComponentDescriptor) -> Any:
        try:
            return descriptor.factory()
        except Exception as exc:
            raise InstantiationError(descriptor.type, exc) from exc

    def _autowire_all(self) -> None:
        warn = self.settings.container.warn_on_wiring_gaps
        for component_type, instance in self.registry.entries():
            for resolution in self.wiring.autowire(instance, component_type):
                if not isinstance(resolution, WiringGap):
                    continue
                self.report.gaps.append(resolution)
                if warn:
                    self.logger.warning(f"Unresolved dependency {resolution}")
                else:
                    self.logger.debug(f"Unresolved dependency {resolution}")

    # -------------------------
    # Public API
    # -------------------------
    def get(self, cls: Type) -> Optional[Any]:
        return self.registry.lookup(cls)

    def handle_request(self, request: Request) -> Optional[Response]:
        """
        Serve ``request``.

        Returns ``None`` when no component or handler matches the path.
        Raises ``InvocationError`` when the matched handler fails.
        """
        return self.dispatcher.dispatch(request)

    # -------------------------
    # Introspection utilities
    # -------------------------
    def list_components(self) -> List[str]:
        return [cls.__name__ for cls in self.registry.types()]

    def list_routes(self) -> List[str]:
        if not isinstance(self.policy, RouteTablePolicy):
            return []
        return [
            f"{path} -> {cls.__name__}.{self.dispatcher.find_handler(cls, path).name}"
            for path, cls in self.policy.routes()
        ]
