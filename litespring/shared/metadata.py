"""
Component descriptors.

Descriptors are plain immutable records. They are built once, either by hand
or from decorated classes via ``describe``, and are the only metadata the
wiring engine and the dispatcher consult.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple, Type, Union

from litespring.shared.annotations.core import Autowired, is_component
from litespring.shared.errors import DescriptorError


@dataclass(frozen=True)
class InjectableFieldDescriptor:
    name: str
    dependency_type: Type


@dataclass(frozen=True)
class HandlerDescriptor:
    name: str
    path: str


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    Everything the container needs to know about one component type.

    Attributes:
        type: The component type; also its registry key.
        factory: Zero-argument constructor. Defaults to ``type``.
        fields: Injectable fields, wired after every component is built.
        handlers: Request handlers in declaration order.
        component: Whether bootstrap should instantiate this type at all.
    """

    type: Type
    factory: Optional[Callable[[], Any]] = None
    fields: Tuple[InjectableFieldDescriptor, ...] = ()
    handlers: Tuple[HandlerDescriptor, ...] = ()
    component: bool = True

    def __post_init__(self):
        if not inspect.isclass(self.type):
            raise DescriptorError(f"Component type must be a class, got {self.type!r}")
        if self.factory is None:
            object.__setattr__(self, "factory", self.type)
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "handlers", tuple(self.handlers))

    @property
    def name(self) -> str:
        return self.type.__name__


def describe(cls: Type) -> ComponentDescriptor:
    """Build a descriptor from ``@Component``, ``Autowired`` and ``@RequestMapping`` tags."""
    if not inspect.isclass(cls):
        raise DescriptorError(f"Expected a class to describe, got {cls!r}")

    fields = {}
    handlers = {}
    # Base classes first so subclasses override by attribute name.
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, Autowired):
                fields[attr_name] = InjectableFieldDescriptor(attr_name, attr.resolve_type())
            else:
                fields.pop(attr_name, None)

            path = getattr(attr, "__request_mapping__", None)
            if path is not None:
                handlers[attr_name] = HandlerDescriptor(attr_name, path)
            else:
                handlers.pop(attr_name, None)

    return ComponentDescriptor(
        type=cls,
        fields=tuple(fields.values()),
        handlers=tuple(handlers.values()),
        component=is_component(cls),
    )


def describe_all(components: Iterable[Union[Type, ComponentDescriptor]]) -> Tuple[ComponentDescriptor, ...]:
    """Accept classes and ready-made descriptors alike, preserving order."""
    return tuple(
        item if isinstance(item, ComponentDescriptor) else describe(item)
        for item in components
    )
