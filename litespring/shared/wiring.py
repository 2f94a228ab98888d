"""
Field injection.

Every injectable field is resolved against the registry by exact type. A
missing dependency is not an error: the field keeps its current value and the
miss is returned as a ``WiringGap`` so callers can report or assert on it.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Type, Union

from litespring.shared.metadata import ComponentDescriptor, InjectableFieldDescriptor
from litespring.shared.registry import ComponentRegistry


@dataclass(frozen=True)
class Resolved:
    owner: Type
    field: InjectableFieldDescriptor
    dependency: Any


@dataclass(frozen=True)
class WiringGap:
    owner: Type
    field: InjectableFieldDescriptor

    @property
    def dependency_type(self) -> Type:
        return self.field.dependency_type

    def __str__(self) -> str:
        return (
            f"{self.owner.__name__}.{self.field.name} -> "
            f"{self.field.dependency_type.__name__} (not registered)"
        )


FieldResolution = Union[Resolved, WiringGap]


class WiringEngine:
    def __init__(self, registry: ComponentRegistry, descriptors: Mapping[Type, ComponentDescriptor]):
        self._registry = registry
        self._descriptors = descriptors

    def autowire(self, instance: Any, component_type: Optional[Type] = None) -> Tuple[FieldResolution, ...]:
        """Assign every resolvable injectable field of ``instance``. Safe to repeat."""
        owner = component_type or type(instance)
        descriptor = self._descriptors.get(owner)
        if descriptor is None:
            return ()

        results = []
        for field in descriptor.fields:
            dependency = self._registry.lookup(field.dependency_type)
            if dependency is None:
                results.append(WiringGap(owner, field))
                continue
            setattr(instance, field.name, dependency)
            results.append(Resolved(owner, field, dependency))
        return tuple(results)
