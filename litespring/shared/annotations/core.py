import sys
import types
import typing
from typing import Any, Callable, Optional, Type, Union

from litespring.shared.errors import DescriptorError


def Component(cls):
    """Mark a class as a container-managed singleton."""
    if not isinstance(cls, type):
        raise DescriptorError(f"@Component expects a class, got {cls!r}")
    cls.__component__ = True
    return cls


def is_component(cls: Type) -> bool:
    # Not inherited: a subclass must be marked itself.
    return bool(cls.__dict__.get("__component__", False))


def RequestMapping(path: str):
    """Mark a method as the handler for ``path``."""
    if not isinstance(path, str) or not path:
        raise DescriptorError(f"@RequestMapping expects a non-empty path, got {path!r}")

    def decorator(func: Callable):
        func.__request_mapping__ = path
        return func

    return decorator


class Autowired:
    """
    Injectable field. Reads as ``None`` until the container wires it.

        @Component
        class Controller:
            service: Service = Autowired()
            audit = Autowired(AuditLog)

    The dependency type is the explicit argument when given, otherwise the
    field's annotation. A string names a class in the owner's module.
    """

    def __init__(self, dependency_type: Union[Type, str, None] = None):
        self.dependency_type = dependency_type
        self.owner: Optional[Type] = None
        self.name: Optional[str] = None

    def __set_name__(self, owner: Type, name: str):
        self.owner = owner
        self.name = name

    def __get__(self, instance: Any, owner: Optional[Type] = None):
        if instance is None:
            return self
        return instance.__dict__.get(self.name)

    def __set__(self, instance: Any, value: Any):
        instance.__dict__[self.name] = value

    def resolve_type(self) -> Type:
        target = self.dependency_type
        if target is None:
            target = self._annotated_type()
        if isinstance(target, str):
            target = self._lookup_in_owner_module(target)
        if not isinstance(target, type):
            raise DescriptorError(
                f"Autowired field {self._qualname()} must resolve to a class, got {target!r}"
            )
        return target

    def _annotated_type(self):
        try:
            hints = typing.get_type_hints(self.owner)
        except NameError as exc:
            raise DescriptorError(
                f"Cannot resolve annotation of Autowired field {self._qualname()}: {exc}"
            ) from exc
        if self.name not in hints:
            raise DescriptorError(
                f"Autowired field {self._qualname()} needs a type annotation or an explicit type"
            )
        return _unwrap_optional(hints[self.name])

    def _lookup_in_owner_module(self, name: str):
        module = sys.modules.get(self.owner.__module__)
        target = getattr(module, name, None)
        if target is None:
            raise DescriptorError(
                f"Autowired field {self._qualname()} refers to unknown class {name!r}"
            )
        return target

    def _qualname(self) -> str:
        owner = self.owner.__name__ if self.owner is not None else "<unbound>"
        return f"{owner}.{self.name}"


# `X | None` has origin types.UnionType on 3.10+.
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


def _unwrap_optional(hint):
    if typing.get_origin(hint) in _UNION_TYPES:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint
