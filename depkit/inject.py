"""Collection of declarations to inject registry values into components."""

import functools
from typing import Any, Callable, Dict, Hashable, Optional, Type, TypeVar, Union

from .accessors import (
    Accessor,
    Dependency,
    InjectedState,
    InjectedStateObject,
    InjectedViewModel,
)
from .model import _TYPE_KEY_ATTR, PathKey, Resolver, TypeKey, key_name

T = TypeVar("T")

# Name of the instance attribute holding the accessors of a component.
_ACCESSORS_ATTR = "__depkit_accessors__"
# Name of the class attribute marking a class decorated with @component.
_COMPONENT_ATTR = "__depkit_component__"


def token(name_: Hashable) -> Callable[[Type[T]], Type[T]]:
    """Decorator to assign an explicit type key token to a class.

    Every class sharing a token shares the same registry entry. The token is
    not inherited: subclasses keep their own identity.
    """

    def wrap(cls: Type[T]) -> Type[T]:
        setattr(cls, _TYPE_KEY_ATTR, TypeKey(name_, cls))
        return cls

    return wrap


class _InjectedField:
    """Descriptor declaring that a component attribute comes from the registry.
    (you should not instantiate this class directly, instead use the
    state, state_object, view_model or dependency functions)
    """

    def __init__(
        self,
        accessor_cls: Type[Accessor],
        key: Any,
        registry: Optional[Resolver] = None,
    ) -> None:
        self.accessor_cls = accessor_cls
        self.key = key
        self.registry = registry
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        # every owner resolves its fields at construction, decorated or not
        component(owner)

    def accessor(self, instance: Any) -> Accessor:
        """Return the accessor for instance, constructing (and resolving) it if needed."""
        accessors: Dict[str, Accessor] = instance.__dict__.setdefault(_ACCESSORS_ATTR, {})
        accessor_ = accessors.get(self.name)
        if accessor_ is None:
            accessor_ = self.accessor_cls(self.key, registry=self.registry)
            accessors[self.name] = accessor_
        return accessor_

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return self.accessor(instance).value

    def __set__(self, instance, value) -> None:
        accessor_ = self.accessor(instance)
        if accessor_.read_only:
            raise AttributeError(f"{self.name} is injected read-only by {self.accessor_cls.__name__}")
        accessor_.value = value

    def __str__(self) -> str:
        return f"{self.accessor_cls.__name__}({key_name(self.key)})"

    def __repr__(self) -> str:
        return f"<_InjectedField {self.name}={self}>"


def state(cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> Any:
    """Inject a value by type, read-only, with a Binding as its projection."""
    return _InjectedField(InjectedState, cls, registry)


def state_object(cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> Any:
    """Inject an observable object by type, read-only, with per-attribute bindings as its projection."""
    return _InjectedField(InjectedStateObject, cls, registry)


def view_model(cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> Any:
    """Inject a model object by type, read-write."""
    return _InjectedField(InjectedViewModel, cls, registry)


def dependency(
    key: "Union[Type[T], TypeKey, PathKey]", registry: Optional[Resolver] = None
) -> Any:
    """Inject any value by type or by DependencyValues path, read-write."""
    return _InjectedField(Dependency, key, registry)


def _injected_fields(cls: type) -> Dict[str, _InjectedField]:
    fields: Dict[str, _InjectedField] = {}
    for base in reversed(cls.__mro__):
        for name, value in vars(base).items():
            if isinstance(value, _InjectedField):
                fields[name] = value
            elif name in fields:
                # overridden by a plain attribute in a subclass
                del fields[name]
    return fields


def component(cls: Type[T]) -> Type[T]:
    """Decorator resolving every injected field when an instance is constructed.

    Resolution happens before the class's own __init__ runs, so a missing
    registration fails at construction time and __init__ can use the fields.
    Declaring an injected field applies this decorator to the owner class, so
    using it explicitly only documents intent.
    """
    if cls.__dict__.get(_COMPONENT_ATTR):
        return cls
    original_init = cls.__init__

    @functools.wraps(original_init)
    def __init__(self, *args, **kwargs):
        # fields are looked up on the runtime class so subclasses get theirs too
        for field_ in _injected_fields(type(self)).values():
            field_.accessor(self)
        original_init(self, *args, **kwargs)

    cls.__init__ = __init__  # type: ignore[misc]
    setattr(cls, _COMPONENT_ATTR, True)
    return cls


def accessor(obj: Any, name_: str) -> Accessor:
    """Return the accessor backing the injected field name_ of obj."""
    field_ = _injected_fields(type(obj)).get(name_)
    if field_ is None:
        raise AttributeError(f"{type(obj).__name__}.{name_} is not an injected field")
    return field_.accessor(obj)


def projected(obj: Any, name_: str) -> Any:
    """Return the projection of the injected field name_ of obj (see Accessor.projected)."""
    return accessor(obj, name_).projected
