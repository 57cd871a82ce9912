"""Accessors resolve a single value out of the registry when they are constructed.

Each accessor addresses one key, either by type or by path. It resolves that
key once, in __init__, and holds the result for the rest of its lifetime. A
missing registration is a programming error and raises
DependencyNotFoundError immediately, for both flavors.

    api = InjectedViewModel(ApiClient).value
    base_url = Dependency(AppValues.base_url).value

A new value for the same key is only seen by accessors constructed after the
registry was updated.
"""

import enum
from typing import Any, Callable, Generic, Optional, Type, TypeVar, Union

from .errors import DependencyNotFoundError
from .model import PathKey, Resolver, TypeKey, key_name, type_key
from .types import ObservableObject

T = TypeVar("T")

_MISSING = object()


class AccessorState(enum.Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class Binding(Generic[T]):
    """A two-way handle to a value owned by something else."""

    def __init__(self, get: Callable[[], T], set: Callable[[T], None]) -> None:
        self._get = get
        self._set = set

    @property
    def value(self) -> T:
        return self._get()

    @value.setter
    def value(self, new_value: T) -> None:
        self._set(new_value)

    def __repr__(self) -> str:
        return f"<Binding value={self._get()!r}>"


class ObservedObjectWrapper(Generic[T]):
    """Hands out Bindings to the attributes of an observable object.

    Writing through a binding sets the attribute and then calls
    notify_changed() on the object, so observers of the object see the change.
    """

    def __init__(self, obj: T) -> None:
        self._obj = obj

    def binding(self, name: str) -> Binding[Any]:
        """Return a Binding to the attribute name of the observed object.

        Attribute access on the wrapper is a shortcut for this method, except
        for names the wrapper defines itself: an attribute called "binding"
        is only reachable as wrapper.binding("binding").
        """
        obj = self._obj
        # fail now rather than on first read
        getattr(obj, name)

        def set_(new_value: Any) -> None:
            setattr(obj, name, new_value)
            obj.notify_changed()  # type: ignore[attr-defined]

        return Binding(lambda: getattr(obj, name), set_)

    def __getattr__(self, name: str) -> Binding[Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.binding(name)


def _default_registry() -> Resolver:
    from .registry import shared

    return shared()


class Accessor(Generic[T]):
    """Base accessor: resolves its key on construction and holds the value."""

    read_only = False

    def __init__(self, key: Any, registry: Optional[Resolver] = None) -> None:
        self._state = AccessorState.UNRESOLVED
        self._key = key
        self._registry = registry if registry is not None else _default_registry()
        self._value: T = self._resolve()
        self._state = AccessorState.RESOLVED

    def _resolve(self) -> T:
        tkey = type_key(self._key)
        value = self._registry.resolve_by_type(tkey, _MISSING)
        if value is _MISSING:
            raise DependencyNotFoundError(tkey)
        return value

    @property
    def key(self) -> Any:
        return self._key

    @property
    def state(self) -> AccessorState:
        return self._state

    @property
    def value(self) -> T:
        return self._value

    @property
    def projected(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"<{type(self).__name__}({key_name(self._key)}) {self._state.value}>"


class InjectedState(Accessor[T]):
    """Read-only access to a value registered by type.

    projected is a Binding over the accessor's own storage: writing through
    it replaces the held value without touching the registry.
    """

    read_only = True

    def __init__(self, cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> None:
        super().__init__(cls, registry)

    @property
    def projected(self) -> Binding[T]:
        def set_(new_value: T) -> None:
            self._value = new_value

        return Binding(lambda: self._value, set_)


class InjectedStateObject(Accessor[T]):
    """Read-only access to an observable object registered by type."""

    read_only = True

    def __init__(self, cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> None:
        super().__init__(cls, registry)

    def _resolve(self) -> T:
        value = super()._resolve()
        if not isinstance(value, ObservableObject):
            raise TypeError(
                f"{type_key(self._key)} resolved to {value!r}, which does not implement notify_changed()"
            )
        return value

    @property
    def projected(self) -> ObservedObjectWrapper[T]:
        return ObservedObjectWrapper(self._value)


class InjectedViewModel(Accessor[T]):
    """Read-write access to a model object registered by type."""

    def __init__(self, cls: "Union[Type[T], TypeKey]", registry: Optional[Resolver] = None) -> None:
        super().__init__(cls, registry)

    @Accessor.value.setter  # type: ignore[attr-defined]
    def value(self, new_value: T) -> None:
        self._value = new_value


class Dependency(Accessor[T]):
    """Read-write access to any value, by type or by DependencyValues path.

    A PathKey (e.g. AppValues.base_url) addresses the path namespace, a class
    or TypeKey addresses the type namespace.
    """

    def __init__(
        self, key: "Union[Type[T], TypeKey, PathKey]", registry: Optional[Resolver] = None
    ) -> None:
        super().__init__(key, registry)

    def _resolve(self) -> T:
        if isinstance(self._key, PathKey):
            return self._registry.resolve_by_path(self._key)
        return super()._resolve()

    @Accessor.value.setter  # type: ignore[attr-defined]
    def value(self, new_value: T) -> None:
        self._value = new_value

    def register(self, new_value: T) -> None:
        """Replace the registry value for this accessor's key.

        Only accessors constructed afterwards see new_value; this accessor keeps
        the value it resolved.
        """
        if isinstance(self._key, PathKey):
            self._registry.register_by_path(new_value, self._key)
        else:
            self._registry.register(new_value, self._key)
