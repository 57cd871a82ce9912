"""The Registry itself is a runtime store of registered dependency instances."""
import functools
import logging
from threading import RLock
from typing import Any, Callable, Dict, Iterable, Optional, Type, TypeVar, Union

from typing_extensions import Concatenate, ParamSpec

from .config import RegistryConfigWrapper, RegistryInitConfig
from .errors import DependencyNotFoundError
from .model import PathKey, RegistryKey, Resolver, TypeKey, type_key
from .types import Entry

LOG = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")
P = ParamSpec("P")


class _Missing:
    def __bool__(self):
        return False

    def __repr__(self):
        return "<missing>"


_MISSING = _Missing()


def initialize(config: Optional[RegistryInitConfig] = None) -> "Registry":
    """Initialize a new, isolated registry instance."""
    LOG.debug("initializing a new registry instance")
    return Registry(config)


_shared: "Optional[Registry]" = None
_shared_lock = RLock()


def shared() -> "Registry":
    """Return the process-wide registry, creating it on first use."""
    global _shared
    with _shared_lock:
        if _shared is None:
            LOG.debug("creating the shared registry instance")
            _shared = Registry()
        return _shared


def reinitialize(config: Optional[RegistryInitConfig] = None) -> "Registry":
    """Discard the shared registry and replace it with a fresh one."""
    return set_shared(Registry(config))


def set_shared(registry_impl: "Registry") -> "Registry":
    """Install registry_impl as the shared registry (e.g. from a test fixture)."""
    global _shared
    with _shared_lock:
        LOG.debug("replacing the shared registry instance with %r", registry_impl)
        _shared = registry_impl
        return registry_impl


def _synchronized(
    func: Callable[Concatenate["Registry", P], R]
) -> Callable[Concatenate["Registry", P], R]:
    """Decorator to synchronize method access with a reentrant lock."""

    @functools.wraps(func)
    def wrapper(self: "Registry", *args: P.args, **kwargs: P.kwargs) -> R:
        with self._lock:
            return func(self, *args, **kwargs)

    return wrapper


def _check_path(path: Any) -> PathKey:
    if not isinstance(path, PathKey):
        raise TypeError(f"invalid path key for Registry: {path!r}")
    return path


class Registry(Resolver):
    """Stores registered values by type and by path.

    The two namespaces are independent: a value registered by type is never
    visible to a path lookup and vice versa.
    """

    def __init__(self, config: Optional[RegistryInitConfig] = None):
        self._by_type: Dict[TypeKey, Any] = {}
        self._by_path: Dict[PathKey, Any] = {}
        self._config = RegistryConfigWrapper()

        self._lock = RLock()

        if config is not None:
            self._config._from_dict(config)

    @property
    def config(self) -> RegistryConfigWrapper:
        return self._config

    @_synchronized
    def register(self, value: Any, key: "Union[Type[Any], TypeKey, None]" = None) -> None:
        """Register a value for lookup by type, replacing any previous value.

        Parameters:
            value: the object to register.
            key: the class or TypeKey to register the value under. Defaults to
                the class of value.
        """
        tkey = type_key(type(value) if key is None else key)
        LOG.debug("registering %r for type %s", value, tkey)
        self._by_type[tkey] = value

    @_synchronized
    def register_many(self, entries: Iterable[Entry]) -> None:
        """Register (value, key) pairs in order; later entries for the same key win."""
        for value, key in entries:
            self.register(value, key)

    @_synchronized
    def register_by_path(self, value: Any, path: PathKey) -> None:
        """Register a value for a DependencyValues path, replacing any previous value."""
        path = _check_path(path)
        LOG.debug("registering %r for path %s", value, path)
        self._by_path[path] = value

    @_synchronized
    def register_many_by_path(self, entries: Iterable[Entry]) -> None:
        """Register (value, path) pairs in order; later entries for the same path win."""
        for value, path in entries:
            self.register_by_path(value, path)

    @_synchronized
    def resolve_by_type(
        self, key: "Union[Type[T], TypeKey]", default: Optional[T] = None
    ) -> Optional[T]:
        """Get a value registered by type.

        Returns:
            The registered value, or default if nothing is registered for key.
        """
        return self._by_type.get(type_key(key), default)

    @_synchronized
    def resolve_by_path(self, path: PathKey) -> Any:
        """Get a value registered by path.

        Raises:
            DependencyNotFoundError: nothing is registered for path. This is a
                programming error: the registry must be populated first.
        """
        value = self._by_path.get(_check_path(path), _MISSING)
        if value is _MISSING:
            raise DependencyNotFoundError(path)
        return value

    @_synchronized
    def remove_by_type(self, key: "Union[Type[Any], TypeKey]") -> None:
        tkey = type_key(key)
        if self._by_type.pop(tkey, _MISSING) is not _MISSING:
            LOG.debug("removed type %s", tkey)

    @_synchronized
    def remove_by_path(self, path: PathKey) -> None:
        if self._by_path.pop(_check_path(path), _MISSING) is not _MISSING:
            LOG.debug("removed path %s", path)

    @_synchronized
    def __len__(self) -> int:
        return len(self._by_type) + len(self._by_path)

    @_synchronized
    def __contains__(self, key: RegistryKey) -> bool:
        """Check if a value is registered for a key.
        Parameters:
            key: a class or TypeKey (type namespace) or a PathKey (path namespace).
        """
        if isinstance(key, PathKey):
            return key in self._by_path
        return type_key(key) in self._by_type

    @_synchronized
    def get(self, key: RegistryKey, default: Optional[Any] = None) -> Optional[Any]:
        """Get a value from the registry by key, or default if it is not registered."""
        if isinstance(key, PathKey):
            return self._by_path.get(key, default)
        return self.resolve_by_type(key, default)

    def __getitem__(self, key: RegistryKey) -> Any:
        """Get a value from the registry by key.
        Raises:
            DependencyNotFoundError: if nothing is registered for key.
        """
        if isinstance(key, PathKey):
            return self.resolve_by_path(key)
        value = self.resolve_by_type(key, _MISSING)
        if value is _MISSING:
            raise DependencyNotFoundError(type_key(key))
        return value

    def __setitem__(self, key: RegistryKey, value: Any) -> None:
        if isinstance(key, PathKey):
            self.register_by_path(value, key)
        else:
            self.register(value, key)

    def __delitem__(self, key: RegistryKey) -> None:
        if isinstance(key, PathKey):
            self.remove_by_path(key)
        else:
            self.remove_by_type(key)

    def __repr__(self) -> str:
        return f"<Registry types={len(self._by_type)} paths={len(self._by_path)}>"
