import logging
from typing import Any, Iterable, Optional, Type, Union

from .model import PathKey, Resolver, TypeKey
from .types import Entry

LOG = logging.getLogger(__name__)


class DependencyManager:
    """Registration facade used by application bootstrap code.

    Without an explicit registry every call goes to the shared registry as it
    is at call time, so a reinitialized shared registry is picked up.
    """

    def __init__(self, registry: Optional[Resolver] = None) -> None:
        self._registry = registry

    @property
    def registry(self) -> Resolver:
        if self._registry is not None:
            return self._registry
        from .registry import shared

        return shared()

    def register(self, value: Any, key: "Union[Type[Any], TypeKey, PathKey]") -> None:
        """Register a single value by type, or by path when key is a PathKey."""
        if isinstance(key, PathKey):
            self.registry.register_by_path(value, key)
        else:
            self.registry.register(value, key)

    def register_dependencies(self, entries: Iterable[Entry]) -> None:
        """Register (value, type) pairs in order."""
        entries = list(entries)
        LOG.debug("registering %d dependencies by type", len(entries))
        self.registry.register_many(entries)

    def register_values(self, entries: Iterable[Entry]) -> None:
        """Register (value, path) pairs in order."""
        entries = list(entries)
        LOG.debug("registering %d dependencies by path", len(entries))
        self.registry.register_many_by_path(entries)

    def remove(self, key: "Union[Type[Any], TypeKey, PathKey]") -> None:
        if isinstance(key, PathKey):
            self.registry.remove_by_path(key)
        else:
            self.registry.remove_by_type(key)
