import logging
import os
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Type, TypeVar

if TYPE_CHECKING:
    from .model import PathKey, Resolver
    from .values import DependencyValues

LOG = logging.getLogger(__name__)

# Unbound, invariant type variable
T = TypeVar("T")


# Flat mapping of config names to values.
RegistryInitConfig = Mapping[str, Any]


class RegistryConfigWrapper:
    """Manages the configuration of the registry."""

    def __init__(self):
        self._impl = {}

    def _from_dict(self, config_dict: RegistryInitConfig):
        """Configure the registry from a dictionary-like mapping.
        The provided mapping should contain the values used to populate
        DependencyValues slots with register_from_config.

        Parameters:
            config_dict: the configuration data to apply.
        """
        self._impl = config_dict

    def __contains__(self, key: str):
        return key in self._impl

    def get(self, key: str, default: Optional[T] = None) -> T:
        return self._impl.get(key, default)

    def __getitem__(self, key: str) -> Any:
        item: Optional[Any] = self.get(key)
        if item is None:
            raise KeyError(key)
        return item


def register_from_config(
    registry_impl: "Resolver", values_cls: "Type[DependencyValues]"
) -> "List[PathKey]":
    """
    Register every slot of values_cls that has a configured value.

    Each slot is looked up in the registry config under its config name. If the
    slot allows it, the environment variable of the same name is used when the
    config has no entry. Slots with no value at all are skipped; resolving them
    later fails like any other missing registration.

    Returns:
        The paths that were registered, in slot declaration order.
    """
    registered = []
    for slot_ in values_cls.slots():
        name = slot_.config_name
        if name in registry_impl.config:
            value = registry_impl.config.get(name)
        elif slot_.fallback_to_envvar and name in os.environ:
            value = os.environ[name]
        else:
            LOG.debug("no configured value for %s", slot_.key)
            continue

        if slot_.converter is not None:
            value = slot_.converter(value)
        registry_impl.register_by_path(value, slot_.key)
        registered.append(slot_.key)
    return registered
