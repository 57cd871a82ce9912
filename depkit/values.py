# DependencyValues is a schema-like bag of named, typed slots.
#
# Every annotated attribute declared on a subclass becomes a slot. On the
# class, a slot evaluates to its PathKey, which is what the registry and the
# accessors use to address it. On an instance, a slot reads and writes the
# registry the instance is bound to.
#
# Example:
# ```
# class AppValues(DependencyValues):
#     base_url: str
#     data_url: str = slot(config="DATA_URL", fallback_to_envvar=True)
#
# registry.register_by_path("https://api.example.com", AppValues.base_url)
# base_url = Dependency(AppValues.base_url).value
# ```
#
# Slot collection follows the way dataclasses.py scans __annotations__.

import inspect
import re
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional, Tuple, get_origin

from .model import PathKey
from .types import Converter

if TYPE_CHECKING:
    from .model import Resolver


# A sentinel object to detect if a parameter is supplied or not.  Use
# a class to give it a better repr.
class _MISSING_TYPE:
    pass


MISSING = _MISSING_TYPE()

# String annotations (from __future__ import annotations) are not evaluated,
# so ClassVar is recognized by name, as "ClassVar[...]" or "typing.ClassVar[...]".
_CLASSVAR_RE = re.compile(r"^\s*(?:\w+\s*\.\s*)?ClassVar\b")


def _is_classvar(a_type) -> bool:
    if isinstance(a_type, str):
        return _CLASSVAR_RE.match(a_type) is not None
    return a_type is ClassVar or get_origin(a_type) is ClassVar


# Instances of Slot are created from the slot() function or from a bare
# annotation. name, owner and type are filled in by __init_subclass__, they
# are not known when the Slot is instantiated.
class Slot:
    __slots__ = ("name", "owner", "type", "config", "fallback_to_envvar", "converter")

    def __init__(self, config, fallback_to_envvar, converter):
        self.name = None
        self.owner = None
        self.type = None
        self.config = config
        self.fallback_to_envvar = fallback_to_envvar
        self.converter = converter

    @property
    def key(self) -> PathKey:
        return PathKey(self.owner, self.name, self.type)

    @property
    def config_name(self) -> str:
        return self.config or self.name

    def __get__(self, instance, owner):
        if instance is None:
            return self.key
        return instance._registry.resolve_by_path(self.key)

    def __set__(self, instance, value):
        instance._registry.register_by_path(value, self.key)

    def __delete__(self, instance):
        instance._registry.remove_by_path(self.key)

    def __repr__(self):
        return (
            "Slot("
            f"name={self.name!r},type={self.type!r},config={self.config!r},"
            f"fallback_to_envvar={self.fallback_to_envvar!r}"
            ")"
        )


# This function is used instead of exposing Slot creation directly,
# so that a type checker can be told the declared attribute type.
def slot(
    *,
    config: Optional[str] = None,
    fallback_to_envvar: bool = False,
    converter: Optional[Converter] = None,
) -> Any:
    """Declare a slot with configuration metadata.

    Parameters:
        config: name of the config entry (and environment variable) that
            register_from_config reads. Defaults to the slot name.
        fallback_to_envvar: True to read the environment variable when the
            config has no entry.
        converter: callable applied to the configured value before it is
            registered.
    """
    return Slot(config, fallback_to_envvar, converter)


def _get_slot(cls, a_name, a_type):
    default = cls.__dict__.get(a_name, MISSING)
    if isinstance(default, Slot):
        s = default
    elif default is MISSING:
        s = Slot(None, False, None)
    else:
        raise TypeError(
            f"{cls.__name__}.{a_name} has a default value; "
            "DependencyValues slots are only populated through the registry"
        )

    s.name = a_name
    s.owner = cls
    s.type = a_type
    return s


class DependencyValues:
    """Base class for value bags addressed by PathKey."""

    # Slots by name, including inherited ones. Filled in by __init_subclass__.
    __depkit_slots__: ClassVar[Dict[str, Slot]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        slots: Dict[str, Slot] = {}
        for base in reversed(cls.__mro__[1:]):
            slots.update(getattr(base, "__depkit_slots__", {}))

        # Only annotations defined on this class, in declaration order.
        cls_annotations = inspect.get_annotations(cls)
        for name, type_ in cls_annotations.items():
            if name.startswith("_") or _is_classvar(type_):
                continue
            s = _get_slot(cls, name, type_)
            setattr(cls, name, s)
            slots[name] = s
        cls.__depkit_slots__ = slots

    def __init__(self, registry: "Optional[Resolver]" = None) -> None:
        if registry is None:
            from .registry import shared

            registry = shared()
        self._registry = registry

    @classmethod
    def slots(cls) -> Tuple[Slot, ...]:
        """The slots of this class, base class slots first."""
        return tuple(cls.__depkit_slots__.values())

    @classmethod
    def paths(cls) -> List[PathKey]:
        return [s.key for s in cls.slots()]

    def register(self, value: Any, path: PathKey) -> None:
        self._registry.register_by_path(value, path)

    def resolve(self, path: PathKey) -> Any:
        return self._registry.resolve_by_path(path)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} registry={self._registry!r}>"
