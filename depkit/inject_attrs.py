from importlib.metadata import version as importlib_version
from typing import Any, Dict, List, Optional, Type, TypeVar

from attr import Factory, define, field
from packaging import version

from .accessors import Accessor, Dependency
from .model import Resolver

_T = TypeVar("_T")
_P = TypeVar("_P")

_INJECT_DEFINE_DEFINE_KWARGS_DEFAULT_VAL: Dict[str, Any] = {}


class _AttrDefineKwarg:
    """
    A keyword argument of attr.define with the attrs versions accepting it.
    depkit.define passes only the keywords the installed attrs understands,
    turning off everything a component does not need besides __init__.
    """

    def __init__(
        self,
        key_word: str,
        attr_version_start: str,
        attr_version_end: Optional[str] = None,
        value: bool = False,
    ) -> None:
        self.key_word: str = key_word
        self.attr_version_start: str = attr_version_start
        self.attr_version_end: Optional[str] = attr_version_end
        self.value: bool = value


# Components and view models are shared by identity, so everything but
# __init__ is disabled (in particular eq, which would replace identity
# comparison with field comparison).
_ATTRS_DEFINE_DISABLE_EVERYTHING_BUT_INIT: List[_AttrDefineKwarg] = [
    _AttrDefineKwarg("init", "0.0.0", value=True),
    _AttrDefineKwarg("repr", "0.0.0"),
    _AttrDefineKwarg("hash", "0.0.0"),
    _AttrDefineKwarg("str", "0.0.0"),
    _AttrDefineKwarg("slots", "16.0.0"),
    _AttrDefineKwarg("frozen", "16.1.0"),
    _AttrDefineKwarg("weakref_slot", "18.2.0"),
    _AttrDefineKwarg("auto_exc", "19.1.0"),
    _AttrDefineKwarg("eq", "19.2.0"),
    _AttrDefineKwarg("order", "19.2.0"),
    _AttrDefineKwarg("cmp", "19.2.0", "21.1.0"),
    _AttrDefineKwarg("auto_detect", "20.1.0"),
    _AttrDefineKwarg("match_args", "21.3.0"),
]


def _get_compatible_attrs_define_kwargs() -> Dict[str, bool]:
    """
    get kwargs compatible with current running version of attrs
    """
    parsed_attr_version = version.parse(importlib_version("attrs"))
    attrs_define_kwargs: Dict[str, bool] = {}
    for kwarg in _ATTRS_DEFINE_DISABLE_EVERYTHING_BUT_INIT:
        if version.parse(kwarg.attr_version_start) > parsed_attr_version:
            continue
        if (
            kwarg.attr_version_end is not None
            and version.parse(kwarg.attr_version_end) < parsed_attr_version
        ):
            continue
        attrs_define_kwargs[kwarg.key_word] = kwarg.value
    return attrs_define_kwargs


def inject_field(
    key: Any,
    kind: Type[Accessor] = Dependency,
    registry: Optional[Resolver] = None,
    **attr_field_kwargs: Any,
) -> Any:
    """
    Wrapper around attr.field whose default is resolved from the registry.

    The accessor of the given kind is constructed inside the generated
    __init__, so a missing registration fails when the instance is created.
    A value passed to __init__ explicitly bypasses the registry.

    Parameters:
        key: class, TypeKey or PathKey to resolve.
        kind: the Accessor class used to resolve key.
        registry: the registry to resolve from, defaults to the shared one.
        attr_field_kwargs: passed through to attr.field.
    """
    if "default" in attr_field_kwargs or "factory" in attr_field_kwargs:
        raise TypeError("inject_field provides the default itself, do not pass default or factory")

    def resolve() -> Any:
        return kind(key, registry=registry).value

    return field(default=Factory(resolve), **attr_field_kwargs)


def inject_define(
    maybe_cls: Optional[Type[_T]] = None,
    define_kwargs: Dict[str, Any] = _INJECT_DEFINE_DEFINE_KWARGS_DEFAULT_VAL,
):
    # use default attrs kwargs or user supplied attrs kwargs
    attrs_kwargs: Dict[str, Any] = {}
    if define_kwargs is not _INJECT_DEFINE_DEFINE_KWARGS_DEFAULT_VAL:
        attrs_kwargs = define_kwargs
    else:
        attrs_kwargs = _get_compatible_attrs_define_kwargs()

    def inject_define_inner(cls: Type[_P]) -> Type[_P]:
        # apply attr.define to generate __init__
        return define(cls, **attrs_kwargs)

    if maybe_cls is None:
        return inject_define_inner

    return inject_define_inner(maybe_cls)
