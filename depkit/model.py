import abc
from typing import (  # pylint: disable=unused-import
    TYPE_CHECKING,
    Any,
    Hashable,
    Iterable,
    Optional,
    Type,
    TypeVar,
    Union,
)

from attr import define, field
from typing_extensions import TypeAlias

from .types import Entry

T = TypeVar("T")

if TYPE_CHECKING:
    from .config import RegistryConfigWrapper

# Name of the class attribute holding an explicitly assigned TypeKey.
_TYPE_KEY_ATTR = "_depkit_type_key"


@define(frozen=True)
class TypeKey:
    """Identity of a registrable type.

    Two keys are equal when their tokens are equal. By default the token is the
    class object itself, so two distinct classes never collide. A class may be
    given a manually assigned token with inject.token, in which case every key
    for that class uses the token instead.
    """

    token: Hashable
    cls: Optional[type] = field(default=None, eq=False)

    def __str__(self) -> str:
        if isinstance(self.token, type):
            return self.token.__qualname__
        return str(self.token)


@define(frozen=True)
class PathKey:
    """Identity of a named slot declared on a DependencyValues class."""

    owner: type
    name: str
    value_type: Any = field(default=None, eq=False)

    def __str__(self) -> str:
        return f"{self.owner.__name__}.{self.name}"


RegistryKey: TypeAlias = "Union[Type[Any], TypeKey, PathKey]"


def _get_explicit_key(cls: type) -> Optional[TypeKey]:
    # only look at the class itself, a token is never inherited by subclasses
    return cls.__dict__.get(_TYPE_KEY_ATTR)


def type_key(key: "Union[Type[Any], TypeKey]") -> TypeKey:
    """
    Given a class or a TypeKey, return the TypeKey used for type lookups.
    Raises TypeError for anything else (including a PathKey).
    """
    if isinstance(key, TypeKey):
        return key
    if isinstance(key, type):
        explicit = _get_explicit_key(key)
        if explicit is not None:
            return explicit
        return TypeKey(key, key)
    raise TypeError(f"cannot get a type key from: {key!r}")


class Resolver(abc.ABC):
    """
    Interface capable of resolving keys into registered values.
    This interface primarily exists as a way to create a forward reference to Registry.
    """

    @abc.abstractmethod
    def resolve_by_type(self, key: "Union[Type[T], TypeKey]", default: Optional[T] = None) -> Optional[T]:
        ...

    @abc.abstractmethod
    def resolve_by_path(self, path: PathKey) -> Any:
        ...

    @abc.abstractmethod
    def register(self, value: Any, key: "Union[Type[Any], TypeKey, None]" = None) -> None:
        ...

    @abc.abstractmethod
    def register_by_path(self, value: Any, path: PathKey) -> None:
        ...

    @abc.abstractmethod
    def register_many(self, entries: "Iterable[Entry]") -> None:
        ...

    @abc.abstractmethod
    def register_many_by_path(self, entries: "Iterable[Entry]") -> None:
        ...

    @abc.abstractmethod
    def remove_by_type(self, key: "Union[Type[Any], TypeKey]") -> None:
        ...

    @abc.abstractmethod
    def remove_by_path(self, path: PathKey) -> None:
        ...

    @property
    @abc.abstractmethod
    def config(self) -> "RegistryConfigWrapper":
        ...


def key_name(key: RegistryKey) -> str:
    """Human readable name of a registry key, for messages and reprs."""
    if isinstance(key, PathKey):
        return str(key)
    return str(type_key(key))
