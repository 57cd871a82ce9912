from typing import Any, Callable, Optional, Type, TypeVar, Union
from unittest.mock import MagicMock

from .errors import MockingError
from .model import PathKey, Resolver, TypeKey, type_key

T = TypeVar("T")

MockingFunction = Callable[[Any], Any]

DEFAULT_MOCKING_FUNCTION: MockingFunction = lambda arg: MagicMock(spec=arg)


def mock(
    registry_impl: Resolver,
    key: "Union[Type[T], TypeKey]",
    mocking_function: Optional[MockingFunction] = None,
) -> T:
    """
    Register a mock for the class referenced by key and return it.

    The mock is built by mocking_function (by default a MagicMock specced on
    the class) and registered by type, so accessors constructed afterwards
    resolve the mock instead of a real instance.
    """
    if isinstance(key, PathKey):
        raise MockingError(f"cannot mock path {key}, register a value for it instead")

    mocking_f = mocking_function or DEFAULT_MOCKING_FUNCTION

    tkey = type_key(key)
    if tkey.cls is None:
        raise MockingError(f"cannot mock {tkey}: the key does not reference a class")

    mocked = mocking_f(tkey.cls)
    registry_impl.register(mocked, tkey)
    return mocked
