"""Errors raised by the registry and its accessors."""

from typing import Any


class DependencyError(Exception):
    """Base class for all depkit errors."""


class DependencyNotFoundError(DependencyError, LookupError):
    """A required dependency was never registered.

    Raised when a path lookup misses, or when an accessor cannot resolve the
    value it was declared for. This is a programming error in the caller:
    populate the registry before constructing anything that depends on it.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Dependency not found for {self.key}"


class MockingError(DependencyError):
    pass
