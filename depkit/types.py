from typing import Any, Callable, Tuple

from typing_extensions import Protocol, TypeAlias, runtime_checkable

# A value paired with the key it should be registered under.
Entry: TypeAlias = Tuple[Any, Any]

Converter: TypeAlias = Callable[[Any], Any]


@runtime_checkable
class ObservableObject(Protocol):
    """
    Defines the minimum an object must provide to be held by an InjectedStateObject.
    The host's reactive layer is expected to react to notify_changed().
    """

    def notify_changed(self) -> None: ...
