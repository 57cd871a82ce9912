"""
depkit stores application dependencies and injects them into components.

The Registry holds values under two independent kinds of keys: by type, and
by path. Application bootstrap code populates it once; components and view
models resolve from it when they are constructed. A missing registration is a
programming error and fails loudly at construction time.

Register and resolve by type:

from depkit import registry
my_registry = registry.initialize()
my_registry.register(MyApi("http://localhost"), MyApi)
api = my_registry.resolve_by_type(MyApi)   # None if never registered

Several values of the same type are told apart by path. Declare the paths as
annotated attributes of a DependencyValues class:

class AppValues(DependencyValues):
    base_url: str
    data_url: str

my_registry.register_by_path("https://api.example.com", AppValues.base_url)
url = my_registry.resolve_by_path(AppValues.base_url)

Components declare injected fields. With @inject.component every field is
resolved before __init__ runs:

@inject.component
class ProfileScreen:
    api = inject.view_model(MyApi)
    base_url = inject.dependency(AppValues.base_url)

Fields and accessors resolve from the shared registry (registry.shared())
unless given an explicit one, so either populate the shared registry at
startup or pass registry= explicitly (e.g. in tests).
"""

__version__ = "1.0.0"

from . import inject
from .accessors import (
    Binding,
    Dependency,
    InjectedState,
    InjectedStateObject,
    InjectedViewModel,
)
from .config import register_from_config
from .errors import DependencyError, DependencyNotFoundError
from .inject_attrs import inject_define as define, inject_field as field
from .manager import DependencyManager
from .model import PathKey, TypeKey, type_key
from .registry import Registry, initialize, reinitialize, set_shared, shared
from .values import DependencyValues, slot

__all__ = [
    "Binding",
    "define",
    "Dependency",
    "DependencyError",
    "DependencyManager",
    "DependencyNotFoundError",
    "DependencyValues",
    "field",
    "initialize",
    "inject",
    "InjectedState",
    "InjectedStateObject",
    "InjectedViewModel",
    "PathKey",
    "register_from_config",
    "Registry",
    "reinitialize",
    "set_shared",
    "shared",
    "slot",
    "type_key",
    "TypeKey",
]
