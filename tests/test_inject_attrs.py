import pytest
from attr import field

from depkit.accessors import InjectedStateObject
from depkit.errors import DependencyNotFoundError
from depkit.inject_attrs import inject_define, inject_field
from depkit.registry import Registry
from tests.test_registry_helpers import ApiClient, AppValues, Counter, ViewModelA


@pytest.fixture
def registry() -> Registry:
    registry_impl = Registry()
    registry_impl.register(ViewModelA("attrs"), ViewModelA)
    registry_impl.register(Counter(), Counter)
    registry_impl.register_by_path("https://api.example.com", AppValues.base_url)
    return registry_impl


def test_fields_resolve_in_init(registry: Registry) -> None:
    @inject_define
    class Screen:
        title: str
        model: ViewModelA = inject_field(ViewModelA, registry=registry)
        base_url: str = inject_field(AppValues.base_url, registry=registry)
        counter: Counter = inject_field(Counter, kind=InjectedStateObject, registry=registry)
        retries: int = field(default=3)

    screen = Screen(title="home")
    assert screen.title == "home"
    assert screen.model is registry.resolve_by_type(ViewModelA)
    assert screen.base_url == "https://api.example.com"
    assert screen.counter is registry.resolve_by_type(Counter)
    assert screen.retries == 3


def test_explicit_argument_bypasses_registry(registry: Registry) -> None:
    @inject_define
    class Screen:
        api: ApiClient = inject_field(ApiClient, registry=registry)

    with pytest.raises(DependencyNotFoundError):
        Screen()

    client = ApiClient("http://localhost")
    assert Screen(api=client).api is client


def test_each_instance_snapshots(registry: Registry) -> None:
    @inject_define
    class Screen:
        base_url: str = inject_field(AppValues.base_url, registry=registry)

    first = Screen()
    registry.register_by_path("https://new.example.com", AppValues.base_url)
    second = Screen()

    assert first.base_url == "https://api.example.com"
    assert second.base_url == "https://new.example.com"


def test_default_is_rejected() -> None:
    with pytest.raises(TypeError):
        inject_field(ViewModelA, default=None)


def test_identity_equality_by_default(registry: Registry) -> None:
    @inject_define
    class Screen:
        model: ViewModelA = inject_field(ViewModelA, registry=registry)

    @inject_define(define_kwargs={"eq": True})
    class EqScreen:
        model: ViewModelA = inject_field(ViewModelA, registry=registry)

    assert Screen() != Screen()
    assert EqScreen() == EqScreen()


def test_validator(registry: Registry) -> None:
    def has_title(self, attr, val):
        del self, attr
        if not val.title:
            raise ValueError("model must have a title")

    @inject_define
    class Screen:
        model: ViewModelA = inject_field(ViewModelA, registry=registry, validator=has_title)

    registry.register(ViewModelA(""), ViewModelA)
    with pytest.raises(ValueError):
        Screen()
