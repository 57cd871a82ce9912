import unittest

import tests.test_registry_helpers as helpers
from depkit.accessors import (
    AccessorState,
    Binding,
    Dependency,
    InjectedState,
    InjectedStateObject,
    InjectedViewModel,
)
from depkit.errors import DependencyNotFoundError
from depkit.registry import initialize, set_shared, shared


class PathAccessorTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = initialize()

    def test_snapshot_on_construction(self) -> None:
        self.registry.register_by_path("https://api.example.com", helpers.AppValues.base_url)

        first = Dependency(helpers.AppValues.base_url, registry=self.registry)
        self.assertEqual("https://api.example.com", first.value)

        self.registry.register_by_path("https://new.example.com", helpers.AppValues.base_url)
        second = Dependency(helpers.AppValues.base_url, registry=self.registry)

        self.assertEqual("https://new.example.com", second.value)
        self.assertEqual("https://api.example.com", first.value)

    def test_reregister_through_accessor(self) -> None:
        self.registry.register_by_path("https://api.example.com", helpers.AppValues.base_url)
        accessor = Dependency(helpers.AppValues.base_url, registry=self.registry)

        accessor.register("https://new.example.com")

        self.assertEqual("https://api.example.com", accessor.value)
        self.assertEqual(
            "https://new.example.com", self.registry.resolve_by_path(helpers.AppValues.base_url)
        )

    def test_missing_path_fails_construction(self) -> None:
        with self.assertRaises(DependencyNotFoundError) as ctx:
            Dependency(helpers.AppValues.data_url, registry=self.registry)
        self.assertEqual(helpers.AppValues.data_url, ctx.exception.key)

    def test_path_accessor_ignores_type_namespace(self) -> None:
        self.registry.register("https://api.example.com", str)
        with self.assertRaises(DependencyNotFoundError):
            Dependency(helpers.AppValues.base_url, registry=self.registry)

    def test_value_is_writable_locally(self) -> None:
        self.registry.register_by_path("https://api.example.com", helpers.AppValues.base_url)
        accessor = Dependency(helpers.AppValues.base_url, registry=self.registry)

        accessor.value = "http://localhost"

        self.assertEqual("http://localhost", accessor.value)
        self.assertEqual(
            "https://api.example.com", self.registry.resolve_by_path(helpers.AppValues.base_url)
        )


class TypeAccessorTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = initialize()
        self.vm = helpers.ViewModelA()
        self.registry.register(self.vm, helpers.ViewModelA)

    def test_identity_preserved(self) -> None:
        for accessor_cls in (InjectedState, InjectedViewModel, Dependency):
            accessor = accessor_cls(helpers.ViewModelA, registry=self.registry)
            self.assertIs(self.vm, accessor.value)
            self.assertEqual(AccessorState.RESOLVED, accessor.state)

    def test_removed_type_fails_construction(self) -> None:
        self.registry.remove_by_type(helpers.ViewModelA)

        for accessor_cls in (InjectedState, InjectedStateObject, InjectedViewModel, Dependency):
            with self.assertRaises(DependencyNotFoundError):
                accessor_cls(helpers.ViewModelA, registry=self.registry)

    def test_injected_state_is_read_only(self) -> None:
        accessor = InjectedState(helpers.ViewModelA, registry=self.registry)
        with self.assertRaises(AttributeError):
            accessor.value = helpers.ViewModelA()  # type: ignore[misc]

    def test_injected_state_binding(self) -> None:
        accessor = InjectedState(helpers.ViewModelA, registry=self.registry)
        binding = accessor.projected
        self.assertIsInstance(binding, Binding)
        self.assertIs(self.vm, binding.value)

        replacement = helpers.ViewModelA("replacement")
        binding.value = replacement

        self.assertIs(replacement, accessor.value)
        # the registry keeps the original
        self.assertIs(self.vm, self.registry.resolve_by_type(helpers.ViewModelA))

    def test_view_model_read_write(self) -> None:
        accessor = InjectedViewModel(helpers.ViewModelA, registry=self.registry)
        self.assertIs(self.vm, accessor.projected)

        replacement = helpers.ViewModelA("replacement")
        accessor.value = replacement
        self.assertIs(replacement, accessor.value)

    def test_dependency_register_by_type(self) -> None:
        accessor = Dependency(helpers.ViewModelA, registry=self.registry)
        replacement = helpers.ViewModelA("replacement")

        accessor.register(replacement)

        self.assertIs(self.vm, accessor.value)
        self.assertIs(replacement, Dependency(helpers.ViewModelA, registry=self.registry).value)

    def test_in_place_mutation_is_shared(self) -> None:
        first = InjectedViewModel(helpers.ViewModelA, registry=self.registry)
        second = InjectedViewModel(helpers.ViewModelA, registry=self.registry)

        first.value.title = "changed"

        self.assertEqual("changed", second.value.title)


class StateObjectTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = initialize()

    def test_observed_bindings_notify(self) -> None:
        counter = helpers.Counter()
        self.registry.register(counter, helpers.Counter)

        accessor = InjectedStateObject(helpers.Counter, registry=self.registry)
        self.assertIs(counter, accessor.value)

        count = accessor.projected.count
        count.value = 5

        self.assertEqual(5, counter.count)
        self.assertEqual(1, counter.notifications)
        self.assertEqual(5, accessor.projected.binding("count").value)

    def test_unknown_attribute_binding(self) -> None:
        self.registry.register(helpers.Counter(), helpers.Counter)
        accessor = InjectedStateObject(helpers.Counter, registry=self.registry)
        with self.assertRaises(AttributeError):
            accessor.projected.binding("missing")

    def test_attribute_shadowed_by_wrapper_method(self) -> None:
        counter = helpers.Counter()
        counter.binding = "two-way"
        self.registry.register(counter, helpers.Counter)
        projected = InjectedStateObject(helpers.Counter, registry=self.registry).projected

        self.assertTrue(callable(projected.binding))
        self.assertEqual("two-way", projected.binding("binding").value)

    def test_rejects_non_observable(self) -> None:
        self.registry.register(helpers.ViewModelA(), helpers.ViewModelA)
        with self.assertRaises(TypeError):
            InjectedStateObject(helpers.ViewModelA, registry=self.registry)


class SharedRegistryAccessorTestCase(unittest.TestCase):
    def setUp(self):
        self._previous = shared()
        self.registry = set_shared(initialize())

    def tearDown(self):
        set_shared(self._previous)

    def test_defaults_to_shared_registry(self) -> None:
        vm = helpers.ViewModelA()
        self.registry.register(vm, helpers.ViewModelA)
        self.assertIs(vm, InjectedViewModel(helpers.ViewModelA).value)

    def test_isolated_registry_not_consulted(self) -> None:
        isolated = initialize()
        isolated.register(helpers.ViewModelA(), helpers.ViewModelA)
        with self.assertRaises(DependencyNotFoundError):
            InjectedViewModel(helpers.ViewModelA)


if __name__ == "__main__":
    unittest.main()
