from unittest.mock import Mock

from depkit import inject, initialize
from depkit.mock import mock


class Adult:
    def __init__(self, name):
        self.name = name

    def print_name(self):
        print(self.name)


test_registry = initialize()


@inject.component
class Child:
    parent = inject.view_model(Adult, registry=test_registry)

    def print_parent(self):
        self.parent.print_name()

    def get_free_car(self):
        self.parent.buy_car_for_child()


mocked_parent = mock(test_registry, Adult)
child = Child()
mocked_parent.print_name.assert_not_called()
child.print_parent()
mocked_parent.print_name.assert_called_once()

spoiled = True
try:
    child.get_free_car()
except AttributeError:
    spoiled = False
assert not spoiled

mocking_function = lambda cls: Mock(spec=cls)
mocked_2 = mock(test_registry, Adult, mocking_function)

assert isinstance(Child().parent, Mock)
assert Child().parent is mocked_2


print("Mocking Tests Passed!")
