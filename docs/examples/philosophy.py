import depkit


class Engine:
    def __init__(self, cylinders=4):
        self.cylinders = cylinders


@depkit.inject.component
class Car:
    engine = depkit.inject.view_model(Engine)


if __name__ == "__main__":
    registry = depkit.reinitialize()
    registry.register(Engine())
    car = Car()
    assert isinstance(car, Car), "Car() is an ordinary construction"
    assert isinstance(car.engine, Engine), "engine is injected into Car"
    assert car.engine.cylinders == 4, "engine uses the default cylinder count"

    # a different registration changes what new components see
    registry.register(Engine(cylinders=2))
    car_alt = Car()
    assert car_alt.engine.cylinders == 2, "cylinders can change w/ injection"
    assert car.engine.cylinders == 4, "existing components keep their engine"

    # an unregistered dependency is a programming error
    registry.remove_by_type(Engine)
    try:
        Car()
        raise AssertionError("Car() should not construct without an Engine")
    except depkit.DependencyNotFoundError:
        pass

    print("philosophy example tests passed!")
