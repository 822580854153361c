from abc import ABC, abstractmethod

import pytest

from kestrel.di import (
    InvalidRegistrationShapeError,
    NoValidConstructorError,
    ServiceCreationError,
    ServiceNotRegisteredError,
    ServiceScope,
    ServiceScopeProtocol,
    TypeMismatchError,
)
from kestrel.di.errors import DI_SERVICE_NOT_REGISTERED

from .services import (
    Box,
    Clock,
    Counter,
    Exploding,
    FixedClock,
    Greeter,
    Logger,
    NotAClock,
    Repo,
    StubLogger,
    SystemClock,
)


def test_unregistered_service_raises(scope):
    with pytest.raises(ServiceNotRegisteredError) as exc_info:
        scope.new(Clock)

    assert exc_info.value.code == DI_SERVICE_NOT_REGISTERED
    assert exc_info.value.service == "Clock"


def test_instance_registration_returns_same_object(registry, scope):
    clock = FixedClock()
    registry.add_instance(Clock, clock)

    assert scope.new(Clock) is clock
    assert scope.new(Clock) is clock


def test_instance_not_satisfying_service_raises(registry, scope):
    registry.add_instance(Clock, NotAClock())

    with pytest.raises(TypeMismatchError) as exc_info:
        scope.new(Clock)

    assert exc_info.value.context["actual_type"] == "NotAClock"


def test_factory_invoked_on_every_new(registry, scope):
    calls = []

    def make_logger() -> StubLogger:
        calls.append(1)
        return StubLogger()

    registry.add_factory(Logger, make_logger)

    first = scope.new(Logger)
    second = scope.new(Logger)

    assert len(calls) == 2
    assert first is not second


def test_factory_result_is_returned_unchecked(registry, scope):
    sentinel = object()
    registry.add_factory(Clock, lambda: sentinel)

    assert scope.new(Clock) is sentinel


def test_factory_exception_becomes_creation_error(registry, scope):
    def broken() -> Logger:
        raise ValueError("no disk")

    registry.add_factory(Logger, broken)

    with pytest.raises(ServiceCreationError) as exc_info:
        scope.new(Logger)

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert "no disk" in exc_info.value.message


def test_nested_di_error_propagates_unchanged(registry, scope):
    registry.add_factory(Logger, lambda: scope.new(Clock))

    with pytest.raises(ServiceNotRegisteredError) as exc_info:
        scope.new(Logger)

    assert exc_info.value.service == "Clock"


def test_type_registration_builds_new_instance_each_time(registry, scope):
    registry.add_type(Clock, SystemClock)

    first = scope.new(Clock)
    second = scope.new(Clock)

    assert isinstance(first, SystemClock)
    assert isinstance(second, SystemClock)
    assert first is not second


def test_type_registration_of_service_itself(registry, scope):
    registry.add_type(Counter)
    before = Counter.instances

    scope.new(Counter)
    scope.new(Counter)

    assert Counter.instances == before + 2


def test_optional_constructor_parameters_are_allowed(registry, scope):
    registry.add_type(Clock, FixedClock)

    assert isinstance(scope.new(Clock), FixedClock)


def test_required_constructor_parameters_raise(registry, scope):
    registry.add_type(Repo)

    with pytest.raises(NoValidConstructorError) as exc_info:
        scope.new(Repo)

    assert "connection_string" in exc_info.value.message


def test_abstract_class_has_no_valid_constructor(registry, scope):
    registry.add_type(Clock)

    with pytest.raises(NoValidConstructorError):
        scope.new(Clock)


def test_protocol_has_no_valid_constructor(registry, scope):
    registry.add_type(Logger)

    with pytest.raises(NoValidConstructorError):
        scope.new(Logger)


def test_constructor_exception_becomes_creation_error(registry, scope):
    registry.add_type(Exploding)

    with pytest.raises(ServiceCreationError) as exc_info:
        scope.new(Exploding)

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_constructed_object_must_satisfy_service(registry, scope):
    registry.add_type(Clock, NotAClock)

    with pytest.raises(TypeMismatchError):
        scope.new(Clock)


def test_runtime_checkable_protocol_is_checked(registry, scope):
    registry.add_instance(Logger, StubLogger())
    registry.add_type(Greeter, StubLogger)

    assert isinstance(scope.new(Logger), StubLogger)
    # Greeter is not runtime checkable, so its contract cannot be verified
    assert isinstance(scope.new(Greeter), StubLogger)


def test_generic_alias_checks_origin(registry, scope):
    registry.add_instance(list[str], ["a", "b"])

    assert scope.new(list[str]) == ["a", "b"]


def test_parameterised_generic_registers_itself(registry, scope):
    registry.add_type(Box[int])
    registry.add_type(list[int])

    first = scope.new(Box[int])

    assert isinstance(first, Box)
    assert first is not scope.new(Box[int])
    assert scope.new(list[int]) == []


def test_corrupt_registration_raises(registry, scope):
    registry._registrations[Clock] = "not a registration"

    with pytest.raises(InvalidRegistrationShapeError):
        scope.new(Clock)


def test_latest_registration_wins(registry, scope):
    registry.add_type(Clock, SystemClock)
    clock = FixedClock()
    registry.add_instance(Clock, clock)

    assert scope.new(Clock) is clock


def test_resolution_does_not_mutate_registry(registry, scope):
    registry.add_type(Clock, SystemClock)
    before = dict(registry.registrations)

    scope.new(Clock)
    scope.singleton(Clock)

    assert dict(registry.registrations) == before


def test_abstract_implementation_rejected_even_when_distinct(registry, scope):
    class Base(ABC):
        @abstractmethod
        def run(self) -> None: ...

    class Partial(Base):
        pass

    registry.add_type(Base, Partial)

    with pytest.raises(NoValidConstructorError):
        scope.new(Base)


def test_scope_satisfies_protocol(scope):
    assert isinstance(scope, ServiceScopeProtocol)
    assert isinstance(scope, ServiceScope)
