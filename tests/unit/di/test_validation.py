from kestrel.di import (
    NoValidConstructorError,
    ServiceNotRegisteredError,
    TypeMismatchError,
)
from kestrel.result import AggregateError, Failure, Success

from .services import (
    Clock,
    Exploding,
    FixedClock,
    Logger,
    NotAClock,
    Repo,
    StubLogger,
    SystemClock,
)


def test_empty_registry_is_valid(scope):
    assert scope.validate() == Success(None)


def test_all_resolvable_registrations_are_valid(registry, scope):
    registry.add_type(Clock, SystemClock)
    registry.add_factory(Logger, StubLogger)

    result = scope.validate()

    assert result.is_success
    assert bool(result)


def test_single_failure_is_aggregated(registry, scope):
    registry.add_type(Clock, SystemClock)
    registry.add_type(Repo)

    result = scope.validate()

    assert isinstance(result, Failure)
    assert isinstance(result.error, AggregateError)
    assert len(result.error.errors) == 1
    error = result.error.errors[0]
    assert error.payload == {"service": "Repo"}
    assert isinstance(error.exception, NoValidConstructorError)
    assert error.message == error.exception.message
    assert error.message.startswith("Invalid registration for Repo: ")


def test_every_failure_is_collected_in_registration_order(registry, scope):
    registry.add_type(Exploding)
    registry.add_instance(Clock, NotAClock())
    registry.add_factory(Logger, StubLogger)
    registry.add_factory(Repo, lambda: scope.new(FixedClock))

    result = scope.validate()

    assert result.is_failure
    services = [error.payload["service"] for error in result.error.errors]
    assert services == ["Exploding", "Clock", "Repo"]
    assert isinstance(result.error.errors[1].exception, TypeMismatchError)
    assert isinstance(result.error.errors[2].exception, ServiceNotRegisteredError)


def test_validation_runs_factories(registry, scope):
    calls = []
    registry.add_factory(Logger, lambda: calls.append(1) or StubLogger())

    scope.validate()
    scope.validate()

    assert len(calls) == 2


def test_validation_does_not_populate_singleton_cache(registry, scope):
    calls = []
    registry.add_factory(Logger, lambda: calls.append(1) or StubLogger())

    scope.validate()
    scope.singleton(Logger)
    scope.singleton(Logger)

    assert len(calls) == 2


def test_failure_result_to_dict(registry, scope):
    registry.add_type(Repo)

    data = scope.validate().to_dict()

    assert data["status"] == "error"
    inner = data["error"]["errors"][0]
    assert inner["payload"] == {"service": "Repo"}
    assert inner["exception"]["code"] == "DI_NO_VALID_CONSTRUCTOR"


def test_generic_services_are_reported_separately(registry, scope):
    def broken():
        raise ValueError("unavailable")

    registry.add_factory(list[int], broken)
    registry.add_factory(list[str], broken)

    result = scope.validate()

    services = [error.payload["service"] for error in result.error.errors]
    assert services == ["list[int]", "list[str]"]
    assert result.error.errors[0].exception.service == "list[int]"
    assert result.error.errors[1].message.startswith("Failed to create list[str]: ")
