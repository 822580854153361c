"""
Service resolution for the kestrel DI system.

A ``ServiceScope`` is bound to one ``ServiceRegistry`` and resolves services
from it. ``new`` always builds a fresh object; ``singleton`` caches the first
object built for each service for the lifetime of the scope; ``validate``
resolves every registration once and reports all failures together.
"""

from __future__ import annotations

import inspect
from typing import Any, TypeVar, cast, get_origin

from kestrel.di.errors import (
    DIError,
    InvalidRegistrationShapeError,
    NoValidConstructorError,
    ServiceCreationError,
    ServiceNotRegisteredError,
    TypeMismatchError,
    type_name,
)
from kestrel.di.registration import (
    FactoryRegistration,
    InstanceRegistration,
    ServiceRegistry,
    TypeRegistration,
)
from kestrel.logging import get_logger
from kestrel.result import Error, Failure, Result, Success

T = TypeVar("T")

logger = get_logger(__name__)


def satisfies(obj: Any, service: Any) -> bool:
    """Check whether ``obj`` satisfies the capability contract of ``service``.

    Protocols that are not ``runtime_checkable`` carry no runtime contract and
    are always satisfied.
    """
    target = get_origin(service) or service
    try:
        return isinstance(obj, target)
    except TypeError:
        return True


def _parameterless_constructor_problem(implementation: type[Any]) -> str | None:
    """Return why ``implementation`` cannot be called without arguments, or None."""
    implementation = get_origin(implementation) or implementation
    if getattr(implementation, "_is_protocol", False):
        return "protocols cannot be instantiated"
    if inspect.isabstract(implementation):
        return "class is abstract"
    try:
        signature = inspect.signature(implementation)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); let the call decide
        return None
    required = [
        param.name
        for param in signature.parameters.values()
        if param.default is inspect.Parameter.empty
        and param.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        return f"required parameters: {', '.join(required)}"
    return None


class ServiceScope:
    """Resolves services from a registry and owns a singleton cache.

    The scope performs no locking. Sequential ``singleton`` calls return the
    same object; concurrent use must be synchronised by the caller.
    """

    def __init__(self, registry: ServiceRegistry) -> None:
        self._registry = registry
        self._singletons: dict[Any, Any] = {}

    @property
    def registry(self) -> ServiceRegistry:
        return self._registry

    def new(self, service: type[T]) -> T:
        """Resolve a fresh instance of ``service``.

        Instance registrations return the registered object, factories are
        invoked and classes are constructed on every call. The singleton cache
        is never consulted.

        Args:
            service: The service identifier

        Returns:
            The resolved instance

        Raises:
            ServiceNotRegisteredError: If ``service`` has no registration
            TypeMismatchError: If the object does not satisfy ``service``
            NoValidConstructorError: If the class needs constructor arguments
            ServiceCreationError: If a factory or constructor raised
            InvalidRegistrationShapeError: If the stored registration is corrupt
        """
        registration = self._registry.get(service)
        if registration is None:
            raise ServiceNotRegisteredError(service)

        if self._registry.settings.log_resolutions:
            logger.debug(
                "Resolving service",
                service=type_name(service),
                registration=type(registration).__name__,
            )

        match registration:
            case InstanceRegistration(instance=instance):
                if satisfies(instance, service):
                    return cast("T", instance)
                raise TypeMismatchError(service, type(instance))
            case FactoryRegistration(factory=factory):
                return cast("T", self._invoke(service, factory))
            case TypeRegistration(implementation=implementation):
                return self._construct(service, implementation)
            case _:
                raise InvalidRegistrationShapeError(service, registration)

    def singleton(self, service: type[T]) -> T:
        """Resolve the shared instance of ``service`` for this scope.

        Registered instances are returned directly. Otherwise the first object
        built by ``new`` is cached and returned by every later call.

        Raises:
            ServiceCreationError: If resolution produced None
            DIError: Any error raised by ``new``
        """
        registration = self._registry.get(service)
        if isinstance(registration, InstanceRegistration) and satisfies(
            registration.instance, service
        ):
            return cast("T", registration.instance)

        if service in self._singletons:
            return cast("T", self._singletons[service])

        instance = self.new(service)
        if instance is None:
            raise ServiceCreationError(service, "resolution produced None")
        self._singletons[service] = instance
        return instance

    def validate(self) -> Result[None]:
        """Resolve every registered service once and collect the failures.

        Factories are invoked and constructors are run, exactly as ``new``
        would. Never raises a DI error.

        Returns:
            Success(None) if every registration resolved, otherwise a Failure
            wrapping an AggregateError with one Error per failing service, in
            registration order
        """
        snapshot = self._registry.registrations
        errors: list[Error] = []

        for service in snapshot:
            name = type_name(service)
            try:
                self.new(service)
            except DIError as exc:
                logger.warning(
                    "Registration failed validation",
                    service=name,
                    code=str(exc.code),
                    error=exc.message,
                )
                errors.append(Error(exc.message, exc, {"service": name}))

        logger.info(
            "Validated service registrations",
            registrations=len(snapshot),
            failures=len(errors),
        )
        if errors:
            return Failure(Error.from_errors(errors))
        return Success(None)

    def _invoke(self, service: Any, factory: Any) -> Any:
        try:
            return factory()
        except DIError:
            raise
        except Exception as exc:
            raise ServiceCreationError(
                service, f"{type(exc).__name__}: {exc}"
            ) from exc

    def _construct(self, service: type[T], implementation: type[Any]) -> T:
        problem = _parameterless_constructor_problem(implementation)
        if problem is not None:
            raise NoValidConstructorError(service, implementation, problem)

        instance = self._invoke(service, implementation)
        if not satisfies(instance, service):
            raise TypeMismatchError(service, type(instance))
        return cast("T", instance)
