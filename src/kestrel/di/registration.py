"""
Service registration for the kestrel DI system.

A ``ServiceRegistry`` maps service identifiers (type tokens) to exactly one
registration each. Three registration kinds exist:

- ``InstanceRegistration``: a pre-built object shared by every resolution
- ``FactoryRegistration``: a zero-argument callable invoked per resolution
- ``TypeRegistration``: a concrete class constructed with no arguments

The registry is not thread-safe; populate it before resolving from it.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Generic, TypeAlias, TypeVar, get_origin

from kestrel.di.config import DISettings
from kestrel.di.errors import (
    DuplicateRegistrationError,
    InvalidRegistrationError,
    type_name,
)
from kestrel.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass(frozen=True)
class InstanceRegistration(Generic[T]):
    """A ready-made object returned as-is by every resolution."""

    service: type[T]
    instance: T


@dataclass(frozen=True)
class FactoryRegistration(Generic[T]):
    """A zero-argument callable producing a new object per resolution."""

    service: type[T]
    factory: Callable[[], T]


@dataclass(frozen=True)
class TypeRegistration(Generic[T]):
    """A concrete class instantiated with no arguments per resolution."""

    service: type[T]
    implementation: type[T]


Registration: TypeAlias = (
    InstanceRegistration[Any] | FactoryRegistration[Any] | TypeRegistration[Any]
)


def is_service_identifier(service: Any) -> bool:
    """Check that ``service`` is a type token usable as a registration key."""
    return inspect.isclass(service) or inspect.isclass(get_origin(service))


class ServiceRegistry:
    """Stores how to produce an instance of each registered service.

    Registering a service that is already registered replaces the previous
    registration, unless the registry was created with
    ``reject_duplicate_registrations`` enabled.
    """

    def __init__(self, settings: DISettings | None = None) -> None:
        self._settings = settings or DISettings()
        self._registrations: dict[Any, Registration] = {}

    @property
    def settings(self) -> DISettings:
        return self._settings

    @property
    def registrations(self) -> Mapping[Any, Registration]:
        """Point-in-time, read-only snapshot of the registrations.

        The snapshot keeps registration order and is not affected by later
        ``add_*`` calls.
        """
        return MappingProxyType(dict(self._registrations))

    def get(self, service: Any) -> Registration | None:
        """Return the current registration for ``service``, if any."""
        return self._registrations.get(service)

    def __contains__(self, service: object) -> bool:
        return service in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.registrations)

    def add_type(
        self, service: type[T], implementation: type[T] | None = None
    ) -> ServiceRegistry:
        """Register a concrete class for a service.

        The class must be constructible without arguments; this is checked when
        the service is resolved, not here.

        Args:
            service: The service identifier
            implementation: Concrete class or parameterised generic; defaults
                to ``service`` itself

        Returns:
            The registry, for chaining
        """
        implementation = service if implementation is None else implementation
        if not is_service_identifier(implementation):
            raise InvalidRegistrationError(
                service, f"implementation {implementation!r} is not a class"
            )
        return self._add(service, TypeRegistration(service, implementation))

    def add_instance(self, service: type[T], instance: T) -> ServiceRegistry:
        """Register a pre-built object for a service.

        Args:
            service: The service identifier
            instance: Object returned by every resolution of ``service``

        Returns:
            The registry, for chaining
        """
        if instance is None:
            raise InvalidRegistrationError(service, "instance is None")
        return self._add(service, InstanceRegistration(service, instance))

    def add_factory(
        self, service: type[T], factory: Callable[[], T]
    ) -> ServiceRegistry:
        """Register a zero-argument factory for a service.

        Args:
            service: The service identifier
            factory: Callable invoked once per ``new`` resolution

        Returns:
            The registry, for chaining
        """
        if factory is None:
            raise InvalidRegistrationError(service, "factory is None")
        if not callable(factory):
            raise InvalidRegistrationError(
                service, f"factory {factory!r} is not callable"
            )
        return self._add(service, FactoryRegistration(service, factory))

    def _add(self, service: Any, registration: Registration) -> ServiceRegistry:
        if service is None or not is_service_identifier(service):
            raise InvalidRegistrationError(
                service, "service identifier must be a type"
            )

        name = type_name(service)
        if service in self._registrations:
            if self._settings.reject_duplicate_registrations:
                raise DuplicateRegistrationError(service)
            logger.warning(
                "Replacing existing registration",
                service=name,
                previous=type(self._registrations[service]).__name__,
                registration=type(registration).__name__,
            )

        self._registrations[service] = registration
        logger.debug(
            "Registered service",
            service=name,
            registration=type(registration).__name__,
        )
        return self
