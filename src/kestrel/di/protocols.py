"""
Protocol definitions for the kestrel DI system.

These describe the registry and scope contracts structurally, so alternative
implementations (test doubles included) can stand in for the concrete classes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from kestrel.di.registration import Registration
    from kestrel.result import Result

T = TypeVar("T")


@runtime_checkable
class ServiceRegistryProtocol(Protocol):
    """Protocol for a service registration store."""

    @property
    def registrations(self) -> Mapping[Any, Registration]:
        """Read-only snapshot of the current registrations."""
        ...

    def get(self, service: Any) -> Registration | None:
        """Get the registration for a service, if any."""
        ...

    def add_type(
        self, service: type[T], implementation: type[T] | None = None
    ) -> ServiceRegistryProtocol:
        """Register a concrete class constructed without arguments."""
        ...

    def add_instance(self, service: type[T], instance: T) -> ServiceRegistryProtocol:
        """Register a pre-built object."""
        ...

    def add_factory(
        self, service: type[T], factory: Callable[[], T]
    ) -> ServiceRegistryProtocol:
        """Register a zero-argument factory."""
        ...


@runtime_checkable
class ServiceScopeProtocol(Protocol):
    """Protocol for a service resolver."""

    def new(self, service: type[T]) -> T:
        """Resolve a fresh instance."""
        ...

    def singleton(self, service: type[T]) -> T:
        """Resolve the instance shared within this scope."""
        ...

    def validate(self) -> Result[None]:
        """Resolve every registration and report all failures."""
        ...
