"""
Process-wide default registry and scope.

The default ``ServiceRegistry`` and the ``ServiceScope`` bound to it are built
once, on first access, and live for the rest of the process. Populate the
registry at startup, then resolve through ``new`` and ``singleton``.
"""

from __future__ import annotations

import threading
from typing import TypeVar

from kestrel.di.config import DISettings
from kestrel.di.registration import ServiceRegistry
from kestrel.di.scope import ServiceScope
from kestrel.logging import get_logger
from kestrel.result import Result

T = TypeVar("T")

logger = get_logger(__name__)

_lock = threading.Lock()
_registry: ServiceRegistry | None = None
_default_scope: ServiceScope | None = None


def _initialize() -> tuple[ServiceRegistry, ServiceScope]:
    global _registry, _default_scope
    if _registry is None or _default_scope is None:
        with _lock:
            if _registry is None or _default_scope is None:
                registry = ServiceRegistry(DISettings.load())
                _default_scope = ServiceScope(registry)
                _registry = registry
                logger.debug("Initialized default service registry")
    return _registry, _default_scope


def get_registry() -> ServiceRegistry:
    """The process-wide service registry."""
    return _initialize()[0]


def get_default_scope() -> ServiceScope:
    """The process-wide scope bound to the default registry."""
    return _initialize()[1]


def create_scope() -> ServiceScope:
    """Create a new scope, with its own singleton cache, over the default registry."""
    return ServiceScope(get_registry())


def new(service: type[T]) -> T:
    """Resolve a fresh instance from the default scope."""
    return get_default_scope().new(service)


def singleton(service: type[T]) -> T:
    """Resolve the shared instance from the default scope."""
    return get_default_scope().singleton(service)


def validate() -> Result[None]:
    """Validate every registration in the default registry."""
    return get_default_scope().validate()
