# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
Public API for the kestrel DI system.
"""

from __future__ import annotations

from kestrel.di.config import DISettings
from kestrel.di.errors import (
    DIError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    InvalidRegistrationShapeError,
    NoValidConstructorError,
    ServiceCreationError,
    ServiceNotRegisteredError,
    TypeMismatchError,
)
from kestrel.di.locator import (
    create_scope,
    get_default_scope,
    get_registry,
    new,
    singleton,
    validate,
)
from kestrel.di.protocols import ServiceRegistryProtocol, ServiceScopeProtocol
from kestrel.di.registration import (
    FactoryRegistration,
    InstanceRegistration,
    Registration,
    ServiceRegistry,
    TypeRegistration,
)
from kestrel.di.scope import ServiceScope

__all__ = [
    # Configuration
    "DISettings",
    # Errors
    "DIError",
    "DuplicateRegistrationError",
    "InvalidRegistrationError",
    "InvalidRegistrationShapeError",
    "NoValidConstructorError",
    "ServiceCreationError",
    "ServiceNotRegisteredError",
    "TypeMismatchError",
    # Registration
    "FactoryRegistration",
    "InstanceRegistration",
    "Registration",
    "ServiceRegistry",
    "ServiceRegistryProtocol",
    "TypeRegistration",
    # Resolution
    "ServiceScope",
    "ServiceScopeProtocol",
    # Default process-wide instance
    "create_scope",
    "get_default_scope",
    "get_registry",
    "new",
    "singleton",
    "validate",
]
