"""
Error classes for the kestrel DI system.

Every resolution failure is a ``DIError``; subclasses name the failure kind
and record the offending service in ``context["service"]``.
"""

from __future__ import annotations

from typing import Any, Final, get_args, get_origin

from kestrel.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, KestrelError

DI: Final = ErrorCategory.get_or_create("DI")
DI_ERROR: Final = ErrorCode.get_or_create("DI_ERROR", DI)
DI_SERVICE_NOT_REGISTERED: Final = ErrorCode.get_or_create(
    "DI_SERVICE_NOT_REGISTERED", DI
)
DI_INVALID_REGISTRATION: Final = ErrorCode.get_or_create("DI_INVALID_REGISTRATION", DI)
DI_INVALID_REGISTRATION_SHAPE: Final = ErrorCode.get_or_create(
    "DI_INVALID_REGISTRATION_SHAPE", DI
)
DI_NO_VALID_CONSTRUCTOR: Final = ErrorCode.get_or_create("DI_NO_VALID_CONSTRUCTOR", DI)
DI_TYPE_MISMATCH: Final = ErrorCode.get_or_create("DI_TYPE_MISMATCH", DI)
DI_SERVICE_CREATION: Final = ErrorCode.get_or_create("DI_SERVICE_CREATION", DI)
DI_DUPLICATE_REGISTRATION: Final = ErrorCode.get_or_create(
    "DI_DUPLICATE_REGISTRATION", DI
)


def type_name(obj: Any) -> str:
    """Readable name of a service identifier or implementation.

    Parameterised generics keep their arguments, so ``list[int]`` and
    ``list[str]`` get distinct names.
    """
    origin = get_origin(obj)
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in get_args(obj))
        return f"{type_name(origin)}[{args}]"
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)


class DIError(KestrelError):
    """Base class for all DI-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = DI_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **context: Any,
    ) -> None:
        """Initialize a DI error.

        Args:
            message: Human-readable error message
            code: DI error code
            severity: How severe this error is
            **context: Additional context information
        """
        super().__init__(
            message=message,
            code=code,
            severity=severity,
            context=context,
        )

    @property
    def service(self) -> str | None:
        """Name of the service the error is about, if known."""
        return self.context.get("service")


class ServiceNotRegisteredError(DIError):
    """Raised when a requested service has no registration."""

    def __init__(self, service: Any, **context: Any) -> None:
        name = type_name(service)
        super().__init__(
            message=f"Service {name} is not registered",
            code=DI_SERVICE_NOT_REGISTERED,
            service=name,
            **context,
        )


class InvalidRegistrationError(DIError):
    """Raised when a registration is rejected on the write path."""

    def __init__(self, service: Any, reason: str, **context: Any) -> None:
        name = type_name(service)
        super().__init__(
            message=f"Invalid registration for {name}: {reason}",
            code=DI_INVALID_REGISTRATION,
            service=name,
            reason=reason,
            **context,
        )


class InvalidRegistrationShapeError(DIError):
    """Raised when a stored registration is neither instance, factory nor type."""

    def __init__(self, service: Any, registration: Any, **context: Any) -> None:
        name = type_name(service)
        super().__init__(
            message=(
                f"Invalid registration for {name}: "
                f"{type(registration).__name__} is neither an instance, "
                "a factory nor a type registration"
            ),
            code=DI_INVALID_REGISTRATION_SHAPE,
            service=name,
            registration_type=type(registration).__name__,
            **context,
        )


class NoValidConstructorError(DIError):
    """Raised when an implementation cannot be constructed without arguments."""

    def __init__(
        self, service: Any, implementation: Any, reason: str, **context: Any
    ) -> None:
        name = type_name(service)
        impl_name = type_name(implementation)
        super().__init__(
            message=(
                f"Invalid registration for {name}: {impl_name} has no valid "
                f"parameterless constructor ({reason})"
            ),
            code=DI_NO_VALID_CONSTRUCTOR,
            service=name,
            implementation=impl_name,
            reason=reason,
            **context,
        )


class TypeMismatchError(DIError):
    """Raised when a service instance doesn't satisfy its service identifier."""

    def __init__(self, service: Any, actual_type: type[Any], **context: Any) -> None:
        name = type_name(service)
        actual_name = type_name(actual_type)
        super().__init__(
            message=f"Invalid registration: expected {name}, got {actual_name}",
            code=DI_TYPE_MISMATCH,
            service=name,
            expected_type=name,
            actual_type=actual_name,
            **context,
        )


class ServiceCreationError(DIError):
    """Raised when a factory or constructor fails to produce a service."""

    def __init__(self, service: Any, reason: str, **context: Any) -> None:
        name = type_name(service)
        super().__init__(
            message=f"Failed to create {name}: {reason}",
            code=DI_SERVICE_CREATION,
            service=name,
            reason=reason,
            **context,
        )


class DuplicateRegistrationError(DIError):
    """Raised when a service is registered twice and duplicates are rejected."""

    def __init__(self, service: Any, **context: Any) -> None:
        name = type_name(service)
        super().__init__(
            message=f"Service {name} is already registered",
            code=DI_DUPLICATE_REGISTRATION,
            service=name,
            **context,
        )
