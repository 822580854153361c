# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
Error values carried by failed results.

An ``Error`` is plain data: a human readable message, optionally the exception
that caused it, and optionally a payload with additional context for logging.
``AggregateError`` batches several errors into one failure without losing the
individual messages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from kestrel.errors.base import KestrelError

AGGREGATE_MESSAGE = "Multiple errors occurred, see errors for details."


@dataclass(frozen=True)
class Error:
    """
    Wraps an error message and optionally a causing exception and/or a payload.

    Attributes:
        message: The error message
        exception: The exception that caused the error
        payload: Additional data about the error
    """

    message: str
    exception: BaseException | None = None
    payload: Any = None

    @classmethod
    def from_exception(cls, exc: BaseException, payload: Any = None) -> Error:
        """Create an error from an exception, keeping the exception as the cause."""
        message = exc.message if isinstance(exc, KestrelError) else str(exc)
        return cls(message or type(exc).__name__, exc, payload)

    @staticmethod
    def from_errors(errors: Iterable[Error]) -> AggregateError:
        """Batch several errors into a single aggregate error."""
        return AggregateError(AGGREGATE_MESSAGE, errors=tuple(errors))

    def is_similar_to(self, other: Error) -> bool:
        """Compare messages case-insensitively."""
        return self.message.casefold() == other.message.casefold()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            A dictionary representation of the error
        """
        data: dict[str, Any] = {"message": self.message}
        if isinstance(self.exception, KestrelError):
            data["exception"] = self.exception.to_dict()
        elif self.exception is not None:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }
        if self.payload is not None:
            data["payload"] = self.payload
        return data

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class AggregateError(Error):
    """An error made of several errors, kept in their original order."""

    errors: tuple[Error, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = [error.to_dict() for error in self.errors]
        return data
