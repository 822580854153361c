# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
#
# SPDX-License-Identifier: MIT

"""
Result objects for functional error handling in kestrel.

This module implements the Result pattern (also known as the Either pattern)
for reporting failures as values instead of raising exceptions.
"""

from __future__ import annotations

import functools
import traceback
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar, cast

from kestrel.errors.base import ErrorCategory, ErrorCode, KestrelError
from kestrel.result.error import Error

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=BaseException)

RESULT: Final = ErrorCategory.get_or_create("RESULT")
RESULT_FAILURE: Final = ErrorCode.get_or_create("RESULT_FAILURE", RESULT)


class ResultError(KestrelError):
    """Raised when a failed result is unwrapped or re-raised without a cause."""

    def __init__(self, error: Error, **context: Any) -> None:
        super().__init__(
            message=error.message,
            code=RESULT_FAILURE,
            context=context,
        )
        self.error = error


class Result(Generic[T], ABC):
    """Abstract base class for Result monad."""

    @property
    @abstractmethod
    def is_success(self) -> bool: ...

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @abstractmethod
    def map(self, func: Callable[[T], U]) -> Result[U]: ...

    @abstractmethod
    def flat_map(self, func: Callable[[T], Result[U]]) -> Result[U]: ...

    @abstractmethod
    def unwrap(self) -> T: ...

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...

    @abstractmethod
    def unwrap_or_else(self, func: Callable[[Error], T]) -> T: ...

    @abstractmethod
    def on_success(self, func: Callable[[T], Any]) -> Result[T]: ...

    @abstractmethod
    def on_failure(self, func: Callable[[Error], Any]) -> Result[T]: ...

    @abstractmethod
    def catch(self, exception_type: type[E], func: Callable[[E], Any]) -> Result[T]: ...

    @abstractmethod
    def raise_if_failure(self) -> Result[T]: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def __bool__(self) -> bool:
        return self.is_success

    def ensure(self, predicate: Callable[[T], bool], error: Error) -> Result[T]:
        """
        Return Failure if predicate is False for a Success value, else self.
        """
        if self.is_success and not predicate(self.unwrap()):
            return Failure(error)
        return self

    def recover(self, func: Callable[[Error], T]) -> Result[T]:
        """
        Transform a Failure into a Success by applying func to the error.
        """
        if isinstance(self, Failure):
            return Success(func(self.error))
        return self


@dataclass(frozen=True)
class Success(Result[T]):
    """
    Represents a successful result with a value.

    Attributes:
        value: The successful result value
    """

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def map(self, func: Callable[[T], U]) -> Result[U]:
        """
        Map the value of a successful result.

        Exceptions raised by ``func`` become a Failure.
        """
        try:
            return Success(func(self.value))
        except Exception as e:
            return Failure(Error.from_exception(e))

    def flat_map(self, func: Callable[[T], Result[U]]) -> Result[U]:
        """
        Apply a function that returns a Result to the value of a successful result.
        """
        try:
            return func(self.value)
        except Exception as e:
            return Failure(Error.from_exception(e))

    def on_success(self, func: Callable[[T], Any]) -> Success[T]:
        func(self.value)
        return self

    def on_failure(self, func: Callable[[Error], Any]) -> Success[T]:
        return self

    def catch(self, exception_type: type[E], func: Callable[[E], Any]) -> Success[T]:
        return self

    def raise_if_failure(self) -> Success[T]:
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, func: Callable[[Error], T]) -> T:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the result to a dictionary.

        Returns:
            A dictionary representation of the result
        """
        return {"status": "success", "data": self.value}

    def __str__(self) -> str:
        return f"Success({self.value})"

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Result[T]):
    """
    Represents a failed result with an error.

    Attributes:
        error: The error that caused the failure
        traceback: The traceback of the wrapped exception, if any
    """

    error: Error
    traceback: str | None = None

    def __post_init__(self) -> None:
        exc = self.error.exception
        if self.traceback is None and exc is not None and exc.__traceback__ is not None:
            # frozen dataclass
            object.__setattr__(
                self, "traceback", "".join(traceback.format_exception(exc))
            )

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def map(self, func: Callable[[T], U]) -> Result[U]:
        return cast("Failure[U]", self)

    def flat_map(self, func: Callable[[T], Result[U]]) -> Result[U]:
        return cast("Failure[U]", self)

    def on_success(self, func: Callable[[T], Any]) -> Failure[T]:
        return self

    def on_failure(self, func: Callable[[Error], Any]) -> Failure[T]:
        """
        Execute a function with the error.

        Args:
            func: The function to execute

        Returns:
            The original Result
        """
        func(self.error)
        return self

    def catch(self, exception_type: type[E], func: Callable[[E], Any]) -> Failure[T]:
        """
        Execute a function with the wrapped exception if it is an ``exception_type``.

        Args:
            exception_type: The exception class to match
            func: The function to execute

        Returns:
            The original Result
        """
        if isinstance(self.error.exception, exception_type):
            func(self.error.exception)
        return self

    def raise_if_failure(self) -> Failure[T]:
        """
        Raise the wrapped exception, or a ResultError when there is none.
        """
        if self.error.exception is not None:
            raise self.error.exception
        raise ResultError(self.error)

    def unwrap(self) -> T:
        """
        Raises:
            ResultError: Always, since this is a failure
        """
        raise ResultError(self.error) from self.error.exception

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, func: Callable[[Error], T]) -> T:
        return func(self.error)

    def to_dict(self) -> dict[str, Any]:
        return {"status": "error", "error": self.error.to_dict()}

    def __str__(self) -> str:
        return f"Failure({self.error})"

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


def of(value: T) -> Success[T]:
    """
    Create a successful result with a value.
    """
    return Success(value)


def ok() -> Success[None]:
    """A successful result that carries no value."""
    return Success(None)


def failure(error: Error | BaseException | str) -> Failure[Any]:
    """
    Create a failed result from an Error, an exception or a plain message.
    """
    if isinstance(error, BaseException):
        error = Error.from_exception(error)
    elif isinstance(error, str):
        error = Error(error)
    return Failure(error)


def from_exception(func: Callable[..., T]) -> Callable[..., Result[T]]:
    """
    Decorator to convert a function that might raise exceptions to one that returns a Result.

    Args:
        func: The function to decorate

    Returns:
        A function that returns a Result
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Result[T]:
        try:
            return Success(func(*args, **kwargs))
        except Exception as e:
            return Failure(Error.from_exception(e))

    return wrapper


def combine(results: Iterable[Result[T]]) -> Result[list[T]]:
    """
    Combine multiple Results into a single Result.

    Returns:
        A Success with a list of values if all Results are successful,
        or the first Failure
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Failure):
            return cast("Failure[list[T]]", result)
        values.append(result.unwrap())
    return Success(values)


def collect(results: Iterable[Result[T]]) -> Result[list[T]]:
    """
    Combine multiple Results, gathering every failure.

    Returns:
        A Success with a list of values if all Results are successful,
        otherwise a Failure wrapping an AggregateError of all errors in order
    """
    values: list[T] = []
    errors: list[Error] = []
    for result in results:
        if isinstance(result, Failure):
            errors.append(result.error)
        else:
            values.append(result.unwrap())
    if errors:
        return Failure(Error.from_errors(errors))
    return Success(values)
