# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel
"""Interning registry for error categories and error codes."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kestrel.errors.base import ErrorCategory, ErrorCode


class ErrorRegistry:
    """Singleton registry for every error code and category in kestrel."""

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, "_categories"):
            self._categories: dict[str, ErrorCategory] = {}
        if not hasattr(self, "_codes"):
            self._codes: dict[str, ErrorCode] = {}

    def get_category(
        self, name: str, parent: ErrorCategory | None = None
    ) -> ErrorCategory:
        """Get or create a category.

        Args:
            name: The category name
            parent: Optional parent category, only used on first creation

        Returns:
            The interned ErrorCategory
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from kestrel.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def get_code(self, code: str, category_name: str = "INTERNAL") -> ErrorCode:
        """Get or create an error code.

        Args:
            code: The error code
            category_name: The category name (defaults to INTERNAL)

        Returns:
            The interned ErrorCode
        """
        with self._lock:
            if code in self._codes:
                return self._codes[code]

            from kestrel.errors.base import ErrorCode

            error_code = ErrorCode(code, self.get_category(category_name))
            self._codes[code] = error_code
            return error_code

    def lookup_code(self, code: str) -> ErrorCode | None:
        """Look up an error code without creating it."""
        return self._codes.get(code)

    def lookup_category(self, name: str) -> ErrorCategory | None:
        """Look up a category without creating it."""
        return self._categories.get(name)

    def get_all_codes(self) -> list[ErrorCode]:
        with self._lock:
            return list(self._codes.values())


# Create a single instance for use throughout the package
registry = ErrorRegistry()
