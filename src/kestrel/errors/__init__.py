# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
Structured error handling for kestrel.
"""

from __future__ import annotations

from kestrel.errors.base import (
    INTERNAL,
    INTERNAL_ERROR,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    KestrelError,
)
from kestrel.errors.registry import ErrorRegistry, registry

__all__ = [
    # Error categories
    "ErrorCategory",
    "ErrorCode",
    "ErrorSeverity",
    "INTERNAL",
    "INTERNAL_ERROR",
    # Base errors
    "KestrelError",
    # Registry
    "ErrorRegistry",
    "registry",
]
