# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
Public API for the kestrel logging system.

Structured logging on top of the standard library, configured from
``KESTREL_LOGGING_*`` environment variables.
"""

from __future__ import annotations

from kestrel.logging.config import LoggingSettings
from kestrel.logging.level import LogLevel
from kestrel.logging.logger import (
    KestrelJsonEncoder,
    KestrelLogger,
    StructuredFormatter,
    get_logger,
)

__all__ = [
    "KestrelJsonEncoder",
    "KestrelLogger",
    "LogLevel",
    "LoggingSettings",
    "StructuredFormatter",
    "get_logger",
]
