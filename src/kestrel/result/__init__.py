# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
Tagged success/failure outcomes used to report errors without raising.
"""

from __future__ import annotations

from kestrel.result.error import AggregateError, Error
from kestrel.result.result import (
    Failure,
    Result,
    ResultError,
    Success,
    collect,
    combine,
    failure,
    from_exception,
    of,
    ok,
)

__all__ = [
    "AggregateError",
    "Error",
    "Failure",
    "Result",
    "ResultError",
    "Success",
    "collect",
    "combine",
    "failure",
    "from_exception",
    "of",
    "ok",
]
