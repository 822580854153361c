# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: kestrel

"""
kestrel: a small dependency-resolution runtime.

Register how to build services in a ``ServiceRegistry``, resolve them through
a ``ServiceScope`` and check every registration up front with ``validate``.
"""

from kestrel.di import ServiceRegistry, ServiceScope
from kestrel.result import Error, Failure, Result, Success

__version__ = "0.1.0"

__all__ = [
    "Error",
    "Failure",
    "Result",
    "ServiceRegistry",
    "ServiceScope",
    "Success",
    "__version__",
]
