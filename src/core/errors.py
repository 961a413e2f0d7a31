# src/core/errors.py — v1
"""Error types raised by cache backends.

Backends report every failure through exactly one of these classes so the
orchestrators can dispatch on type rather than on error names or messages.
"""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal["validation", "reservation", "service"]


class CacheBackendError(Exception):
    """Base class for all backend failures."""

    kind: ErrorKind = "service"


class CacheValidationError(CacheBackendError):
    """Malformed or unsafe input (bad key, empty path set).

    Indicates caller misconfiguration; always fatal for the run.
    """

    kind: ErrorKind = "validation"


class ReserveCacheError(CacheBackendError):
    """Another run already owns (or is creating) the target key."""

    kind: ErrorKind = "reservation"


class CacheServiceError(CacheBackendError):
    """Any other backend failure: network, storage, archive errors."""

    kind: ErrorKind = "service"


def classify_backend_error(error: BaseException) -> ErrorKind:
    """Map an exception to its tier.

    Exceptions that do not come from a backend are treated as service
    failures: they are downgraded, never fatal.
    """
    match error:
        case CacheValidationError():
            return "validation"
        case ReserveCacheError():
            return "reservation"
        case _:
            return "service"
