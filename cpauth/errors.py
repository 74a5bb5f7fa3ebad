"""Error kinds raised by the Chaum-Pedersen authentication service.

Every failure crossing the service boundary is one of four kinds. The HTTP
layer turns them into status codes and the client turns the status codes back
into the same exception types.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid_argument"
    INTERNAL = "internal"


class AuthError(Exception):
    """Base exception for all authentication protocol errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str = "Internal error") -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(AuthError):
    """Unknown user identifier or auth identifier."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class UnauthenticatedError(AuthError):
    """The verification equation did not hold."""

    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401


class InvalidArgumentError(AuthError):
    """Input that cannot be decoded to an integer."""

    kind = ErrorKind.INVALID_ARGUMENT
    status_code = 400


class InternalError(AuthError):
    """Broken invariant inside the service, e.g. an auth id collision."""

    kind = ErrorKind.INTERNAL
    status_code = 500


_BY_KIND: Dict[ErrorKind, Type[AuthError]] = {
    cls.kind: cls
    for cls in (NotFoundError, UnauthenticatedError, InvalidArgumentError, InternalError)
}


def error_from_kind(kind: str, message: str) -> AuthError:
    """Rebuild the exception for an error kind received over the wire."""

    try:
        error_kind = ErrorKind(kind)
    except ValueError:
        return InternalError(f"Unknown error kind {kind!r}: {message}")
    return _BY_KIND[error_kind](message)


__all__ = [
    "AuthError",
    "ErrorKind",
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnauthenticatedError",
    "error_from_kind",
]
