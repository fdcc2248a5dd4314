"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. Every error carries an :class:`ErrorKind`; callers (and the HTTP
layer in ``vidshare/core/errors.py``) branch on the kind rather than on the
concrete class, so each kind maps to exactly one externally visible status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the message; SQLite reports
    the offending columns instead, so ``users.email`` style names are matched
    as a fallback.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint to match (e.g. ``uq_users_email``).
    :returns: ``True`` if the error matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # uq_<table>_<column> -> "<table>.<column>" as reported by SQLite
    parts = constraint_name.lower().split("_", 2)
    if len(parts) == 3 and parts[0] == "uq":
        return f"{parts[1]}.{parts[2]}" in message
    return False


class ErrorKind(Enum):
    """Closed set of failure kinds surfaced by services."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INVALID_CREDENTIAL = "invalid_credential"
    STALE_CREDENTIAL = "stale_credential"
    UNAUTHENTICATED = "unauthenticated"
    STORAGE_FAILURE = "storage_failure"


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - ``core.errors`` translates them into problem responses by ``kind``.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.BAD_REQUEST


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    kind: ClassVar[ErrorKind] = ErrorKind.CONFLICT

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthorizationError(ServiceError):
    """Raised when an authenticated actor may not touch a resource."""

    kind: ClassVar[ErrorKind] = ErrorKind.FORBIDDEN


# ------------------------------ Authentication ----------------------------- #


class AuthError(ServiceError):
    """Base for credential failures. Messages are fixed per kind."""

    default_message: ClassVar[str] = "Authentication failed"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(self.default_message)
        # Internal diagnostic only; never rendered to clients.
        self.reason = reason


class InvalidCredentialError(AuthError):
    """Bad password, or a token with bad signature/shape/expiry/kind."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_CREDENTIAL
    default_message = "Invalid credentials"


class StaleCredentialError(AuthError):
    """Refresh token verifies but was superseded by rotation or revoked."""

    kind: ClassVar[ErrorKind] = ErrorKind.STALE_CREDENTIAL
    default_message = "Refresh token is expired or has been used"


class UnauthenticatedError(AuthError):
    """No usable credential was presented where one is required."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"


# ------------------------------- Infrastructure ---------------------------- #


class StorageFailureError(ServiceError):
    """A backing store (database, Redis) failed; the request fails closed."""

    kind: ClassVar[ErrorKind] = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str = "Storage backend unavailable") -> None:
        super().__init__(message)


class CredentialIssueError(StorageFailureError):
    """Signing a credential failed; no partial token is ever returned."""

    def __init__(self, message: str = "Unable to issue credential") -> None:
        super().__init__(message)
