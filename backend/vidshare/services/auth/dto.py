from __future__ import annotations

from dataclasses import dataclass

from vidshare.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one of ``username``/``email`` is required.

    :param username: Username (normalized before lookup).
    :type username: str | None
    :param email: Email (normalized before lookup).
    :type email: str | None
    :param password: Raw password (to be verified).
    :type password: str
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for credential rotation.

    :param refresh_token: Encoded refresh credential, ``None`` when the client sent none.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Input DTO for a password change by the authenticated subject.

    :param user_id: Authenticated subject.
    :param current_password: Password currently on file.
    :param new_password: Replacement password (raw).
    """

    user_id: int
    current_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access and refresh credentials issued together.

    :param expires_in: Access credential lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True, slots=True)
class SessionOut:
    """A freshly issued credential pair plus the subject's public profile."""

    user: UserPublicOut
    tokens: TokenPairOut
