"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param username: Public handle (normalized to lowercase).
    :type username: str
    :param email: Login email (normalized to lowercase).
    :type email: str
    :param password: Raw password, hashed by the password verifier.
    :type password: str
    :param full_name: Optional display name.
    :type full_name: str | None
    """

    username: str
    email: str
    password: str
    full_name: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for account details. ``None`` means "leave unchanged".

    :param email: Optional new email.
    :type email: str | None
    :param full_name: Optional new display name.
    :type full_name: str | None
    :param avatar_url: Optional new avatar reference.
    :type avatar_url: str | None
    :param cover_image_url: Optional new cover image reference.
    :type cover_image_url: str | None
    """

    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user data. Never carries the password hash or refresh credential.
    """

    id: int
    username: str
    email: str
    full_name: str | None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    A user's public channel page.

    :param subscribers_count: Users subscribed to this channel.
    :param subscribed_to_count: Channels this user subscribes to.
    :param is_subscribed: Whether the viewer subscribes (``False`` for anonymous viewers).
    """

    id: int
    username: str
    full_name: str | None
    avatar_url: str | None
    cover_image_url: str | None
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool
