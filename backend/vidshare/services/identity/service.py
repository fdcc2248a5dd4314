"""
IdentityService
===============

Aggregate service responsible for the ``User`` aggregate:
- Registration (password hashed through the verifier port)
- Retrieval and account-detail updates
- Public channel profiles
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError

from vidshare.models.user import User
from vidshare.repositories.user import UserRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from vidshare.services._shared.ports import PasswordVerifier
from vidshare.services.identity.dto import (
    ChannelProfileOut,
    UserPublicOut,
    UserRegisterIn,
    UserUpdateIn,
)


def to_public(user: User) -> UserPublicOut:
    """Map a ``User`` row onto its public DTO."""
    return UserPublicOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        cover_image_url=user.cover_image_url,
        created_at=user.created_at,
    )


def _raise_conflict(exc: IntegrityError) -> None:
    if violates(exc, "uq_users_email"):
        raise ConflictError("User", "email already in use") from exc
    if violates(exc, "uq_users_username"):
        raise ConflictError("User", "username already in use") from exc
    raise exc


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    Responsibilities
    ----------------
    - Register users ensuring username and email uniqueness.
    - Retrieve and update account details safely.
    - Build public channel profiles with subscription counts.
    """

    def __init__(self, *, verifier: PasswordVerifier) -> None:
        self.verifier = verifier

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register_user(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        :raises ConflictError: If the username or email is already taken.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_username(dto.username) or repo.exists_by_email(dto.email):
                raise ConflictError("User", "username or email already in use")

            try:
                user = repo.add(
                    User(
                        username=dto.username,
                        email=dto.email,
                        password_hash=self.verifier.hash(dto.password),
                        full_name=dto.full_name,
                        avatar_url=dto.avatar_url,
                        cover_image_url=dto.cover_image_url,
                    )
                )
            except IntegrityError as exc:
                _raise_conflict(exc)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc

            return to_public(user)

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_public(user)

    # --------------------------------------------------------------------- #
    # Update account details
    # --------------------------------------------------------------------- #

    def update_account(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Update email, display name and media references.

        :raises NotFoundError: When the user does not exist.
        :raises ConflictError: When the new email belongs to someone else.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "email": dto.email,
                    "full_name": dto.full_name,
                    "avatar_url": dto.avatar_url,
                    "cover_image_url": dto.cover_image_url,
                }.items()
                if v is not None
            }

            if "email" in updates:
                existing = repo.find_one(email=updates["email"].strip().lower())
                if existing is not None and existing.id != user.id:
                    raise ConflictError("User", "email already in use")

            try:
                repo.update(user, **updates)
            except IntegrityError as exc:
                _raise_conflict(exc)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc

            return to_public(user)

    # --------------------------------------------------------------------- #
    # Channel profile
    # --------------------------------------------------------------------- #

    def channel_profile(self, username: str, viewer_id: int | None = None) -> ChannelProfileOut:
        """
        Public channel view of ``username``.

        :raises NotFoundError: If no user has that username.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("Channel", username)

            subs = uow.subscriptions
            is_subscribed = (
                viewer_id is not None and subs.get_pair(viewer_id, user.id) is not None
            )
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                full_name=user.full_name,
                avatar_url=user.avatar_url,
                cover_image_url=user.cover_image_url,
                subscribers_count=subs.count_subscribers(user.id),
                subscribed_to_count=subs.count_subscriptions(user.id),
                is_subscribed=is_subscribed,
            )
