"""
SessionService
==============

Session lifecycle for a subject: login, refresh-with-rotation, logout and
password change.

A subject holds at most one live refresh credential, kept in the session
store. Rotation swaps it with compare-and-set so that a given refresh
credential is redeemed at most once, even under concurrent requests.
"""

from __future__ import annotations

import logging

from vidshare.repositories.user import UserRepository
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import (
    InvalidCredentialError,
    NotFoundError,
    StaleCredentialError,
    UnauthenticatedError,
)
from vidshare.services._shared.ports import (
    CredentialCodec,
    PasswordVerifier,
    SessionStore,
    TokenKind,
)
from vidshare.services.auth.dto import (
    ChangePasswordIn,
    LoginIn,
    RefreshIn,
    SessionOut,
    TokenPairOut,
)
from vidshare.services.identity.service import to_public

log = logging.getLogger(__name__)


class SessionService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout / change password).

    Credentials are minted and checked by the :class:`CredentialCodec`;
    passwords go through the :class:`PasswordVerifier`; the single accepted
    refresh credential per subject lives in the :class:`SessionStore`.
    """

    def __init__(
        self,
        *,
        codec: CredentialCodec,
        verifier: PasswordVerifier,
        store: SessionStore,
    ) -> None:
        self.codec = codec
        self.verifier = verifier
        self.store = store

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _issue_pair(self, subject_id: int) -> TokenPairOut:
        access = self.codec.issue(subject_id, TokenKind.ACCESS)
        refresh = self.codec.issue(subject_id, TokenKind.REFRESH)
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            expires_in=int(self.codec.lifetime(TokenKind.ACCESS).total_seconds()),
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Verify the password and issue a fresh credential pair.

        Any refresh credential issued earlier for the subject stops working.

        :raises NotFoundError: No user matches the username/email.
        :raises InvalidCredentialError: Password mismatch; the store is untouched.
        :raises StorageFailureError: The store write failed; no tokens are returned.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_username_or_email(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", dto.username or dto.email or "")
            if not self.verifier.verify(dto.password, user.password_hash):
                log.warning(
                    "auth.login_failed",
                    extra={"event": "auth.login_failed", "subject_id": user.id},
                )
                raise InvalidCredentialError(reason="password mismatch")
            public = to_public(user)

        tokens = self._issue_pair(public.id)
        # Persist before anything is handed to the client.
        self.store.set(public.id, tokens.refresh_token)
        log.info("auth.login", extra={"event": "auth.login", "subject_id": public.id})
        return SessionOut(user=public, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> SessionOut:
        """
        Redeem a refresh credential for a new pair, invalidating the old one.

        :raises UnauthenticatedError: No refresh credential was presented.
        :raises InvalidCredentialError: Bad signature, malformed, expired or wrong kind.
        :raises NotFoundError: The subject no longer exists.
        :raises StaleCredentialError: The credential was already rotated or revoked.
        """
        presented = dto.refresh_token
        if not presented:
            raise UnauthenticatedError(reason="missing refresh credential")

        subject_id = self.codec.verify(presented, TokenKind.REFRESH)

        with self.ro_uow() as uow:
            user = uow.users.get(subject_id)
            if user is None:
                raise NotFoundError("User", subject_id)
            public = to_public(user)

        if self.store.get(subject_id) != presented:
            log.warning(
                "auth.refresh_stale",
                extra={"event": "auth.refresh_stale", "subject_id": subject_id},
            )
            raise StaleCredentialError(reason="stored credential differs")

        tokens = self._issue_pair(subject_id)
        if not self.store.compare_and_set(subject_id, presented, tokens.refresh_token):
            # Lost a race with another rotation or a logout; discard the new pair.
            log.warning(
                "auth.refresh_race_lost",
                extra={"event": "auth.refresh_race_lost", "subject_id": subject_id},
            )
            raise StaleCredentialError(reason="concurrent rotation")

        log.info("auth.refresh", extra={"event": "auth.refresh", "subject_id": subject_id})
        return SessionOut(user=public, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, subject_id: int) -> None:
        """Revoke the subject's refresh credential. Idempotent."""
        self.store.set(subject_id, None)
        log.info("auth.logout", extra={"event": "auth.logout", "subject_id": subject_id})

    # ------------------------------------------------------------------ #
    # Password change
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password after verifying the current one.

        The stored refresh credential is left as is.

        :raises NotFoundError: The subject no longer exists.
        :raises InvalidCredentialError: ``current_password`` does not match.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)
            if not self.verifier.verify(dto.current_password, user.password_hash):
                raise InvalidCredentialError(reason="current password mismatch")
            repo.set_password_hash(user, self.verifier.hash(dto.new_password))

        log.info(
            "auth.password_changed",
            extra={"event": "auth.password_changed", "subject_id": dto.user_id},
        )
