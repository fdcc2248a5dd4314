"""
Unit tests for SessionService: login, rotation, logout and password change.

The service runs against the real JWT codec and an in-memory session store;
users live in the transactional test database.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from tests.factories.user import UserFactory
from vidshare.infra.jwt import JWTCredentialCodec
from vidshare.infra.security import WerkzeugPasswordVerifier
from vidshare.models import User
from vidshare.services._shared.errors import (
    ErrorKind,
    InvalidCredentialError,
    NotFoundError,
    StaleCredentialError,
    StorageFailureError,
    UnauthenticatedError,
)
from vidshare.services._shared.ports import InMemorySessionStore, TokenKind
from vidshare.services.auth import ChangePasswordIn, LoginIn, RefreshIn, SessionService


@pytest.fixture()
def codec() -> JWTCredentialCodec:
    return JWTCredentialCodec(
        access_secret="svc-access-secret-0123456789abcdef",
        refresh_secret="svc-refresh-secret-0123456789abcdef",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=10),
    )


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def service(codec, verifier, store) -> SessionService:
    return SessionService(codec=codec, verifier=verifier, store=store)


@pytest.fixture()
def alice(session) -> int:
    """Persisted user ``alice`` (password ``secret123``); returns her id."""
    user = UserFactory(username="alice", email="alice@x.com", password="secret123")
    session.commit()
    return user.id


class TestLogin:
    def test_issues_pair_and_stores_refresh(self, service, codec, store, alice):
        result = service.login(LoginIn(username="alice", password="secret123"))

        assert result.user.id == alice
        assert result.user.username == "alice"
        assert result.tokens.token_type == "bearer"
        assert result.tokens.expires_in == 15 * 60
        assert codec.verify(result.tokens.access_token, TokenKind.ACCESS) == alice
        assert codec.verify(result.tokens.refresh_token, TokenKind.REFRESH) == alice
        assert store.get(alice) == result.tokens.refresh_token

    def test_accepts_email_case_insensitively(self, service, alice):
        result = service.login(LoginIn(email="ALICE@x.com", password="secret123"))
        assert result.user.id == alice

    def test_unknown_user_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.login(LoginIn(username="nobody", password="secret123"))

    def test_wrong_password_leaves_store_untouched(self, service, store, alice):
        store.set(alice, "previous-refresh")

        with pytest.raises(InvalidCredentialError) as exc_info:
            service.login(LoginIn(username="alice", password="wrong-pass"))

        assert exc_info.value.kind is ErrorKind.INVALID_CREDENTIAL
        assert store.get(alice) == "previous-refresh"

    def test_second_login_supersedes_first(self, service, alice):
        first = service.login(LoginIn(username="alice", password="secret123"))
        second = service.login(LoginIn(username="alice", password="secret123"))

        with pytest.raises(StaleCredentialError):
            service.refresh(RefreshIn(refresh_token=first.tokens.refresh_token))

        rotated = service.refresh(RefreshIn(refresh_token=second.tokens.refresh_token))
        assert rotated.user.id == alice

    def test_store_failure_returns_no_tokens(self, codec, verifier, alice):
        class DownStore(InMemorySessionStore):
            def set(self, subject_id, token):
                raise StorageFailureError()

        service = SessionService(codec=codec, verifier=verifier, store=DownStore())

        with pytest.raises(StorageFailureError):
            service.login(LoginIn(username="alice", password="secret123"))

    def test_logs_login_event(self, service, alice, caplog):
        with caplog.at_level(logging.INFO, logger="vidshare.services.auth.service"):
            service.login(LoginIn(username="alice", password="secret123"))

        events = [getattr(r, "event", None) for r in caplog.records]
        assert "auth.login" in events
        record = next(r for r in caplog.records if getattr(r, "event", None) == "auth.login")
        assert record.subject_id == alice


class TestRefresh:
    def test_rotation_is_strict(self, service, store, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))
        old = login.tokens.refresh_token

        rotated = service.refresh(RefreshIn(refresh_token=old))

        assert rotated.tokens.refresh_token != old
        assert store.get(alice) == rotated.tokens.refresh_token
        with pytest.raises(StaleCredentialError):
            service.refresh(RefreshIn(refresh_token=old))
        # The failed attempt does not disturb the live credential.
        assert store.get(alice) == rotated.tokens.refresh_token

    def test_chain_of_rotations(self, service, alice):
        token = service.login(LoginIn(username="alice", password="secret123")).tokens.refresh_token
        for _ in range(3):
            token = service.refresh(RefreshIn(refresh_token=token)).tokens.refresh_token
        assert service.refresh(RefreshIn(refresh_token=token)).user.id == alice

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_credential(self, service, token):
        with pytest.raises(UnauthenticatedError):
            service.refresh(RefreshIn(refresh_token=token))

    def test_access_credential_is_not_a_refresh_credential(self, service, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))
        with pytest.raises(InvalidCredentialError):
            service.refresh(RefreshIn(refresh_token=login.tokens.access_token))

    def test_expired_refresh_credential(self, service, codec, store, alice):
        expired = codec.issue(alice, TokenKind.REFRESH, ttl=timedelta(seconds=-1))
        store.set(alice, expired)

        with pytest.raises(InvalidCredentialError):
            service.refresh(RefreshIn(refresh_token=expired))

    def test_deleted_subject_is_not_found(self, service, session, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))
        session.delete(session.get(User, alice))
        session.commit()

        with pytest.raises(NotFoundError):
            service.refresh(RefreshIn(refresh_token=login.tokens.refresh_token))

    def test_lost_race_is_stale(self, codec, verifier, alice):
        """Another rotation lands between the read and the swap."""

        class RacingStore(InMemorySessionStore):
            def compare_and_set(self, subject_id, expected, new):
                super().set(subject_id, "winner-token")
                return super().compare_and_set(subject_id, expected, new)

        store = RacingStore()
        service = SessionService(codec=codec, verifier=verifier, store=store)
        login = service.login(LoginIn(username="alice", password="secret123"))

        with pytest.raises(StaleCredentialError):
            service.refresh(RefreshIn(refresh_token=login.tokens.refresh_token))
        assert store.get(alice) == "winner-token"


class TestLogout:
    def test_logout_revokes_refresh(self, service, store, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))

        service.logout(alice)

        assert store.get(alice) is None
        with pytest.raises(StaleCredentialError):
            service.refresh(RefreshIn(refresh_token=login.tokens.refresh_token))

    def test_logout_is_idempotent(self, service, store, alice):
        service.logout(alice)
        service.logout(alice)
        assert store.get(alice) is None

    def test_access_credential_survives_logout(self, service, codec, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))
        service.logout(alice)
        assert codec.verify(login.tokens.access_token, TokenKind.ACCESS) == alice


class TestChangePassword:
    def test_new_password_takes_effect(self, service, alice):
        service.change_password(
            ChangePasswordIn(user_id=alice, current_password="secret123", new_password="n3w-secret")
        )

        with pytest.raises(InvalidCredentialError):
            service.login(LoginIn(username="alice", password="secret123"))
        assert service.login(LoginIn(username="alice", password="n3w-secret")).user.id == alice

    def test_wrong_current_password(self, service, alice):
        with pytest.raises(InvalidCredentialError):
            service.change_password(
                ChangePasswordIn(user_id=alice, current_password="nope", new_password="n3w-secret")
            )

    def test_refresh_credential_kept(self, service, store, alice):
        login = service.login(LoginIn(username="alice", password="secret123"))

        service.change_password(
            ChangePasswordIn(user_id=alice, current_password="secret123", new_password="n3w-secret")
        )

        assert store.get(alice) == login.tokens.refresh_token

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.change_password(
                ChangePasswordIn(user_id=424242, current_password="x", new_password="n3w-secret")
            )
