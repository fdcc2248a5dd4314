"""
End-to-end session lifecycle over HTTP: register, login, rotate, logout.

The client keeps no cookie jar; every request names the cookie it carries.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests.helpers.api_client import (
    API,
    cookie_header,
    login,
    register,
    register_and_login,
    set_cookies,
)
from vidshare.core.config import TestingConfig
from vidshare.services._shared.ports import TokenKind

ACCESS_MAX_AGE = str(int(TestingConfig.ACCESS_TOKEN_EXPIRES.total_seconds()))
REFRESH_MAX_AGE = str(int(TestingConfig.REFRESH_TOKEN_EXPIRES.total_seconds()))


def _refresh(client, token: str):
    return client.post(f"{API}/auth/refresh", headers=cookie_header(refresh_token=token))


class TestRegister:
    def test_register_returns_public_user(self, client):
        resp = register(client, username="alice", email="alice@x.com", password="secret123")

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "User registered successfully"
        assert body["data"]["username"] == "alice"
        assert body["data"]["email"] == "alice@x.com"
        assert "password" not in body["data"]
        assert "password_hash" not in body["data"]
        assert "refresh_token" not in body["data"]
        # Registering does not start a session.
        assert resp.headers.getlist("Set-Cookie") == []

    def test_duplicate_username_conflicts(self, client):
        register(client, username="alice", email="alice@x.com")
        resp = register(client, username="Alice", email="other@x.com")

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "conflict"

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "al", "email": "al@x.com", "password": "secret123"},
            {"username": "alice", "email": "not-an-email", "password": "secret123"},
            {"username": "alice", "email": "alice@x.com", "password": "short"},
            {"email": "alice@x.com", "password": "secret123"},
        ],
    )
    def test_invalid_payload_is_unprocessable(self, client, payload):
        resp = client.post(f"{API}/auth/register", json=payload)

        assert resp.status_code == 422
        body = resp.get_json()
        assert body["code"] == "validation_error"
        assert "errors" in body["details"]


class TestLogin:
    def test_login_sets_both_cookies(self, client, codec):
        register(client, username="alice", email="alice@x.com", password="secret123")

        resp = login(client, username="alice", password="secret123")

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["user"]["username"] == "alice"
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == int(TestingConfig.ACCESS_TOKEN_EXPIRES.total_seconds())
        # Credentials travel only as cookies.
        assert "access_token" not in data
        assert "refresh_token" not in data

        jar = set_cookies(resp)
        access, refresh = jar["access_token"], jar["refresh_token"]
        for cookie in (access, refresh):
            assert cookie["httponly"] is True
            assert cookie["path"] == "/"
            assert cookie["samesite"].lower() == "lax"
            # TestingConfig turns Secure off for plain-HTTP test requests.
            assert cookie["secure"] is False
        assert access["max-age"] == ACCESS_MAX_AGE
        assert refresh["max-age"] == REFRESH_MAX_AGE
        assert codec.verify(access["value"], TokenKind.ACCESS) == data["user"]["id"]
        assert codec.verify(refresh["value"], TokenKind.REFRESH) == data["user"]["id"]

    def test_login_by_email(self, client):
        register(client, username="alice", email="alice@x.com")
        resp = login(client, email="ALICE@x.com")
        assert resp.status_code == 200

    def test_wrong_password(self, client):
        register(client, username="alice", email="alice@x.com")

        resp = login(client, username="alice", password="wrong-password")

        assert resp.status_code == 401
        body = resp.get_json()
        assert body["code"] == "invalid_credential"
        assert body["detail"] == "Invalid credentials"
        assert resp.headers.getlist("Set-Cookie") == []

    def test_unknown_user(self, client):
        resp = login(client, username="nobody")
        assert resp.status_code == 404

    def test_missing_identifier(self, client):
        resp = client.post(f"{API}/auth/login", json={"password": "secret123"})
        assert resp.status_code == 422


class TestSessionLifecycle:
    def test_full_scenario(self, client):
        """register, login, rotate, replay the old credential, logout, replay again."""
        assert register(client, username="alice", email="alice@x.com").status_code == 201

        logged_in = login(client, username="alice", password="secret123")
        assert logged_in.status_code == 200
        jar = set_cookies(logged_in)
        access, refresh_1 = jar["access_token"]["value"], jar["refresh_token"]["value"]

        me = client.get(f"{API}/auth/me", headers=cookie_header(access_token=access))
        assert me.status_code == 200
        assert me.get_json()["data"]["username"] == "alice"

        rotated = _refresh(client, refresh_1)
        assert rotated.status_code == 200
        rotated_jar = set_cookies(rotated)
        refresh_2 = rotated_jar["refresh_token"]["value"]
        assert refresh_2 != refresh_1
        assert rotated_jar["access_token"]["value"]

        replay = _refresh(client, refresh_1)
        assert replay.status_code == 401
        assert replay.get_json()["code"] == "stale_credential"

        logout = client.post(
            f"{API}/auth/logout",
            headers=cookie_header(access_token=rotated_jar["access_token"]["value"]),
        )
        assert logout.status_code == 200
        assert logout.get_json()["message"] == "User logged out"
        cleared = set_cookies(logout)
        assert cleared["access_token"]["value"] == ""
        assert cleared["refresh_token"]["value"] == ""
        assert cleared["refresh_token"]["max-age"] == "0"

        after_logout = _refresh(client, refresh_2)
        assert after_logout.status_code == 401
        assert after_logout.get_json()["code"] == "stale_credential"

    def test_refresh_from_json_body(self, client):
        tokens = register_and_login(client, "bodyclient")

        resp = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh"]})

        assert resp.status_code == 200
        assert set_cookies(resp)["refresh_token"]["value"] != tokens["refresh"]

    def test_refresh_without_credential(self, client):
        resp = client.post(f"{API}/auth/refresh", json={})

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "unauthenticated"

    def test_refresh_with_access_credential(self, client):
        tokens = register_and_login(client, "mixup")

        resp = _refresh(client, tokens["access"])

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "invalid_credential"

    def test_second_login_invalidates_first_refresh(self, client):
        first = register_and_login(client, "twodevices")
        second = login(client, username="twodevices")
        second_refresh = set_cookies(second)["refresh_token"]["value"]

        assert _refresh(client, first["refresh"]).status_code == 401
        assert _refresh(client, second_refresh).status_code == 200

    def test_expired_refresh_credential(self, client, codec):
        tokens = register_and_login(client, "sleepy")
        expired = codec.issue(tokens["id"], TokenKind.REFRESH, ttl=timedelta(seconds=-1))

        resp = _refresh(client, expired)

        assert resp.status_code == 401
        assert resp.get_json()["code"] == "invalid_credential"


class TestProtectedRoutes:
    def test_me_requires_credential(self, client):
        resp = client.get(f"{API}/auth/me")

        assert resp.status_code == 401
        assert resp.mimetype == "application/problem+json"

    def test_bearer_header_fallback(self, client):
        tokens = register_and_login(client, "bearer")

        resp = client.get(
            f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['access']}"}
        )

        assert resp.status_code == 200

    def test_refresh_credential_cannot_authenticate(self, client):
        tokens = register_and_login(client, "wrongkind")

        resp = client.get(f"{API}/auth/me", headers=cookie_header(access_token=tokens["refresh"]))

        assert resp.status_code == 401

    def test_logout_requires_credential(self, client):
        assert client.post(f"{API}/auth/logout").status_code == 401

    def test_change_password(self, client):
        tokens = register_and_login(client, "changer")

        resp = client.post(
            f"{API}/auth/change-password",
            json={"current_password": "secret123", "new_password": "brand-new-pass"},
            headers=cookie_header(access_token=tokens["access"]),
        )

        assert resp.status_code == 200
        assert login(client, username="changer", password="secret123").status_code == 401
        assert login(client, username="changer", password="brand-new-pass").status_code == 200

    def test_change_password_wrong_current(self, client):
        tokens = register_and_login(client, "forgetful")

        resp = client.post(
            f"{API}/auth/change-password",
            json={"current_password": "not-it", "new_password": "brand-new-pass"},
            headers=cookie_header(access_token=tokens["access"]),
        )

        assert resp.status_code == 401
