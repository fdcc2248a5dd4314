"""Authentication wiring: settings value and adapter construction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from flask import Flask, current_app

from vidshare.core.config import DEFAULT_ACCESS_SECRET, DEFAULT_REFRESH_SECRET
from vidshare.core.extensions import get_redis
from vidshare.infra.jwt import JWTCredentialCodec
from vidshare.infra.redis import RedisSessionStore
from vidshare.infra.security import WerkzeugPasswordVerifier
from vidshare.infra.sqlalchemy import SQLAlchemySessionStore
from vidshare.services._shared.ports import CredentialCodec, PasswordVerifier, SessionStore

log = logging.getLogger(__name__)

EXTENSION_KEY = "vidshare.auth"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """
    Immutable authentication settings handed to the auth components.

    Built once from Flask config at startup; nothing reads the environment
    afterwards.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta
    algorithm: str = "HS256"
    issuer: str = "vidshare"
    password_hash_method: str = "scrypt"
    cookie_secure: bool = True
    cookie_samesite: str = "Lax"
    access_cookie_name: str = "access_token"
    refresh_cookie_name: str = "refresh_token"
    session_store_backend: str = "sql"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Access and refresh secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh secrets must differ.")
        if self.access_ttl <= timedelta(0) or self.refresh_ttl <= timedelta(0):
            raise ValueError("Credential lifetimes must be positive.")
        if self.session_store_backend not in {"sql", "redis"}:
            raise ValueError(f"Unknown SESSION_STORE_BACKEND {self.session_store_backend!r}.")

    @property
    def uses_placeholder_secrets(self) -> bool:
        return (
            self.access_secret == DEFAULT_ACCESS_SECRET
            or self.refresh_secret == DEFAULT_REFRESH_SECRET
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> AuthSettings:
        """Build settings from a Flask ``app.config`` mapping."""
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            access_ttl=config["ACCESS_TOKEN_EXPIRES"],
            refresh_ttl=config["REFRESH_TOKEN_EXPIRES"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            issuer=config.get("JWT_ISSUER", "vidshare"),
            password_hash_method=config.get("PASSWORD_HASH_METHOD", "scrypt"),
            cookie_secure=bool(config.get("COOKIE_SECURE", True)),
            cookie_samesite=config.get("COOKIE_SAMESITE", "Lax"),
            access_cookie_name=config.get("ACCESS_COOKIE_NAME", "access_token"),
            refresh_cookie_name=config.get("REFRESH_COOKIE_NAME", "refresh_token"),
            session_store_backend=str(config.get("SESSION_STORE_BACKEND", "sql")).lower(),
        )


@dataclass(frozen=True, slots=True)
class AuthComponents:
    """The concrete adapters shared by every request."""

    settings: AuthSettings
    codec: CredentialCodec
    verifier: PasswordVerifier
    store: SessionStore


def build_components(settings: AuthSettings) -> AuthComponents:
    """Construct the codec, verifier and session store for ``settings``."""
    codec = JWTCredentialCodec(
        access_secret=settings.access_secret,
        refresh_secret=settings.refresh_secret,
        access_ttl=settings.access_ttl,
        refresh_ttl=settings.refresh_ttl,
        algorithm=settings.algorithm,
        issuer=settings.issuer,
    )
    verifier = WerkzeugPasswordVerifier(method=settings.password_hash_method)
    store: SessionStore
    if settings.session_store_backend == "redis":
        store = RedisSessionStore(r=get_redis(), ttl=settings.refresh_ttl)
    else:
        store = SQLAlchemySessionStore()
    return AuthComponents(settings=settings, codec=codec, verifier=verifier, store=store)


def init_app(app: Flask) -> None:
    """
    Validate auth settings and register the shared components on ``app``.

    :raises ValueError: If the settings are inconsistent (e.g. equal secrets).
    :raises RuntimeError: If placeholder secrets are used outside debug/testing.
    """
    settings = AuthSettings.from_config(app.config)
    if settings.uses_placeholder_secrets:
        if not (app.debug or app.testing):
            raise RuntimeError(
                "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set in production."
            )
        log.warning("Using placeholder credential secrets; do not deploy this configuration.")
    app.extensions[EXTENSION_KEY] = build_components(settings)


def get_components(app: Flask | None = None) -> AuthComponents:
    """Return the components registered by :func:`init_app`."""
    target = app or current_app
    return target.extensions[EXTENSION_KEY]
