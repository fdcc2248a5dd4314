"""PyJWT adapter for the credential codec port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from vidshare.services._shared.errors import CredentialIssueError, InvalidCredentialError
from vidshare.services._shared.ports import CredentialCodec, TokenKind

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class JWTCredentialCodec(CredentialCodec):
    """
    HS-signed JWT credentials with one secret per kind.

    Claims: ``sub`` (subject id as string), ``iat``, ``exp``, ``type``,
    ``jti`` and ``iss``. A token is only ever checked against the secret of
    the kind the caller expects, and its ``type`` claim must agree.

    :param clock: Injectable "now" used for ``iat``/``exp``.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta
    refresh_ttl: timedelta
    algorithm: str = "HS256"
    issuer: str = "vidshare"
    clock: Callable[[], datetime] = field(default=_utcnow)

    def _secret(self, kind: TokenKind) -> str:
        return self.access_secret if kind is TokenKind.ACCESS else self.refresh_secret

    def lifetime(self, kind: TokenKind) -> timedelta:
        return self.access_ttl if kind is TokenKind.ACCESS else self.refresh_ttl

    def issue(self, subject_id: int, kind: TokenKind, ttl: timedelta | None = None) -> str:
        now = self.clock()
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + (ttl if ttl is not None else self.lifetime(kind))).timestamp()),
            "type": kind.value,
            "jti": uuid4().hex,
            "iss": self.issuer,
        }
        try:
            return jwt.encode(payload, self._secret(kind), algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            log.error("Credential signing failed", extra={"reason": type(exc).__name__})
            raise CredentialIssueError() from exc

    def verify(self, token: str, kind: TokenKind) -> int:
        if not token or not isinstance(token, str):
            raise InvalidCredentialError(reason="empty token")
        try:
            claims = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub", "type"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidCredentialError(reason="expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidCredentialError(reason=type(exc).__name__) from exc

        if claims.get("type") != kind.value:
            raise InvalidCredentialError(reason="wrong token type")
        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidCredentialError(reason="malformed subject") from exc
