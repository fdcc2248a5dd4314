"""Credential cookies: one place that knows their names and attributes."""

from __future__ import annotations

from flask import Response

from vidshare.core.auth import AuthSettings
from vidshare.services.auth.dto import TokenPairOut


def set_session_cookies(response: Response, tokens: TokenPairOut, settings: AuthSettings) -> None:
    """Attach both credentials as HttpOnly cookies living as long as the tokens."""
    common = {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
        "path": "/",
    }
    response.set_cookie(
        settings.access_cookie_name,
        tokens.access_token,
        max_age=int(settings.access_ttl.total_seconds()),
        **common,
    )
    response.set_cookie(
        settings.refresh_cookie_name,
        tokens.refresh_token,
        max_age=int(settings.refresh_ttl.total_seconds()),
        **common,
    )


def clear_session_cookies(response: Response, settings: AuthSettings) -> None:
    """Expire both credential cookies with the attributes they were set with."""
    for name in (settings.access_cookie_name, settings.refresh_cookie_name):
        response.delete_cookie(
            name,
            path="/",
            secure=settings.cookie_secure,
            httponly=True,
            samesite=settings.cookie_samesite,
        )
