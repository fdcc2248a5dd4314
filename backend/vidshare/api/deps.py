"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from vidshare.core.auth import get_components
from vidshare.schemas.common import MetaSchema, PaginationQuerySchema
from vidshare.services._shared.dto import PageMeta, PaginationIn
from vidshare.services.auth import RequestAuthenticator, SessionService
from vidshare.services.identity import IdentityService

F = TypeVar("F", bound=Callable[..., Any])

_meta_schema = MetaSchema()


# --------------------------------------------------------------------------- #
# Service factories
# --------------------------------------------------------------------------- #


def get_session_service() -> SessionService:
    c = get_components()
    return SessionService(codec=c.codec, verifier=c.verifier, store=c.store)


def get_authenticator() -> RequestAuthenticator:
    return RequestAuthenticator(codec=get_components().codec)


def get_identity_service() -> IdentityService:
    return IdentityService(verifier=get_components().verifier)


# --------------------------------------------------------------------------- #
# Request parsing
# --------------------------------------------------------------------------- #


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> PaginationIn:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""
    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return PaginationIn(page=data["page"], limit=data["limit"], sort=data["sort"])


def bearer_token() -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def access_token_from_request() -> str | None:
    """Access credential from its cookie, falling back to the bearer header."""
    name = get_components().settings.access_cookie_name
    return request.cookies.get(name) or bearer_token()


def require_auth(optional: bool = False) -> Callable[[F], F]:
    """Resolve the caller and pass it to the view as ``current_user``.

    With ``optional=True`` a request without any credential gets
    ``current_user=None``; a credential that is present but invalid is
    still rejected.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            token = access_token_from_request()
            if token is None and optional:
                kwargs["current_user"] = None
                return func(*args, **kwargs)
            kwargs["current_user"] = get_authenticator().authenticate(token)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def paged_response(items: list[dict[str, Any]], meta: PageMeta) -> Response:
    return json_response({"data": items, "meta": _meta_schema.dump(meta)})


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
