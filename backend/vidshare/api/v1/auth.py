"""Authentication endpoints: register, session lifecycle, current user."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.cookies import clear_session_cookies, set_session_cookies
from vidshare.api.deps import (
    get_identity_service,
    get_session_service,
    json_response,
    require_auth,
    timing,
)
from vidshare.core.auth import get_components
from vidshare.schemas.auth import (
    ChangePasswordSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    SessionResponseSchema,
)
from vidshare.schemas.user import UserPublicSchema
from vidshare.services.auth import ChangePasswordIn, LoginIn, RefreshIn, SessionOut
from vidshare.services.identity import UserRegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
change_password_schema = ChangePasswordSchema()
session_schema = SessionResponseSchema()
user_schema = UserPublicSchema()


def _session_response(session: SessionOut):
    body = session_schema.dump(
        {
            "user": session.user,
            "token_type": session.tokens.token_type,
            "expires_in": session.tokens.expires_in,
        }
    )
    response = json_response({"data": body})
    set_session_cookies(response, session.tokens, get_components().settings)
    return response


@bp.post("/register")
@timing
def register():
    """Create an account. No session is started."""
    payload = register_schema.load(request.get_json(silent=True) or {})
    user = get_identity_service().register_user(UserRegisterIn(**payload))
    return json_response(
        {"data": user_schema.dump(user), "message": "User registered successfully"},
        status=201,
    )


@bp.post("/login")
@timing
def login():
    """Verify credentials and set both credential cookies."""
    payload = login_schema.load(request.get_json(silent=True) or {})
    session = get_session_service().login(LoginIn(**payload))
    return _session_response(session)


@bp.post("/refresh")
@timing
def refresh():
    """Rotate the refresh credential (cookie first, JSON body as fallback)."""
    settings = get_components().settings
    token = request.cookies.get(settings.refresh_cookie_name)
    if not token:
        body = refresh_schema.load(request.get_json(silent=True) or {})
        token = body["refresh_token"]
    session = get_session_service().refresh(RefreshIn(refresh_token=token))
    return _session_response(session)


@bp.post("/logout")
@require_auth()
@timing
def logout(current_user):
    """Revoke the stored refresh credential and clear both cookies."""
    get_session_service().logout(current_user.id)
    response = json_response({"data": {}, "message": "User logged out"})
    clear_session_cookies(response, get_components().settings)
    return response


@bp.post("/change-password")
@require_auth()
@timing
def change_password(current_user):
    payload = change_password_schema.load(request.get_json(silent=True) or {})
    get_session_service().change_password(
        ChangePasswordIn(
            user_id=current_user.id,
            current_password=payload["current_password"],
            new_password=payload["new_password"],
        )
    )
    return json_response({"data": {}, "message": "Password changed successfully"})


@bp.get("/me")
@require_auth()
@timing
def me(current_user):
    """Return the authenticated user profile."""
    return json_response({"data": user_schema.dump(current_user)})
