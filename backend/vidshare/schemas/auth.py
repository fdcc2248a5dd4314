"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from vidshare.schemas.user import UserPublicSchema


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = fields.String(
        required=True,
        validate=[
            validate.Length(min=3, max=50),
            validate.Regexp(r"^[A-Za-z0-9_.-]+$", error="Only letters, digits, '.', '_' and '-'."),
        ],
    )
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    full_name = fields.String(load_default=None, validate=validate.Length(max=100))
    avatar_url = fields.Url(load_default=None, validate=validate.Length(max=500))
    cover_image_url = fields.Url(load_default=None, validate=validate.Length(max=500))


class LoginSchema(Schema):
    """Input payload for authenticating a user by username or email."""

    username = fields.String(load_default=None, validate=validate.Length(min=1, max=50))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))

    @validates_schema
    def require_identifier(self, data: dict[str, Any], **_: Any) -> None:
        if not data.get("username") and not data.get("email"):
            raise ValidationError("Username or email is required.", field_name="username")


class RefreshSchema(Schema):
    """Optional body fallback for clients that cannot send cookies."""

    refresh_token = fields.String(load_default=None)


class ChangePasswordSchema(Schema):
    """Input payload for a password change."""

    current_password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    new_password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class SessionResponseSchema(Schema):
    """Login/refresh response body. Credentials travel only as cookies."""

    user = fields.Nested(UserPublicSchema, required=True)
    token_type = fields.String(required=True)
    expires_in = fields.Integer(required=True)
