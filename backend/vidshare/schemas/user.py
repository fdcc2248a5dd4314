"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class UserPublicSchema(Schema):
    """Public representation of a user. Never includes secrets."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(allow_none=True)
    avatar_url = fields.String(allow_none=True)
    cover_image_url = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)


class UserUpdateSchema(Schema):
    """Account-detail update; every field is optional."""

    email = fields.Email(validate=validate.Length(max=254))
    full_name = fields.String(validate=validate.Length(min=1, max=100))
    avatar_url = fields.Url(validate=validate.Length(max=500))
    cover_image_url = fields.Url(validate=validate.Length(max=500))


class ChannelProfileSchema(Schema):
    """Public channel page with subscription counters."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(allow_none=True)
    avatar_url = fields.String(allow_none=True)
    cover_image_url = fields.String(allow_none=True)
    subscribers_count = fields.Integer(required=True)
    subscribed_to_count = fields.Integer(required=True)
    is_subscribed = fields.Boolean(required=True)
