"""Subscription resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ChannelRefSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    full_name = fields.String(allow_none=True)
    avatar_url = fields.String(allow_none=True)


class SubscriptionSchema(Schema):
    user = fields.Nested(ChannelRefSchema, required=True)
    subscribed_at = fields.DateTime(allow_none=True)


class ToggleSubscriptionSchema(Schema):
    channel_id = fields.Integer(required=True)
    subscribed = fields.Boolean(required=True)
