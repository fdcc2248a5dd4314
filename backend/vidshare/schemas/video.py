"""Video resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from vidshare.schemas.common import PaginationQuerySchema


class VideoCreateSchema(Schema):
    """Metadata for a video whose media already lives at ``video_url``."""

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(required=True, validate=validate.Length(min=1))
    video_url = fields.Url(required=True, validate=validate.Length(max=500))
    thumbnail_url = fields.Url(required=True, validate=validate.Length(max=500))
    duration = fields.Integer(load_default=0, validate=validate.Range(min=0))
    is_published = fields.Boolean(load_default=True)


class VideoUpdateSchema(Schema):
    title = fields.String(validate=validate.Length(min=1, max=200))
    description = fields.String(validate=validate.Length(min=1))
    thumbnail_url = fields.Url(validate=validate.Length(max=500))
    is_published = fields.Boolean()


class VideoListQuerySchema(PaginationQuerySchema):
    """Listing filters on top of pagination."""

    class Meta:
        unknown = EXCLUDE

    owner_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class VideoOwnerSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    full_name = fields.String(allow_none=True)
    avatar_url = fields.String(allow_none=True)


class VideoSchema(Schema):
    """Public representation of a video."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    video_url = fields.String(required=True)
    thumbnail_url = fields.String(required=True)
    duration = fields.Integer(required=True)
    views = fields.Integer(required=True)
    is_published = fields.Boolean(required=True)
    owner = fields.Nested(VideoOwnerSchema, required=True)
    created_at = fields.DateTime(allow_none=True)


class WatchHistoryItemSchema(Schema):
    video = fields.Nested(VideoSchema, required=True)
    watched_at = fields.DateTime(required=True)
