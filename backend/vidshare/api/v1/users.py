"""User account endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import (
    get_identity_service,
    json_response,
    paged_response,
    parse_pagination,
    require_auth,
    timing,
)
from vidshare.schemas.user import ChannelProfileSchema, UserPublicSchema, UserUpdateSchema
from vidshare.schemas.video import WatchHistoryItemSchema
from vidshare.services.identity import UserUpdateIn
from vidshare.services.videos import VideoService

bp = Blueprint("users", __name__)

update_schema = UserUpdateSchema()
user_schema = UserPublicSchema()
channel_schema = ChannelProfileSchema()
history_schema = WatchHistoryItemSchema(many=True)


@bp.patch("/me")
@require_auth()
@timing
def update_me(current_user):
    """Update email, display name and media references."""
    payload = update_schema.load(request.get_json(silent=True) or {})
    user = get_identity_service().update_account(current_user.id, UserUpdateIn(**payload))
    return json_response({"data": user_schema.dump(user)})


@bp.get("/me/history")
@require_auth()
@timing
def watch_history(current_user):
    items, meta = VideoService().watch_history(current_user.id, parse_pagination())
    return paged_response(history_schema.dump(items), meta)


@bp.get("/c/<string:username>")
@require_auth(optional=True)
@timing
def channel_profile(username: str, current_user):
    viewer_id = current_user.id if current_user is not None else None
    profile = get_identity_service().channel_profile(username, viewer_id)
    return json_response({"data": channel_schema.dump(profile)})
