"""Video endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import json_response, paged_response, require_auth, timing
from vidshare.schemas.video import (
    VideoCreateSchema,
    VideoListQuerySchema,
    VideoSchema,
    VideoUpdateSchema,
)
from vidshare.services._shared.dto import PaginationIn
from vidshare.services.videos import VideoCreateIn, VideoListIn, VideoService, VideoUpdateIn

bp = Blueprint("videos", __name__)

create_schema = VideoCreateSchema()
update_schema = VideoUpdateSchema()
list_query_schema = VideoListQuerySchema()
video_schema = VideoSchema()
videos_schema = VideoSchema(many=True)


@bp.post("")
@require_auth()
@timing
def publish(current_user):
    """Publish metadata for an already-hosted video."""
    payload = create_schema.load(request.get_json(silent=True) or {})
    video = VideoService().publish(current_user.id, VideoCreateIn(**payload))
    return json_response({"data": video_schema.dump(video)}, status=201)


@bp.get("")
@timing
def list_videos():
    """List published videos with optional ``owner_id`` filter."""
    q = list_query_schema.load(request.args)
    items, meta = VideoService().list_videos(
        VideoListIn(
            owner_id=q["owner_id"],
            pagination=PaginationIn(page=q["page"], limit=q["limit"], sort=q["sort"]),
        )
    )
    return paged_response(videos_schema.dump(items), meta)


@bp.get("/<int:video_id>")
@require_auth(optional=True)
@timing
def get_video(video_id: int, current_user):
    viewer_id = current_user.id if current_user is not None else None
    video = VideoService().get_video(video_id, viewer_id)
    return json_response({"data": video_schema.dump(video)})


@bp.patch("/<int:video_id>")
@require_auth()
@timing
def update_video(video_id: int, current_user):
    payload = update_schema.load(request.get_json(silent=True) or {})
    video = VideoService().update_video(current_user.id, video_id, VideoUpdateIn(**payload))
    return json_response({"data": video_schema.dump(video)})


@bp.delete("/<int:video_id>")
@require_auth()
@timing
def delete_video(video_id: int, current_user):
    VideoService().delete_video(current_user.id, video_id)
    return "", 204
