"""Channel subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import json_response, paged_response, parse_pagination, require_auth, timing
from vidshare.schemas.subscription import SubscriptionSchema, ToggleSubscriptionSchema
from vidshare.services.subscriptions import SubscriptionService

bp = Blueprint("subscriptions", __name__)

toggle_schema = ToggleSubscriptionSchema()
subscriptions_schema = SubscriptionSchema(many=True)


@bp.post("/<int:channel_id>")
@require_auth()
@timing
def toggle(channel_id: int, current_user):
    """Subscribe to ``channel_id``, or unsubscribe when already subscribed."""
    result = SubscriptionService().toggle(current_user.id, channel_id)
    return json_response({"data": toggle_schema.dump(result)})


@bp.get("/<int:channel_id>/subscribers")
@timing
def subscribers(channel_id: int):
    items, meta = SubscriptionService().list_subscribers(channel_id, parse_pagination())
    return paged_response(subscriptions_schema.dump(items), meta)


@bp.get("/me")
@require_auth()
@timing
def my_subscriptions(current_user):
    items, meta = SubscriptionService().list_subscriptions(current_user.id, parse_pagination())
    return paged_response(subscriptions_schema.dump(items), meta)
