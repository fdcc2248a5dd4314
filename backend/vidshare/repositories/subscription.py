"""Subscription repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from vidshare.models.subscription import Subscription
from vidshare.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence-only repository for :class:`Subscription`."""

    model = Subscription

    def _sortable_fields(self):
        return {"created_at": Subscription.created_at}

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    def get_pair(self, subscriber_id: int, channel_id: int) -> Subscription | None:
        stmt = select(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return cast(Subscription | None, self.session.execute(stmt).scalars().first())

    def count_subscribers(self, channel_id: int) -> int:
        stmt = select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_subscriptions(self, subscriber_id: int) -> int:
        stmt = select(func.count(Subscription.id)).where(
            Subscription.subscriber_id == subscriber_id
        )
        return int(self.session.execute(stmt).scalar_one())
