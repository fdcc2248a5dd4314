"""
SubscriptionService
===================

Subscribe/unsubscribe to channels and list both sides of the relation.
"""

from __future__ import annotations

import logging

from sqlalchemy import select

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.dto import PageMeta, PaginationIn
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.subscriptions.dto import ChannelRefOut, SubscriptionOut, ToggleOut

log = logging.getLogger(__name__)


def _ref(user: User) -> ChannelRefOut:
    return ChannelRefOut(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
    )


class SubscriptionService(BaseService):
    """Application service for the ``Subscription`` relation."""

    def toggle(self, subscriber_id: int, channel_id: int) -> ToggleOut:
        """
        Subscribe if not subscribed yet, otherwise unsubscribe.

        :raises ServiceError: When subscribing to oneself.
        :raises NotFoundError: When the channel does not exist.
        """
        if subscriber_id == channel_id:
            raise ServiceError("You cannot subscribe to your own channel.")

        with self.rw_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)

            existing = uow.subscriptions.get_pair(subscriber_id, channel_id)
            if existing is not None:
                uow.subscriptions.delete(existing)
                subscribed = False
            else:
                uow.subscriptions.add(
                    Subscription(subscriber_id=subscriber_id, channel_id=channel_id)
                )
                subscribed = True

        log.info(
            "subscription.toggled",
            extra={"event": "subscription.toggled", "subject_id": subscriber_id},
        )
        return ToggleOut(channel_id=channel_id, subscribed=subscribed)

    def list_subscribers(
        self, channel_id: int, dto: PaginationIn
    ) -> tuple[list[SubscriptionOut], PageMeta]:
        """Users subscribed to ``channel_id``.

        :raises NotFoundError: When the channel does not exist.
        """
        pagination = self.pagination_from(dto)
        pagination.sort = ["-created_at"]
        stmt = select(Subscription).where(Subscription.channel_id == channel_id)
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            page = uow.subscriptions.paginate(pagination, stmt=stmt)
            items = [
                SubscriptionOut(user=_ref(s.subscriber), subscribed_at=s.created_at)
                for s in page.items
            ]
        return items, PageMeta.build(page=page.page, limit=page.limit, total=page.total)

    def list_subscriptions(
        self, subscriber_id: int, dto: PaginationIn
    ) -> tuple[list[SubscriptionOut], PageMeta]:
        """Channels ``subscriber_id`` subscribes to."""
        pagination = self.pagination_from(dto)
        pagination.sort = ["-created_at"]
        stmt = select(Subscription).where(Subscription.subscriber_id == subscriber_id)
        with self.ro_uow() as uow:
            page = uow.subscriptions.paginate(pagination, stmt=stmt)
            items = [
                SubscriptionOut(user=_ref(s.channel), subscribed_at=s.created_at)
                for s in page.items
            ]
        return items, PageMeta.build(page=page.page, limit=page.limit, total=page.total)
