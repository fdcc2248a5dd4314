"""Factory Boy definition for :class:`vidshare.models.subscription.Subscription`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from vidshare.models.subscription import Subscription


class SubscriptionFactory(BaseFactory):
    """``subscriber`` follows ``channel``; each defaults to a fresh user."""

    class Meta:
        model = Subscription

    id = None
    subscriber = factory.SubFactory(UserFactory)
    channel = factory.SubFactory(UserFactory)
