"""DTOs for SubscriptionService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChannelRefOut:
    """Compact user reference used on both sides of a subscription."""

    id: int
    username: str
    full_name: str | None
    avatar_url: str | None


@dataclass(frozen=True, slots=True)
class SubscriptionOut:
    user: ChannelRefOut
    subscribed_at: datetime | None


@dataclass(frozen=True, slots=True)
class ToggleOut:
    channel_id: int
    subscribed: bool
