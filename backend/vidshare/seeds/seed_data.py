"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.services._shared.ports import PasswordVerifier

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, str | None]] = [
    {
        "email": "alex.martinez@example.com",
        "username": "alexm",
        "full_name": "Alex Martinez",
        "password": "devPass123!",
    },
    {
        "email": "jamie.lee@example.com",
        "username": "jamielee",
        "full_name": "Jamie Lee",
        "password": "strongPass123",
    },
    {
        "email": "sara.kim@example.com",
        "username": "sarak",
        "full_name": "Sara Kim",
        "password": "watchMore2024",
    },
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "alexm",
        "title": "Sourdough in 10 minutes",
        "description": "A quick walkthrough of a weekday sourdough loaf.",
        "video_url": "https://cdn.example.com/videos/sourdough.mp4",
        "thumbnail_url": "https://cdn.example.com/thumbs/sourdough.jpg",
        "duration": 612,
    },
    {
        "owner": "alexm",
        "title": "Knife skills basics",
        "description": "Dicing, mincing and a safe grip.",
        "video_url": "https://cdn.example.com/videos/knife-skills.mp4",
        "thumbnail_url": "https://cdn.example.com/thumbs/knife-skills.jpg",
        "duration": 455,
    },
    {
        "owner": "jamielee",
        "title": "Trail running: first 5k",
        "description": "Pacing and gear for a first trail race.",
        "video_url": "https://cdn.example.com/videos/trail-5k.mp4",
        "thumbnail_url": "https://cdn.example.com/thumbs/trail-5k.jpg",
        "duration": 890,
    },
]

# (subscriber, channel)
SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("jamielee", "alexm"),
    ("sarak", "alexm"),
    ("alexm", "jamielee"),
]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def seed_users(
    database: SQLAlchemy, verifier: PasswordVerifier, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create development accounts; existing ones keep their password."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in USER_FIXTURES:
            email = str(fixture["email"]).strip().lower()
            user = session.execute(select(User).filter_by(email=email)).scalar_one_or_none()
            created = user is None
            if user is None:
                user = User(
                    email=email,
                    username=str(fixture["username"]),
                    full_name=fixture.get("full_name"),
                    password_hash=verifier.hash(str(fixture["password"])),
                )
                session.add(user)
            else:
                user.full_name = fixture.get("full_name")
            _touch(summary, "users", created)
    return summary


def seed_videos_and_subscriptions(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create sample videos and subscriptions between the seeded users."""
    if verbose:
        LOGGER.info("Seeding videos and subscriptions...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        users = {u.username: u for u in session.execute(select(User)).scalars()}

        for fixture in VIDEO_FIXTURES:
            owner = users.get(fixture["owner"])
            if owner is None:
                raise RuntimeError(f"Seed owner {fixture['owner']!r} is missing")
            video = session.execute(
                select(Video).filter_by(owner_id=owner.id, title=fixture["title"])
            ).scalar_one_or_none()
            created = video is None
            if video is None:
                params = {k: v for k, v in fixture.items() if k != "owner"}
                session.add(Video(owner_id=owner.id, **params))
            _touch(summary, "videos", created)

        for subscriber_name, channel_name in SUBSCRIPTION_FIXTURES:
            subscriber, channel = users[subscriber_name], users[channel_name]
            existing = session.execute(
                select(Subscription).filter_by(subscriber_id=subscriber.id, channel_id=channel.id)
            ).scalar_one_or_none()
            if existing is None:
                session.add(Subscription(subscriber_id=subscriber.id, channel_id=channel.id))
            _touch(summary, "subscriptions", existing is None)
    return summary


def run_all(
    database: SQLAlchemy, verifier: PasswordVerifier, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    results = (
        seed_users(database, verifier, verbose=verbose),
        seed_videos_and_subscriptions(database, verbose=verbose),
    )
    for result in results:
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["run_all", "seed_users", "seed_videos_and_subscriptions"]
