"""
Contract tests shared by every SessionStore adapter.

The same cases run against the in-memory store, the SQL column store and
the Redis store (fakeredis); adapter-specific behaviour is tested below.
"""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
import redis

from tests.factories.user import UserFactory
from vidshare.infra.redis import RedisSessionStore
from vidshare.infra.sqlalchemy import SQLAlchemySessionStore
from vidshare.models import User
from vidshare.services._shared.errors import StorageFailureError
from vidshare.services._shared.ports import InMemorySessionStore


@pytest.fixture()
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture(params=["memory", "sql", "redis"])
def store_and_subject(request, session, fake_redis):
    """Yield ``(store, subject_id)`` for each adapter."""
    if request.param == "memory":
        return InMemorySessionStore(), 1
    if request.param == "redis":
        return RedisSessionStore(r=fake_redis, ttl=timedelta(days=10)), 1

    user = UserFactory()
    session.commit()
    return SQLAlchemySessionStore(), user.id


class TestSessionStoreContract:
    def test_get_absent_is_none(self, store_and_subject):
        store, sid = store_and_subject
        assert store.get(sid) is None

    def test_set_overwrites(self, store_and_subject):
        store, sid = store_and_subject
        store.set(sid, "t1")
        store.set(sid, "t2")
        assert store.get(sid) == "t2"

    def test_set_none_revokes(self, store_and_subject):
        store, sid = store_and_subject
        store.set(sid, "t1")
        store.set(sid, None)
        assert store.get(sid) is None

    def test_compare_and_set_swaps_on_match(self, store_and_subject):
        store, sid = store_and_subject
        store.set(sid, "t1")

        assert store.compare_and_set(sid, "t1", "t2") is True
        assert store.get(sid) == "t2"

    def test_compare_and_set_refuses_on_mismatch(self, store_and_subject):
        store, sid = store_and_subject
        store.set(sid, "t2")

        assert store.compare_and_set(sid, "t1", "t3") is False
        assert store.get(sid) == "t2"

    def test_only_one_of_two_racing_swaps_wins(self, store_and_subject):
        """Two rotations presenting the same credential: exactly one succeeds."""
        store, sid = store_and_subject
        store.set(sid, "t1")

        first = store.compare_and_set(sid, "t1", "a")
        second = store.compare_and_set(sid, "t1", "b")

        assert (first, second) == (True, False)
        assert store.get(sid) == "a"

    def test_compare_and_set_from_absent(self, store_and_subject):
        store, sid = store_and_subject
        assert store.compare_and_set(sid, None, "t1") is True
        assert store.get(sid) == "t1"

    def test_compare_and_set_to_none(self, store_and_subject):
        store, sid = store_and_subject
        store.set(sid, "t1")
        assert store.compare_and_set(sid, "t1", None) is True
        assert store.get(sid) is None


# --------------------------------------------------------------------------- #
# SQL specifics
# --------------------------------------------------------------------------- #


class TestSQLAlchemySessionStore:
    def test_credential_lives_on_user_row(self, session):
        user = UserFactory()
        session.commit()
        user_id = user.id

        SQLAlchemySessionStore().set(user_id, "tok")

        assert session.get(User, user_id).refresh_token == "tok"

    def test_unknown_subject_swap_fails(self, session):
        assert SQLAlchemySessionStore().compare_and_set(999_999, None, "tok") is False

    def test_database_error_becomes_storage_failure(self, monkeypatch):
        from sqlalchemy.exc import OperationalError

        from vidshare.repositories.user import UserRepository

        def _boom(self, user_id, token):
            raise OperationalError("UPDATE users", {}, Exception("database is locked"))

        monkeypatch.setattr(UserRepository, "set_refresh_token", _boom)
        with pytest.raises(StorageFailureError):
            SQLAlchemySessionStore().set(1, "tok")


# --------------------------------------------------------------------------- #
# Redis specifics
# --------------------------------------------------------------------------- #


class TestRedisSessionStore:
    def test_key_expires_with_refresh_lifetime(self, fake_redis):
        store = RedisSessionStore(r=fake_redis, ttl=timedelta(days=10))
        store.set(5, "tok")

        ttl = fake_redis.ttl("rt:u:5")
        assert 0 < ttl <= int(timedelta(days=10).total_seconds())

    def test_revoke_deletes_key(self, fake_redis):
        store = RedisSessionStore(r=fake_redis, ttl=timedelta(days=10))
        store.set(5, "tok")
        store.set(5, None)

        assert fake_redis.exists("rt:u:5") == 0

    def test_swap_retries_after_concurrent_write(self, fake_redis, monkeypatch):
        """A WatchError forces a re-read; the new value no longer matches."""
        store = RedisSessionStore(r=fake_redis, ttl=timedelta(days=10))
        store.set(5, "t1")

        real_pipeline = fake_redis.pipeline
        calls = {"n": 0}

        def _pipeline(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 1:
                # Another client rotates between WATCH and EXEC.
                pipe = real_pipeline(*args, **kwargs)
                original_multi = pipe.multi

                def _multi():
                    fake_redis.set("rt:u:5", "other")
                    original_multi()

                pipe.multi = _multi
                return pipe
            return real_pipeline(*args, **kwargs)

        monkeypatch.setattr(fake_redis, "pipeline", _pipeline)

        assert store.compare_and_set(5, "t1", "t2") is False
        assert store.get(5) == "other"
        assert calls["n"] == 2

    def test_connection_error_becomes_storage_failure(self, fake_redis, monkeypatch):
        def _down(*args, **kwargs):
            raise redis.ConnectionError("connection refused")

        monkeypatch.setattr(fake_redis, "get", _down)
        store = RedisSessionStore(r=fake_redis, ttl=timedelta(days=10))

        with pytest.raises(StorageFailureError):
            store.get(1)
