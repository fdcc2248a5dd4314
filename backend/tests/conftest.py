"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Services commit
freely: with ``join_transaction_mode="create_savepoint"`` a commit only
releases the session's own SAVEPOINT, and the outer transaction is rolled
back once the test ends.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.orm import scoped_session, sessionmaker

from vidshare.core.auth import get_components
from vidshare.core.config import TestingConfig
from vidshare.core.extensions import db as _db
from vidshare.factory import create_app
from vidshare.infra.jwt import JWTCredentialCodec
from vidshare.infra.security import WerkzeugPasswordVerifier


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a scoped session wrapped in a per-test transaction.

    Notes
    -----
    pysqlite defers ``BEGIN`` until the first DML statement, so the outer
    SAVEPOINT is opened up front; every session-level commit then releases
    an inner SAVEPOINT and nothing reaches the database file.
    """
    top_trans = connection.begin()
    connection.begin_nested()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def client(app, session):
    """Flask test client that never stores cookies between requests.

    Cookies are passed explicitly so each test states which credential a
    request carries.
    """
    return app.test_client(use_cookies=False)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2026-01-01 12:00:00"):
    ...         ...
    """
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2026-01-01 12:00:00")

    return _factory


@pytest.fixture()
def codec(app) -> JWTCredentialCodec:
    """The application's credential codec (testing secrets and lifetimes)."""
    return get_components(app).codec


@pytest.fixture(scope="session")
def verifier() -> WerkzeugPasswordVerifier:
    """Cheap hasher matching ``TestingConfig.PASSWORD_HASH_METHOD``."""
    return WerkzeugPasswordVerifier(method=TestingConfig.PASSWORD_HASH_METHOD)


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
