from __future__ import annotations

from sqlalchemy import func, select

from vidshare.core.extensions import db
from vidshare.models import Subscription, User, Video
from vidshare.seeds import seed_data


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_run_all_is_idempotent(session, verifier):
    first = seed_data.run_all(db, verifier)
    second = seed_data.run_all(db, verifier)

    assert first["users"] == {"created": 3, "existing": 0}
    assert second["users"] == {"created": 0, "existing": 3}
    assert second["videos"]["created"] == 0
    assert _count(session, User) == 3
    assert _count(session, Video) == len(seed_data.VIDEO_FIXTURES)
    assert _count(session, Subscription) == len(seed_data.SUBSCRIPTION_FIXTURES)


def test_seeded_passwords_verify(session, verifier):
    seed_data.run_all(db, verifier)

    alex = session.execute(select(User).filter_by(username="alexm")).scalar_one()
    assert verifier.verify("devPass123!", alex.password_hash)


def test_cli_seed_run(app, session):
    result = app.test_cli_runner().invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    assert "users" in result.output
