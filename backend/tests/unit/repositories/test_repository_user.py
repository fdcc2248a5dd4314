import pytest

from tests.factories.user import UserFactory
from vidshare.repositories.user import UserRepository


class TestUserRepository:
    @pytest.fixture()
    def repo(self, session) -> UserRepository:
        return UserRepository(session=session)

    def test_lookups_are_normalized(self, repo):
        user = UserFactory(username="MixedCase", email="Mixed@Example.COM")

        assert user.username == "mixedcase"
        assert user.email == "mixed@example.com"
        assert repo.get_by_username("  MIXEDCASE ") is user
        assert repo.exists_by_email("MIXED@example.com") is True
        assert repo.exists_by_username("other") is False

    def test_get_by_username_or_email(self, repo):
        user = UserFactory(username="erin", email="erin@example.com")

        assert repo.get_by_username_or_email(username="ERIN") is user
        assert repo.get_by_username_or_email(email="erin@example.com") is user
        assert repo.get_by_username_or_email() is None

    def test_refresh_token_roundtrip(self, repo):
        user = UserFactory()

        assert repo.set_refresh_token(user.id, "tok") == 1
        assert repo.get_refresh_token(user.id) == "tok"
        assert repo.set_refresh_token(999_999, "tok") == 0

    def test_compare_and_set_refresh_token(self, repo):
        user = UserFactory()
        repo.set_refresh_token(user.id, "t1")

        assert repo.compare_and_set_refresh_token(user.id, "t0", "t2") is False
        assert repo.compare_and_set_refresh_token(user.id, "t1", "t2") is True
        assert repo.compare_and_set_refresh_token(user.id, "t1", "t3") is False
        assert repo.get_refresh_token(user.id) == "t2"

    def test_update_rejects_non_whitelisted_fields(self, repo):
        user = UserFactory()
        with pytest.raises(ValueError):
            repo.update(user, password_hash="plain")

    def test_paginate_sorted_by_username(self, repo):
        for name in ("zed", "amy", "kim"):
            UserFactory(username=name)

        from vidshare.repositories.base import Pagination

        page = repo.paginate(Pagination(page=1, limit=2, sort=["username"]))

        assert page.total == 3
        assert [u.username for u in page.items] == ["amy", "kim"]
