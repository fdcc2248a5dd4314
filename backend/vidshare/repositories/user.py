"""User repository: account lookups and the stored refresh credential."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from vidshare.models.user import User, normalize_email, normalize_username
from vidshare.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles credential issuance or password hashing; it only reads
    and writes rows. The ``refresh_token`` helpers back the SQL session store.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": User.id,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
        }

    def _updatable_fields(self):
        """Publicly allowed updatable fields (not including password)."""
        return {"email", "full_name", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == normalize_username(username))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Fetch a user matching the normalized username OR email.

        :returns: User instance or ``None`` when neither key matches.
        """
        clauses = []
        if username:
            clauses.append(User.username == normalize_username(username))
        if email:
            clauses.append(User.email == normalize_email(email))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == normalize_email(email))
        return bool(self.session.execute(stmt).first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == normalize_username(username))
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Password ops ----------------------------

    def set_password_hash(self, user: User, password_hash: str) -> None:
        """Assign an already-hashed password and flush."""
        user.password_hash = password_hash
        self.flush()

    # ---------------------------- Refresh credential ----------------------------

    def get_refresh_token(self, user_id: int) -> str | None:
        stmt = select(User.refresh_token).where(User.id == user_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    def set_refresh_token(self, user_id: int, token: str | None) -> int:
        """Overwrite the stored refresh credential.

        :returns: Number of rows touched (0 when the user does not exist).
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def compare_and_set_refresh_token(
        self, user_id: int, expected: str | None, new: str | None
    ) -> bool:
        """Swap the refresh credential only if it still equals ``expected``.

        A single conditional ``UPDATE`` keeps the check and the write atomic
        at the database level.
        """
        current = (
            User.refresh_token.is_(None) if expected is None else User.refresh_token == expected
        )
        stmt = (
            update(User)
            .where(User.id == user_id, current)
            .values(refresh_token=new)
            .execution_options(synchronize_session="fetch")
        )
        return (self.session.execute(stmt).rowcount or 0) == 1
