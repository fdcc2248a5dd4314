"""Session store backed by the ``users.refresh_token`` column."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from vidshare.services._shared.errors import StorageFailureError
from vidshare.services._shared.ports import SessionStore
from vidshare.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


class SQLAlchemySessionStore(SessionStore):
    """
    Stores the refresh credential on the user row.

    Every write runs in its own read-write Unit of Work, so it is committed
    before the caller hands any token to the client.
    """

    def get(self, subject_id: int) -> str | None:
        try:
            with SQLAlchemyReadOnlyUnitOfWork() as uow:
                return uow.users.get_refresh_token(subject_id)
        except SQLAlchemyError as exc:
            raise StorageFailureError() from exc

    def set(self, subject_id: int, token: str | None) -> None:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                uow.users.set_refresh_token(subject_id, token)
        except SQLAlchemyError as exc:
            raise StorageFailureError() from exc

    def compare_and_set(self, subject_id: int, expected: str | None, new: str | None) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                return uow.users.compare_and_set_refresh_token(subject_id, expected, new)
        except SQLAlchemyError as exc:
            raise StorageFailureError() from exc
