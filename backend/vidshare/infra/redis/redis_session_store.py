"""Redis adapter for the session store port."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]

from vidshare.services._shared.errors import StorageFailureError
from vidshare.services._shared.ports import SessionStore


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Keeps one refresh credential per subject under ``rt:u:{subject_id}``.

    Keys expire together with the refresh lifetime, so a stale entry never
    outlives the credential it describes.

    :param r: A Redis client (already connected).
    :param ttl: Key lifetime; normally the refresh credential lifetime.
    """

    r: redis.Redis
    ttl: timedelta

    @staticmethod
    def _ku(subject_id: int) -> str:
        return f"rt:u:{subject_id}"

    @staticmethod
    def _decode(raw: bytes | str | None) -> str | None:
        if raw is None:
            return None
        return raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)

    def _ttl_seconds(self) -> int:
        return max(1, int(self.ttl.total_seconds()))

    # -------------------- API ------------------------

    def get(self, subject_id: int) -> str | None:
        try:
            return self._decode(self.r.get(self._ku(subject_id)))
        except redis.RedisError as exc:
            raise StorageFailureError() from exc

    def set(self, subject_id: int, token: str | None) -> None:
        try:
            if token is None:
                self.r.delete(self._ku(subject_id))
            else:
                self.r.set(self._ku(subject_id), token, ex=self._ttl_seconds())
        except redis.RedisError as exc:
            raise StorageFailureError() from exc

    def compare_and_set(self, subject_id: int, expected: str | None, new: str | None) -> bool:
        """
        Swap the stored credential using WATCH/MULTI/EXEC.

        A concurrent writer touching the key aborts the transaction with
        ``WatchError``; the loop then re-reads and re-checks ``expected``, so a
        lost race ends as a mismatch rather than an overwrite.
        """
        key = self._ku(subject_id)
        try:
            while True:
                try:
                    with self.r.pipeline() as p:
                        p.watch(key)
                        current = self._decode(p.get(key))
                        if current != expected:
                            p.unwatch()
                            return False

                        p.multi()
                        if new is None:
                            p.delete(key)
                        else:
                            p.set(key, new, ex=self._ttl_seconds())
                        p.execute()
                        return True
                except redis.WatchError:
                    continue
        except redis.RedisError as exc:
            raise StorageFailureError() from exc
