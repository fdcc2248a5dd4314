from __future__ import annotations

import threading
from typing import Protocol


class SessionStore(Protocol):
    """
    Holds the single refresh credential currently accepted per subject.

    Implementations MUST make ``compare_and_set`` atomic per subject, and
    MUST surface backend failures as ``StorageFailureError``.
    """

    def get(self, subject_id: int) -> str | None:
        """Return the stored refresh credential, or ``None`` when revoked/absent."""
        ...

    def set(self, subject_id: int, token: str | None) -> None:
        """Overwrite the stored credential; ``None`` revokes."""
        ...

    def compare_and_set(self, subject_id: int, expected: str | None, new: str | None) -> bool:
        """
        Overwrite only if the current value equals ``expected``.

        :returns: ``True`` when the swap happened.
        """
        ...


class InMemorySessionStore(SessionStore):
    """
    Dict-backed session store for unit tests.

    .. note::
       A threading lock makes ``compare_and_set`` atomic.
    """

    def __init__(self) -> None:
        self._tokens: dict[int, str] = {}
        self._lock = threading.Lock()

    def get(self, subject_id: int) -> str | None:
        with self._lock:
            return self._tokens.get(subject_id)

    def set(self, subject_id: int, token: str | None) -> None:
        with self._lock:
            if token is None:
                self._tokens.pop(subject_id, None)
            else:
                self._tokens[subject_id] = token

    def compare_and_set(self, subject_id: int, expected: str | None, new: str | None) -> bool:
        with self._lock:
            if self._tokens.get(subject_id) != expected:
                return False
            if new is None:
                self._tokens.pop(subject_id, None)
            else:
                self._tokens[subject_id] = new
            return True
