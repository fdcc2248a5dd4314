from __future__ import annotations

from typing import Protocol


class PasswordVerifier(Protocol):
    """Port for one-way password hashing."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return ``True`` on match; never raises on mismatch."""
        ...
