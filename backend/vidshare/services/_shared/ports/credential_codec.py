from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Protocol


class TokenKind(str, Enum):
    """The two credential kinds; each one is signed with its own key."""

    ACCESS = "access"
    REFRESH = "refresh"


class CredentialCodec(Protocol):
    """Port for minting and verifying signed, expiring credentials."""

    def issue(self, subject_id: int, kind: TokenKind, ttl: timedelta | None = None) -> str:
        """
        Sign a credential for ``subject_id``.

        :param ttl: Lifetime override; defaults to the kind's configured lifetime.
        :raises CredentialIssueError: If signing fails.
        """
        ...

    def verify(self, token: str, kind: TokenKind) -> int:
        """
        Return the subject id carried by ``token``.

        Only the key of ``kind`` is consulted.

        :raises InvalidCredentialError: Bad signature, malformed, expired or wrong kind.
        """
        ...

    def lifetime(self, kind: TokenKind) -> timedelta:
        """Configured default lifetime for ``kind``."""
        ...
