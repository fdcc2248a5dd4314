"""
vidshare.services._shared.ports
===============================

Ports (hexagonal interfaces) for the authentication infrastructure.

- :mod:`credential_codec`: :class:`~.CredentialCodec` and :class:`~.TokenKind`.
- :mod:`password_verifier`: :class:`~.PasswordVerifier`.
- :mod:`session_store`: :class:`~.SessionStore` and :class:`~.InMemorySessionStore`.

Concrete adapters live under ``vidshare.infra``.
"""

from __future__ import annotations

from .credential_codec import CredentialCodec, TokenKind
from .password_verifier import PasswordVerifier
from .session_store import InMemorySessionStore, SessionStore

__all__ = [
    "CredentialCodec",
    "InMemorySessionStore",
    "PasswordVerifier",
    "SessionStore",
    "TokenKind",
]
