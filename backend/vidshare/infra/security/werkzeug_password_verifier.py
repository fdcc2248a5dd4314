"""Werkzeug-backed password hashing."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from vidshare.services._shared.ports import PasswordVerifier


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordVerifier(PasswordVerifier):
    """
    Salted slow hashing via :mod:`werkzeug.security`.

    :param method: Werkzeug method string, e.g. ``"scrypt"`` or ``"pbkdf2:sha256:600000"``.
    """

    method: str = "scrypt"

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed or plaintext is None:
            return False
        try:
            return check_password_hash(hashed, plaintext)
        except ValueError:
            # Unknown or corrupt hash format counts as a mismatch.
            return False
