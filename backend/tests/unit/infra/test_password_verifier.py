from __future__ import annotations

import pytest

from vidshare.infra.security import WerkzeugPasswordVerifier


@pytest.fixture()
def hasher() -> WerkzeugPasswordVerifier:
    return WerkzeugPasswordVerifier(method="pbkdf2:sha256:1000")


def test_hash_is_salted(hasher):
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != second
    assert "secret123" not in first


def test_verify_matches_only_original_plaintext(hasher):
    hashed = hasher.hash("secret123")

    assert hasher.verify("secret123", hashed) is True
    assert hasher.verify("secret124", hashed) is False


@pytest.mark.parametrize("stored", ["", "garbage", "unknown$salt$digest"])
def test_verify_unusable_hash_is_a_mismatch(hasher, stored):
    assert hasher.verify("secret123", stored) is False
