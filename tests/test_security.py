from datetime import timedelta

import pytest

from bugtracker.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    is_password_hash,
    verify_password,
)


def test_hash_is_salted():
    a = hash_password("admin123")
    b = hash_password("admin123")
    assert a != b
    assert is_password_hash(a)
    assert verify_password("admin123", a)
    assert verify_password("admin123", b)
    assert not verify_password("Admin123", a)


def test_plaintext_value_never_verifies():
    assert not verify_password("admin123", "admin123")
    assert not verify_password("", "")
    assert not verify_password("anything", None)


def test_token_round_trip(settings):
    token = create_access_token({"sub": "bob", "role": "tester"}, settings)
    payload = decode_token(token, settings)
    assert payload["sub"] == "bob"
    assert payload["role"] == "tester"


def test_expired_token_rejected(settings):
    token = create_access_token({"sub": "bob"}, settings, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        decode_token(token, settings)
