"""Unit tests for password hashing and tokens."""

from datetime import timedelta

from app.core.security import (
    create_access_token,
    decode_token,
    generate_password_reset_token,
    get_password_hash,
    verify_password,
    verify_password_reset_token,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("CorrectHorse1")
    assert hashed != "CorrectHorse1"
    assert verify_password("CorrectHorse1", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_tolerates_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_access_token_carries_subject_and_type():
    token = create_access_token({"sub": "abc"})
    payload = decode_token(token)
    assert payload["sub"] == "abc"
    assert payload["type"] == "access"


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "abc"}, expires_delta=timedelta(seconds=-5))
    assert decode_token(token) is None


def test_reset_token_is_not_an_access_token():
    reset = generate_password_reset_token("identity-1")
    assert verify_password_reset_token(reset) == "identity-1"
    assert decode_token(reset).get("type") != "access"
    # An access token cannot be used to reset a password
    assert verify_password_reset_token(create_access_token({"sub": "identity-1"})) is None
