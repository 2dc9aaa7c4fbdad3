"""Tests for token issuing and verification."""

from datetime import timedelta

from folio.services.token_codec import TokenCodec
from folio.utils.identifiers import new_id, utcnow

SECRET = "codec-secret-with-at-least-32-bytes!"


def test_issue_then_verify_returns_user_id():
    codec = TokenCodec(SECRET, expiry_seconds=3600)
    user_id = new_id()

    assert codec.verify(codec.issue(user_id)) == user_id


def test_expired_token_is_invalid():
    codec = TokenCodec(SECRET, expiry_seconds=60)
    token = codec.issue(new_id(), now=utcnow() - timedelta(hours=1))

    assert codec.verify(token) is None


def test_tampered_token_is_invalid():
    codec = TokenCodec(SECRET, expiry_seconds=3600)
    token = codec.issue(new_id())

    for position in (len(token) // 4, len(token) // 2, 3 * len(token) // 4):
        replacement = "A" if token[position] != "A" else "B"
        tampered = token[:position] + replacement + token[position + 1:]
        assert codec.verify(tampered) is None


def test_token_signed_with_other_secret_is_invalid():
    token = TokenCodec("another-secret-with-at-least-32-bytes", 3600).issue(new_id())

    assert TokenCodec(SECRET, 3600).verify(token) is None


def test_garbage_is_invalid():
    codec = TokenCodec(SECRET, expiry_seconds=3600)

    assert codec.verify("not-a-token") is None
    assert codec.verify("") is None
