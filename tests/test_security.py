import pytest

from capsulify_api.app.core import security
from capsulify_api.app.core.errors import ForbiddenError


def test_issue_then_verify_returns_claims():
    token = security.issue_session_token("65f0c0ffee0000000000beef", "user@example.com")
    claims = security.verify_session_token(token)
    assert claims["user_id"] == "65f0c0ffee0000000000beef"
    assert claims["email"] == "user@example.com"
    assert claims["exp"] - claims["iat"] == 3600


def test_token_expires_after_one_hour(monkeypatch):
    monkeypatch.setattr(security, "_now", lambda: 1_700_000_000)
    token = security.issue_session_token("u1", "user@example.com")

    monkeypatch.setattr(security, "_now", lambda: 1_700_000_000 + 3599)
    assert security.decode_access_token(token) is not None

    monkeypatch.setattr(security, "_now", lambda: 1_700_000_000 + 3600)
    assert security.decode_access_token(token) is None
    with pytest.raises(ForbiddenError):
        security.verify_session_token(token)


def test_any_altered_character_is_rejected():
    token = security.issue_session_token("u1", "user@example.com")
    for index, char in enumerate(token):
        tampered = token[:index] + chr(ord(char) ^ 1) + token[index + 1:]
        assert security.decode_access_token(tampered) is None, index


def test_token_signed_with_other_secret_is_rejected():
    token = security.create_access_token({"user_id": "u1", "email": "a@b.c"}, secret="another-secret")
    assert security.decode_access_token(token) is None


@pytest.mark.parametrize("token", [None, "", "abc", "a.b", "a.b.c.d"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(ForbiddenError):
        security.verify_session_token(token)


def test_password_hash_is_salted_and_verifiable():
    first = security.hash_password("s3cret")
    second = security.hash_password("s3cret")
    assert first != second
    assert "s3cret" not in first
    assert security.verify_password("s3cret", first)
    assert not security.verify_password("wrong", first)


@pytest.mark.parametrize("stored", ["", "garbage", "10$zz$zz", "x$00$00"])
def test_malformed_stored_hash_never_matches(stored):
    assert not security.verify_password("anything", stored)
