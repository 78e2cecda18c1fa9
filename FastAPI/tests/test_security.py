from datetime import datetime, timedelta, timezone

from jose import jwt

import myjob.core.security as security
from myjob.core.security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    decode_token,
    generate_id,
    hash_password,
    verify_password,
)


def test_password_hash_and_verify_roundtrip():
    plain = "StrongPass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("wrong", hashed) is False


def test_password_longer_than_bcrypt_limit_is_fully_checked():
    base = "a" * 80
    hashed = hash_password(base + "1")
    assert verify_password(base + "1", hashed) is True
    assert verify_password(base + "2", hashed) is False


def test_access_token_carries_identity_claims():
    token = create_access_token("user-123", "EMPLOYER", "hr@example.com")
    payload = decode_token(token)
    assert payload["sub"] == "user-123"
    assert payload["id"] == "user-123"
    assert payload["role_name"] == "EMPLOYER"
    assert payload["email"] == "hr@example.com"
    assert decode_access_token(token) == "user-123"


def test_access_token_has_no_expiry_by_default(monkeypatch):
    monkeypatch.setattr(security.settings, "access_token_expire_minutes", None)
    payload = decode_token(create_access_token("u1", "JOB_SEEKER", "u@example.com"))
    assert "exp" not in payload


def test_access_token_expiry_when_configured(monkeypatch):
    monkeypatch.setattr(security.settings, "access_token_expire_minutes", 5)
    payload = decode_token(create_access_token("u1", "JOB_SEEKER", "u@example.com"))
    assert "exp" in payload


def test_refresh_token_not_accepted_as_access_token():
    refresh = create_refresh_token("u1", "JOB_SEEKER", "u@example.com")
    assert decode_access_token(refresh) is None
    assert decode_refresh_token(refresh)["sub"] == "u1"


def test_access_token_not_accepted_as_refresh_token():
    access = create_access_token("u1", "JOB_SEEKER", "u@example.com")
    assert decode_refresh_token(access) is None


def test_expired_and_forged_tokens_rejected():
    expired = jwt.encode(
        {"sub": "u1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        security.settings.secret_key,
        algorithm=security.settings.algorithm,
    )
    forged = jwt.encode({"sub": "u1"}, "another-secret", algorithm="HS256")
    assert decode_token(expired) is None
    assert decode_token(forged) is None
    assert decode_access_token("not-a-jwt") is None


def test_generate_id_unique():
    assert len(generate_id()) > 10
    assert generate_id() != generate_id()
