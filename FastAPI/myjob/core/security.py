import hashlib
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from myjob.config import settings

REFRESH_TOKEN_TYPE = "refresh"


def _prehash(password: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte limit."""
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_prehash(plain), hashed.encode())


def _claims(user_id: str, role_name: str, email: str) -> dict:
    return {"sub": user_id, "id": user_id, "role_name": role_name, "email": email}


def create_access_token(user_id: str, role_name: str, email: str) -> str:
    to_encode = _claims(user_id, role_name, email)
    if settings.access_token_expire_minutes:
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_refresh_token(user_id: str, role_name: str, email: str) -> str:
    to_encode = _claims(user_id, role_name, email)
    to_encode["type"] = REFRESH_TOKEN_TYPE
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> dict | None:
    """Return the verified payload, or None for a malformed, forged or expired token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def decode_access_token(token: str) -> str | None:
    payload = decode_token(token)
    if not payload or payload.get("type") == REFRESH_TOKEN_TYPE:
        return None
    return payload.get("sub")


def decode_refresh_token(token: str) -> dict | None:
    payload = decode_token(token)
    if not payload or payload.get("type") != REFRESH_TOKEN_TYPE:
        return None
    return payload


def generate_id() -> str:
    return str(uuid4())
