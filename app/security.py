"""
Password hashing and token helpers shared by the auth service and route dependencies.
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
import jwt

from app.config import settings
from app.exceptions import UnauthorizedError


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: UUID, email: str, role: str) -> str:
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.access_token_expire_minutes)

    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token.

    Raises:
        UnauthorizedError: If the token is empty, tampered, expired or of another type
    """
    raw = (token or "").strip()
    if not raw:
        raise UnauthorizedError("Access token is empty.")

    try:
        payload = jwt.decode(raw, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise UnauthorizedError("Token is not an access token.")

    return payload


def build_refresh_token() -> str:
    # URL-safe random string for client storage/transmission.
    return secrets.token_urlsafe(48)


def hash_refresh_token(raw_refresh_token: str) -> str:
    token = (raw_refresh_token or "").encode("utf-8")
    if not token:
        raise ValueError("Refresh token is empty.")
    return hashlib.sha256(token).hexdigest()
