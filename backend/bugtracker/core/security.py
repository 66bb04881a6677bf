# backend/bugtracker/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from bugtracker.core.config import Settings

# only pbkdf2_sha256, salted per hash
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password or "")


def is_password_hash(value: str) -> bool:
    return (value or "").startswith("$pbkdf2-sha256$")


def verify_password(plain_password: str, hashed_password) -> bool:
    if hashed_password is None:
        return False

    s = str(hashed_password).strip()

    # only passlib hashes are accepted; a verbatim secret never authenticates
    if not is_password_hash(s):
        return False

    return pwd_context.verify(plain_password or "", s)


def create_access_token(
    data: dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict[str, Any]:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise ValueError("Invalid token") from e
