"""Security and Authentication Utilities"""

from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from app.config import settings

# Bcrypt limit; longer passwords must be truncated
_BCRYPT_MAX_BYTES = 72

_PASSWORD_RESET_PURPOSE = "password_reset"


def _truncate_password_for_bcrypt(password: str) -> bytes:
    """Truncate password to bcrypt's 72-byte limit, respecting UTF-8 boundaries."""
    encoded = password.encode("utf-8")
    if len(encoded) <= _BCRYPT_MAX_BYTES:
        return encoded
    truncated = encoded[:_BCRYPT_MAX_BYTES]
    while truncated:
        try:
            truncated.decode("utf-8")
            return truncated
        except UnicodeDecodeError:
            truncated = truncated[:-1]
    return b""


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password (ASCII string for DB storage)
    """
    pwd_bytes = _truncate_password_for_bcrypt(password)
    hashed = bcrypt.hashpw(pwd_bytes, bcrypt.gensalt())
    return hashed.decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    pwd_bytes = _truncate_password_for_bcrypt(plain_password)
    hash_bytes = hashed_password.encode("ascii") if isinstance(hashed_password, str) else hashed_password
    try:
        return bcrypt.checkpw(pwd_bytes, hash_bytes)
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token for a signed-in identity.

    Args:
        data: Data to encode in the token (usually {"sub": identity_id})
        expires_delta: Optional custom expiration time (e.g. "remember me")

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded token payload or None if invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def generate_password_reset_token(identity_id: str) -> str:
    """Password reset token, valid for PASSWORD_RESET_EXPIRE_MINUTES."""
    expire = datetime.utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    to_encode = {"sub": identity_id, "purpose": _PASSWORD_RESET_PURPOSE, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_password_reset_token(token: str) -> Optional[str]:
    """
    Verify a password reset token and extract the identity id.

    Returns:
        identity id if valid, None otherwise
    """
    payload = decode_token(token)
    if not payload or payload.get("purpose") != _PASSWORD_RESET_PURPOSE:
        return None
    return payload.get("sub")
