"""
bcrypt helpers for account passwords.

bcrypt only reads the first 72 bytes of a password, so longer ones are
rejected up front instead of being silently truncated.
"""

from __future__ import annotations

import bcrypt

BCRYPT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72

__all__ = ["HashingError", "MAX_PASSWORD_BYTES", "hash_password", "verify_password"]


class HashingError(ValueError):
    """Raised when a password cannot be hashed or a stored hash cannot be parsed."""


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    raw = _encode(password)
    if len(raw) > MAX_PASSWORD_BYTES:
        raise HashingError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, stored: str | None) -> bool:
    """
    Constant-time check of `password` against a stored bcrypt hash.

    Returns False for accounts without a password (OTP-only users).
    """
    if not stored:
        return False

    raw = _encode(password)
    if len(raw) > MAX_PASSWORD_BYTES:
        # nothing this long was ever hashed
        return False

    try:
        return bcrypt.checkpw(raw, stored.encode("ascii"))
    except ValueError as e:
        raise HashingError("Malformed password hash") from e
