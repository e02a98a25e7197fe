"""
verify.py
---------
Purpose:
    Issue and verify the HS256 bearer tokens that identify callers.

Notes:
    - Tokens carry `sub` (the user's email), `iat` and `exp`.
    - Provides `auth_dependency` (claims) and `current_user` (email) for
      protected routes.
"""

from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reelhub.config import settings
from reelhub.errors import AuthError

# auto_error=False so a missing header becomes our own AuthError body
_security = HTTPBearer(auto_error=False)


def create_access_token(email: str, *, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(UTC)
    payload = {
        "sub": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_jwt(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthError("Invalid token") from e


def auth_dependency(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> dict:
    if credentials is None:
        raise AuthError("No token")
    claims = verify_jwt(credentials.credentials)
    # picked up by the request log line
    request.state.user_email = claims.get("sub")
    return claims


def current_user(claims: dict = Depends(auth_dependency)) -> str:
    email = claims.get("sub")
    if not email:
        raise AuthError("Invalid token: missing subject")
    return email
