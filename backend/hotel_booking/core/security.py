"""
Bearer token verification.

Tokens are issued by the platform's auth service; this service only needs the
user id from a valid token. create_access_token is kept for tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import bind_user

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_user_id(token: str) -> int:
    """Return the numeric user id carried in the token's `sub` claim."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user_id = decode_user_id(credentials.credentials)
    bind_user(user_id)
    return user_id
