"""JWT access tokens and the authentication dependencies built on them."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import PyJWTError
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRES_MINUTES, JWT_ALGORITHM, JWT_ISSUER, JWT_SECRET
from ..db import get_db
from ..models import User

LEEWAY_SECONDS = 10

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(payload: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token, adding ``iss`` and a numeric ``exp``.

    ``payload`` must carry ``sub`` with the user id.
    """
    to_encode = payload.copy()
    to_encode.setdefault("iss", JWT_ISSUER)
    expire_at = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRES_MINUTES)
    )
    to_encode["exp"] = int(expire_at.timestamp())
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a token, returning its claims."""
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALGORITHM],
        issuer=JWT_ISSUER,
        leeway=LEEWAY_SECONDS,
        options={"require": ["exp", "iss", "sub"]},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Return the ORM user behind the bearer token or raise 401."""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except PyJWTError:
        raise _unauthorized("invalid_or_expired_token")

    user = db.get(User, payload["sub"])
    if user is None or not user.is_active:
        raise _unauthorized("Could not validate credentials")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only tenant administrators through."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return current_user
