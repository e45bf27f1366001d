"""
Bearer token handling for the mock storefront.

Issues HS256 JWTs carrying the user id and resolves the Authorization
header of incoming requests to a user.
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header, HTTPException

from storefront.models import User
from ..database.users import user_db

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(days=7)


def get_jwt_secret() -> str:
    return os.getenv("MOCK_JWT_SECRET", "mock-storefront-secret")


def create_token(user: User) -> str:
    """Sign a token whose payload carries the user id"""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user.id,
        "username": user.username,
        "iat": int(now.timestamp()),
        "exp": int((now + TOKEN_TTL).timestamp()),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def resolve_user(authorization: Optional[str]) -> Optional[User]:
    """User for an Authorization header, None if missing or invalid"""
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization[len("Bearer "):]
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    return user_db.get_user(payload.get("userId", ""))


async def require_user(authorization: Optional[str] = Header(None)) -> User:
    """
    Dependency that requires a valid bearer token.

    Usage:
        @router.get("/api/cart")
        async def get_cart(user: User = Depends(require_user)):
            ...
    """
    user = resolve_user(authorization)
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
