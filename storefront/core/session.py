"""Auth token access and user-scoped storage keys"""

import logging
from typing import Optional

import jwt

from ..services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth-token"


def decode_user_id(token: str) -> Optional[str]:
    """
    Read the user id from a bearer token payload.

    The signature is NOT verified. The id is only used to namespace
    local storage keys, never as an auth decision.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.error(f"Error parsing token: {e}")
        return None

    user_id = payload.get("userId")
    return str(user_id) if user_id else None


def scoped_key(base: str, user_id: Optional[str]) -> str:
    """Storage key for a user, or the shared guest key"""
    if user_id:
        return f"{base}_{user_id}"
    return base


class AuthSession:
    """Bearer token kept in device storage, shared by the client and stores"""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    async def get_token(self) -> Optional[str]:
        return await self.storage.get_item(TOKEN_KEY)

    async def set_token(self, token: str) -> None:
        await self.storage.set_item(TOKEN_KEY, token)

    async def clear_token(self) -> None:
        await self.storage.remove_item(TOKEN_KEY)

    async def get_user_id(self) -> Optional[str]:
        """User id of the stored token, None for guests"""
        token = await self.get_token()
        if not token:
            return None
        return decode_user_id(token)

    async def is_authenticated(self) -> bool:
        return bool(await self.get_token())
