"""Sign-in, sign-up and session verification against the auth API"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.session import AuthSession
from ..models.auth import User
from .api_client import StorefrontClient

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Please try again."


@dataclass
class AuthResult:
    """Outcome of a login or signup attempt"""
    success: bool
    error: Optional[str] = None


def _server_error(error: httpx.HTTPError) -> str:
    """The API's error message for a failed call, if it sent one"""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            message = error.response.json().get("error")
        except ValueError:
            message = None
        if message:
            return message
    return NETWORK_ERROR


class AuthService:
    """Current user and the token lifecycle"""

    def __init__(self, client: StorefrontClient, session: AuthSession):
        self.client = client
        self.session = session
        self.user: Optional[User] = None
        self.is_authenticated = False
        self.is_loading = False

    def _sign_out_locally(self) -> None:
        self.user = None
        self.is_authenticated = False

    async def check_auth(self) -> bool:
        """Verify the stored token; an invalid token is removed"""
        self.is_loading = True
        try:
            if not await self.session.get_token():
                self._sign_out_locally()
                return False

            try:
                data = await self.client.verify()
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Auth check failed: {e}")
                data = {}

            if data.get("ok") and data.get("user"):
                self.user = User.model_validate(data["user"])
                self.is_authenticated = True
                return True

            await self.session.clear_token()
            self._sign_out_locally()
            return False
        finally:
            self.is_loading = False

    async def login(self, username_or_email: str, password: str) -> AuthResult:
        try:
            data = await self.client.login(username_or_email, password)
        except httpx.HTTPError as e:
            logger.error(f"Login error: {e}")
            return AuthResult(success=False, error=_server_error(e))

        if data.get("ok") and data.get("user") and data.get("token"):
            await self.session.set_token(data["token"])
            self.user = User.model_validate(data["user"])
            self.is_authenticated = True
            logger.info(f"Signed in as {self.user.username}")
            return AuthResult(success=True)

        return AuthResult(success=False, error=data.get("error") or "Login failed")

    async def signup(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account. The new user still has to log in."""
        try:
            data = await self.client.signup(username, email, password, password)
        except httpx.HTTPError as e:
            logger.error(f"Signup error: {e}")
            return AuthResult(success=False, error=_server_error(e))

        if data.get("ok"):
            return AuthResult(success=True)
        return AuthResult(success=False, error=data.get("error") or "Signup failed")

    async def logout(self) -> None:
        """End the server session; the local token is dropped either way"""
        try:
            await self.client.logout()
        except httpx.HTTPError as e:
            logger.error(f"Logout error: {e}")
        finally:
            await self.session.clear_token()
            self._sign_out_locally()
