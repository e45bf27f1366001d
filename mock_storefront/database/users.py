"""User storage for the mock storefront"""

import hashlib
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

from storefront.models import User


class UserDatabase:
    """In-memory user accounts"""

    def __init__(self):
        self.users: dict[str, User] = {}
        self._password_hashes: dict[str, tuple[str, str]] = {}

    @staticmethod
    def _hash(password: str, salt: str) -> str:
        return hashlib.sha256(f"{salt}{password}".encode()).hexdigest()

    def find(self, username_or_email: str) -> Optional[User]:
        """Find a user by username or email"""
        needle = username_or_email.strip().lower()
        return next(
            (
                u for u in self.users.values()
                if u.username.lower() == needle or u.email.lower() == needle
            ),
            None,
        )

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def create_user(self, username: str, email: str, password: str) -> Optional[User]:
        """Create an account, None if the username or email is taken"""
        if self.find(username) or self.find(email):
            return None

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4().hex,
            username=username,
            email=email,
            created_at=now,
            updated_at=now,
        )
        salt = secrets.token_hex(8)
        self.users[user.id] = user
        self._password_hashes[user.id] = (salt, self._hash(password, salt))
        return user

    def authenticate(self, username_or_email: str, password: str) -> Optional[User]:
        user = self.find(username_or_email)
        if not user:
            return None
        salt, expected = self._password_hashes[user.id]
        if not secrets.compare_digest(self._hash(password, salt), expected):
            return None
        return user

    def clear(self) -> None:
        self.users.clear()
        self._password_hashes.clear()


# Singleton instance
user_db = UserDatabase()
