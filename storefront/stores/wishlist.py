"""Wishlist Store: liked product ids, kept in device storage only"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.errors import StorageError
from ..core.session import AuthSession, decode_user_id, scoped_key
from ..services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

WISHLIST_KEY = "wishlist"


@dataclass
class WishlistState:
    items: list[str] = field(default_factory=list)  # product ids, no duplicates
    is_loading: bool = False


class WishlistStore:
    """
    Set of liked product ids.

    Stored under the user's key when signed in, the shared guest key
    otherwise. There is no remote wishlist endpoint.
    """

    def __init__(self, storage: KeyValueStorage, session: AuthSession):
        self.storage = storage
        self.session = session
        self.state = WishlistState()

    def reset(self) -> None:
        self.state = WishlistState()

    def is_in_wishlist(self, product_id: str) -> bool:
        return product_id in self.state.items

    async def add_to_wishlist(self, product_id: str) -> None:
        if product_id in self.state.items:
            return
        self.state.items = self.state.items + [product_id]
        await self._save()

    async def remove_from_wishlist(self, product_id: str) -> None:
        if product_id not in self.state.items:
            return
        self.state.items = [i for i in self.state.items if i != product_id]
        await self._save()

    async def clear_wishlist(self) -> None:
        self.state.items = []
        await self._save()

    async def _read_local(self, key: str) -> Optional[list[str]]:
        try:
            raw = await self.storage.get_json(key)
        except (StorageError, ValueError) as e:
            logger.error(f"Unreadable wishlist under '{key}': {e}")
            return None
        if not isinstance(raw, list):
            return None
        # dict.fromkeys keeps first-seen order
        return list(dict.fromkeys(str(i) for i in raw))

    async def load(self) -> None:
        """Load the user's wishlist, falling back to the guest wishlist"""
        self.state.is_loading = True
        try:
            user_id = await self.session.get_user_id()
            keys = [scoped_key(WISHLIST_KEY, user_id)]
            if user_id:
                keys.append(WISHLIST_KEY)

            for key in keys:
                items = await self._read_local(key)
                if items is not None:
                    logger.info(f"Loaded wishlist from '{key}': {len(items)} items")
                    self.state.items = items
                    return
        except StorageError as e:
            logger.error(f"Error loading wishlist: {e}")
        finally:
            self.state.is_loading = False

    async def refresh_wishlist(self) -> None:
        await self.load()

    async def _save(self) -> None:
        if self.state.is_loading:
            return

        try:
            token = await self.session.get_token()
            user_id = decode_user_id(token) if token else None
            if token and not user_id:
                logger.warning("Signed in without a readable user id, wishlist not saved")
                return
            await self.storage.set_json(scoped_key(WISHLIST_KEY, user_id), self.state.items)
        except StorageError as e:
            logger.error(f"Error saving wishlist: {e}")
