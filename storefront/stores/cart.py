"""
Cart Store

Local view of the shopping cart, kept in step with the remote cart and
a device-storage backup. The remote copy wins on load and refresh; every
local mutation replaces the remote copy in full. Remote failures are
logged and never roll back local state.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from ..core.errors import StorageError
from ..core.session import AuthSession, decode_user_id, scoped_key
from ..models.cart import CartLineItem
from ..models.product import AttributeValue, Product
from ..services.api_client import StorefrontClient
from ..services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

CART_KEY = "cart"


@dataclass
class CartState:
    """Current cart state. Totals are derived from items, never patched."""
    items: list[CartLineItem] = field(default_factory=list)
    total_items: int = 0
    total_price: float = 0.0
    is_loading: bool = False


def parse_items(raw: list) -> list[CartLineItem]:
    """Validate a stored or remote item list. Raises ValueError if malformed."""
    return [CartLineItem.model_validate(item) for item in raw]


class CartStore:
    """Shopping cart with remote sync and local fallback"""

    def __init__(
        self,
        client: StorefrontClient,
        storage: KeyValueStorage,
        session: AuthSession,
    ):
        self.client = client
        self.storage = storage
        self.session = session
        self.state = CartState()

    # ==================== State ====================

    def _set_items(self, items: list[CartLineItem]) -> None:
        self.state.items = items
        self._recalculate_totals()

    def _recalculate_totals(self) -> None:
        """Recalculate cart totals from the item list"""
        self.state.total_items = sum(item.quantity for item in self.state.items)
        self.state.total_price = sum(item.line_total for item in self.state.items)

    def _dump_items(self) -> list[dict]:
        return [item.to_payload() for item in self.state.items]

    def find_item(
        self,
        product_id: str,
        attributes: Optional[dict[str, AttributeValue]] = None,
    ) -> Optional[CartLineItem]:
        """Line item for a product and attribute map, if present"""
        attributes = attributes or {}
        return next(
            (item for item in self.state.items if item.matches(product_id, attributes)),
            None,
        )

    def reset(self) -> None:
        """Drop in-memory state without touching storage or the server"""
        self.state = CartState()

    # ==================== Actions ====================

    async def add_to_cart(
        self,
        product: Product,
        quantity: int = 1,
        attributes: Optional[dict[str, AttributeValue]] = None,
    ) -> None:
        """
        Add a product to the cart.

        Merges into the line item with the same product id and an equal
        attribute map, otherwise appends a new line item. Quantity is not
        clamped to stock here. A line whose quantity drops to 0 or below is
        removed, and a non-positive quantity never creates a line.
        """
        attributes = dict(attributes or {})
        existing = self.find_item(product.id, attributes)

        if existing:
            new_items = [
                item.model_copy(update={"quantity": item.quantity + quantity})
                if item is existing
                else item
                for item in self.state.items
            ]
        elif quantity > 0:
            new_items = self.state.items + [
                CartLineItem(
                    product=product,
                    quantity=quantity,
                    selected_attributes=attributes,
                )
            ]
        else:
            return

        self._set_items([item for item in new_items if item.quantity > 0])
        await self._save()

    async def remove_from_cart(self, product_id: str) -> None:
        """Remove every line item of a product, whatever its attributes"""
        self._set_items(
            [item for item in self.state.items if item.product.id != product_id]
        )
        await self._save()

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        """
        Set the quantity of every line item of a product.

        Negative quantities are clamped to 0 and a zero quantity removes
        the line item.
        """
        quantity = max(0, quantity)
        new_items = [
            item.model_copy(update={"quantity": quantity})
            if item.product.id == product_id
            else item
            for item in self.state.items
        ]
        self._set_items([item for item in new_items if item.quantity > 0])
        await self._save()

    async def clear_cart(self) -> None:
        self._set_items([])
        await self._save()

    # ==================== Sync ====================

    async def _read_local(self, key: str) -> Optional[list[CartLineItem]]:
        """Local copy under key, None when absent or unreadable"""
        try:
            raw = await self.storage.get_json(key)
            if raw is None:
                return None
            return parse_items(raw)
        except (StorageError, ValueError) as e:
            logger.error(f"Unreadable local cart under '{key}': {e}")
            return None

    async def load(self) -> None:
        """
        Load the cart on start.

        Signed in: remote cart first, then the user's local copy. Guest,
        or nothing found for the user: the shared local copy.
        """
        logger.info("Loading cart...")
        self.state.is_loading = True
        try:
            token = await self.session.get_token()

            if token:
                user_id = decode_user_id(token)
                logger.debug(f"Loading cart for user {user_id}")

                try:
                    data = await self.client.get_cart()
                    if data.get("ok") and isinstance(data.get("cart"), list):
                        items = parse_items(data["cart"])
                        logger.info(f"Loading cart from API with {len(items)} items")
                        self._set_items(items)
                        await self._backup(user_id)
                        return
                except (httpx.HTTPError, ValueError) as e:
                    logger.error(f"API error while loading cart: {e}")

                if user_id:
                    items = await self._read_local(scoped_key(CART_KEY, user_id))
                    if items is not None:
                        logger.info(f"Loaded cart from user storage: {len(items)} items")
                        self._set_items(items)
                        return

            items = await self._read_local(CART_KEY)
            if items is not None:
                logger.info(f"Loaded cart from general storage: {len(items)} items")
                self._set_items(items)
        except StorageError as e:
            logger.error(f"Error loading cart: {e}")
        finally:
            self.state.is_loading = False

    async def refresh_cart(self) -> None:
        """
        Re-fetch the remote cart and replace local state with it.

        Unsynced local changes are lost. A refresh that resolves after a
        later mutation still overwrites it.
        """
        token = await self.session.get_token()
        if not token:
            logger.info("No auth token found, skipping cart refresh")
            return

        logger.info("Refreshing cart from API...")
        self.state.is_loading = True
        try:
            data = await self.client.get_cart()
            if data.get("ok"):
                cart = data.get("cart")
                items = parse_items(cart if isinstance(cart, list) else [])
                logger.info(f"Refreshed cart with {len(items)} items")
                self._set_items(items)
                await self._backup(decode_user_id(token))
            else:
                logger.warning(f"Cart API returned error: {data.get('error')}")
        except (httpx.HTTPError, StorageError, ValueError) as e:
            logger.error(f"Error refreshing cart: {e}")
        finally:
            self.state.is_loading = False

    async def _backup(self, user_id: Optional[str]) -> None:
        if user_id:
            await self.storage.set_json(scoped_key(CART_KEY, user_id), self._dump_items())

    async def _save(self) -> None:
        """
        Write the full item list to storage and, when signed in, to the API.

        If the local write fails the items go to the shared cart key instead
        and the API sync is skipped.
        """
        if self.state.is_loading:
            # A load is in progress; writing now would clobber it
            return

        items = self._dump_items()
        logger.debug(f"Saving cart with {len(items)} items")

        try:
            token = await self.session.get_token()
            if not token:
                await self.storage.set_json(CART_KEY, items)
                return

            await self._backup(decode_user_id(token))
        except StorageError as e:
            logger.error(f"Error saving cart locally: {e}")
            try:
                await self.storage.set_json(CART_KEY, items)
            except StorageError as fallback_error:
                logger.error(f"Fallback cart save failed: {fallback_error}")
            return

        try:
            await self.client.save_cart(items)
            logger.info("Cart synced to API")
        except httpx.HTTPError as e:
            logger.warning(f"Failed to sync cart to API: {e}")
