"""
Storefront Context

Explicit owner of the client-side stores. Built once, started on app
launch, passed by reference to whatever needs the cart, orders or
wishlist, and closed on exit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .core.config import Settings, get_settings
from .core.session import AuthSession
from .services.api_client import StorefrontClient
from .services.auth import AuthService
from .services.catalog import CatalogService
from .services.storage import KeyValueStorage, create_storage
from .stores.cart import CartStore
from .stores.orders import OrderStore
from .stores.wishlist import WishlistStore

logger = logging.getLogger(__name__)


@dataclass
class StorefrontContext:
    """Stores and services sharing one token session"""
    settings: Settings
    storage: KeyValueStorage
    session: AuthSession
    client: StorefrontClient
    auth: AuthService
    catalog: CatalogService
    cart: CartStore
    orders: OrderStore
    wishlist: WishlistStore

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        storage: Optional[KeyValueStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "StorefrontContext":
        """Wire up the stores from settings"""
        settings = settings or get_settings()
        storage = storage or create_storage(settings)
        session = AuthSession(storage)
        client = StorefrontClient(
            base_url=settings.api_base_url,
            session=session,
            timeout=settings.request_timeout,
            transport=transport,
        )
        return cls(
            settings=settings,
            storage=storage,
            session=session,
            client=client,
            auth=AuthService(client, session),
            catalog=CatalogService(client),
            cart=CartStore(client, storage, session),
            orders=OrderStore(client, session),
            wishlist=WishlistStore(storage, session),
        )

    async def start(self) -> None:
        """Verify the session and load cart and wishlist"""
        logger.info(f"{self.settings.app_name} starting up...")
        logger.info(f"API URL: {self.settings.api_base_url}")
        await self.auth.check_auth()
        await self.cart.load()
        await self.wishlist.load()

    async def login(self, username_or_email: str, password: str):
        """Sign in and switch the stores over to the user's data"""
        result = await self.auth.login(username_or_email, password)
        if result.success:
            await self.cart.load()
            await self.wishlist.load()
        return result

    async def logout(self) -> None:
        """Sign out, drop user state and fall back to the guest copies"""
        await self.auth.logout()
        self.cart.reset()
        self.orders.reset()
        self.wishlist.reset()
        await self.cart.load()
        await self.wishlist.load()

    async def close(self) -> None:
        logger.info(f"{self.settings.app_name} shutting down...")
        await self.client.close()
        await self.storage.close()
