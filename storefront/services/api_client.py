"""
Storefront API Client

Single HTTP entry point to the commerce API. Attaches the stored
bearer token to every request and drops it when the server answers 401.
"""

import logging
from typing import Any, Optional

import httpx

from ..core.session import AuthSession

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    Client for the commerce REST API.

    Each call is a single attempt: no retries, no backoff, no request
    deduplication. Transport errors and HTTP error statuses are raised
    to the caller as httpx exceptions.
    """

    def __init__(
        self,
        base_url: str,
        session: AuthSession,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the commerce API
            session: Token source shared with the stores
            timeout: Client-wide request timeout in seconds
            transport: Optional httpx transport (ASGI app, mock handler)
        """
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if one is stored"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        token = await self.session.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request with the stored bearer token"""
        headers = await self._generate_headers()

        logger.debug(f"{method} {path}")
        response = await self._http_client.request(
            method=method,
            url=path,
            headers=headers,
            json=body,
        )

        if response.status_code == 401:
            # Session is over; the next auth check sees a logged-out user
            logger.warning(f"Unauthorized response for {method} {path} - clearing token")
            await self.session.clear_token()

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    # ==================== Auth APIs ====================

    async def verify(self) -> dict:
        """Verify the stored token"""
        return await self._request("GET", "/api/auth/verify")

    async def login(self, username_or_email: str, password: str) -> dict:
        return await self._request(
            "POST",
            "/api/auth/login",
            body={"usernameOrEmail": username_or_email, "password": password},
        )

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> dict:
        return await self._request(
            "POST",
            "/api/auth/signup",
            body={
                "username": username,
                "email": email,
                "password": password,
                "confirmPassword": confirm_password,
            },
        )

    async def logout(self) -> dict:
        return await self._request("POST", "/api/auth/logout")

    # ==================== Product APIs ====================

    async def get_products(self) -> dict:
        """Get the product catalog"""
        return await self._request("GET", "/api/products")

    async def get_product(self, product_id: str) -> dict:
        """Get product details"""
        return await self._request("GET", f"/api/products/{product_id}")

    async def get_categories(self) -> dict:
        return await self._request("GET", "/api/categories")

    async def get_promotions(self) -> Any:
        return await self._request("GET", "/api/promotions")

    # ==================== Cart APIs ====================

    async def get_cart(self) -> dict:
        """Get the signed-in user's cart"""
        return await self._request("GET", "/api/cart")

    async def save_cart(self, items: list[dict]) -> dict:
        """Replace the remote cart with the given items"""
        return await self._request("POST", "/api/cart", body={"items": items})

    # ==================== Order APIs ====================

    async def get_orders(self) -> dict:
        return await self._request("GET", "/api/orders")

    async def create_order(self, order_data: dict) -> dict:
        """Create an order from items, address, payment and pricing"""
        return await self._request("POST", "/api/orders", body=order_data)

    async def get_order(self, order_id: str) -> dict:
        """Get order details"""
        return await self._request("GET", f"/api/orders/{order_id}")
