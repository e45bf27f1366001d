"""Catalog reads: products, categories and promotions"""

import logging
from typing import Optional

import httpx

from ..models.product import Product
from .api_client import StorefrontClient

logger = logging.getLogger(__name__)


def clamp_quantity(product: Product, quantity: int) -> int:
    """
    Quantity a product screen may add to the cart.

    Clamped to 1..stock, 0 when out of stock. The cart store does not
    clamp; callers apply this before add_to_cart.
    """
    if not product.in_stock:
        return 0
    return max(1, min(quantity, product.stock))


class CatalogService:
    """Read-only access to the product catalog"""

    def __init__(self, client: StorefrontClient):
        self.client = client

    async def get_products(self) -> list[Product]:
        data = await self.client.get_products()
        products = [Product.model_validate(p) for p in data.get("products") or []]
        logger.info(f"Loaded {len(products)} products")
        return products

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID, None if the catalog has no such product"""
        try:
            data = await self.client.get_product(product_id)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.warning(f"Product {product_id} not found")
                return None
            raise

        if not data.get("product"):
            return None
        return Product.model_validate(data["product"])

    async def get_categories(self) -> list[str]:
        data = await self.client.get_categories()
        return list(data.get("categories") or [])

    async def get_promotions(self) -> list[dict]:
        """Active promotions. They are optional, so failures give an empty list."""
        try:
            data = await self.client.get_promotions()
        except httpx.HTTPError as e:
            logger.warning(f"Error fetching promotions: {e}")
            return []

        if isinstance(data, list):
            return data
        return list(data.get("promotions") or [])
