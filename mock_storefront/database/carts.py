"""Cart storage for the mock storefront"""

from storefront.models import CartLineItem


class CartDatabase:
    """
    In-memory carts, one per user.

    Writes replace the whole cart; there is no per-item endpoint.
    """

    def __init__(self):
        self.carts: dict[str, list[CartLineItem]] = {}

    def get_cart(self, user_id: str) -> list[CartLineItem]:
        return list(self.carts.get(user_id, []))

    def replace_cart(self, user_id: str, items: list[CartLineItem]) -> list[CartLineItem]:
        self.carts[user_id] = list(items)
        return self.get_cart(user_id)

    def clear(self) -> None:
        self.carts.clear()


# Singleton instance
cart_db = CartDatabase()
