# Client-side state stores

from .cart import CartStore, CartState
from .orders import OrderStore, OrderState
from .wishlist import WishlistStore, WishlistState

__all__ = [
    "CartStore",
    "CartState",
    "OrderStore",
    "OrderState",
    "WishlistStore",
    "WishlistState",
]
