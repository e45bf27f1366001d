# Database modules

from .users import user_db, UserDatabase
from .products import product_db, ProductDatabase
from .carts import cart_db, CartDatabase
from .orders import order_db, OrderDatabase

__all__ = [
    "user_db",
    "UserDatabase",
    "product_db",
    "ProductDatabase",
    "cart_db",
    "CartDatabase",
    "order_db",
    "OrderDatabase",
]
