# Storefront Models

from .product import Product, AttributeValue
from .cart import CartLineItem
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderPricing,
    OrderCreateRequest,
    DeliveryAddress,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
    TimelineEntry,
    CustomerInfo,
)
from .auth import User

__all__ = [
    "Product",
    "AttributeValue",
    "CartLineItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderPricing",
    "OrderCreateRequest",
    "DeliveryAddress",
    "PaymentInfo",
    "PaymentMethod",
    "PaymentStatus",
    "TimelineEntry",
    "CustomerInfo",
    "User",
]
