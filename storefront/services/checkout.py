"""
Checkout

Order pricing, delivery address validation and order placement. Every
path that prices an order goes through calculate_pricing so the client
and the server agree on totals.
"""

import logging
import re
import time
from typing import Optional, Union

from ..core.errors import AddressValidationError, CheckoutError
from ..models.order import (
    DeliveryAddress,
    Order,
    OrderCreateRequest,
    OrderPricing,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
)
from ..stores.cart import CartStore
from ..stores.orders import OrderStore

logger = logging.getLogger(__name__)

FREE_DELIVERY_THRESHOLD = 500.0
DELIVERY_FEE = 50.0

PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
PINCODE_PATTERN = re.compile(r"^\d{6}$")


def calculate_pricing(subtotal: float) -> OrderPricing:
    """
    Price an order from its subtotal.

    Delivery is free only when the subtotal is strictly above the
    threshold. There is no coupon engine, so discount is always 0.
    """
    delivery_fee = 0.0 if subtotal > FREE_DELIVERY_THRESHOLD else DELIVERY_FEE
    discount = 0.0
    return OrderPricing(
        subtotal=subtotal,
        discount=discount,
        delivery_fee=delivery_fee,
        total=subtotal + delivery_fee - discount,
    )


def validate_delivery_address(address: Union[DeliveryAddress, dict]) -> dict[str, str]:
    """Per-field error messages; empty when the address is valid"""
    if isinstance(address, DeliveryAddress):
        address = address.model_dump(by_alias=True)

    def value(name: str) -> str:
        return str(address.get(name) or "").strip()

    errors: dict[str, str] = {}

    if not value("fullName"):
        errors["fullName"] = "Full name is required"

    phone = value("phone")
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not PHONE_PATTERN.match(phone):
        errors["phone"] = "Enter a valid 10-digit phone number"

    if not value("address"):
        errors["address"] = "Address is required"
    if not value("city"):
        errors["city"] = "City is required"
    if not value("state"):
        errors["state"] = "State is required"

    pincode = value("pincode")
    if not pincode:
        errors["pincode"] = "Pincode is required"
    elif not PINCODE_PATTERN.match(pincode):
        errors["pincode"] = "Enter a valid 6-digit pincode"

    return errors


def build_payment_info(
    method: Union[PaymentMethod, str],
    amount: float,
    timestamp_ms: Optional[int] = None,
) -> PaymentInfo:
    """
    Payment record for an order.

    No gateway is involved: cash on delivery is pending, everything else
    is recorded as paid with a synthetic transaction id.
    """
    method = PaymentMethod(method)
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)

    if method == PaymentMethod.COD:
        return PaymentInfo(
            method=method,
            status=PaymentStatus.PENDING,
            transaction_id=f"COD_{timestamp_ms}",
            amount=amount,
        )
    return PaymentInfo(
        method=method,
        status=PaymentStatus.SUCCESS,
        transaction_id=f"TXN_{timestamp_ms}",
        amount=amount,
    )


async def place_order(
    cart: CartStore,
    orders: OrderStore,
    address: Union[DeliveryAddress, dict],
    method: Union[PaymentMethod, str],
    order_notes: str = "",
) -> Order:
    """
    Turn the current cart into an order.

    The address is validated before any network call. The cart is
    cleared only after the order is created; creation errors propagate
    and leave the cart as it was.

    Raises:
        AddressValidationError: with per-field messages
        CheckoutError: the cart is empty
    """
    errors = validate_delivery_address(address)
    if errors:
        raise AddressValidationError(errors)

    if not cart.state.items:
        raise CheckoutError("Cart is empty")

    if isinstance(address, dict):
        address = DeliveryAddress.model_validate(address)

    pricing = calculate_pricing(cart.state.total_price)
    request = OrderCreateRequest(
        items=list(cart.state.items),
        delivery_address=address,
        payment_info=build_payment_info(method, pricing.total),
        pricing=pricing,
        order_notes=order_notes,
    )

    order = await orders.create_order(request)
    logger.info(f"Order {order.order_id} placed: {order.pricing.total}")

    await cart.clear_cart()
    return order
