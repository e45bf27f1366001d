"""Order API routes for the mock storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from storefront.models import OrderCreateRequest, User
from storefront.services.checkout import calculate_pricing
from ..database.orders import order_db
from ..security.auth import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])

PRICE_TOLERANCE = 0.01


@router.get("")
async def list_orders(user: User = Depends(require_user)):
    """List the user's orders, newest first"""
    orders = order_db.list_orders(user.id)
    return {"ok": True, "orders": [o.to_payload() for o in orders]}


@router.post("")
async def create_order(
    request: OrderCreateRequest,
    user: User = Depends(require_user),
):
    """
    Create an order.

    The submitted pricing must match the pricing of the submitted items,
    so client-computed and stored totals never disagree.
    """
    if not request.items:
        raise HTTPException(status_code=400, detail="Order has no items")

    expected = calculate_pricing(sum(item.line_total for item in request.items))
    if (
        abs(expected.total - request.pricing.total) > PRICE_TOLERANCE
        or abs(expected.delivery_fee - request.pricing.delivery_fee) > PRICE_TOLERANCE
    ):
        raise HTTPException(
            status_code=400,
            detail=f"Pricing mismatch: expected total {expected.total:.2f}",
        )

    order = order_db.create_order(user, request)
    logger.info(f"Order {order.order_id} created: {order.pricing.total:.2f}")

    return {"ok": True, "order": order.to_payload(), "orderId": order.order_id}


@router.get("/{order_id}")
async def get_order(order_id: str, user: User = Depends(require_user)):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order or order.user_id != user.id:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"ok": True, "order": order.to_payload()}
