"""Order storage for the mock storefront"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from storefront.models import (
    CustomerInfo,
    Order,
    OrderCreateRequest,
    OrderItem,
    OrderStatus,
    TimelineEntry,
    User,
)

DELIVERY_DAYS = 5


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def create_order(self, user: User, request: OrderCreateRequest) -> Order:
        """Create an order from the submitted cart snapshot"""
        now = datetime.now(timezone.utc)

        order = Order(
            id=uuid.uuid4().hex,
            order_id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            user_id=user.id,
            customer_info=CustomerInfo(
                name=request.delivery_address.full_name,
                email=request.delivery_address.email or user.email,
                phone=request.delivery_address.phone,
            ),
            items=[OrderItem.from_line_item(item) for item in request.items],
            delivery_address=request.delivery_address,
            payment_info=request.payment_info,
            pricing=request.pricing,
            status=OrderStatus.PLACED,
            timeline=[
                TimelineEntry(
                    stage=OrderStatus.PLACED.value,
                    timestamp=now,
                    description="Order placed successfully",
                )
            ],
            estimated_delivery=now + timedelta(days=DELIVERY_DAYS),
            order_notes=request.order_notes or None,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(
        self,
        order_id: str,
        status: OrderStatus,
        description: str = "",
    ) -> Optional[Order]:
        """Move an order to a new stage and record it on the timeline"""
        order = self.get_order(order_id)
        if not order:
            return None

        now = datetime.now(timezone.utc)
        order.status = status
        order.timeline = order.timeline + [
            TimelineEntry(stage=status.value, timestamp=now, description=description)
        ]
        order.updated_at = now
        return order

    def list_orders(self, user_id: str, limit: int = 50) -> list[Order]:
        """A user's orders, newest first"""
        orders = [o for o in self.orders.values() if o.user_id == user_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]

    def clear(self) -> None:
        self.orders.clear()


# Singleton instance
order_db = OrderDatabase()
