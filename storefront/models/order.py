"""Order models"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .cart import CartLineItem


class OrderStatus(str, Enum):
    """Order lifecycle stages, driven by the server"""
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    PACKED = "packed"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    COD = "cod"
    NETBANKING = "netbanking"


class PaymentStatus(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"


class _ApiModel(BaseModel):
    """Models exchanged with the API in camelCase"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class OrderItem(_ApiModel):
    """Snapshot of a purchased product, not a live reference"""
    product_id: str = Field(alias="productId")
    sku: Optional[str] = None
    name: str
    price: float
    quantity: int
    attributes: dict[str, Any] = {}
    image: str = ""

    @classmethod
    def from_line_item(cls, item: CartLineItem) -> "OrderItem":
        return cls(
            product_id=item.product.id,
            sku=item.product.sku,
            name=item.product.name,
            price=item.product.price,
            quantity=item.quantity,
            attributes=dict(item.selected_attributes),
            image=item.product.primary_image,
        )


class DeliveryAddress(_ApiModel):
    """Delivery address. Format rules live in checkout validation."""
    full_name: str = Field(alias="fullName")
    phone: str
    email: Optional[str] = None
    address: str
    city: str
    state: str
    pincode: str
    landmark: Optional[str] = None


class PaymentInfo(_ApiModel):
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: str = Field(alias="transactionId")
    amount: float


class OrderPricing(_ApiModel):
    subtotal: float
    discount: float = 0.0
    delivery_fee: float = Field(alias="deliveryFee")
    total: float


class TimelineEntry(_ApiModel):
    stage: str
    timestamp: datetime
    description: str = ""


class CustomerInfo(_ApiModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class Order(_ApiModel):
    """
    Order as stored by the server.

    Date fields arrive as ISO strings and are parsed into datetimes,
    including every timeline timestamp.
    """
    id: Optional[str] = Field(default=None, alias="_id")
    order_id: str = Field(alias="orderId")
    user_id: str = Field(alias="userId")
    customer_info: Optional[CustomerInfo] = Field(default=None, alias="customerInfo")
    items: list[OrderItem] = []
    delivery_address: DeliveryAddress = Field(alias="deliveryAddress")
    payment_info: PaymentInfo = Field(alias="paymentInfo")
    pricing: OrderPricing
    status: OrderStatus = OrderStatus.PLACED
    timeline: list[TimelineEntry] = []
    estimated_delivery: Optional[datetime] = Field(default=None, alias="estimatedDelivery")
    order_notes: Optional[str] = Field(default=None, alias="orderNotes")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class OrderCreateRequest(_ApiModel):
    """Body of POST /api/orders"""
    items: list[CartLineItem]
    delivery_address: DeliveryAddress = Field(alias="deliveryAddress")
    payment_info: PaymentInfo = Field(alias="paymentInfo")
    pricing: OrderPricing
    order_notes: str = Field(default="", alias="orderNotes")
