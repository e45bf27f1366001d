"""Order Store: order history, order creation and single-order lookup"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import httpx

from ..core.errors import OrderCreationError
from ..core.session import AuthSession
from ..models.order import Order, OrderCreateRequest
from ..services.api_client import StorefrontClient

logger = logging.getLogger(__name__)


@dataclass
class OrderState:
    """Last fetched orders and the order currently being viewed"""
    orders: list[Order] = field(default_factory=list)
    current_order: Optional[Order] = None
    is_loading: bool = False
    error: Optional[str] = None


class OrderStore:
    """
    Orders fetched from and created through the order API.

    Orders are server snapshots: the store never changes an order's
    status locally, it only replaces orders with freshly fetched copies.
    """

    def __init__(self, client: StorefrontClient, session: AuthSession):
        self.client = client
        self.session = session
        self.state = OrderState()

    def reset(self) -> None:
        self.state = OrderState()

    def _replace_order(self, order: Order) -> None:
        self.state.orders = [
            order if existing.order_id == order.order_id else existing
            for existing in self.state.orders
        ]

    async def load_orders(self) -> None:
        """
        Load all orders of the signed-in user.

        Guests get an empty list. On failure the error is recorded and
        previously loaded orders are kept.
        """
        logger.info("Loading orders...")
        self.state.is_loading = True
        try:
            if not await self.session.get_token():
                logger.info("No auth token found, no orders to load")
                self.state.orders = []
                self.state.error = None
                return

            data = await self.client.get_orders()
            if data.get("ok"):
                orders = [Order.model_validate(o) for o in data.get("orders") or []]
                logger.info(f"Loaded {len(orders)} orders")
                self.state.orders = orders
                self.state.error = None
            else:
                logger.error(f"Failed to load orders: {data.get('error')}")
                self.state.error = data.get("error") or "Failed to load orders"
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error loading orders: {e}")
            self.state.error = "Failed to load orders"
        finally:
            self.state.is_loading = False

    async def refresh_orders(self) -> None:
        await self.load_orders()

    async def create_order(
        self, order_data: Union[OrderCreateRequest, dict]
    ) -> Order:
        """
        Create an order and make it the current order.

        Raises:
            OrderCreationError: the API answered without ok
            httpx.HTTPError: the request itself failed
        """
        if isinstance(order_data, dict):
            order_data = OrderCreateRequest.model_validate(order_data)

        logger.info("Creating order...")
        self.state.is_loading = True
        try:
            data = await self.client.create_order(order_data.to_payload())
            if not data.get("ok"):
                raise OrderCreationError(data.get("error") or "Failed to create order")

            order = Order.model_validate(data["order"])
            logger.info(f"Order created: {data.get('orderId') or order.order_id}")
            self.state.orders = [order] + self.state.orders
            self.state.current_order = order
            return order
        except (httpx.HTTPError, OrderCreationError, ValueError) as e:
            logger.error(f"Error creating order: {e}")
            self.state.error = "Failed to create order"
            raise
        finally:
            self.state.is_loading = False

    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """
        Fetch one order.

        Returns None when the order does not exist and also when the
        fetch fails for any other reason; only the log tells them apart.
        """
        logger.info(f"Getting order: {order_id}")
        try:
            data = await self.client.get_order(order_id)
            if not data.get("ok"):
                logger.warning(f"Order not found: {data.get('error')}")
                return None

            order = Order.model_validate(data["order"])
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.warning(f"Order {order_id} not found (404)")
            else:
                logger.error(f"Error getting order {order_id}: {e}")
            return None
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"Error getting order {order_id}: {e}")
            return None

        self.state.current_order = order
        self._replace_order(order)
        return order
