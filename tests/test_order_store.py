"""Tests for the order store."""
from datetime import datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from mock_storefront.database import order_db
from storefront.core.errors import OrderCreationError
from storefront.core.session import AuthSession
from storefront.models import (
    CartLineItem,
    OrderCreateRequest,
    OrderStatus,
    PaymentMethod,
)
from storefront.services.api_client import StorefrontClient
from storefront.services.checkout import build_payment_info, calculate_pricing
from storefront.stores.orders import OrderStore


def order_request(items, address, method=PaymentMethod.UPI, **overrides) -> OrderCreateRequest:
    pricing = calculate_pricing(sum(i.line_total for i in items))
    data = {
        "items": items,
        "delivery_address": address,
        "payment_info": build_payment_info(method, pricing.total),
        "pricing": pricing,
        "order_notes": "Leave at the door",
    }
    data.update(overrides)
    return OrderCreateRequest(**data)


@pytest.mark.asyncio
async def test_load_orders_as_guest_is_empty_not_error(ctx):
    await ctx.orders.load_orders()

    assert ctx.orders.state.orders == []
    assert ctx.orders.state.error is None
    assert ctx.orders.state.is_loading is False


@pytest.mark.asyncio
async def test_create_order_prepends_and_sets_current(signed_in_ctx, tee, mug, delivery_address):
    orders = signed_in_ctx.orders

    first = await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))
    second = await orders.create_order(order_request([CartLineItem(product=mug, quantity=2)], delivery_address))

    assert [o.order_id for o in orders.state.orders] == [second.order_id, first.order_id]
    assert orders.state.current_order == second
    assert second.order_id.startswith("ORD-")
    assert second.status == OrderStatus.PLACED
    assert second.items[0].product_id == mug.id
    assert second.items[0].quantity == 2


@pytest.mark.asyncio
async def test_create_order_accepts_plain_dict(signed_in_ctx, tee, delivery_address):
    request = order_request([CartLineItem(product=tee, quantity=1)], delivery_address)

    order = await signed_in_ctx.orders.create_order(request.to_payload())

    assert order.pricing.total == pytest.approx(299.0 + 50.0)
    assert order.order_notes == "Leave at the door"


@pytest.mark.asyncio
async def test_order_dates_are_parsed(signed_in_ctx, tee, delivery_address):
    orders = signed_in_ctx.orders
    created = await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))

    await orders.load_orders()
    loaded = orders.state.orders[0]

    for order in (created, loaded):
        assert isinstance(order.created_at, datetime)
        assert isinstance(order.updated_at, datetime)
        assert isinstance(order.estimated_delivery, datetime)
        assert all(isinstance(entry.timestamp, datetime) for entry in order.timeline)
    assert loaded.created_at == created.created_at


@pytest.mark.asyncio
async def test_load_orders_newest_first(signed_in_ctx, tee, mug, delivery_address):
    orders = signed_in_ctx.orders
    await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))
    latest = await orders.create_order(order_request([CartLineItem(product=mug, quantity=1)], delivery_address))
    orders.reset()

    await orders.refresh_orders()

    assert len(orders.state.orders) == 2
    assert orders.state.orders[0].order_id == latest.order_id


@pytest.mark.asyncio
async def test_rejected_order_raises_and_records_error(signed_in_ctx, tee, delivery_address):
    orders = signed_in_ctx.orders
    request = order_request([CartLineItem(product=tee, quantity=1)], delivery_address)
    request.pricing.total = 1.0

    with pytest.raises(httpx.HTTPStatusError):
        await orders.create_order(request)

    assert orders.state.orders == []
    assert orders.state.error == "Failed to create order"
    assert orders.state.is_loading is False
    assert order_db.orders == {}


@pytest.mark.asyncio
async def test_not_ok_response_raises_order_creation_error(storage, tee, delivery_address):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": False, "error": "Out of stock"})

    client = StorefrontClient("http://api.test", AuthSession(storage), transport=httpx.MockTransport(handler))
    orders = OrderStore(client, client.session)
    try:
        with pytest.raises(OrderCreationError, match="Out of stock"):
            await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_get_missing_order_returns_none(signed_in_ctx):
    assert await signed_in_ctx.orders.get_order_by_id("ORD-DOESNOTEXIST") is None


@pytest.mark.asyncio
async def test_get_order_network_error_returns_none(offline_client):
    orders = OrderStore(offline_client, offline_client.session)
    assert await orders.get_order_by_id("ORD-12345678") is None


@pytest.mark.asyncio
async def test_get_order_picks_up_server_status_change(signed_in_ctx, tee, delivery_address):
    orders = signed_in_ctx.orders
    created = await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))
    order_db.update_status(created.order_id, OrderStatus.SHIPPED, "Handed to courier")

    fetched = await orders.get_order_by_id(created.order_id)

    assert fetched.status == OrderStatus.SHIPPED
    assert [e.stage for e in fetched.timeline] == ["placed", "shipped"]
    assert orders.state.current_order == fetched
    assert orders.state.orders[0].status == OrderStatus.SHIPPED


@pytest.mark.asyncio
async def test_other_users_order_is_not_found(signed_in_ctx, tee, delivery_address):
    created = await signed_in_ctx.orders.create_order(
        order_request([CartLineItem(product=tee, quantity=1)], delivery_address)
    )
    order_db.orders[created.order_id].user_id = "someone-else"

    assert await signed_in_ctx.orders.get_order_by_id(created.order_id) is None


@pytest.mark.asyncio
async def test_load_failure_keeps_previous_orders(signed_in_ctx, tee, delivery_address):
    orders = signed_in_ctx.orders
    await orders.create_order(order_request([CartLineItem(product=tee, quantity=1)], delivery_address))
    await orders.load_orders()
    assert len(orders.state.orders) == 1

    signed_in_ctx.client.get_orders = AsyncMock(side_effect=httpx.ConnectError("network unreachable"))
    await orders.load_orders()

    assert orders.state.error == "Failed to load orders"
    assert len(orders.state.orders) == 1
    assert orders.state.is_loading is False
