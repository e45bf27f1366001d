"""Shared test fixtures."""
import httpx
import jwt
import pytest
import pytest_asyncio

from mock_storefront.database import cart_db, order_db, user_db
from mock_storefront.main import app
from storefront.context import StorefrontContext
from storefront.core.config import Settings
from storefront.core.session import AuthSession
from storefront.models import Product
from storefront.services.api_client import StorefrontClient
from storefront.services.storage import MemoryStorage
from storefront.stores.cart import CartStore


def make_token(user_id: str = "user-1") -> str:
    """Unsigned-for-our-purposes token carrying a user id"""
    return jwt.encode({"userId": user_id}, "test-secret", algorithm="HS256")


def offline_transport() -> httpx.MockTransport:
    """Transport that fails every request like a dropped network"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network unreachable", request=request)
    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def reset_mock_databases():
    user_db.clear()
    cart_db.clear()
    order_db.clear()
    yield


@pytest.fixture
def settings():
    return Settings(api_base_url="http://testserver", storage_backend="memory")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def tee():
    return Product(id="prod-001", sku="XN-TEE-001", name="Classic Cotton Tee", price=299.0, stock=120)


@pytest.fixture
def hoodie():
    return Product(id="prod-002", sku="XN-HOOD-002", name="Fleece Hoodie", price=899.0, stock=40)


@pytest.fixture
def mug():
    return Product(id="prod-004", sku="XN-MUG-004", name="Ceramic Coffee Mug", price=199.0, stock=200)


@pytest.fixture
def delivery_address():
    return {
        "fullName": "Asha Rao",
        "phone": "9876543210",
        "email": "asha@example.com",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pincode": "560001",
    }


@pytest_asyncio.fixture
async def ctx(settings, storage):
    """Context talking to the in-process mock storefront"""
    context = StorefrontContext.create(
        settings,
        storage=storage,
        transport=httpx.ASGITransport(app=app),
    )
    yield context
    await context.close()


@pytest_asyncio.fixture
async def signed_in_ctx(ctx):
    result = await ctx.auth.signup("asha", "asha@example.com", "secret123")
    assert result.success
    result = await ctx.login("asha", "secret123")
    assert result.success
    yield ctx


@pytest_asyncio.fixture
async def offline_client(storage):
    client = StorefrontClient("http://api.test", AuthSession(storage), transport=offline_transport())
    yield client
    await client.close()


@pytest.fixture
def offline_cart(offline_client, storage):
    return CartStore(offline_client, storage, offline_client.session)


@pytest.fixture
def user_token():
    return make_token("user-1")
