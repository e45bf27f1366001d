"""Tests for sign-in flows against the mock storefront."""
import httpx
import pytest

from storefront.core.session import AuthSession, TOKEN_KEY, decode_user_id
from storefront.services.api_client import StorefrontClient
from storefront.services.auth import NETWORK_ERROR, AuthService


@pytest.mark.asyncio
async def test_signup_then_login_stores_token(ctx, storage):
    assert (await ctx.auth.signup("ravi", "ravi@example.com", "secret123")).success
    assert await storage.get_item(TOKEN_KEY) is None

    result = await ctx.auth.login("ravi@example.com", "secret123")

    assert result.success
    assert ctx.auth.is_authenticated
    token = await storage.get_item(TOKEN_KEY)
    assert decode_user_id(token) == ctx.auth.user.id


@pytest.mark.asyncio
async def test_duplicate_signup_reports_server_error(ctx):
    await ctx.auth.signup("ravi", "ravi@example.com", "secret123")

    result = await ctx.auth.signup("ravi", "other@example.com", "secret123")

    assert not result.success
    assert result.error == "Username or email already in use"


@pytest.mark.asyncio
async def test_wrong_password(ctx, storage):
    await ctx.auth.signup("ravi", "ravi@example.com", "secret123")

    result = await ctx.auth.login("ravi", "nope")

    assert not result.success
    assert result.error == "Invalid credentials"
    assert await storage.get_item(TOKEN_KEY) is None
    assert not ctx.auth.is_authenticated


@pytest.mark.asyncio
async def test_check_auth_with_valid_token(signed_in_ctx):
    signed_in_ctx.auth.user = None

    assert await signed_in_ctx.auth.check_auth()
    assert signed_in_ctx.auth.user.username == "asha"


@pytest.mark.asyncio
async def test_check_auth_drops_invalid_token(ctx, storage, user_token):
    await storage.set_item(TOKEN_KEY, user_token)

    assert not await ctx.auth.check_auth()
    assert await storage.get_item(TOKEN_KEY) is None
    assert ctx.auth.user is None


@pytest.mark.asyncio
async def test_check_auth_without_token(ctx):
    assert not await ctx.auth.check_auth()
    assert not ctx.auth.is_loading


@pytest.mark.asyncio
async def test_logout_clears_token(signed_in_ctx, storage):
    await signed_in_ctx.auth.logout()

    assert await storage.get_item(TOKEN_KEY) is None
    assert not signed_in_ctx.auth.is_authenticated


@pytest.mark.asyncio
async def test_logout_offline_still_clears_token(offline_client, storage, user_token):
    await storage.set_item(TOKEN_KEY, user_token)
    auth = AuthService(offline_client, offline_client.session)

    await auth.logout()

    assert await storage.get_item(TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_login_offline_reports_network_error(offline_client):
    auth = AuthService(offline_client, offline_client.session)

    result = await auth.login("ravi", "secret123")

    assert result.success is False
    assert result.error == NETWORK_ERROR


@pytest.mark.asyncio
async def test_check_auth_with_non_json_reply_signs_out(storage, user_token):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>Sign in to the hotel Wi-Fi</html>")

    session = AuthSession(storage)
    client = StorefrontClient("http://api.test", session, transport=httpx.MockTransport(handler))
    await storage.set_item(TOKEN_KEY, user_token)
    auth = AuthService(client, session)
    try:
        assert not await auth.check_auth()
    finally:
        await client.close()

    assert await storage.get_item(TOKEN_KEY) is None
    assert not auth.is_authenticated
    assert not auth.is_loading
