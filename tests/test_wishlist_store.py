"""Tests for the wishlist store."""
import pytest

from storefront.core.session import AuthSession, TOKEN_KEY
from storefront.stores.wishlist import WishlistStore


@pytest.fixture
def wishlist(storage):
    return WishlistStore(storage, AuthSession(storage))


@pytest.mark.asyncio
async def test_add_is_idempotent(wishlist):
    await wishlist.add_to_wishlist("prod-001")
    await wishlist.add_to_wishlist("prod-001")
    await wishlist.add_to_wishlist("prod-002")

    assert wishlist.state.items == ["prod-001", "prod-002"]


@pytest.mark.asyncio
async def test_remove_and_membership(wishlist):
    await wishlist.add_to_wishlist("prod-001")
    assert wishlist.is_in_wishlist("prod-001")

    await wishlist.remove_from_wishlist("prod-001")
    await wishlist.remove_from_wishlist("prod-001")

    assert not wishlist.is_in_wishlist("prod-001")
    assert wishlist.state.items == []


@pytest.mark.asyncio
async def test_clear_persists_empty_list(wishlist, storage):
    await wishlist.add_to_wishlist("prod-001")
    await wishlist.clear_wishlist()

    assert wishlist.state.items == []
    assert await storage.get_json("wishlist") == []


@pytest.mark.asyncio
async def test_guest_and_user_keys(wishlist, storage, user_token):
    await wishlist.add_to_wishlist("prod-001")
    assert await storage.get_json("wishlist") == ["prod-001"]

    await storage.set_item(TOKEN_KEY, user_token)
    await wishlist.add_to_wishlist("prod-002")

    assert await storage.get_json("wishlist_user-1") == ["prod-001", "prod-002"]
    assert await storage.get_json("wishlist") == ["prod-001"]


@pytest.mark.asyncio
async def test_load_prefers_user_copy(wishlist, storage, user_token):
    await storage.set_item(TOKEN_KEY, user_token)
    await storage.set_json("wishlist_user-1", ["prod-003"])
    await storage.set_json("wishlist", ["prod-001"])

    await wishlist.load()

    assert wishlist.state.items == ["prod-003"]
    assert wishlist.state.is_loading is False


@pytest.mark.asyncio
async def test_load_falls_back_to_guest_copy(wishlist, storage, user_token):
    await storage.set_item(TOKEN_KEY, user_token)
    await storage.set_json("wishlist", ["prod-001", "prod-001", "prod-002"])

    await wishlist.refresh_wishlist()

    assert wishlist.state.items == ["prod-001", "prod-002"]


@pytest.mark.asyncio
async def test_load_ignores_malformed_copy(wishlist, storage):
    await storage.set_item("wishlist", "not json at all")

    await wishlist.load()

    assert wishlist.state.items == []


@pytest.mark.asyncio
async def test_unreadable_token_does_not_write_guest_key(wishlist, storage):
    await storage.set_item(TOKEN_KEY, "not-a-jwt")

    await wishlist.add_to_wishlist("prod-001")

    assert wishlist.is_in_wishlist("prod-001")
    assert await storage.get_item("wishlist") is None
