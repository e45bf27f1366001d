"""Cart API routes for the mock storefront"""

from fastapi import APIRouter, Depends

from storefront.models import User
from ..models import CartSaveRequest
from ..database.carts import cart_db
from ..security.auth import require_user

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("")
async def get_cart(user: User = Depends(require_user)):
    """Get the user's cart"""
    items = cart_db.get_cart(user.id)
    return {"ok": True, "cart": [item.to_payload() for item in items]}


@router.post("")
async def save_cart(
    request: CartSaveRequest,
    user: User = Depends(require_user),
):
    """Replace the user's cart"""
    items = cart_db.replace_cart(user.id, request.items)
    return {"ok": True, "cart": [item.to_payload() for item in items]}
