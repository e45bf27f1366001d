"""Auth API routes for the mock storefront"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from storefront.models import User
from ..models import LoginRequest, SignupRequest
from ..database.users import user_db
from ..security.auth import create_token, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_payload(user: User) -> dict:
    return user.model_dump(by_alias=True, mode="json")


@router.post("/signup")
async def signup(request: SignupRequest):
    """Create an account"""
    if request.password != request.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")

    user = user_db.create_user(request.username, request.email, request.password)
    if not user:
        raise HTTPException(status_code=409, detail="Username or email already in use")

    logger.info(f"User {user.username} signed up")
    return {"ok": True, "user": _user_payload(user)}


@router.post("/login")
async def login(request: LoginRequest):
    """Exchange credentials for a bearer token"""
    user = user_db.authenticate(request.username_or_email, request.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"ok": True, "user": _user_payload(user), "token": create_token(user)}


@router.get("/verify")
async def verify(user: User = Depends(require_user)):
    """Check the bearer token and return its user"""
    return {"ok": True, "user": _user_payload(user)}


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client drops its copy"""
    return {"ok": True}
