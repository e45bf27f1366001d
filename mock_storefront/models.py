"""Request bodies accepted by the mock storefront"""

from pydantic import BaseModel, ConfigDict, Field

from storefront.models import CartLineItem


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username_or_email: str = Field(alias="usernameOrEmail")
    password: str


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=3)
    email: str
    password: str = Field(min_length=6)
    confirm_password: str = Field(alias="confirmPassword")


class CartSaveRequest(BaseModel):
    """Full replacement of a user's cart"""
    items: list[CartLineItem] = []
