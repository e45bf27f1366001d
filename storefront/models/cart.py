"""Cart models"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .product import AttributeValue, Product


class CartLineItem(BaseModel):
    """
    Item in the shopping cart.

    Identity is (product.id, selected_attributes): the same product with
    a different attribute map is a different line item.
    """
    model_config = ConfigDict(populate_by_name=True)

    product: Product
    quantity: int = Field(ge=1)
    selected_attributes: dict[str, AttributeValue] = Field(
        default_factory=dict, alias="selectedAttributes"
    )

    @field_validator("selected_attributes", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Optional[dict]) -> dict:
        return value or {}

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def matches(self, product_id: str, attributes: dict[str, AttributeValue]) -> bool:
        """Same product and an equal attribute map (by value, key order ignored)"""
        return self.product.id == product_id and self.selected_attributes == attributes

    def to_payload(self) -> dict:
        """JSON-ready dict in the API's camelCase shape"""
        return self.model_dump(by_alias=True, mode="json")
