"""Product models"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Selected attribute values: {"color": "red", "size": 42}
AttributeValue = Union[str, int, float]


class Product(BaseModel):
    """
    Catalog product as served by the commerce API.

    Owned by the server; the cart treats it as an opaque value and keeps
    any fields it does not know about.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="_id")
    sku: Optional[str] = None
    name: str = ""
    price: float = Field(ge=0)
    images: list[str] = []
    categories: list[str] = []
    category: Optional[str] = None
    description: str = ""
    stock: int = Field(default=0, ge=0)
    status: Optional[str] = None
    brand: Optional[str] = None
    attributes: dict[str, Any] = {}

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else ""
