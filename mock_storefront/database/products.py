"""Mock product catalog"""

from typing import Optional

from storefront.models import Product

PRODUCTS: dict[str, Product] = {
    p.id: p
    for p in [
        Product(
            id="prod-001",
            sku="XN-TEE-001",
            name="Classic Cotton Tee",
            description="Soft combed-cotton crew neck tee.",
            price=299.0,
            images=["/static/images/classic-tee.jpg"],
            categories=["Clothing"],
            category="Clothing",
            stock=120,
            status="active",
            brand="Xonight",
            attributes={"color": ["black", "white", "red"], "size": ["S", "M", "L"]},
        ),
        Product(
            id="prod-002",
            sku="XN-HOOD-002",
            name="Fleece Hoodie",
            description="Midweight fleece hoodie with kangaroo pocket.",
            price=899.0,
            images=["/static/images/fleece-hoodie.jpg"],
            categories=["Clothing"],
            category="Clothing",
            stock=40,
            status="active",
            brand="Xonight",
            attributes={"color": ["grey", "navy"], "size": ["M", "L", "XL"]},
        ),
        Product(
            id="prod-003",
            sku="XN-EAR-003",
            name="Wireless Earbuds",
            description="Bluetooth 5.3 earbuds with 24-hour charging case.",
            price=1499.0,
            images=["/static/images/earbuds.jpg"],
            categories=["Electronics"],
            category="Electronics",
            stock=25,
            status="active",
            brand="Sonique",
        ),
        Product(
            id="prod-004",
            sku="XN-MUG-004",
            name="Ceramic Coffee Mug",
            description="350 ml stoneware mug, dishwasher safe.",
            price=199.0,
            images=["/static/images/mug.jpg"],
            categories=["Home"],
            category="Home",
            stock=200,
            status="active",
        ),
        Product(
            id="prod-005",
            sku="XN-BOT-005",
            name="Steel Water Bottle",
            description="Double-wall insulated bottle, 750 ml.",
            price=549.0,
            images=["/static/images/bottle.jpg"],
            categories=["Sports"],
            category="Sports",
            stock=0,
            status="out_of_stock",
        ),
    ]
}

PROMOTIONS: list[dict] = [
    {
        "id": "promo-001",
        "title": "Free delivery over ₹500",
        "description": "No delivery charges on orders above ₹500.",
        "active": True,
    },
]


class ProductDatabase:
    """In-memory product database for the mock storefront"""

    def __init__(self):
        self.products = PRODUCTS.copy()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_all_products(self) -> list[Product]:
        return list(self.products.values())

    def get_categories(self) -> list[str]:
        """Distinct categories in catalog order"""
        seen: dict[str, None] = {}
        for product in self.products.values():
            for category in product.categories:
                seen.setdefault(category, None)
        return list(seen)

    def get_promotions(self) -> list[dict]:
        return [p for p in PROMOTIONS if p["active"]]


# Singleton instance
product_db = ProductDatabase()
