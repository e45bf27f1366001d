"""Catalog API routes for the mock storefront"""

from fastapi import APIRouter, HTTPException

from ..database.products import product_db

router = APIRouter(tags=["Products"])


@router.get("/api/products")
async def list_products():
    """List the catalog"""
    products = product_db.get_all_products()
    return {
        "products": [p.model_dump(by_alias=True, mode="json") for p in products],
        "pagination": {"total": len(products), "page": 1, "pages": 1},
    }


@router.get("/api/products/{product_id}")
async def get_product(product_id: str):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"product": product.model_dump(by_alias=True, mode="json")}


@router.get("/api/categories")
async def list_categories():
    return {"categories": product_db.get_categories()}


@router.get("/api/promotions")
async def list_promotions():
    return {"promotions": product_db.get_promotions()}
