"""Shop Products Router - catalogue management for the caller's shop."""
from fastapi import APIRouter, Depends, HTTPException

from zyra.auth import get_owned_shop
from zyra.services.database import get_database
from zyra.services.domains.catalog import product_card
from zyra.services.models import Shop
from ..deps import http_error
from .models import ProductCreateRequest, ProductUpdateRequest

router = APIRouter(tags=["shop-products"])


@router.get("/products")
async def list_products(shop: Shop = Depends(get_owned_shop)):
    """All products of the shop, hidden ones included."""
    db = get_database()
    products = await db.list_shop_products(shop.id, include_inactive=True)
    return {"products": [product_card(p, shop.name) for p in products]}


@router.post("/products", status_code=201)
async def create_product(request: ProductCreateRequest, shop: Shop = Depends(get_owned_shop)):
    db = get_database()
    try:
        product = await db.create_product(shop.id, request.model_dump())
    except Exception as e:
        raise http_error(e, "Failed to create product")
    return {"product": product_card(product, shop.name)}


@router.patch("/products/{product_id}")
async def update_product(
    product_id: str, request: ProductUpdateRequest, shop: Shop = Depends(get_owned_shop)
):
    db = get_database()
    try:
        product = await db.update_product(shop.id, product_id, request.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise http_error(e, "Failed to update product")
    return {"product": product_card(product, shop.name)}


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, shop: Shop = Depends(get_owned_shop)):
    db = get_database()
    try:
        await db.delete_product(shop.id, product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise http_error(e, "Failed to delete product")
    return {"success": True}
