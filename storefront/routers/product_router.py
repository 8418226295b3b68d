"""
Product Router
Admin CRUD for products and their price offers
"""

from fastapi import APIRouter, HTTPException, Depends, status, Query
from typing import List, Optional

from storefront.database import get_database
from storefront.middleware.auth_middleware import verify_api_key
from storefront.models.catalog_models import (
    Offer, OfferCreate, Product, ProductCreate, ProductUpdate
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["Products"])


def _not_found(product_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product {product_id} not found"
    )


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Create a product"""
    return await CatalogService(db).create_product(request)


@router.get("", response_model=List[Product])
async def list_products(
    limit: Optional[int] = Query(None, ge=1, le=500),
    with_offers: bool = Query(False),
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """List products, newest first"""
    return await CatalogService(db).list_products(limit=limit, with_offers=with_offers)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Get a product with its offers"""

    product = await CatalogService(db).get_product(product_id)
    if not product:
        raise _not_found(product_id)

    return product


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Update a product

    Turning promo off clears the promo text.
    """

    product = await CatalogService(db).update_product(product_id, request)
    if not product:
        raise _not_found(product_id)

    return product


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Delete a product and its offers"""

    if not await CatalogService(db).delete_product(product_id):
        raise _not_found(product_id)

    return {"success": True, "message": "Product deleted"}

# ============================================================================
# OFFERS
# ============================================================================

@router.get("/{product_id}/offers", response_model=List[Offer])
async def list_offers(
    product_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """List a product's offers"""
    return await CatalogService(db).list_offers(product_id)


@router.post("/{product_id}/offers", response_model=Offer, status_code=status.HTTP_201_CREATED)
async def add_offer(
    product_id: str,
    request: OfferCreate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Add a price offer to a product"""

    offer = await CatalogService(db).add_offer(product_id, request)
    if not offer:
        raise _not_found(product_id)

    return offer


@router.delete("/{product_id}/offers/{offer_id}")
async def delete_offer(
    product_id: str,
    offer_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Delete one offer"""

    catalog = CatalogService(db)
    offer = await catalog.get_offer(offer_id)

    if not offer or offer.product_id != product_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Offer {offer_id} not found"
        )

    await catalog.delete_offer(offer_id)

    return {"success": True, "message": "Offer deleted"}
