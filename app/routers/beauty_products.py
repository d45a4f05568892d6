# =============================================================================
# app/routers/beauty_products.py - Public Beauty Product Catalogue
# =============================================================================
# categoryIds is a comma-separated list. Products must belong to every
# listed category (pseudo categories are ignored). An explicitly empty
# categoryIds matches nothing; leaving it out lists every active product.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.responses import listed, ok
from core.services.beauty_product_service import BeautyProductService
from lib.utils import parse_csv_param

router = APIRouter()


@router.get("")
async def list_beauty_products(
    category_ids: Annotated[
        str | None,
        Query(alias="categoryIds", description="Comma-separated category ids (AND)"),
    ] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """
    List active beauty products in all of the given categories.

    Without categoryIds nothing matches.
    """
    products, total = BeautyProductService.list_public(
        parse_csv_param(category_ids), limit=limit, offset=offset
    )
    return listed(products, total)


# Registered before /{product_id} so "categories" isn't read as an id
@router.get("/categories")
async def list_beauty_product_categories():
    """List product categories by Korean name."""
    return listed(BeautyProductService.list_public_categories())


@router.get("/{product_id}")
async def get_beauty_product(
    product_id: Annotated[str, Path(description="Product UUID")],
):
    return ok(BeautyProductService.get_public(product_id))
