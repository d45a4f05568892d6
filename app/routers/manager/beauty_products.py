# =============================================================================
# app/routers/manager/beauty_products.py - Beauty Product Administration
# =============================================================================
# Four routers:
# - products_router: /manager-api/beauty-products (+ /count, /images, toggle)
# - categories_router: /manager-api/beauty-product-categories
# - contacts_router: /manager-api/beauty-product-contacts
# - contact_products_router: /manager-api/contact-products
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, File, Form, Path, Query, UploadFile, status

from app.responses import counted, listed, ok, paginated
from core.models.beauty_product import (
    BeautyCategoryCreate,
    BeautyCategoryUpdate,
    BeautyProductCreate,
    BeautyProductUpdate,
    ProductContactCreate,
    ProductContactUpdate,
    ToggleActiveRequest,
)
from core.services.beauty_category_service import BeautyCategoryService
from core.services.beauty_product_service import BeautyProductService
from core.services.product_contact_service import ProductContactService

products_router = APIRouter()
categories_router = APIRouter()
contacts_router = APIRouter()
contact_products_router = APIRouter()

ProductId = Annotated[str, Path(description="Product UUID")]


# =============================================================================
# /beauty-products
# =============================================================================

@products_router.get("")
async def list_products(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: Annotated[str | None, Query(description="Matches name, manufacturer and detail")] = None,
    category_id: str | None = None,
    is_active: Annotated[str | None, Query(description="\"true\" / \"false\"; omit for both")] = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """List products with their categories, links and contacts."""
    products, total = BeautyProductService.list_for_admin(
        page=page,
        limit=limit,
        search=search,
        category_id=category_id,
        is_active=is_active,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return paginated(products, page, limit, total)


@products_router.get("/count")
async def count_products(
    search: str | None = None,
    category_id: str | None = None,
    is_active: str | None = None,
):
    return counted(BeautyProductService.count_for_admin(
        search=search,
        category_id=category_id,
        is_active=is_active,
    ))


@products_router.get("/images")
async def list_product_images(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
):
    """Active products with their image URLs, for the image manager."""
    products, total = BeautyProductService.list_for_images(page=page, limit=limit, search=search)
    return paginated(products, page, limit, total)


@products_router.post("/images", status_code=status.HTTP_201_CREATED)
async def upload_product_image(
    product_id: str | None = Form(default=None),
    file: UploadFile = File(..., description="jpg, jpeg, png, gif or webp"),
):
    """
    Upload a product image, replacing the previous one.

    Raises:
        400: Missing product_id or unsupported file type
        413: File larger than PRODUCT_IMAGE_MAX_MB
    """
    content = await file.read()
    result = BeautyProductService.upload_image(
        product_id,
        file.filename,
        content,
        content_type=file.content_type,
    )
    return ok(result, message="Image uploaded")


@products_router.delete("/images")
async def delete_product_image(
    product_id: Annotated[str | None, Query(description="Product whose image to remove")] = None,
):
    BeautyProductService.delete_image(product_id)
    return ok({"productId": product_id}, message="Image deleted")


@products_router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(request: BeautyProductCreate):
    """Create a product with its categories, links and contacts."""
    product = BeautyProductService.create_product(request)
    return ok(product, message="Product created")


@products_router.get("/{product_id}")
async def get_product(product_id: ProductId):
    return ok(BeautyProductService.get_for_admin(product_id))


@products_router.put("/{product_id}")
async def update_product(product_id: ProductId, request: BeautyProductUpdate):
    """
    Update a product.

    category_ids replaces the category mapping; links, when sent, replace
    the product's links.
    """
    product = BeautyProductService.update_product(product_id, request)
    return ok(product, message="Product updated")


@products_router.delete("/{product_id}")
async def delete_product(product_id: ProductId):
    BeautyProductService.delete_product(product_id)
    return ok(message="Product deleted")


@products_router.patch("/{product_id}/toggle")
async def toggle_product(product_id: ProductId, request: ToggleActiveRequest):
    return ok(BeautyProductService.set_active(product_id, request.is_active))


# =============================================================================
# /beauty-product-categories
# =============================================================================

@categories_router.get("")
async def list_product_categories():
    return listed(BeautyCategoryService.list_categories())


@categories_router.post("", status_code=status.HTTP_201_CREATED)
async def create_product_category(request: BeautyCategoryCreate):
    category = BeautyCategoryService.create_category(request)
    return ok(category, message="Category created")


@categories_router.get("/{category_id}")
async def get_product_category(category_id: Annotated[str, Path(description="Category id")]):
    return ok(BeautyCategoryService.get_category(category_id))


@categories_router.put("/{category_id}")
async def update_product_category(
    category_id: Annotated[str, Path(description="Category id")],
    request: BeautyCategoryUpdate,
):
    category = BeautyCategoryService.update_category(category_id, request)
    return ok(category, message="Category updated")


@categories_router.delete("/{category_id}")
async def delete_product_category(category_id: Annotated[str, Path(description="Category id")]):
    """
    Delete a category.

    Raises:
        400: Products still use the category
    """
    BeautyCategoryService.delete_category(category_id)
    return ok(message="Category deleted")


# =============================================================================
# /beauty-product-contacts
# =============================================================================

@contacts_router.get("")
async def list_contacts(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: Annotated[str | None, Query(description="Matches product and company names")] = None,
    product_id: str | None = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """List product-contact links with the product and contact attached."""
    contacts, total = ProductContactService.list_contacts(
        page=page,
        limit=limit,
        search=search,
        product_id=product_id,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return paginated(contacts, page, limit, total)


@contacts_router.get("/count")
async def count_contacts(search: str | None = None, product_id: str | None = None):
    return counted(ProductContactService.count_contacts(search=search, product_id=product_id))


@contacts_router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(request: ProductContactCreate):
    contact = ProductContactService.create_contact(request)
    return ok(contact, message="Contact created")


@contacts_router.get("/{mapping_id}")
async def get_contact(mapping_id: Annotated[str, Path(description="Product-contact mapping id")]):
    return ok(ProductContactService.get_contact(mapping_id))


@contacts_router.put("/{mapping_id}")
async def update_contact(
    mapping_id: Annotated[str, Path(description="Product-contact mapping id")],
    request: ProductContactUpdate,
):
    contact = ProductContactService.update_contact(mapping_id, request)
    return ok(contact, message="Contact updated")


@contacts_router.delete("/{mapping_id}")
async def delete_contact(mapping_id: Annotated[str, Path(description="Product-contact mapping id")]):
    ProductContactService.delete_contact(mapping_id)
    return ok(message="Contact deleted")


# =============================================================================
# /contact-products
# =============================================================================

@contact_products_router.get("")
async def list_contacts_with_products(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """Contacts with the products they handle and a product_count."""
    contacts, total = ProductContactService.list_contacts_with_products(
        page=page,
        limit=limit,
        search=search,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return paginated(contacts, page, limit, total)
