# =============================================================================
# core/models/beauty_product.py - Beauty Product Schemas
# =============================================================================
# The beauty_products tables use PascalCase columns (ProductName,
# CategoryNameKO, ...) inherited from an older catalogue. The manager UI
# speaks snake_case; these models are the snake_case side, and the
# service maps between the two.
# =============================================================================

from pydantic import BaseModel, Field

DEFAULT_LINK_NAME = "제품 링크"
DEFAULT_LINK_TYPE = "other"


class ProductLink(BaseModel):
    """A purchase/info link. Links without a url are skipped."""
    name: str | None = None
    url: str | None = None
    type: str | None = None


class ContactFields(BaseModel):
    """Supplier contact columns (beauty_product_contacts)."""
    company_name_ko: str | None = Field(default=None, examples=["닥터코스메틱"])
    company_name_en: str | None = None
    contact_number: str | None = None
    company_homepage: str | None = None
    person_in_charge: str | None = None


class BeautyProductCreate(BaseModel):
    """Body for POST /manager-api/beauty-products."""
    name: str | None = Field(default=None, examples=["리쥬란 힐러"])
    name_en: str | None = None
    brand: str | None = None
    description: str | None = None
    is_active: bool = True
    category_ids: list[str] = Field(default_factory=list)
    links: list[ProductLink] = Field(default_factory=list)
    contacts: list[ContactFields] = Field(default_factory=list)


class BeautyProductUpdate(BaseModel):
    """
    Body for PUT /manager-api/beauty-products/{id}.

    category_ids and links replace the stored sets only when provided.
    """
    name: str | None = None
    name_en: str | None = None
    brand: str | None = None
    description: str | None = None
    is_active: bool | None = None
    category_ids: list[str] | None = None
    links: list[ProductLink] | None = None


class ToggleActiveRequest(BaseModel):
    """Body for PATCH .../toggle endpoints."""
    is_active: bool


class BeautyCategoryCreate(BaseModel):
    """Body for POST /manager-api/beauty-product-categories."""
    name: str | None = Field(default=None, examples=["스킨부스터"])
    slug: str | None = None
    description: str | None = None
    display_order: int = 0
    is_active: bool = True


class BeautyCategoryUpdate(BaseModel):
    """Body for PUT /manager-api/beauty-product-categories/{id}."""
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class ProductContactCreate(ContactFields):
    """Body for POST /manager-api/beauty-product-contacts."""
    product_id: str | None = None


class ProductContactUpdate(ContactFields):
    """Body for PUT /manager-api/beauty-product-contacts/{id}."""
