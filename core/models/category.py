# =============================================================================
# core/models/category.py - Category & Department Schemas
# =============================================================================

from pydantic import BaseModel, Field


class VendorCategoryCreate(BaseModel):
    """Body for POST /manager-api/vendor-categories and /manager-api/categories."""
    name: str | None = Field(default=None, examples=["인테리어"])
    slug: str | None = Field(default=None, description="Generated from name when omitted")
    description: str | None = None
    is_active: bool = True


class VendorCategoryUpdate(BaseModel):
    """Body for PUT /manager-api/vendor-categories/{id}. Renaming regenerates the slug."""
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None


class CategoryVendorsLink(BaseModel):
    """Body for POST /manager-api/vendor-categories/{id}/vendors."""
    vendor_ids: list[str] = Field(default_factory=list)


class DepartmentCreate(BaseModel):
    """Body for POST /manager-api/departments (medical_departments)."""
    name: str | None = Field(default=None, examples=["피부과"])
    description: str | None = None
    slug: str | None = Field(default=None, description="Generated from name when omitted")
