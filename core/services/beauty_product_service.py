# =============================================================================
# core/services/beauty_product_service.py - Beauty Product Catalogue
# =============================================================================
# The catalogue tables keep their PascalCase columns (ProductName,
# ProductManufacturer, ProductDetail, ...). This service is the only place
# that knows those names; routers see snake_case dicts.
#
# Related data hangs off join tables:
#   beauty_product_category_map_uuid   product <-> category
#   beauty_product_links_map_uuid      product <-> link
#   beauty_product_contacts_map_uuid   product <-> supplier contact
# Related rows are attached with one follow-up query per table for a whole
# page, never one query per product.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder, parse_sort
from lib.relations import fetch_mapped_ids, intersect_category_members, update_relations
from lib.utils import validate_required_fields
from app.config import settings
from app.exceptions import (
    BadRequestError,
    DatabaseError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from core.models.beauty_product import (
    DEFAULT_LINK_NAME,
    DEFAULT_LINK_TYPE,
    BeautyProductCreate,
    BeautyProductUpdate,
    ContactFields,
    ProductLink,
)
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

PRODUCT_TABLE = "beauty_products"
PRODUCT_DETAIL_VIEW = "beauty_product_detail"
CATEGORY_TABLE = "beauty_product_category"
CATEGORY_MAP_TABLE = "beauty_product_category_map_uuid"
LINK_TABLE = "beauty_product_links"
LINK_MAP_TABLE = "beauty_product_links_map_uuid"
CONTACT_TABLE = "beauty_product_contacts"
CONTACT_MAP_TABLE = "beauty_product_contacts_map_uuid"

PUBLIC_CATEGORY_COLUMNS = "id, CategoryID, CategoryName, CategoryNameKO, CategoryDetail, CategorySEO"
ADMIN_SEARCH_FIELDS = ["ProductName", "ProductManufacturer", "ProductDetail"]
IMAGE_SEARCH_FIELDS = ["ProductName", "ProductNameEN", "ProductManufacturer"]

# Admin table sort keys -> catalogue columns
SORT_COLUMNS = {
    "name": "ProductName",
    "name_en": "ProductNameEN",
    "brand": "ProductManufacturer",
    "product_id": "ProductID",
}

CONTACT_COLUMNS = ["company_name_ko", "company_name_en", "contact_number", "company_homepage", "person_in_charge"]


def product_columns(name=None, name_en=None, brand=None, description=None) -> dict[str, Any]:
    """snake_case product fields -> catalogue columns (None values kept)."""
    return {
        "ProductName": name,
        "ProductNameEN": name_en,
        "ProductManufacturer": brand,
        "ProductDetail": description,
    }


def summarize_product(product: dict[str, Any]) -> dict[str, Any]:
    """Short form returned by create/update."""
    return {
        "id": product["id"],
        "name": product.get("ProductName"),
        "brand": product.get("ProductManufacturer"),
        "description": product.get("ProductDetail"),
        "image_name": product.get("ProductDetailImage"),
    }


def _rows_by(rows: list[dict[str, Any]], key: str) -> dict[Any, dict[str, Any]]:
    return {row[key]: row for row in rows}


class BeautyProductService:
    """
    Service for beauty product operations.

    Public methods serve the consumer catalogue; admin methods back the
    manager tables, the product form and the image manager.
    """

    # -------------------------------------------------------------------------
    # Public Catalogue
    # -------------------------------------------------------------------------

    @staticmethod
    def list_public(
        category_ids: list[str],
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Active products in every one of the given categories.

        Args:
            category_ids: Categories to AND together. An empty list (no
                categoryIds parameter, or a blank one) matches nothing.
                Pseudo categories are ignored, and a request made only of
                pseudo categories matches nothing.
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (products with "categories", exact filtered total)
        """
        if not category_ids:
            return [], 0

        client = SupabaseClient.get_client()
        categories = (
            client.table(CATEGORY_TABLE)
            .select("id, is_pseudo_category")
            .in_("id", category_ids)
            .execute()
        ).data or []
        real_ids = [c["id"] for c in categories if not c.get("is_pseudo_category")]
        if not real_ids:
            return [], 0

        if len(real_ids) == 1:
            product_ids = list(dict.fromkeys(
                fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", real_ids[0], "product_id")
            ))
        else:
            mappings = (
                client.table(CATEGORY_MAP_TABLE)
                .select("product_id, category_id")
                .in_("category_id", real_ids)
                .execute()
            ).data or []
            product_ids = intersect_category_members(mappings, real_ids)

        if not product_ids:
            return [], 0

        query = (
            client.table(PRODUCT_TABLE)
            .select("*", count="exact")
            .eq("is_active", True)
            .in_("id", product_ids)
        )
        products, total = (
            QueryBuilder(query)
            .sort("ProductName", "asc")
            .slice(offset, limit)
            .execute()
        )

        BeautyProductService.attach_public_categories(products)
        return products, total

    @staticmethod
    def attach_public_categories(products: list[dict[str, Any]]) -> None:
        """Set product["categories"] from the category mapping."""
        if not products:
            return

        client = SupabaseClient.get_client()
        mappings = (
            client.table(CATEGORY_MAP_TABLE)
            .select("product_id, category_id")
            .in_("product_id", [p["id"] for p in products])
            .execute()
        ).data or []

        categories = {}
        category_ids = list({m["category_id"] for m in mappings})
        if category_ids:
            categories = _rows_by(
                (
                    client.table(CATEGORY_TABLE)
                    .select(PUBLIC_CATEGORY_COLUMNS)
                    .in_("id", category_ids)
                    .execute()
                ).data or [],
                "id",
            )

        for product in products:
            product["categories"] = [
                categories[m["category_id"]]
                for m in mappings
                if m["product_id"] == product["id"] and m["category_id"] in categories
            ]

    @staticmethod
    def list_public_categories() -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        return (
            client.table(CATEGORY_TABLE)
            .select("*")
            .order("CategoryNameKO")
            .execute()
        ).data or []

    @staticmethod
    def get_public(product_id: str | UUID) -> dict[str, Any]:
        product = SupabaseClient.fetch_one(PRODUCT_TABLE, product_id)
        if not product:
            raise ResourceNotFoundError("Product", product_id)

        BeautyProductService.attach_public_categories([product])
        return product

    # -------------------------------------------------------------------------
    # Admin Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def _admin_query(
        columns: str,
        search: str | None,
        is_active: str | None,
        product_ids: list[Any] | None,
    ) -> QueryBuilder:
        client = SupabaseClient.get_client()
        return (
            QueryBuilder(client.table(PRODUCT_TABLE).select(columns, count="exact"))
            .filter(product_ids is not None, lambda q: q.in_("id", product_ids))
            .search(search, ADMIN_SEARCH_FIELDS)
            .filter(is_active == "true", lambda q: q.eq("is_active", True))
            .filter(is_active == "false", lambda q: q.eq("is_active", False))
        )

    @staticmethod
    def list_for_admin(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        category_id: str | None = None,
        is_active: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Products shaped for the manager table.

        Args:
            is_active: "true" / "false" filter; anything else lists both

        Returns:
            Tuple of (admin product dicts, total count)
        """
        product_ids = None
        if category_id:
            product_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", category_id, "product_id")
            if not product_ids:
                return [], 0

        column, descending = parse_sort(sort_field, sort_direction, "id", "desc")
        column = SORT_COLUMNS.get(column, column)

        try:
            products, total = (
                BeautyProductService._admin_query("*", search, is_active, product_ids)
                .sort(column, "desc" if descending else "asc")
                .paginate(page, limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list beauty products: {e}")
            raise

        return BeautyProductService.enrich_for_admin(products), total

    @staticmethod
    def count_for_admin(
        search: str | None = None,
        category_id: str | None = None,
        is_active: str | None = None,
    ) -> int:
        product_ids = None
        if category_id:
            product_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", category_id, "product_id")
            if not product_ids:
                return 0

        _, total = BeautyProductService._admin_query("id", search, is_active, product_ids).execute()
        return total

    @staticmethod
    def enrich_for_admin(products: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Convert catalogue rows to the admin shape with categories, links and contacts.

        Each related table is read once for the whole batch.
        """
        if not products:
            return []

        client = SupabaseClient.get_client()
        ids = [p["id"] for p in products]

        def mapped(map_table: str, related_key: str, table: str) -> tuple[list[dict], dict]:
            mappings = (
                client.table(map_table)
                .select(f"product_id, {related_key}")
                .in_("product_id", ids)
                .execute()
            ).data or []
            related_ids = list({m[related_key] for m in mappings})
            rows = {}
            if related_ids:
                rows = _rows_by(
                    (client.table(table).select("*").in_("id", related_ids).execute()).data or [],
                    "id",
                )
            return mappings, rows

        category_maps, categories = mapped(CATEGORY_MAP_TABLE, "category_id", CATEGORY_TABLE)
        link_maps, links = mapped(LINK_MAP_TABLE, "link_id", LINK_TABLE)
        contact_maps, contacts = mapped(CONTACT_MAP_TABLE, "contact_id", CONTACT_TABLE)

        result = []
        for product in products:
            pid = product["id"]
            own_categories = [m["category_id"] for m in category_maps if m["product_id"] == pid]
            own_links = [links[m["link_id"]] for m in link_maps if m["product_id"] == pid and m["link_id"] in links]
            own_contacts = [
                contacts[m["contact_id"]]
                for m in contact_maps
                if m["product_id"] == pid and m["contact_id"] in contacts
            ]

            result.append({
                "id": pid,
                "product_id": product.get("ProductID"),
                "name": product.get("ProductName"),
                "name_en": product.get("ProductNameEN"),
                "brand": product.get("ProductManufacturer"),
                "category_ids": own_categories,
                "description": product.get("ProductDetail"),
                "links": [
                    {
                        "name": link.get("link_name") or "",
                        "url": link.get("link") or "",
                        "type": link.get("link_type") or DEFAULT_LINK_TYPE,
                    }
                    for link in own_links
                ],
                "contacts": [
                    {"id": contact["id"], **{col: contact.get(col) or "" for col in CONTACT_COLUMNS}}
                    for contact in own_contacts
                ],
                "image_name": product.get("ProductDetailImage"),
                "is_active": product.get("is_active") if product.get("is_active") is not None else True,
                "categories": [
                    {
                        "id": categories[cid]["id"],
                        "name": categories[cid].get("CategoryNameKO") or categories[cid].get("CategoryName"),
                    }
                    for cid in own_categories
                    if cid in categories
                ],
            })
        return result

    # -------------------------------------------------------------------------
    # Admin CRUD
    # -------------------------------------------------------------------------

    @staticmethod
    def get_for_admin(product_id: str | UUID) -> dict[str, Any]:
        product = SupabaseClient.fetch_one(PRODUCT_TABLE, product_id)
        if not product:
            raise ResourceNotFoundError("Product", product_id)
        return BeautyProductService.enrich_for_admin([product])[0]

    @staticmethod
    def _add_links(product_id: str | UUID, links: list[ProductLink]) -> int:
        """Insert link rows and their mappings. Links without a url are skipped."""
        added = 0
        for link in links:
            if not link.url:
                continue
            row = SupabaseClient.insert_one(
                LINK_TABLE,
                {
                    "link_name": link.name or DEFAULT_LINK_NAME,
                    "link_type": link.type or DEFAULT_LINK_TYPE,
                    "link": link.url,
                    "is_newtab": 1,
                },
            )
            SupabaseClient.insert_one(LINK_MAP_TABLE, {"product_id": str(product_id), "link_id": row["id"]})
            added += 1
        return added

    @staticmethod
    def _remove_links(product_id: str | UUID) -> None:
        """Delete the link mappings and the link rows they point to."""
        link_ids = fetch_mapped_ids(LINK_MAP_TABLE, "product_id", product_id, "link_id")
        if not link_ids:
            return

        client = SupabaseClient.get_client()
        SupabaseClient.delete_rows(LINK_MAP_TABLE, product_id, column="product_id")
        client.table(LINK_TABLE).delete().in_("id", link_ids).execute()

    @staticmethod
    def _add_contacts(product_id: str | UUID, contacts: list[ContactFields]) -> int:
        """Insert supplier contacts with a mapping each. Contacts without company_name_ko are skipped."""
        added = 0
        for contact in contacts:
            if not contact.company_name_ko:
                continue
            row = SupabaseClient.insert_one(
                CONTACT_TABLE,
                {col: getattr(contact, col) or None for col in CONTACT_COLUMNS},
            )
            SupabaseClient.insert_one(CONTACT_MAP_TABLE, {"product_id": str(product_id), "contact_id": row["id"]})
            added += 1
        return added

    @staticmethod
    def create_product(request: BeautyProductCreate) -> dict[str, Any]:
        """
        Create a product with categories, links and contacts.

        Raises:
            MissingFieldsError: If name is blank
        """
        missing = validate_required_fields(request.model_dump(), ["name"])
        if missing:
            raise MissingFieldsError(missing)

        data = {
            **product_columns(request.name, request.name_en, request.brand, request.description),
            "is_active": request.is_active,
        }
        try:
            product = SupabaseClient.insert_one(PRODUCT_TABLE, data)
        except Exception as e:
            logger.error(f"Failed to create beauty product: {e}")
            raise

        if request.category_ids:
            update_relations(CATEGORY_MAP_TABLE, "product_id", product["id"], "category_id", request.category_ids)
        links = BeautyProductService._add_links(product["id"], request.links)
        contacts = BeautyProductService._add_contacts(product["id"], request.contacts)

        logger.info(
            f"Created beauty product {product['id']} "
            f"({len(request.category_ids)} categories, {links} links, {contacts} contacts)"
        )
        return summarize_product(product)

    @staticmethod
    def update_product(product_id: str | UUID, request: BeautyProductUpdate) -> dict[str, Any]:
        """
        Update product fields. Categories and links are replaced only when sent.

        Raises:
            ResourceNotFoundError: If product doesn't exist
        """
        fields = request.model_dump(exclude_unset=True)
        data = {
            column: value
            for column, value in product_columns(
                fields.get("name"), fields.get("name_en"), fields.get("brand"), fields.get("description")
            ).items()
            if value is not None
        }
        if request.is_active is not None:
            data["is_active"] = request.is_active

        if data:
            rows = SupabaseClient.update_rows(PRODUCT_TABLE, data, product_id)
            if not rows:
                raise ResourceNotFoundError("Product", product_id)
            product = rows[0]
        else:
            product = SupabaseClient.fetch_one(PRODUCT_TABLE, product_id)
            if not product:
                raise ResourceNotFoundError("Product", product_id)

        if request.category_ids is not None:
            update_relations(CATEGORY_MAP_TABLE, "product_id", product_id, "category_id", request.category_ids)

        if request.links is not None:
            BeautyProductService._remove_links(product_id)
            BeautyProductService._add_links(product_id, request.links)

        logger.info(f"Updated beauty product: {product_id}")
        return summarize_product(product)

    @staticmethod
    def delete_product(product_id: str | UUID) -> None:
        """Delete a product after its category mappings and links."""
        if not SupabaseClient.fetch_one(PRODUCT_TABLE, product_id, columns="id"):
            raise ResourceNotFoundError("Product", product_id)

        SupabaseClient.delete_rows(CATEGORY_MAP_TABLE, product_id, column="product_id")
        BeautyProductService._remove_links(product_id)
        SupabaseClient.delete_rows(PRODUCT_TABLE, product_id)
        logger.info(f"Deleted beauty product: {product_id}")

    @staticmethod
    def set_active(product_id: str | UUID, is_active: bool) -> dict[str, Any]:
        rows = SupabaseClient.update_rows(PRODUCT_TABLE, {"is_active": is_active}, product_id)
        if not rows:
            raise ResourceNotFoundError("Product", product_id)
        return {"id": rows[0]["id"], "is_active": rows[0]["is_active"]}

    # -------------------------------------------------------------------------
    # Detail Images
    # -------------------------------------------------------------------------

    @staticmethod
    def list_for_images(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """Active products with their detail image, for the image manager."""
        client = SupabaseClient.get_client()
        query = (
            client.table(PRODUCT_DETAIL_VIEW)
            .select(
                "id, ProductID, ProductName, ProductNameEN, ProductManufacturer, ProductDetailImage, is_active",
                count="exact",
            )
            .eq("is_active", True)
        )
        rows, total = (
            QueryBuilder(query)
            .search(search, IMAGE_SEARCH_FIELDS)
            .sort("ProductID", "asc")
            .paginate(page, limit)
            .execute()
        )

        bucket = settings.PRODUCT_IMAGE_BUCKET
        products = [
            {
                "id": row["id"],
                "product_id": row.get("ProductID"),
                "name": row.get("ProductName"),
                "name_en": row.get("ProductNameEN"),
                "brand": row.get("ProductManufacturer"),
                "image_name": row.get("ProductDetailImage"),
                "image_url": (
                    StorageService.public_url(bucket, row["ProductDetailImage"])
                    if row.get("ProductDetailImage") else None
                ),
                "is_active": row.get("is_active"),
            }
            for row in rows
        ]
        return products, total

    @staticmethod
    def _product_image(product_id: str | None) -> dict[str, Any]:
        if not product_id:
            raise MissingFieldsError(["product_id"])
        product = SupabaseClient.fetch_one(PRODUCT_TABLE, product_id, columns="id, ProductDetailImage")
        if not product:
            raise ResourceNotFoundError("Product", product_id)
        return product

    @staticmethod
    def upload_image(
        product_id: str | None,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Store a product's detail image as {product id}.{ext}, replacing the old one.

        If the row update fails the new object is removed again.

        Raises:
            BadRequestError: No file content
            MissingFieldsError: product_id missing
            ResourceNotFoundError: Unknown product
            DatabaseError: Row update failed
        """
        if not content:
            raise BadRequestError("No file provided", suggestion="Send the image as multipart field 'file'")

        product = BeautyProductService._product_image(product_id)
        ext = StorageService.validate_image(filename, content, settings.PRODUCT_IMAGE_MAX_MB)
        bucket = settings.PRODUCT_IMAGE_BUCKET
        file_name = f"{product['id']}.{ext}"

        if product.get("ProductDetailImage"):
            StorageService.remove(bucket, [product["ProductDetailImage"]])

        StorageService.upload_image(bucket, file_name, content, content_type=content_type, upsert=True)

        try:
            rows = SupabaseClient.update_rows(PRODUCT_TABLE, {"ProductDetailImage": file_name}, product["id"])
            if not rows:
                raise DatabaseError("save product image", "update returned no rows")
        except Exception as e:
            logger.error(f"Image update failed for product {product['id']}, removing {file_name}: {e}")
            StorageService.remove(bucket, [file_name])
            if isinstance(e, DatabaseError):
                raise
            raise DatabaseError("save product image", str(e))

        logger.info(f"Uploaded detail image for product {product['id']}: {file_name}")
        return {
            "path": file_name,
            "url": StorageService.public_url(bucket, file_name),
            "fileName": file_name,
            "productId": product["id"],
        }

    @staticmethod
    def delete_image(product_id: str | None) -> None:
        """
        Remove a product's detail image and clear the column.

        Raises:
            BadRequestError: Product has no image
        """
        product = BeautyProductService._product_image(product_id)
        if not product.get("ProductDetailImage"):
            raise BadRequestError("Product has no image to delete")

        StorageService.remove(settings.PRODUCT_IMAGE_BUCKET, [product["ProductDetailImage"]])
        SupabaseClient.update_rows(PRODUCT_TABLE, {"ProductDetailImage": None}, product["id"])
        logger.info(f"Deleted detail image for product {product['id']}")
