# =============================================================================
# core/services/product_contact_service.py - Supplier Contacts
# =============================================================================
# Supplier contacts (beauty_product_contacts) link to products through
# beauty_product_contacts_map_uuid. The manager "contacts" screen is keyed
# by mapping row: one entry per (product, contact) pair. The
# "contact-products" screen is keyed by contact, listing its products.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder, build_search_filter, page_range, parse_sort
from lib.utils import validate_required_fields
from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.beauty_product import ProductContactCreate, ProductContactUpdate

logger = logging.getLogger(__name__)

CONTACT_TABLE = "beauty_product_contacts"
CONTACT_MAP_TABLE = "beauty_product_contacts_map_uuid"
PRODUCT_TABLE = "beauty_products"

CONTACT_COLUMNS = ["company_name_ko", "company_name_en", "contact_number", "company_homepage", "person_in_charge"]
PRODUCT_COLUMNS = "id, ProductName, ProductNameEN, ProductManufacturer, ProductDetailImage, is_active"


def format_product(product: dict[str, Any] | None) -> dict[str, Any]:
    product = product or {}
    return {
        "id": product.get("id"),
        "name": product.get("ProductName"),
        "name_en": product.get("ProductNameEN"),
        "brand": product.get("ProductManufacturer"),
        "image_url": product.get("ProductDetailImage"),
    }


def format_contact(contact: dict[str, Any] | None) -> dict[str, Any]:
    contact = contact or {}
    return {"id": contact.get("id"), **{col: contact.get(col) for col in CONTACT_COLUMNS}}


def _in_list(ids: list[Any]) -> str:
    return ",".join(str(i) for i in ids)


class ProductContactService:
    """Service for product/contact pairs and contact-centric listings."""

    # -------------------------------------------------------------------------
    # Mapping-Keyed Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def _mapping_query(columns: str, search: str | None, product_id: str | None) -> QueryBuilder | None:
        """
        Base query over mapping rows.

        Search matches product name/manufacturer or contact company names;
        it is resolved to ids first so the filter stays on the mapping
        table. Returns None when a search matches nothing.
        """
        client = SupabaseClient.get_client()
        query = client.table(CONTACT_MAP_TABLE).select(columns, count="exact")

        product_filter = build_search_filter(search, ["ProductName", "ProductManufacturer"])
        if product_filter:
            product_ids = [
                row["id"]
                for row in (client.table(PRODUCT_TABLE).select("id").or_(product_filter).execute()).data or []
            ]
            contact_ids = [
                row["id"]
                for row in (
                    client.table(CONTACT_TABLE)
                    .select("id")
                    .or_(build_search_filter(search, ["company_name_ko", "company_name_en"]))
                    .execute()
                ).data or []
            ]
            clauses = []
            if product_ids:
                clauses.append(f"product_id.in.({_in_list(product_ids)})")
            if contact_ids:
                clauses.append(f"contact_id.in.({_in_list(contact_ids)})")
            if not clauses:
                return None
            query = query.or_(",".join(clauses))

        return QueryBuilder(query).filter(product_id, lambda q: q.eq("product_id", product_id))

    @staticmethod
    def _attach(mappings: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Join product and contact rows onto mapping rows."""
        if not mappings:
            return []

        client = SupabaseClient.get_client()
        product_ids = list({m["product_id"] for m in mappings})
        contact_ids = list({m["contact_id"] for m in mappings})

        products = {
            row["id"]: row
            for row in (client.table(PRODUCT_TABLE).select(PRODUCT_COLUMNS).in_("id", product_ids).execute()).data or []
        }
        contacts = {
            row["id"]: row
            for row in (client.table(CONTACT_TABLE).select("*").in_("id", contact_ids).execute()).data or []
        }

        return [
            {
                "id": m["id"],
                "product_id": m["product_id"],
                "contact_id": m["contact_id"],
                "product": format_product(products.get(m["product_id"])),
                "contact": format_contact(contacts.get(m["contact_id"])),
                "created_at": m.get("created_at"),
            }
            for m in mappings
        ]

    @staticmethod
    def list_contacts(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        product_id: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Product/contact pairs for the manager table.

        sort_field "product_name" and "company_name" sort on the joined
        rows, so the filtered mapping set is read whole, sorted, then
        sliced. Other fields sort on the mapping table directly.
        """
        column, descending = parse_sort(sort_field, sort_direction, "created_at", "desc")
        builder = ProductContactService._mapping_query("*", search, product_id)
        if builder is None:
            return [], 0

        if column in ("product_name", "company_name"):
            rows, total = builder.execute()
            items = ProductContactService._attach(rows)
            key = (lambda i: i["product"]["name"] or "") if column == "product_name" else (
                lambda i: i["contact"]["company_name_ko"] or ""
            )
            items.sort(key=key, reverse=descending)
            start, end = page_range(page, limit)
            return items[start:end + 1], total

        rows, total = (
            builder
            .sort(column, "desc" if descending else "asc")
            .paginate(page, limit)
            .execute()
        )
        return ProductContactService._attach(rows), total

    @staticmethod
    def count_contacts(search: str | None = None, product_id: str | None = None) -> int:
        builder = ProductContactService._mapping_query("id", search, product_id)
        if builder is None:
            return 0
        _, total = builder.execute()
        return total

    # -------------------------------------------------------------------------
    # Mapping-Keyed CRUD
    # -------------------------------------------------------------------------

    @staticmethod
    def _mapping(mapping_id: str | UUID) -> dict[str, Any]:
        mapping = SupabaseClient.fetch_one(CONTACT_MAP_TABLE, mapping_id)
        if not mapping:
            raise ResourceNotFoundError("Contact", mapping_id)
        return mapping

    @staticmethod
    def get_contact(mapping_id: str | UUID) -> dict[str, Any]:
        return ProductContactService._attach([ProductContactService._mapping(mapping_id)])[0]

    @staticmethod
    def create_contact(request: ProductContactCreate) -> dict[str, Any]:
        """
        Create a contact and link it to a product.

        The two inserts are not atomic: when the mapping insert fails the
        new contact row is deleted again before the error propagates.

        Raises:
            MissingFieldsError: product_id or company_name_ko missing
        """
        missing = validate_required_fields(request.model_dump(), ["product_id", "company_name_ko"])
        if missing:
            raise MissingFieldsError(missing)

        contact = SupabaseClient.insert_one(
            CONTACT_TABLE,
            {col: getattr(request, col) for col in CONTACT_COLUMNS},
        )

        try:
            mapping = SupabaseClient.insert_one(
                CONTACT_MAP_TABLE,
                {"product_id": request.product_id, "contact_id": contact["id"]},
            )
        except Exception as e:
            logger.error(f"Contact mapping failed, rolling back contact {contact['id']}: {e}")
            SupabaseClient.delete_rows(CONTACT_TABLE, contact["id"])
            raise

        logger.info(f"Created contact {contact['id']} for product {request.product_id}")
        return {**mapping, "contact": contact}

    @staticmethod
    def update_contact(mapping_id: str | UUID, request: ProductContactUpdate) -> dict[str, Any]:
        mapping = ProductContactService._mapping(mapping_id)
        data = request.model_dump(exclude_unset=True)
        if not data:
            return SupabaseClient.fetch_one(CONTACT_TABLE, mapping["contact_id"]) or {}

        rows = SupabaseClient.update_rows(CONTACT_TABLE, data, mapping["contact_id"])
        if not rows:
            raise ResourceNotFoundError("Contact", mapping["contact_id"])

        logger.info(f"Updated contact {mapping['contact_id']}")
        return rows[0]

    @staticmethod
    def delete_contact(mapping_id: str | UUID) -> None:
        """Delete the mapping row, then the contact it pointed to."""
        mapping = ProductContactService._mapping(mapping_id)
        SupabaseClient.delete_rows(CONTACT_MAP_TABLE, mapping_id)
        SupabaseClient.delete_rows(CONTACT_TABLE, mapping["contact_id"])
        logger.info(f"Deleted contact {mapping['contact_id']} (mapping {mapping_id})")

    # -------------------------------------------------------------------------
    # Contact-Keyed Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def list_contacts_with_products(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """Contacts with their products and product_count."""
        client = SupabaseClient.get_client()
        column, descending = parse_sort(sort_field, sort_direction, "company_name_ko", "asc")

        contacts, total = (
            QueryBuilder(client.table(CONTACT_TABLE).select("*", count="exact"))
            .search(search, ["company_name_ko", "company_name_en", "person_in_charge"])
            .sort(column, "desc" if descending else "asc")
            .paginate(page, limit)
            .execute()
        )
        if not contacts:
            return [], total

        mappings = (
            client.table(CONTACT_MAP_TABLE)
            .select("product_id, contact_id")
            .in_("contact_id", [c["id"] for c in contacts])
            .execute()
        ).data or []

        products = {}
        product_ids = list({m["product_id"] for m in mappings})
        if product_ids:
            products = {
                row["id"]: row
                for row in (
                    client.table(PRODUCT_TABLE).select(PRODUCT_COLUMNS).in_("id", product_ids).execute()
                ).data or []
            }

        result = []
        for contact in contacts:
            own = [
                {**format_product(products[m["product_id"]]), "is_active": products[m["product_id"]].get("is_active")}
                for m in mappings
                if m["contact_id"] == contact["id"] and m["product_id"] in products
            ]
            result.append({**format_contact(contact), "products": own, "product_count": len(own)})
        return result, total
