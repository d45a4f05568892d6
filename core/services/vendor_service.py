# =============================================================================
# core/services/vendor_service.py - Vendor Directory Business Logic
# =============================================================================
# Handles vendor listings for both faces of the API:
# - Public: published vendors with approved images, region list
# - Manager: CRUD over vendors + category mapping, counts, advertisement
#   settings with audit logging, search embeddings, partner outreach SMS
#
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder, parse_sort
from lib.relations import update_relations, fetch_mapped_ids
from lib.utils import (
    days_from_now_iso,
    drop_none,
    generate_slug,
    utc_now_iso,
    validate_required_fields,
)
from lib import embeddings, sms
from app.config import settings
from app.exceptions import (
    BadRequestError,
    DatabaseError,
    ExternalServiceError,
    MissingFieldsError,
    ResourceNotFoundError,
    ServiceNotConfiguredError,
)
from core.models.vendor import (
    AdvertisementUpdate,
    VendorCreate,
    VendorStatus,
    VendorUpdate,
)

logger = logging.getLogger(__name__)

VENDOR_TABLE = "vendors"
VENDOR_VIEW = "vendors_with_categories"
CATEGORY_TABLE = "vendor_categories"
CATEGORY_MAP_TABLE = "vendor_category_map"
IMAGE_TABLE = "vendor_images"
AD_LOG_TABLE = "advertisement_logs"

VENDOR_SEARCH_FIELDS = ["name", "description_md", "phone"]

PARTNER_MESSAGE_TEMPLATE = """(광고)닥터서포트 파트너 문자입니다.

{vendor_name}님 안녕하세요.

대한민국 20만 개원의사 플랫폼 닥터서포트입니다. 닥터서포트는 여러 파트너사들과 원장님들을 연결해드리기 위해 힘쓰고 있습니다.

본사이트에 저장된 귀 사의 정보는

{description}

와 같으며

더 나은 정보제공을 위해 업데이트를 진행하시면 더 많은 개원의사 선생님들께 전달될 수 있습니다.

많은 참여를 부탁드립니다.

상세보기링크 : {detail_link}"""


def _apply_admin_filters(
    query: Any,
    search: str | None,
    status: str | None,
    is_advertisement: bool | None,
) -> QueryBuilder:
    """Search/status/advertisement filters shared by list, count and by-category."""
    now = utc_now_iso()
    return (
        QueryBuilder(query)
        .search(search, VENDOR_SEARCH_FIELDS)
        .status(status)
        .filter(is_advertisement is True, lambda q: q.gt("advertisement_expires_at", now))
        .filter(
            is_advertisement is False,
            lambda q: q.or_(f"advertisement_expires_at.lt.{now},advertisement_expires_at.is.null"),
        )
    )


class VendorService:
    """
    Service for vendor directory operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Public Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def list_published(
        limit: int = 50,
        offset: int = 0,
        search: str | None = None,
        category_slug: str | None = None,
        region: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        List published vendors for the consumer directory.

        Args:
            limit: Page size
            offset: Rows to skip
            search: Matches name, description or phone
            category_slug: vendor_categories.slug to restrict to
            region: Exact match on vendors.state

        Returns:
            Tuple of (vendors with "images", total count)
        """
        client = SupabaseClient.get_client()

        vendor_ids = None
        if category_slug:
            category = (
                client.table(CATEGORY_TABLE)
                .select("id")
                .eq("slug", category_slug)
                .limit(1)
                .execute()
            ).data
            if not category:
                return [], 0
            vendor_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", category[0]["id"], "vendor_id")
            if not vendor_ids:
                return [], 0

        query = (
            client.table(VENDOR_TABLE)
            .select("*", count="exact")
            .eq("status", VendorStatus.PUBLISHED.value)
        )

        try:
            vendors, total = (
                QueryBuilder(query)
                .filter(vendor_ids is not None, lambda q: q.in_("id", vendor_ids))
                .search(search, VENDOR_SEARCH_FIELDS)
                .filter(region, lambda q: q.eq("state", region))
                .sort("priority_score", "desc")
                .sort("created_at", "desc")
                .slice(offset, limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list vendors: {e}")
            raise

        VendorService.attach_images(vendors)
        return vendors, total

    @staticmethod
    def get_published(vendor_id: str | UUID) -> dict[str, Any]:
        """
        Get one published vendor with its approved images.

        Raises:
            ResourceNotFoundError: Missing or not published
        """
        vendor = SupabaseClient.fetch_one(VENDOR_TABLE, vendor_id)
        if not vendor or vendor.get("status") != VendorStatus.PUBLISHED.value:
            raise ResourceNotFoundError("Vendor", vendor_id)

        VendorService.attach_images([vendor])
        return vendor

    @staticmethod
    def attach_images(vendors: list[dict[str, Any]]) -> None:
        """
        Set vendor["images"] to approved images, primary first then sort_order.

        One query for the whole page rather than one per vendor.
        """
        if not vendors:
            return

        client = SupabaseClient.get_client()
        ids = [v["id"] for v in vendors]
        images = (
            client.table(IMAGE_TABLE)
            .select("*")
            .in_("vendor_id", ids)
            .eq("status", "approved")
            .order("is_primary", desc=True)
            .order("sort_order")
            .execute()
        ).data or []

        by_vendor: dict[Any, list[dict[str, Any]]] = {}
        for image in images:
            if image.get("storage_path") and not image.get("image_url"):
                image["image_url"] = SupabaseClient.public_url(settings.VENDOR_IMAGE_BUCKET, image["storage_path"])
            by_vendor.setdefault(image["vendor_id"], []).append(image)

        for vendor in vendors:
            vendor["images"] = by_vendor.get(vendor["id"], [])

    @staticmethod
    def list_regions() -> list[str]:
        """
        Distinct service areas across published vendors.

        service_areas is free text like "서울, 경기"; values are split on
        commas, trimmed, de-duplicated and sorted.
        """
        client = SupabaseClient.get_client()
        rows = (
            client.table(VENDOR_TABLE)
            .select("service_areas")
            .eq("status", VendorStatus.PUBLISHED.value)
            .not_.is_("service_areas", "null")
            .execute()
        ).data or []

        regions = {
            area.strip()
            for row in rows
            for area in (row.get("service_areas") or "").split(",")
            if area.strip()
        }
        return sorted(regions)

    # -------------------------------------------------------------------------
    # Manager Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def list_for_admin(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        status: str | None = None,
        category_id: str | None = None,
        is_advertisement: bool | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        List vendors with their categories from the vendors_with_categories view.

        Args:
            category_id: Keep vendors whose categories JSON contains this id
            is_advertisement: True = ad running now, False = expired or never set

        Returns:
            Tuple of (vendors, total count)
        """
        client = SupabaseClient.get_client()
        column, descending = parse_sort(sort_field, sort_direction, "priority_score", "desc")

        query = client.table(VENDOR_VIEW).select("*", count="exact")
        if category_id:
            query = query.filter("categories", "cs", f'[{{"id":"{category_id}"}}]')

        try:
            return (
                _apply_admin_filters(query, search, status, is_advertisement)
                .sort(column, "desc" if descending else "asc")
                .paginate(page, limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list vendors for admin: {e}")
            raise

    @staticmethod
    def count_for_admin(
        search: str | None = None,
        status: str | None = None,
        category_id: str | None = None,
        is_advertisement: bool | None = None,
    ) -> int:
        """Count vendors matching the admin filters (category via the map table)."""
        client = SupabaseClient.get_client()

        vendor_ids = None
        if category_id:
            vendor_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", category_id, "vendor_id")
            if not vendor_ids:
                return 0

        query = client.table(VENDOR_TABLE).select("id", count="exact")
        _, total = (
            _apply_admin_filters(query, search, status, is_advertisement)
            .filter(vendor_ids is not None, lambda q: q.in_("id", vendor_ids))
            .execute()
        )
        return total

    @staticmethod
    def list_by_category(
        category_id: str,
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        status: str | None = None,
        is_advertisement: bool | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """Vendors mapped to one category, paginated."""
        vendor_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "category_id", category_id, "vendor_id")
        if not vendor_ids:
            return [], 0

        client = SupabaseClient.get_client()
        column, descending = parse_sort(sort_field, sort_direction, "priority_score", "desc")
        query = client.table(VENDOR_TABLE).select("*", count="exact").in_("id", vendor_ids)

        return (
            _apply_admin_filters(query, search, status, is_advertisement)
            .sort(column, "desc" if descending else "asc")
            .paginate(page, limit)
            .execute()
        )

    # -------------------------------------------------------------------------
    # Manager CRUD
    # -------------------------------------------------------------------------

    @staticmethod
    def get_vendor(vendor_id: str | UUID) -> dict[str, Any]:
        """
        Get a vendor with its categories (any status).

        Raises:
            ResourceNotFoundError: If vendor doesn't exist
        """
        vendor = SupabaseClient.fetch_one(VENDOR_TABLE, vendor_id)
        if not vendor:
            raise ResourceNotFoundError("Vendor", vendor_id)

        category_ids = fetch_mapped_ids(CATEGORY_MAP_TABLE, "vendor_id", vendor_id, "category_id")
        categories = []
        if category_ids:
            client = SupabaseClient.get_client()
            categories = (
                client.table(CATEGORY_TABLE)
                .select("id, name, slug")
                .in_("id", category_ids)
                .order("name")
                .execute()
            ).data or []

        vendor["categories"] = categories
        vendor["category_ids"] = [c["id"] for c in categories]
        return vendor

    @staticmethod
    def create_vendor(request: VendorCreate) -> dict[str, Any]:
        """
        Create a vendor and its category mapping.

        Raises:
            MissingFieldsError: If name is blank
        """
        body = request.model_dump()
        missing = validate_required_fields(body, ["name"])
        if missing:
            raise MissingFieldsError(missing)

        category_ids = body.pop("category_ids") or []
        data = {
            **drop_none(body),
            "slug": generate_slug(request.name),
            "status": request.status.value,
            "is_certified": bool(request.is_certified),
            "priority_score": request.priority_score or 0,
            "advertisement_tier": request.advertisement_tier or "none",
        }

        try:
            vendor = SupabaseClient.insert_one(VENDOR_TABLE, data)
        except Exception as e:
            logger.error(f"Failed to create vendor: {e}")
            raise

        if category_ids:
            update_relations(CATEGORY_MAP_TABLE, "vendor_id", vendor["id"], "category_id", category_ids)

        logger.info(f"Created vendor: {vendor['id']} ({vendor.get('name')})")
        return vendor

    @staticmethod
    def update_vendor(vendor_id: str | UUID, request: VendorUpdate) -> dict[str, Any]:
        """
        Update provided vendor fields.

        A new name regenerates the slug. When category_ids is given the
        mapping is replaced; a mapping failure is logged, not raised, so
        the field update still goes through.

        Raises:
            ResourceNotFoundError: If vendor doesn't exist
        """
        body = request.model_dump(exclude_unset=True)
        category_ids = body.pop("category_ids", None)

        data = drop_none(body)
        if data.get("status") is not None:
            data["status"] = VendorStatus(data["status"]).value
        if data.get("name"):
            data["slug"] = generate_slug(data["name"])
        data["updated_at"] = utc_now_iso()

        try:
            rows = SupabaseClient.update_rows(VENDOR_TABLE, data, vendor_id)
        except Exception as e:
            logger.error(f"Failed to update vendor {vendor_id}: {e}")
            raise

        if not rows:
            raise ResourceNotFoundError("Vendor", vendor_id)

        if category_ids is not None:
            try:
                update_relations(CATEGORY_MAP_TABLE, "vendor_id", vendor_id, "category_id", category_ids)
            except Exception as e:
                logger.warning(f"Category update failed for vendor {vendor_id}: {e}")

        logger.info(f"Updated vendor: {vendor_id}")
        return rows[0]

    @staticmethod
    def delete_vendor(vendor_id: str | UUID) -> None:
        """
        Delete a vendor after its category mapping rows.

        Raises:
            ResourceNotFoundError: If vendor doesn't exist
        """
        if not SupabaseClient.fetch_one(VENDOR_TABLE, vendor_id, columns="id"):
            raise ResourceNotFoundError("Vendor", vendor_id)

        SupabaseClient.delete_rows(CATEGORY_MAP_TABLE, vendor_id, column="vendor_id")
        SupabaseClient.delete_rows(VENDOR_TABLE, vendor_id)
        logger.info(f"Deleted vendor: {vendor_id}")

    # -------------------------------------------------------------------------
    # Advertisement
    # -------------------------------------------------------------------------

    @staticmethod
    def get_advertisement(vendor_id: str | UUID) -> dict[str, Any]:
        vendor = SupabaseClient.fetch_one(
            VENDOR_TABLE,
            vendor_id,
            columns="id, name, advertisement_tier, advertisement_image_url, advertisement_expires_at, priority_score",
        )
        if not vendor:
            raise ResourceNotFoundError("Vendor", vendor_id)
        return vendor

    @staticmethod
    def set_advertisement(
        vendor_id: str | UUID,
        request: AdvertisementUpdate,
        actor: str = "admin",
    ) -> dict[str, Any]:
        """
        Apply advertisement settings and record an advertisement_logs entry.

        Active (tier set and not "none"): expiry = now + duration days when a
        duration is given, otherwise the supplied expiry.
        Inactive: expiry = now, which ends the ad immediately.

        Args:
            vendor_id: The vendor UUID
            request: New advertisement settings
            actor: Recorded as advertisement_logs.created_by

        Returns:
            Updated vendor row

        Raises:
            ResourceNotFoundError: If vendor doesn't exist
        """
        previous = SupabaseClient.fetch_one(
            VENDOR_TABLE,
            vendor_id,
            columns="advertisement_expires_at, advertisement_tier, priority_score",
        )
        if not previous:
            raise ResourceNotFoundError("Vendor", vendor_id)

        active = request.is_active
        expires_at = request.advertisement_expires_at
        if active and request.advertisement_duration_days:
            expires_at = days_from_now_iso(request.advertisement_duration_days)
        if not active:
            expires_at = utc_now_iso()

        data = {
            "advertisement_tier": request.advertisement_tier,
            "advertisement_image_url": request.advertisement_image_url,
            "advertisement_expires_at": expires_at,
            "priority_score": request.priority_score,
            "updated_at": utc_now_iso(),
        }
        rows = SupabaseClient.update_rows(VENDOR_TABLE, data, vendor_id)
        if not rows:
            raise DatabaseError("update advertisement", "update returned no rows")

        log = {
            "vendor_id": str(vendor_id),
            "action": "activate" if active else "deactivate",
            "previous_expires_at": previous.get("advertisement_expires_at"),
            "new_expires_at": expires_at,
            "previous_tier": previous.get("advertisement_tier"),
            "new_tier": request.advertisement_tier,
            "previous_priority_score": previous.get("priority_score") or 0,
            "new_priority_score": request.priority_score,
            "duration_days": request.advertisement_duration_days if active else None,
            "reason": (
                f"광고 활성화 ({request.advertisement_duration_days}일)" if active else "광고 비활성화"
            ),
            "created_by": actor,
        }
        try:
            SupabaseClient.insert_one(AD_LOG_TABLE, log)
        except Exception as e:
            logger.warning(f"Failed to write advertisement log for vendor {vendor_id}: {e}")

        logger.info(f"Advertisement {log['action']}d for vendor {vendor_id} until {expires_at}")
        return rows[0]

    # -------------------------------------------------------------------------
    # Search Embedding
    # -------------------------------------------------------------------------

    @staticmethod
    def refresh_embedding(vendor_id: str | UUID, description_md: str | None) -> dict[str, Any]:
        """
        Embed a vendor description and store it in search_embedding.

        Raises:
            MissingFieldsError: If description_md is blank
            ServiceNotConfiguredError: If OPENAI_API_KEY is unset
            ExternalServiceError: If the embeddings API fails
            ResourceNotFoundError: If vendor doesn't exist
        """
        if not description_md or not description_md.strip():
            raise MissingFieldsError(["description_md"])
        if not settings.OPENAI_API_KEY:
            raise ServiceNotConfiguredError("Embeddings", ["OPENAI_API_KEY"])

        try:
            vector = embeddings.embed_text(description_md)
        except Exception as e:
            logger.error(f"Embedding failed for vendor {vendor_id}: {e}")
            raise ExternalServiceError("OpenAI", str(e))

        rows = SupabaseClient.update_rows(
            VENDOR_TABLE,
            {"search_embedding": embeddings.to_pgvector(vector), "updated_at": utc_now_iso()},
            vendor_id,
        )
        if not rows:
            raise ResourceNotFoundError("Vendor", vendor_id)

        logger.info(f"Stored {len(vector)}-dim embedding for vendor {vendor_id}")
        return rows[0]

    # -------------------------------------------------------------------------
    # Partner Outreach SMS
    # -------------------------------------------------------------------------

    @staticmethod
    def partner_detail_link(vendor_id: str | UUID) -> str:
        return f"{settings.PARTNER_DETAIL_BASE_URL.rstrip('/')}/{vendor_id}"

    @staticmethod
    def build_partner_message(vendor: dict[str, Any]) -> str:
        """Render the outreach text for a vendor."""
        return PARTNER_MESSAGE_TEMPLATE.format(
            vendor_name=vendor.get("name") or "",
            description=vendor.get("description_md") or "(등록된 정보 없음)",
            detail_link=VendorService.partner_detail_link(vendor["id"]),
        )

    @staticmethod
    def _outreach_vendor(vendor_id: str | None) -> dict[str, Any]:
        if not vendor_id:
            raise MissingFieldsError(["vendor_id"])
        vendor = SupabaseClient.fetch_one(
            VENDOR_TABLE, vendor_id, columns="id, name, description_md, phone, mobile"
        )
        if not vendor:
            raise ResourceNotFoundError("Vendor", vendor_id)
        return vendor

    @staticmethod
    def preview_partner_sms(vendor_id: str | None) -> dict[str, Any]:
        """Outreach message preview plus the vendor's numbers."""
        vendor = VendorService._outreach_vendor(vendor_id)
        return {
            "vendor_id": vendor["id"],
            "vendor_name": vendor.get("name"),
            "phone": vendor.get("phone"),
            "mobile": vendor.get("mobile"),
            "preview_message": VendorService.build_partner_message(vendor),
            "detail_link": VendorService.partner_detail_link(vendor["id"]),
        }

    @staticmethod
    def send_partner_sms(vendor_id: str | None, to_number: str | None) -> dict[str, Any]:
        """
        Send the outreach message to a vendor.

        Raises:
            MissingFieldsError: vendor_id or to_number missing
            ServiceNotConfiguredError: Solapi credentials unset
            ExternalServiceError: Gateway rejected the message
        """
        missing = validate_required_fields({"vendor_id": vendor_id, "to_number": to_number}, ["vendor_id", "to_number"])
        if missing:
            raise MissingFieldsError(missing)
        if not settings.sms_configured:
            raise ServiceNotConfiguredError("SMS", ["SOLAPI_API_KEY", "SOLAPI_API_SECRET", "SMS_FROM_NUMBER"])

        vendor = VendorService._outreach_vendor(vendor_id)
        to_clean = sms.clean_phone_number(to_number)
        if not to_clean.isdigit():
            raise BadRequestError(f"Invalid phone number: {to_number}", suggestion="Use digits and hyphens only")

        message = VendorService.build_partner_message(vendor)
        logger.info(f"Sending partner SMS to vendor {vendor['id']} ({len(message)} chars)")

        try:
            result = sms.send_message(to_clean, message)
        except sms.SmsGatewayError as e:
            raise ExternalServiceError("Solapi", e.message)

        return {
            "vendor_name": vendor.get("name"),
            "to_number": to_clean,
            "solapi_result": result,
        }
