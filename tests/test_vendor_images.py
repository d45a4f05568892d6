# =============================================================================
# tests/test_vendor_images.py - Vendor Gallery Tests
# =============================================================================
# Tests for /manager-api/vendors/{id}/images: upload to the vendor_images
# bucket, primary image handling, cleanup on failed inserts and deletion.
#
# Run with: pytest tests/test_vendor_images.py -v
# =============================================================================

import uuid

import pytest

from app.config import settings

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
BUCKET = "vendor_images"


@pytest.fixture
def vendor_id(fake_db):
    vendor_id = str(uuid.uuid4())
    fake_db.seed("vendors", [{"id": vendor_id, "name": "메디 인테리어", "status": "published"}])
    return vendor_id


def _images_url(vendor_id: str) -> str:
    return f"/manager-api/vendors/{vendor_id}/images"


class TestUpload:
    """POST /manager-api/vendors/{id}/images"""

    def test_upload_stores_file_and_row(self, client, fake_db, vendor_id, auth_headers):
        # Act
        response = client.post(
            _images_url(vendor_id),
            files={"file": ("front.PNG", PNG, "image/png")},
            data={"alt_text": "입구", "sort_order": "2"},
            headers=auth_headers,
        )

        # Assert
        assert response.status_code == 201
        image = response.json()["data"]
        assert image["storage_path"].startswith(f"{vendor_id}/")
        assert image["storage_path"].endswith(".png")
        assert image["alt_text"] == "입구"
        assert image["sort_order"] == 2
        assert image["is_primary"] is False
        assert image["image_url"] == (
            f"https://test-project.supabase.co/storage/v1/object/public/{BUCKET}/{image['storage_path']}"
        )
        assert fake_db.storage.objects[BUCKET][image["storage_path"]] == PNG

    def test_primary_upload_clears_previous_primary(self, client, fake_db, vendor_id, auth_headers):
        fake_db.seed("vendor_images", [{"vendor_id": vendor_id, "storage_path": "old.png", "is_primary": True}])

        client.post(
            _images_url(vendor_id),
            files={"file": ("new.jpg", PNG, "image/jpeg")},
            data={"is_primary": "true"},
            headers=auth_headers,
        )

        primaries = [img["storage_path"] for img in fake_db.all("vendor_images") if img["is_primary"]]
        assert len(primaries) == 1
        assert primaries[0] != "old.png"

    def test_rejects_unsupported_type(self, client, fake_db, vendor_id, auth_headers):
        response = client.post(
            _images_url(vendor_id),
            files={"file": ("brochure.pdf", b"%PDF-1.4", "application/pdf")},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"
        assert fake_db.storage.objects == {}

    def test_rejects_oversized_file(self, client, fake_db, vendor_id, auth_headers, monkeypatch):
        monkeypatch.setattr(settings, "VENDOR_IMAGE_MAX_MB", 0)

        response = client.post(
            _images_url(vendor_id),
            files={"file": ("big.png", PNG, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 413
        assert response.json()["code"] == "FILE_TOO_LARGE"

    def test_storage_failure_is_500(self, client, fake_db, vendor_id, auth_headers):
        fake_db.storage.fail_upload = True

        response = client.post(
            _images_url(vendor_id),
            files={"file": ("front.png", PNG, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_UPLOAD_ERROR"
        assert fake_db.all("vendor_images") == []

    def test_failed_insert_removes_uploaded_file(self, client, fake_db, vendor_id, auth_headers):
        fake_db.fail("vendor_images", "insert")

        response = client.post(
            _images_url(vendor_id),
            files={"file": ("front.png", PNG, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"
        assert fake_db.storage.objects[BUCKET] == {}

    def test_invalid_vendor_id_is_422(self, client, fake_db, auth_headers):
        response = client.post(
            _images_url("not-a-uuid"),
            files={"file": ("front.png", PNG, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 422


class TestManageImages:
    """GET / PUT / DELETE on a vendor's images."""

    @pytest.fixture
    def gallery(self, fake_db, vendor_id):
        fake_db.storage.objects[BUCKET] = {f"{vendor_id}/a.png": PNG, f"{vendor_id}/b.png": PNG}
        return fake_db.seed("vendor_images", [
            {"id": "img-a", "vendor_id": vendor_id, "storage_path": f"{vendor_id}/a.png",
             "is_primary": True, "sort_order": 1},
            {"id": "img-b", "vendor_id": vendor_id, "storage_path": f"{vendor_id}/b.png",
             "is_primary": False, "sort_order": 0},
        ])

    def test_list_in_sort_order_with_urls(self, client, vendor_id, gallery, auth_headers):
        body = client.get(_images_url(vendor_id), headers=auth_headers).json()

        assert [img["id"] for img in body["data"]] == ["img-b", "img-a"]
        assert body["data"][0]["image_url"].endswith(f"/{BUCKET}/{vendor_id}/b.png")

    def test_make_primary_clears_others(self, client, fake_db, vendor_id, gallery, auth_headers):
        response = client.put(f"{_images_url(vendor_id)}/img-b", json={"is_primary": True}, headers=auth_headers)

        assert response.json()["data"]["is_primary"] is True
        flags = {img["id"]: img["is_primary"] for img in fake_db.all("vendor_images")}
        assert flags == {"img-a": False, "img-b": True}

    def test_unknown_image_keeps_current_primary(self, client, fake_db, vendor_id, gallery, auth_headers):
        # Act
        response = client.put(
            f"{_images_url(vendor_id)}/does-not-exist",
            json={"is_primary": True},
            headers=auth_headers,
        )

        # Assert: 404 and img-a is still the primary image
        assert response.status_code == 404
        flags = {img["id"]: img["is_primary"] for img in fake_db.all("vendor_images")}
        assert flags == {"img-a": True, "img-b": False}

    def test_update_without_fields_is_400(self, client, vendor_id, gallery, auth_headers):
        response = client.put(f"{_images_url(vendor_id)}/img-b", json={}, headers=auth_headers)

        assert response.status_code == 400

    def test_update_image_of_other_vendor_is_404(self, client, gallery, auth_headers):
        response = client.put(f"{_images_url(str(uuid.uuid4()))}/img-a", json={"alt_text": "x"}, headers=auth_headers)

        assert response.status_code == 404

    def test_delete_removes_row_and_file(self, client, fake_db, vendor_id, gallery, auth_headers):
        response = client.delete(_images_url(vendor_id), params={"image_id": "img-a"}, headers=auth_headers)

        assert response.status_code == 200
        assert [img["id"] for img in fake_db.all("vendor_images")] == ["img-b"]
        assert list(fake_db.storage.objects[BUCKET]) == [f"{vendor_id}/b.png"]

    def test_delete_survives_storage_failure(self, client, fake_db, vendor_id, gallery, auth_headers):
        fake_db.storage.fail_remove = True

        response = client.delete(_images_url(vendor_id), params={"image_id": "img-a"}, headers=auth_headers)

        assert response.status_code == 200
        assert [img["id"] for img in fake_db.all("vendor_images")] == ["img-b"]

    def test_delete_through_other_vendor_is_404(self, client, fake_db, gallery, auth_headers):
        other_vendor = str(uuid.uuid4())

        response = client.delete(_images_url(other_vendor), params={"image_id": "img-a"}, headers=auth_headers)

        assert response.status_code == 404
        assert sorted(img["id"] for img in fake_db.all("vendor_images")) == ["img-a", "img-b"]
        assert len(fake_db.storage.objects[BUCKET]) == 2

    def test_delete_requires_image_id(self, client, vendor_id, gallery, auth_headers):
        assert client.delete(_images_url(vendor_id), headers=auth_headers).status_code == 400

    def test_delete_unknown_image_is_404(self, client, vendor_id, gallery, auth_headers):
        response = client.delete(_images_url(vendor_id), params={"image_id": "nope"}, headers=auth_headers)

        assert response.status_code == 404
