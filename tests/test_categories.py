# =============================================================================
# tests/test_categories.py - Vendor Category & Department Tests
# =============================================================================
# Tests for /manager-api/vendor-categories, /manager-api/categories and
# /manager-api/departments.
#
# Run with: pytest tests/test_categories.py -v
# =============================================================================

import pytest

CATEGORY_MAP = "vendor_category_map"


@pytest.fixture
def directory(fake_db):
    fake_db.seed("vendor_categories", [
        {"id": "cat-int", "name": "인테리어", "slug": "interior"},
        {"id": "cat-med", "name": "의료기기", "slug": "devices"},
        {"id": "cat-tax", "name": "세무", "slug": "tax"},
    ])
    fake_db.seed("vendors", [
        {"id": "v1", "name": "메디 인테리어", "status": "published"},
        {"id": "v2", "name": "헬스 디바이스", "status": "published"},
    ])
    fake_db.seed(CATEGORY_MAP, [
        {"category_id": "cat-int", "vendor_id": "v1"},
        {"category_id": "cat-int", "vendor_id": "v2"},
        {"category_id": "cat-med", "vendor_id": "v2"},
    ])
    return fake_db


class TestVendorCategories:
    """Tests for /manager-api/vendor-categories."""

    def test_list_with_vendor_counts(self, client, directory, auth_headers):
        body = client.get("/manager-api/vendor-categories", headers=auth_headers).json()

        counts = {c["slug"]: c["vendor_count"] for c in body["data"]}
        assert counts == {"interior": 2, "devices": 1, "tax": 0}
        assert body["total"] == 3

    def test_search_and_sort(self, client, directory, auth_headers):
        body = client.get(
            "/manager-api/vendor-categories",
            params={"search": "e", "sortField": "slug", "sortDirection": "desc"},
            headers=auth_headers,
        ).json()

        assert [c["slug"] for c in body["data"]] == ["interior", "devices"]

    def test_create_generates_slug(self, client, directory, auth_headers):
        response = client.post(
            "/manager-api/vendor-categories",
            json={"name": "Medical Devices 2"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "medical-devices-2"
        assert response.json()["data"]["is_active"] is True

    def test_create_requires_name(self, client, directory, auth_headers):
        response = client.post("/manager-api/vendor-categories", json={"slug": "x"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_get_with_vendors(self, client, directory, auth_headers):
        body = client.get("/manager-api/vendor-categories/cat-int", headers=auth_headers).json()

        assert sorted(v["name"] for v in body["data"]["vendors"]) == ["메디 인테리어", "헬스 디바이스"]

    def test_get_empty_category(self, client, directory, auth_headers):
        body = client.get("/manager-api/vendor-categories/cat-tax", headers=auth_headers).json()

        assert body["data"]["vendors"] == []

    def test_rename_regenerates_slug(self, client, directory, auth_headers):
        response = client.put(
            "/manager-api/vendor-categories/cat-tax",
            json={"name": "Tax Accounting"},
            headers=auth_headers,
        )

        assert response.json()["data"]["slug"] == "tax-accounting"

    def test_update_unknown_is_404(self, client, directory, auth_headers):
        response = client.put("/manager-api/vendor-categories/nope", json={"name": "x"}, headers=auth_headers)

        assert response.status_code == 404

    def test_delete_keeps_vendors(self, client, directory, auth_headers):
        response = client.delete("/manager-api/vendor-categories/cat-int", headers=auth_headers)

        assert response.status_code == 200
        assert [m["category_id"] for m in directory.all(CATEGORY_MAP)] == ["cat-med"]
        assert len(directory.all("vendors")) == 2
        assert "cat-int" not in [c["id"] for c in directory.all("vendor_categories")]

    def test_delete_unknown_is_404(self, client, directory, auth_headers):
        assert client.delete("/manager-api/vendor-categories/nope", headers=auth_headers).status_code == 404

    def test_link_vendors_is_idempotent(self, client, directory, auth_headers):
        # Arrange: v1 is already in cat-int, v2 is new to cat-tax
        client.post("/manager-api/vendor-categories/cat-int/vendors", json={"vendor_ids": ["v1"]}, headers=auth_headers)

        # Act
        response = client.post(
            "/manager-api/vendor-categories/cat-tax/vendors",
            json={"vendor_ids": ["v2", "v2"]},
            headers=auth_headers,
        )

        # Assert
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1
        assert len(directory.all(CATEGORY_MAP)) == 4

    def test_link_requires_vendor_ids(self, client, directory, auth_headers):
        response = client.post("/manager-api/vendor-categories/cat-tax/vendors", json={"vendor_ids": []}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_unlink_vendor(self, client, directory, auth_headers):
        response = client.delete(
            "/manager-api/vendor-categories/cat-int/vendors",
            params={"vendor_id": "v2"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        remaining = [(m["category_id"], m["vendor_id"]) for m in directory.all(CATEGORY_MAP)]
        assert remaining == [("cat-int", "v1"), ("cat-med", "v2")]

    def test_unlink_requires_vendor_id(self, client, directory, auth_headers):
        response = client.delete("/manager-api/vendor-categories/cat-int/vendors", headers=auth_headers)

        assert response.status_code == 400


class TestCategoriesAndDepartments:
    """Tests for /manager-api/categories and /manager-api/departments."""

    def test_categories_by_name(self, client, directory, auth_headers):
        body = client.get("/manager-api/categories", headers=auth_headers).json()

        assert [c["name"] for c in body["data"]] == sorted(["인테리어", "의료기기", "세무"])

    def test_quick_create(self, client, directory, auth_headers):
        response = client.post("/manager-api/categories", json={"name": "법무", "slug": "law"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "law"

    def test_departments(self, client, fake_db, auth_headers):
        fake_db.seed("medical_departments", [{"name": "피부과"}, {"name": "내과"}])

        created = client.post("/manager-api/departments", json={"name": "Plastic Surgery"}, headers=auth_headers)
        listed = client.get("/manager-api/departments", headers=auth_headers).json()

        assert created.status_code == 201
        assert created.json()["data"]["slug"] == "plastic-surgery"
        assert [d["name"] for d in listed["data"]] == sorted(["피부과", "내과", "Plastic Surgery"])

    def test_department_requires_name(self, client, fake_db, auth_headers):
        assert client.post("/manager-api/departments", json={}, headers=auth_headers).status_code == 400

    def test_requires_auth(self, client, fake_db):
        assert client.get("/manager-api/departments").status_code == 401
