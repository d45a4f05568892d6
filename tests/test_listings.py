# =============================================================================
# tests/test_listings.py - Job Post, Seminar and Clinic Location Tests
# =============================================================================
# Tests for the classified-style listings, public and manager side:
# - Job board: live-only listing, one live post per user, owner checks
# - Seminars: month filter, active-only public view
# - Clinic locations: size bounds, favourites, toggles
#
# Run with: pytest tests/test_listings.py -v
# =============================================================================

import uuid

import pytest

FUTURE = "2999-01-01T00:00:00+00:00"
PAST = "2000-01-01T00:00:00+00:00"

JOB_BODY = {
    "title": "피부과 봉직의 모집",
    "hospital_name": "강남 피부과",
    "location": "서울 강남구",
    "job_type": "정규직",
    "description": "주 4일 근무",
    "departments": ["피부과"],
}


def _post(**fields) -> dict:
    return {
        "id": str(uuid.uuid4()),
        "title": "공고",
        "status": "active",
        "expires_at": FUTURE,
        "is_paid": False,
        "urgent": False,
        **fields,
    }


# =============================================================================
# Job Posts
# =============================================================================

class TestPublicJobBoard:
    """Tests for /api/job-posts."""

    def test_only_live_posts_paid_then_urgent(self, client, fake_db):
        # Arrange
        fake_db.seed("job_posts", [
            _post(title="plain", created_at="2024-01-03T00:00:00+00:00"),
            _post(title="urgent", urgent=True, created_at="2024-01-01T00:00:00+00:00"),
            _post(title="paid", is_paid=True, created_at="2024-01-02T00:00:00+00:00"),
            _post(title="expired", expires_at=PAST),
            _post(title="closed", status="closed"),
        ])

        # Act
        body = client.get("/api/job-posts").json()

        # Assert
        assert [p["title"] for p in body["data"]] == ["paid", "urgent", "plain"]
        assert body["total"] == 3

    def test_filters_ignore_jeonche(self, client, fake_db):
        fake_db.seed("job_posts", [
            _post(title="a", location="서울 강남구", job_type="정규직", departments=["피부과"]),
            _post(title="b", location="부산 해운대구", job_type="파트타임", departments=["성형외과"]),
        ])

        everything = client.get("/api/job-posts", params={"location": "전체", "jobType": "전체"}).json()
        seoul = client.get("/api/job-posts", params={"location": "서울"}).json()
        part_time = client.get("/api/job-posts", params={"jobType": "파트타임"}).json()
        derm = client.get("/api/job-posts", params={"department": "피부과"}).json()

        assert everything["total"] == 2
        assert [p["title"] for p in seoul["data"]] == ["a"]
        assert [p["title"] for p in part_time["data"]] == ["b"]
        assert [p["title"] for p in derm["data"]] == ["a"]

    def test_create_requires_auth(self, client):
        assert client.post("/api/job-posts", json=JOB_BODY).status_code == 401

    def test_create_sets_owner_and_expiry(self, client, fake_db, auth_headers, user_id):
        response = client.post("/api/job-posts", json=JOB_BODY, headers=auth_headers)

        assert response.status_code == 201
        post = response.json()["data"]
        assert post["user_id"] == user_id
        assert post["status"] == "active"
        assert post["paid_ad_approved"] is False
        assert post["expires_at"] > "2025"

    def test_second_live_post_is_rejected(self, client, fake_db, auth_headers, user_id):
        fake_db.seed("job_posts", [_post(user_id=user_id)])

        response = client.post("/api/job-posts", json=JOB_BODY, headers=auth_headers)

        assert response.status_code == 400
        assert len(fake_db.all("job_posts")) == 1

    def test_expired_post_does_not_block(self, client, fake_db, auth_headers, user_id):
        fake_db.seed("job_posts", [_post(user_id=user_id, expires_at=PAST)])

        response = client.post("/api/job-posts", json=JOB_BODY, headers=auth_headers)

        assert response.status_code == 201

    def test_missing_departments_is_400(self, client, auth_headers):
        body = {**JOB_BODY, "departments": [], "title": ""}

        response = client.post("/api/job-posts", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["title", "departments"]

    def test_owner_can_edit(self, client, fake_db, auth_headers, user_id):
        post = _post(user_id=user_id)
        fake_db.seed("job_posts", [post])

        response = client.put(f"/api/job-posts/{post['id']}", json={"salary": "협의"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["salary"] == "협의"

    def test_other_user_cannot_edit_or_delete(self, client, fake_db, auth_headers):
        post = _post(user_id=str(uuid.uuid4()))
        fake_db.seed("job_posts", [post])

        edit = client.put(f"/api/job-posts/{post['id']}", json={"salary": "x"}, headers=auth_headers)
        delete = client.delete(f"/api/job-posts/{post['id']}", headers=auth_headers)

        assert edit.status_code == 403
        assert delete.status_code == 403
        assert fake_db.all("job_posts")[0]["status"] == "active"

    def test_delete_is_soft(self, client, fake_db, auth_headers, user_id):
        post = _post(user_id=user_id)
        fake_db.seed("job_posts", [post])

        response = client.delete(f"/api/job-posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert fake_db.all("job_posts")[0]["status"] == "deleted"


class TestJobModeration:
    """Tests for /manager-api/job-posts."""

    def test_list_any_status(self, client, fake_db, auth_headers):
        fake_db.seed("job_posts", [_post(status="deleted"), _post(status="closed", is_paid=True), _post()])

        every = client.get("/manager-api/job-posts", params={"status": "all"}, headers=auth_headers).json()
        paid = client.get("/manager-api/job-posts", params={"isPaid": "true"}, headers=auth_headers).json()

        assert every["pagination"]["total"] == 3
        assert [p["status"] for p in paid["data"]] == ["closed"]

    def test_approve_paid_placement(self, client, fake_db, auth_headers):
        post = _post(is_paid=True, paid_ad_approved=False)
        fake_db.seed("job_posts", [post])

        response = client.put(
            "/manager-api/job-posts",
            json={"id": post["id"], "paid_ad_approved": True, "paid_ad_approved_by": "ops"},
            headers=auth_headers,
        )

        data = response.json()["data"]
        assert data["paid_ad_approved"] is True
        assert data["paid_ad_approved_by"] == "ops"
        assert data["paid_ad_approved_at"]

    def test_close_post(self, client, fake_db, auth_headers):
        post = _post()
        fake_db.seed("job_posts", [post])

        response = client.put("/manager-api/job-posts", json={"id": post["id"], "status": "closed"}, headers=auth_headers)

        assert response.json()["data"]["status"] == "closed"

    def test_moderate_unknown_is_404(self, client, auth_headers):
        response = client.put("/manager-api/job-posts", json={"id": "missing", "status": "closed"}, headers=auth_headers)

        assert response.status_code == 404

    def test_hard_delete(self, client, fake_db, auth_headers):
        post = _post()
        fake_db.seed("job_posts", [post])

        response = client.delete("/manager-api/job-posts", params={"id": post["id"]}, headers=auth_headers)

        assert response.status_code == 200
        assert fake_db.all("job_posts") == []

    def test_hard_delete_requires_id(self, client, auth_headers):
        assert client.delete("/manager-api/job-posts", headers=auth_headers).status_code == 400


# =============================================================================
# Seminars
# =============================================================================

class TestSeminars:
    """Tests for /api/seminars and /manager-api/seminars."""

    @pytest.fixture
    def seminars(self, fake_db):
        fake_db.seed("seminars", [
            {"id": "s1", "title": "봄 세미나", "date": "2025-03-15", "category": "학술", "location": "서울 코엑스", "is_active": True},
            {"id": "s2", "title": "겨울 세미나", "date": "2025-12-01", "category": "경영", "location": "부산", "is_active": True},
            {"id": "s3", "title": "숨김", "date": "2025-01-01", "is_active": False},
        ])
        return fake_db

    def test_public_active_only_by_date(self, client, seminars):
        body = client.get("/api/seminars").json()

        assert [s["id"] for s in body["data"]] == ["s1", "s2"]

    def test_month_label(self, client, seminars):
        body = client.get("/api/seminars", params={"month": "3월"}).json()

        assert [s["id"] for s in body["data"]] == ["s1"]

    def test_category_and_location(self, client, seminars):
        body = client.get("/api/seminars", params={"category": "경영", "location": "부산"}).json()

        assert [s["id"] for s in body["data"]] == ["s2"]

    def test_manager_sees_inactive(self, client, seminars, auth_headers):
        body = client.get("/manager-api/seminars", headers=auth_headers).json()

        assert body["pagination"]["total"] == 3

    def test_public_create_needs_auth(self, client, fake_db, auth_headers):
        assert client.post("/api/seminars", json={"title": "x"}).status_code == 401

        response = client.post("/api/seminars", json={"title": "x", "date": "2025-05-01"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["status"] == "upcoming"

    def test_manager_update_and_delete(self, client, seminars, auth_headers):
        updated = client.put("/manager-api/seminars/s1", json={"participants": 40}, headers=auth_headers)
        deleted = client.delete("/manager-api/seminars/s2", headers=auth_headers)
        missing = client.delete("/manager-api/seminars/nope", headers=auth_headers)

        assert updated.json()["data"]["participants"] == 40
        assert deleted.status_code == 200
        assert missing.status_code == 404


# =============================================================================
# Clinic Locations
# =============================================================================

class TestClinicLocations:
    """Tests for /api/clinic-locations and /manager-api/clinic-locations."""

    @pytest.fixture
    def locations(self, fake_db):
        fake_db.seed("clinic_locations", [
            {"id": "l1", "title": "강남 메디컬", "region": "서울", "type": "임대", "size_sqm": 120, "is_active": True,
             "created_at": "2024-01-01T00:00:00+00:00"},
            {"id": "l2", "title": "해운대 빌딩", "region": "부산", "type": "매매", "size_sqm": 300, "is_active": True,
             "created_at": "2024-01-02T00:00:00+00:00"},
            {"id": "l3", "title": "비공개", "region": "서울", "type": "임대", "size_sqm": 80, "is_active": False,
             "created_at": "2024-01-03T00:00:00+00:00"},
        ])
        return fake_db

    def test_public_list_newest_active(self, client, locations):
        body = client.get("/api/clinic-locations").json()

        assert [l["id"] for l in body["data"]] == ["l2", "l1"]

    def test_show_all_includes_inactive(self, client, locations):
        body = client.get("/api/clinic-locations", params={"showAll": "true"}).json()

        assert body["pagination"]["total"] == 3

    def test_size_bounds_and_type(self, client, locations):
        body = client.get("/api/clinic-locations", params={"minSize": 100, "maxSize": 200, "type": "임대"}).json()

        assert [l["id"] for l in body["data"]] == ["l1"]

    def test_sort_by_size(self, client, locations):
        body = client.get("/api/clinic-locations", params={"sortBy": "size_sqm", "sortDirection": "asc"}).json()

        assert [l["id"] for l in body["data"]] == ["l1", "l2"]

    def test_public_toggle_flips(self, client, locations, auth_headers):
        response = client.patch("/api/clinic-locations/l3/toggle", headers=auth_headers)

        assert response.json()["data"] == {"id": "l3", "is_active": True}

    def test_manager_toggle_sets_value(self, client, locations, auth_headers):
        response = client.patch(
            "/manager-api/clinic-locations/l1/toggle",
            json={"is_active": False},
            headers=auth_headers,
        )

        assert response.json()["data"]["is_active"] is False

    def test_favorites_add_and_remove(self, client, locations, auth_headers, user_id):
        added = client.post(
            "/api/clinic-locations/favorites",
            json={"location_id": "l1", "action": "add"},
            headers=auth_headers,
        )
        assert added.json()["data"] == {"location_id": "l1", "action": "add"}
        assert locations.all("clinic_location_favorites")[0]["user_id"] == user_id

        client.post(
            "/api/clinic-locations/favorites",
            json={"location_id": "l1", "action": "remove"},
            headers=auth_headers,
        )
        assert locations.all("clinic_location_favorites") == []

    def test_favorite_bad_action(self, client, auth_headers):
        response = client.post(
            "/api/clinic-locations/favorites",
            json={"location_id": "l1", "action": "star"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_manager_crud(self, client, fake_db, auth_headers):
        created = client.post(
            "/manager-api/clinic-locations",
            json={"title": "신규", "region": "인천", "facilities": ["엘리베이터"]},
            headers=auth_headers,
        )
        location_id = created.json()["data"]["id"]

        updated = client.put(f"/manager-api/clinic-locations/{location_id}", json={"floor": "3층"}, headers=auth_headers)
        deleted = client.delete(f"/manager-api/clinic-locations/{location_id}", headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["data"]["is_active"] is True
        assert updated.json()["data"]["floor"] == "3층"
        assert deleted.status_code == 200
        assert fake_db.all("clinic_locations") == []
