# =============================================================================
# tests/test_users.py - Member Administration & Audit Log Tests
# =============================================================================
# Tests for /manager-api/users, /manager-api/login-logs and
# /manager-api/advertisement-logs.
#
# Run with: pytest tests/test_users.py -v
# =============================================================================

import pytest


@pytest.fixture
def members(fake_db):
    fake_db.seed("user_management_view", [
        {"id": "u1", "name": "김의사", "nickname": "skin", "phone_number": "01011112222",
         "is_doctor_verified": True, "is_active": True, "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "u2", "name": "이원장", "nickname": "dental", "phone_number": "01033334444",
         "is_doctor_verified": False, "is_active": True, "created_at": "2024-01-02T00:00:00+00:00"},
        {"id": "u3", "name": "박회원", "nickname": None, "phone_number": None,
         "is_doctor_verified": None, "is_active": None, "created_at": "2024-01-03T00:00:00+00:00"},
    ])
    fake_db.seed("users", [
        {"id": "u1", "is_active": True, "role": "user"},
        {"id": "u2", "is_active": True, "role": "user"},
        {"id": "u3", "is_active": None, "role": "user"},
    ])
    return fake_db


class TestUsers:
    """Tests for /manager-api/users."""

    def test_list_newest_first(self, client, members, auth_headers):
        body = client.get("/manager-api/users", headers=auth_headers).json()

        assert [u["id"] for u in body["data"]] == ["u3", "u2", "u1"]
        assert body["pagination"]["total"] == 3

    def test_search_by_phone(self, client, members, auth_headers):
        body = client.get("/manager-api/users", params={"search": "3333"}, headers=auth_headers).json()

        assert [u["id"] for u in body["data"]] == ["u2"]

    def test_unverified_includes_never_set(self, client, members, auth_headers):
        body = client.get("/manager-api/users", params={"doctor_verified": "false"}, headers=auth_headers).json()

        assert sorted(u["id"] for u in body["data"]) == ["u2", "u3"]

    def test_active_filter(self, client, members, auth_headers):
        active = client.get("/manager-api/users", params={"is_active": "true"}, headers=auth_headers).json()
        inactive = client.get("/manager-api/users", params={"is_active": "false"}, headers=auth_headers).json()

        assert sorted(u["id"] for u in active["data"]) == ["u1", "u2"]
        assert [u["id"] for u in inactive["data"]] == ["u3"]

    def test_get_user(self, client, members, auth_headers):
        assert client.get("/manager-api/users/u1", headers=auth_headers).json()["data"]["name"] == "김의사"
        assert client.get("/manager-api/users/nobody", headers=auth_headers).status_code == 404

    def test_deactivate_and_change_role(self, client, members, auth_headers):
        response = client.patch(
            "/manager-api/users/u2",
            json={"is_active": False, "role": "admin"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["id"] == "u2"
        row = next(u for u in members.all("users") if u["id"] == "u2")
        assert row["is_active"] is False
        assert row["role"] == "admin"
        assert "updated_at" in row

    def test_verification_creates_user_info(self, client, members, auth_headers):
        client.patch("/manager-api/users/u3", json={"is_doctor_verified": True}, headers=auth_headers)

        info = members.all("user_info")
        assert len(info) == 1
        assert info[0]["user_id"] == "u3"
        assert info[0]["is_doctor_verified"] is True

    def test_verification_updates_existing_user_info(self, client, members, auth_headers):
        members.seed("user_info", [{"user_id": "u1", "is_doctor_verified": True}])

        client.patch("/manager-api/users/u1", json={"is_doctor_verified": False}, headers=auth_headers)

        info = members.all("user_info")
        assert len(info) == 1
        assert info[0]["is_doctor_verified"] is False

    def test_update_unknown_user_is_404(self, client, members, auth_headers):
        response = client.patch("/manager-api/users/ghost", json={"is_active": False}, headers=auth_headers)

        assert response.status_code == 404

    def test_requires_auth(self, client, members):
        assert client.get("/manager-api/users").status_code == 401


class TestLoginLogs:
    """Tests for /manager-api/login-logs."""

    @pytest.fixture
    def logs(self, fake_db):
        fake_db.seed("user_login_logs", [
            {"email": "a@x.kr", "login_method": "kakao", "success": True, "device_type": "mobile",
             "ip_address": "1.1.1.1", "created_at": "2024-05-01T00:00:00+00:00"},
            {"email": "b@x.kr", "login_method": "email", "success": False, "device_type": "desktop",
             "ip_address": "2.2.2.2", "created_at": "2024-05-02T00:00:00+00:00"},
            {"email": "c@x.kr", "login_method": "email", "success": True, "device_type": "desktop",
             "ip_address": "3.3.3.3", "created_at": "2024-06-01T00:00:00+00:00"},
        ])
        return fake_db

    def test_newest_first(self, client, logs, auth_headers):
        body = client.get("/manager-api/login-logs", headers=auth_headers).json()

        assert [log["email"] for log in body["data"]] == ["c@x.kr", "b@x.kr", "a@x.kr"]

    def test_filters(self, client, logs, auth_headers):
        failed = client.get("/manager-api/login-logs", params={"success": "false"}, headers=auth_headers).json()
        may = client.get(
            "/manager-api/login-logs",
            params={"start_date": "2024-05-01", "end_date": "2024-05-31", "login_method": "email"},
            headers=auth_headers,
        ).json()
        by_ip = client.get("/manager-api/login-logs", params={"search": "3.3.3"}, headers=auth_headers).json()

        assert [log["email"] for log in failed["data"]] == ["b@x.kr"]
        assert [log["email"] for log in may["data"]] == ["b@x.kr"]
        assert [log["email"] for log in by_ip["data"]] == ["c@x.kr"]


class TestAdvertisementLogs:
    """Tests for /manager-api/advertisement-logs."""

    def test_list_attaches_vendor(self, client, fake_db, auth_headers):
        fake_db.seed("vendors", [{"id": "v1", "name": "메디"}])
        fake_db.seed("advertisement_logs", [
            {"vendor_id": "v1", "action": "activate", "created_at": "2024-01-01T00:00:00+00:00"},
            {"vendor_id": "v-gone", "action": "deactivate", "created_at": "2024-01-02T00:00:00+00:00"},
        ])

        body = client.get("/manager-api/advertisement-logs", headers=auth_headers).json()

        assert [log["action"] for log in body["data"]] == ["deactivate", "activate"]
        assert body["data"][0]["vendors"] is None
        assert body["data"][1]["vendors"] == {"id": "v1", "name": "메디"}

    def test_action_filter(self, client, fake_db, auth_headers):
        fake_db.seed("advertisement_logs", [
            {"vendor_id": "v1", "action": "activate"},
            {"vendor_id": "v1", "action": "extend"},
        ])

        body = client.get("/manager-api/advertisement-logs", params={"action": "extend"}, headers=auth_headers).json()

        assert body["pagination"]["total"] == 1

    def test_create_records_manager(self, client, fake_db, auth_headers, user_id):
        response = client.post(
            "/manager-api/advertisement-logs",
            json={"vendor_id": "v1", "action": "extend", "duration_days": 30},
            headers=auth_headers,
        )

        assert response.status_code == 201
        log = fake_db.all("advertisement_logs")[0]
        assert log["created_by"] == user_id
        assert log["duration_days"] == 30

    def test_create_requires_vendor_and_action(self, client, fake_db, auth_headers):
        response = client.post("/manager-api/advertisement-logs", json={"reason": "x"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["vendor_id", "action"]
