# =============================================================================
# tests/test_auth.py - Manager Authentication Tests
# =============================================================================
# Tests for the /manager-api gate and the session routes:
# - Missing, malformed and expired tokens answer 401
# - MANAGER_ALLOWED_ROLES restricts access with 403
# - /manager-api/auth/verify and /me report the signed-in user
#
# Run with: pytest tests/test_auth.py -v
# =============================================================================

import pytest

from app.config import settings


class TestManagerGate:
    """Every /manager-api route requires a valid token."""

    @pytest.mark.parametrize("path", [
        "/manager-api/vendors",
        "/manager-api/users",
        "/manager-api/job-posts",
        "/manager-api/beauty-products",
    ])
    def test_missing_token_is_401(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_garbage_token_is_401(self, client):
        response = client.get("/manager-api/vendors", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_expired_token_is_401(self, client, make_token):
        token = make_token(expires_in=-60)

        response = client.get("/manager-api/vendors", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"] == "Token has expired"

    def test_wrong_audience_is_401(self, client, make_token):
        token = make_token(aud="anon")

        response = client.get("/manager-api/vendors", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_valid_token_passes(self, client, auth_headers):
        response = client.get("/manager-api/vendors", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_public_routes_need_no_token(self, client):
        assert client.get("/api/vendors").status_code == 200

    def test_public_routes_ignore_bad_token(self, client):
        response = client.get("/api/vendors", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 200

    def test_auth_exports(self):
        import app.auth

        assert sorted(app.auth.__all__) == ["AuthUser", "UserResponse", "get_current_user", "require_manager"]


class TestManagerRoles:
    """MANAGER_ALLOWED_ROLES narrows who gets in."""

    def test_role_not_allowed_is_403(self, client, make_token, monkeypatch):
        # Arrange
        monkeypatch.setattr(settings, "MANAGER_ALLOWED_ROLES", "admin")
        token = make_token(role="authenticated")

        # Act
        response = client.get("/manager-api/vendors", headers={"Authorization": f"Bearer {token}"})

        # Assert
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_app_metadata_role_is_used(self, client, make_token, monkeypatch):
        """app_metadata.role takes precedence over the JWT role claim."""
        monkeypatch.setattr(settings, "MANAGER_ALLOWED_ROLES", "admin, editor")
        token = make_token(role="authenticated", app_metadata={"role": "editor"})

        response = client.get("/manager-api/vendors", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200


class TestSessionRoutes:
    """Tests for /manager-api/auth."""

    def test_verify_reports_claims(self, client, make_token, user_id):
        token = make_token(user_id=user_id, email="ops@docsupport.kr")

        response = client.get("/manager-api/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["user_id"] == user_id
        assert body["email"] == "ops@docsupport.kr"

    def test_me_falls_back_to_token(self, client, auth_headers, user_id):
        """No users row yet: the profile is built from the token."""
        response = client.get("/manager-api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert response.json()["name"] is None

    def test_me_reads_users_row(self, client, fake_db, auth_headers, user_id):
        fake_db.seed("users", [{"id": user_id, "name": "관리자", "nickname": "ops", "role": "admin"}])

        response = client.get("/manager-api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "관리자"
        assert response.json()["email"] == "manager@docsupport.kr"
