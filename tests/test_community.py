# =============================================================================
# tests/test_community.py - Q&A, Webinar, Society and Health Tests
# =============================================================================
# Tests for the community endpoints of the public API:
# - /api/qna: questions, answers, categories, one vote per user
# - /api/webinar: listing and once-per-user engagement counters
# - /api/societies and /api/health
#
# Run with: pytest tests/test_community.py -v
# =============================================================================

import uuid

import pytest

from app.config import settings


# =============================================================================
# Q&A
# =============================================================================

class TestQna:
    """Tests for /api/qna."""

    @pytest.fixture
    def board(self, fake_db):
        fake_db.seed("qna_categories", [
            {"id": "cat-law", "name": "법률", "slug": "law"},
            {"id": "cat-tax", "name": "세무", "slug": "tax"},
        ])
        fake_db.seed("questions", [
            {"id": "q1", "title": "개원 절차", "content": "서류", "category_id": "cat-law", "is_active": True,
             "created_at": "2024-01-01T00:00:00+00:00"},
            {"id": "q2", "title": "부가세 신고", "content": "기한", "category_id": "cat-tax", "is_active": True,
             "created_at": "2024-01-02T00:00:00+00:00"},
            {"id": "q3", "title": "삭제됨", "content": "x", "is_active": False},
        ])
        return fake_db

    def test_list_newest_with_category(self, client, board):
        body = client.get("/api/qna").json()

        assert [q["id"] for q in body["data"]] == ["q2", "q1"]
        assert body["data"][0]["category"] == {"id": "cat-tax", "name": "세무", "slug": "tax"}
        assert body["pagination"]["total"] == 2

    def test_filter_by_category_and_search(self, client, board):
        by_category = client.get("/api/qna", params={"category": "cat-law"}).json()
        by_search = client.get("/api/qna", params={"search": "부가세"}).json()

        assert [q["id"] for q in by_category["data"]] == ["q1"]
        assert [q["id"] for q in by_search["data"]] == ["q2"]

    def test_categories(self, client, board):
        body = client.get("/api/qna/categories").json()

        assert [c["slug"] for c in body["data"]] == ["law", "tax"]

    def test_detail_without_category(self, client, board):
        body = client.get("/api/qna/q3").json()

        assert body["data"]["category"] is None

    def test_ask_records_author_and_ip(self, client, board, auth_headers, user_id):
        # Arrange
        headers = {**auth_headers, "X-Forwarded-For": "203.0.113.9, 10.0.0.1"}

        # Act
        response = client.post(
            "/api/qna",
            json={"title": "질문", "content": "내용", "categoryId": "cat-tax"},
            headers=headers,
        )

        # Assert
        assert response.status_code == 201
        question = response.json()["data"]
        assert question["author_id"] == user_id
        assert question["author_ip"] == "203.0.113.9"
        assert question["category_id"] == "cat-tax"

    def test_ask_falls_back_to_peer_ip(self, client, board, auth_headers):
        response = client.post("/api/qna", json={"title": "질문", "content": "내용"}, headers=auth_headers)

        assert response.json()["data"]["author_ip"] == "testclient"

    def test_ask_requires_title_and_content(self, client, auth_headers):
        response = client.post("/api/qna", json={"title": " "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["title", "content"]

    def test_ask_requires_auth(self, client):
        assert client.post("/api/qna", json={"title": "a", "content": "b"}).status_code == 401

    def test_answers_oldest_first(self, client, board, auth_headers):
        board.seed("answers", [
            {"question_id": "q1", "content": "second", "is_active": True, "created_at": "2024-02-02T00:00:00+00:00"},
            {"question_id": "q1", "content": "first", "is_active": True, "created_at": "2024-02-01T00:00:00+00:00"},
            {"question_id": "q1", "content": "hidden", "is_active": False},
        ])

        body = client.get("/api/qna/q1/answers").json()

        assert [a["content"] for a in body["data"]] == ["first", "second"]

    def test_post_answer(self, client, board, auth_headers):
        response = client.post("/api/qna/q1/answers", json={"content": "답변"}, headers=auth_headers)

        assert response.status_code == 201
        assert board.all("answers")[0]["question_id"] == "q1"

    def test_second_vote_replaces_first(self, client, board, auth_headers, user_id):
        first = client.post("/api/qna/q1/vote", json={"type": "up"}, headers=auth_headers)
        second = client.post("/api/qna/q1/vote", json={"type": "down"}, headers=auth_headers)

        votes = board.all("question_votes")
        assert first.status_code == second.status_code == 200
        assert len(votes) == 1
        assert votes[0]["vote_type"] == "down"
        assert votes[0]["user_id"] == user_id

    def test_vote_without_type_is_400(self, client, board, auth_headers):
        response = client.post("/api/qna/q1/vote", json={}, headers=auth_headers)

        assert response.status_code == 400


# =============================================================================
# Webinars
# =============================================================================

class TestWebinars:
    """Tests for /api/webinar."""

    @pytest.fixture
    def webinar(self, fake_db):
        return fake_db.seed("webinars", [
            {"id": "w1", "title": "개원 세미나", "scheduled_date": "2025-05-01", "status": "scheduled", "is_active": True},
            {"id": "w2", "title": "지난 세미나", "scheduled_date": "2025-01-01", "status": "ended", "is_active": True},
            {"id": "w3", "title": "숨김", "scheduled_date": "2024-01-01", "is_active": False},
        ])[0]

    def test_list_by_date(self, client, webinar):
        body = client.get("/api/webinar").json()

        assert [w["id"] for w in body["data"]] == ["w2", "w1"]

    def test_status_filter(self, client, webinar):
        body = client.get("/api/webinar", params={"status": "scheduled"}).json()

        assert [w["id"] for w in body["data"]] == ["w1"]

    def test_interest_once_per_user(self, client, fake_db, webinar, auth_headers):
        first = client.post("/api/webinar/w1/interested", headers=auth_headers)
        second = client.post("/api/webinar/w1/interested", headers=auth_headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["code"] == "DUPLICATE_REQUEST"
        assert fake_db.rpc_calls == [("increment_interested_count", {"webinar_id": "w1"})]

    def test_rebroadcast_request(self, client, fake_db, webinar, auth_headers, user_id):
        response = client.post("/api/webinar/w1/rebroadcast-request", headers=auth_headers)

        assert response.status_code == 200
        assert fake_db.all("webinar_rebroadcast_requests")[0]["user_id"] == user_id
        assert fake_db.rpc_calls[0][0] == "increment_rebroadcast_requests"

    def test_counter_failure_is_tolerated(self, client, fake_db, webinar, auth_headers):
        fake_db.fail("increment_interested_count", "rpc")

        response = client.post("/api/webinar/w1/interested", headers=auth_headers)

        assert response.status_code == 200
        assert len(fake_db.all("webinar_interests")) == 1

    def test_views_are_anonymous(self, client, fake_db, webinar):
        client.post("/api/webinar/w1/view")
        client.post("/api/webinar/w1/view")

        assert [call[0] for call in fake_db.rpc_calls] == ["increment_webinar_views"] * 2

    def test_create_defaults(self, client, fake_db, auth_headers):
        response = client.post("/api/webinar", json={"title": "신규"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["status"] == "scheduled"
        assert response.json()["data"]["is_active"] is True

    def test_missing_webinar_is_404(self, client, fake_db):
        assert client.get("/api/webinar/nope").status_code == 404


# =============================================================================
# Societies & Health
# =============================================================================

class TestSocieties:
    """Tests for /api/societies."""

    def test_list_by_name_with_filters(self, client, fake_db):
        fake_db.seed("medical_societies", [
            {"name": "대한피부과학회", "category": "학회", "name_en": "Korean Dermatological Association"},
            {"name": "대한내과학회", "category": "학회"},
            {"name": "개원의협의회", "category": "협회"},
        ])

        everything = client.get("/api/societies").json()
        by_category = client.get("/api/societies", params={"category": "학회", "search": "derma"}).json()

        assert everything["total"] == 3
        assert [s["name"] for s in everything["data"]] == sorted(s["name"] for s in everything["data"])
        assert [s["name"] for s in by_category["data"]] == ["대한피부과학회"]

    def test_detail(self, client, fake_db):
        society_id = str(uuid.uuid4())
        fake_db.seed("medical_societies", [{"id": society_id, "name": "학회"}])

        assert client.get(f"/api/societies/{society_id}").json()["data"]["name"] == "학회"
        assert client.get(f"/api/societies/{uuid.uuid4()}").status_code == 404


class TestHealth:
    """Tests for /api/health."""

    def test_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == "development"

    def test_ready_when_database_answers(self, client):
        body = client.get("/api/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"]["database"] == "healthy"

    def test_degraded_when_database_fails(self, client, fake_db):
        fake_db.fail("vendor_categories", "select")

        body = client.get("/api/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"] == "unhealthy"
        assert body["checks"]["tables"]["vendor_categories"]["status"] == "unhealthy"
        assert body["checks"]["tables"]["vendors"]["status"] == "healthy"

    def test_ready_reports_table_rows_and_integrations(self, client, fake_db, monkeypatch):
        fake_db.seed("vendors", [{"name": "A"}, {"name": "B"}])
        monkeypatch.setattr(settings, "SOLAPI_API_KEY", "")

        body = client.get("/api/health/ready").json()

        tables = body["checks"]["tables"]
        assert set(tables) == {"vendor_categories", "vendors", "beauty_products"}
        assert tables["vendors"]["rows"] == 2
        assert tables["beauty_products"]["rows"] == 0
        assert tables["vendors"]["latency_ms"] >= 0
        assert body["checks"]["sms_configured"] is False
        assert body["checks"]["embeddings_configured"] is True

    def test_root(self, client):
        assert client.get("/").json()["name"] == "DocSupport API"

    def test_unknown_route_shape(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "code": "NOT_FOUND"}
