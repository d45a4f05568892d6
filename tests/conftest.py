# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase singleton for an in-memory fake per test
# - Mints Supabase-style access tokens for the manager API
# =============================================================================

import os
import sys
import time
import uuid

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def fake_db():
    """In-memory Supabase client installed as the shared singleton."""
    fake = FakeSupabase()
    previous = SupabaseClient._instance
    SupabaseClient._instance = fake
    yield fake
    SupabaseClient._instance = previous


@pytest.fixture
def client(fake_db):
    """TestClient over the full app, backed by fake_db."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Auth
# =============================================================================

@pytest.fixture
def make_token():
    """Build a signed HS256 access token like Supabase Auth issues."""

    def _make(
        user_id: str | None = None,
        email: str = "manager@docsupport.kr",
        role: str | None = "authenticated",
        expires_in: int = 3600,
        **claims,
    ) -> str:
        payload = {
            "sub": user_id or str(uuid.uuid4()),
            "email": email,
            "aud": "authenticated",
            "exp": int(time.time()) + expires_in,
            **claims,
        }
        if role is not None:
            payload["role"] = role
        return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def auth_headers(make_token, user_id):
    """Authorization header for a signed-in user."""
    return {"Authorization": f"Bearer {make_token(user_id=user_id)}"}


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def sample_vendor():
    """A published vendor row."""
    return {
        "id": str(uuid.uuid4()),
        "name": "메디 인테리어",
        "slug": "메디-인테리어",
        "description_md": "병원 인테리어 전문",
        "phone": "02-123-4567",
        "mobile": "010-1111-2222",
        "status": "published",
        "state": "서울",
        "service_areas": "서울, 경기",
        "priority_score": 10,
        "created_at": "2024-03-01T00:00:00+00:00",
    }
