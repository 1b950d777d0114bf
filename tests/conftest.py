# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory Supabase (tests/fakes.py) behind a real StoreSession
# - Provides a TestClient whose store dependencies use that session
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.dependencies import get_service_store, get_store
from app.main import app
from lib.supabase_client import StoreSession

from tests.fakes import AGENT_ID, FakeSupabase


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeSupabase()


@pytest.fixture
def store(fake_db):
    """A real StoreSession wrapping the in-memory database."""
    return StoreSession(fake_db)


@pytest.fixture
def agent():
    return AuthUser(id=AGENT_ID, email="agent@example.co.il", access_token="test-token")


@pytest.fixture
def client(fake_db, agent):
    """
    TestClient with every store dependency pointed at `fake_db`.

    Each request gets its own StoreSession, like production; the sessions
    opened are collected on `client.sessions`.
    """
    sessions = []

    def override_store():
        session = StoreSession(fake_db)
        sessions.append(session)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_store] = override_store
    app.dependency_overrides[get_service_store] = override_store
    app.dependency_overrides[get_current_user] = lambda: agent

    with TestClient(app, raise_server_exceptions=False) as test_client:
        test_client.sessions = sessions
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_customer():
    """Minimal valid customer body."""
    return {
        "first_name": "דנה",
        "last_name": "כהן",
        "id_number": "123456782",
        "mobile": "050-1234567",
        "email": "dana@example.co.il",
    }
