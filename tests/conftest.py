from unittest.mock import MagicMock
import pytest
from fastapi.testclient import TestClient

from pixcode.core.pix_payload import encode_normalized_payment
from pixcode.core.security import get_current_user
from pixcode.main import app


@pytest.fixture(autouse=True)
def clear_payload_cache():
    """Each test starts with an empty payload cache."""
    encode_normalized_payment.cache_clear()
    yield
    encode_normalized_payment.cache_clear()


@pytest.fixture
def mock_current_user():
    """Mock the authenticated Supabase user"""
    user = MagicMock()
    user.user_id = "user-123"
    user.email = "test@example.com"
    user.role = "authenticated"
    return user


@pytest.fixture
def client(mock_current_user):
    """
    TestClient with authentication bypassed.
    Usage:
        def test_something(client):
            response = client.post("/api/v1/pix/payload", json={...})
    """
    app.dependency_overrides[get_current_user] = lambda: mock_current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """TestClient without any dependency override"""
    return TestClient(app)
