"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - data_dir: Empty temporary DATA_DIR for the JSON file store
    - settings: Settings pointing at data_dir, notifications disabled
    - app: Fresh FastAPI app (fresh storage and rate-limit counters)
    - test_client: FastAPI TestClient for API testing
    - admin_headers: Authorization header carrying the admin secret
    - customer_payload / merchant_payload: Valid signup bodies

Architecture Notes:
    - Environment is pinned before src.api.main is imported, because the
      module-level app is created at import time
    - Each test gets its own app, so rate-limit state never leaks

Usage:
    def test_something(test_client):
        response = test_client.get("/api/health")
        assert response.status_code == 200
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Pin the environment before the app module is imported
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="snapshop-tests-"))
os.environ.setdefault("STORAGE_BACKEND", "json")
os.environ.setdefault("NOTIFIER_MODE", "disabled")

from fastapi.testclient import TestClient  # noqa: E402

from src.api.main import create_app  # noqa: E402
from src.shared.config import Settings  # noqa: E402

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ADMIN_PASSWORD = "test-admin-secret"


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty directory for customers.json / merchants.json."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    """
    Settings for an isolated test app.

    JSON backend in data_dir, known admin secret, notifications disabled.
    """
    return Settings(
        data_dir=str(data_dir),
        admin_password=ADMIN_PASSWORD,
        notifier_mode="disabled",
    )


# ============================================================================
# FASTAPI FIXTURES
# ============================================================================


@pytest.fixture
def app(settings: Settings):
    """Fresh FastAPI app built from the test settings."""
    return create_app(settings)


@pytest.fixture
def test_client(app) -> Generator[TestClient, None, None]:
    """
    Provide FastAPI TestClient for API testing.

    TestClient doesn't require running server - it calls app directly.

    Yields:
        TestClient: FastAPI test client (lifespan events run)
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Authorization header for admin endpoints."""
    return {"Authorization": f"Bearer {ADMIN_PASSWORD}"}


# ============================================================================
# PAYLOAD FIXTURES
# ============================================================================


@pytest.fixture
def customer_payload() -> dict[str, str]:
    """Valid customer signup body."""
    return {
        "type": "customer",
        "name": "Jo Lin",
        "email": "jo@example.com",
        "style": "minimalist",
        "budget": "100-250",
    }


@pytest.fixture
def merchant_payload() -> dict[str, str]:
    """Valid merchant application body."""
    return {
        "type": "merchant",
        "businessName": "Thread & Co",
        "contactName": "Sam Patel",
        "email": "sam@threadco.example",
        "category": "clothing",
    }


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers for test categorization.

    Markers:
        - integration: Integration tests (full HTTP flow on the file backend)
        - unit: Unit tests (no external dependencies)
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (full HTTP flow on the file backend)"
    )
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
