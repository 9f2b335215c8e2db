"""
Common fixtures for API unit tests.

Provides shared test utilities:
- App built around a mocked repository (storage failures on demand)
- Submit helper
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app


@pytest.fixture
def mock_repository():
    """Repository double: empty collections, every write succeeds."""
    repository = MagicMock()
    repository.find_by_email.return_value = None
    repository.list_all.return_value = []
    repository.delete_by_id.return_value = True
    repository.ping.return_value = True
    return repository


@pytest.fixture
def mocked_client(settings, mock_repository):
    """
    TestClient whose app uses mock_repository.

    raise_server_exceptions=False so unexpected errors surface as 500
    responses instead of propagating into the test.
    """
    app = create_app(settings, repository=mock_repository)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
