"""
Pytest Configuration for Redis Tests.

Redis unit tests never talk to a server: the client is a MagicMock.
"""

from unittest.mock import MagicMock

import pytest
from redis import Redis


@pytest.fixture
def mock_redis():
    """MagicMock standing in for a decode_responses=True Redis client."""
    client = MagicMock(spec=Redis)
    client.ping.return_value = True
    return client
