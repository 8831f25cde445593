"""
Shared fixtures for channel agent tests.
"""
from unittest.mock import AsyncMock, Mock

import pytest

from lnd_channel_agent.lnd import LndHandle, LndService
from lnd_channel_agent.models import Channel


def make_channel(
    capacity=1_000_000,
    local_balance=500_000,
    remote_balance=None,
    active=True,
    remote_pubkey=None,
    **kwargs,
) -> Channel:
    """Build a Channel with sensible defaults."""
    if remote_balance is None:
        remote_balance = max(capacity - local_balance, 0)
    return Channel(
        capacity=capacity,
        local_balance=local_balance,
        remote_balance=remote_balance,
        active=active,
        remote_pubkey=remote_pubkey,
        **kwargs,
    )


@pytest.fixture
def mock_service():
    """LndService double with async operations."""
    service = Mock(spec=LndService)
    service.get_channels = AsyncMock(return_value={"channels": []})
    service.get_node_info = AsyncMock(return_value={"alias": "Test Node"})
    service.get_wallet_info = AsyncMock(return_value={"alias": "test-node"})
    service.close = AsyncMock(return_value=None)
    return service


@pytest.fixture
def mock_lnd_client(mock_service):
    """LndClient double bound to mock_service."""
    client = Mock()
    client.get_lnd.return_value = LndHandle(kind="test", socket="localhost:8080")
    client.get_lnd_service.return_value = mock_service
    return client
