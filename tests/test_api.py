"""
Tests for the application facade and the Flask API.
"""
from unittest.mock import AsyncMock

import pytest

from lnd_channel_agent import LndAgentConfig, LndChannelAgentApp
from lnd_channel_agent.api import create_app
from lnd_channel_agent.exceptions import AgentNotInitializedError
from lnd_channel_agent.lnd import MockLndService


@pytest.fixture
def agent_app():
    app = LndChannelAgentApp(LndAgentConfig(use_mock_lnd=True))
    yield app
    app.close()


@pytest.fixture
def client(agent_app):
    return create_app(agent_app).test_client()


class TestLndChannelAgentApp:
    """Tests for the public facade."""

    def test_requires_initialize(self):
        app = LndChannelAgentApp(LndAgentConfig(use_mock_lnd=True))

        with pytest.raises(AgentNotInitializedError):
            app.query("list my channels")
        with pytest.raises(AgentNotInitializedError):
            app.get_tools()

    def test_initialize_is_idempotent(self, agent_app):
        agent_app.initialize()
        tools = agent_app.get_tools()
        agent_app.initialize()

        assert agent_app.get_tools() == tools

    def test_mock_node_list(self, agent_app):
        agent_app.initialize()

        result = agent_app.query("list my channels")

        assert result["type"] == "channel_list"
        summary = result["data"]["summary"]
        assert summary["activeChannels"] == 2
        assert summary["inactiveChannels"] == 1
        assert summary["totalCapacity"] == 17_000_000
        aliases = [c["remote_alias"] for c in result["data"]["channels"]]
        assert aliases == ["ACINQ", "Bitrefill", "LN+"]

    def test_mock_node_health(self, agent_app):
        agent_app.initialize()

        result = agent_app.query("how healthy are my channels")

        assert result["data"]["summary"]["healthyChannels"] == 2
        assert result["data"]["summary"]["unhealthyChannels"] == 1
        assert "- LN+: inactive" in result["response"]

    def test_injected_service(self):
        service = MockLndService()
        service.get_channels = AsyncMock(return_value={"channels": []})
        app = LndChannelAgentApp(LndAgentConfig(use_mock_lnd=True), lnd_service=service)
        app.initialize()

        result = app.query("list my channels")

        assert result["response"] == "You don't have any channels yet."
        service.get_channels.assert_awaited_once()

    def test_custom_health_band(self):
        app = LndChannelAgentApp(LndAgentConfig(use_mock_lnd=True, min_local_ratio=0.6, max_local_ratio=0.9))
        app.initialize()

        result = app.query("channel health")

        assert result["data"]["summary"]["healthyChannels"] == 0
        assert result["data"]["healthCriteria"] == {"minLocalRatio": 0.6, "maxLocalRatio": 0.9}


class TestApi:
    """Tests for the HTTP routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_health_unavailable(self, agent_app, client):
        service = agent_app._client.get_lnd_service()
        service.get_wallet_info = AsyncMock(side_effect=ConnectionError("node down"))

        response = client.get("/health")

        assert response.status_code == 503
        assert response.get_json()["status"] == "unavailable"
        assert "node down" in response.get_json()["error"]

    def test_tools(self, client):
        tools = client.get("/tools").get_json()["tools"]

        assert [t["name"] for t in tools] == ["queryChannels"]
        assert "inputSchema" in tools[0]

    def test_query(self, client):
        response = client.post("/query", json={"query": "how is my channel liquidity"})

        assert response.status_code == 200
        body = response.get_json()
        assert body["type"] == "channel_liquidity"
        assert body["response"].startswith("Across 3 channels")

    def test_unknown_query(self, client):
        body = client.post("/query", json={"query": "tell me a joke"}).get_json()

        assert body["type"] == "unknown"
        assert body["data"] == {}

    @pytest.mark.parametrize("payload", [{}, {"question": "list"}, None])
    def test_query_missing(self, client, payload):
        if payload is None:
            response = client.post("/query", data="not json", content_type="text/plain")
        else:
            response = client.post("/query", json=payload)

        assert response.status_code == 400
        assert "query" in response.get_json()["error"]

    def test_query_not_a_string(self, client):
        response = client.post("/query", json={"query": 42})

        assert response.status_code == 400
