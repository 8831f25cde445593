"""
Tests for the LND data source: mock and REST services, factory and client.
"""
import asyncio

import httpx
import pytest

from lnd_channel_agent.config import LndAgentConfig
from lnd_channel_agent.exceptions import LndConnectionError
from lnd_channel_agent.lnd import (
    LndAuthentication,
    LndClient,
    LndHandle,
    MockLndService,
    RealLndService,
    create_lnd_service,
)
from lnd_channel_agent.lnd.mock_service import ACINQ_PUBKEY, LNPLUS_PUBKEY
from lnd_channel_agent.lnd.real_service import MACAROON_HEADER


MACAROON_BYTES = b"\x02\x01\x03lnd"
MACAROON_HEX = MACAROON_BYTES.hex()


@pytest.fixture
def credentials(tmp_path):
    cert = tmp_path / "tls.cert"
    cert.write_text("-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n")
    macaroon = tmp_path / "readonly.macaroon"
    macaroon.write_bytes(MACAROON_BYTES)
    return str(cert), str(macaroon)


def rest_service(handler):
    """RealLndService whose requests are answered by handler."""
    return RealLndService(timeout=1.0, transport=httpx.MockTransport(handler))


def rest_handle(service):
    return service.authenticated_lnd(LndAuthentication(cert="", macaroon=MACAROON_HEX, socket="node:8080"))


class TestMockLndService:
    """Tests for the simulated node."""

    def test_channels(self):
        service = MockLndService()
        lnd = service.authenticated_lnd(LndAuthentication(cert="", macaroon="", socket="localhost:8080"))

        channels = asyncio.run(service.get_channels(lnd))["channels"]

        assert lnd.kind == "mock"
        assert [c["id"] for c in channels] == ["channel-1", "channel-2", "channel-3"]
        assert [c["active"] for c in channels] == [True, True, False]
        assert sum(c["capacity"] for c in channels) == 17_000_000

    def test_channels_are_copies(self):
        service = MockLndService()
        lnd = LndHandle(kind="mock", socket="localhost:8080")

        first = asyncio.run(service.get_channels(lnd))
        first["channels"][0]["capacity"] = 1
        second = asyncio.run(service.get_channels(lnd))

        assert second["channels"][0]["capacity"] == 10_000_000

    def test_node_aliases(self):
        service = MockLndService()
        lnd = LndHandle(kind="mock", socket="localhost:8080")

        assert asyncio.run(service.get_node_info(lnd, ACINQ_PUBKEY))["alias"] == "ACINQ"
        assert asyncio.run(service.get_node_info(lnd, LNPLUS_PUBKEY))["alias"] == "LN+"
        assert asyncio.run(service.get_node_info(lnd, "02ff"))["alias"] == "Unknown"

    def test_wallet_info(self):
        service = MockLndService()
        lnd = LndHandle(kind="mock", socket="localhost:8080")

        info = asyncio.run(service.get_wallet_info(lnd))

        assert info["alias"] == "mock-node"
        assert info["active_channels_count"] == 5
        assert info["is_synced_to_chain"] is True

    def test_interface_has_only_query_operations(self):
        """Test balance lookups nothing uses are not part of the service."""
        service = MockLndService()

        assert not hasattr(service, "get_chain_balance")
        assert not hasattr(service, "get_channel_balance")
        assert not hasattr(RealLndService(), "get_chain_balance")


class TestServiceFactory:
    """Tests for create_lnd_service."""

    def test_mock_selected(self):
        assert isinstance(create_lnd_service(LndAgentConfig(use_mock_lnd=True)), MockLndService)

    def test_real_selected(self):
        assert isinstance(create_lnd_service(LndAgentConfig()), RealLndService)


class TestRealLndService:
    """Tests for the REST service against a stubbed transport."""

    def test_macaroon_header_and_channel_normalization(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["macaroon"] = request.headers.get(MACAROON_HEADER)
            return httpx.Response(200, json={"channels": [{
                "chan_id": "7290",
                "channel_point": "abcd:1",
                "capacity": "1000000",
                "local_balance": "400000",
                "remote_balance": "590000",
                "active": True,
                "remote_pubkey": "02aa",
            }]})

        service = rest_service(handler)

        result = asyncio.run(service.get_channels(rest_handle(service)))

        assert seen == {"path": "/v1/channels", "macaroon": MACAROON_HEX}
        assert result == {"channels": [{
            "id": "7290",
            "channel_point": "abcd:1",
            "capacity": 1_000_000,
            "local_balance": 400_000,
            "remote_balance": 590_000,
            "active": True,
            "remote_pubkey": "02aa",
        }]}

    def test_inactive_channel_without_active_field(self):
        service = rest_service(lambda request: httpx.Response(200, json={"channels": [{"capacity": "5"}]}))

        channel = asyncio.run(service.get_channels(rest_handle(service)))["channels"][0]

        assert channel["active"] is False
        assert channel["local_balance"] == 0

    def test_missing_channels_left_for_caller(self):
        service = rest_service(lambda request: httpx.Response(200, json={}))

        assert asyncio.run(service.get_channels(rest_handle(service))) == {"channels": None}

    def test_node_info(self):
        def handler(request):
            assert request.url.path == "/v1/graph/node/02bb"
            return httpx.Response(200, json={"node": {
                "pub_key": "02bb",
                "alias": "Bitrefill",
                "color": "#ff0000",
                "addresses": [{"network": "tcp", "addr": "1.2.3.4:9735"}],
                "last_update": 1700000000,
            }})

        service = rest_service(handler)

        info = asyncio.run(service.get_node_info(rest_handle(service), "02bb"))

        assert info["alias"] == "Bitrefill"
        assert info["sockets"] == ["1.2.3.4:9735"]

    def test_wallet_info(self):
        service = rest_service(lambda request: httpx.Response(200, json={
            "alias": "my-node",
            "identity_pubkey": "03cc",
            "num_active_channels": 4,
            "block_height": 800000,
            "synced_to_chain": True,
            "chains": [{"chain": "bitcoin", "network": "mainnet"}],
        }))

        info = asyncio.run(service.get_wallet_info(rest_handle(service)))

        assert info["public_key"] == "03cc"
        assert info["active_channels_count"] == 4
        assert info["chains"] == ["bitcoin"]

    def test_http_error_uses_node_message(self):
        service = rest_service(lambda request: httpx.Response(
            500, json={"code": 2, "message": "unable to find node"}
        ))

        with pytest.raises(LndConnectionError, match="unable to find node"):
            asyncio.run(service.get_node_info(rest_handle(service), "02dd"))

    def test_http_error_without_body(self):
        service = rest_service(lambda request: httpx.Response(503))

        with pytest.raises(LndConnectionError, match="HTTP 503"):
            asyncio.run(service.get_channels(rest_handle(service)))

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        service = rest_service(handler)

        with pytest.raises(LndConnectionError, match="connection refused"):
            asyncio.run(service.get_channels(rest_handle(service)))

    def test_empty_macaroon_rejected(self):
        service = RealLndService()

        with pytest.raises(LndConnectionError):
            service.authenticated_lnd(LndAuthentication(cert="x", macaroon="", socket="node:8080"))

    def test_foreign_handle_rejected(self):
        service = rest_service(lambda request: httpx.Response(200, json={}))

        with pytest.raises(LndConnectionError):
            asyncio.run(service.get_channels(LndHandle(kind="mock", socket="node:8080")))

    def test_authentication_repr_hides_credentials(self):
        auth = LndAuthentication(cert="CERTDATA", macaroon=MACAROON_HEX, socket="node:8080")

        assert MACAROON_HEX not in repr(auth)
        assert "CERTDATA" not in repr(auth)


class TestLndClient:
    """Tests for LndClient."""

    def test_reads_credentials(self, credentials):
        captured = {}

        class RecordingService(MockLndService):
            def authenticated_lnd(self, auth):
                captured["auth"] = auth
                return super().authenticated_lnd(auth)

        cert_path, macaroon_path = credentials
        config = LndAgentConfig(lnd_host="node", lnd_port=8081, tls_cert_path=cert_path, macaroon_path=macaroon_path)

        client = LndClient(config, RecordingService())

        assert captured["auth"].macaroon == MACAROON_HEX
        assert captured["auth"].cert.startswith("-----BEGIN CERTIFICATE-----")
        assert client.get_lnd().socket == "node:8081"

    def test_mock_mode_without_credential_files(self):
        client = LndClient(LndAgentConfig(use_mock_lnd=True))

        assert isinstance(client.get_lnd_service(), MockLndService)
        assert client.get_lnd().kind == "mock"

    def test_missing_credential_file(self, tmp_path):
        config = LndAgentConfig(
            tls_cert_path=str(tmp_path / "missing.cert"),
            macaroon_path=str(tmp_path / "missing.macaroon"),
        )

        with pytest.raises(LndConnectionError) as exc_info:
            LndClient(config, MockLndService())

        assert str(exc_info.value).startswith("LND connection error:")
        assert str(tmp_path) not in str(exc_info.value)

    def test_missing_credential_paths(self):
        with pytest.raises(LndConnectionError, match="paths are required"):
            LndClient(LndAgentConfig(), MockLndService())

    def test_check_connection(self):
        client = LndClient(LndAgentConfig(use_mock_lnd=True))

        assert asyncio.run(client.check_connection()) is True

    def test_check_connection_failure(self, credentials):
        def handler(request):
            return httpx.Response(401, json={"message": "verification failed: signature mismatch"})

        cert_path, macaroon_path = credentials
        config = LndAgentConfig(tls_cert_path=cert_path, macaroon_path=macaroon_path)
        client = LndClient(config, rest_service(handler))

        with pytest.raises(LndConnectionError, match="LND connection check failed: verification failed"):
            asyncio.run(client.check_connection())

    def test_close_swallows_service_errors(self):
        class FailingClose(MockLndService):
            async def close(self, lnd):
                raise RuntimeError("already closed")

        client = LndClient(LndAgentConfig(use_mock_lnd=True), FailingClose())

        asyncio.run(client.close())

