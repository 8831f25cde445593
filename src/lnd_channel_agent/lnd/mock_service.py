"""
Simulated LND service with fixed sample data.

Used when USE_MOCK_LND is set, for demos and tests without a node.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .service import LndAuthentication, LndHandle, LndService

logger = logging.getLogger(__name__)


ACINQ_PUBKEY = "03864ef025fde8fb587d989186ce6a4a186895ee44a926bfc370e2c366597a3f8f"
BITREFILL_PUBKEY = "02a1c6e284a5ddf9cbb4ff50e84abb1d3c0f74d733385cb7f3631d57a35c3bfbec"
LNPLUS_PUBKEY = "03abf6f44c355dec0d5aa155bdbdd6e0c8fefe318eff402de65c6eb2e1be55dc3e"

MOCK_ALIASES = {
    ACINQ_PUBKEY: "ACINQ",
    BITREFILL_PUBKEY: "Bitrefill",
    LNPLUS_PUBKEY: "LN+",
}

MOCK_CHANNELS = (
    {
        "id": "channel-1",
        "capacity": 10_000_000,
        "local_balance": 5_000_000,
        "remote_balance": 5_000_000,
        "channel_point": "txid:0",
        "active": True,
        "remote_pubkey": ACINQ_PUBKEY,
    },
    {
        "id": "channel-2",
        "capacity": 5_000_000,
        "local_balance": 2_500_000,
        "remote_balance": 2_500_000,
        "channel_point": "txid:1",
        "active": True,
        "remote_pubkey": BITREFILL_PUBKEY,
    },
    {
        "id": "channel-3",
        "capacity": 2_000_000,
        "local_balance": 1_000_000,
        "remote_balance": 1_000_000,
        "channel_point": "txid:2",
        "active": False,
        "remote_pubkey": LNPLUS_PUBKEY,
    },
)


class MockLndService(LndService):
    """Deterministic stand-in for a node: three channels, two of them active."""

    def authenticated_lnd(self, auth: LndAuthentication) -> LndHandle:
        logger.debug("Creating mock LND session")
        return LndHandle(kind="mock", socket=auth.socket, payload={"id": "mock-lnd-instance"})

    async def get_wallet_info(self, lnd: LndHandle) -> Dict[str, Any]:
        logger.debug("Getting wallet info from mock LND")
        return {
            "alias": "mock-node",
            "public_key": "mock-pubkey",
            "version": "0.15.1",
            "active_channels_count": 5,
            "peers_count": 10,
            "block_height": 700000,
            "is_synced_to_chain": True,
            "is_testnet": False,
            "chains": ["bitcoin"],
        }

    async def get_channels(self, lnd: LndHandle) -> Dict[str, Any]:
        logger.debug("Getting channels from mock LND")
        return {"channels": [dict(channel) for channel in MOCK_CHANNELS]}

    async def get_node_info(self, lnd: LndHandle, public_key: str) -> Dict[str, Any]:
        logger.debug(f"Getting node info from mock LND for public key: {public_key}")
        alias = MOCK_ALIASES.get(public_key, "Unknown")
        return {
            "alias": alias,
            "color": "#3399ff",
            "public_key": public_key,
            "sockets": [f"{alias.lower()}.com:9735"],
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
