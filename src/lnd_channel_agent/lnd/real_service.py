"""
LND service backed by the node's REST API.

Requests are authenticated with the hex macaroon header and TLS is verified
against the node's own certificate. LND encodes int64 values as strings;
responses are normalized to the shapes MockLndService returns.
"""
import logging
import ssl
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..exceptions import LndConnectionError
from .service import LndAuthentication, LndHandle, LndService

logger = logging.getLogger(__name__)


MACAROON_HEADER = "Grpc-Metadata-macaroon"


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class _RestSession:
    base_url: str
    headers: Dict[str, str]
    verify: Any


class RealLndService(LndService):
    """Talks to a live LND node over REST (default port 8080)."""

    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        :param timeout: Per-request timeout in seconds
        :param transport: Optional httpx transport; replaces the TLS connection
        """
        self._timeout = timeout
        self._transport = transport

    def authenticated_lnd(self, auth: LndAuthentication) -> LndHandle:
        if not auth.macaroon:
            raise LndConnectionError("LND macaroon is empty")

        verify: Any = True
        if self._transport is None:
            verify = self._ssl_context(auth.cert)

        # SECURITY: never log the session headers
        session = _RestSession(
            base_url=f"https://{auth.socket}",
            headers={MACAROON_HEADER: auth.macaroon},
            verify=verify,
        )
        logger.debug(f"Creating LND REST session for {auth.socket}")
        return LndHandle(kind="rest", socket=auth.socket, payload=session)

    @staticmethod
    def _ssl_context(cert: str) -> ssl.SSLContext:
        if not cert:
            raise LndConnectionError("LND TLS certificate is empty")
        try:
            return ssl.create_default_context(cadata=cert)
        except (ssl.SSLError, ValueError) as e:
            raise LndConnectionError(f"Invalid LND TLS certificate: {e}") from e

    def _client(self, lnd: LndHandle) -> httpx.AsyncClient:
        session = lnd.payload
        if lnd.kind != "rest" or not isinstance(session, _RestSession):
            raise LndConnectionError("Handle was not created by the REST LND service")

        if self._transport is not None:
            return httpx.AsyncClient(
                base_url=session.base_url,
                headers=session.headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return httpx.AsyncClient(
            base_url=session.base_url,
            headers=session.headers,
            timeout=self._timeout,
            verify=session.verify,
        )

    async def _get(self, lnd: LndHandle, path: str) -> Dict[str, Any]:
        async with self._client(lnd) as client:
            try:
                response = await client.get(path)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                body: Dict[str, Any] = {}
                try:
                    body = e.response.json()
                except ValueError:
                    body = {"error": e.response.text.strip()} if e.response.text else {}
                # LND REST errors look like {"code": 2, "message": "..."}
                error_msg = (
                    body.get("message")
                    or body.get("error")
                    or f"HTTP {e.response.status_code}"
                )
                logger.error(f"LND request {path} failed on {lnd.socket}: {error_msg}")
                raise LndConnectionError(error_msg) from e
            except httpx.HTTPError as e:
                error_msg = str(e) or f"{type(e).__name__} connecting to {lnd.socket}"
                logger.error(f"LND request {path} failed on {lnd.socket}: {error_msg}")
                raise LndConnectionError(error_msg) from e

            try:
                payload = response.json()
            except ValueError as e:
                raise LndConnectionError(f"Invalid JSON from LND for {path}") from e

        return payload if isinstance(payload, dict) else {}

    async def get_wallet_info(self, lnd: LndHandle) -> Dict[str, Any]:
        logger.debug("Getting wallet info from real LND")
        info = await self._get(lnd, "/v1/getinfo")
        return {
            "alias": info.get("alias", ""),
            "public_key": info.get("identity_pubkey", ""),
            "version": info.get("version", ""),
            "active_channels_count": _as_int(info.get("num_active_channels")),
            "peers_count": _as_int(info.get("num_peers")),
            "block_height": _as_int(info.get("block_height")),
            "is_synced_to_chain": bool(info.get("synced_to_chain", False)),
            "is_testnet": bool(info.get("testnet", False)),
            "chains": [c.get("chain") for c in info.get("chains") or [] if isinstance(c, dict)],
        }

    async def get_channels(self, lnd: LndHandle) -> Dict[str, Any]:
        logger.debug("Getting channels from real LND")
        body = await self._get(lnd, "/v1/channels")
        channels = body.get("channels")
        if not isinstance(channels, list):
            # Left for the caller to normalize
            return {"channels": channels}

        return {"channels": [self._normalize_channel(c) if isinstance(c, dict) else c for c in channels]}

    @staticmethod
    def _normalize_channel(raw: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": raw.get("chan_id"),
            "channel_point": raw.get("channel_point"),
            "capacity": _as_int(raw.get("capacity")),
            "local_balance": _as_int(raw.get("local_balance")),
            "remote_balance": _as_int(raw.get("remote_balance")),
            "active": bool(raw.get("active", False)),
            "remote_pubkey": raw.get("remote_pubkey"),
        }

    async def get_node_info(self, lnd: LndHandle, public_key: str) -> Dict[str, Any]:
        logger.debug(f"Getting node info from real LND for public key: {public_key}")
        body = await self._get(lnd, f"/v1/graph/node/{public_key}")
        node = body.get("node") or {}
        return {
            "alias": node.get("alias", ""),
            "color": node.get("color", ""),
            "public_key": node.get("pub_key", public_key),
            "sockets": [a.get("addr") for a in node.get("addresses") or [] if isinstance(a, dict)],
            "updated_at": node.get("last_update"),
        }
