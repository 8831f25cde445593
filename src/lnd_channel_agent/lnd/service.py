"""
LND service interface.

The abstraction the query pipeline depends on. A service turns credentials
into an opaque LndHandle and answers channel and node lookups against it;
only the service that issued a handle interprets its payload.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class LndAuthentication:
    """Credentials for an LND node."""
    cert: str
    macaroon: str
    socket: str

    def __repr__(self) -> str:
        return f"LndAuthentication(socket={self.socket!r})"


@dataclass(frozen=True)
class LndHandle:
    """
    Opaque authenticated session.

    Callers pass it back to the service that created it; they must not
    look inside ``payload``.
    """
    kind: str
    socket: str
    payload: Any = field(default=None, repr=False, compare=False)


class LndService(ABC):
    """Operations available against an LND node, real or simulated."""

    @abstractmethod
    def authenticated_lnd(self, auth: LndAuthentication) -> LndHandle:
        """
        Create an authenticated session handle.

        :param auth: Certificate, hex macaroon and host:port socket
        :return: Handle to pass to the other operations
        """

    @abstractmethod
    async def get_wallet_info(self, lnd: LndHandle) -> Dict[str, Any]:
        """Node identity and sync state (alias, public_key, version, ...)."""

    @abstractmethod
    async def get_channels(self, lnd: LndHandle) -> Dict[str, Any]:
        """
        List channels.

        :return: Mapping with a ``channels`` list of channel records
        """

    @abstractmethod
    async def get_node_info(self, lnd: LndHandle, public_key: str) -> Dict[str, Any]:
        """
        Look up a node in the channel graph.

        :return: Mapping with at least ``alias``
        """

    async def close(self, lnd: LndHandle) -> None:
        """Release anything held for the handle."""
        return None
