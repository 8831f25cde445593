"""
LND client: owns the authenticated session and the service that serves it.
"""
import logging
from pathlib import Path
from typing import Optional

from ..config import LndAgentConfig
from ..exceptions import LndConnectionError
from ..security import sanitize_error
from .factory import create_lnd_service
from .service import LndAuthentication, LndHandle, LndService

logger = logging.getLogger(__name__)


class LndClient:
    """
    Holds one authenticated LND session for the lifetime of the process.

    Usage:
        client = LndClient(config)
        await client.check_connection()
        channels = await client.get_lnd_service().get_channels(client.get_lnd())
    """

    def __init__(self, config: LndAgentConfig, lnd_service: Optional[LndService] = None):
        """
        :param config: Connection settings and credential paths
        :param lnd_service: Service to use; created from config when omitted
        :raises LndConnectionError: If credentials cannot be read or the session cannot be created
        """
        self._config = config
        self._lnd_service = lnd_service or create_lnd_service(config)
        self._lnd = self._create_lnd_connection()

    def _read_credentials(self) -> LndAuthentication:
        cert_path = self._config.tls_cert_path
        macaroon_path = self._config.macaroon_path

        # Mock sessions do not need real credentials
        if self._config.use_mock_lnd and not (
            cert_path and macaroon_path and Path(cert_path).is_file() and Path(macaroon_path).is_file()
        ):
            return LndAuthentication(cert="", macaroon="", socket=self._config.socket)

        if not cert_path or not macaroon_path:
            raise LndConnectionError("TLS certificate and macaroon paths are required")

        cert = Path(cert_path).read_text(encoding="utf-8")
        macaroon = Path(macaroon_path).read_bytes().hex()
        return LndAuthentication(cert=cert, macaroon=macaroon, socket=self._config.socket)

    def _create_lnd_connection(self) -> LndHandle:
        try:
            auth = self._read_credentials()
            mode = "mock" if self._config.use_mock_lnd else "real"
            logger.info(f"Creating {mode} LND connection to {auth.socket}")
            return self._lnd_service.authenticated_lnd(auth)
        except Exception as e:
            message = sanitize_error(e)
            logger.error(f"Failed to create LND connection: {message}")
            raise LndConnectionError(f"LND connection error: {message}") from e

    def get_lnd(self) -> LndHandle:
        """Authenticated session handle."""
        return self._lnd

    def get_lnd_service(self) -> LndService:
        return self._lnd_service

    async def check_connection(self) -> bool:
        """
        Check the connection by fetching wallet info.

        :return: True when the node answered
        :raises LndConnectionError: If the node cannot be reached
        """
        try:
            await self._lnd_service.get_wallet_info(self._lnd)
        except Exception as e:
            message = sanitize_error(e)
            logger.error(f"LND connection check failed: {message}")
            raise LndConnectionError(f"LND connection check failed: {message}") from e

        logger.info("LND connection successful")
        return True

    async def close(self) -> None:
        """Release the session."""
        try:
            await self._lnd_service.close(self._lnd)
            logger.info("LND connection closed")
        except Exception as e:
            logger.error(f"Error closing LND connection: {sanitize_error(e)}")
