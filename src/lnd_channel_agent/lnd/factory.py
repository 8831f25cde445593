"""
Factory for LND service instances.

Picks the simulated or the live service once, from configuration.
"""
import logging

from ..config import LndAgentConfig
from .mock_service import MockLndService
from .real_service import RealLndService
from .service import LndService

logger = logging.getLogger(__name__)


def create_lnd_service(config: LndAgentConfig) -> LndService:
    """
    Create an LND service based on configuration.

    :param config: LndAgentConfig instance
    :return: MockLndService when use_mock_lnd is set, otherwise RealLndService
    """
    if config.use_mock_lnd:
        logger.info("Creating mock LND service")
        return MockLndService()

    logger.info("Creating real LND service")
    return RealLndService(timeout=config.request_timeout_s)
