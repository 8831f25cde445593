"""
Public application facade for the LND channel agent.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from .config import LndAgentConfig
from .exceptions import AgentNotInitializedError
from .lnd import LndClient, LndService, create_lnd_service
from .tools import ChannelQueryTool

logger = logging.getLogger(__name__)


class LndChannelAgentApp:
    """
    Public application facade.

    All dependency wiring is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = LndChannelAgentApp(config)
        app.initialize()
        result = app.query("how healthy are my channels")
    """

    def __init__(self, config: LndAgentConfig, lnd_service: Optional[LndService] = None):
        """
        :param config: LndAgentConfig instance
        :param lnd_service: Service override (tests); chosen from config otherwise
        """
        self._config = config
        self._lnd_service = lnd_service
        self._client: Optional[LndClient] = None
        self._tool: Optional[ChannelQueryTool] = None

    @property
    def config(self) -> LndAgentConfig:
        return self._config

    def initialize(self) -> None:
        """
        Create the LND service and client and wire the query tool.

        Idempotent. Call once before query().

        :raises LndConnectionError: If credentials cannot be read
        :raises ConfigurationError: If the health band is invalid
        """
        if self._tool:
            return

        service = self._lnd_service or create_lnd_service(self._config)
        self._client = LndClient(self._config, service)
        self._tool = ChannelQueryTool(self._client, health_criteria=self._config.health_criteria())
        logger.info(
            f"Channel agent initialized ({'mock' if self._config.use_mock_lnd else 'real'} LND at {self._config.socket})"
        )

    def _require_tool(self) -> ChannelQueryTool:
        if not self._tool:
            raise AgentNotInitializedError("Agent is not initialized. Call initialize() first.")
        return self._tool

    def _require_client(self) -> LndClient:
        if not self._client:
            raise AgentNotInitializedError("Agent is not initialized. Call initialize() first.")
        return self._client

    async def aquery(self, query: str) -> Dict[str, Any]:
        """Answer a query from inside a running event loop."""
        return await self._require_tool().execute_query(query)

    def query(self, query: str) -> Dict[str, Any]:
        """
        Answer a natural-language query about the node's channels.

        :param query: User query string
        :return: {"type", "response", "data"}
        """
        return asyncio.run(self.aquery(query))

    def check_connection(self) -> bool:
        """
        Ask the node for its wallet info.

        :raises LndConnectionError: If the node does not answer
        """
        return asyncio.run(self._require_client().check_connection())

    def get_tools(self) -> List[Dict[str, Any]]:
        """Metadata for every tool this agent exposes."""
        return [self._require_tool().get_metadata()]

    def close(self) -> None:
        if self._client:
            asyncio.run(self._client.close())
        self._client = None
        self._tool = None
