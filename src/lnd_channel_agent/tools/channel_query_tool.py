"""
Natural-language channel query tool.

Exposes the intent parser and the channel query handler as one tool that a
calling agent can validate against declared input and output schemas.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from ..handlers.channel_query_handler import ChannelQueryHandler
from ..interaction import IntentParser
from ..models import HealthCriteria
from ..schemas import ERROR_RESULT_TYPE
from ..security import InputValidator, ValidationError, sanitize_error

logger = logging.getLogger(__name__)


class QueryChannelsInput(BaseModel):
    """Input schema for the channel query tool."""
    query: str = Field(description="Natural language query about your Lightning Node channels")


class QueryChannelsOutput(BaseModel):
    """Output schema for the channel query tool."""
    type: str = Field(description="Recognized intent, or 'error'")
    response: str = Field(description="Natural language response to your query")
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Structured data related to your query",
    )


class ChannelQueryTool(BaseTool):
    """
    Answers questions about the node's channels: listing, health and liquidity.

    Deterministic classification, one fresh fetch per query, never raises.
    """

    name: str = "queryChannels"
    description: str = (
        "Query Lightning Network channels using natural language. "
        "Use for: 'list my channels', 'how healthy are my channels', "
        "'how is my channel liquidity'. Input is the user's question."
    )
    args_schema: type[BaseModel] = QueryChannelsInput

    intent_parser: Any = Field(default=None)
    query_handler: Any = Field(default=None)

    def __init__(
        self,
        lnd_client,
        health_criteria: Optional[HealthCriteria] = None,
        intent_parser: Optional[IntentParser] = None,
        **kwargs,
    ):
        """
        :param lnd_client: LndClient bound to a node session
        :param health_criteria: Healthy local-ratio band for the handler
        :param intent_parser: Parser with custom rules, if any
        """
        super().__init__(**kwargs)
        self.intent_parser = intent_parser or IntentParser()
        self.query_handler = ChannelQueryHandler(lnd_client, health_criteria)

    def get_metadata(self) -> Dict[str, Any]:
        """Name, description and JSON schemas for tool registration."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": QueryChannelsInput.model_json_schema(),
            "outputSchema": QueryChannelsOutput.model_json_schema(),
        }

    async def execute_query(self, query: str) -> Dict[str, Any]:
        """
        Classify and answer a query.

        :param query: Natural language question
        :return: Dict matching QueryChannelsOutput
        """
        try:
            query = InputValidator.validate_query(query)
            logger.info(f'Received query: "{query}"')

            intent = self.intent_parser.parse_intent(query)
            result = await self.query_handler.handle_query(intent)

            if result.is_error:
                logger.warning(f'Query failed: "{query}"')
            else:
                logger.info(f'Query handled successfully as {result.type}: "{query}"')

            data = result.data or {}
            if result.error is not None:
                data = {"error": {"message": result.error.message}}

            return QueryChannelsOutput(
                type=result.type,
                response=result.response,
                data=data,
            ).model_dump()

        except ValidationError as e:
            logger.warning(f"Rejected query: {e}")
            return QueryChannelsOutput(
                type=ERROR_RESULT_TYPE,
                response=f"I couldn't process your query: {e}",
                data={"error": {"message": str(e)}},
            ).model_dump()

        except Exception as e:
            message = sanitize_error(e)
            logger.error(f"Error executing query: {message}")
            return QueryChannelsOutput(
                type=ERROR_RESULT_TYPE,
                response=f"I encountered an error while processing your query: {message}",
                data={"error": {"message": message}},
            ).model_dump()

    def _run(self, query: str) -> Dict[str, Any]:
        return asyncio.run(self.execute_query(query))

    async def _arun(self, query: str) -> Dict[str, Any]:
        return await self.execute_query(query)
