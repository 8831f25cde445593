"""
Channel query handler.

Turns a classified Intent into a QueryResult:

    fetch_raw_channel_data -> enrich_channels_with_metadata -> assess -> summarize -> format

Nothing is cached between queries; every call fetches fresh data. Errors are
caught once, in handle_query, except alias lookups, which degrade per channel.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..formatters.channel_formatter import ChannelFormatter
from ..interaction.intent_types import Intent, IntentType
from ..models import (
    UNKNOWN_ALIAS,
    AliasError,
    Channel,
    ChannelAssessment,
    ChannelData,
    ChannelSummary,
    HealthCriteria,
)
from ..schemas import ERROR_RESULT_TYPE, QueryError, QueryResult
from ..security import sanitize_error
from .channel_health import assess_channels

logger = logging.getLogger(__name__)


UNKNOWN_INTENT_RESPONSE = (
    "I'm sorry, I didn't understand your query. "
    "You can ask me to list your channels, check their health or review their liquidity."
)


class ChannelQueryHandler:
    """
    Answers channel intents against an LND client.

    The health criteria are fixed for the handler's lifetime.
    """

    def __init__(
        self,
        lnd_client,
        health_criteria: Optional[HealthCriteria] = None,
        formatter: Optional[ChannelFormatter] = None,
    ):
        """
        :param lnd_client: LndClient (or anything exposing get_lnd / get_lnd_service)
        :param health_criteria: Healthy local-ratio band; defaults to 0.1-0.9
        :param formatter: Response formatter
        """
        self._lnd_client = lnd_client
        self._health_criteria = health_criteria or HealthCriteria()
        self._formatter = formatter or ChannelFormatter()

    @property
    def health_criteria(self) -> HealthCriteria:
        return self._health_criteria

    async def handle_query(self, intent: Intent) -> QueryResult:
        """
        Handle a classified query. Never raises.

        :param intent: Output of IntentParser.parse_intent
        :return: QueryResult of the intent's type, or of type 'error'
        """
        try:
            if intent.type == IntentType.CHANNEL_LIST:
                data = await self.get_channel_data()
                return self._result(intent, self._formatter.format_channel_list(data), data)

            if intent.type == IntentType.CHANNEL_HEALTH:
                data = await self.get_channel_data()
                response = self._formatter.format_channel_health(data, self._health_criteria)
                return self._result(intent, response, data, include_criteria=True)

            if intent.type == IntentType.CHANNEL_LIQUIDITY:
                data = await self.get_channel_data()
                response = self._formatter.format_channel_liquidity(data, self._health_criteria)
                return self._result(intent, response, data, include_criteria=True)

            logger.info(f"Unrecognized query: '{intent.query}'")
            return QueryResult(type=IntentType.UNKNOWN.value, response=UNKNOWN_INTENT_RESPONSE)

        except Exception as e:
            message = sanitize_error(e)
            kind = getattr(intent.type, "value", intent.type)
            logger.error(f"Error handling {kind} query: {message}")
            return QueryResult(
                type=ERROR_RESULT_TYPE,
                response=f"I encountered an error while processing your query: {message}",
                error=QueryError(message=message),
            )

    def _result(
        self,
        intent: Intent,
        response: str,
        data: ChannelData,
        include_criteria: bool = False,
    ) -> QueryResult:
        payload: Dict[str, Any] = data.to_dict()
        if include_criteria:
            payload["healthCriteria"] = self._health_criteria.to_dict()
        return QueryResult(type=IntentType(intent.type).value, response=response, data=payload)

    async def get_channel_data(self) -> ChannelData:
        """Fetch, enrich, assess and summarize the node's channels."""
        raw_channels = await self.fetch_raw_channel_data()
        channels = await self.enrich_channels_with_metadata(raw_channels)
        assessments = assess_channels(channels, self._health_criteria)
        summary = self.calculate_channel_summary(channels, assessments)
        return ChannelData(channels=channels, assessments=assessments, summary=summary)

    async def fetch_raw_channel_data(self) -> List[Channel]:
        """
        List channels from the node.

        A missing, null or non-list ``channels`` field means no channels.
        Transport errors propagate.
        """
        service = self._lnd_client.get_lnd_service()
        response = await service.get_channels(self._lnd_client.get_lnd())

        raw = response.get("channels") if isinstance(response, Mapping) else None
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed channel list of type {type(raw).__name__}")
            return []

        channels = []
        for entry in raw:
            if not isinstance(entry, Mapping):
                logger.warning(f"Skipping malformed channel record of type {type(entry).__name__}")
                continue
            channels.append(Channel.from_raw(entry))
        return channels

    async def enrich_channels_with_metadata(self, channels: Sequence[Channel]) -> List[Channel]:
        """Add counterparty aliases. An empty list is returned without calling the node."""
        if not channels:
            return []
        return await self.add_node_aliases(channels)

    async def add_node_aliases(self, channels: Sequence[Channel]) -> List[Channel]:
        """
        Resolve every counterparty alias concurrently.

        Each lookup fails on its own: the channel gets a placeholder alias
        and an AliasError, and the rest still resolve. The result always has
        one record per input channel, in input order.
        """
        service = self._lnd_client.get_lnd_service()
        lnd = self._lnd_client.get_lnd()

        async def resolve(channel: Channel) -> Channel:
            if not channel.remote_pubkey:
                return channel
            try:
                info = await service.get_node_info(lnd, channel.remote_pubkey)
            except Exception as e:
                message = sanitize_error(e)
                logger.warning(f"Alias lookup failed for {channel.remote_pubkey}: {message}")
                return replace(
                    channel,
                    remote_alias=UNKNOWN_ALIAS,
                    error=AliasError(message=message, public_key=channel.remote_pubkey),
                )

            alias = info.get("alias") if isinstance(info, Mapping) else None
            return replace(channel, remote_alias=alias if isinstance(alias, str) else "", error=None)

        return list(await asyncio.gather(*(resolve(channel) for channel in channels)))

    def calculate_channel_summary(
        self,
        channels: Sequence[Channel],
        assessments: Optional[Sequence[ChannelAssessment]] = None,
    ) -> ChannelSummary:
        """
        Aggregate channel totals and health counts.

        Pure: the same channels always give the same summary. With no
        channels every field is zero.

        :param assessments: Precomputed assessments in channel order
        """
        if assessments is None:
            assessments = assess_channels(channels, self._health_criteria)

        count = len(channels)
        total_capacity = sum(c.capacity for c in channels)
        active = sum(1 for c in channels if c.active)
        healthy = sum(1 for a in assessments if a.healthy)

        return ChannelSummary(
            total_capacity=total_capacity,
            total_local_balance=sum(c.local_balance for c in channels),
            total_remote_balance=sum(c.remote_balance for c in channels),
            active_channels=active,
            inactive_channels=count - active,
            average_capacity=total_capacity / count if count else 0,
            healthy_channels=healthy,
            unhealthy_channels=count - healthy,
        )
