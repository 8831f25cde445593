"""
Natural-language rendering of channel data.

Presentation only: health and liquidity classification come from the
ChannelAssessments computed by the query handler, never recomputed here,
so the text always agrees with the structured data returned next to it.
"""
import logging
from typing import List

from ..handlers.channel_health import BALANCED, INBOUND_HEAVY, OUTBOUND_HEAVY, UNKNOWN_LIQUIDITY
from ..models import Channel, ChannelAssessment, ChannelData, HealthCriteria

logger = logging.getLogger(__name__)

SATS_PER_BTC = 100_000_000

_LIQUIDITY_LABELS = {
    BALANCED: "balanced",
    INBOUND_HEAVY: "mostly remote",
    OUTBOUND_HEAVY: "mostly local",
    UNKNOWN_LIQUIDITY: "unknown",
}


def format_sats(amount: float) -> str:
    """12,345,678 sats (0.12345678 BTC)"""
    sats = int(round(amount))
    return f"{sats:,} sats ({sats / SATS_PER_BTC:.8f} BTC)"


def format_ratio(ratio) -> str:
    return "n/a" if ratio is None else f"{ratio * 100:.1f}%"


def peer_name(channel: Channel) -> str:
    if channel.remote_alias:
        return channel.remote_alias
    if channel.remote_pubkey:
        return f"{channel.remote_pubkey[:16]}..."
    return "Unknown peer"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class ChannelFormatter:
    """Renders one answer per channel intent."""

    def format_channel_list(self, data: ChannelData) -> str:
        summary = data.summary
        if not data.channels:
            return "You don't have any channels yet."

        lines = [
            f"You have {_plural(summary.total_channels, 'channel')} "
            f"({summary.active_channels} active, {summary.inactive_channels} inactive) "
            f"with a total capacity of {format_sats(summary.total_capacity)}.",
            f"Local balance: {format_sats(summary.total_local_balance)}. "
            f"Remote balance: {format_sats(summary.total_remote_balance)}.",
            "",
        ]
        for index, channel in enumerate(data.channels, start=1):
            status = "active" if channel.active else "inactive"
            lines.append(
                f"{index}. {peer_name(channel)}: {channel.capacity:,} sats capacity, "
                f"{channel.local_balance:,} local / {channel.remote_balance:,} remote ({status})"
            )
        return "\n".join(lines)

    def format_channel_health(self, data: ChannelData, criteria: HealthCriteria) -> str:
        summary = data.summary
        if not data.channels:
            return "You don't have any channels to assess."

        band = (
            f"A channel counts as healthy when it is active and holds between "
            f"{format_ratio(criteria.min_local_ratio)} and {format_ratio(criteria.max_local_ratio)} "
            f"of its capacity on your side."
        )

        if summary.unhealthy_channels == 0:
            if summary.total_channels == 1:
                return f"Your only channel is healthy. {band}"
            return f"All {summary.total_channels} channels are healthy. {band}"

        lines = [
            f"{summary.healthy_channels} of {_plural(summary.total_channels, 'channel')} "
            f"{'is' if summary.healthy_channels == 1 else 'are'} healthy; "
            f"{summary.unhealthy_channels} need{'s' if summary.unhealthy_channels == 1 else ''} attention.",
            band,
            "",
            "Channels needing attention:",
        ]
        for channel, assessment in zip(data.channels, data.assessments):
            if assessment.healthy:
                continue
            lines.append(f"- {peer_name(channel)}: {self._unhealthy_reason(channel, assessment)}")
        return "\n".join(lines)

    def format_channel_liquidity(self, data: ChannelData, criteria: HealthCriteria) -> str:
        summary = data.summary
        if not data.channels:
            return "You don't have any channels, so there is no channel liquidity yet."

        total_balance = summary.total_local_balance + summary.total_remote_balance
        overall = summary.total_local_balance / total_balance if total_balance > 0 else None

        lines = [
            f"Across {_plural(summary.total_channels, 'channel')} you can send up to "
            f"{format_sats(summary.total_local_balance)} and receive up to "
            f"{format_sats(summary.total_remote_balance)}.",
            f"Overall local ratio: {format_ratio(overall)}.",
            "",
        ]
        for channel, assessment in zip(data.channels, data.assessments):
            lines.append(
                f"- {peer_name(channel)}: {format_ratio(assessment.local_ratio)} local "
                f"({_LIQUIDITY_LABELS.get(assessment.liquidity_state, assessment.liquidity_state)})"
            )

        inbound_heavy = self._count(data.assessments, INBOUND_HEAVY)
        outbound_heavy = self._count(data.assessments, OUTBOUND_HEAVY)
        if inbound_heavy:
            lines.append("")
            lines.append(
                f"{_plural(inbound_heavy, 'channel')} below {format_ratio(criteria.min_local_ratio)} local "
                f"can barely send; consider rebalancing outbound liquidity into them."
            )
        if outbound_heavy:
            lines.append("")
            lines.append(
                f"{_plural(outbound_heavy, 'channel')} above {format_ratio(criteria.max_local_ratio)} local "
                f"can barely receive; consider acquiring inbound liquidity."
            )
        return "\n".join(lines)

    @staticmethod
    def _count(assessments: List[ChannelAssessment], state: str) -> int:
        return sum(1 for a in assessments if a.liquidity_state == state)

    @staticmethod
    def _unhealthy_reason(channel: Channel, assessment: ChannelAssessment) -> str:
        if not channel.active:
            return "inactive"
        if assessment.liquidity_state == UNKNOWN_LIQUIDITY:
            return "no capacity reported"
        if assessment.liquidity_state == INBOUND_HEAVY:
            return f"low local balance ({format_ratio(assessment.local_ratio)})"
        if assessment.liquidity_state == OUTBOUND_HEAVY:
            return f"high local balance ({format_ratio(assessment.local_ratio)})"
        return "unhealthy"
