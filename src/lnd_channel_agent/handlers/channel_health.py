"""
Channel health and liquidity scoring.

Pure functions over channels and a HealthCriteria band. No I/O.
"""
from typing import Iterable, List, Optional

from ..models import Channel, ChannelAssessment, HealthCriteria

BALANCED = "balanced"
INBOUND_HEAVY = "inbound_heavy"
OUTBOUND_HEAVY = "outbound_heavy"
UNKNOWN_LIQUIDITY = "unknown"


def local_ratio(channel: Channel) -> Optional[float]:
    """local_balance / capacity, or None for a non-positive capacity."""
    if channel.capacity <= 0:
        return None
    return channel.local_balance / channel.capacity


def liquidity_state(channel: Channel, criteria: HealthCriteria) -> str:
    """
    Where the channel's local ratio sits relative to the band.

    Below the band most funds are on the remote side (inbound heavy),
    above it most are local (outbound heavy).
    """
    ratio = local_ratio(channel)
    if ratio is None:
        return UNKNOWN_LIQUIDITY
    if ratio < criteria.min_local_ratio:
        return INBOUND_HEAVY
    if ratio > criteria.max_local_ratio:
        return OUTBOUND_HEAVY
    return BALANCED


def is_channel_healthy(channel: Channel, criteria: HealthCriteria) -> bool:
    """Active, with a local ratio inside the band (inclusive)."""
    return channel.active and liquidity_state(channel, criteria) == BALANCED


def assess_channel(channel: Channel, criteria: HealthCriteria) -> ChannelAssessment:
    state = liquidity_state(channel, criteria)
    return ChannelAssessment(
        local_ratio=local_ratio(channel),
        healthy=channel.active and state == BALANCED,
        liquidity_state=state,
    )


def assess_channels(channels: Iterable[Channel], criteria: HealthCriteria) -> List[ChannelAssessment]:
    return [assess_channel(channel, criteria) for channel in channels]
