from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ConfigurationError


ALIAS_RETRIEVAL_FAILED = "alias_retrieval_failed"
UNKNOWN_ALIAS = "Unknown (Error retrieving)"


def _as_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class AliasError:
    """Marker left on a channel whose counterparty alias could not be resolved."""
    message: str
    public_key: Optional[str] = None
    type: str = ALIAS_RETRIEVAL_FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "public_key": self.public_key}


@dataclass(frozen=True)
class Channel:
    capacity: int
    local_balance: int
    remote_balance: int
    active: bool
    remote_pubkey: Optional[str] = None
    remote_alias: Optional[str] = None
    error: Optional[AliasError] = None
    id: Optional[str] = None
    channel_point: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Channel":
        """
        Build a channel from a data source record.

        Balances are not checked against capacity; pending HTLCs can make
        local + remote exceed it.
        """
        pubkey = raw.get("remote_pubkey")
        return cls(
            capacity=_as_int(raw.get("capacity")),
            local_balance=_as_int(raw.get("local_balance")),
            remote_balance=_as_int(raw.get("remote_balance")),
            active=bool(raw.get("active", False)),
            remote_pubkey=pubkey if isinstance(pubkey, str) and pubkey else None,
            remote_alias=raw.get("remote_alias"),
            id=raw.get("id"),
            channel_point=raw.get("channel_point"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "channel_point": self.channel_point,
            "capacity": self.capacity,
            "local_balance": self.local_balance,
            "remote_balance": self.remote_balance,
            "active": self.active,
            "remote_pubkey": self.remote_pubkey,
            "remote_alias": self.remote_alias,
        }
        if self.error is not None:
            data["_error"] = self.error.to_dict()
        return data


@dataclass(frozen=True)
class HealthCriteria:
    """Inclusive band of local_balance / capacity considered healthy."""
    min_local_ratio: float = 0.1
    max_local_ratio: float = 0.9

    def __post_init__(self):
        for name in ("min_local_ratio", "max_local_ratio"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be between 0 and 1, got {value}")
        if self.min_local_ratio > self.max_local_ratio:
            raise ConfigurationError(
                f"min_local_ratio ({self.min_local_ratio}) must not exceed "
                f"max_local_ratio ({self.max_local_ratio})"
            )

    def to_dict(self) -> Dict[str, float]:
        return {"minLocalRatio": self.min_local_ratio, "maxLocalRatio": self.max_local_ratio}


@dataclass(frozen=True)
class ChannelAssessment:
    local_ratio: Optional[float]
    healthy: bool
    liquidity_state: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "local_ratio": self.local_ratio,
            "healthy": self.healthy,
            "liquidity_state": self.liquidity_state,
        }


@dataclass(frozen=True)
class ChannelSummary:
    total_capacity: int = 0
    total_local_balance: int = 0
    total_remote_balance: int = 0
    active_channels: int = 0
    inactive_channels: int = 0
    average_capacity: float = 0
    healthy_channels: int = 0
    unhealthy_channels: int = 0

    @property
    def total_channels(self) -> int:
        return self.active_channels + self.inactive_channels

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCapacity": self.total_capacity,
            "totalLocalBalance": self.total_local_balance,
            "totalRemoteBalance": self.total_remote_balance,
            "activeChannels": self.active_channels,
            "inactiveChannels": self.inactive_channels,
            "averageCapacity": self.average_capacity,
            "healthyChannels": self.healthy_channels,
            "unhealthyChannels": self.unhealthy_channels,
        }


@dataclass(frozen=True)
class ChannelData:
    """Enriched channels, their assessments (same order) and the summary."""
    channels: List[Channel] = field(default_factory=list)
    assessments: List[ChannelAssessment] = field(default_factory=list)
    summary: ChannelSummary = field(default_factory=ChannelSummary)

    def __post_init__(self):
        if len(self.channels) != len(self.assessments):
            raise ValueError(
                f"Expected one assessment per channel, got {len(self.assessments)} "
                f"for {len(self.channels)} channels"
            )

    def to_dict(self) -> Dict[str, Any]:
        channels = []
        for channel, assessment in zip(self.channels, self.assessments, strict=True):
            entry = channel.to_dict()
            entry.update(assessment.to_dict())
            channels.append(entry)
        return {"channels": channels, "summary": self.summary.to_dict()}
