"""
Intent types for channel query classification.
"""
from dataclasses import dataclass
from enum import Enum


class IntentType(str, Enum):
    """Closed set of things a channel query can ask for."""
    CHANNEL_LIST = "channel_list"
    CHANNEL_HEALTH = "channel_health"
    CHANNEL_LIQUIDITY = "channel_liquidity"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Intent:
    type: IntentType
    query: str

    def __post_init__(self):
        # Accept the wire value ("channel_list") as well as the enum member
        object.__setattr__(self, "type", IntentType(self.type))
