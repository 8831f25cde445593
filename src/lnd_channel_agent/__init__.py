"""
Natural-language queries over a Lightning Network (LND) node's channels.
"""
from .app import LndChannelAgentApp
from .config import LndAgentConfig
from .config_loader import load_config_from_env
from .interaction import Intent, IntentParser, IntentType
from .models import Channel, ChannelSummary, HealthCriteria
from .schemas import QueryResult

__all__ = [
    "LndChannelAgentApp",
    "LndAgentConfig",
    "load_config_from_env",
    "Intent",
    "IntentParser",
    "IntentType",
    "Channel",
    "ChannelSummary",
    "HealthCriteria",
    "QueryResult",
]

__version__ = "0.1.0"
