class LndAgentError(Exception):
    """Base exception for the LND channel agent."""


class ConfigurationError(LndAgentError):
    """Raised when configuration is missing or invalid."""


class LndConnectionError(LndAgentError):
    """Raised when an authenticated session to the node cannot be used."""


class AgentNotInitializedError(LndAgentError):
    """Raised when the agent is used before initialization."""
