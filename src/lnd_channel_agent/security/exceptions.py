"""
Security-related exceptions.
"""
from ..exceptions import LndAgentError


class SecurityError(LndAgentError):
    """Base exception for security violations."""

    pass


class ValidationError(SecurityError):
    """Raised when input validation fails."""

    pass
