"""
Security module for input validation and error sanitization.
"""

from .exceptions import SecurityError, ValidationError
from .input_validator import InputValidator
from .error_sanitizer import sanitize_error

__all__ = [
    "SecurityError",
    "ValidationError",
    "InputValidator",
    "sanitize_error",
]
