"""
Configuration validation utilities.

Reads environment variables and checks them before they reach the LND client.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.

    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)

    if not value or not value.strip():
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n"
            f"  3. See .env.example for template\n\n"
            f"Description: {desc}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}\n"
            f"See .env.example for the correct format."
        )

    return value.strip()


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key)
    if value is None or not value.strip():
        return default

    if _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value.strip()


def get_bool_env(key: str, default: bool = False) -> bool:
    """
    Get a boolean environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).

    :raises: ConfigurationError if the value is not a recognised boolean
    """
    value = get_optional_env(key)
    if value is None:
        return default

    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False

    raise ConfigurationError(f"{key} must be a boolean (true/false), got '{value}'.")


def get_number_env(key: str, default, cast=float):
    """
    Get a numeric environment variable.

    :param cast: int or float
    :raises: ConfigurationError if the value cannot be parsed
    """
    value = get_optional_env(key)
    if value is None:
        return default

    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(
            f"{key} must be a {cast.__name__}, got '{value}'."
        ) from None


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "your-",
        "placeholder",
        "changeme",
        "xxx",
        "replace",
        "TODO",
    ]

    value_lower = value.lower()
    return any(pattern.lower() in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file path.

    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.isfile(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the file exists."
        )

    return path
