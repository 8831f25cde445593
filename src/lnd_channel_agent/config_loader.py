"""
Configuration loader with validation.

Builds LndAgentConfig from the environment (and a local .env file).
"""
from dotenv import load_dotenv

from .config import LndAgentConfig
from .config_validator import (
    get_bool_env,
    get_number_env,
    get_optional_env,
    get_required_env,
    validate_path,
)
from .exceptions import ConfigurationError


def load_config_from_env(load_env_file: bool = True) -> LndAgentConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = LndChannelAgentApp(config)
        app.initialize()

    Credential paths are required and must exist unless USE_MOCK_LND is set.

    :param load_env_file: Read a .env file before consulting the environment
    :return: Validated LndAgentConfig instance
    :raises: ConfigurationError if required configs are missing or invalid
    """
    if load_env_file:
        load_dotenv()

    use_mock_lnd = get_bool_env("USE_MOCK_LND", default=False)

    if use_mock_lnd:
        tls_cert_path = get_optional_env("LND_TLS_CERT_PATH")
        macaroon_path = get_optional_env("LND_MACAROON_PATH")
    else:
        tls_cert_path = get_required_env("LND_TLS_CERT_PATH", "Path to the LND node's tls.cert")
        macaroon_path = get_required_env("LND_MACAROON_PATH", "Path to an LND macaroon (readonly is enough)")

    config = LndAgentConfig(
        lnd_host=get_optional_env("LND_HOST", default="localhost"),
        lnd_port=get_number_env("LND_PORT", 8080, cast=int),
        tls_cert_path=tls_cert_path,
        macaroon_path=macaroon_path,
        use_mock_lnd=use_mock_lnd,
        request_timeout_s=get_number_env("LND_REQUEST_TIMEOUT_S", 10.0),
        min_local_ratio=get_number_env("HEALTH_MIN_LOCAL_RATIO", 0.1),
        max_local_ratio=get_number_env("HEALTH_MAX_LOCAL_RATIO", 0.9),
        server_host=get_optional_env("HOST", default="127.0.0.1"),
        server_port=get_number_env("PORT", 3000, cast=int),
        log_level=get_optional_env("LOG_LEVEL", default="INFO").upper(),
    )

    if not use_mock_lnd:
        validate_path(config.tls_cert_path, "LND_TLS_CERT_PATH", must_exist=True)
        validate_path(config.macaroon_path, "LND_MACAROON_PATH", must_exist=True)

    if config.request_timeout_s <= 0:
        raise ConfigurationError("LND_REQUEST_TIMEOUT_S must be positive.")

    # Fail fast on a bad health band
    config.health_criteria()

    return config
