from dataclasses import dataclass
from typing import Optional

from .models import HealthCriteria


@dataclass
class LndAgentConfig:
    # LND REST endpoint
    lnd_host: str = "localhost"
    lnd_port: int = 8080

    # Credentials
    tls_cert_path: Optional[str] = None
    macaroon_path: Optional[str] = None

    # Serve fixed sample data instead of a live node
    use_mock_lnd: bool = False

    request_timeout_s: float = 10.0

    # Healthy local-balance band
    min_local_ratio: float = 0.1
    max_local_ratio: float = 0.9

    # HTTP API
    server_host: str = "127.0.0.1"
    server_port: int = 3000

    log_level: str = "INFO"

    @property
    def socket(self) -> str:
        return f"{self.lnd_host}:{self.lnd_port}"

    def health_criteria(self) -> HealthCriteria:
        """Build the health band used by the query handler."""
        return HealthCriteria(
            min_local_ratio=self.min_local_ratio,
            max_local_ratio=self.max_local_ratio,
        )
