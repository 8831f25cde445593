"""
LND data source: service interface, simulated and live implementations,
and the client that owns the authenticated session.
"""
from .service import LndAuthentication, LndHandle, LndService
from .mock_service import MockLndService
from .real_service import RealLndService
from .factory import create_lnd_service
from .client import LndClient

__all__ = [
    "LndAuthentication",
    "LndHandle",
    "LndService",
    "MockLndService",
    "RealLndService",
    "create_lnd_service",
    "LndClient",
]
