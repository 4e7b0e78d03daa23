"""Client library for a WebThings IoT gateway.

Resolves the gateway endpoint (with a local-network fallback), validates
server addresses and lists the gateway's things.
"""

from webthings_client.core.domain.models import (
    ErrorKind,
    FetchOutcome,
    GatewayConfig,
    GatewayError,
    Thing,
)
from webthings_client.core.services.gateway_service import WebthingsGateway

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "FetchOutcome",
    "GatewayConfig",
    "GatewayError",
    "Thing",
    "WebthingsGateway",
]
