"""Domain models and entities.

Pure, strict data structures (Pydantic v2). The domain knows nothing about
HTTP, sockets or the CLI: only gateway concepts.
"""

from webthings_client.core.domain.models import (
    ErrorKind,
    FetchOutcome,
    GatewayConfig,
    GatewayError,
    Thing,
)

__all__ = [
    "ErrorKind",
    "FetchOutcome",
    "GatewayConfig",
    "GatewayError",
    "Thing",
]
