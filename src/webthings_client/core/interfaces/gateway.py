"""Contracts implemented by the gateway adapters.

Structural (Protocol) contracts so the facade can be driven by the real
socket probe / HTTP client or by test doubles without inheritance.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from webthings_client.core.domain.models import FetchOutcome


@runtime_checkable
class ReachabilityProbe(Protocol):
    """Single, blocking, timed reachability check of the host behind `uri`.

    Must return `False` (never raise) on DNS or network failures.
    """

    def __call__(self, uri: str, timeout_ms: int) -> bool: ...


@runtime_checkable
class ThingsSource(Protocol):
    """Anything able to list the things of a gateway."""

    async def fetch_things(self) -> FetchOutcome:
        """Issue the request and return the typed outcome."""

        ...
