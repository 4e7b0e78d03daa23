"""Gateway orchestration.

Ties the pieces together in the order they must run:
configuration -> endpoint resolution -> client construction -> fetch.
Entry points (CLI, host applications, tests) only talk to `WebthingsGateway`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from webthings_client.adapters.endpoint_resolver import (
    fallback_uri,
    is_reachable,
    primary_uri,
    resolve_endpoint_async,
)
from webthings_client.adapters.gateway_client import GatewayClient
from webthings_client.core.config import AppSettings
from webthings_client.core.domain.models import (
    ErrorKind,
    FetchOutcome,
    GatewayConfig,
    GatewayError,
)
from webthings_client.core.interfaces.gateway import ReachabilityProbe
from webthings_client.core.url_validation import validate_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeReport:
    """Reachability of both candidates, as shown by `resolve` / `doctor`."""

    primary: str
    primary_reachable: bool
    fallback: str
    fallback_reachable: bool

    @property
    def selected(self) -> str | None:
        if self.primary_reachable:
            return self.primary
        if self.fallback_reachable:
            return self.fallback
        return None


class WebthingsGateway:
    """A configured WebThings gateway."""

    def __init__(
        self,
        config: GatewayConfig,
        *,
        settings: AppSettings | None = None,
        probe: ReachabilityProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._settings = settings or AppSettings()
        self._probe = probe or is_reachable
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None, **kwargs) -> "WebthingsGateway":
        settings = settings or AppSettings()
        return cls(settings.gateway_config(), settings=settings, **kwargs)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def gateway_uri(self) -> str:
        return primary_uri(self._config)

    @property
    def fallback_uri(self) -> str:
        return fallback_uri(self._config)

    @property
    def probe_timeout_ms(self) -> int:
        return self._settings.probe_timeout_ms

    async def resolve(self) -> str | None:
        """Pick the endpoint to use (recomputed on every call)."""

        return await resolve_endpoint_async(
            self._config, timeout_ms=self.probe_timeout_ms, probe=self._probe
        )

    def probe_report(self) -> ProbeReport:
        """Probe both candidates unconditionally (diagnostics only)."""

        timeout = self.probe_timeout_ms
        return ProbeReport(
            primary=self.gateway_uri,
            primary_reachable=self._probe(self.gateway_uri, timeout),
            fallback=self.fallback_uri,
            fallback_reachable=self._probe(self.fallback_uri, timeout),
        )

    def client_for(self, base_url: str) -> GatewayClient:
        return GatewayClient(
            base_url,
            self._config.token,
            settings=self._settings,
            transport=self._transport,
        )

    async def fetch_things(self) -> FetchOutcome:
        """Resolve an endpoint, then list its things."""

        base_url = await self.resolve()
        if base_url is None:
            return FetchOutcome.failure(
                ErrorKind.UNREACHABLE,
                detail=f"neither {self.gateway_uri} nor {self.fallback_uri} answered",
            )

        outcome = await self.client_for(base_url).fetch_things()
        if not outcome.ok and outcome.error is not None:
            logger.warning("Listing things failed: %s", outcome.error.describe())
        return outcome

    @staticmethod
    def validate_address(url: str) -> GatewayError | None:
        return validate_url(url)
