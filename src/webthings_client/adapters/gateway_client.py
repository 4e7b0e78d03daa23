"""WebThings gateway REST client.

One operation: `GET /things` with a bearer token. Every failure is turned
into a `FetchOutcome` carrying a `GatewayError`; nothing is retried.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import SecretStr, ValidationError

from webthings_client.adapters.http_client import build_async_client
from webthings_client.core.config import AppSettings
from webthings_client.core.domain.models import ErrorKind, FetchOutcome, Thing

logger = logging.getLogger(__name__)

THINGS_PATH = "/things"


class GatewayClient:
    """Stateless wrapper around the gateway "things" endpoint."""

    def __init__(
        self,
        base_url: str,
        token: SecretStr | str,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token if isinstance(token, SecretStr) else SecretStr(token)
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"GatewayClient(base_url={self._base_url!r}, token={self._token!r})"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token.get_secret_value()}"}

    async def fetch_things(self) -> FetchOutcome:
        url = f"{self._base_url}{THINGS_PATH}"
        logger.debug("GET %s", url)

        try:
            async with build_async_client(
                self._settings,
                extra_headers=self._auth_headers(),
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
        except httpx.TransportError as exc:
            logger.warning("Things request to %s failed: %s", url, exc.__class__.__name__)
            return FetchOutcome.failure(
                ErrorKind.TRANSPORT_ERROR,
                detail=f"{exc.__class__.__name__}: {exc}",
                base_url=self._base_url,
            )

        if resp.status_code != 200:
            logger.warning("Things request to %s returned HTTP %s", url, resp.status_code)
            return FetchOutcome.failure(
                ErrorKind.HTTP_ERROR,
                status_code=resp.status_code,
                detail=resp.reason_phrase or None,
                base_url=self._base_url,
            )

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Things response from %s is not JSON", url)
            return FetchOutcome.failure(
                ErrorKind.DECODE_ERROR, detail="response body is not JSON", base_url=self._base_url
            )

        if not isinstance(payload, list):
            logger.warning("Things response from %s is not a JSON array", url)
            return FetchOutcome.failure(
                ErrorKind.DECODE_ERROR,
                detail=f"expected a JSON array, got {type(payload).__name__}",
                base_url=self._base_url,
            )

        things: list[Thing] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                return FetchOutcome.failure(
                    ErrorKind.DECODE_ERROR,
                    detail=f"item {index} is not a JSON object",
                    base_url=self._base_url,
                )
            try:
                things.append(Thing.model_validate(item))
            except ValidationError as exc:
                return FetchOutcome.failure(
                    ErrorKind.DECODE_ERROR,
                    detail=f"item {index}: {exc.error_count()} validation error(s)",
                    base_url=self._base_url,
                )

        logger.info("Things request to %s succeeded (200), %d thing(s)", url, len(things))
        return FetchOutcome(things=things, base_url=self._base_url)
