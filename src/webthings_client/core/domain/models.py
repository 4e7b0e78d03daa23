"""Domain models (Pydantic v2).

Pure data structures for the gateway client: configuration of a gateway,
the opaque `Thing` records it returns and the tagged result of a fetch.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.config import ConfigDict


class GatewayConfig(BaseModel):
    """Connection parameters for a WebThings gateway.

    Immutable once constructed. The token is stored as a `SecretStr` so it is
    masked in `repr()`, logs and `model_dump()` output.
    """

    model_config = ConfigDict(frozen=True)

    domain: str = Field(
        ...,
        min_length=1,
        max_length=253,
        description="Host name or IP of the gateway (no scheme, no port).",
    )
    token: SecretStr = Field(
        ...,
        description="Access token generated from the gateway UI.",
    )
    use_tls: bool = Field(
        default=True,
        description="Talk to the gateway over HTTPS.",
    )
    fallback_domain: str = Field(
        default="gateway.local",
        min_length=1,
        max_length=253,
        description="Secondary host tried when the primary is unreachable (e.g. mDNS name).",
    )
    port: int = Field(
        default=443,
        ge=1,
        le=65535,
        description="Port used for both the primary and the fallback host.",
    )


class Thing(BaseModel):
    """A device descriptor returned by the gateway.

    The schema is owned by the gateway: only a handful of well-known keys are
    exposed as attributes and every other key is kept as-is. Nothing is
    enforced locally: nulls and odd types on the well-known keys are coerced
    to the attribute defaults instead of failing the whole listing.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, description="Thing URL/identifier.")
    title: str | None = Field(default=None, description="Human readable name.")
    types: list[str] = Field(
        default_factory=list,
        alias="@type",
        description="Semantic capabilities (e.g. 'Light', 'OnOffSwitch').",
    )
    description: str | None = None
    href: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    actions: dict[str, Any] = Field(default_factory=dict)
    events: dict[str, Any] = Field(default_factory=dict)
    links: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("id", "title", "description", "href", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)

    @field_validator("types", mode="before")
    @classmethod
    def _coerce_types(cls, value: Any) -> Any:
        # Some gateways send a bare string instead of a list.
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value if item is not None]
        return [str(value)]

    @field_validator("properties", "actions", "events", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("links", mode="before")
    @classmethod
    def _coerce_links(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @property
    def display_name(self) -> str:
        return self.title or self.id or self.href or "<unnamed>"


class ErrorKind(str, Enum):
    """Kinds of failures a caller can branch on."""

    INVALID_ADDRESS = "invalid_address"
    UNREACHABLE = "unreachable"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    DECODE_ERROR = "decode_error"


class GatewayError(BaseModel):
    """Structured failure value (never raised, always returned)."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    status_code: int | None = Field(
        default=None,
        ge=100,
        le=999,
        description="HTTP status for `http_error`.",
    )
    detail: str | None = Field(default=None, description="Short human readable reason.")

    def describe(self) -> str:
        if self.kind is ErrorKind.HTTP_ERROR and self.status_code is not None:
            return f"{self.kind.value} ({self.status_code})"
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value


class FetchOutcome(BaseModel):
    """Result of listing things: either `things` or an `error`."""

    things: list[Thing] = Field(default_factory=list)
    error: GatewayError | None = None
    base_url: str | None = Field(
        default=None,
        description="Endpoint the request was sent to (None when nothing was reachable).",
    )

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        *,
        status_code: int | None = None,
        detail: str | None = None,
        base_url: str | None = None,
    ) -> "FetchOutcome":
        return cls(
            error=GatewayError(kind=kind, status_code=status_code, detail=detail),
            base_url=base_url,
        )
