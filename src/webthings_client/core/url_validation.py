"""Server address validation.

An address is valid when it matches a general web-URL pattern *and* parses
as a structured `httpx.URL` with an http(s) scheme and a host.
"""

from __future__ import annotations

import re

import httpx

from webthings_client.core.domain.models import ErrorKind, GatewayError

_WEB_URL_RE = re.compile(
    r"^(?P<scheme>https?)://"
    r"(?:[^\s:@/]+(?::[^\s@/]*)?@)?"
    r"(?P<host>"
    r"localhost"
    r"|(?:\d{1,3}\.){3}\d{1,3}"
    r"|(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}"
    r")"
    r"(?::(?P<port>\d{1,5}))?"
    r"(?P<rest>[/?#]\S*)?$",
    re.IGNORECASE,
)
_IPV4_RE = re.compile(r"^(?:\d{1,3}\.){3}\d{1,3}$")


def _matches_web_url(url: str) -> bool:
    match = _WEB_URL_RE.match(url)
    if match is None:
        return False

    host = match.group("host")
    if _IPV4_RE.match(host) and any(int(octet) > 255 for octet in host.split(".")):
        return False

    port = match.group("port")
    if port is not None and not 0 < int(port) <= 65535:
        return False
    return True


def _parses_as_http_url(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def validate_url(url: str) -> GatewayError | None:
    """Return `None` for a valid server address, an `invalid_address` error otherwise."""

    candidate = (url or "").strip()
    if not candidate or not _matches_web_url(candidate):
        return GatewayError(kind=ErrorKind.INVALID_ADDRESS, detail=f"not a web URL: {url!r}")
    if not _parses_as_http_url(candidate):
        return GatewayError(kind=ErrorKind.INVALID_ADDRESS, detail=f"unparseable URL: {url!r}")
    return None


def is_valid_url(url: str) -> bool:
    return validate_url(url) is None
