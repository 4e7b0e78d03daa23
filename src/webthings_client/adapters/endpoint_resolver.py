"""Gateway endpoint resolution.

Builds the primary and fallback base URIs of a gateway and picks the first
one whose host answers a reachability probe:

1. probe primary -> reachable: primary
2. probe fallback -> reachable: fallback
3. otherwise `None` (no reachable endpoint)

Nothing is cached: every call probes again.

The probe resolves the host (DNS) then opens a TCP connection to the URI
port. ICMP echo needs raw sockets (root), so the TCP handshake stands in for
the "ping". Any `OSError` (DNS failure, refused, timeout) means unreachable.
"""

from __future__ import annotations

import asyncio
import logging
import socket

import httpx

from webthings_client.core.domain.models import GatewayConfig
from webthings_client.core.interfaces.gateway import ReachabilityProbe

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_MS = 1000

_DEFAULT_PORTS = {"https": 443, "http": 80}


def build_base_uri(host: str, *, use_tls: bool, port: int) -> str:
    """`scheme://host[:port]`, the port omitted when it is the scheme default."""

    scheme = "https" if use_tls else "http"
    if port == _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def primary_uri(config: GatewayConfig) -> str:
    return build_base_uri(config.domain, use_tls=config.use_tls, port=config.port)


def fallback_uri(config: GatewayConfig) -> str:
    return build_base_uri(config.fallback_domain, use_tls=config.use_tls, port=config.port)


def is_reachable(uri: str, timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS) -> bool:
    """Single blocking reachability attempt against the host behind `uri`."""

    logger.debug("Looking if gateway is reachable on: %s", uri)
    try:
        parsed = httpx.URL(uri)
    except httpx.InvalidURL:
        logger.debug("Unparseable URI, treating as unreachable: %s", uri)
        return False

    host = parsed.host
    if not host:
        return False
    port = parsed.port or _DEFAULT_PORTS.get(parsed.scheme, 443)
    timeout = timeout_ms / 1000

    try:
        socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as exc:
        logger.debug("Cannot resolve %s: %s", host, exc)
        return False

    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except OSError as exc:
        logger.debug("Host %s:%s not reachable: %s", host, port, exc)
        return False

    logger.debug("Host %s:%s is reachable", host, port)
    return True


def resolve_endpoint(
    config: GatewayConfig,
    *,
    timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
    probe: ReachabilityProbe | None = None,
) -> str | None:
    """Return the primary URI, else the fallback URI, else `None`.

    Blocks for up to `timeout_ms` per candidate.
    """

    probe = probe or is_reachable

    primary = primary_uri(config)
    if probe(primary, timeout_ms):
        logger.info("Using primary gateway endpoint %s", primary)
        return primary

    fallback = fallback_uri(config)
    if probe(fallback, timeout_ms):
        logger.info("Primary %s unreachable, using fallback endpoint %s", primary, fallback)
        return fallback

    logger.warning("No reachable gateway endpoint (tried %s and %s)", primary, fallback)
    return None


async def resolve_endpoint_async(
    config: GatewayConfig,
    *,
    timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
    probe: ReachabilityProbe | None = None,
) -> str | None:
    """`resolve_endpoint` on a worker thread so the event loop keeps running."""

    return await asyncio.to_thread(resolve_endpoint, config, timeout_ms=timeout_ms, probe=probe)
