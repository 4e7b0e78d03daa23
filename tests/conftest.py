"""Pytest configuration and fixtures for webthings_client tests."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable

import httpx
import pytest

from webthings_client.core.config import AppSettings
from webthings_client.core.domain.models import GatewayConfig
from webthings_client.core.logging_config import LOGGER_NAME

TOKEN = "s3cr3t-gateway-token"

SAMPLE_THINGS: list[dict[str, Any]] = [
    {
        "@context": "https://webthings.io/schemas",
        "@type": ["Light", "OnOffSwitch"],
        "id": "https://gateway.example.com/things/lamp",
        "title": "Lamp",
        "href": "/things/lamp",
        "properties": {"on": {"type": "boolean"}},
    },
    {
        "@type": ["SmartPlug"],
        "id": "https://gateway.example.com/things/plug",
        "title": "Plug",
        "href": "/things/plug",
        "properties": {"on": {"type": "boolean"}, "power": {"type": "number"}},
    },
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep real WEBTHINGS_* variables and project .env files out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("WEBTHINGS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop console handlers bound to streams a previous test closed."""

    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if getattr(h, "_webthings_handler", False)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(domain="gateway.example.com", token=TOKEN)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, http_timeout_seconds=2.0, probe_timeout_ms=50)


@pytest.fixture
def sample_things() -> list[dict[str, Any]]:
    return json.loads(json.dumps(SAMPLE_THINGS))


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport that records requests and answers with a fixed response."""

    def _make(
        *,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        error: Exception | None = None,
        seen: list[httpx.Request] | None = None,
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            if error is not None:
                raise error
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body)

        return httpx.MockTransport(handler)

    return _make


class FakeProbe:
    """Reachability probe answering from a fixed set of reachable URIs."""

    def __init__(self, reachable: set[str] | None = None) -> None:
        self.reachable = reachable or set()
        self.calls: list[tuple[str, int]] = []

    def __call__(self, uri: str, timeout_ms: int) -> bool:
        self.calls.append((uri, timeout_ms))
        return uri in self.reachable


@pytest.fixture
def fake_probe() -> Callable[..., FakeProbe]:
    return FakeProbe
