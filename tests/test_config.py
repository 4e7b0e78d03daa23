from __future__ import annotations

import pytest
from pydantic import ValidationError

from webthings_client.core.config import AppSettings, read_env_file, write_user_env_vars
from webthings_client.core.domain.models import GatewayConfig


def test_gateway_config_defaults():
    config = GatewayConfig(domain="gateway.example.com", token="t")
    assert config.use_tls is True
    assert config.fallback_domain == "gateway.local"
    assert config.port == 443


def test_gateway_config_is_immutable():
    config = GatewayConfig(domain="gateway.example.com", token="t")
    with pytest.raises(ValidationError):
        config.port = 8443


@pytest.mark.parametrize("port", [0, 70000])
def test_gateway_config_rejects_bad_port(port):
    with pytest.raises(ValidationError):
        GatewayConfig(domain="gateway.example.com", token="t", port=port)


def test_token_is_redacted(token):
    config = GatewayConfig(domain="gateway.example.com", token=token)
    assert token not in repr(config)
    assert token not in str(config.model_dump())
    assert config.token.get_secret_value() == token


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("WEBTHINGS_GATEWAY_DOMAIN", "home.example.org")
    monkeypatch.setenv("WEBTHINGS_GATEWAY_TOKEN", "abc")
    monkeypatch.setenv("WEBTHINGS_GATEWAY_FALLBACK_DOMAIN", "192.168.1.2")
    monkeypatch.setenv("WEBTHINGS_PROBE_TIMEOUT_MS", "250")

    settings = AppSettings(_env_file=None)
    config = settings.gateway_config()

    assert settings.probe_timeout_ms == 250
    assert config.domain == "home.example.org"
    assert config.fallback_domain == "192.168.1.2"
    assert config.token.get_secret_value() == "abc"


def test_settings_read_env_file(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("WEBTHINGS_GATEWAY_DOMAIN=from-file.example.org\nWEBTHINGS_GATEWAY_TOKEN=xyz\n")

    config = AppSettings(_env_file=env_file).gateway_config()

    assert config.domain == "from-file.example.org"


@pytest.mark.parametrize(
    "env",
    [
        {},
        {"WEBTHINGS_GATEWAY_DOMAIN": "home.example.org"},
        {"WEBTHINGS_GATEWAY_TOKEN": "abc"},
        {"WEBTHINGS_GATEWAY_DOMAIN": "home.example.org", "WEBTHINGS_GATEWAY_TOKEN": ""},
    ],
)
def test_missing_gateway_values_raise(monkeypatch, env):
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        AppSettings(_env_file=None).gateway_config()


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"WEBTHINGS_GATEWAY_DOMAIN": "a.example.org", "WEBTHINGS_GATEWAY_PORT": "443"}, env_path)
    write_user_env_vars({"WEBTHINGS_GATEWAY_PORT": "8443", "WEBTHINGS_GATEWAY_TOKEN": None}, env_path)

    data = read_env_file(env_path)

    assert data == {"WEBTHINGS_GATEWAY_DOMAIN": "a.example.org", "WEBTHINGS_GATEWAY_PORT": "8443"}


def test_write_user_env_vars_defaults_to_user_config_dir(tmp_path):
    path = write_user_env_vars({"WEBTHINGS_GATEWAY_DOMAIN": "a.example.org"})
    assert path.is_relative_to(tmp_path)


def test_read_env_file_skips_comments_and_strips_quotes(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text(
        "# webthings-client settings\n"
        "WEBTHINGS_GATEWAY_DOMAIN='home.example.org'\n"
        "not a pair\n"
        "=orphan\n"
        'WEBTHINGS_GATEWAY_TOKEN="a=b"\n',
        encoding="utf-8",
    )

    assert read_env_file(env_path) == {
        "WEBTHINGS_GATEWAY_DOMAIN": "home.example.org",
        "WEBTHINGS_GATEWAY_TOKEN": "a=b",
    }


def test_read_env_file_missing_is_empty(tmp_path):
    assert read_env_file(tmp_path / "absent.env") == {}
