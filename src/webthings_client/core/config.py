"""Settings for the gateway client.

`AppSettings` is the single source of configuration: environment variables
(`WEBTHINGS_*`), the project `.env` and the per-user `.env` maintained by
`webthings doctor setup-gateway`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from webthings_client.core.domain.models import GatewayConfig

APP_DIR_NAME = "webthings-client"


def get_user_config_dir() -> Path:
    """Where the per-user `.env` lives on this platform."""

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(env_path: Path) -> dict[str, str]:
    """`KEY=VALUE` pairs of a dotenv file (empty when the file does not exist)."""

    if not env_path.exists():
        return {}

    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Merge `values` into the user `.env`; `None` leaves an existing key as is."""

    env_path = env_path or get_user_env_file()
    merged = read_env_file(env_path)
    merged.update({key: value for key, value in values.items() if value is not None})

    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    env_path.write_text(f"# {APP_DIR_NAME} settings\n{body}", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Values come from `WEBTHINGS_*` environment variables, then the project
    `.env`, then the per-user `.env` written by `webthings doctor setup-gateway`.
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBTHINGS_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    gateway_domain: str | None = Field(
        default=None,
        description="Primary gateway host (e.g. 'myhome.webthings.io').",
    )
    gateway_token: SecretStr | None = Field(
        default=None,
        description="Access token generated from the gateway UI.",
    )
    gateway_use_tls: bool = Field(
        default=True,
        description="Use HTTPS to talk to the gateway.",
    )
    gateway_fallback_domain: str = Field(
        default="gateway.local",
        min_length=1,
        description="Local-network host tried when the primary is unreachable.",
    )
    gateway_port: int = Field(
        default=443,
        ge=1,
        le=65535,
        description="Gateway port (applies to primary and fallback).",
    )

    probe_timeout_ms: int = Field(
        default=1000,
        gt=0,
        le=60_000,
        description="Timeout of each reachability probe (milliseconds).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    user_agent: str = Field(
        default="webthings-client/0.1",
        min_length=1,
        description="User-Agent sent to the gateway.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the `webthings_client` loggers.",
    )

    def gateway_config(self) -> GatewayConfig:
        """Build the immutable `GatewayConfig` from these settings.

        Raises `ValueError` when domain or token are missing.
        """

        if not self.gateway_domain:
            raise ValueError("gateway domain is not configured (WEBTHINGS_GATEWAY_DOMAIN)")
        if self.gateway_token is None or not self.gateway_token.get_secret_value():
            raise ValueError("gateway token is not configured (WEBTHINGS_GATEWAY_TOKEN)")
        return GatewayConfig(
            domain=self.gateway_domain,
            token=self.gateway_token,
            use_tls=self.gateway_use_tls,
            fallback_domain=self.gateway_fallback_domain,
            port=self.gateway_port,
        )
