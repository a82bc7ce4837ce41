"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``CHAINMETA_``, nested via ``__``)
2. YAML config file (``CHAINMETA_CONFIG_PATH`` env var)
3. Defaults defined here

The node endpoint also honours the bare ``ENDPOINT`` variable used by the
original Go exporter deployments.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from iotex_chainmeta_exporter import __version__

DEFAULT_ENDPOINT = "api.mainnet.iotex.one:80"
DEFAULT_LISTEN_PORT = 9961
DEFAULT_TIMEOUT_SECONDS = 10.0


class LogLevel(enum.StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerConfig(BaseSettings):
    """HTTP listener settings for the ``/metrics`` endpoint."""

    model_config = SettingsConfigDict(
        env_prefix="CHAINMETA_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = DEFAULT_LISTEN_PORT


class RPCConfig(BaseSettings):
    """IoTeX node gRPC settings."""

    model_config = SettingsConfigDict(
        env_prefix="CHAINMETA_RPC__",
        case_sensitive=False,
        populate_by_name=True,
    )

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        validation_alias=AliasChoices("endpoint", "CHAINMETA_RPC__ENDPOINT", "ENDPOINT"),
        description="Node gRPC address as host:port",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Deadline in seconds for connection setup plus the RPC round trip",
    )
    secure: bool = Field(
        default=False,
        description="Use a TLS channel instead of plaintext",
    )


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level exporter configuration.

    Loads settings from environment variables (``CHAINMETA_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAINMETA_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    log_level: LogLevel = LogLevel.INFO
    version: str = __version__
    revision: str = "N/A"
    build_time: str = "N/A"
    config_path: str = ""

    server: ServerConfig = Field(default_factory=ServerConfig)
    rpc: RPCConfig = Field(default_factory=RPCConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
