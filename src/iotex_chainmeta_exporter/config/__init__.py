"""Configuration — pydantic-settings models for the exporter."""

from __future__ import annotations

from iotex_chainmeta_exporter.config.settings import AppConfig, RPCConfig, ServerConfig

__all__ = ["AppConfig", "RPCConfig", "ServerConfig"]
