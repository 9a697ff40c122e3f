"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from dotenv import load_dotenv

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderConfig:
    kind: str = ""
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30
    rpc_username: str = ""
    rpc_password: str = ""


@dataclass(frozen=True)
class ClientConfig:
    version: str | None = None
    providers: tuple[ProviderConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_providers(raw: list[dict[str, Any]]) -> tuple[ProviderConfig, ...]:
    providers: list[ProviderConfig] = []
    for p in raw:
        providers.append(
            ProviderConfig(
                kind=p.get("kind", ""),
                rpc_endpoints=tuple(p.get("rpc_endpoints", [])),
                rpc_timeout=int(p.get("rpc_timeout", 30)),
                rpc_username=p.get("rpc_username", ""),
                rpc_password=p.get("rpc_password", ""),
            )
        )
    return tuple(providers)


def _build_version(raw: Any) -> str | None:
    if raw is None or raw == "":
        return None
    return str(raw)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> ClientConfig:
    """Load and validate client configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            current working directory.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = ClientConfig(
        version=_build_version(raw.get("version")),
        providers=_build_providers(raw.get("providers", [])),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _provider_factories() -> dict[str, Any]:
    from .providers import BitcoinRpcProvider

    return {BitcoinRpcProvider.kind: BitcoinRpcProvider}


def _validate(cfg: ClientConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.providers:
        raise ValueError("At least one provider must be configured")

    factories = _provider_factories()
    seen: set[str] = set()
    for provider in cfg.providers:
        if provider.kind not in factories:
            raise ValueError(f"Unknown provider kind '{provider.kind}'")
        if provider.kind in seen:
            raise ValueError(f"Provider kind '{provider.kind}' configured twice")
        if not provider.rpc_endpoints:
            raise ValueError(f"Provider '{provider.kind}' has no rpc_endpoints")
        seen.add(provider.kind)


def build_client(cfg: ClientConfig) -> Client:
    """Create a Client with the configured providers, in configuration order."""
    from .client import Client

    factories = _provider_factories()
    client = Client(version=cfg.version)
    for provider_cfg in cfg.providers:
        client.add_provider(factories[provider_cfg.kind](provider_cfg))
    return client
