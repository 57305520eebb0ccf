"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class ObserverConfig:
    confirm_attempts: int = 5
    wait_block_timeout: float = 5.0
    wait_block_tick: float = 1.0
    # Expected output block interval of the chain, in seconds.
    block_interval: float = 2.0
    listen_iterations: int = 10


@dataclass(frozen=True)
class MetricsConfig:
    enabled: bool = False
    port: int = 9400


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    observer: ObserverConfig = field(default_factory=ObserverConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)


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


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=tuple(e for e in raw.get("rpc_endpoints", []) if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_observer(raw: dict[str, Any]) -> ObserverConfig:
    defaults = ObserverConfig()
    return ObserverConfig(
        confirm_attempts=int(raw.get("confirm_attempts", defaults.confirm_attempts)),
        wait_block_timeout=float(
            raw.get("wait_block_timeout", defaults.wait_block_timeout)
        ),
        wait_block_tick=float(raw.get("wait_block_tick", defaults.wait_block_tick)),
        block_interval=float(raw.get("block_interval", defaults.block_interval)),
        listen_iterations=int(
            raw.get("listen_iterations", defaults.listen_iterations)
        ),
    )


def _build_metrics(raw: dict[str, Any]) -> MetricsConfig:
    return MetricsConfig(
        enabled=bool(raw.get("enabled", False)),
        port=int(raw.get("port", 9400)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain", {})),
        observer=_build_observer(raw.get("observer", {})),
        metrics=_build_metrics(raw.get("metrics", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")

    observer = cfg.observer
    if observer.confirm_attempts < 1:
        raise ValueError("confirm_attempts must be at least 1")
    if observer.listen_iterations < 1:
        raise ValueError("listen_iterations must be at least 1")
    for name in ("wait_block_timeout", "wait_block_tick", "block_interval"):
        if getattr(observer, name) <= 0:
            raise ValueError(f"{name} must be positive")
