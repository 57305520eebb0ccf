"""Shared test fixtures."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from gnfd_observer.config import (
    AppConfig,
    ChainConfig,
    MetricsConfig,
    ObserverConfig,
)
from gnfd_observer.models import TxResult


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def fast_observer_config() -> ObserverConfig:
    """Millisecond-scale intervals so polling tests stay quick."""
    return ObserverConfig(
        confirm_attempts=5,
        wait_block_timeout=0.2,
        wait_block_tick=0.01,
        block_interval=0.01,
        listen_iterations=5,
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, fast_observer_config: ObserverConfig
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        observer=fast_observer_config,
        metrics=MetricsConfig(enabled=False),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["https://rpc.example.com", "https://rpc-backup.example.com"]
      rpc_timeout: 10
    observer:
      confirm_attempts: 3
      wait_block_timeout: 4.0
      wait_block_tick: 0.5
      block_interval: 1.5
      listen_iterations: 7
    metrics:
      enabled: true
      port: 9555
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample on-chain data
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_tx() -> TxResult:
    return TxResult(tx_hash="AB12", height=1001, gas_wanted=2000, gas_used=1500)
