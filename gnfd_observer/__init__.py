"""Polling-based observer for Greenfield chain state transitions."""
from .config import AppConfig, load_config
from .errors import (
    ChainError,
    ChainRpcError,
    ConfirmTransactionError,
    ErrorKind,
    RejectUnSealTimeoutError,
    SealTimeoutError,
    WaitForBlockTimeoutError,
)
from .services import ChainObserver

__all__ = [
    "AppConfig",
    "ChainError",
    "ChainObserver",
    "ChainRpcError",
    "ConfirmTransactionError",
    "ErrorKind",
    "RejectUnSealTimeoutError",
    "SealTimeoutError",
    "WaitForBlockTimeoutError",
    "load_config",
]

__version__ = "0.1.0"
