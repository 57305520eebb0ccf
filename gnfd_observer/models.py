"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ChainRpcError


class ObjectStatus(str, Enum):
    CREATED = "OBJECT_STATUS_CREATED"
    SEALED = "OBJECT_STATUS_SEALED"
    DISCONTINUED = "OBJECT_STATUS_DISCONTINUED"


class LifecycleState(str, Enum):
    """Object lifecycle as observed by a single head-object query."""

    PENDING = "pending"
    SEALED = "sealed"
    REJECTED = "rejected"
    TRANSIENT_ERROR = "transient_error"


@dataclass(frozen=True)
class ObjectInfo:
    """On-chain object record returned by head-object queries."""

    object_id: int
    bucket_name: str
    object_name: str
    owner: str
    payload_size: int
    object_status: ObjectStatus
    is_updating: bool = False

    @property
    def is_stably_sealed(self) -> bool:
        """Sealed and not in the middle of an update."""
        return self.object_status is ObjectStatus.SEALED and not self.is_updating


@dataclass(frozen=True)
class TxResult:
    """Execution result of an included transaction."""

    tx_hash: str
    height: int
    code: int = 0
    codespace: str = ""
    raw_log: str = ""
    gas_wanted: int = 0
    gas_used: int = 0

    @property
    def succeeded(self) -> bool:
        return self.code == 0


def classify_object_state(
    info: ObjectInfo | None, error: ChainRpcError | None = None
) -> LifecycleState:
    """Classify one head-object observation."""
    if error is not None:
        # A plain 404 may just be an unserved route; only the storage
        # module's own verdict counts as rejection.
        if error.is_no_such_object:
            return LifecycleState.REJECTED
        return LifecycleState.TRANSIENT_ERROR
    if info is None:
        return LifecycleState.REJECTED
    if info.is_stably_sealed:
        return LifecycleState.SEALED
    return LifecycleState.PENDING
