"""Error taxonomy for chain queries and observation timeouts.

The RPC layer is the only place that inspects response codes or message text;
everything above it switches on :class:`ErrorKind`.
"""
from __future__ import annotations

from enum import Enum

# gRPC status codes as surfaced by the Cosmos REST gateway.
GRPC_DEADLINE_EXCEEDED = 4
GRPC_NOT_FOUND = 5
GRPC_RESOURCE_EXHAUSTED = 8
GRPC_UNAVAILABLE = 14

_TRANSIENT_GRPC_CODES = frozenset(
    {GRPC_DEADLINE_EXCEEDED, GRPC_RESOURCE_EXHAUSTED, GRPC_UNAVAILABLE}
)

# Storage module error text for an object that no longer exists on chain.
NO_SUCH_OBJECT_MARKER = "No such object"

# Queries that report a missing entity without gRPC code 5.
_NOT_FOUND_MARKER = "not found"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    NO_SUCH_OBJECT = "no_such_object"
    TRANSIENT = "transient"
    FATAL = "fatal"


class ChainError(Exception):
    """Base class for every error raised by this package."""


class ChainRpcError(ChainError):
    """A chain query failed; ``kind`` says whether retrying can help."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status: int | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.code = code

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    @property
    def is_no_such_object(self) -> bool:
        """The object itself is gone from chain, as opposed to a missing route."""
        return self.kind is ErrorKind.NO_SUCH_OBJECT

    def __repr__(self) -> str:
        return (
            f"ChainRpcError(kind={self.kind.value}, status={self.status}, "
            f"code={self.code}, message={self.message!r})"
        )


class WaitForBlockTimeoutError(ChainError):
    """The chain did not produce a new block before the wait deadline."""

    def __init__(self, start_height: int, timeout: float) -> None:
        super().__init__(
            f"timeout exceeded waiting for block above height {start_height} "
            f"({timeout:g}s)"
        )
        self.start_height = start_height
        self.timeout = timeout


class ConfirmTransactionError(ChainError):
    """The transaction was still not found after every attempt."""

    def __init__(self, tx_hash: str, attempts: int) -> None:
        super().__init__(
            f"failed to confirm transaction after {attempts} attempts, "
            f"tx_hash={tx_hash}"
        )
        self.tx_hash = tx_hash
        self.attempts = attempts


class SealTimeoutError(ChainError):
    """The object never reached a stable sealed state within its budget."""

    def __init__(self, object_id: int, iterations: int) -> None:
        super().__init__(
            f"seal object timeout, object_id={object_id}, iterations={iterations}"
        )
        self.object_id = object_id
        self.iterations = iterations


class RejectUnSealTimeoutError(ChainError):
    """The object was still present on chain when the budget ran out."""

    def __init__(self, object_id: int, iterations: int) -> None:
        super().__init__(
            f"reject unseal object timeout, object_id={object_id}, "
            f"iterations={iterations}"
        )
        self.object_id = object_id
        self.iterations = iterations


TIMEOUT_ERRORS = (
    WaitForBlockTimeoutError,
    ConfirmTransactionError,
    SealTimeoutError,
    RejectUnSealTimeoutError,
)


def classify_error(status: int | None, code: int | None, message: str) -> ErrorKind:
    """Map an error response from the chain to an :class:`ErrorKind`."""
    # Checked first: the storage module reports it as code 2 / HTTP 500.
    if NO_SUCH_OBJECT_MARKER in message:
        return ErrorKind.NO_SUCH_OBJECT
    if status == 404 or code == GRPC_NOT_FOUND:
        return ErrorKind.NOT_FOUND
    if _NOT_FOUND_MARKER in message:
        return ErrorKind.NOT_FOUND
    if code in _TRANSIENT_GRPC_CODES:
        return ErrorKind.TRANSIENT
    if status is not None and (status >= 500 or status == 429):
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL
