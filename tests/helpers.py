"""Scripted fake chain and on-chain sample builders shared by the tests."""
from __future__ import annotations

from typing import Any

from gnfd_observer.errors import ChainRpcError, ErrorKind
from gnfd_observer.models import ObjectInfo, ObjectStatus, TxResult


def make_object(
    status: ObjectStatus = ObjectStatus.CREATED,
    is_updating: bool = False,
    object_id: int = 42,
) -> ObjectInfo:
    return ObjectInfo(
        object_id=object_id,
        bucket_name="bucket",
        object_name="photo.jpg",
        owner="0xOWNER",
        payload_size=1024,
        object_status=status,
        is_updating=is_updating,
    )


def not_found(message: str = "tx not found: AB12") -> ChainRpcError:
    return ChainRpcError(ErrorKind.NOT_FOUND, message, status=404, code=5)


def transient(message: str = "connection reset") -> ChainRpcError:
    return ChainRpcError(ErrorKind.TRANSIENT, message, status=503)


def fatal(message: str = "invalid request") -> ChainRpcError:
    return ChainRpcError(ErrorKind.FATAL, message, status=400, code=3)


def no_such_object() -> ChainRpcError:
    return ChainRpcError(
        ErrorKind.NO_SUCH_OBJECT, "No such object: unknown request", status=500, code=2
    )


# ---------------------------------------------------------------------------
# Fake chain
# ---------------------------------------------------------------------------


class FakeChainClient:
    """Chain client that replays scripted responses.

    Each script is a list of values or exceptions consumed one per call; the
    last entry repeats forever once the rest are used up.
    """

    remote = "fake://chain"

    def __init__(
        self,
        heights: list[Any] | None = None,
        txs: list[Any] | None = None,
        objects: list[Any] | None = None,
    ) -> None:
        self.heights = list(heights or [1])
        self.txs = list(txs or [not_found()])
        self.objects = list(objects or [make_object()])
        self.height_calls = 0
        self.tx_calls = 0
        self.object_calls = 0

    @staticmethod
    def _next(script: list[Any]) -> Any:
        value = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(value, BaseException):
            raise value
        return value

    async def latest_block_height(self) -> int:
        self.height_calls += 1
        return self._next(self.heights)

    async def get_tx(self, tx_hash: str) -> TxResult:
        self.tx_calls += 1
        return self._next(self.txs)

    async def head_object_by_id(self, object_id: int | str) -> ObjectInfo:
        self.object_calls += 1
        return self._next(self.objects)


class FakeProvider:
    def __init__(self, client: FakeChainClient) -> None:
        self.client = client

    def current_client(self) -> FakeChainClient:
        return self.client
