"""Chain client protocols — blockchain RPC abstraction."""
from typing import Protocol

from ..models import ObjectInfo, TxResult


class ChainClient(Protocol):
    """Abstract interface for the chain queries the observer relies on."""

    async def latest_block_height(self) -> int: ...

    async def get_tx(self, tx_hash: str) -> TxResult: ...

    async def head_object_by_id(self, object_id: int | str) -> ObjectInfo: ...


class ChainClientProvider(Protocol):
    """Hands out the currently usable chain client.

    Endpoint rotation and health tracking live behind this interface.
    """

    def current_client(self) -> ChainClient: ...
