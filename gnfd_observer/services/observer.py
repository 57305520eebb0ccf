"""Chain-state observation — block waits, tx confirmation, object lifecycle.

Every loop here is bounded: it ends on a terminal observation, on exhausting
its caller-supplied budget, or on a fatal error. Caller cancellation is never
caught; it propagates out of whichever sleep or query it interrupts.
"""
from __future__ import annotations

import asyncio
import logging

from ..config import ObserverConfig
from ..errors import (
    ChainError,
    ChainRpcError,
    ConfirmTransactionError,
    RejectUnSealTimeoutError,
    SealTimeoutError,
    WaitForBlockTimeoutError,
)
from ..interfaces.chain import ChainClientProvider
from ..metrics import observe_chain_call
from ..models import LifecycleState, ObjectInfo, TxResult, classify_object_state

logger = logging.getLogger(__name__)


class ChainObserver:
    """Stateless poller over a chain client provider."""

    def __init__(
        self,
        provider: ChainClientProvider,
        config: ObserverConfig | None = None,
    ) -> None:
        self._provider = provider
        self._config = config or ObserverConfig()

    @property
    def config(self) -> ObserverConfig:
        return self._config

    # ------------------------------------------------------------------
    # Height
    # ------------------------------------------------------------------

    async def current_height(self) -> int:
        """Return the latest committed height. A failed query is not retried."""
        with observe_chain_call("current_height"):
            return await self._latest_height()

    async def _latest_height(self) -> int:
        client = self._provider.current_client()
        try:
            return await client.latest_block_height()
        except ChainRpcError as e:
            logger.error(
                "get latest block height failed, node_addr=%s: %s",
                getattr(client, "remote", "?"),
                e,
            )
            raise

    async def wait_for_next_block(self) -> None:
        """Block until the chain height advances past the current one.

        Raises:
            WaitForBlockTimeoutError: no new block within ``wait_block_timeout``.
            ChainRpcError: a height query failed.
        """
        with observe_chain_call("wait_for_next_block"):
            start_height = await self._latest_height()
            timeout = self._config.wait_block_timeout
            try:
                async with asyncio.timeout(timeout):
                    while True:
                        height = await self._latest_height()
                        if height >= start_height + 1:
                            return
                        await asyncio.sleep(self._config.wait_block_tick)
            except TimeoutError:
                # Only our own deadline lands here; an outer caller deadline
                # surfaces as CancelledError inside this scope.
                raise WaitForBlockTimeoutError(start_height, timeout) from None

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def confirm_transaction(self, tx_hash: str) -> TxResult:
        """Poll for a transaction's inclusion, waiting a block between misses.

        Inclusion is the contract: a found transaction is returned whatever
        its execution code.
        """
        attempts = self._config.confirm_attempts
        with observe_chain_call("confirm_transaction"):
            for attempt in range(1, attempts + 1):
                client = self._provider.current_client()
                try:
                    return await client.get_tx(tx_hash)
                except ChainRpcError as e:
                    if not e.is_not_found:
                        logger.error(
                            "failed to query tx, tx_hash=%s, attempt=%d: %s",
                            tx_hash,
                            attempt,
                            e,
                        )
                        raise
                logger.debug(
                    "tx not found yet, tx_hash=%s, attempt=%d/%d",
                    tx_hash,
                    attempt,
                    attempts,
                )
                if attempt < attempts:
                    await self._wait_best_effort()
            raise ConfirmTransactionError(tx_hash, attempts)

    async def _wait_best_effort(self) -> None:
        try:
            await self.wait_for_next_block()
        except ChainError as e:
            logger.warning("failed to wait for next block: %s", e)

    # ------------------------------------------------------------------
    # Object lifecycle
    # ------------------------------------------------------------------

    async def query_object_info_by_id(self, object_id: int) -> ObjectInfo:
        with observe_chain_call("query_object_info_by_id"):
            client = self._provider.current_client()
            try:
                return await client.head_object_by_id(object_id)
            except ChainRpcError as e:
                logger.debug("failed to query object, object_id=%s: %s", object_id, e)
                raise

    async def listen_object_seal(self, object_id: int, max_iterations: int) -> bool:
        """Poll until the object is sealed and not mid-update.

        Query errors are treated as transient. When the budget runs out the
        error from the last iteration is raised if there was one, otherwise
        :class:`SealTimeoutError`.
        """
        with observe_chain_call("listen_object_seal"):
            last_error: ChainRpcError | None = None
            for iteration in range(max_iterations):
                if iteration:
                    await asyncio.sleep(self._config.block_interval)
                try:
                    info = await self.query_object_info_by_id(object_id)
                except ChainRpcError as e:
                    last_error = e
                    continue
                last_error = None
                if classify_object_state(info) is LifecycleState.SEALED:
                    logger.debug(
                        "succeed to listen object seal, object_id=%s", object_id
                    )
                    return True

            if last_error is None:
                logger.error("seal object timeout, object_id=%s", object_id)
                raise SealTimeoutError(object_id, max_iterations)
            logger.error(
                "failed to listen seal object, object_id=%s: %s", object_id, last_error
            )
            raise last_error

    async def listen_reject_unseal_object(
        self, object_id: int, max_iterations: int
    ) -> bool:
        """Poll until the object disappears from chain, i.e. was rejected."""
        with observe_chain_call("listen_reject_unseal_object"):
            last_error: ChainRpcError | None = None
            for iteration in range(max_iterations):
                if iteration:
                    await asyncio.sleep(self._config.block_interval)
                try:
                    await self.query_object_info_by_id(object_id)
                except ChainRpcError as e:
                    if classify_object_state(None, e) is LifecycleState.REJECTED:
                        logger.debug(
                            "succeed to listen reject unseal object, object_id=%s",
                            object_id,
                        )
                        return True
                    last_error = e
                    continue
                last_error = None

            if last_error is None:
                logger.error("reject unseal object timeout, object_id=%s", object_id)
                raise RejectUnSealTimeoutError(object_id, max_iterations)
            logger.error(
                "failed to listen reject unseal object, object_id=%s: %s",
                object_id,
                last_error,
            )
            raise last_error
