"""Greenfield REST gateway client with fallback support."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, Callable, TypeVar

import aiohttp
import certifi

from ...config import ChainConfig
from ...errors import ChainRpcError, ErrorKind, classify_error
from ...models import ObjectInfo, TxResult
from . import parser

logger = logging.getLogger(__name__)

T = TypeVar("T")

LATEST_BLOCK_PATH = "/cosmos/base/tendermint/v1beta1/blocks/latest"
TX_PATH = "/cosmos/tx/v1beta1/txs/{tx_hash}"
HEAD_OBJECT_BY_ID_PATH = "/greenfield/storage/head_object_by_id/{object_id}"


class GnfdClient:
    """Greenfield chain client with automatic endpoint fallback.

    Transport failures move on to the next endpoint. An endpoint that answers
    with an error response is authoritative and is not retried elsewhere.
    """

    def __init__(self, config: ChainConfig) -> None:
        if not config.rpc_endpoints:
            raise ValueError("GnfdClient needs at least one RPC endpoint")
        self.endpoints = [e.rstrip("/") for e in config.rpc_endpoints]
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    @property
    def remote(self) -> str:
        return self.endpoints[self.current_rpc_index]

    async def rest_call(self, path: str) -> dict[str, Any]:
        """GET ``path`` from the gateway with fallback to alternative endpoints."""
        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.get(
                        f"{rpc_url}{path}",
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        payload = await response.json(content_type=None)
                        status = response.status
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index

            if status >= 400:
                code, message = parser.parse_error_body(payload)
                kind = classify_error(status, code, message)
                raise ChainRpcError(kind, message or f"HTTP {status}", status, code)
            if payload is None:
                return {}
            if not isinstance(payload, dict):
                raise ChainRpcError(
                    ErrorKind.FATAL,
                    "malformed response: expected a JSON object, got "
                    f"{type(payload).__name__}",
                    status,
                )
            return payload

        raise ChainRpcError(
            ErrorKind.TRANSIENT,
            f"All RPC endpoints failed. Last error: {last_error}",
        )

    @staticmethod
    def _parse(parse_fn: Callable[[dict[str, Any]], T], payload: dict[str, Any]) -> T:
        """Run a parser, reporting malformed payloads as fatal RPC errors."""
        try:
            return parse_fn(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ChainRpcError(ErrorKind.FATAL, f"malformed response: {e}") from e

    async def latest_block_height(self) -> int:
        """Return the height of the latest committed block."""
        payload = await self.rest_call(LATEST_BLOCK_PATH)
        return self._parse(parser.parse_block_height, payload)

    async def get_tx(self, tx_hash: str) -> TxResult:
        """Look up an included transaction by hash."""
        payload = await self.rest_call(TX_PATH.format(tx_hash=tx_hash))
        return self._parse(parser.parse_tx_response, payload)

    async def head_object_by_id(self, object_id: int | str) -> ObjectInfo:
        """Fetch the on-chain object record by id."""
        payload = await self.rest_call(
            HEAD_OBJECT_BY_ID_PATH.format(object_id=object_id)
        )
        return self._parse(parser.parse_object_info, payload)
