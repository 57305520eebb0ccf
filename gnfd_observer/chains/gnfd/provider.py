"""Chain client provider backed by a single fallback-aware GnfdClient."""
from __future__ import annotations

import logging

from ...config import ChainConfig
from .client import GnfdClient

logger = logging.getLogger(__name__)


class GnfdClientProvider:
    """Supplies the current Greenfield client to the observer."""

    def __init__(self, client: GnfdClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: ChainConfig) -> GnfdClientProvider:
        client = GnfdClient(config)
        logger.debug("Chain client provider using endpoints: %s", client.endpoints)
        return cls(client)

    def current_client(self) -> GnfdClient:
        return self._client
