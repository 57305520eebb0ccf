"""Protocol interfaces for the chain observer."""
from .chain import ChainClient, ChainClientProvider

__all__ = ["ChainClient", "ChainClientProvider"]
