"""Greenfield chain client."""
from .client import GnfdClient
from .provider import GnfdClientProvider

__all__ = ["GnfdClient", "GnfdClientProvider"]
