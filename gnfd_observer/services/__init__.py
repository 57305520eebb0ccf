"""Service modules"""
from .observer import ChainObserver

__all__ = ["ChainObserver"]
