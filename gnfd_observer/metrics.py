"""Prometheus metrics for chain calls."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram, start_http_server

from .config import MetricsConfig

logger = logging.getLogger(__name__)

TOTAL_LABEL = "total"

chain_calls_total = Counter(
    "gnfd_chain_calls_total",
    "Total chain calls by method and result",
    ["method", "result"],
)

chain_call_duration_seconds = Histogram(
    "gnfd_chain_call_seconds",
    "Chain call duration in seconds",
    ["method", "result"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)


@contextmanager
def observe_chain_call(method: str) -> Iterator[None]:
    """Record one success or failure for ``method`` and the aggregate total.

    Fires exactly once per call whichever way the block exits; cancellation
    counts as a failure.
    """
    start = time.perf_counter()
    result = "failure"
    try:
        yield
        result = "success"
    finally:
        elapsed = time.perf_counter() - start
        for label in (method, TOTAL_LABEL):
            chain_calls_total.labels(method=label, result=result).inc()
            chain_call_duration_seconds.labels(method=label, result=result).observe(
                elapsed
            )


def start_metrics_server(config: MetricsConfig) -> bool:
    """Expose metrics over HTTP when enabled. Returns whether it started."""
    if not config.enabled:
        return False
    start_http_server(config.port)
    logger.info("Metrics server listening on port %d", config.port)
    return True
