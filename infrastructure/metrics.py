"""Prometheus metrics for the BlockForge engine and web shell.

Exposes content type and quality labels so dashboards show what people
actually build, not just generic HTTP stats.

Metrics:
    forge_requests_total           Counter by operation and content_type
    forge_report_latency_seconds   Histogram of /forge/report computation time
    forge_reports_total            Counter of reports by quality and build type
    shell_cache_hits_total         Offline asset cache hits
    shell_cache_misses_total       Offline asset cache misses (network fallback)

Usage::

    from infrastructure.metrics import record_forge_request, record_report

    record_forge_request(operation="retention", content_type="image")
"""

from __future__ import annotations

import logging
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

_REGISTRY = CollectorRegistry()

forge_requests_total = Counter(
    "blockforge_forge_requests_total",
    "Engine calls by operation and content type",
    ["operation", "content_type"],
    registry=_REGISTRY,
)

forge_report_latency_seconds = Histogram(
    "blockforge_forge_report_latency_seconds",
    "Optimization report computation time in seconds",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.05, 0.1],
    registry=_REGISTRY,
)

forge_reports_total = Counter(
    "blockforge_forge_reports_total",
    "Optimization reports by quality label and build type",
    ["quality", "build_type"],
    registry=_REGISTRY,
)

shell_cache_hits_total = Counter(
    "blockforge_shell_cache_hits_total",
    "Offline shell asset cache hits",
    registry=_REGISTRY,
)

shell_cache_misses_total = Counter(
    "blockforge_shell_cache_misses_total",
    "Offline shell asset cache misses served from the network",
    registry=_REGISTRY,
)

logger.info("Prometheus metrics registry initialized")


def record_forge_request(*, operation: str, content_type: str) -> None:
    """Increment the engine call counter.

    Args:
        operation: Engine operation name, e.g. "retention" or "curve".
        content_type: Content type tag, or "none" for type-independent calls.
    """
    forge_requests_total.labels(operation=operation, content_type=content_type).inc()


def record_report(*, quality: str, build_type: str, latency_seconds: float) -> None:
    """Record a completed optimization report.

    Args:
        quality: Quality label of the report.
        build_type: "mosaic" or "sculpture".
        latency_seconds: Wall-clock computation time in seconds.
    """
    forge_reports_total.labels(quality=quality, build_type=build_type).inc()
    forge_report_latency_seconds.observe(latency_seconds)


def record_shell_cache_hit() -> None:
    """Increment shell asset cache hit counter."""
    shell_cache_hits_total.inc()


def record_shell_cache_miss() -> None:
    """Increment shell asset cache miss counter."""
    shell_cache_misses_total.inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    Usage::

        with LatencyTimer() as t:
            report = generate_optimization_report(...)
        record_report(quality="high", build_type="mosaic", latency_seconds=t.elapsed)
    """

    def __init__(self) -> None:
        """Initialize timer."""
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        """Start timing."""
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        """Stop timing and record elapsed."""
        self.elapsed = time.perf_counter() - self._start
