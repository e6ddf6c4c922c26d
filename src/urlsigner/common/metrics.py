"""Prometheus metrics for URL signing and verification."""

import os

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)
from starlette.requests import Request
from starlette.responses import Response

# === Counters ===

SIGNED_URLS_TOTAL = Counter(
    "urlsigner_signed_urls_total",
    "Total signed URL generation attempts",
    ["outcome"],  # outcome: signed, resolution_failed
)

VERIFICATIONS_TOTAL = Counter(
    "urlsigner_verifications_total",
    "Total signed URL verification decisions",
    ["outcome"],  # outcome: ok, expired, malformed, bad_signature, missing
)

# === Histograms ===

RESOLVER_LATENCY = Histogram(
    "urlsigner_resolver_latency_seconds",
    "Resource resolver call latency in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)


# === Helper Functions ===


def record_signing(outcome: str) -> None:
    """Record a signed URL generation outcome."""
    SIGNED_URLS_TOTAL.labels(outcome=outcome).inc()


def record_verification(outcome: str) -> None:
    """Record a verification decision."""
    VERIFICATIONS_TOTAL.labels(outcome=outcome).inc()


def record_resolver_call(latency: float) -> None:
    """Record resolver latency."""
    RESOLVER_LATENCY.observe(latency)


# === HTTP Endpoint ===


async def metrics_endpoint(_request: Request) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    multiproc_dir = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
    if multiproc_dir:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)  # type: ignore[no-untyped-call]
        return Response(
            generate_latest(registry),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    return Response(
        generate_latest(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
