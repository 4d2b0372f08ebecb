"""Endpoint health checks — one GET per configured endpoint per cycle.

A check is healthy when the endpoint answers with the expected status code.
Any transport failure (refused connection, DNS, timeout, bad URL) marks the
check unhealthy. The response body is never inspected.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import httpx

from ..site import HealthCheckSpec
from .models import HealthCheckResult

logger = logging.getLogger(__name__)


def run_http_check(client: httpx.Client, spec: HealthCheckSpec) -> HealthCheckResult:
    """GET ``spec.endpoint`` and compare the status with ``spec.status_code``."""
    t0 = time.perf_counter()
    try:
        # client.get() reads the body and closes the response before returning
        resp = client.get(spec.endpoint)
    except httpx.TimeoutException as e:
        latency = (time.perf_counter() - t0) * 1000
        logger.warning("Health check %s timed out: %s", spec.name, e)
        return HealthCheckResult(
            healthy=False, latency_ms=round(latency, 1),
            message=f"Timed out: {e}",
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        latency = (time.perf_counter() - t0) * 1000
        logger.warning("Error checking health of %s: %s", spec.name, e)
        return HealthCheckResult(
            healthy=False, latency_ms=round(latency, 1),
            message=f"Connection error: {type(e).__name__}: {e}",
        )
    except Exception as e:
        # e.g. UnicodeError / idna.IDNAError for hosts that fail IDNA encoding
        latency = (time.perf_counter() - t0) * 1000
        logger.warning("Error checking health of %s: %s: %s", spec.name, type(e).__name__, e)
        return HealthCheckResult(
            healthy=False, latency_ms=round(latency, 1),
            message=f"Error: {type(e).__name__}: {e}",
        )

    latency = (time.perf_counter() - t0) * 1000
    if resp.status_code == spec.status_code:
        return HealthCheckResult(
            healthy=True, status_code=resp.status_code,
            latency_ms=round(latency, 1), message=f"{resp.status_code} OK",
        )

    logger.info(
        "Health check %s unhealthy: expected %d, got %d",
        spec.name, spec.status_code, resp.status_code,
    )
    return HealthCheckResult(
        healthy=False, status_code=resp.status_code, latency_ms=round(latency, 1),
        message=f"Expected {spec.status_code}, got {resp.status_code}",
    )


def run_health_checks(
    specs: Sequence[HealthCheckSpec],
    timeout: float = 10.0,
    transport: httpx.BaseTransport | None = None,
) -> tuple[HealthCheckResult, ...]:
    """Poll every endpoint in list order and return the aligned results."""
    if not specs:
        return ()
    with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
        return tuple(run_http_check(client, spec) for spec in specs)
