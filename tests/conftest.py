"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest

from statboard.site import HealthCheckSpec, SiteConfig

GIB = 1024 ** 3


@pytest.fixture
def site_config() -> SiteConfig:
    """Two checks: A answers 200, B answers 503 (see ``transport``)."""
    return SiteConfig(
        site="testsite",
        port=8080,
        refresh_interval_seconds=5,
        healthchecks=(
            HealthCheckSpec(
                name="Alpha", description="first service",
                icon='<svg class="alpha-icon"></svg>',
                endpoint="http://a.test/health", status_code=200,
            ),
            HealthCheckSpec(
                name="Beta", description="second service",
                icon='<img src="beta.png">',
                endpoint="http://b.test/health", status_code=200,
            ),
        ),
    )


def make_transport(routes: dict[str, int | Exception]) -> httpx.MockTransport:
    """MockTransport answering by host: a status code, or raising an exception."""

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(request.url.host)
        if outcome is None:
            raise httpx.ConnectError("Name or service not known", request=request)
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, text="body is ignored")

    return httpx.MockTransport(handler)


@pytest.fixture
def transport() -> httpx.MockTransport:
    return make_transport({"a.test": 200, "b.test": 503})


@pytest.fixture
def transport_factory() -> Callable[[dict[str, int | Exception]], httpx.MockTransport]:
    return make_transport


@pytest.fixture
def mock_psutil() -> Iterator[SimpleNamespace]:
    """Patch psutil in the metrics module with fixed readings."""
    with patch("statboard.monitor.metrics.psutil") as mock_ps:
        mock_ps.cpu_percent.return_value = [12.5, 40.0]
        mock_ps.virtual_memory.return_value = SimpleNamespace(
            used=4 * GIB, total=16 * GIB, percent=25.0,
        )
        mock_ps.disk_usage.return_value = SimpleNamespace(
            used=100 * GIB, total=400 * GIB, percent=25.0,
        )
        yield mock_ps
