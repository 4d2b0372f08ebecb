"""Tests for endpoint health checks."""

from __future__ import annotations

import httpx
import pytest

from statboard.monitor.checks import run_health_checks, run_http_check
from statboard.site import HealthCheckSpec


def _spec(name: str, host: str, expected: int = 200) -> HealthCheckSpec:
    return HealthCheckSpec(name=name, endpoint=f"http://{host}/health", status_code=expected)


# ── Single check ─────────────────────────────────────────────────────────────


class TestHTTPCheck:
    def test_expected_status_is_healthy(self, transport_factory) -> None:
        with httpx.Client(transport=transport_factory({"ok.test": 200})) as client:
            result = run_http_check(client, _spec("ok", "ok.test"))
        assert result.healthy is True
        assert result.status_code == 200
        assert result.latency_ms >= 0

    def test_unexpected_status_is_unhealthy(self, transport_factory) -> None:
        with httpx.Client(transport=transport_factory({"bad.test": 503})) as client:
            result = run_http_check(client, _spec("bad", "bad.test"))
        assert result.healthy is False
        assert result.status_code == 503
        assert "Expected 200, got 503" in result.message

    def test_non_200_expectation(self, transport_factory) -> None:
        with httpx.Client(transport=transport_factory({"auth.test": 401})) as client:
            result = run_http_check(client, _spec("auth", "auth.test", expected=401))
        assert result.healthy is True

    def test_connection_error_is_unhealthy(self, transport_factory) -> None:
        with httpx.Client(transport=transport_factory({})) as client:
            result = run_http_check(client, _spec("gone", "gone.test"))
        assert result.healthy is False
        assert result.status_code is None
        assert "ConnectError" in result.message

    def test_timeout_is_unhealthy(self, transport_factory) -> None:
        transport = transport_factory({"slow.test": httpx.ReadTimeout("timed out")})
        with httpx.Client(transport=transport) as client:
            result = run_http_check(client, _spec("slow", "slow.test"))
        assert result.healthy is False
        assert result.message.startswith("Timed out")

    def test_invalid_url_is_unhealthy(self) -> None:
        spec = HealthCheckSpec(name="broken", endpoint="http://256.256.256.256:99999/nope")
        with httpx.Client() as client:
            result = run_http_check(client, spec)
        assert result.healthy is False

    def test_unsupported_scheme_is_unhealthy(self) -> None:
        spec = HealthCheckSpec(name="ftp", endpoint="ftp://example.test/")
        with httpx.Client() as client:
            result = run_http_check(client, spec)
        assert result.healthy is False

    @pytest.mark.parametrize(
        "endpoint",
        [
            "http://a..b/",
            f"http://{'x' * 70}.test/",
            "http://xn--zz/",
        ],
    )
    def test_malformed_host_is_unhealthy(self, endpoint: str) -> None:
        spec = HealthCheckSpec(name="malformed", endpoint=endpoint)
        with httpx.Client(timeout=2.0) as client:
            result = run_http_check(client, spec)
        assert result.healthy is False
        assert result.status_code is None

    def test_unexpected_exception_is_unhealthy(self, transport_factory) -> None:
        transport = transport_factory({"odd.test": UnicodeError("label empty or too long")})
        with httpx.Client(transport=transport) as client:
            result = run_http_check(client, _spec("odd", "odd.test"))
        assert result.healthy is False
        assert result.message == "Error: UnicodeError: label empty or too long"


# ── All checks ───────────────────────────────────────────────────────────────


class TestRunHealthChecks:
    def test_results_aligned_with_specs(self, site_config, transport) -> None:
        results = run_health_checks(site_config.healthchecks, transport=transport)
        assert [r.healthy for r in results] == [True, False]

    def test_unreachable_endpoint_does_not_affect_others(self, transport_factory) -> None:
        specs = [_spec("a", "a.test"), _spec("down", "down.test"), _spec("c", "c.test")]
        transport = transport_factory({"a.test": 200, "c.test": 200})
        results = run_health_checks(specs, transport=transport)
        assert [r.healthy for r in results] == [True, False, True]

    def test_unexpected_exception_does_not_affect_others(self, transport_factory) -> None:
        specs = [_spec("odd", "odd.test"), _spec("ok", "ok.test")]
        transport = transport_factory({"odd.test": UnicodeError("label empty"), "ok.test": 200})
        results = run_health_checks(specs, transport=transport)
        assert [r.healthy for r in results] == [False, True]

    def test_polled_in_list_order(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.host)
            return httpx.Response(200)

        specs = [_spec("c", "c.test"), _spec("a", "a.test"), _spec("b", "b.test")]
        run_health_checks(specs, transport=httpx.MockTransport(handler))
        assert seen == ["c.test", "a.test", "b.test"]

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "http://r.test/new"})
            return httpx.Response(200)

        spec = HealthCheckSpec(name="r", endpoint="http://r.test/old")
        results = run_health_checks([spec], transport=httpx.MockTransport(handler))
        assert results[0].healthy is True

    def test_no_specs(self) -> None:
        assert run_health_checks([]) == ()
