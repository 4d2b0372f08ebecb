"""Entry point for statboard."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import uvicorn
from jinja2 import TemplateNotFound
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from statboard.config import settings
from statboard.formatting import format_bytes, format_percent
from statboard.monitor.collector import Collector
from statboard.monitor.metrics import sample_cpu
from statboard.monitor.models import PublishedState
from statboard.monitor.store import SnapshotStore
from statboard.site import SiteConfig, SiteConfigError, load_site_config

console = Console()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _load_config_or_exit(path: str) -> SiteConfig:
    try:
        return load_site_config(path)
    except SiteConfigError as e:
        logger.error("%s", e)
        sys.exit(1)


def run_server(config_path: str) -> None:
    """Start the dashboard server with the collector in the background."""
    from statboard.api.server import create_app

    config = _load_config_or_exit(config_path)
    try:
        app = create_app(config)
    except TemplateNotFound as e:
        logger.error("Error parsing template: %s not found", e.name)
        sys.exit(1)

    console.print(Panel(
        f"Serving system stats for [bold]{config.site}[/bold] on http://localhost:{config.port}",
        style="bold green",
    ))
    uvicorn.run(app, host=settings.api_host, port=config.port, log_level=settings.log_level.lower())


async def _collect_once(config: SiteConfig) -> PublishedState:
    store = SnapshotStore(len(config.healthchecks))
    collector = Collector(
        config,
        store,
        timeout=settings.health_check_timeout,
        disk_path=settings.disk_path,
        cpu_per_core=settings.cpu_per_core,
    )
    # first zero-window CPU sample after start is always 0
    sample_cpu(settings.cpu_per_core)
    await asyncio.sleep(0.5)
    try:
        return await collector.run_cycle()
    finally:
        await collector.stop()


def run_check(config_path: str) -> int:
    """Run a single collection cycle and print the results."""
    config = _load_config_or_exit(config_path)

    with console.status("[bold green]Collecting..."):
        state = asyncio.run(_collect_once(config))

    stats = state.snapshot
    console.print(Panel(config.site, style="bold blue"))
    console.print(f"CPU:    {', '.join(format_percent(c) for c in stats.cpu) or 'no data'}")
    console.print(
        f"Memory: {format_bytes(stats.memory_used)} / {format_bytes(stats.memory_total)}"
        f" ({format_percent(stats.memory_percent)})"
    )
    console.print(
        f"Disk:   {format_bytes(stats.disk_used)} / {format_bytes(stats.disk_total)}"
        f" ({format_percent(stats.disk_percent)})"
    )

    if not config.healthchecks:
        return 0

    table = Table(title="Health checks")
    table.add_column("Service")
    table.add_column("Endpoint")
    table.add_column("Status")
    table.add_column("Latency", justify="right")
    table.add_column("Detail")
    for check, result in zip(config.healthchecks, state.results):
        status = "[green]healthy[/green]" if result.healthy else "[red]unhealthy[/red]"
        table.add_row(check.name, check.endpoint, status, f"{result.latency_ms:.0f}ms", result.message)
    console.print(table)

    return 0 if all(r.healthy for r in state.results) else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="statboard: host metrics and service health dashboard")
    sub = parser.add_subparsers(dest="command")

    serve_parser = sub.add_parser("serve", help="Start the dashboard server")
    serve_parser.add_argument("--config", default=settings.config_file, help="Path to config.json")

    check_parser = sub.add_parser("check", help="Run one collection cycle and print it")
    check_parser.add_argument("--config", default=settings.config_file, help="Path to config.json")

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.config)
    elif args.command == "check":
        sys.exit(run_check(args.config))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
