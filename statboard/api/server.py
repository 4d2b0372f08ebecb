"""FastAPI server for the dashboard."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from statboard import __version__
from statboard.api.routes import router
from statboard.config import settings
from statboard.formatting import format_bytes, format_duration, format_percent
from statboard.monitor.collector import Collector
from statboard.monitor.store import SnapshotStore
from statboard.site import SiteConfig

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
TEMPLATE_NAME = "dashboard.html"


@dataclass
class DashboardContext:
    """Everything the collector and the request handlers share.

    Built once per app; only ``store`` holds mutable state.
    """

    config: SiteConfig
    store: SnapshotStore
    collector: Collector
    templates: Jinja2Templates
    started_at: float = field(default_factory=time.monotonic)


def make_templates(directory: Path | None = None) -> Jinja2Templates:
    """Create the Jinja2 environment and fail fast if the template is missing."""
    templates = Jinja2Templates(directory=str(directory or TEMPLATE_DIR))
    templates.env.filters["format_bytes"] = format_bytes
    templates.env.filters["format_percent"] = format_percent
    templates.env.filters["format_duration"] = format_duration
    templates.get_template(TEMPLATE_NAME)  # raises jinja2.TemplateNotFound
    return templates


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the collector for the lifetime of the server."""
    ctx: DashboardContext = app.state.dashboard
    await ctx.collector.start()

    yield

    await ctx.collector.stop()


def create_app(
    config: SiteConfig,
    template_dir: Path | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """Build the app and its DashboardContext for ``config``."""
    store = SnapshotStore(len(config.healthchecks))
    collector = Collector(
        config,
        store,
        timeout=settings.health_check_timeout,
        disk_path=settings.disk_path,
        cpu_per_core=settings.cpu_per_core,
        transport=transport,
    )

    app = FastAPI(
        title=f"{config.site} - statboard",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    app.state.dashboard = DashboardContext(
        config=config,
        store=store,
        collector=collector,
        templates=make_templates(template_dir),
    )
    app.include_router(router)

    return app
