"""Dashboard route.

  GET /   rendered HTML summary of host metrics + endpoint health
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

if TYPE_CHECKING:
    from statboard.api.server import DashboardContext

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request) -> Response:
    """Render the dashboard from the latest published state."""
    ctx: DashboardContext = request.app.state.dashboard

    # Copy out, then render without holding the lock
    state = ctx.store.read()

    uptime = time.monotonic() - ctx.started_at
    captured_at = state.snapshot.captured_at
    updated = (
        (datetime.now(timezone.utc) - captured_at).total_seconds()
        if captured_at else None
    )

    try:
        html = ctx.templates.get_template("dashboard.html").render(
            config=ctx.config,
            stats=state.snapshot,
            services=list(zip(ctx.config.healthchecks, state.results)),
            cycle=state.cycle,
            uptime=uptime,
            updated=updated,
        )
    except Exception as e:
        logger.exception("Dashboard render failed")
        return PlainTextResponse(str(e), status_code=500)

    return HTMLResponse(html)
