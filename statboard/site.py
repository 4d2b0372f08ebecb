"""Site configuration — loads config.json and provides typed models.

The document names the site, the listen port, the refresh interval and the
ordered list of endpoints to poll. It is read once at startup and never
mutated afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class SiteConfigError(Exception):
    """Raised when the site configuration is missing or invalid."""


# ── Models ───────────────────────────────────────────────────────────────────


class HealthCheckSpec(BaseModel):
    """One monitored endpoint and the status code it should answer with."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    icon: str = ""  # raw HTML markup (svg / img), rendered unescaped
    endpoint: str
    status_code: int = 200


class SiteConfig(BaseModel):
    model_config = {"frozen": True}

    site: str = "statboard"
    port: int = Field(default=8080, ge=1, le=65535)
    refresh_interval_seconds: int = Field(default=5, ge=1)
    healthchecks: tuple[HealthCheckSpec, ...] = ()


# ── Loader ───────────────────────────────────────────────────────────────────


def load_site_config(path: Path | str) -> SiteConfig:
    """Parse and validate the site configuration document.

    JSON is valid YAML, so a single ``yaml.safe_load`` handles both formats.
    """
    path = Path(path)
    if not path.exists():
        raise SiteConfigError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise SiteConfigError(f"Failed to parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise SiteConfigError(f"Failed to parse {path}: expected a mapping at top level")

    try:
        config = SiteConfig.model_validate(raw)
    except ValidationError as e:
        raise SiteConfigError(f"Invalid config {path}: {e}") from e

    logger.info(
        "Loaded site config %r: %d health checks, refresh every %ds",
        config.site, len(config.healthchecks), config.refresh_interval_seconds,
    )
    return config
