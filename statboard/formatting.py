"""Display formatting helpers, registered as Jinja2 filters."""

from __future__ import annotations

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(n: int | float) -> str:
    """Binary (1024-based) size with two decimals, e.g. ``"1.50 KB"``."""
    if n == 0:
        return "0 B"

    value = float(n)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {_BYTE_UNITS[unit]}"


def format_percent(p: float) -> str:
    return f"{p:.2f}%"


def format_duration(seconds: float) -> str:
    """Whole-second duration as ``45s``, ``2m5s`` or ``1h0m0s``."""
    total = max(0, int(round(seconds)))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"
