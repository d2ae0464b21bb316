# src/install_cost/utils/formatting.py
"""Human-readable durations, sizes and plurals for the report."""
from __future__ import annotations

from rich.filesize import decimal


def format_duration(ms: float) -> str:
    """
    Render *ms* milliseconds the way ``pretty-ms`` does.

    >>> format_duration(42)
    '42ms'
    >>> format_duration(1337)
    '1.3s'
    >>> format_duration(133700)
    '2m 13.7s'
    """
    if ms < 1000:
        return f"{round(ms)}ms"

    # tenths of a second, so rounding never produces "60.0s"
    tenths = round(ms / 100)
    days, tenths = divmod(tenths, 864_000)
    hours, tenths = divmod(tenths, 36_000)
    minutes, tenths = divmod(tenths, 600)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if tenths or not parts:
        seconds = f"{tenths / 10:.1f}".rstrip("0").rstrip(".")
        parts.append(f"{seconds}s")
    return " ".join(parts)


def format_size(size: int) -> str:
    """Render *size* bytes in decimal units (``1500`` -> ``'1.5 kB'``)."""
    return decimal(size)


def format_plural(num: int, singular: str, plural: str) -> str:
    """``format_plural(1, "dep", "deps")`` -> ``'1 dep'``; anything else uses *plural*."""
    return f"{num} {singular if num == 1 else plural}"
