# src/install_cost/utils/rich_helpers.py
"""
Shared Rich consoles.

stdout carries the startup line, the progress bar and the report; stderr
carries fatal errors so a redirected report stays clean.
"""
from __future__ import annotations

import sys

from rich.console import Console

_console: Console | None = None
_err_console: Console | None = None


def get_console() -> Console:
    """Return the process-wide stdout console (created on first use)."""
    global _console
    if _console is None:
        # no colour codes when piped into a file
        _console = Console(highlight=False, no_color=not sys.stdout.isatty())
    return _console


def get_err_console() -> Console:
    """Return the process-wide stderr console (created on first use)."""
    global _err_console
    if _err_console is None:
        _err_console = Console(stderr=True, highlight=False)
    return _err_console
