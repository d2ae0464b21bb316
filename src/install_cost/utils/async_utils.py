# src/install_cost/utils/async_utils.py
"""Helpers for calling the async pipeline from synchronous code."""
from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


def run_blocking(coro: Awaitable[T]) -> T:
    """
    Run *coro* to completion on a fresh event loop and return its result.

    Raises
    ------
    RuntimeError
        If called from inside a running event-loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    if asyncio.iscoroutine(coro):
        coro.close()
    raise RuntimeError("run_blocking() called from inside a running event loop")
