# src/install_cost/runner.py
"""
Run ``npm install`` inside a sandbox and time it.

The child process gets the sandbox as working directory and a copy of the
host environment (registry auth, proxies and the like keep working).  It is
spawned from an argument list, never through a shell.

No timeout and no retry: an install runs as long as it takes, and a failed
install is reported, not masked.
"""
from __future__ import annotations

import asyncio
import logging
import os
import shutil
import time
from typing import Mapping, Optional, Sequence

from install_cost.errors import InstallError
from install_cost.sandbox import Sandbox

logger = logging.getLogger(__name__)

INSTALL_ARGS: Sequence[str] = ("install",)


def resolve_executable(npm: str) -> str:
    """Return the full path of *npm* (handles ``npm.cmd`` on Windows)."""
    resolved = shutil.which(npm)
    if resolved is None:
        raise InstallError(
            f"Package manager executable not found: {npm}",
            command=[npm, *INSTALL_ARGS],
        )
    return resolved


async def run_install(
    sandbox: Sandbox,
    *,
    npm: str = "npm",
    args: Sequence[str] = INSTALL_ARGS,
    env: Optional[Mapping[str, str]] = None,
) -> float:
    """
    Install the sandbox's dependencies and return the elapsed milliseconds.

    Raises
    ------
    InstallError
        If the executable cannot be found or spawned, or exits non-zero.
        ``stderr`` holds whatever the child wrote to its error stream.
    """
    command = [resolve_executable(npm), *args]
    child_env = dict(os.environ if env is None else env)
    logger.debug("Running %s in %s", command, sandbox.root)

    start = time.perf_counter()
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(sandbox.root),
            env=child_env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise InstallError(f"Could not start {command[0]}: {exc}", command=command) from exc

    _stdout, stderr = await process.communicate()
    elapsed_ms = (time.perf_counter() - start) * 1000

    if process.returncode != 0:
        raise InstallError(
            f"{' '.join(command)} exited with status {process.returncode} in {sandbox.root}",
            command=command,
            returncode=process.returncode,
            stderr=stderr.decode("utf-8", errors="replace"),
        )

    logger.debug("Install in %s finished in %.1f ms", sandbox.root, elapsed_ms)
    return elapsed_ms


__all__ = ["run_install", "resolve_executable", "INSTALL_ARGS"]
