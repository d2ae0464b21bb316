# src/install_cost/measure.py
"""Size up a sandbox's ``node_modules`` after a successful install."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from install_cost.errors import MeasurementError
from install_cost.sandbox import Sandbox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementRecord:
    name: str
    duration_ms: float
    size: int
    sub_dependencies: int


def folder_size(path: Path) -> int:
    """
    Recursive size of *path* in bytes: the ``lstat`` size of *path* itself and
    of every entry below it, directories included.  Symlinks are counted by
    their own size and never followed.
    """
    return path.lstat().st_size + sum(p.lstat().st_size for p in path.rglob("*"))


def count_sub_dependencies(path: Path) -> int:
    """Entries in *path* minus the directory of the dependency itself."""
    return len(os.listdir(path)) - 1


def collect(name: str, duration_ms: float, sandbox: Sandbox) -> MeasurementRecord:
    modules = sandbox.modules_dir
    try:
        if not modules.is_dir():
            raise FileNotFoundError(f"{modules} does not exist")
        size = folder_size(modules)
        sub_dependencies = count_sub_dependencies(modules)
    except OSError as exc:
        raise MeasurementError(f"Could not measure {name} in {modules}: {exc}") from exc

    record = MeasurementRecord(
        name=name,
        duration_ms=duration_ms,
        size=size,
        sub_dependencies=sub_dependencies,
    )
    logger.debug("Measured %s", record)
    return record


__all__ = ["MeasurementRecord", "collect", "folder_size", "count_sub_dependencies"]
