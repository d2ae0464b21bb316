# src/install_cost/scheduler.py
"""
Drive the per-dependency pipeline, strictly one dependency at a time.

For each dependency, in the iteration order of the dependency mapping::

    allocate sandbox → seed .npmrc → write package.json (+ shrinkwrap)
        → npm install → measure node_modules → record

Installs compete for CPU, network and disk, so running two at once would
make their timings incomparable; the next dependency only starts once the
previous one has been recorded.  The first failure stops the run and is
re-raised; no partial record is kept for the failing dependency.
"""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

from rich.progress import BarColumn, Progress, TaskID, TextColumn, TimeRemainingColumn

from install_cost.config import Settings
from install_cost.measure import MeasurementRecord, collect
from install_cost.runner import run_install
from install_cost.sandbox import SandboxRegistry, seed_config
from install_cost.synthesizer import synthesize

logger = logging.getLogger(__name__)


class SchedulerState(enum.Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


def make_progress(**kwargs: Any) -> Progress:
    """``[━━━━━━━━━━━━━━━━━━━━] 45% 0:00:12``"""
    return Progress(
        TextColumn("["),
        BarColumn(bar_width=20),
        TextColumn("]"),
        TextColumn("{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        transient=True,
        **kwargs,
    )


class Scheduler:
    """One benchmark run over a fixed dependency set."""

    def __init__(
        self,
        dependencies: Mapping[str, str],
        lock_entries: Mapping[str, Any],
        registry: SandboxRegistry,
        *,
        source_dir: Path,
        settings: Optional[Settings] = None,
        progress: Optional[Progress] = None,
    ) -> None:
        self.dependencies = dict(dependencies)
        self.lock_entries = lock_entries
        self.registry = registry
        self.source_dir = source_dir
        self.settings = settings or Settings()
        self.progress = progress

        self.state = SchedulerState.IDLE
        self.current: Optional[str] = None
        self.error: Optional[BaseException] = None
        self.records: List[MeasurementRecord] = []
        self._task: Optional[TaskID] = None

    async def run(self) -> List[MeasurementRecord]:
        """Measure every dependency; returns the records in enumeration order."""
        if self.state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler already used (state: {self.state.value})")

        if self.progress is not None:
            self._task = self.progress.add_task("install", total=len(self.dependencies))

        try:
            for name, version in self.dependencies.items():
                self.state = SchedulerState.PROCESSING
                self.current = name
                self.records.append(await self._process(name, version))
                if self._task is not None:
                    self.progress.advance(self._task)
        except BaseException as exc:
            self.state = SchedulerState.FAILED
            self.error = exc
            logger.debug("Run failed while processing %s", self.current)
            raise

        self.current = None
        self.state = SchedulerState.REPORTING
        return list(self.records)

    def finish(self) -> None:
        """Mark the run as reported."""
        if self.state is not SchedulerState.REPORTING:
            raise RuntimeError(f"Cannot finish from state {self.state.value}")
        self.state = SchedulerState.DONE

    async def _process(self, name: str, version: str) -> MeasurementRecord:
        sandbox = self.registry.allocate()
        seed_config(sandbox, self.source_dir)
        synthesize(sandbox, name, version, self.lock_entries.get(name))

        logger.info("Installing %s@%s", name, version)
        duration_ms = await run_install(sandbox, npm=self.settings.npm_command)
        return collect(name, duration_ms, sandbox)


__all__ = ["Scheduler", "SchedulerState", "make_progress"]
