# src/install_cost/commands/benchmark.py
"""
Benchmark every dependency of the project in the current directory.

Two public entry-points
-----------------------
* **benchmark_action_async(...)** - canonical coroutine.
* **benchmark_action(...)**       - blocking wrapper used by the CLI.

Steps
-----
1. read ``package.json`` (fatal if missing) and ``npm-shrinkwrap.json``;
2. print the *Analyzing N dependencies...* line;
3. run the :class:`~install_cost.scheduler.Scheduler` under a progress bar;
4. print the report table and totals.

Any error propagates unchanged; nothing is printed to stdout after it.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from install_cost.config import Settings
from install_cost.manifest import load_dependencies, load_lock_entries
from install_cost.reporter import AggregateReport, render_report
from install_cost.sandbox import SandboxRegistry
from install_cost.scheduler import Scheduler, make_progress
from install_cost.utils.async_utils import run_blocking
from install_cost.utils.rich_helpers import get_console

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════
# async (canonical) implementation
# ════════════════════════════════════════════════════════════════════════
async def benchmark_action_async(
    project_dir: Path,
    *,
    production: bool = False,
    optional: bool = True,
    shrinkwrap: bool = True,
    settings: Optional[Settings] = None,
    registry: Optional[SandboxRegistry] = None,
) -> AggregateReport:
    """
    Measure and report every selected dependency of *project_dir*.

    Parameters
    ----------
    project_dir
        Directory holding ``package.json`` (and optionally
        ``npm-shrinkwrap.json`` / ``.npmrc``).
    production
        Skip ``devDependencies``.
    optional
        Include ``optionalDependencies``.
    shrinkwrap
        Pin installs to the descriptors in ``npm-shrinkwrap.json``.
    settings
        Runtime settings; defaults to :class:`~install_cost.config.Settings`.
    registry
        Sandbox registry to allocate from.  When omitted a private one is
        created and drained before returning.
    """
    settings = settings or Settings()
    console = get_console()

    selection = load_dependencies(project_dir, production=production, optional=optional)
    lock_entries = load_lock_entries(project_dir, enabled=shrinkwrap)
    console.print(selection.start_message(), soft_wrap=True)

    owns_registry = registry is None
    if registry is None:
        registry = SandboxRegistry(settings.sandbox_root, keep=settings.keep_sandboxes)

    try:
        with make_progress(console=console) as progress:
            scheduler = Scheduler(
                selection.dependencies,
                lock_entries,
                registry,
                source_dir=project_dir,
                settings=settings,
                progress=progress,
            )
            records = await scheduler.run()
    finally:
        if owns_registry:
            registry.cleanup()

    report = render_report(records, console)
    scheduler.finish()
    logger.debug("Benchmarked %d dependencies", len(records))
    return report


# ════════════════════════════════════════════════════════════════════════
# sync wrapper - for the CLI
# ════════════════════════════════════════════════════════════════════════
def benchmark_action(
    project_dir: Path,
    *,
    production: bool = False,
    optional: bool = True,
    shrinkwrap: bool = True,
    settings: Optional[Settings] = None,
    registry: Optional[SandboxRegistry] = None,
) -> AggregateReport:
    """Blocking wrapper around :pyfunc:`benchmark_action_async`."""
    return run_blocking(
        benchmark_action_async(
            project_dir,
            production=production,
            optional=optional,
            shrinkwrap=shrinkwrap,
            settings=settings,
            registry=registry,
        )
    )


__all__ = ["benchmark_action_async", "benchmark_action"]
