# src/install_cost/reporter.py
"""
Render the measurements as a Rich table, slowest install first, followed by
the summed time and size.

The totals are *non-deduped*: every dependency's transitive closure was
installed on its own, so packages shared between dependencies are counted
once per dependency.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

from install_cost.measure import MeasurementRecord
from install_cost.utils.formatting import format_duration, format_size
from install_cost.utils.rich_helpers import get_console

_UNBOUNDED = 10_000


@dataclass(frozen=True)
class AggregateReport:
    records: List[MeasurementRecord]
    total_duration_ms: float
    total_size: int


def aggregate(records: Sequence[MeasurementRecord]) -> AggregateReport:
    ordered = sorted(records, key=lambda r: r.duration_ms, reverse=True)
    return AggregateReport(
        records=ordered,
        total_duration_ms=sum(r.duration_ms for r in ordered),
        total_size=sum(r.size for r in ordered),
    )


def build_table(report: AggregateReport) -> Table:
    table = Table(header_style="bold magenta")
    table.add_column("Dependency", style="green", no_wrap=True, overflow="fold")
    table.add_column("Time", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("# Deps", style="cyan", justify="right")

    for record in report.records:
        table.add_row(
            record.name,
            format_duration(record.duration_ms),
            format_size(record.size),
            str(record.sub_dependencies),
        )
    return table


def fit_to_content(table: Table, console: Console) -> Table:
    """Let *table* grow past the console width instead of truncating names."""
    natural = Measurement.get(console, console.options.update_width(_UNBOUNDED), table).maximum
    if natural > console.width:
        table.width = natural
    return table


def render_report(
    records: Sequence[MeasurementRecord],
    console: Optional[Console] = None,
) -> AggregateReport:
    """Print the table and the two total lines; returns the aggregate."""
    console = console or get_console()
    report = aggregate(records)

    console.print(fit_to_content(build_table(report), console), crop=False)
    console.print(
        f"Total time (non-deduped): {format_duration(report.total_duration_ms)}", soft_wrap=True
    )
    console.print(f"Total size (non-deduped): {format_size(report.total_size)}", soft_wrap=True)
    return report


__all__ = ["AggregateReport", "aggregate", "build_table", "fit_to_content", "render_report"]
