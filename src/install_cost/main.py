# src/install_cost/main.py
"""Entry-point for the install-cost CLI."""
from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from install_cost.commands.benchmark import benchmark_action
from install_cost.config import load_settings
from install_cost.errors import InstallCostError, InstallError
from install_cost.logging_config import LOG_FORMATS, get_logger, setup_logging
from install_cost.sandbox import SandboxRegistry
from install_cost.utils.rich_helpers import get_err_console

# ──────────────────────────────────────────────────────────────────────────────
# Module logger
# ──────────────────────────────────────────────────────────────────────────────
logger = get_logger("main")

# ──────────────────────────────────────────────────────────────────────────────
# Typer root app
# ──────────────────────────────────────────────────────────────────────────────
app = typer.Typer(
    add_completion=False,
    help="Measure how long each dependency in package.json takes to install, in isolation.",
)


def _report_failure(exc: BaseException) -> None:
    """Write *exc* and whatever diagnostics it carries to stderr."""
    err = get_err_console()
    if isinstance(exc, InstallError):
        err.print(f"[red]Error:[/red] {escape(str(exc))}")
        if exc.stderr:
            err.print(exc.stderr.rstrip(), markup=False, highlight=False)
    elif isinstance(exc, InstallCostError):
        err.print(f"[red]Error:[/red] {escape(str(exc))}")
        cause = exc.__cause__
        if cause is not None:
            err.print(
                f"Caused by: {type(cause).__name__}: {cause}", markup=False, highlight=False, soft_wrap=True
            )
    else:
        err.print(f"[red]Error:[/red] {escape(repr(exc))}")
        err.print_exception()
    logger.debug("Run failed", exc_info=exc)


@app.command(
    epilog=(
        "Examples:  install-cost   (measure all deps in the current project)  |  "
        "install-cost --production --no-optional   (skip both optional and dev dependencies)"
    )
)
def benchmark(
    production: bool = typer.Option(False, "--production", "--prod", help="Skip devDependencies"),
    no_optional: bool = typer.Option(False, "--no-optional", help="Skip optionalDependencies"),
    no_shrinkwrap: bool = typer.Option(False, "--no-shrinkwrap", help="Ignore npm-shrinkwrap.json"),
    keep: Optional[bool] = typer.Option(
        None, "--keep/--no-keep", help="Keep the install sandboxes on disk after the run"
    ),
    npm: Optional[str] = typer.Option(None, "--npm", help="Package manager executable"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress most log output"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable verbose logging"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"),
    log_format: str = typer.Option(
        "simple", "--log-format", help=f"Log line format ({', '.join(LOG_FORMATS)})"
    ),
) -> None:
    """Install every dependency on its own and report time, size and sub-dependency count."""
    # FIRST: Set up logging before anything else happens
    try:
        setup_logging(level=log_level, quiet=quiet, verbose=verbose, format_style=log_format)
    except ValueError as exc:
        hint = "--log-format" if str(exc).startswith("Invalid log format") else "--log-level"
        raise typer.BadParameter(str(exc), param_hint=hint) from exc

    settings = load_settings().override(npm_command=npm, keep_sandboxes=keep)
    logger.debug(f"Settings: {settings}")

    try:
        with SandboxRegistry(settings.sandbox_root, keep=settings.keep_sandboxes) as registry:
            benchmark_action(
                Path.cwd(),
                production=production,
                optional=not no_optional,
                shrinkwrap=not no_shrinkwrap,
                settings=settings,
                registry=registry,
            )
    except KeyboardInterrupt:
        get_err_console().print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
    except Exception as exc:
        _report_failure(exc)
        raise typer.Exit(1)


# ──────────────────────────────────────────────────────────────────────────────
# Signal handling
# ──────────────────────────────────────────────────────────────────────────────
def _setup_signal_handlers() -> None:
    """Turn SIGTERM into SystemExit so the sandbox registry still drains."""
    def handler(sig, _frame):
        logger.debug(f"Received signal {sig}, shutting down")
        sys.exit(1)

    signal.signal(signal.SIGTERM, handler)


# ──────────────────────────────────────────────────────────────────────────────
# Main entry point
# ──────────────────────────────────────────────────────────────────────────────
def cli() -> None:
    _setup_signal_handlers()
    app()


if __name__ == "__main__":
    cli()
