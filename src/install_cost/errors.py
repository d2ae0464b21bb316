# src/install_cost/errors.py
"""
Exception hierarchy for install-cost.

Every stage of the pipeline raises a subclass of :class:`InstallCostError`;
nothing is retried and nothing is recovered locally, so the first error
travels straight up to the CLI which prints it and exits with status 1.
"""
from __future__ import annotations

from typing import Optional, Sequence


class InstallCostError(Exception):
    """Base class for every fatal error raised by install-cost."""


class ConfigurationError(InstallCostError):
    """``package.json`` is missing or cannot be parsed."""


class SandboxError(InstallCostError):
    """A sandbox directory or one of its files could not be created."""


class InstallError(InstallCostError):
    """The package manager could not be spawned or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class MeasurementError(InstallCostError):
    """The installed tree could not be sized after a successful install."""


__all__ = [
    "InstallCostError",
    "ConfigurationError",
    "SandboxError",
    "InstallError",
    "MeasurementError",
]
