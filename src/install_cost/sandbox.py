# src/install_cost/sandbox.py
"""
Per-dependency install sandboxes.

Every dependency is installed into its own freshly created temporary
directory holding a private ``.npmrc`` whose ``cache=`` line points at a
sandbox-local ``.cache`` directory, so no install shares a cache or a
configuration with the host or with another sandbox.

Sandboxes are never reused.  A :class:`SandboxRegistry` remembers every
directory it handed out and removes them all when the run ends (unless asked
to keep them for inspection).
"""
from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Type

from install_cost.config import (
    CACHE_DIR,
    CONFIG_FILE,
    LOCK_FILE,
    MANIFEST_FILE,
    MODULES_DIR,
    SANDBOX_PREFIX,
)
from install_cost.errors import SandboxError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sandbox:
    """Paths of one isolated install directory."""

    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE

    @property
    def cache_dir(self) -> Path:
        return self.root / CACHE_DIR

    @property
    def modules_dir(self) -> Path:
        return self.root / MODULES_DIR

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILE

    @property
    def lock_path(self) -> Path:
        return self.root / LOCK_FILE


class SandboxRegistry:
    """
    Allocates sandboxes and tracks them for cleanup.

    Use it as a context manager so the sandboxes are removed whatever way the
    run ends::

        with SandboxRegistry() as registry:
            sandbox = registry.allocate()
    """

    def __init__(self, base_dir: Optional[Path] = None, *, keep: bool = False) -> None:
        self._base_dir = base_dir
        self.keep = keep
        self._paths: List[Path] = []

    @property
    def paths(self) -> List[Path]:
        """Roots of every sandbox allocated so far, in allocation order."""
        return list(self._paths)

    def allocate(self) -> Sandbox:
        """Create a new, empty, uniquely named directory."""
        try:
            if self._base_dir is not None:
                self._base_dir.mkdir(parents=True, exist_ok=True)
            root = Path(tempfile.mkdtemp(prefix=SANDBOX_PREFIX, dir=self._base_dir))
        except OSError as exc:
            raise SandboxError(f"Could not create sandbox directory: {exc}") from exc

        self._paths.append(root)
        logger.debug("Allocated sandbox %s", root)
        return Sandbox(root=root)

    def cleanup(self) -> None:
        """Best-effort removal of every allocated sandbox."""
        if self.keep:
            if self._paths:
                logger.info("Keeping %d sandbox(es) under %s", len(self._paths), self._paths[0].parent)
            return
        while self._paths:
            path = self._paths.pop()
            shutil.rmtree(path, ignore_errors=True)
            logger.debug("Removed sandbox %s", path)

    def __enter__(self) -> "SandboxRegistry":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.cleanup()


def seed_config(sandbox: Sandbox, source_dir: Path) -> None:
    """
    Give *sandbox* its own ``.npmrc``.

    The project's ``.npmrc`` (if *source_dir* has one) is copied verbatim;
    otherwise, or if the copy fails, an empty file is written.  Then a
    ``cache=`` line pointing into the sandbox is appended.
    """
    host_config = source_dir / CONFIG_FILE
    copied = False
    if host_config.is_file():
        try:
            shutil.copyfile(host_config, sandbox.config_path)
            copied = True
        except OSError as exc:
            logger.warning("Could not copy %s, using an empty one: %s", host_config, exc)

    try:
        if not copied:
            sandbox.config_path.write_text("", encoding="utf-8")
        with sandbox.config_path.open("a", encoding="utf-8") as handle:
            handle.write(f"\ncache={sandbox.cache_dir}")
    except OSError as exc:
        raise SandboxError(f"Could not write {sandbox.config_path}: {exc}") from exc

    logger.debug(
        "Seeded %s (%s)", sandbox.config_path, "copied" if copied else "empty"
    )


__all__ = ["Sandbox", "SandboxRegistry", "seed_config"]
