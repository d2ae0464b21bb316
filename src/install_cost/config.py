# src/install_cost/config.py
"""
install_cost.config
===================

Runtime settings, read from the environment (and a ``.env`` file in the
working directory, via *python-dotenv*).

=====================  ==========================================  =========
Variable               Meaning                                     Default
=====================  ==========================================  =========
``INSTALL_COST_NPM``   package-manager executable                  ``npm``
``INSTALL_COST_TMPDIR`` parent directory for sandboxes             system tmp
``INSTALL_COST_KEEP``  keep sandboxes after the run (1/true/yes)   off
=====================  ==========================================  =========

Command-line options always win over the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# ── file names inside the project and inside every sandbox ───────────────
MANIFEST_FILE = "package.json"
LOCK_FILE = "npm-shrinkwrap.json"
CONFIG_FILE = ".npmrc"
CACHE_DIR = ".cache"
MODULES_DIR = "node_modules"

SANDBOX_PREFIX = "install-cost-"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    npm_command: str = "npm"
    sandbox_root: Optional[Path] = None
    keep_sandboxes: bool = False

    def override(
        self,
        *,
        npm_command: Optional[str] = None,
        keep_sandboxes: Optional[bool] = None,
    ) -> "Settings":
        """Return a copy with the non-``None`` CLI values applied."""
        changes = {}
        if npm_command:
            changes["npm_command"] = npm_command
        if keep_sandboxes is not None:
            changes["keep_sandboxes"] = keep_sandboxes
        return replace(self, **changes)


def load_settings(
    env: Mapping[str, str] | None = None,
    *,
    dotenv: bool = True,
) -> Settings:
    """
    Build :class:`Settings` from *env* (defaults to ``os.environ``).

    When *dotenv* is true a ``.env`` file in the working directory is loaded
    first; it never overrides variables that are already set.
    """
    if dotenv:
        load_dotenv(Path.cwd() / ".env")
    source = os.environ if env is None else env

    tmpdir = source.get("INSTALL_COST_TMPDIR")
    return Settings(
        npm_command=source.get("INSTALL_COST_NPM") or "npm",
        sandbox_root=Path(os.path.expanduser(tmpdir)) if tmpdir else None,
        keep_sandboxes=source.get("INSTALL_COST_KEEP", "").strip().lower() in _TRUTHY,
    )
