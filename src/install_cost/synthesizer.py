# src/install_cost/synthesizer.py
"""
Write the one-dependency project that npm installs inside a sandbox.

The manifest declares exactly ``{"dependencies": {name: version}}`` so the
install graph is that dependency and its transitive closure.  When the
project's shrinkwrap pins the dependency, its descriptor is written as the
sandbox's ``npm-shrinkwrap.json`` so npm reuses the recorded resolution.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from install_cost.errors import SandboxError
from install_cost.sandbox import Sandbox

logger = logging.getLogger(__name__)


def write_manifest(sandbox: Sandbox, name: str, version: str) -> None:
    # the version specifier is passed through untouched; npm reports bad ones
    content = json.dumps({"dependencies": {name: version}})
    try:
        sandbox.manifest_path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise SandboxError(f"Could not write {sandbox.manifest_path}: {exc}") from exc


def write_lock(sandbox: Sandbox, descriptor: Any) -> None:
    try:
        sandbox.lock_path.write_text(json.dumps(descriptor), encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        raise SandboxError(f"Could not write {sandbox.lock_path}: {exc}") from exc


def synthesize(
    sandbox: Sandbox,
    name: str,
    version: str,
    lock_descriptor: Optional[Any] = None,
) -> None:
    """Write ``package.json`` and, only if *lock_descriptor* is given, the lock file."""
    if lock_descriptor is not None:
        write_lock(sandbox, lock_descriptor)
    write_manifest(sandbox, name, version)
    logger.debug(
        "Synthesized %s@%s in %s%s",
        name,
        version,
        sandbox.root,
        " (pinned)" if lock_descriptor is not None else "",
    )


__all__ = ["synthesize", "write_manifest", "write_lock"]
