# src/install_cost/manifest.py
"""
Read the project's ``package.json`` and ``npm-shrinkwrap.json``.

* :func:`load_dependencies` merges ``dependencies``, ``devDependencies`` and
  ``optionalDependencies`` (later sections win on duplicate names) and
  counts what the ``--production`` / ``--no-optional`` switches left out.
* :func:`load_lock_entries` returns the shrinkwrap's per-dependency
  descriptors, or an empty mapping when there is nothing usable.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from install_cost.config import LOCK_FILE, MANIFEST_FILE
from install_cost.errors import ConfigurationError
from install_cost.utils.formatting import format_plural

logger = logging.getLogger(__name__)


class PackageManifest(BaseModel):
    """The three dependency sections of ``package.json``; everything else is ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    dependencies: Dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    optional_dependencies: Dict[str, str] = Field(default_factory=dict, alias="optionalDependencies")

    @field_validator("dependencies", "dev_dependencies", "optional_dependencies", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


@dataclass
class DependencySelection:
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_skipped: int = 0
    optional_skipped: int = 0

    def __len__(self) -> int:
        return len(self.dependencies)

    def start_message(self) -> str:
        """``Analyzing N dependencies (skipping …)...``"""
        message = f"Analyzing {len(self.dependencies)} dependencies"
        skipped = []
        if self.dev_skipped:
            skipped.append(format_plural(self.dev_skipped, "devDependency", "devDependencies"))
        if self.optional_skipped:
            skipped.append(
                format_plural(self.optional_skipped, "optionalDependency", "optionalDependencies")
            )
        if skipped:
            message += f" (skipping {' and '.join(skipped)})"
        return message + "..."


def read_manifest(project_dir: Path) -> PackageManifest:
    path = project_dir / MANIFEST_FILE
    try:
        return PackageManifest.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        raise ConfigurationError(f"No {MANIFEST_FILE} in the current directory.") from exc


def load_dependencies(
    project_dir: Path,
    *,
    production: bool = False,
    optional: bool = True,
) -> DependencySelection:
    manifest = read_manifest(project_dir)
    selection = DependencySelection(dependencies=dict(manifest.dependencies))

    if production:
        selection.dev_skipped = len(manifest.dev_dependencies)
    else:
        selection.dependencies.update(manifest.dev_dependencies)

    if optional:
        selection.dependencies.update(manifest.optional_dependencies)
    else:
        selection.optional_skipped = len(manifest.optional_dependencies)

    return selection


def load_lock_entries(project_dir: Path, *, enabled: bool = True) -> Dict[str, Any]:
    """Per-dependency descriptors from ``npm-shrinkwrap.json``; ``{}`` if unusable."""
    path = project_dir / LOCK_FILE
    if not enabled or not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return {}

    entries = data.get("dependencies") if isinstance(data, dict) else None
    if not isinstance(entries, dict):
        return {}
    logger.debug("Loaded %d lock entries from %s", len(entries), path)
    return entries


__all__ = [
    "PackageManifest",
    "DependencySelection",
    "read_manifest",
    "load_dependencies",
    "load_lock_entries",
]
