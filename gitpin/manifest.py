"""Dependency manifest and lock file stored as YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from gitpin.errors import ManifestError

MANIFEST_FILE = "gitpin.yaml"
LOCK_FILE = "gitpin.lock"


class Manifest(BaseModel):
    """Declared dependencies of a project."""

    deps_dir: str = Field(default="deps", description="Where working copies are placed")
    deps: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def options(self, name: str, root: Path) -> dict[str, Any]:
        """Raw options for a dependency, with its destination filled in."""
        if name not in self.deps:
            raise KeyError(f"Dependency not found: {name}")
        opts = dict(self.deps[name] or {})
        dest = opts.get("dest") or Path(self.deps_dir) / name
        opts["dest"] = root / dest
        return opts

    @classmethod
    def from_yaml(cls, path: Path) -> "Manifest":
        """Load a manifest from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ManifestError(f"Could not read manifest {path}: {e}") from e


def load_lock(path: Path) -> dict[str, list[Any]]:
    """Load the lock file, or an empty mapping if there is none."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ManifestError(f"Could not read lock file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Lock file {path} must contain a mapping")
    return data


def save_lock(path: Path, locks: dict[str, list[Any]]) -> None:
    """Save the lock file with dependencies in name order."""
    ordered = {name: locks[name] for name in sorted(locks)}
    with open(path, "w") as f:
        yaml.safe_dump(ordered, f, default_flow_style=None, sort_keys=False)
