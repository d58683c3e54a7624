"""Project class - applies the git adapter to every declared dependency."""

from __future__ import annotations

import logging
from pathlib import Path

from gitpin.errors import InvalidSpecError
from gitpin.manifest import LOCK_FILE, MANIFEST_FILE, Manifest, load_lock, save_lock
from gitpin.models.lock import LockEntry, canonical_pin_options, to_lock_entry
from gitpin.models.spec import SourceSpec
from gitpin.models.state import DriftResult
from gitpin.sources.git import GitSCM

logger = logging.getLogger(__name__)


class Project:
    """A directory holding a gitpin manifest and its lock file."""

    def __init__(self, root: str | Path, scm: GitSCM | None = None) -> None:
        self.root = Path(root)
        self.scm = scm or GitSCM()
        self.manifest_path = self.root / MANIFEST_FILE
        self.lock_path = self.root / LOCK_FILE

        self._manifest: Manifest | None = None

    @property
    def manifest(self) -> Manifest:
        if self._manifest is None:
            self._manifest = Manifest.from_yaml(self.manifest_path)
        return self._manifest

    @property
    def names(self) -> list[str]:
        return list(self.manifest.deps)

    def spec(self, name: str) -> SourceSpec:
        spec = self.scm.accepts_options(self.manifest.options(name, self.root))
        if spec is None:
            raise InvalidSpecError(f"Dependency {name} is not a git dependency")
        return spec

    def lock(self, name: str) -> LockEntry | None:
        return to_lock_entry(load_lock(self.lock_path).get(name))

    def status(self) -> dict[str, DriftResult]:
        """Classify every dependency against its lock entry.

        Returns:
            Dict of dependency name -> drift result
        """
        locks = load_lock(self.lock_path)
        return {name: self.scm.lock_status(self.spec(name), locks.get(name)) for name in self.names}

    def get(self, name: str) -> LockEntry:
        """Bring a dependency to its locked revision, cloning it if needed."""
        spec = self.spec(name)
        lock = self.lock(name)
        if lock is not None and (
            lock.repository != spec.repository or lock.options != canonical_pin_options(spec)
        ):
            logger.info(f"Lock for {name} no longer matches its declaration, ignoring it")
            lock = None
        if self.scm.checked_out(spec):
            entry = self.scm.update(spec, lock)
        else:
            entry = self.scm.checkout(spec, lock)
        self._write(name, entry)
        return entry

    def update(self, name: str) -> LockEntry:
        """Move a dependency to the newest revision its pin allows."""
        spec = self.spec(name)
        if self.scm.checked_out(spec):
            entry = self.scm.update(spec)
        else:
            entry = self.scm.checkout(spec)
        self._write(name, entry)
        return entry

    def _write(self, name: str, entry: LockEntry) -> None:
        locks = load_lock(self.lock_path)
        locks[name] = entry.to_list()
        save_lock(self.lock_path, locks)
        logger.info(f"Locked {name} at {self.scm.format_lock(entry)}")
