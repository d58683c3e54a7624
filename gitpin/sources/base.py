"""Base source control adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitpin.models.lock import LockEntry
    from gitpin.models.spec import SourceSpec
    from gitpin.models.state import DriftResult


class SCM(ABC):
    """Abstract base class for source control adapters.

    An adapter claims the declarations it understands, materializes them
    into working copies and tells the caller when a working copy no longer
    matches its lock entry.
    """

    kind: str

    @property
    def fetchable(self) -> bool:
        """Check if dependencies from this adapter are fetched over the network."""
        return True

    @abstractmethod
    def format(self, spec: SourceSpec) -> str:
        """Short description of where a dependency comes from."""
        ...

    @abstractmethod
    def format_lock(self, lock: Any) -> str | None:
        """Short description of a lock entry, or None if it is not ours."""
        ...

    @abstractmethod
    def accepts_options(self, raw: Mapping[str, Any]) -> SourceSpec | None:
        """Build a spec from raw options, or None if they belong to another adapter."""
        ...

    @abstractmethod
    def lock_status(self, spec: SourceSpec, lock: Any) -> DriftResult:
        """Classify the working copy against its lock and declaration."""
        ...

    @abstractmethod
    def equal(self, a: SourceSpec, b: SourceSpec) -> bool:
        """Check if two specs declare the same dependency."""
        ...

    @abstractmethod
    def checkout(self, spec: SourceSpec, lock: Any = None) -> LockEntry:
        """Materialize a fresh working copy and return its lock entry."""
        ...

    @abstractmethod
    def update(self, spec: SourceSpec, lock: Any = None) -> LockEntry:
        """Refresh an existing working copy and return its lock entry."""
        ...

    def checked_out(self, spec: SourceSpec) -> bool:
        """Check if the spec's destination holds a working copy."""
        return Path(spec.dest).exists()
