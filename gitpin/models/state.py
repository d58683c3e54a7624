"""Working copy state and drift classification."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DriftResult(str, Enum):
    """How a working copy relates to its lock entry and declaration."""

    OK = "ok"  # Declaration, lock and working copy agree
    MISMATCH = "mismatch"  # Lock is valid, working copy drifted from it
    OUTDATED = "outdated"  # Declaration changed since the lock was written


class RepoState(BaseModel):
    """Snapshot of a working copy, recomputed on every read."""

    origin: str | None = Field(default=None, description="Configured remote.origin.url")
    revision: str | None = Field(default=None, description="Resolved HEAD commit")

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """Check if nothing could be read from the working copy."""
        return self.origin is None and self.revision is None
