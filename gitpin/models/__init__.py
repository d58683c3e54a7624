"""Data models for gitpin."""

from gitpin.models.config import GitSettings
from gitpin.models.lock import (
    LockEntry,
    canonical_pin_options,
    format_lock,
    specs_equal,
)
from gitpin.models.spec import BranchPin, Pin, RefPin, SourceSpec, TagPin
from gitpin.models.state import DriftResult, RepoState

__all__ = [
    # Declarations
    "SourceSpec",
    "Pin",
    "BranchPin",
    "RefPin",
    "TagPin",
    # Locks
    "LockEntry",
    "canonical_pin_options",
    "specs_equal",
    "format_lock",
    # Working copy state
    "RepoState",
    "DriftResult",
    # Settings
    "GitSettings",
]
