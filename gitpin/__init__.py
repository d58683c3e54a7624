"""gitpin - Fetch git dependencies and pin them to exact revisions."""

from gitpin.capabilities import Capabilities
from gitpin.errors import CommandError, GitNotFoundError, GitPinError, InvalidSpecError
from gitpin.models import DriftResult, GitSettings, LockEntry, RepoState, SourceSpec
from gitpin.project import Project
from gitpin.sources.git import GitSCM

__version__ = "0.1.0"
__all__ = [
    "GitSCM",
    "Project",
    "Capabilities",
    "GitSettings",
    "SourceSpec",
    "LockEntry",
    "RepoState",
    "DriftResult",
    "GitPinError",
    "GitNotFoundError",
    "CommandError",
    "InvalidSpecError",
]
