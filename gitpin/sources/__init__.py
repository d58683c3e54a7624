"""Source control adapters for fetching dependencies."""

from gitpin.sources.base import SCM
from gitpin.sources.git import GitSCM

__all__ = ["SCM", "GitSCM"]
