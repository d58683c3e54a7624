"""Discovery of the git executable and its version."""

from __future__ import annotations

import logging
import re
import shutil

from gitpin.errors import GitNotFoundError
from gitpin.models.config import GitSettings
from gitpin.runner import GitRunner

logger = logging.getLogger(__name__)

PROGRESS_MIN_VERSION = (1, 7, 1)

_VERSION_RE = re.compile(r"git version (\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse ``git --version`` output into a (major, minor, patch) triple.

    Missing components default to 0. Unrecognised output yields (0, 0, 0).
    """
    match = _VERSION_RE.search(text)
    if match is None:
        logger.warning(f"Could not parse git version from {text!r}")
        return (0, 0, 0)
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return (major, minor, patch)


class Capabilities:
    """Lazily detected facts about the host's git installation.

    Each check runs at most once per instance. Detection is a pure function of
    the host, so concurrent first calls simply compute the same value.
    """

    def __init__(self, runner: GitRunner | None = None) -> None:
        self.runner = runner or GitRunner()
        self._available: bool | None = None
        self._version: tuple[int, int, int] | None = None

    def available(self) -> bool:
        """Check if the git executable is on the search path."""
        if self._available is None:
            self._available = shutil.which(self.runner.executable) is not None
            logger.debug(f"git available: {self._available}")
        return self._available

    def require(self) -> None:
        """Raise GitNotFoundError unless git is available."""
        if not self.available():
            raise GitNotFoundError(self.runner.executable)

    def version(self) -> tuple[int, int, int]:
        """Get the installed git version."""
        if self._version is None:
            self.require()
            self._version = parse_version(self.runner.output(["--version"]) or "")
            logger.debug(f"git version: {self._version}")
        return self._version

    def supports_progress(self) -> bool:
        """Check if ``git fetch`` accepts ``--progress``."""
        return self.version() >= PROGRESS_MIN_VERSION


_default: Capabilities | None = None


def default_capabilities() -> Capabilities:
    """Get the process-wide capabilities for the default settings."""
    global _default
    if _default is None:
        _default = Capabilities(GitRunner(GitSettings.from_env()))
    return _default
