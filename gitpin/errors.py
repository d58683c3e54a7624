"""Exceptions raised by gitpin."""

from __future__ import annotations

import shlex


class GitPinError(Exception):
    """Base class for every error gitpin reports to its caller."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message


class GitNotFoundError(GitPinError):
    """The git executable could not be found on the search path."""

    def __init__(self, executable: str = "git") -> None:
        super().__init__(
            f"Error fetching/updating Git repository: the `{executable}` executable "
            "is not available in your PATH. Install it or disable dependency checking.",
            hint="Install git or set GITPIN_GIT to its location",
        )
        self.executable = executable


class CommandError(GitPinError):
    """A git subprocess exited with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str | None = None) -> None:
        super().__init__(f"Command `{shlex.join(args)}` failed", hint=stderr or None)
        self.args_list = list(args)
        self.returncode = returncode


class InvalidSpecError(GitPinError, ValueError):
    """A dependency declaration could not be turned into a source spec."""


class ManifestError(GitPinError):
    """The manifest or lock file could not be read."""
