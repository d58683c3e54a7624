"""Read and adjust the state of an on-disk working copy."""

from __future__ import annotations

from pathlib import Path

from gitpin.models.state import RepoState
from gitpin.runner import GitRunner

HEAD_MARKER = Path(".git") / "HEAD"

# Commands run with cwd set to the working copy; naming the git dir keeps git
# from walking up into an enclosing repository.
GIT_DIR_ARGS = ["--git-dir=.git"]


def is_checked_out(dest: Path) -> bool:
    """Check if dest holds a git repository."""
    return (Path(dest) / HEAD_MARKER).is_file()


def read_state(dest: Path, runner: GitRunner) -> RepoState:
    """Read the origin URL and HEAD revision of the working copy at dest."""
    if not is_checked_out(dest):
        return RepoState()
    origin = runner.output([*GIT_DIR_ARGS, "config", "remote.origin.url"], cwd=dest)
    revision = runner.output(
        [*GIT_DIR_ARGS, "rev-parse", "--verify", "--quiet", "HEAD"], cwd=dest
    )
    return RepoState(origin=origin, revision=revision)


def set_origin(dest: Path, url: str, runner: GitRunner) -> None:
    """Point the working copy's origin remote at url."""
    runner.run([*GIT_DIR_ARGS, "config", "remote.origin.url", url], cwd=dest)
