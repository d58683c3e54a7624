"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from gitpin.capabilities import Capabilities
from gitpin.errors import CommandError
from gitpin.models.config import GitSettings
from gitpin.runner import GitRunner
from gitpin.sources.git import GitSCM

REV_A = "a" * 40
REV_B = "b" * 40

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


class FakeRunner(GitRunner):
    """Records git invocations instead of running them."""

    def __init__(self, settings: GitSettings | None = None) -> None:
        super().__init__(settings)
        self.calls: list[tuple[list[str], Path | None]] = []
        self.outputs: dict[str, str | None] = {}
        self.failing: set[str] = set()

    @staticmethod
    def subcommand(args: list[str]) -> str:
        return next(arg for arg in args if not arg.startswith("--git-dir"))

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]

    def run(self, args: list[str], cwd: Path | None = None) -> None:
        self.calls.append((list(args), cwd))
        sub = self.subcommand(args)
        if sub in self.failing:
            raise CommandError([self.executable, *args], 128)
        if sub == "clone":
            git_dir = Path(args[-1]) / ".git"
            git_dir.mkdir(parents=True)
            (git_dir / "HEAD").write_text("ref: refs/heads/master\n")

    def output(self, args: list[str], cwd: Path | None = None) -> str | None:
        self.calls.append((list(args), cwd))
        return self.outputs.get(self.subcommand(args))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def capabilities(fake_runner: FakeRunner) -> Capabilities:
    """Capabilities that report a modern git without probing the host."""
    caps = Capabilities(fake_runner)
    caps._available = True
    caps._version = (2, 40, 0)
    return caps


@pytest.fixture
def scm(capabilities: Capabilities) -> GitSCM:
    return GitSCM(capabilities)


@pytest.fixture
def working_copy(temp_dir: Path) -> Path:
    """A destination that looks checked out to the inspector."""
    dest = temp_dir / "deps" / "demo"
    (dest / ".git").mkdir(parents=True)
    (dest / ".git" / "HEAD").write_text("ref: refs/heads/master\n")
    return dest


def git(*args: str, cwd: Path) -> str:
    """Run git in a test repository and return its stdout."""
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def commit(repo: Path, name: str, content: str) -> str:
    """Write a file, commit it and return the new HEAD."""
    (repo / name).write_text(content)
    git("add", name, cwd=repo)
    git("commit", "--quiet", "-m", f"Add {name}", cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture
def git_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's configuration."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Author")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "author@example.com")
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def origin(temp_dir: Path, git_env: None) -> dict[str, str]:
    """Create an upstream repository with a tag and a feature branch.

    Returns:
        Dict with the repository URL and the commits it contains
    """
    repo = temp_dir / "origin"
    repo.mkdir()
    git("init", "--quiet", cwd=repo)
    git("symbolic-ref", "HEAD", "refs/heads/master", cwd=repo)

    first = commit(repo, "README.md", "first\n")
    git("tag", "v1.0", cwd=repo)

    git("checkout", "--quiet", "-b", "feature", cwd=repo)
    feature = commit(repo, "feature.txt", "feature\n")
    git("checkout", "--quiet", "master", cwd=repo)

    second = commit(repo, "CHANGELOG.md", "second\n")

    return {
        "path": str(repo),
        "url": repo.as_uri(),
        "first": first,
        "second": second,
        "feature": feature,
    }


@pytest.fixture
def real_scm(git_env: None) -> GitSCM:
    """An adapter that runs the installed git."""
    return GitSCM(Capabilities(GitRunner(GitSettings())))


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests requiring the git executable")
