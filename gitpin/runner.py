"""Run git as a subprocess with discrete argument vectors."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from gitpin.errors import CommandError
from gitpin.models.config import GitSettings

logger = logging.getLogger(__name__)


class GitRunner:
    """Invokes the git executable.

    Commands never go through a shell, so URLs and ref names are passed
    to git verbatim.
    """

    def __init__(self, settings: GitSettings | None = None) -> None:
        self.settings = settings or GitSettings()

    @property
    def executable(self) -> str:
        return self.settings.executable

    def run(self, args: list[str], cwd: Path | None = None) -> None:
        """Run a command, letting git write progress to the terminal.

        Raises:
            CommandError: If git exits with a non-zero status
        """
        cmd = [self.executable, *args]
        logger.debug(f"Running {shlex.join(cmd)} in {cwd or Path.cwd()}")
        result = subprocess.run(cmd, cwd=cwd)
        if result.returncode != 0:
            raise CommandError(cmd, result.returncode)

    def output(self, args: list[str], cwd: Path | None = None) -> str | None:
        """Run a query command and return its trimmed stdout.

        Returns None when git exits non-zero or prints nothing, which is how
        unset config keys and unresolvable revisions are reported.
        """
        cmd = [self.executable, *args]
        logger.debug(f"Querying {shlex.join(cmd)} in {cwd or Path.cwd()}")
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None
