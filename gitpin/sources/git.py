"""Git source control adapter."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitpin.capabilities import Capabilities, default_capabilities
from gitpin.errors import CommandError, InvalidSpecError
from gitpin.models.config import GitSettings
from gitpin.models.lock import (
    LOCK_KIND,
    LockEntry,
    canonical_pin_options,
    format_lock,
    specs_equal,
    to_lock_entry,
)
from gitpin.models.spec import PIN_PRECEDENCE, PIN_TYPES, Pin, SourceSpec
from gitpin.models.state import DriftResult
from gitpin.sources.base import SCM
from gitpin.sources.repo import GIT_DIR_ARGS, is_checked_out, read_state, set_origin

logger = logging.getLogger(__name__)


def normalize_options(
    raw: Mapping[str, Any], settings: GitSettings | None = None
) -> dict[str, Any] | None:
    """Rewrite the github shorthand into a git URL.

    Returns a new dict, or None if the options do not describe a git
    dependency.
    """
    settings = settings or GitSettings()
    if raw.get("github"):
        opts = {k: v for k, v in raw.items() if k != "github"}
        opts["git"] = settings.github_url.format(raw["github"])
        return opts
    if raw.get("git"):
        return dict(raw)
    return None


def pin_from_options(raw: Mapping[str, Any], strict: bool = False) -> Pin | None:
    """Pick the pin of a declaration: branch, then ref, then tag.

    Raises:
        InvalidSpecError: If strict and more than one pin kind is declared
    """
    declared = [kind for kind in PIN_PRECEDENCE if raw.get(kind)]
    if not declared:
        return None
    if len(declared) > 1:
        if strict:
            raise InvalidSpecError(
                f"Only one of branch, ref and tag may be given, got {', '.join(declared)}"
            )
        logger.warning(f"Several pins declared ({', '.join(declared)}), using {declared[0]}")
    kind = declared[0]
    try:
        return PIN_TYPES[kind](name=str(raw[kind]))
    except ValidationError as e:
        raise InvalidSpecError(f"Invalid {kind} {raw[kind]!r}: {e}") from e


class GitSCM(SCM):
    """Adapter for dependencies fetched from git repositories.

    Working copies are cloned without a checkout and then pointed at the
    revision from the lock entry, or at the declared pin when there is no
    lock yet.
    """

    kind = LOCK_KIND

    def __init__(self, capabilities: Capabilities | None = None) -> None:
        self.capabilities = capabilities or default_capabilities()
        self.runner = self.capabilities.runner
        self.settings = self.runner.settings

    def format(self, spec: SourceSpec) -> str:
        return spec.repository

    def format_lock(self, lock: Any) -> str | None:
        return format_lock(lock)

    def accepts_options(self, raw: Mapping[str, Any]) -> SourceSpec | None:
        opts = normalize_options(raw, self.settings)
        if opts is None:
            return None
        if not opts.get("dest"):
            raise InvalidSpecError(f"Git dependency {opts['git']} has no destination")
        pin = pin_from_options(opts, strict=self.settings.reject_multiple_pins)
        try:
            return SourceSpec(
                repository=opts["git"],
                pin=pin,
                submodules=opts.get("submodules", False),
                dest=Path(opts["dest"]),
            )
        except ValidationError as e:
            raise InvalidSpecError(f"Invalid git dependency {opts['git']}: {e}") from e

    def checked_out(self, spec: SourceSpec) -> bool:
        return is_checked_out(spec.dest)

    def equal(self, a: SourceSpec, b: SourceSpec) -> bool:
        return specs_equal(a, b)

    def lock_status(self, spec: SourceSpec, lock: Any) -> DriftResult:
        self.capabilities.require()

        if lock is None:
            return DriftResult.MISMATCH
        entry = to_lock_entry(lock)
        if entry is None:
            return DriftResult.OUTDATED

        state = read_state(spec.dest, self.runner)
        if entry.repository != spec.repository:
            return DriftResult.OUTDATED
        if entry.options != canonical_pin_options(spec):
            return DriftResult.OUTDATED
        if entry.revision != state.revision:
            return DriftResult.MISMATCH
        if entry.repository != state.origin:
            return DriftResult.OUTDATED
        return DriftResult.OK

    def checkout(self, spec: SourceSpec, lock: Any = None) -> LockEntry:
        self.capabilities.require()

        dest = Path(spec.dest)
        if dest.exists():
            logger.debug(f"Removing existing {dest}")
            shutil.rmtree(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Cloning {spec.repository} into {dest}")
        self.runner.run(
            ["clone", "--no-checkout", "--progress", "--", spec.repository, str(dest)]
        )
        return self._resolve_and_checkout(spec, lock)

    def update(self, spec: SourceSpec, lock: Any = None) -> LockEntry:
        self.capabilities.require()

        dest = Path(spec.dest)
        set_origin(dest, spec.repository, self.runner)

        cmd = [*GIT_DIR_ARGS, "fetch", "--force"]
        if self.capabilities.supports_progress():
            cmd.append("--progress")
        if spec.tag:
            cmd.append("--tags")

        logger.info(f"Fetching {spec.repository} in {dest}")
        self.runner.run(cmd, cwd=dest)
        return self._resolve_and_checkout(spec, lock)

    def checkout_target(self, spec: SourceSpec, lock: Any = None) -> str:
        """Get the revision a working copy should be checked out at."""
        entry = to_lock_entry(lock) if lock is not None else None
        if entry is not None:
            return entry.revision
        if spec.pin is not None:
            return spec.pin.target
        return f"origin/{self.settings.default_branch}"

    def _resolve_and_checkout(self, spec: SourceSpec, lock: Any) -> LockEntry:
        dest = Path(spec.dest)
        target = self.checkout_target(spec, lock)

        logger.info(f"Checking out {target} in {dest}")
        self.runner.run([*GIT_DIR_ARGS, "checkout", "--quiet", target], cwd=dest)

        if spec.submodules:
            self.runner.run(
                [*GIT_DIR_ARGS, "submodule", "update", "--init", "--recursive"], cwd=dest
            )

        state = read_state(dest, self.runner)
        if state.revision is None:
            raise CommandError(
                [self.runner.executable, *GIT_DIR_ARGS, "rev-parse", "--verify", "--quiet", "HEAD"],
                1,
            )
        return LockEntry(
            repository=spec.repository,
            revision=state.revision,
            options=canonical_pin_options(spec),
        )
