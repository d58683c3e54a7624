"""Lock entries and the canonical pin options stored in them."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from gitpin.errors import ManifestError
from gitpin.models.spec import PIN_PRECEDENCE, SourceSpec

LOCK_KIND = "git"

PinOption = tuple[str, str | bool]


class LockEntry(BaseModel):
    """Exact revision a git dependency is pinned to.

    Persisted by the outer lock store as ``["git", repository, revision, options]``.
    """

    kind: Literal["git"] = LOCK_KIND
    repository: str = Field(..., min_length=1)
    revision: str = Field(..., pattern=r"^(?:[0-9a-f]{40}|[0-9a-f]{64})$")
    options: list[PinOption] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_list(self) -> list[Any]:
        """Convert to the persisted list form."""
        return [self.kind, self.repository, self.revision, [list(o) for o in self.options]]

    @classmethod
    def from_list(cls, data: Sequence[Any]) -> "LockEntry":
        """Build a lock entry from its persisted list form.

        Raises:
            ManifestError: If the entry is malformed
        """
        try:
            kind, repository, revision, *rest = data
            options = rest[0] if rest else []
            return cls(
                kind=kind,
                repository=repository,
                revision=revision,
                options=[tuple(option) for option in options],
            )
        except (ValueError, TypeError, ValidationError) as e:
            raise ManifestError(f"Invalid git lock entry {list(data)!r}: {e}") from e


def to_lock_entry(value: Any) -> LockEntry | None:
    """Return the git lock entry held by value, or None for a foreign lock."""
    if isinstance(value, LockEntry):
        return value
    if isinstance(value, (list, tuple)) and value and value[0] == LOCK_KIND:
        return LockEntry.from_list(value)
    return None


def canonical_pin_options(spec: SourceSpec) -> list[PinOption]:
    """Lock options for a spec: its pin, then the submodules marker."""
    options: list[PinOption] = []
    if spec.pin is not None:
        options.append((spec.pin.kind, spec.pin.name))
    if spec.submodules:
        options.append(("submodules", True))
    return options


def specs_equal(a: SourceSpec, b: SourceSpec) -> bool:
    """Check if two specs declare the same dependency.

    The destination and any locked revision are not compared.
    """
    return a.repository == b.repository and canonical_pin_options(a) == canonical_pin_options(b)


def lock_pin(entry: LockEntry) -> PinOption | None:
    """Get the pin recorded in a lock entry, by branch, ref, tag precedence."""
    recorded = dict(entry.options)
    for kind in PIN_PRECEDENCE:
        if kind in recorded:
            return kind, recorded[kind]
    return None


def format_lock(value: Any) -> str | None:
    """Short human readable form of a lock, e.g. ``abcdef1 (tag: v1.0)``."""
    entry = to_lock_entry(value)
    if entry is None:
        return None
    short = entry.revision[:7]
    pin = lock_pin(entry)
    if pin is None:
        return short
    kind, name = pin
    if kind == "ref":
        return f"{short} (ref)"
    return f"{short} ({kind}: {name})"
