"""Declared dependency models."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

PIN_PRECEDENCE = ("branch", "ref", "tag")

# Values passed to git as positional arguments must not look like options.
NO_OPTION_PATTERN = r"^[^-]"


class BranchPin(BaseModel):
    """Follow the tip of a remote branch."""

    kind: Literal["branch"] = "branch"
    name: str = Field(..., min_length=1, pattern=NO_OPTION_PATTERN)

    model_config = {"frozen": True}

    @property
    def target(self) -> str:
        return f"origin/{self.name}"


class RefPin(BaseModel):
    """Check out an explicit reference, usually a commit."""

    kind: Literal["ref"] = "ref"
    name: str = Field(..., min_length=1, pattern=NO_OPTION_PATTERN)

    model_config = {"frozen": True}

    @property
    def target(self) -> str:
        return self.name


class TagPin(BaseModel):
    """Check out a tag."""

    kind: Literal["tag"] = "tag"
    name: str = Field(..., min_length=1, pattern=NO_OPTION_PATTERN)

    model_config = {"frozen": True}

    @property
    def target(self) -> str:
        return self.name


Pin = Annotated[Union[BranchPin, RefPin, TagPin], Field(discriminator="kind")]

PIN_TYPES: dict[str, type[BranchPin] | type[RefPin] | type[TagPin]] = {
    "branch": BranchPin,
    "ref": RefPin,
    "tag": TagPin,
}


class SourceSpec(BaseModel):
    """A git dependency as declared by the user.

    Only one pin can be active at a time, so a spec is either floating
    (``pin`` is None) or bound to exactly one branch, ref or tag.
    """

    repository: str = Field(..., pattern=NO_OPTION_PATTERN, description="Repository URL")
    pin: Pin | None = None
    submodules: bool = Field(default=False, description="Also check out submodules")
    dest: Path = Field(..., description="Working copy location")

    model_config = {"frozen": True}

    @property
    def branch(self) -> str | None:
        return self.pin.name if isinstance(self.pin, BranchPin) else None

    @property
    def ref(self) -> str | None:
        return self.pin.name if isinstance(self.pin, RefPin) else None

    @property
    def tag(self) -> str | None:
        return self.pin.name if isinstance(self.pin, TagPin) else None
