"""Settings for the git adapter."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

TRUTHY = {"1", "true", "yes", "on"}

ENV_VARS = {
    "executable": "GITPIN_GIT",
    "github_url": "GITPIN_GITHUB_URL",
    "default_branch": "GITPIN_DEFAULT_BRANCH",
    "reject_multiple_pins": "GITPIN_STRICT_PINS",
}


class GitSettings(BaseModel):
    """Git adapter configuration."""

    executable: str = Field(default="git", description="Name or path of the git executable")
    github_url: str = Field(
        default="https://github.com/{}.git",
        description="URL template for the github shorthand, {} is replaced by owner/repo",
    )
    default_branch: str = Field(
        default="master",
        pattern=r"^[^-]",
        description="Branch checked out when a dependency has no pin",
    )
    reject_multiple_pins: bool = Field(
        default=False,
        description="Reject declarations with more than one of branch, ref and tag",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "GitSettings":
        """Build settings from GITPIN_* environment variables."""
        values: dict[str, object] = {}
        for field, var in ENV_VARS.items():
            value = os.environ.get(var)
            if value:
                values[field] = value
        strict = values.get("reject_multiple_pins")
        if strict is not None:
            values["reject_multiple_pins"] = str(strict).strip().lower() in TRUTHY
        return cls.model_validate(values)
