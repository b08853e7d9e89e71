"""Git metadata attached to uploaded releases."""

from __future__ import annotations

import subprocess
from pathlib import Path

from pydantic import BaseModel, Field

from dnp_audit.utils.errors import DnpAuditError
from dnp_audit.utils.logging import get_logger

logger = get_logger("release.git")


class GitHead(BaseModel):
    """The checked out commit of a package repository."""

    model_config = {"frozen": True}

    commit: str = Field(description="Full commit hash")
    branch: str = Field(description="Branch name, HEAD when detached")


def _git(args: list[str], cwd: Path | str | None) -> str:
    completed = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout.strip()


def get_git_head(cwd: Path | str | None = None) -> GitHead:
    """Read the current commit and branch.

    Raises:
        DnpAuditError: If git metadata is not available
    """
    try:
        return GitHead(
            commit=_git(["rev-parse", "HEAD"], cwd),
            branch=_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd),
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise DnpAuditError(f"Git data not available: {e}", code="GIT_ERROR")


def get_git_head_if_available(require_git_data: bool = False, cwd: Path | str | None = None) -> GitHead | None:
    """Read git metadata, returning None when missing unless it is required."""
    try:
        return get_git_head(cwd)
    except DnpAuditError as e:
        if require_git_data:
            raise
        logger.debug(f"Skipping git metadata: {e.message}")
        return None
