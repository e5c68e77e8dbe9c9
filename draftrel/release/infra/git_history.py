"""Version-control reads needed to draft a release, backed by git."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from draftrel.core.logging import get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.git.repository import GitError, Repository
from draftrel.release.errors import ReleaseError

logger = get_logger(__name__)


class GitHistory:
    """Tags, commit subjects and working-tree state of one repository."""

    def __init__(self, repo_root: Path) -> None:
        self._repo = Repository(repo_root)

    def ensure_clean(self) -> Result[None, ReleaseError]:
        """Fail with uncommitted_changes if tracked files differ from HEAD."""
        dirty = self._repo.has_uncommitted_changes()
        if isinstance(dirty, Err):
            return Err(_git_failed(dirty.error))
        if dirty.value:
            return Err(
                ReleaseError(
                    kind="uncommitted_changes",
                    message="there are uncommitted changes in the working directory. Aborting...",
                    hint="Commit or stash them, then re-run.",
                )
            )
        return Ok(None)

    def list_tags(self) -> Result[tuple[str, ...], ReleaseError]:
        tags = self._repo.tags()
        if isinstance(tags, Err):
            return Err(_git_failed(tags.error))
        logger.debug("tags_listed", count=len(tags.value))
        return Ok(tags.value)

    def lines_since(self, reference_tag: str) -> Result[Iterator[str], ReleaseError]:
        """Commit subjects since the reference tag, newest first.

        The history is read once; the returned iterator can be consumed once.
        An empty range yields only blank lines.
        """
        lines = self._repo.log_subjects(reference_tag)
        if isinstance(lines, Err):
            return Err(_git_failed(lines.error, hint=f"Does the tag '{reference_tag}' exist locally?"))
        logger.debug("log_lines_read", reference=reference_tag, count=len(lines.value))
        return Ok(iter(lines.value))


def _git_failed(error: GitError, *, hint: str | None = None) -> ReleaseError:
    return ReleaseError(
        kind="git_failed",
        message=f"git {error.command} failed: {error.message}",
        hint=hint or "Run draft-release from inside the repository checkout.",
    )
