"""Read-only view of a git checkout.

Only the three reads needed to draft a release are exposed: the tag names,
the first-parent commit subjects since a reference, and whether tracked
files differ from HEAD. Each returns a Result; nothing here raises for a
failed git invocation.

Usage:
    repo = Repository(Path("/path/to/desktop"))

    match repo.log_subjects("release-1.2.0"):
        case Ok(subjects):
            print(f"{len(subjects)} lines")
        case Err(e):
            print(f"git {e.command}: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from draftrel.core.result import Err, Ok, Result
from draftrel.platform.process import ProcessError
from draftrel.platform.process import run as run_process

__all__ = [
    "GitError",
    "Repository",
]

_TIMEOUT_SECONDS = 30.0

# Never block on a credential prompt or page the output.
_GIT_ENV = {"GIT_TERMINAL_PROMPT": "0", "GIT_PAGER": "cat"}


@dataclass(frozen=True, slots=True)
class GitError:
    """A git subcommand that failed.

    Attributes:
        command: Subcommand name (`tag`, `log`, `diff-index`)
        message: git's stderr, or a fallback when it printed nothing
        returncode: git's exit status
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """True for a checkout root (`.git` directory, or `.git` file for worktrees)."""
        return (self.path / ".git").exists()

    def tags(self) -> Result[tuple[str, ...], GitError]:
        """Every tag name, in the order `git tag` lists them."""
        match self._git("tag"):
            case Err(e):
                return Err(_git_error("tag", e))
            case Ok(stdout):
                names = (line.strip() for line in stdout.splitlines())
                return Ok(tuple(name for name in names if name))

    def log_subjects(self, since_ref: str) -> Result[list[str], GitError]:
        """Subjects of first-parent commits in `since_ref..HEAD`, newest first.

        The raw output is split on newlines without filtering, so an empty
        range comes back as `[""]`.
        """
        match self._git("log", f"{since_ref}..HEAD", "--first-parent", "--format=%s", "--"):
            case Err(e):
                return Err(_git_error("log", e))
            case Ok(stdout):
                return Ok(stdout.split("\n"))

    def has_uncommitted_changes(self) -> Result[bool, GitError]:
        """Whether tracked files differ from HEAD. Untracked files are ignored.

        `git diff-index --quiet` exits 1 without output when there are changes;
        any other failure is an error.
        """
        match self._git("diff-index", "--quiet", "HEAD", "--"):
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode == 1 and not e.stderr.strip():
                return Ok(True)
            case Err(e):
                return Err(_git_error("diff-index", e))

    def _git(self, *args: str) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env_overrides=_GIT_ENV,
            timeout=_TIMEOUT_SECONDS,
        )


def _git_error(command: str, e: ProcessError) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or str(e),
        returncode=e.returncode,
    )
