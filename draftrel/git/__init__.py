"""Git operations module.

Usage:
    from draftrel.git import Repository

    repo = Repository(Path("/path/to/repo"))
    tags = repo.tags()
"""

from draftrel.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
