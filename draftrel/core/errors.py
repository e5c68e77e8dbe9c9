"""Process exit codes for draft-release.

Scripts wrapping the tool branch on these values; keep them stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit status of a draft-release command.

    - 0: a draft (or the latest release) was printed
    - 1: bad invocation: unknown channel, invalid draft-release.toml
    - 2: the repository is not in a draftable state: dirty tree, git failure,
      no usable release tags, unparsable history in strict mode
    - 5: the persisted changelog is missing or unreadable
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
