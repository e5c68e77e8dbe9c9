"""Error types for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "no_releases_found",
    "malformed_tag",
    "unsupported_channel",
    "invalid_previous_version",
    "unparsable_log_line",
    "uncommitted_changes",
    "invalid_channel_argument",
    "git_failed",
    "changelog_store_invalid",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    The message names the offending value (tag, channel token, log line,
    version) so the operator can fix the underlying data and re-run.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
