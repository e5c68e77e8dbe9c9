"""Cross-layer contracts for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from draftrel.release.domain.changelog import ChangelogEntry
from draftrel.release.domain.channel import Channel
from draftrel.release.domain.semver import Version
from draftrel.release.domain.tags import ReleaseTag


@dataclass(frozen=True, slots=True)
class ReleaseDraft:
    """Outcome of drafting: what to ship next and what changed.

    Rendered by view adapters; nothing in it is persisted.
    """

    channel: Channel
    previous: ReleaseTag
    next_version: Version
    entries: tuple[ChangelogEntry, ...]
    # True when no commits landed since the previous release.
    no_changes: bool = False

    def as_mapping(self) -> dict[str, list[str]]:
        """{next_version: [sorted entry texts]}, the changelog.json fragment."""
        return {str(self.next_version): sorted(e.text for e in self.entries)}
