"""End-to-end release drafting.

Order matters: the channel argument is validated before any git access, the
working tree is checked before anything is computed, and nothing is rendered
unless every step succeeded.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol, cast

from draftrel.core.config import Config
from draftrel.core.logging import bind_context, clear_context, get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.release.contracts import ReleaseDraft
from draftrel.release.domain.changelog import (
    FormatRules,
    entries_recorded_since,
    is_no_changes,
    merge_entries,
    to_entries,
)
from draftrel.release.domain.channel import Channel
from draftrel.release.domain.policy import BumpRules, next_version
from draftrel.release.domain.semver import BumpKind, Version
from draftrel.release.domain.tags import ReleaseTag, TagPolicy, latest_release
from draftrel.release.errors import ReleaseError
from draftrel.release.resolve.channel_arg import parse_channel_argument

logger = get_logger(__name__)


class VersionHistory(Protocol):
    def ensure_clean(self) -> Result[None, ReleaseError]: ...

    def list_tags(self) -> Result[tuple[str, ...], ReleaseError]: ...

    def lines_since(self, reference_tag: str) -> Result[Iterator[str], ReleaseError]: ...


class ChangelogStore(Protocol):
    def recorded_releases(self) -> Result[dict[Version, tuple[str, ...]], ReleaseError]: ...


@dataclass(frozen=True, slots=True)
class DraftSettings:
    tags: TagPolicy = field(default_factory=TagPolicy)
    bumps: BumpRules = field(default_factory=BumpRules)
    formatting: FormatRules = field(default_factory=FormatRules)

    @classmethod
    def from_config(cls, config: Config) -> DraftSettings:
        return cls(
            tags=TagPolicy(
                prefix=config.tags.prefix,
                platform_markers=config.tags.platform_markers,
                test_marker=config.tags.test_marker,
                beta_marker=config.tags.beta_marker,
                strict=config.tags.strict,
            ),
            bumps=BumpRules(
                production=cast(BumpKind, config.versions.production_bump),
                beta=cast(BumpKind, config.versions.beta_bump),
                test=cast(BumpKind, config.versions.test_bump),
            ),
            formatting=FormatRules(
                strict=config.changelog.strict,
                official_owner=config.changelog.official_owner,
                ignore_prefixes=config.changelog.ignore_prefixes,
            ),
        )


def resolve_latest(
    channel_arg: str | None,
    *,
    history: VersionHistory,
    settings: DraftSettings,
) -> Result[ReleaseTag, ReleaseError]:
    """Latest shippable release for the channel (read-only, no cleanliness check)."""
    channel = parse_channel_argument(channel_arg)
    if isinstance(channel, Err):
        return channel
    return _latest_for(channel.value, history=history, settings=settings)


def draft_release(
    channel_arg: str | None,
    *,
    history: VersionHistory,
    store: ChangelogStore,
    settings: DraftSettings,
) -> Result[ReleaseDraft, ReleaseError]:
    channel_r = parse_channel_argument(channel_arg)
    if isinstance(channel_r, Err):
        return channel_r
    channel = channel_r.value
    clear_context()
    bind_context(channel=str(channel))

    clean = history.ensure_clean()
    if isinstance(clean, Err):
        return clean

    previous_r = _latest_for(channel, history=history, settings=settings)
    if isinstance(previous_r, Err):
        return previous_r
    previous = previous_r.value

    next_r = next_version(previous.version, channel, settings.bumps)
    if isinstance(next_r, Err):
        return next_r

    lines_r = history.lines_since(previous.name)
    if isinstance(lines_r, Err):
        return lines_r
    lines = tuple(lines_r.value)

    if is_no_changes(lines):
        logger.info("no_changes_since_release", reference=previous.name)
        return Ok(
            ReleaseDraft(
                channel=channel,
                previous=previous,
                next_version=next_r.value,
                entries=(),
                no_changes=True,
            )
        )

    fresh_r = to_entries(lines, settings.formatting)
    if isinstance(fresh_r, Err):
        return fresh_r
    entries = fresh_r.value

    if channel is Channel.PRODUCTION:
        # Betas since the last production release already published notes.
        releases = store.recorded_releases()
        if isinstance(releases, Err):
            return releases
        recorded = entries_recorded_since(releases.value, previous.version)
        entries = merge_entries(recorded, entries)
        logger.info(
            "production_entries_merged",
            recorded=len(recorded),
            fresh=len(fresh_r.value),
            merged=len(entries),
        )

    return Ok(
        ReleaseDraft(
            channel=channel,
            previous=previous,
            next_version=next_r.value,
            entries=entries,
        )
    )


def _latest_for(
    channel: Channel,
    *,
    history: VersionHistory,
    settings: DraftSettings,
) -> Result[ReleaseTag, ReleaseError]:
    tags = history.list_tags()
    if isinstance(tags, Err):
        return tags
    return latest_release(
        tags.value,
        exclude_beta=channel is Channel.PRODUCTION,
        policy=settings.tags,
    )
