"""Release tag recognition and latest-release resolution.

A release tag is `<prefix><version>`, e.g. `release-1.2.0`. Tags carrying a
platform marker (`release-1.2.0-linux1`) or the test marker
(`release-1.2.0-test2`) never count as shippable releases. Beta tags are
dropped too when drafting for production.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from draftrel.core.logging import get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.release.domain.semver import Version, parse_version
from draftrel.release.errors import ReleaseError

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TagPolicy:
    prefix: str = "release-"
    platform_markers: tuple[str, ...] = ("-linux",)
    test_marker: str = "-test"
    beta_marker: str = "-beta"
    # True: a release tag whose version does not parse is an error, not a skip.
    strict: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseTag:
    name: str
    version: Version


def is_shippable_tag(tag: str, *, exclude_beta: bool, policy: TagPolicy = TagPolicy()) -> bool:
    """Whether a tag names a release that can serve as a drafting baseline."""
    if not tag.startswith(policy.prefix):
        return False
    if any(marker in tag for marker in policy.platform_markers):
        return False
    if policy.test_marker and policy.test_marker in tag:
        return False
    if exclude_beta and policy.beta_marker and policy.beta_marker in tag:
        return False
    return True


def shippable_release_tags(
    tags: Iterable[str],
    *,
    exclude_beta: bool,
    policy: TagPolicy = TagPolicy(),
) -> Result[list[ReleaseTag], ReleaseError]:
    """Filter tags to shippable releases and parse their versions."""
    out: list[ReleaseTag] = []
    for raw in tags:
        tag = raw.strip()
        if not is_shippable_tag(tag, exclude_beta=exclude_beta, policy=policy):
            continue
        version = parse_version(tag[len(policy.prefix) :])
        if version is None:
            if policy.strict:
                return Err(
                    ReleaseError(
                        kind="malformed_tag",
                        message=f"release tag is not a semantic version: {tag}",
                        hint=f"Expected: {policy.prefix}MAJOR.MINOR.PATCH[-PRERELEASE]",
                    )
                )
            logger.warning("tag_skipped_malformed", tag=tag)
            continue
        out.append(ReleaseTag(name=tag, version=version))
    return Ok(out)


def latest_release(
    tags: Iterable[str],
    *,
    exclude_beta: bool,
    policy: TagPolicy = TagPolicy(),
) -> Result[ReleaseTag, ReleaseError]:
    """The semver-maximal shippable release tag."""
    found = shippable_release_tags(tags, exclude_beta=exclude_beta, policy=policy)
    if isinstance(found, Err):
        return found

    if not found.value:
        scope = "production" if exclude_beta else "production or beta"
        return Err(
            ReleaseError(
                kind="no_releases_found",
                message=f"no {scope} release tags found (prefix '{policy.prefix}')",
                hint="Fetch tags from the remote (git fetch --tags) or tag the first release.",
            )
        )

    latest = max(found.value, key=lambda t: t.version.sort_key())
    logger.info(
        "latest_release_resolved",
        tag=latest.name,
        version=str(latest.version),
        candidates=len(found.value),
        exclude_beta=exclude_beta,
    )
    return Ok(latest)
