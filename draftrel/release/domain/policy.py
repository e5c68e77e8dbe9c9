"""Channel-aware version progression.

Case table (previous version shape x requested channel):

    previous        production        beta                  test
    X.Y.Z           bump(prod)        bump(beta)-beta1      bump(test)-test1
    X.Y.Z-betaN     X.Y.Z             X.Y.Z-beta(N+1)       X.Y.Z-test1
    X.Y.Z-testN     invalid           invalid               X.Y.Z-test(N+1)
    other           invalid           invalid               invalid

Every successful result is strictly greater than the previous version.
"""

from __future__ import annotations

from dataclasses import dataclass

from draftrel.core.logging import get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.release.domain.channel import Channel
from draftrel.release.domain.semver import BumpKind, Version
from draftrel.release.errors import ReleaseError

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BumpRules:
    """Numeric bump applied when a channel leaves a production version."""

    production: BumpKind = "patch"
    beta: BumpKind = "minor"
    test: BumpKind = "patch"


def next_version(
    previous: Version,
    channel: Channel,
    rules: BumpRules = BumpRules(),
) -> Result[Version, ReleaseError]:
    if not isinstance(channel, Channel):
        return Err(
            ReleaseError(
                kind="unsupported_channel",
                message=f"resolving the next version is not supported for channel {channel!r}",
                hint="Use one of: production, beta, test",
            )
        )

    shape = previous.channel_iteration()
    if shape is None:
        return _invalid(previous, channel, "its pre-release qualifier is not betaN or testN")
    prev_channel, iteration = shape

    match channel, prev_channel:
        case Channel.PRODUCTION, Channel.PRODUCTION:
            nxt = previous.bump(rules.production)
        case Channel.PRODUCTION, Channel.BETA:
            nxt = previous.release()
        case Channel.BETA, Channel.PRODUCTION:
            nxt = previous.bump(rules.beta).with_qualifier(Channel.BETA, 1)
        case Channel.BETA, Channel.BETA:
            nxt = previous.with_qualifier(Channel.BETA, iteration + 1)
        case Channel.TEST, Channel.PRODUCTION:
            nxt = previous.bump(rules.test).with_qualifier(Channel.TEST, 1)
        case Channel.TEST, Channel.BETA:
            nxt = previous.with_qualifier(Channel.TEST, 1)
        case Channel.TEST, Channel.TEST:
            nxt = previous.with_qualifier(Channel.TEST, iteration + 1)
        case _, Channel.TEST:
            return _invalid(previous, channel, "test versions do not start a release lineage")
        case _:
            raise AssertionError(f"unhandled transition: {prev_channel} -> {channel}")

    logger.debug(
        "next_version_computed",
        previous=str(previous),
        channel=str(channel),
        next=str(nxt),
    )
    return Ok(nxt)


def _invalid(previous: Version, channel: Channel, reason: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="invalid_previous_version",
            message=f"unable to draft a {channel} release from version '{previous}': {reason}",
            hint="Check the latest release tags; test and platform tags are never a baseline.",
        )
    )
