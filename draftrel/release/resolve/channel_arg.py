from __future__ import annotations

from draftrel.core.result import Err, Ok, Result
from draftrel.release.domain.channel import CHANNEL_NAMES, Channel
from draftrel.release.errors import ReleaseError


def parse_channel_argument(arg: str | None) -> Result[Channel, ReleaseError]:
    """Convert the user's channel token to a Channel, before any git access."""
    choices = ", ".join(f"'{name}'" for name in CHANNEL_NAMES)
    if arg is None or not arg.strip():
        return Err(
            ReleaseError(
                kind="invalid_channel_argument",
                message="you have not specified a channel to draft this release for",
                hint=f"Choose one of {choices}",
            )
        )

    token = arg.strip()
    if token not in CHANNEL_NAMES:
        return Err(
            ReleaseError(
                kind="invalid_channel_argument",
                message=f"an invalid channel '{token}' has been provided",
                hint=f"Choose one of {choices}",
            )
        )
    return Ok(Channel(token))
