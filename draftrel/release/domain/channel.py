from __future__ import annotations

from enum import Enum


class Channel(Enum):
    """Release track. Ordered by stability: production > beta > test."""

    PRODUCTION = "production"
    BETA = "beta"
    TEST = "test"

    def __str__(self) -> str:
        return self.value

    @property
    def stability(self) -> int:
        return _STABILITY[self]

    @property
    def qualifier(self) -> str | None:
        """Pre-release label used by versions of this channel (None for production)."""
        if self is Channel.PRODUCTION:
            return None
        return self.value

    def is_more_stable_than(self, other: Channel) -> bool:
        return self.stability > other.stability


_STABILITY: dict[Channel, int] = {
    Channel.PRODUCTION: 2,
    Channel.BETA: 1,
    Channel.TEST: 0,
}

CHANNEL_NAMES: tuple[str, ...] = tuple(c.value for c in Channel)
