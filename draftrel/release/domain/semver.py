"""Semantic version value type with an explicit total order.

Precedence follows semver: the numeric triple first, then a version without
a pre-release qualifier ranks above any pre-release of the same triple, then
the dot-separated pre-release identifiers left to right. Numeric identifiers
compare numerically and rank below alphanumeric ones. Alphanumeric
identifiers shaped like `beta10` compare by their letters, then by their
trailing number, so iteration counters order naturally (`beta9 < beta10`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from draftrel.release.domain.channel import Channel

BumpKind = Literal["major", "minor", "patch"]

_VERSION_RE = re.compile(
    r"""
    ^
    (?P<major>0|[1-9][0-9]*)
    \.
    (?P<minor>0|[1-9][0-9]*)
    \.
    (?P<patch>0|[1-9][0-9]*)
    (?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?
    $
    """,
    re.VERBOSE,
)
_NUMERIC_RE = re.compile(r"^(0|[1-9][0-9]*)$")
_COUNTED_RE = re.compile(r"^([A-Za-z-]+)([0-9]+)$")
_QUALIFIER_RE = re.compile(r"^(beta|test)([1-9][0-9]*)$")

_IDENT_RE = re.compile(r"^[0-9A-Za-z-]+$")

# (rank, number, letters, counter, text): numeric identifiers rank 0, alphanumeric 1
_IdentKey = tuple[int, int, str, int, str]


def _identifier_key(ident: str) -> _IdentKey:
    if _NUMERIC_RE.match(ident):
        return (0, int(ident), "", -1, "")
    counted = _COUNTED_RE.match(ident)
    if counted:
        return (1, 0, counted.group(1), int(counted.group(2)), ident)
    return (1, 0, ident, -1, ident)


def _valid_prerelease(prerelease: str) -> bool:
    for ident in prerelease.split("."):
        if not _IDENT_RE.match(ident):
            return False
        if ident.isdigit() and not _NUMERIC_RE.match(ident):
            return False
    return True


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise ValueError("Version components must be non-negative integers")
        if self.prerelease is not None and not _valid_prerelease(self.prerelease):
            raise ValueError(f"Invalid pre-release identifier: {self.prerelease}")

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        return text

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def sort_key(self) -> tuple[int, int, int, int, tuple[_IdentKey, ...]]:
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())
        idents = tuple(_identifier_key(i) for i in self.prerelease.split("."))
        return (self.major, self.minor, self.patch, 0, idents)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    def release(self) -> Version:
        """The same numeric triple without a pre-release qualifier."""
        return Version(self.major, self.minor, self.patch)

    def with_qualifier(self, channel: Channel, iteration: int) -> Version:
        qualifier = channel.qualifier
        if qualifier is None:
            raise ValueError("production versions carry no qualifier")
        if iteration < 1:
            raise ValueError(f"iteration must be >= 1, got {iteration}")
        return Version(self.major, self.minor, self.patch, f"{qualifier}{iteration}")

    def bump(self, kind: BumpKind) -> Version:
        match kind:
            case "major":
                return Version(self.major + 1, 0, 0)
            case "minor":
                return Version(self.major, self.minor + 1, 0)
            case "patch":
                return Version(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def channel_iteration(self) -> tuple[Channel, int] | None:
        """Channel and iteration for `betaN`/`testN` qualifiers.

        Production versions return (PRODUCTION, 0). Any other qualifier
        returns None.
        """
        if self.prerelease is None:
            return (Channel.PRODUCTION, 0)
        m = _QUALIFIER_RE.match(self.prerelease)
        if m is None:
            return None
        return (Channel(m.group(1)), int(m.group(2)))


def parse_version(text: str) -> Version | None:
    """Parse `MAJOR.MINOR.PATCH[-PRERELEASE]`, or return None.

    Build metadata and numeric identifiers with leading zeros are rejected.
    """
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    prerelease = m.group("prerelease")
    if prerelease is not None and not _valid_prerelease(prerelease):
        return None
    return Version(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        prerelease,
    )
