"""Changelog entries from commit subjects.

Recognized commit-message conventions, checked in order:

1. An already formatted entry, `[Fixed] Crash on launch - #123`, kept as-is.
   This makes formatting idempotent.
2. A GitHub merge subject, `Merge pull request #123 from owner/some-branch`,
   becomes `[???] Some branch - #123`. Contributors outside the official owner
   get a `. Thanks @owner!` attribution.
3. A squash subject, `fix: crash on launch (#123)`, becomes
   `[Fixed] Crash on launch - #123`. The type comes from a known
   conventional-commit prefix when there is one; any other `Word:` prefix
   (`Windows: fix tray crash`) stays in the title. Referenced issues
   (`fixes #45`) replace the PR number.

Anything else is unparsable: an error in strict mode, otherwise a `[???]`
placeholder entry holding the whole line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from draftrel.core.logging import get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.release.domain.channel import Channel
from draftrel.release.domain.semver import Version
from draftrel.release.errors import ReleaseError

logger = get_logger(__name__)

PLACEHOLDER_KIND = "???"

_FORMATTED_RE = re.compile(r"^\[(?P<kind>[^\]]+)\]\s+\S")
_MERGE_RE = re.compile(
    r"^Merge pull request #(?P<pr>\d+) from (?P<owner>[^/\s]+)/(?P<branch>\S+)\s*$"
)
_SQUASH_RE = re.compile(r"^(?P<title>.+?)\s*\(#(?P<pr>\d+)\)\s*$")
_CONVENTIONAL_RE = re.compile(r"^(?P<type>[A-Za-z]+)(?:\([^)]*\))?!?:\s*(?P<rest>\S.*)$")
_ISSUE_RE = re.compile(r"\b(?:fix(?:es|ed)?|close[sd]?|resolve[sd]?)\s+#(\d+)", re.IGNORECASE)
_REF_RE = re.compile(r"#(\d+)\b")

_KIND_BY_TYPE: dict[str, str] = {
    "feat": "Added",
    "fix": "Fixed",
    "perf": "Improved",
    "refactor": "Improved",
    "revert": "Removed",
}
# Conventional-commit types without a changelog kind of their own.
_UNMAPPED_TYPES = frozenset({"build", "chore", "ci", "docs", "style", "test"})


@dataclass(frozen=True, slots=True, order=True)
class ChangelogEntry:
    """One human-readable change. Identity and ordering are by text only."""

    text: str

    def __str__(self) -> str:
        return self.text

    @property
    def kind(self) -> str | None:
        m = _FORMATTED_RE.match(self.text)
        return m.group("kind") if m else None

    @property
    def references(self) -> frozenset[int]:
        """Issue/PR numbers mentioned in the entry."""
        return frozenset(int(n) for n in _REF_RE.findall(self.text))


@dataclass(frozen=True, slots=True)
class FormatRules:
    # True: a line matching no convention fails instead of becoming a placeholder.
    strict: bool = False
    official_owner: str = "desktop"
    ignore_prefixes: tuple[str, ...] = ("Merge branch ", "Merge remote-tracking branch ")


def is_no_changes(lines: Sequence[str]) -> bool:
    """True when every raw line is blank, i.e. nothing happened since the reference."""
    return all(not line.strip() for line in lines)


def to_entries(
    lines: Iterable[str],
    rules: FormatRules = FormatRules(),
) -> Result[tuple[ChangelogEntry, ...], ReleaseError]:
    """Parse raw log lines into sorted, de-duplicated entries."""
    entries: set[ChangelogEntry] = set()
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if any(line.startswith(prefix) for prefix in rules.ignore_prefixes):
            logger.debug("log_line_ignored", line=line)
            continue

        text = _format_line(line, rules)
        if text is None:
            if rules.strict:
                return Err(
                    ReleaseError(
                        kind="unparsable_log_line",
                        message=f"unable to parse commit message: {line}",
                        hint=(
                            "Expected 'Merge pull request #N from owner/branch' or "
                            "'<title> (#N)'; disable [changelog] strict to keep it as a placeholder."
                        ),
                    )
                )
            logger.warning("log_line_unparsable", line=line)
            text = f"[{PLACEHOLDER_KIND}] {line}"
        entries.add(ChangelogEntry(text))

    return Ok(tuple(sorted(entries)))


def _format_line(line: str, rules: FormatRules) -> str | None:
    if _FORMATTED_RE.match(line):
        return line

    merge = _MERGE_RE.match(line)
    if merge:
        branch = merge.group("branch").rsplit("/", 1)[-1]
        description = _capitalized(re.sub(r"[-_]+", " ", branch).strip())
        text = f"[{PLACEHOLDER_KIND}] {description} - #{merge.group('pr')}"
        owner = merge.group("owner")
        if owner != rules.official_owner:
            text += f". Thanks @{owner}!"
        return text

    squash = _SQUASH_RE.match(line)
    if squash:
        title = squash.group("title")
        kind = PLACEHOLDER_KIND
        conventional = _CONVENTIONAL_RE.match(title)
        if conventional:
            commit_type = conventional.group("type").lower()
            if commit_type in _KIND_BY_TYPE or commit_type in _UNMAPPED_TYPES:
                kind = _KIND_BY_TYPE.get(commit_type, PLACEHOLDER_KIND)
                title = conventional.group("rest")

        issues = _ISSUE_RE.findall(title)
        refs = " ".join(f"#{n}" for n in issues) if issues else f"#{squash.group('pr')}"
        return f"[{kind}] {_capitalized(title)} - {refs}"

    return None


def _capitalized(text: str) -> str:
    return text[:1].upper() + text[1:]


def entries_recorded_since(
    releases: Mapping[Version, Sequence[str]],
    since: Version,
) -> tuple[ChangelogEntry, ...]:
    """Entries already recorded for versions strictly newer than `since`.

    Test-channel versions are skipped; they never ship to users.
    """
    entries: set[ChangelogEntry] = set()
    for version, recorded in releases.items():
        if not version > since:
            continue
        shape = version.channel_iteration()
        if shape is not None and shape[0] is Channel.TEST:
            continue
        entries.update(ChangelogEntry(text.strip()) for text in recorded if text.strip())
    return tuple(sorted(entries))


def merge_entries(
    recorded: Iterable[ChangelogEntry],
    fresh: Iterable[ChangelogEntry],
) -> tuple[ChangelogEntry, ...]:
    """Recorded entries plus fresh ones that do not repeat a recorded change.

    A fresh entry repeats a recorded one when the text is identical or when
    both mention the same issue/PR number.
    """
    merged: set[ChangelogEntry] = set(recorded)
    known_refs: set[int] = set()
    for entry in merged:
        known_refs.update(entry.references)

    for entry in fresh:
        if entry in merged or entry.references & known_refs:
            continue
        merged.add(entry)

    return tuple(sorted(merged))
