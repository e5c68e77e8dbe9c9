"""Read-only access to the persisted changelog (changelog.json).

Expected shape:

    {
      "releases": {
        "1.3.0-beta2": ["[Fixed] Crash on launch - #123", ...],
        "1.3.0-beta1": [...]
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from draftrel.core.logging import get_logger
from draftrel.core.result import Err, Ok, Result
from draftrel.core.structured import as_str_dict, as_str_list, get_table
from draftrel.release.domain.semver import Version, parse_version
from draftrel.release.errors import ReleaseError

logger = get_logger(__name__)


class JsonChangelogStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def recorded_releases(self) -> Result[dict[Version, tuple[str, ...]], ReleaseError]:
        """Every recorded release keyed by version."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Err(self._invalid("changelog not found", hint="Set [changelog] path."))
        except (OSError, UnicodeDecodeError) as e:
            return Err(self._invalid(f"failed to read changelog: {e}"))

        try:
            data_obj: object = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(self._invalid(f"invalid JSON: {e}"))

        data = as_str_dict(data_obj)
        releases = get_table(data, "releases") if data is not None else None
        if releases is None:
            return Err(self._invalid("missing 'releases' object"))

        out: dict[Version, tuple[str, ...]] = {}
        for key, value in releases.items():
            version = parse_version(key)
            if version is None:
                return Err(self._invalid(f"release key is not a semantic version: {key}"))
            entries = as_str_list(value)
            if entries is None:
                return Err(self._invalid(f"entries for {key} must be a list of strings"))
            out[version] = tuple(entries)

        logger.debug("changelog_loaded", path=str(self.path), releases=len(out))
        return Ok(out)

    def _invalid(self, message: str, *, hint: str | None = None) -> ReleaseError:
        return ReleaseError(
            kind="changelog_store_invalid",
            message=f"{self.path}: {message}",
            hint=hint,
        )
