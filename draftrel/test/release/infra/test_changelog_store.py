from __future__ import annotations

import json
from pathlib import Path

import pytest

from draftrel.core.result import Err, Ok
from draftrel.release.domain.semver import Version
from draftrel.release.infra.changelog_store import JsonChangelogStore


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "changelog.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_recorded_releases(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "releases": {
                "1.3.0-beta2": ["[Fixed] Crash on launch - #123"],
                "1.3.0-beta1": ["[Added] Dark mode - #130"],
                "1.2.0": [],
            }
        },
    )

    result = JsonChangelogStore(path).recorded_releases()

    assert isinstance(result, Ok)
    assert result.value == {
        Version(1, 3, 0, "beta2"): ("[Fixed] Crash on launch - #123",),
        Version(1, 3, 0, "beta1"): ("[Added] Dark mode - #130",),
        Version(1, 2, 0): (),
    }


def test_missing_file(tmp_path: Path) -> None:
    result = JsonChangelogStore(tmp_path / "nope.json").recorded_releases()

    assert isinstance(result, Err)
    assert result.error.kind == "changelog_store_invalid"
    assert "nope.json" in result.error.message


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "changelog.json"
    path.write_text("{not json", encoding="utf-8")

    result = JsonChangelogStore(path).recorded_releases()

    assert isinstance(result, Err)
    assert "invalid JSON" in result.error.message


@pytest.mark.parametrize(
    ("data", "fragment"),
    [
        ([], "missing 'releases'"),
        ({"versions": {}}, "missing 'releases'"),
        ({"releases": {"next": []}}, "not a semantic version: next"),
        ({"releases": {"1.0.0": "[Added] x"}}, "list of strings"),
        ({"releases": {"1.0.0": [1, 2]}}, "list of strings"),
    ],
)
def test_malformed_contents(tmp_path: Path, data: object, fragment: str) -> None:
    result = JsonChangelogStore(_write(tmp_path, data)).recorded_releases()

    assert isinstance(result, Err)
    assert result.error.kind == "changelog_store_invalid"
    assert fragment in result.error.message
