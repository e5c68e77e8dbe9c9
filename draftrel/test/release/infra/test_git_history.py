from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from draftrel.core.result import Err, Ok
from draftrel.release.infra.git_history import GitHistory


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


@patch("subprocess.run")
def test_ensure_clean_ok(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed()
    assert isinstance(GitHistory(tmp_path).ensure_clean(), Ok)


@patch("subprocess.run")
def test_ensure_clean_dirty(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed(returncode=1)

    result = GitHistory(tmp_path).ensure_clean()

    assert isinstance(result, Err)
    assert result.error.kind == "uncommitted_changes"
    assert "uncommitted changes" in result.error.message


@patch("subprocess.run")
def test_ensure_clean_git_failure(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed(stderr="fatal: not a git repository", returncode=128)

    result = GitHistory(tmp_path).ensure_clean()

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert "not a git repository" in result.error.message


@patch("subprocess.run")
def test_list_tags(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed(stdout="release-1.0.0\nrelease-1.1.0\n")

    result = GitHistory(tmp_path).list_tags()

    assert isinstance(result, Ok)
    assert result.value == ("release-1.0.0", "release-1.1.0")


@patch("subprocess.run")
def test_lines_since_is_single_pass(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed(stdout="fix: b (#2)\nfix: a (#1)\n")

    result = GitHistory(tmp_path).lines_since("release-1.0.0")

    assert isinstance(result, Ok)
    lines = result.value
    assert list(lines) == ["fix: b (#2)", "fix: a (#1)", ""]
    assert list(lines) == []
    assert mock_run.call_count == 1


@patch("subprocess.run")
def test_lines_since_unknown_tag(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = _completed(stderr="fatal: bad revision", returncode=128)

    result = GitHistory(tmp_path).lines_since("release-9.9.9")

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.hint is not None
    assert "release-9.9.9" in result.error.hint
