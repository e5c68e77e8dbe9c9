from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from draftrel.core.logging import bind_context, clear_context, get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    clear_context()
    structlog.reset_defaults()


def test_logs_go_to_stderr_only(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(level="INFO")

    get_logger("draftrel.test").info("latest_release_resolved", tag="release-1.2.0")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "latest_release_resolved" in captured.err
    assert "release-1.2.0" in captured.err


def test_level_filters(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging()

    logger = get_logger("draftrel.test")
    logger.info("quiet_event")
    logger.warning("loud_event")

    err = capsys.readouterr().err
    assert "quiet_event" not in err
    assert "loud_event" in err


def test_json_format_with_context(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(level="DEBUG", format="json")
    bind_context(channel="beta")

    get_logger("draftrel.test").debug("next_version_computed", next="1.3.0-beta4")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "next_version_computed"
    assert event["channel"] == "beta"
    assert event["next"] == "1.3.0-beta4"
    assert event["level"] == "debug"


def test_clear_context(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(level="INFO", format="json")
    bind_context(channel="test")
    clear_context()

    get_logger("draftrel.test").info("event")

    event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert "channel" not in event


def test_setup_replaces_handlers() -> None:
    setup_logging()
    setup_logging()
    assert len(logging.getLogger().handlers) == 1
