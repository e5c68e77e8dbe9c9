"""Tests for draftrel.output.console."""

from __future__ import annotations

import pytest

from draftrel.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


def test_style_names() -> None:
    assert str(Style.DIM) == "dim"
    assert str(Style.ERROR) == "error"


class TestMockConsole:
    def test_records_style(self) -> None:
        console = MockConsole()
        console.print("beta: 1.3.0-beta1 -> 1.3.0-beta2", Style.DIM)
        assert console.outputs[0].message == "beta: 1.3.0-beta1 -> 1.3.0-beta2"
        assert console.outputs[0].style is Style.DIM

    def test_plain_keeps_text_verbatim(self) -> None:
        console = MockConsole()
        console.plain("[Fixed] Crash on launch - #123")
        assert console.messages == ["[Fixed] Crash on launch - #123"]
        assert not console.has_error()

    def test_error_and_hint(self) -> None:
        console = MockConsole()
        console.error("no release tags found")
        console.hint("git fetch --tags")
        assert console.text == "error: no release tags found\nhint: git fetch --tags"
        assert console.has_error()
        assert len(console.find("fetch")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.plain("x")


class TestRichConsole:
    def test_brackets_survive(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.plain("[Fixed] Crash on launch - #123")
        console.print("[Added] Dark mode", Style.DIM)
        console.error("bad tag [release-x]")
        console.hint("[tags] strict = false")

        out = capsys.readouterr().out
        assert "[Fixed] Crash on launch - #123" in out
        assert "[Added] Dark mode" in out
        assert "error: bad tag [release-x]" in out
        assert "hint: [tags] strict = false" in out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).error("to stderr")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "to stderr" in captured.err
