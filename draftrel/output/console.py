"""Console output for the CLI.

Commands write through ConsoleProtocol and never touch Rich directly.
Everything is printed literally: changelog entries look like `[Fixed] ...`,
which Rich would otherwise parse as markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    DIM = auto()
    ERROR = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print one styled line."""
        ...

    def plain(self, message: str) -> None:
        """Print text exactly as given, without wrapping (JSON, instruction steps)."""
        ...

    def error(self, message: str) -> None: ...

    def hint(self, message: str) -> None: ...


class RichConsole:
    """ConsoleProtocol backed by a rich Console on stdout (or stderr)."""

    _STYLES = {
        Style.DEFAULT: None,
        Style.DIM: "dim",
        Style.ERROR: "bold red",
    }

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=self._STYLES[style], markup=False)

    def plain(self, message: str) -> None:
        self._console.print(message, markup=False, soft_wrap=True)

    def error(self, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble(("error:", "bold red"), " ", message))

    def hint(self, message: str) -> None:
        from rich.text import Text

        self._console.print(Text(f"hint: {message}", style="dim"))


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


def _no_records() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Captures output in memory for tests."""

    outputs: list[OutputRecord] = field(default_factory=_no_records)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def plain(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DEFAULT))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def hint(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"hint: {message}", Style.DIM))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
