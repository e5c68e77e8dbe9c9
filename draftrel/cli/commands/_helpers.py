"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, TypeVar

import typer

from draftrel.core.errors import ErrorCode
from draftrel.core.result import Err, Result
from draftrel.output.console import ConsoleProtocol
from draftrel.release.errors import ReleaseError

T = TypeVar("T")


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "invalid_channel_argument" | "unsupported_channel":
            return ErrorCode.USER_ERROR
        case "changelog_store_invalid":
            return ErrorCode.IO_ERROR
        case _:
            return ErrorCode.ENV_ERROR


def exit_on_error(result: Result[T, ReleaseError], console: ConsoleProtocol) -> T:
    """Return the Ok value, or print the error and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                console.error(e.message)
                if e.hint:
                    console.hint(e.hint)
                raise typer.Exit(code=...)
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        error = result.error
        console.error(error.message)
        if error.hint:
            console.hint(error.hint)
        exit_with_code(int(release_error_code(error)))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
