from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from draftrel.core.config import CONFIG_FILE_NAME, Config, load_config, load_config_or_default
from draftrel.core.errors import ErrorCode
from draftrel.core.logging import setup_logging
from draftrel.core.result import Err
from draftrel.git.repository import Repository
from draftrel.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: Config
    console: ConsoleProtocol


def build_context(
    *,
    repo: Path | None = None,
    config_path: Path | None = None,
    verbose: bool = False,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    try:
        root = (repo or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not Repository(root).exists():
        typer.echo(f"error: '{root}' is not a git repository (missing .git)", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(root / CONFIG_FILE_NAME)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        format=config.logging.format,
    )

    return CLIContext(
        repo_root=root,
        config=config,
        console=console if console is not None else RichConsole(),
    )
