from __future__ import annotations

from pathlib import Path

import typer

from draftrel.cli.commands._helpers import exit_on_error
from draftrel.cli.context import build_context
from draftrel.output.console import RichConsole, Style
from draftrel.release.flow.draft import DraftSettings, draft_release, resolve_latest
from draftrel.release.infra.changelog_store import JsonChangelogStore
from draftrel.release.infra.git_history import GitHistory
from draftrel.release.resolve.channel_arg import parse_channel_argument
from draftrel.release.view.instructions import render_entries_json, render_instructions

_CHANNEL_HELP = "Release channel: production, beta or test."
_REPO_HELP = "Repository root (default: current directory)."
_CONFIG_HELP = "Config file (default: <repo>/draft-release.toml if present)."


def draft(
    channel: str | None = typer.Argument(None, help=_CHANNEL_HELP, show_default=False),
    repo: Path | None = typer.Option(None, "--repo", help=_REPO_HELP),
    config: Path | None = typer.Option(None, "--config", help=_CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
    as_json: bool = typer.Option(
        False, "--json", help="Print only the {version: [entries]} mapping."
    ),
) -> None:
    """Draft the next release: version number and changelog entries."""
    console = RichConsole()
    exit_on_error(parse_channel_argument(channel), console)
    ctx = build_context(repo=repo, config_path=config, verbose=verbose, console=console)

    result = draft_release(
        channel,
        history=GitHistory(ctx.repo_root),
        store=JsonChangelogStore(ctx.repo_root / ctx.config.changelog.path),
        settings=DraftSettings.from_config(ctx.config),
    )
    release_draft = exit_on_error(result, ctx.console)

    if as_json:
        ctx.console.plain(render_entries_json(release_draft))
        return

    ctx.console.print(
        f"{release_draft.channel}: {release_draft.previous.version} -> "
        f"{release_draft.next_version}",
        Style.DIM,
    )
    for line in render_instructions(
        release_draft,
        changelog_path=ctx.config.changelog.path,
        instructions=ctx.config.instructions,
    ):
        ctx.console.plain(line)


def latest(
    channel: str | None = typer.Argument(None, help=_CHANNEL_HELP, show_default=False),
    repo: Path | None = typer.Option(None, "--repo", help=_REPO_HELP),
    config: Path | None = typer.Option(None, "--config", help=_CONFIG_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    """Show the latest shippable release a draft for CHANNEL would start from."""
    console = RichConsole()
    exit_on_error(parse_channel_argument(channel), console)
    ctx = build_context(repo=repo, config_path=config, verbose=verbose, console=console)

    result = resolve_latest(
        channel,
        history=GitHistory(ctx.repo_root),
        settings=DraftSettings.from_config(ctx.config),
    )
    tag = exit_on_error(result, ctx.console)
    ctx.console.plain(f"{tag.version} ({tag.name})")
