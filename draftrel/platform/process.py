"""Subprocess execution for draftrel.

This is the only module that spawns processes. Callers get the captured
stdout back as a Result; a non-zero exit, a missing binary or a timeout all
come back as a ProcessError value.

Usage:
    match run(["git", "tag"], cwd=repo_root):
        case Ok(stdout):
            tags = stdout.splitlines()
        case Err(error):
            log.warning("git_failed", error=str(error), stderr=error.stderr)
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from draftrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Return code recorded when the process never produced an exit status.
NO_EXIT_STATUS = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that did not exit cleanly.

    Attributes:
        command: argv as executed.
        returncode: exit status, or NO_EXIT_STATUS if it could not start or timed out.
        stdout: captured standard output.
        stderr: captured standard error, or the launch/timeout reason.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def exited(self) -> bool:
        return self.returncode != NO_EXIT_STATUS

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        if not self.exited:
            return f"{shown} did not run to completion: {self.stderr}"
        return f"{shown} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    *,
    env_overrides: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run a command in cwd and return its stdout.

    Args:
        cmd: Program and arguments.
        cwd: Working directory.
        env_overrides: Variables layered over the current environment.
        timeout: Seconds before the command is killed (None waits forever).
    """
    command = tuple(cmd)
    env = {**os.environ, **env_overrides} if env_overrides else None

    try:
        proc = subprocess.run(
            list(command),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command, NO_EXIT_STATUS, stderr=f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, NO_EXIT_STATUS, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
