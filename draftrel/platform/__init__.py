"""Process execution, the single boundary to the operating system."""

from .process import NO_EXIT_STATUS, ProcessError, run

__all__ = [
    "NO_EXIT_STATUS",
    "ProcessError",
    "run",
]
