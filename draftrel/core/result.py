"""Ok/Err result values.

Drafting a release is a chain of steps that can each fail for an expected
reason (dirty tree, no tags, unparsable subject). Those failures travel as
`Err` values up to the CLI, which decides how to report them. Exceptions are
reserved for programming errors.

Usage:
    match latest_release(tags, exclude_beta=True):
        case Ok(tag):
            print(tag.version)
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
