"""Narrowing helpers for parsed TOML and JSON.

`draft-release.toml` and `changelog.json` arrive as untyped objects. These
helpers check shapes at runtime and return None on mismatch, so callers can
turn a mismatch into a ConfigError or ReleaseError with context.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    return all(isinstance(key, str) for key in cast(dict[object, object], obj))


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_str_list(obj: object) -> list[str] | None:
    """obj as a list of str, or None if it is not a list or holds a non-str."""
    if not isinstance(obj, list):
        return None
    items = cast(list[object], obj)
    if not all(isinstance(item, str) for item in items):
        return None
    return cast(list[str], items)


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at key; None when missing, not a str, or blank."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    return value if isinstance(value, bool) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))
