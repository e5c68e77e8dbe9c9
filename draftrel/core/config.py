"""Typed configuration loading and access.

This module provides dataclasses for the optional draft-release.toml file
with full type safety and validation. Every key is optional; a missing file
means defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, as_str_list, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "Config",
    "ConfigError",
    "InstructionsConfig",
    "LoggingConfig",
    "TagsConfig",
    "VersionsConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "draft-release.toml"

_BUMP_KINDS = ("major", "minor", "patch")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_LOG_FORMATS = ("plain", "json")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class TagsConfig:
    """How release tags are recognized in the tag namespace."""

    prefix: str = "release-"
    platform_markers: tuple[str, ...] = ("-linux",)
    test_marker: str = "-test"
    beta_marker: str = "-beta"
    # True: a release tag with a malformed version fails the draft.
    strict: bool = False


@dataclass(frozen=True, slots=True)
class VersionsConfig:
    """Numeric bump applied when a channel leaves a production version."""

    production_bump: str = "patch"
    beta_bump: str = "minor"
    test_bump: str = "patch"


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    """Changelog collection and the persisted changelog store."""

    path: str = "changelog.json"
    # True: a commit subject matching no convention fails the draft.
    strict: bool = False
    official_owner: str = "desktop"
    ignore_prefixes: tuple[str, ...] = ("Merge branch ", "Merge remote-tracking branch ")


@dataclass(frozen=True, slots=True)
class InstructionsConfig:
    """Paths and links rendered into the operator instructions."""

    version_file: str = "app/package.json"
    release_notes_guide: str | None = None
    releasing_guide: str | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "WARNING"
    format: str = "plain"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    tags: TagsConfig = field(default_factory=TagsConfig)
    versions: VersionsConfig = field(default_factory=VersionsConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    instructions: InstructionsConfig = field(default_factory=InstructionsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a present value has the wrong type or is out of range.
        """
        tags = _section(data, "tags")
        versions = _section(data, "versions")
        changelog = _section(data, "changelog")
        instructions = _section(data, "instructions")
        logging_ = _section(data, "logging")

        tag_defaults = TagsConfig()
        changelog_defaults = ChangelogConfig()

        return cls(
            tags=TagsConfig(
                prefix=_str(tags, "prefix", tag_defaults.prefix),
                platform_markers=_str_tuple(tags, "platform_markers", tag_defaults.platform_markers),
                # An empty marker switches that exclusion off.
                test_marker=_str(tags, "test_marker", tag_defaults.test_marker, allow_empty=True),
                beta_marker=_str(tags, "beta_marker", tag_defaults.beta_marker, allow_empty=True),
                strict=_bool(tags, "strict", tag_defaults.strict),
            ),
            versions=VersionsConfig(
                production_bump=_choice(versions, "production_bump", _BUMP_KINDS, "patch"),
                beta_bump=_choice(versions, "beta_bump", _BUMP_KINDS, "minor"),
                test_bump=_choice(versions, "test_bump", _BUMP_KINDS, "patch"),
            ),
            changelog=ChangelogConfig(
                path=_str(changelog, "path", changelog_defaults.path),
                strict=_bool(changelog, "strict", changelog_defaults.strict),
                official_owner=_str(changelog, "official_owner", changelog_defaults.official_owner),
                ignore_prefixes=_str_tuple(
                    changelog, "ignore_prefixes", changelog_defaults.ignore_prefixes
                ),
            ),
            instructions=InstructionsConfig(
                version_file=_str(instructions, "version_file", "app/package.json"),
                release_notes_guide=_optional_str(instructions, "release_notes_guide"),
                releasing_guide=_optional_str(instructions, "releasing_guide"),
            ),
            logging=LoggingConfig(
                level=_choice(logging_, "level", _LOG_LEVELS, "WARNING", upper=True),
                format=_choice(logging_, "format", _LOG_FORMATS, "plain"),
            ),
        )


def _section(data: Mapping[str, object], key: str) -> StrDict:
    if key not in data:
        return {}
    table = get_table(data, key)
    if table is None:
        raise ValueError(f"[{key}] must be a table")
    return table


def _str(
    table: Mapping[str, object],
    key: str,
    default: str,
    *,
    allow_empty: bool = False,
) -> str:
    if key not in table:
        return default
    value = table[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    if allow_empty:
        return value
    stripped = get_str(table, key)
    if stripped is None:
        raise ValueError(f"'{key}' must not be blank")
    return stripped


def _optional_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at key; None when missing or blank."""
    if key not in table:
        return None
    return _str(table, key, "", allow_empty=True).strip() or None


def _str_tuple(table: Mapping[str, object], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    if key not in table:
        return default
    items = as_str_list(table[key])
    if items is None:
        raise ValueError(f"'{key}' must be a list of strings")
    if any(not item for item in items):
        raise ValueError(f"'{key}' must not contain empty strings")
    return tuple(items)


def _bool(table: Mapping[str, object], key: str, default: bool) -> bool:
    if key not in table:
        return default
    value = get_bool(table, key)
    if value is None:
        raise ValueError(f"'{key}' must be true or false")
    return value


def _choice(
    table: Mapping[str, object],
    key: str,
    allowed: tuple[str, ...],
    default: str,
    *,
    upper: bool = False,
) -> str:
    if key not in table:
        return default
    value = get_str(table, key)
    if value is not None and upper:
        value = value.upper()
    if value not in allowed:
        raise ValueError(f"'{key}' must be one of {', '.join(allowed)}")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to draft-release.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or return the default config if there is none.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
