"""
TOML-based config file loading for Notezip.

Searches for `.notezip.toml`, `notezip.toml`, or `pyproject.toml [tool.notezip]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from notezip.collect import ExclusionConfig

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)


def parse_pattern_list(value: str | list[Any] | None) -> list[str]:
    """
    Normalize a configured pattern list. Accepts a list or a comma-separated
    string; entries are trimmed and blanks dropped.

    >>> parse_pattern_list("Templates, Archive ,,")
    ['Templates', 'Archive']
    """
    if value is None:
        return []
    items: list[Any] = value.split(",") if isinstance(value, str) else value
    result: list[str] = []
    for item in items:
        for part in str(item).split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result


@dataclass
class NotezipConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Exclusions
    exclude_metadata: list[str] | None = None
    exclude_headers: list[str] | None = None
    exclude_folders: list[str] | None = None
    exclude_files: list[str] | None = None
    markdown_links: bool | None = None
    # Vault
    vault: str | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None

    def exclusion_config(self) -> ExclusionConfig:
        return ExclusionConfig(
            excluded_metadata_keys=self.exclude_metadata or [],
            excluded_headers=self.exclude_headers or [],
            excluded_folders=self.exclude_folders or [],
            excluded_files=self.exclude_files or [],
        )


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".notezip.toml", "notezip.toml", "pyproject.toml"]

_LIST_FIELDS = {
    "exclude_metadata",
    "exclude_headers",
    "exclude_folders",
    "exclude_files",
    "extend_exclude",
}
_BOOL_FIELDS = {"markdown_links", "respect_gitignore"}

# Keys whose field name differs from the snake_case form of the TOML key
_KEY_ALIASES: dict[str, str] = {
    "path": "vault",  # [vault] path = "..."
}

_VALID_FIELDS = {f.name for f in fields(NotezipConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.notezip.toml` >
    `notezip.toml` > `pyproject.toml` (only if it has `[tool.notezip]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    # Only use pyproject.toml if it has [tool.notezip]
                    if _pyproject_has_notezip_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_notezip_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.notezip] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "notezip" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> NotezipConfig:
    """
    Load a `NotezipConfig` from a TOML file. Supports both standalone
    `notezip.toml` / `.notezip.toml` and `pyproject.toml` (extracts
    `[tool.notezip]`). TOML kebab-case keys are mapped to Python snake_case.

    Malformed TOML is reported as a warning and yields an empty config.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        log.warning("Ignoring malformed config file %s: %s", config_path, e)
        return NotezipConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("notezip", {})

    config = _parse_config_data(data)
    if config.vault is not None and not Path(config.vault).is_absolute():
        # Relative vault paths are relative to the config file.
        config.vault = str((config_path.parent / config.vault).resolve())
    return config


def _parse_config_data(data: dict[str, Any]) -> NotezipConfig:
    """Parse a flat or sectioned TOML dict into NotezipConfig."""
    # Flatten sections: [exclusions] and [vault] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = _KEY_ALIASES.get(key, key.replace("-", "_"))
        if snake_key not in _VALID_FIELDS:
            log.warning("Ignoring unrecognized config key: %s", key)
            continue
        if snake_key in _LIST_FIELDS:
            if not isinstance(value, (str, list)):
                log.warning("Ignoring `%s`: expected a list or a comma-separated string", key)
                continue
            value = parse_pattern_list(cast("str | list[Any]", value))
        elif snake_key in _BOOL_FIELDS:
            if not isinstance(value, bool):
                log.warning("Ignoring `%s`: expected true or false", key)
                continue
        elif not isinstance(value, str):
            log.warning("Ignoring `%s`: expected a string", key)
            continue
        mapped[snake_key] = value

    return NotezipConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: NotezipConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(NotezipConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        # Apply config value to CLI options
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
