"""Typed loading of the tool settings file (drafter.toml).

The settings file is optional. It holds defaults the CLI would otherwise
need on every invocation:

    [rules]
    path = ".github/release-drafter.yml"

    [repository]
    owner = "acme"
    name = "widgets"
    previous_tag = "v1.4.2"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "DEFAULT_RULES_PATH",
    "RULES_ENV_VAR",
    "SETTINGS_ENV_VAR",
    "SETTINGS_FILE_NAME",
    "RepositorySettings",
    "RulesSettings",
    "Settings",
    "SettingsError",
    "find_settings_file",
    "load_settings",
    "load_settings_or_default",
    "resolve_rules_path",
]

DEFAULT_RULES_PATH = ".github/release-drafter.yml"
SETTINGS_FILE_NAME = "drafter.toml"

SETTINGS_ENV_VAR = "DRAFTER_SETTINGS"
RULES_ENV_VAR = "DRAFTER_CONFIG"


@dataclass(frozen=True, slots=True)
class SettingsError:
    """Error when the settings file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RulesSettings:
    path: str = DEFAULT_RULES_PATH


@dataclass(frozen=True, slots=True)
class RepositorySettings:
    """Values substituted into $OWNER, $REPOSITORY and $PREVIOUS_TAG."""

    owner: str | None = None
    name: str | None = None
    previous_tag: str | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    rules: RulesSettings = field(default_factory=RulesSettings)
    repository: RepositorySettings = field(default_factory=RepositorySettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a mapping (parsed TOML)."""
        rules: StrDict = get_table(data, "rules") or {}
        repository: StrDict = get_table(data, "repository") or {}

        return cls(
            rules=RulesSettings(path=get_str(rules, "path") or DEFAULT_RULES_PATH),
            repository=RepositorySettings(
                owner=get_str(repository, "owner"),
                name=get_str(repository, "name"),
                previous_tag=get_str(repository, "previous_tag"),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, SettingsError]:
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
        if data is None:
            return Err(SettingsError("Settings root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(SettingsError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(SettingsError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(SettingsError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))


def load_settings(path: Path) -> Result[Settings, SettingsError]:
    """Load and parse settings from a TOML file.

    Returns:
        Ok(Settings) on success, Err(SettingsError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Settings.from_dict(result.value))


def find_settings_file(start: Path | None = None) -> Path | None:
    """Locate drafter.toml: $DRAFTER_SETTINGS first, then start dir and its parents."""
    env = os.environ.get(SETTINGS_ENV_VAR)
    if env:
        return Path(env).expanduser()

    cwd = (start or Path.cwd()).resolve()
    for parent in (cwd, *cwd.parents):
        candidate = parent / SETTINGS_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_settings_or_default(path: Path | None) -> Result[Settings, SettingsError]:
    """Load settings when a file was found; no file means defaults."""
    if path is None:
        return Ok(Settings())
    return load_settings(path)


def resolve_rules_path(settings: Settings, override: Path | None = None) -> Path:
    """Pick the rule file: explicit flag, then $DRAFTER_CONFIG, then settings."""
    if override is not None:
        return override
    env = os.environ.get(RULES_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path(settings.rules.path)
