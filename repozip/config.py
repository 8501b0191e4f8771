"""
Settings file support for Repozip.

"Configuration is just organized preferences. Save them wisely." — schema.cx

A settings file is a YAML mapping whose keys are BackupConfig fields:

    output_directory: ~/backups/github
    allow_other_owners: false
    max_pages: 20

Values given on the command line override the file.
"""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .models import BackupConfig
from .validation import validate_api_url, validate_positive

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "repozip"
SETTINGS_FILE = "config.yaml"

SETTINGS_KEYS = frozenset(f.name for f in fields(BackupConfig))
BOOL_KEYS = frozenset({"allow_other_owners", "dry_run"})


def default_settings_path() -> Path:
    """Get the path of the per-user settings file."""
    return DEFAULT_CONFIG_DIR / SETTINGS_FILE


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """
    Load a settings file.

    Args:
        path: Explicit settings file. When None the per-user file is read
            if it exists.

    Returns:
        Mapping of BackupConfig field names to values

    Raises:
        ConfigError: If an explicit file is missing, the YAML is invalid,
            or it contains unknown keys
    """
    if path is None:
        path = default_settings_path()
        if not path.is_file():
            return {}
    elif not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    unknown = set(data) - SETTINGS_KEYS
    if unknown:
        raise ConfigError(f"Unknown setting(s) in {path}: {', '.join(sorted(unknown))}")

    return data


def build_config(settings: dict[str, Any] | None = None, **overrides: Any) -> BackupConfig:
    """
    Merge settings and CLI overrides into a BackupConfig.

    Overrides that are None are ignored, so unset CLI options fall back to
    the settings file and then to the BackupConfig defaults.

    Raises:
        ConfigError: If a value has the wrong type or is out of range
    """
    values = dict(settings or {})
    values.update({key: value for key, value in overrides.items() if value is not None})

    unknown = set(values) - SETTINGS_KEYS
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

    for key in BOOL_KEYS & set(values):
        if not isinstance(values[key], bool):
            raise ConfigError(f"Setting '{key}' must be true or false")

    owner_login = values.get("owner_login")
    if owner_login is not None and (not isinstance(owner_login, str) or not owner_login.strip()):
        raise ConfigError("Setting 'owner_login' must be a non-empty string")

    try:
        config = BackupConfig(**values)
        config.timeout = float(validate_positive(float(config.timeout), "timeout"))
        config.max_pages = int(validate_positive(int(config.max_pages), "max_pages"))
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid setting: {e}") from e

    config.api_url = validate_api_url(config.api_url)
    return config


def dump_settings(config: BackupConfig) -> str:
    """Render a config as YAML, in the same shape load_settings reads."""
    data: dict[str, Any] = {}
    for f in fields(BackupConfig):
        value = getattr(config, f.name)
        data[f.name] = str(value) if isinstance(value, Path) else value
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
