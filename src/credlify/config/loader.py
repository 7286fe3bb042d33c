"""Settings file loading and merging."""

from pathlib import Path

import yaml

from credlify.config.schema import DEFAULT_SETTINGS, ScaffoldSettings

SETTINGS_FILENAME = "config.yaml"
LOCAL_SETTINGS_FILENAME = ".credlify.yaml"


def get_home_settings_path() -> Path:
    """Get path to global settings: ~/.credlify/config.yaml."""
    return Path.home() / ".credlify" / SETTINGS_FILENAME


def get_local_settings_path(root: Path | None = None) -> Path:
    """Get path to project settings: ./.credlify.yaml."""
    return (root if root is not None else Path.cwd()) / LOCAL_SETTINGS_FILENAME


def load_yaml_settings(path: Path) -> dict[str, object] | None:
    """Load a YAML settings file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if data is None:
                return None
            if not isinstance(data, dict):
                return None
            result: dict[str, object] = data
            return result
    except yaml.YAMLError:
        return None


def load_settings(root: Path | None = None) -> ScaffoldSettings:
    """Load merged settings.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global settings (~/.credlify/config.yaml)
    3. Project settings (./.credlify.yaml)
    """
    settings = DEFAULT_SETTINGS

    home_data = load_yaml_settings(get_home_settings_path())
    if home_data:
        settings = settings.merge(ScaffoldSettings.from_dict(home_data))

    local_data = load_yaml_settings(get_local_settings_path(root))
    if local_data:
        settings = settings.merge(ScaffoldSettings.from_dict(local_data))

    return settings

