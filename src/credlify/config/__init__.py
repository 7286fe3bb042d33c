"""Settings, user input and project configuration."""

from credlify.config.loader import load_settings
from credlify.config.resolver import resolve_config
from credlify.config.schema import (
    DEFAULT_SETTINGS,
    ProjectConfig,
    ScaffoldSettings,
    ServerTask,
    UserInput,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "ProjectConfig",
    "ScaffoldSettings",
    "ServerTask",
    "UserInput",
    "load_settings",
    "resolve_config",
]
