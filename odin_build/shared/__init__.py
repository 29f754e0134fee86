"""Shared utilities for odin-build."""

from .context import BuildContext
from .errors import (
    BuildError,
    CompileError,
    CopyError,
    SettingsError,
)
from .reporter import Reporter, Spinner
from .settings import (
    BuildType,
    Settings,
    load_settings,
    read_settings_file,
    settings_path,
)

__all__ = [
    # Context
    "BuildContext",
    # Reporting
    "Reporter",
    "Spinner",
    # Settings
    "BuildType",
    "Settings",
    "load_settings",
    "read_settings_file",
    "settings_path",
    # Errors
    "BuildError",
    "CompileError",
    "CopyError",
    "SettingsError",
]
