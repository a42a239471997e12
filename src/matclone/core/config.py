"""User settings for clone runs.

Settings come from ``~/.matclone/settings.json`` and can be overridden with
environment variables. Every key is optional.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigurationError
from .filesystem import DefaultFileSystem, FileSystem
from .models import CloneSettings

SETTINGS_PATH = Path.home() / ".matclone" / "settings.json"
ENV_CLONE_FOLDER = "MATCLONE_CLONE_FOLDER"
ENV_LOG_LEVEL = "MATCLONE_LOG_LEVEL"

LOG_LEVELS = {
    "Error": logging.ERROR,
    "Warning": logging.WARNING,
    "Info": logging.INFO,
    "Debug": logging.DEBUG,
}

_KNOWN_KEYS = ("clone_folder_name", "undo_label", "log_level")


def _normalize_log_level(value: str) -> str:
    for name in LOG_LEVELS:
        if name.lower() == value.strip().lower():
            return name
    raise ConfigurationError(
        f"Unknown log level: {value!r}",
        details={"allowed": sorted(LOG_LEVELS)},
    )


def validate_settings(settings: CloneSettings) -> CloneSettings:
    """Check settings values and normalize the log level name.

    Raises:
        ConfigurationError: If a value is unusable.
    """
    folder = settings.clone_folder_name.strip()
    if not folder or "/" in folder or "\\" in folder or folder in {".", ".."}:
        raise ConfigurationError(
            "Clone folder name must be a single folder name.",
            details={"clone_folder_name": settings.clone_folder_name},
        )
    if not settings.undo_label.strip():
        raise ConfigurationError("Undo label must not be empty.")
    return replace(
        settings,
        clone_folder_name=folder,
        log_level=_normalize_log_level(settings.log_level),
    )


def settings_from_mapping(data: Mapping[str, Any]) -> CloneSettings:
    values: Dict[str, str] = {}
    for key in _KNOWN_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Setting {key!r} must be a string.",
                details={"key": key, "type": type(value).__name__},
            )
        values[key] = value
    return validate_settings(CloneSettings(**values))


def load_settings(
    path: Optional[Path] = None,
    fs: Optional[FileSystem] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CloneSettings:
    """Load settings from disk and apply environment overrides.

    Args:
        path: Settings file to read (defaults to ``SETTINGS_PATH``).
        fs: Optional file system implementation.
        environ: Optional environment mapping (defaults to ``os.environ``).

    Returns:
        CloneSettings: Validated settings.

    Raises:
        ConfigurationError: If the file or an override holds invalid values.
        FileSystemAccessError: If the file exists but cannot be read.
    """
    fs = fs or DefaultFileSystem()
    path = path or SETTINGS_PATH
    environ = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if fs.path_exists(path):
        data = dict(fs.read_json(path))

    folder = environ.get(ENV_CLONE_FOLDER, "").strip()
    if folder:
        data["clone_folder_name"] = folder
    level = environ.get(ENV_LOG_LEVEL, "").strip()
    if level:
        data["log_level"] = level

    return settings_from_mapping(data)


def save_settings(
    settings: CloneSettings,
    path: Optional[Path] = None,
    fs: Optional[FileSystem] = None,
) -> Path:
    """Validate and write settings to disk."""
    fs = fs or DefaultFileSystem()
    path = path or SETTINGS_PATH
    settings = validate_settings(settings)
    fs.write_json(path, {key: getattr(settings, key) for key in _KNOWN_KEYS})
    return path
