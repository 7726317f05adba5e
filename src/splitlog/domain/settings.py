from __future__ import annotations

"""
Host Settings Domain.

Resolves the configuration surface consumed by the logging subsystem from
three layered sources: built-in defaults, an optional JSON settings file
(appsettings.json style) and environment variable overrides.
"""

import json
import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEVELOPMENT = "Development"
PRODUCTION = "Production"

DEFAULT_SETTINGS_FILE = "appsettings.json"

# JSON key -> Settings field
_FILE_KEYS: Dict[str, str] = {
    "Environment": "environment",
    "LogDirectory": "base_dir",
    "MinimumLevel": "minimum_level",
    "DataAccessLogPath": "trace_path",
}

# Environment variable -> Settings field
_ENV_KEYS: Dict[str, str] = {
    "SPLITLOG_ENVIRONMENT": "environment",
    "SPLITLOG_LOG_DIR": "base_dir",
    "SPLITLOG_MIN_LEVEL": "minimum_level",
    "SPLITLOG_TRACE_PATH": "trace_path",
}


@dataclass(frozen=True)
class Settings:
    """
    Resolved host settings.

    Attributes:
        environment: "Development" or "Production".
        base_dir: Root directory under which 'LogFiles' is created.
        minimum_level: Optional severity override for Production.
        trace_path: Optional fixed destination for the data-access stream.
    """
    environment: str = PRODUCTION
    base_dir: str = ""
    minimum_level: Optional[str] = None
    trace_path: Optional[str] = None

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == DEVELOPMENT.lower()


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def load_settings(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build the effective settings: defaults < JSON file < environment.

    A missing or corrupt settings file is tolerated and leaves the defaults
    in place.

    Args:
        path: Settings file to read. Defaults to 'appsettings.json' in the
              current working directory.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Settings: The merged settings.
    """
    settings = Settings(base_dir=os.getcwd())
    settings = replace(settings, **_read_file(path or DEFAULT_SETTINGS_FILE))
    settings = replace(settings, **_read_environ(os.environ if environ is None else environ))
    return settings


# -----------------------------------------------------------------------------
# Private Helpers
# -----------------------------------------------------------------------------
def _read_file(path: str) -> Dict[str, Any]:
    """Extract known keys from a JSON settings file."""
    if not os.path.exists(path):
        logger.debug(f"Settings file not found: {path}. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read settings file {path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Corrupted settings file {path}. Using defaults.")
        return {}

    section = data.get("Logging")
    if isinstance(section, dict):
        data = {**data, **section}

    overrides: Dict[str, Any] = {}
    for key, field_name in _FILE_KEYS.items():
        value = data.get(key)
        if value not in (None, ""):
            overrides[field_name] = str(value)
    return overrides


def _read_environ(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for key, field_name in _ENV_KEYS.items():
        value = environ.get(key)
        if value:
            overrides[field_name] = value
    return overrides
