from __future__ import annotations

from .config import DevelopmentConfig, LoggingConfig, ProductionConfig, RotationPolicy, RuntimeMode
from .core import LoggingCore
from .mode import build_config, configure_from_settings, select_mode

__all__ = [
    "DevelopmentConfig",
    "LoggingConfig",
    "ProductionConfig",
    "RotationPolicy",
    "RuntimeMode",
    "LoggingCore",
    "build_config",
    "configure_from_settings",
    "select_mode",
]
