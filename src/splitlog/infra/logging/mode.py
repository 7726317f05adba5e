from __future__ import annotations

"""
Runtime Mode Selection.

Single dispatch point between environment detection (owned by the host)
and pipeline construction. It has no state of its own.
"""

from typing import Optional

from splitlog.domain.settings import Settings
from splitlog.infra.logging.config import DevelopmentConfig, LoggingConfig, ProductionConfig
from splitlog.infra.logging.core import LoggingCore


def build_config(
        is_development: bool,
        *,
        base_dir: str,
        minimum_level: Optional[str] = None,
) -> LoggingConfig:
    """
    Pick the configuration structure for a runtime mode.

    The minimum level override only applies to production; development
    always lets every severity through.
    """
    if is_development:
        return DevelopmentConfig(base_dir=base_dir)
    if minimum_level:
        return ProductionConfig(base_dir=base_dir, minimum_level=minimum_level)
    return ProductionConfig(base_dir=base_dir)


def select_mode(
        core: LoggingCore,
        is_development: bool,
        *,
        base_dir: str,
        minimum_level: Optional[str] = None,
) -> LoggingConfig:
    """
    Configure the core for the selected mode.

    Returns:
        LoggingConfig: The configuration that was applied.

    Raises:
        ConfigurationError: Propagated from LoggingCore.configure().
    """
    cfg = build_config(is_development, base_dir=base_dir, minimum_level=minimum_level)
    core.configure(cfg)
    return cfg


def configure_from_settings(core: LoggingCore, settings: Settings) -> LoggingConfig:
    """Apply host settings to the core."""
    return select_mode(
        core,
        settings.is_development,
        base_dir=settings.base_dir,
        minimum_level=settings.minimum_level,
    )
