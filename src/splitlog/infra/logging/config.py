from __future__ import annotations

"""
Logging Configuration Models.

Defines the immutable configuration structures that drive the construction
of the general logging pipeline. One structure exists per runtime mode;
the selected one is applied exactly once at process start.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from splitlog.domain.errors import ConfigurationError
from splitlog.domain.severity import Severity


class RuntimeMode(Enum):
    DEVELOPMENT = "Development"
    PRODUCTION = "Production"


class RotationPolicy(Enum):
    """How the general log file advances with time."""

    NONE = "none"    # path resolved once, fixed for the run
    DAILY = "daily"  # a new file per calendar day


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable specification of the general logging pipeline.

    Attributes:
        base_dir: Root directory under which 'LogFiles' is created.
        mode: Runtime mode this configuration belongs to.
        minimum_level: Minimum severity name let through to the sinks.
        console: Flag to enable the console sink.
        console_theme: Name of the colour theme for the console, or None.
        rotation: Rotation policy of the general file sink.
        file_fmt: Structural format for file entries.
        console_fmt: Structural format for terminal output.
        console_datefmt: Timestamp format for terminal output.
    """
    base_dir: str = ""
    mode: RuntimeMode = RuntimeMode.PRODUCTION
    minimum_level: str = "Information"
    console: bool = False
    console_theme: Optional[str] = None
    rotation: RotationPolicy = RotationPolicy.DAILY

    file_fmt: str = "[%(asctime)s] [%(severity)s] %(message)s"
    console_fmt: str = "[%(asctime)s %(severity_short)s] %(message)s"
    console_datefmt: str = "%H:%M:%S"

    @property
    def minimum_severity(self) -> Severity:
        return Severity.parse(self.minimum_level)

    def validate(self) -> Severity:
        """
        Check the configuration before a pipeline is built from it.

        Returns:
            Severity: The parsed minimum severity.

        Raises:
            ConfigurationError: On a missing base directory or unknown level.
        """
        if not str(self.base_dir or "").strip():
            raise ConfigurationError("A base directory for log files is required.")
        return self.minimum_severity


@dataclass(frozen=True)
class DevelopmentConfig(LoggingConfig):
    """Verbose pipeline: themed console plus a general file fixed for the run."""
    mode: RuntimeMode = RuntimeMode.DEVELOPMENT
    minimum_level: str = "Verbose"
    console: bool = True
    console_theme: Optional[str] = "ansi"
    rotation: RotationPolicy = RotationPolicy.NONE


@dataclass(frozen=True)
class ProductionConfig(LoggingConfig):
    """Minimal pipeline: general file partitioned by calendar day, no console."""
    mode: RuntimeMode = RuntimeMode.PRODUCTION
    minimum_level: str = "Information"
    console: bool = False
    console_theme: Optional[str] = None
    rotation: RotationPolicy = RotationPolicy.DAILY
