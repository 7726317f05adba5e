from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the day-partitioned log file locations and guarantees that the
directory hierarchy behind them exists. Directory creation is idempotent.

Layout:
    <base>/LogFiles/<yyyy-M-d>/log.txt
    <base>/LogFiles/<yyyy-M-d>/ef_log.txt
"""

import os
from datetime import date
from typing import Optional

from splitlog.domain.errors import FilesystemError
from splitlog.domain.streams import StreamIdentity

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

LOG_ROOT_DIR_NAME = "LogFiles"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def date_folder(day: date) -> str:
    """
    Render the date partition segment (year-month-day, unpadded).

    Args:
        day: Calendar date of the partition.

    Returns:
        str: Folder name such as '2024-3-7'.
    """
    return f"{day.year}-{day.month}-{day.day}"


def resolve_daily_path(
        base_dir: str,
        stream: StreamIdentity,
        *,
        today: Optional[date] = None,
) -> str:
    """
    Compute the current day's log file path for a stream.

    The full directory chain is created if missing. The file itself is not
    created here.

    Args:
        base_dir: Root directory of the log tree.
        stream: Logical stream whose file name is used.
        today: Calendar date to resolve for. Defaults to the local date.

    Returns:
        str: Absolute path to the stream's file for that day.

    Raises:
        FilesystemError: If the directory chain cannot be created.
    """
    day = today or date.today()
    folder = os.path.join(os.path.abspath(base_dir), LOG_ROOT_DIR_NAME, date_folder(day))
    ensure_dir(folder)
    return os.path.join(folder, stream.filename)


def ensure_dir(path: str) -> None:
    """
    Recursively create a directory. Existing directories are not an error.

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Cannot create log directory '{path}': {e}") from e


def ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy for a target file."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent:
        ensure_dir(parent)
