from __future__ import annotations

"""
SplitLog: dual-stream, day-partitioned structured logging.

General application events and data-access trace lines are written to
separate files under '<base>/LogFiles/<yyyy-M-d>/'.
"""

__version__ = "1.0.0"
