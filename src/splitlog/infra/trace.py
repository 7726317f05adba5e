from __future__ import annotations

"""
Data-Access Trace Collection.

Receives free-form diagnostic lines from a data-access subsystem (e.g. a
database driver's statement trace) and appends them, unmodified and
unfiltered, to the data-access stream. A failing destination never
reaches the producer.
"""

import sqlite3
from datetime import date
from typing import Callable, Optional

from splitlog.domain.streams import StreamIdentity
from splitlog.infra.fs import resolve_daily_path
from splitlog.infra.sink import SinkWriter


class TraceCollector:
    """
    Sink for trace lines of the data-access stream.

    Attributes:
        base_dir: Root of the log tree.
        fixed_path: When set, every line goes to this file instead of the
                    day-partitioned one.
        writer: Sink used for the appends.
    """

    def __init__(
            self,
            base_dir: str,
            fixed_path: Optional[str] = None,
            writer: Optional[SinkWriter] = None,
            clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.base_dir = base_dir
        self.fixed_path = fixed_path or None
        self.writer = writer or SinkWriter()
        self._clock = clock or date.today

    @property
    def failures(self) -> int:
        return self.writer.failures

    def current_path(self) -> str:
        """
        Resolve the destination for the next line.

        Raises:
            FilesystemError: If the day folder cannot be created.
        """
        if self.fixed_path:
            return self.fixed_path
        return resolve_daily_path(self.base_dir, StreamIdentity.DATA_ACCESS, today=self._clock())

    def on_trace(self, text: str) -> None:
        """Append one trace line. Never raises."""
        try:
            path = self.current_path()
            line = str(text)
        except Exception as e:
            self.writer.record_failure(e)
            return
        self.writer.try_append(path, line)

    __call__ = on_trace

    def attach_sqlite(self, connection: sqlite3.Connection) -> None:
        """Record every statement executed on a sqlite3 connection."""
        connection.set_trace_callback(self.on_trace)
