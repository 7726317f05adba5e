from __future__ import annotations

"""
Append-Only File Sink.

Persists formatted records by appending them to a target file. Each append
is a short critical section keyed by the absolute destination path, so
concurrent producers writing to the same file never interleave.
"""

import os
import sys
import threading
import weakref
from typing import Optional

from splitlog.domain.errors import FilesystemError
from splitlog.infra.fs import ensure_parent_dir

SEPARATOR = "-" * 40

# Entries vanish once no writer holds the lock of a path.
_LOCKS: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_LOCKS_GUARD = threading.Lock()


def path_lock(path: str) -> threading.Lock:
    """Return the process-wide lock serializing writes to a destination."""
    key = os.path.normcase(os.path.abspath(path))
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _LOCKS[key] = lock
        return lock


class SinkWriter:
    """
    Appends text records to files, followed by an optional separator line.

    Attributes:
        separator: Rule written after every record, or None for none.
        failures: Number of failed appends swallowed by try_append().
    """

    def __init__(self, separator: Optional[str] = SEPARATOR) -> None:
        self.separator = separator
        self.failures = 0
        self._failures_lock = threading.Lock()

    def append(self, path: str, text: str) -> None:
        """
        Append a record to the file, creating it (and its folders) if absent.

        Output Format:
        <text>
        ---------------------------------------- (when a separator is set)

        Args:
            path: Destination file.
            text: Record to write.

        Raises:
            FilesystemError: If the file cannot be created or written.
        """
        payload = text if self.separator is None else f"{text}\n{self.separator}\n"

        with path_lock(path):
            try:
                ensure_parent_dir(path)
                with open(path, "a", encoding="utf-8") as out:
                    out.write(payload)
                    out.flush()
            except FilesystemError:
                raise
            except (OSError, UnicodeError) as e:
                raise FilesystemError(f"Cannot append to log file '{path}': {e}") from e

    def try_append(self, path: str, text: str) -> bool:
        """
        Append a record without ever raising.

        Failures are counted and reported to stderr.

        Returns:
            bool: True if the record was written.
        """
        try:
            self.append(path, text)
            return True
        except FilesystemError as e:
            self.record_failure(e)
            return False

    def record_failure(self, error: BaseException) -> None:
        """Count a swallowed failure and report it out of band."""
        with self._failures_lock:
            self.failures += 1
        try:
            sys.stderr.write(f"WARNING: Log sink failure: {error}\n")
        except (OSError, ValueError):
            pass
