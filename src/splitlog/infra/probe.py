from __future__ import annotations

"""
Connectivity Probe.

Answers whether a backing store is reachable within a short deadline.
Timeouts, exceptions and negative answers are deliberately coarse-grained
into a single NOT_CONNECTED result and never propagate past the probe.
"""

import logging
import sqlite3
import threading
from enum import Enum
from typing import Any, Callable, Dict

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 1.0
USER_AGENT = "SplitLog-Probe/1.0"


class ConnectivityResult(Enum):
    CONNECTED = "connected"
    NOT_CONNECTED = "not_connected"

    def __bool__(self) -> bool:
        return self is ConnectivityResult.CONNECTED


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def probe(check: Callable[[], Any], timeout: float = DEFAULT_TIMEOUT) -> ConnectivityResult:
    """
    Run a reachability check under a deadline.

    The check runs on a daemon thread; the caller waits at most 'timeout'
    seconds. A check that overruns it is abandoned and does not hold up
    interpreter exit.

    Args:
        check: Callable returning a truthy value when the store is reachable.
        timeout: Deadline in seconds.

    Returns:
        ConnectivityResult: CONNECTED only if the check returned truthy in time.
    """
    outcome: Dict[str, Any] = {}

    def _run() -> None:
        try:
            outcome["ok"] = check()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=_run, name="splitlog-probe", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        logger.debug(f"Connectivity probe exceeded {timeout}s deadline.")
        return ConnectivityResult.NOT_CONNECTED
    if "error" in outcome:
        logger.debug(f"Connectivity probe failed: {outcome['error']}")
        return ConnectivityResult.NOT_CONNECTED

    return ConnectivityResult.CONNECTED if outcome.get("ok") else ConnectivityResult.NOT_CONNECTED


def probe_sqlite(path: str, timeout: float = DEFAULT_TIMEOUT) -> ConnectivityResult:
    """Check that a sqlite database file exists and its schema can be read."""
    def _check() -> bool:
        uri = f"file:{path}?mode=rw"
        conn = sqlite3.connect(uri, uri=True, timeout=timeout)
        try:
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
            return True
        finally:
            conn.close()

    return probe(_check, timeout=timeout)


def probe_http(url: str, timeout: float = DEFAULT_TIMEOUT) -> ConnectivityResult:
    """Check that an HTTP endpoint answers with a non-error status."""
    def _check() -> bool:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        return response.status_code < 400

    return probe(_check, timeout=timeout)
