from __future__ import annotations

"""
User Directory Service.

A small sqlite3-backed lookup service used by the command line host. Its
connection's statement trace is routed into the data-access stream while
the service's own events go to the general stream.
"""

import os
import sqlite3
from dataclasses import dataclass
from typing import List, Optional, Tuple

from splitlog.infra.logging.core import LoggingCore
from splitlog.infra.probe import ConnectivityResult, probe_sqlite
from splitlog.infra.trace import TraceCollector

IN_MEMORY = ":memory:"

SEED_USERS: List[Tuple[int, str]] = [
    (1, "karen@example.com"),
    (2, "mary@example.com"),
    (3, "frank@example.com"),
]


class UserNotFoundError(LookupError):
    """No user exists with the requested id."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"No user with an id of {user_id}")
        self.user_id = user_id


@dataclass(frozen=True)
class UserLogin:
    id: int
    email_address: str


def open_database(
        path: str,
        collector: Optional[TraceCollector] = None,
        timeout: float = 1.0,
) -> sqlite3.Connection:
    """
    Open the user database, recreating it when it cannot be reached.

    Args:
        path: Database file, or ':memory:'.
        collector: Trace collector receiving every executed statement.
        timeout: Deadline of the reachability probe in seconds.

    Returns:
        sqlite3.Connection: Open connection with the trace hook attached.
    """
    if path != IN_MEMORY and probe_sqlite(path, timeout=timeout) is ConnectivityResult.NOT_CONNECTED:
        if os.path.exists(path):
            os.remove(path)

    conn = sqlite3.connect(path, check_same_thread=False)
    if collector is not None:
        collector.attach_sqlite(conn)
    return conn


class UserDirectory:
    """Lookup of user logins, logging each outcome on the general stream."""

    def __init__(self, connection: sqlite3.Connection, core: LoggingCore) -> None:
        self._conn = connection
        self._core = core

    def ensure_schema(self) -> None:
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS UserLogin ("
                "Id INTEGER PRIMARY KEY, EmailAddress TEXT NOT NULL)"
            )

    def seed(self, users: Optional[List[Tuple[int, str]]] = None) -> int:
        """Insert the seed users into an empty table. Returns rows inserted."""
        count = self._conn.execute("SELECT COUNT(*) FROM UserLogin").fetchone()[0]
        if count:
            return 0
        rows = users if users is not None else SEED_USERS
        with self._conn:
            self._conn.executemany("INSERT INTO UserLogin (Id, EmailAddress) VALUES (?, ?)", rows)
        return len(rows)

    def _fetch(self, user_id: int) -> Optional[UserLogin]:
        row = self._conn.execute(
            "SELECT Id, EmailAddress FROM UserLogin WHERE Id = ?", (user_id,)
        ).fetchone()
        return UserLogin(*row) if row else None

    def find_by_id(self, user_id: int) -> Optional[UserLogin]:
        user = self._fetch(user_id)
        if user is None:
            self._core.information("No user with an id of {P1}", user_id)
        else:
            self._core.information("Found user with email address {P1}", user.email_address)
        return user

    def require_by_id(self, user_id: int) -> UserLogin:
        """
        Raises:
            UserNotFoundError: If no user has this id.
        """
        user = self._fetch(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def lookup_with_error_log(self, user_id: int) -> Optional[UserLogin]:
        """
        Look a user up, recording a missing user as an Error with its
        traceback instead of a plain information line.
        """
        self._core.information("Lookup started for id {P1}", user_id)
        user: Optional[UserLogin] = None
        try:
            user = self.require_by_id(user_id)
        except UserNotFoundError as e:
            self._core.error("", exception=e)
        self._core.information("Lookup finished")
        return user
