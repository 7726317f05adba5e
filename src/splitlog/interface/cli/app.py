from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: settings resolution (file, environment and
command-line overrides), one-time logging pipeline configuration, command
execution and orderly pipeline shutdown.
"""

import logging
import os
import sys
from dataclasses import replace
from typing import List, Optional

from splitlog.core.users import UserDirectory, open_database
from splitlog.domain.errors import ConfigurationError, FilesystemError
from splitlog.domain.settings import Settings, load_settings
from splitlog.domain.streams import StreamIdentity
from splitlog.infra.fs import resolve_daily_path
from splitlog.infra.logging import LoggingCore, configure_from_settings
from splitlog.infra.probe import probe_http, probe_sqlite
from splitlog.infra.trace import TraceCollector
from splitlog.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "users.db"

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 configuration error).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Settings resolution (defaults < file < environment < CLI)
    settings = load_settings(args.settings_path)
    settings = replace(settings, **cli_args.args_to_overrides(args))

    # 3. Logging bootstrap, exactly once per process
    core = LoggingCore()
    try:
        configure_from_settings(core, settings)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Logging configured in {settings.environment} mode under {settings.base_dir}")

    # 4. Command dispatch
    try:
        if args.command == "lookup":
            return _run_lookup(core, settings, args.user_id, args.database, args.raise_missing)
        if args.command == "tail":
            return _run_tail(settings, args.stream, args.n_lines)
        if args.command == "probe":
            return _run_probe(args.target, args.timeout)
        parser.error(f"Unknown command: {args.command}")
        return 2
    except KeyboardInterrupt:
        core.warning("Interrupted by user")
        return 130
    except Exception as e:
        core.fatal("Command {P1} failed", args.command, exception=e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        core.shutdown()

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_lookup(
        core: LoggingCore,
        settings: Settings,
        user_id: int,
        database: Optional[str],
        raise_missing: bool,
) -> int:
    """Look a user up with the statement trace routed to the data-access stream."""
    collector = TraceCollector(settings.base_dir, fixed_path=settings.trace_path)
    db_path = database or os.path.join(settings.base_dir, DEFAULT_DATABASE_NAME)

    conn = open_database(db_path, collector)
    try:
        directory = UserDirectory(conn, core)
        directory.ensure_schema()
        directory.seed()

        if raise_missing:
            user = directory.lookup_with_error_log(user_id)
        else:
            user = directory.find_by_id(user_id)
    finally:
        conn.close()

    if user is None:
        print(f"No user with an id of {user_id}")
        return 1
    print(f"{user.id}: {user.email_address}")
    return 0


def _run_tail(settings: Settings, stream_name: str, n_lines: int) -> int:
    """Print the last lines of today's file for a stream."""
    stream = StreamIdentity.GENERAL if stream_name == "general" else StreamIdentity.DATA_ACCESS
    try:
        if stream is StreamIdentity.DATA_ACCESS and settings.trace_path:
            path = settings.trace_path
        else:
            path = resolve_daily_path(settings.base_dir, stream)
    except FilesystemError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    content = _tail_lines(path, n_lines)
    if content is None:
        print(f"Log file not found: {path}", file=sys.stderr)
        return 1
    sys.stdout.write(content)
    return 0


def _run_probe(target: str, timeout: float) -> int:
    if target.startswith(("http://", "https://")):
        result = probe_http(target, timeout=timeout)
    else:
        result = probe_sqlite(target, timeout=timeout)
    print(result.value)
    return 0 if result else 1

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _tail_lines(path: str, n_lines: int) -> Optional[str]:
    """Return the last lines of a text file, or None if it does not exist."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except FileNotFoundError:
        return None
    return "".join(lines[-n_lines:]) if n_lines > 0 else ""


if __name__ == "__main__":
    sys.exit(main())
