from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the sample host and translates the
parsed namespace into settings overrides.
"""

import argparse
from typing import Any, Dict, List

from splitlog.domain.settings import DEVELOPMENT, PRODUCTION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the SplitLog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="splitlog",
        description="Dual-stream, day-partitioned logging demo host.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Path to an appsettings.json style settings file.",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--dev",
        dest="environment",
        action="store_const",
        const=DEVELOPMENT,
        help="Run with the verbose development pipeline.",
    )
    mode.add_argument(
        "--prod",
        dest="environment",
        action="store_const",
        const=PRODUCTION,
        help="Run with the minimal production pipeline.",
    )
    p.add_argument(
        "--log-dir",
        dest="base_dir",
        default=None,
        help="Root directory under which 'LogFiles' is created.",
    )
    p.add_argument(
        "--min-level",
        dest="minimum_level",
        default=None,
        help="Minimum severity for production (Verbose..Fatal).",
    )
    p.add_argument(
        "--trace-path",
        dest="trace_path",
        default=None,
        help="Fixed file for the data-access stream instead of the daily one.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    # --- lookup ---
    lookup = sub.add_parser("lookup", help="Look a user up by id.")
    lookup.add_argument("user_id", type=int)
    lookup.add_argument(
        "--db",
        dest="database",
        default=None,
        help="sqlite database file (default: users.db under the log directory).",
    )
    lookup.add_argument(
        "--raise",
        dest="raise_missing",
        action="store_true",
        help="Record a missing user as an Error with its traceback.",
    )

    # --- tail ---
    tail = sub.add_parser("tail", help="Print the end of today's log file.")
    tail.add_argument("stream", choices=["general", "data-access"])
    tail.add_argument("-n", "--lines", dest="n_lines", type=int, default=20)

    # --- probe ---
    probe = sub.add_parser("probe", help="Check whether a store is reachable.")
    probe.add_argument("target", help="sqlite file path or http(s) URL.")
    probe.add_argument("--timeout", type=float, default=1.0)

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into Settings field overrides.

    Only options given on the command line are returned.
    """
    overrides: Dict[str, Any] = {}
    for key in _SETTINGS_KEYS:
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return overrides


_SETTINGS_KEYS: List[str] = ["environment", "base_dir", "minimum_level", "trace_path"]
