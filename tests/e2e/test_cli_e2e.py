from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and the log files left on disk.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "splitlog" / "main.py"


def run_cli(
        args: List[str],
        cwd: Optional[Path] = None,
        env_overrides: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and strips SPLITLOG_*
    variables so the host environment cannot leak into the run.
    """
    env = {k: v for k, v in os.environ.items() if not k.startswith("SPLITLOG_")}
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.update(env_overrides or {})

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def _only_day_folder(base: Path) -> Path:
    folders = list((base / "LogFiles").iterdir())
    assert len(folders) == 1, folders
    return folders[0]


def test_lookup_found_in_development(tmp_path: Path) -> None:
    """TC-01: A found user is logged to file and console; SQL goes to ef_log.txt."""
    result = run_cli(["--dev", "--log-dir", str(tmp_path), "lookup", "1"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "karen@example.com" in result.stdout
    assert "Found user with email address karen@example.com" in result.stderr

    day = _only_day_folder(tmp_path)
    assert "[Information] Found user with email address karen@example.com" in (
        day / "log.txt").read_text(encoding="utf-8")
    assert "UserLogin" in (day / "ef_log.txt").read_text(encoding="utf-8")


def test_lookup_missing_with_error_log(tmp_path: Path) -> None:
    """TC-02: --raise records the missing user as an Error with a traceback."""
    result = run_cli(["--prod", "--log-dir", str(tmp_path), "lookup", "99", "--raise"], cwd=tmp_path)

    assert result.returncode == 1
    content = (_only_day_folder(tmp_path) / "log.txt").read_text(encoding="utf-8")
    assert "[Error]" in content
    assert "UserNotFoundError" in content


def test_production_threshold_from_settings_file(tmp_path: Path) -> None:
    """TC-03: MinimumLevel from appsettings.json hides Information records."""
    settings = tmp_path / "appsettings.json"
    settings.write_text(json.dumps({
        "Environment": "Production",
        "LogDirectory": str(tmp_path),
        "MinimumLevel": "Warning",
    }), encoding="utf-8")

    result = run_cli(["--settings", str(settings), "lookup", "1"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    general = _only_day_folder(tmp_path) / "log.txt"
    assert not general.exists() or "Found user" not in general.read_text(encoding="utf-8")


def test_fixed_trace_path_from_environment(tmp_path: Path) -> None:
    """TC-04: SPLITLOG_TRACE_PATH pins the data-access stream to one file."""
    trace = tmp_path / "trace" / "ef.txt"

    result = run_cli(
        ["--log-dir", str(tmp_path), "lookup", "2"],
        cwd=tmp_path,
        env_overrides={"SPLITLOG_TRACE_PATH": str(trace)},
    )

    assert result.returncode == 0, result.stderr
    assert "UserLogin" in trace.read_text(encoding="utf-8")
    assert not (_only_day_folder(tmp_path) / "ef_log.txt").exists()


def test_invalid_level_is_configuration_error(tmp_path: Path) -> None:
    """TC-05: An unknown severity aborts startup with exit code 2."""
    result = run_cli(["--prod", "--log-dir", str(tmp_path), "--min-level", "Loud", "lookup", "1"], cwd=tmp_path)

    assert result.returncode == 2
    assert "Unknown severity level" in result.stderr


def test_tail_general_stream(tmp_path: Path) -> None:
    """TC-06: tail prints the end of today's general log."""
    run_cli(["--prod", "--log-dir", str(tmp_path), "lookup", "3"], cwd=tmp_path)

    result = run_cli(["--prod", "--log-dir", str(tmp_path), "tail", "general", "-n", "5"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "frank@example.com" in result.stdout


def test_probe_missing_database(tmp_path: Path) -> None:
    """TC-07: probing an absent sqlite file reports not_connected."""
    result = run_cli(["--log-dir", str(tmp_path), "probe", str(tmp_path / "nope.db")], cwd=tmp_path)

    assert result.returncode == 1
    assert result.stdout.strip() == "not_connected"
