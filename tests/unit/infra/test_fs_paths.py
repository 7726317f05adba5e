from __future__ import annotations

"""
Unit tests for day-partitioned path resolution.

Verifies:
1. Layout and unpadded date folder naming.
2. Idempotency within a calendar day.
3. Day changes only affect the date segment.
4. Filesystem failures surface as FilesystemError.
"""

import os
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from splitlog.domain.errors import FilesystemError
from splitlog.domain.streams import StreamIdentity
from splitlog.infra.fs import date_folder, ensure_dir, resolve_daily_path


def test_date_folder_is_unpadded() -> None:
    assert date_folder(date(2024, 3, 7)) == "2024-3-7"
    assert date_folder(date(2024, 12, 25)) == "2024-12-25"


def test_resolve_layout_per_stream(log_dir: str) -> None:
    day = date(2024, 3, 7)

    general = resolve_daily_path(log_dir, StreamIdentity.GENERAL, today=day)
    data_access = resolve_daily_path(log_dir, StreamIdentity.DATA_ACCESS, today=day)

    expected_dir = Path(log_dir) / "LogFiles" / "2024-3-7"
    assert Path(general) == expected_dir / "log.txt"
    assert Path(data_access) == expected_dir / "ef_log.txt"
    assert expected_dir.is_dir()
    assert not Path(general).exists()


def test_resolve_is_idempotent_within_a_day(log_dir: str) -> None:
    first = resolve_daily_path(log_dir, StreamIdentity.GENERAL, today=date(2024, 3, 7))
    second = resolve_daily_path(log_dir, StreamIdentity.GENERAL, today=date(2024, 3, 7))

    assert first == second
    assert os.path.isdir(os.path.dirname(second))


def test_resolve_differs_only_in_date_segment(log_dir: str) -> None:
    before = Path(resolve_daily_path(log_dir, StreamIdentity.GENERAL, today=date(2024, 3, 7)))
    after = Path(resolve_daily_path(log_dir, StreamIdentity.GENERAL, today=date(2024, 3, 8)))

    assert before != after
    assert before.name == after.name
    assert before.parent.parent == after.parent.parent
    assert (before.parent.name, after.parent.name) == ("2024-3-7", "2024-3-8")


def test_resolve_uses_local_date_by_default(log_dir: str) -> None:
    path = resolve_daily_path(log_dir, StreamIdentity.GENERAL)
    assert date_folder(date.today()) in path


def test_ensure_dir_wraps_os_errors(tmp_path) -> None:
    with patch("os.makedirs", side_effect=PermissionError("denied")):
        with pytest.raises(FilesystemError):
            ensure_dir(str(tmp_path / "blocked"))


def test_resolve_fails_when_base_is_a_file(tmp_path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(FilesystemError):
        resolve_daily_path(str(blocker), StreamIdentity.GENERAL, today=date(2024, 3, 7))
