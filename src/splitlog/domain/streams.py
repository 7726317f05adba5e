from __future__ import annotations

from enum import Enum


class StreamIdentity(Enum):
    """Independent logical log destinations."""

    GENERAL = "log.txt"
    DATA_ACCESS = "ef_log.txt"

    @property
    def filename(self) -> str:
        return self.value
