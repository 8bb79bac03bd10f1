"""Whole-file log reading."""

from pathlib import Path
from typing import Optional


class LogUnavailableError(OSError):
    """The game log could not be read; no partial result is produced."""

    def __init__(self, path: Optional[Path], reason: str) -> None:
        super().__init__(f"Log unavailable ({path}): {reason}")
        self.path = path
        self.reason = reason


def read_log_lines(log_path: Optional[Path]) -> list[str]:
    """
    Read all lines of the log file (without line terminators).

    Invalid UTF-8 sequences are replaced rather than rejected, since the
    game occasionally writes partial multi-byte characters. Lines are split
    on newlines only.

    Raises:
        LogUnavailableError: If no path is known or the file cannot be read
    """
    if log_path is None:
        raise LogUnavailableError(None, "log file not found")

    try:
        with open(log_path, "r", encoding="utf-8", errors="replace") as f:
            return [line.rstrip("\n") for line in f]
    except OSError as e:
        raise LogUnavailableError(log_path, e.strerror or str(e)) from e
