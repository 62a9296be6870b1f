"""MyAnimeList client logging utilities.

The package logs through a single named logger. Applications that want the
library's own console/file format call `configure_logging`; otherwise records
propagate to whatever the host application configured.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        """Format one log record with an abbreviated level.

        Args:
            record: Logging record.

        Returns:
            Formatted message string.
        """
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("MyAnimeList")
log.addHandler(logging.NullHandler())


def configure_logging(
    *,
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Configure the MyAnimeList logger.

    Uses format: mm-dd HH:MM:SS [<LVL>] <message>
    where LVL is one of: DEBG/INFO/WARN/ERRO.

    Args:
        level: Logging level for the console handler (e.g., INFO, DEBUG).
        log_to_file: Whether to mirror DEBUG-level logs to a file.
        log_dir: Directory for the log file.

    Returns:
        Path of the log file when file logging is enabled, otherwise None.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    formatter = _AbbrevLevelFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    log_path: Path | None = None
    if log_to_file:
        timestamp = datetime.now().strftime("%m%d%H%M%S")
        log_root = Path(log_dir or "log")
        log_root.mkdir(parents=True, exist_ok=True)
        log_path = log_root / f"myanimelist_{timestamp}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if log_to_file else resolved_level)
    log.propagate = False
    return log_path
