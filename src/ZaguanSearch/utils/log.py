"""ZaguanSearch logging utilities.

One package logger with a timestamp + abbreviated level prefix. Commands call
`configure_logging` once before doing any work. Log lines go to stderr, so
batch TSV written to stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
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

_FORMAT: Final[str] = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("ZaguanSearch")


def _file_handler(action: str, log_dir: str, formatter: logging.Formatter) -> logging.Handler:
    """DEBUG-level handler writing to `<log_dir>/<action>/<action>_<ts>.log`."""
    action_dir = Path(log_dir or "log") / action
    action_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%m%d%H%M%S")
    handler = logging.FileHandler(action_dir / f"{action}_{timestamp}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the ZaguanSearch logger.

    Args:
        level: Console logging level name (e.g. INFO, DEBUG).
        action: CLI command name, used for the log file path.
        log_to_file: Mirror every record, DEBUG included, to a file.
        log_dir: Base directory for log files.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    to_file = bool(log_to_file and action)
    if to_file:
        handlers.append(_file_handler(action, log_dir, formatter))

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if to_file else resolved_level)
    log.propagate = False
