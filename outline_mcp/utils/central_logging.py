"""
Central Logging
===============
Console output for every ``outline.*`` logger, plus an optional rotating
log file (``LOG_FILE``). Called once at startup.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Config
FMT = "%(asctime)s|%(levelname)-8s|%(name)-20s|%(message)s"
FMT_DETAIL = "%(asctime)s|%(levelname)-8s|%(name)-20s|%(filename)s:%(lineno)d|%(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES, BACKUP = 10 * 1024 * 1024, 5

ROOT_LOGGER = "outline"

# State
_init = {"central": False}


class ColorFormatter(logging.Formatter):
    """Formatter with ANSI colors for console."""
    C = {10: '\033[36m', 20: '\033[32m', 30: '\033[33m', 40: '\033[31m', 50: '\033[35m'}
    R = '\033[0m'

    def format(self, r):
        return f"{self.C.get(r.levelno, '')}{super().format(r)}{self.R}"


def _console_handler(level: int) -> logging.Handler:
    # stderr: stdout may be claimed by a stdio MCP client
    h = logging.StreamHandler(sys.stderr)
    h.setLevel(level)
    fmt_cls = ColorFormatter if sys.stderr.isatty() else logging.Formatter
    h.setFormatter(fmt_cls(FMT, DATE_FMT))
    return h


def _file_handler(path: str, level: int) -> RotatingFileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    h = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP, encoding='utf-8')
    h.setLevel(level)
    h.setFormatter(logging.Formatter(FMT_DETAIL, DATE_FMT))
    return h


def setup_central_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the ``outline`` logger tree. Idempotent."""
    root = logging.getLogger(ROOT_LOGGER)
    lvl = logging.getLevelName(level.upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    root.setLevel(lvl)

    if _init["central"]:
        return root

    root.addHandler(_console_handler(lvl))
    if log_file:
        root.addHandler(_file_handler(log_file, lvl))
    root.propagate = False

    _init["central"] = True
    root.info(f"Logging initialized (level={logging.getLevelName(lvl)}, file={log_file or '-'})")
    return root

