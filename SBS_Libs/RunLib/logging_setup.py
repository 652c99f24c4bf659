"""
Logging configuration for the SideBySide command line.

Library modules only create module-level loggers; handlers are installed here
by the entry point. Console output is INFO (DEBUG when verbose). The optional
log file always records DEBUG and rotates at midnight, keeping two weeks of
history.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

from SBS_Libs.constants import (
    APP_DATA_DIR_NAME,
    CONSOLE_DATE_FORMAT,
    CONSOLE_LOG_FORMAT,
    FILE_DATE_FORMAT,
    FILE_LOG_FORMAT,
    LOG_DIR_NAME,
    LOG_FILE_NAME,
    LOG_RETENTION_DAYS,
)

_HANDLER_MARKER = "_sidebyside_handler"


def default_log_dir() -> Path:
    """Per-user log directory (APPDATA on Windows, XDG state dir elsewhere)."""
    base = os.environ.get("APPDATA") or os.environ.get("XDG_STATE_HOME")
    if base:
        return Path(base) / APP_DATA_DIR_NAME / LOG_DIR_NAME
    return Path.home() / ".local" / "state" / APP_DATA_DIR_NAME / LOG_DIR_NAME


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def configure_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Install console (and optionally file) handlers on the root logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        verbose: Show DEBUG messages on the console
        log_dir: Directory for the rotating log file (None disables it)

    Returns:
        The configured root logger
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(logging.DEBUG)

    console = _mark(logging.StreamHandler(sys.stderr))
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT, CONSOLE_DATE_FORMAT))
    root.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = _mark(logging.handlers.TimedRotatingFileHandler(
                log_dir / LOG_FILE_NAME,
                when="midnight",
                backupCount=LOG_RETENTION_DAYS,
                encoding="utf-8",
            ))
        except OSError as e:
            root.warning(f"Could not open log file in {log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
            root.addHandler(file_handler)

    return root
