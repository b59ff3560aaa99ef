"""
Logging setup for KCM Search.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_DIR = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state") / "kcm-search"
DEFAULT_LOG_PATH = LOG_DIR / "kcm-search.log"


def configure(log_path: Optional[Path] = None, *, console_level: str = "INFO") -> None:
    """
    Configure loguru for the application.

    Configuration happens only once per process; later calls are no-ops.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or DEFAULT_LOG_PATH

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=console_level)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _logger.warning("Log directory {} unavailable ({}); logging to console only.", target.parent, exc)
    else:
        _logger.add(
            target,
            level="DEBUG",
            rotation="5 MB",
            retention=3,
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
        )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
