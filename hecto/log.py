"""File logging for the editor.

The editor owns the terminal while it runs, so log records go to a file in
the user's log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import platformdirs

LOG_LEVEL_ENV = "HECTO_LOG_LEVEL"
LOG_FILE_NAME = "hecto.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def get_log_path() -> Path:
    return Path(platformdirs.user_log_dir("hecto", "hecto")) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(log_path: Optional[Path] = None) -> Optional[Path]:
    """Attach a file handler to the ``hecto`` logger.

    Returns the log file path, or None if the log directory is unusable.
    """
    path = log_path or get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("hecto")
    root.addHandler(handler)
    root.setLevel(_level_from_env())
    # Keep records away from the terminal's last-resort stderr handler
    root.propagate = False
    logger.debug(f"Logging to {path}")
    return path
