"""
Logging configuration for the Food Storage API.

``setup_logging`` installs a console handler and, when ``LOG_FILE`` is
set, a size-rotated file handler on the root logger, so records from
the services, the store and the request handlers share one format.
The handlers carry fixed names; calling ``setup_logging`` again (every
``create_app`` does) only adjusts the level.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "food_api.console"
FILE_HANDLER = "food_api.file"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    handlers: List[logging.Handler] = [console]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.set_name(FILE_HANDLER)
        handlers.append(file_handler)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the application.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to mirror log records into.  Missing parent directories
        are created.  Omitted or empty means console only.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    installed = {handler.get_name() for handler in root.handlers}
    if CONSOLE_HANDLER in installed:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)
