"""Logging setup for the dbaccess command line.

Library modules only create loggers; handlers are attached here, by the
entry point, so applications embedding dbaccess keep their own setup.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Package loggers mirrored to a file when log_dir is given
FILE_LOGGERS = ["dbaccess"]


def resolve_level(level: Union[int, str]) -> int:
    """Accept a level number or a name such as "debug"; unknown names mean WARNING."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: Optional[str] = None):
    """Attach a console handler to the root logger.

    With log_dir, each logger in FILE_LOGGERS also writes to
    `<log_dir>/<name>.log`, rotated at 5 MB with 3 backups, so connection
    and statement failures survive the terminal session.

    A root logger that already has handlers is left alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)
    for name in FILE_LOGGERS:
        handler = RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logging.getLogger(name).addHandler(handler)
