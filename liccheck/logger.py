"""Diagnostic log written to a file in the temporary directory."""

from __future__ import annotations

import logging
import os
import tempfile

_LOGGER_NAME = "liccheck"
_LOG_FILE = "open-license.log"
_FORMAT = "%(asctime)s[%(levelname)s] (%(filename)s:%(lineno)d) %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_active: dict = {"path": None, "handler": None}


def log_path() -> str:
    """Return the path of the log file."""
    if os.name == "posix":
        folder = os.environ.get("TMPDIR", "/tmp")
        return f"{folder}/{_LOG_FILE}"
    return os.path.join(tempfile.gettempdir(), _LOG_FILE)


def get_logger() -> logging.Logger:
    """Return the package logger, appending to the log file when it can be opened."""
    logger = logging.getLogger(_LOGGER_NAME)
    path = log_path()
    if _active["path"] != path:
        old = _active["handler"]
        if old is not None:
            logger.removeHandler(old)
            old.close()
        try:
            handler: logging.Handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        _active["path"] = path
        _active["handler"] = handler
    return logger