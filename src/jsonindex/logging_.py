"""Logging utilities.

We use Python's standard `logging` module with a single plain-text format,
`<time> <level> <logger> | <message>`, shared by every handler.

- Logs go to stderr, and to `<log_dir>/<run_name>.log` when a log_dir is given.
"""

from __future__ import annotations
import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# marks handlers installed here so repeated setup does not stack them
_HANDLER_ATTR = "_jsonindex_handler"


def setup_logging(
    level: Union[int, str] = "INFO",
    log_dir: Optional[str] = None,
    run_name: str = "jsonindex",
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Root log level
        log_dir: Directory for the log file (console only if None)
        run_name: Log file name without extension
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)
            handler.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    setattr(ch, _HANDLER_ATTR, True)
    root.addHandler(ch)

    # File
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, f"{run_name}.log"), encoding="utf-8")
        fh.setFormatter(fmt)
        setattr(fh, _HANDLER_ATTR, True)
        root.addHandler(fh)
