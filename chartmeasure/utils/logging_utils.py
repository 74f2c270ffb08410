"""
Logging setup for Chart Measure.

Modules log through ``logging.getLogger(__name__)``; this module only decides
where those records go.
"""

import logging
import pathlib
import sys
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty below WARNING
QUIET_LOGGERS = ('pyqtgraph',)

# Handlers installed by setup_logging, replaced on the next call
_installed: List[logging.Handler] = []


def resolve_level(level: Union[int, str]) -> int:
    """Accept a level number or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return number


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[Union[str, pathlib.Path]] = None) -> None:
    """Send log records to stdout and, if given, append them to ``log_file``.

    Calling this again replaces the handlers of the previous call and leaves
    handlers installed by others (e.g. pytest's capture) alone.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file = pathlib.Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))

    root.debug("Logging at %s%s", logging.getLevelName(root.level),
               f" to {log_file}" if log_file else "")
