"""
Reusable logging and print setup for all parts of the project.

Functions:
    setup_logging      - Configure and return a logger.
    set_print_logger   - Set the logger for print_warning and print_error.
    color_disabled     - Whether NO_COLOR / TERM=dumb asks for plain output.
    print_warning      - Print and log a warning message.
    print_error        - Print and log an error message.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.text import Text

# Module-level variable to hold the logger for the print_* helpers
_print_logger: Optional[logging.Logger] = None

LOG_FORMAT = '%(asctime)s %(levelname)s %(process)d %(message)s'


def setup_logging(app_name: str = "deps-try", loglevel: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the application.
    Logs to a file in ~/.<app_name>/log.txt or to a custom logfile.
    Returns the configured logger.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel)
    if logfile is None:
        log_dir = os.path.expanduser(f"~/.{app_name}")
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, "log.txt")
    handler = logging.FileHandler(logfile)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug("Logger initialized for %s", app_name)
    return logger


def set_print_logger(logger: logging.Logger):
    """
    Set the logger to be used by print_warning and print_error.
    """
    global _print_logger
    _print_logger = logger


def color_disabled() -> bool:
    """True when the environment asks for uncolored output."""
    return bool(os.environ.get("NO_COLOR")) or os.environ.get("TERM") == "dumb"


def _stderr_console() -> Console:
    # Built per call so redirected streams (tests, pipes) are honoured.
    return Console(file=sys.stderr, no_color=color_disabled(), highlight=False)


def _print_styled(label: str, style: str, message: str):
    if color_disabled():
        _stderr_console().print(Text(f"{label}: {message}"), soft_wrap=True)
    else:
        _stderr_console().print(Text(message, style=style), soft_wrap=True)


def print_warning(message: str):
    """
    Print a bold yellow warning to stderr and log it at warning level.
    """
    _print_styled("WARNING", "bold yellow", message)
    if _print_logger is not None:
        _print_logger.warning(message)


def print_error(message: str):
    """
    Print and log an error message (stderr and error level), using the logger set by set_print_logger.
    """
    _print_styled("ERROR", "bold red", message)
    if _print_logger is not None:
        _print_logger.error(message)
