"""penguin_tracks.logging_funcs.logging.py

Standardised logging setup for the penguin_tracks tools.

Example :

from penguin_tracks.logging_funcs.logging import set_loggers

log = set_loggers(
        log_dir="/tmp/penguin_plots",
        log_format="%(levelname)s : %(asctime)s %(name)s : %(message)s",
        default_log_level=logging.INFO,
        )

"""

import logging
import os
import sys
from types import TracebackType
from typing import Type

DEFAULT_LOG_FORMAT = "%(asctime)s %(name)-12s %(levelname)-8s %(message)s"

# log file names written to log_dir, and the minimum level each one records
LOG_FILES = {
    "info.log": logging.INFO,
    "warning.log": logging.WARNING,
    "error.log": logging.ERROR,
}


def set_loggers(
    log_dir: str | None = None,
    log_name: str = "",
    log_format: str = DEFAULT_LOG_FORMAT,
    default_log_level: int = logging.INFO,
) -> logging.Logger:
    """
    Setup Logging handlers
    - direct all allowed levels to stdout
    - if log_dir is given:
        - direct log.INFO (including log.ERROR, log.WARNING) -> info.log
        - direct log.WARNING (including log.ERROR) -> warning.log
        - direct log.ERROR -> error.log
        - direct log.DEBUG (all levels) -> debug.log, only when default_log_level is DEBUG
    - set maximum allowed log level (default is log.INFO, ie no DEBUG messages)

    Handlers added by a previous call are removed first, so calling this twice
    does not duplicate output.

    Args:
        log_dir (str|None) : directory to write log files to. If None only log to stdout
        log_name (str) : log name, default is "" (root logger)
        log_format (str) : format string to use in logger
        default_log_level(int): default log level, default is logging.INFO

    Returns:
        logging.Logger: the configured logger
    """

    log = logging.getLogger(log_name)
    for handler in list(log.handlers):
        if getattr(handler, "penguin_tracks_handler", False):
            log.removeHandler(handler)
            handler.close()

    log_formatter = logging.Formatter(log_format, datefmt="%d/%m/%Y %H:%M:%S")

    handlers: list[logging.Handler] = []

    # log messages -> stdout (include all depending on log.setLevel(), at end of function)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(default_log_level)
    handlers.append(stream_handler)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)

        for file_name, level in LOG_FILES.items():
            file_handler = logging.FileHandler(os.path.join(log_dir, file_name), mode="w")
            file_handler.setLevel(level)
            handlers.append(file_handler)

        # include all allowed log levels up to DEBUG
        if default_log_level == logging.DEBUG:
            file_handler_debug = logging.FileHandler(os.path.join(log_dir, "debug.log"), mode="w")
            file_handler_debug.setLevel(logging.DEBUG)
            handlers.append(file_handler_debug)

    for handler in handlers:
        handler.setFormatter(log_formatter)
        setattr(handler, "penguin_tracks_handler", True)
        log.addHandler(handler)

    log.setLevel(default_log_level)

    if log_dir is not None:
        log.info("log files written to %s", log_dir)

    return log


def exception_hook(
    exc_type: Type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None
) -> None:
    """Logs exception traceback output to the error log, instead of just to the console.

    Install with `sys.excepthook = exception_hook`

    Args:
        exc_type (Type[BaseException]): The exception type.
        exc_value (BaseException): The exception instance.
        exc_traceback (TracebackType): The traceback object.
    """
    log = logging.getLogger("")
    log.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))
