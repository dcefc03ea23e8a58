"""
=================
Logging Utilities
=================

This module contains utilities for configuring logging.

"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from loguru import logger


def configure_logging_to_terminal(verbosity: int, long_format: bool = True) -> None:
    """Configure logging to print to the sys.stdout.

    Parameters
    ----------
    verbosity
        The verbosity level of the logging. 0 logs at the WARNING level, 1 logs
        at the INFO level, and 2 logs at the DEBUG level.
    long_format
        Whether to use the long format for logging messages, which includes the
        log level and, where bound, the configuration source being loaded.
    """
    _clear_default_configuration()
    _add_logging_sink(
        sink=sys.stdout,
        verbosity=verbosity,
        long_format=long_format,
        colorize=True,
    )


def configure_logging_to_file(log_file: Path) -> None:
    """Configure logging to write debug output to the provided file.

    Parameters
    ----------
    log_file
        The file to write log messages to.
    """
    _add_logging_sink(
        log_file,
        verbosity=2,
        long_format=True,
        colorize=False,
    )


def _clear_default_configuration() -> None:
    try:
        logger.remove(0)  # Clear default configuration
    except ValueError:
        pass


def _add_logging_sink(
    sink: Path | TextIO,
    verbosity: int,
    long_format: bool,
    colorize: bool,
) -> int:
    log_formatter = _LogFormatter(long_format)
    logging_level = _get_log_level(verbosity)
    return logger.add(
        sink,
        colorize=colorize,
        level=logging_level,
        format=log_formatter.format,
    )


class _LogFormatter:
    time = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>"
    level = "<level>{level: <8}</level>"
    source = "<cyan>{extra[source]}</cyan> - <cyan>{name}</cyan>:<cyan>{line}</cyan>"
    short_name_and_line = "<cyan>{name}</cyan>:<cyan>{line}</cyan>"
    message = "<level>{message}</level>"

    def __init__(self, long_format: bool = False):
        self.long_format = long_format

    if TYPE_CHECKING:
        from loguru import Record

    def format(self, record: Record) -> str:
        fmt = self.time + " | "

        if self.long_format:
            fmt += self.level + " | "

        if self.long_format and "source" in record["extra"]:
            fmt += self.source + " - "
        else:
            fmt += self.short_name_and_line + " - "

        fmt += self.message + "\n{exception}"
        return fmt


def _get_log_level(verbosity: int) -> str:
    if verbosity == 0:
        return "WARNING"
    elif verbosity == 1:
        return "INFO"
    elif verbosity >= 2:
        return "DEBUG"
    else:
        raise ValueError(f"Invalid verbosity level: {verbosity}")
