"""Logging for a run: console channels (info, success, error) and an optional log file."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import click

from appendsw.core.exceptions import FileIOError

LOGGER_NAME = "appendsw"

#: Level of the "success" channel, between INFO and WARNING.
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_STYLES = {
    logging.DEBUG: {"dim": True},
    logging.INFO: {"fg": "cyan"},
    SUCCESS: {"fg": "green"},
    logging.WARNING: {"fg": "yellow"},
    logging.ERROR: {"fg": "red"},
}


def get_logger() -> logging.Logger:
    """Return the appendsw logger."""
    return logging.getLogger(LOGGER_NAME)


def log_success(msg: str, *args: object) -> None:
    """Log on the success channel."""
    get_logger().log(SUCCESS, msg, *args)


class ConsoleHandler(logging.Handler):
    """Echo records through click: errors and warnings to stderr, the rest to stdout."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            style = _STYLES.get(record.levelno, {})
            click.secho(msg, err=record.levelno >= logging.WARNING, **style)
        except Exception:
            self.handleError(record)


def configure_console(logs_enabled: bool = True) -> ConsoleHandler:
    """
    Install the console handler on the appendsw logger, replacing any previous one.
    With logs disabled the handler only lets ERROR and above through.
    """
    logger = get_logger()
    for existing in list(logger.handlers):
        if isinstance(existing, ConsoleHandler):
            logger.removeHandler(existing)
    if logger.level == logging.NOTSET or logger.level > logging.INFO:
        logger.setLevel(logging.INFO)

    handler = ConsoleHandler()
    handler.setLevel(logging.INFO if logs_enabled else logging.ERROR)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return handler


@contextmanager
def run_log_context(
    log_file: Path,
    verbose: bool = False,
) -> Generator[logging.Logger, None, None]:
    """
    Attach a file handler to the appendsw logger for the duration of the context.
    Log file is UTF-8; format: timestamp [LEVEL] message.
    Raises FileIOError if the log file cannot be opened.
    """
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        raise FileIOError(f"Cannot open log file {log_file}: {e.strerror or e}", path=str(log_file)) from e

    logger = get_logger()
    previous_level = logger.level
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        handler.close()
        logger.setLevel(previous_level)
