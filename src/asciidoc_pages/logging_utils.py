#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the command-line entry point and embedding hosts."""

from __future__ import annotations

import logging
import sys
from typing import Optional

ENGINE_LOGGER_NAME = "all2md"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    engine_log_level: int | str | None = None,
) -> logging.Logger:
    """Install the console (and optional file) handlers for a build run.

    Parameters
    ----------
    log_level : int | str
        Level for the build's own records, as a number or a name ("INFO").
    log_file : str, optional
        File receiving a copy of every record, opened in append mode.
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name.
    engine_log_level : int | str, optional
        Threshold for the conversion engine's loggers. Defaults to at least
        ``WARNING`` outside trace mode, since the engine reports every
        unresolved attribute reference below that.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = _resolve_level(log_level)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(PLAIN_FORMAT)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    _attach(root, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            _attach(root, logging.FileHandler(log_file, mode="a", encoding="utf-8"), level, formatter)
        except OSError as exc:
            root.warning("Cannot open log file %s: %s", log_file, exc)
        else:
            root.debug("Copying log records to %s", log_file)

    if engine_log_level is None:
        engine_level = level if trace_mode else max(level, logging.WARNING)
    else:
        engine_level = _resolve_level(engine_log_level)
    logging.getLogger(ENGINE_LOGGER_NAME).setLevel(engine_level)

    return root
