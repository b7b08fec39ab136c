"""Logging setup for the pdftools-mcp server process.

stdout carries the MCP stdio transport, so every record goes to stderr,
optionally teed to a file named by ``--log-file``.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import logging
import sys

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(log_level: int | str, log_file: str | None = None, trace_mode: bool = False) -> logging.Logger:
    """Replace the root logger's handlers with the server's.

    Parameters
    ----------
    log_level : int | str
        Level number or name; unknown names fall back to INFO
    log_file : str, optional
        File that records are appended to in addition to stderr
    trace_mode : bool, default False
        Prefix records with timestamp and logger name

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = _resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning(f"Could not open log file {log_file}: {file_error}")
    elif log_file:
        root_logger.info(f"Logging to file: {log_file}")

    return root_logger
