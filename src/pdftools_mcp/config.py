"""Configuration management for the pdftools-mcp server.

This module handles configuration from environment variables and CLI arguments,
with CLI arguments taking precedence over environment variables.

All configuration is set at server startup. The allowed output directories
are deliberately not part of it: they are always derived from the invoking
user's home directory.

Classes
-------
- ServerConfig: Server configuration

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

from pdftools_mcp.constants import (
    DEFAULT_HEADLESS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_WAIT_UNTIL,
    LOG_LEVEL_CHOICES,
    WAIT_UNTIL_CHOICES,
    WaitUntil,
)
from pdftools_mcp.options import CloneFrozenMixin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig(CloneFrozenMixin):
    """MCP server configuration.

    Attributes
    ----------
    log_level : str
        Logging level (DEBUG|INFO|WARNING|ERROR|CRITICAL)
    log_file : str | None
        Optional file that log records are also written to
    headless : bool
        Whether Chromium is launched without a window (default: True)
    wait_until : str
        Page load state to wait for before printing HTML
        (load|domcontentloaded|networkidle|commit, default: networkidle)

    """

    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None
    headless: bool = DEFAULT_HEADLESS
    wait_until: WaitUntil = DEFAULT_WAIT_UNTIL

    def validate(self) -> None:
        """Validate configuration consistency.

        Raises
        ------
        ValueError
            If configuration is invalid

        """
        if self.log_level not in LOG_LEVEL_CHOICES:
            raise ValueError(f"Invalid log level: {self.log_level!r}. Must be one of: {', '.join(LOG_LEVEL_CHOICES)}")

        if self.wait_until not in WAIT_UNTIL_CHOICES:
            raise ValueError(
                f"Invalid wait_until: {self.wait_until!r}. Must be one of: {', '.join(WAIT_UNTIL_CHOICES)}"
            )


def _str_to_bool(value: str | None, default: bool = False) -> bool:
    """Convert string to boolean.

    Parameters
    ----------
    value : str | None
        String value (True iif: "true", "t", "1", "yes", "on")
    default : bool, default False
        Default value if input is None

    Returns
    -------
    bool
        Boolean value

    """
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "t", "on")


def _validate_log_level(value: str | None, default: str = DEFAULT_LOG_LEVEL) -> str:
    """Validate and normalize log level string.

    Raises
    ------
    ValueError
        If value is not a valid log level

    """
    if value is None:
        return default

    normalized = value.upper().strip()
    if normalized not in LOG_LEVEL_CHOICES:
        raise ValueError(f"Invalid log level: {value!r}. Must be one of: {', '.join(LOG_LEVEL_CHOICES)}")

    return normalized


def _validate_wait_until(value: str | None, default: WaitUntil = DEFAULT_WAIT_UNTIL) -> WaitUntil:
    """Validate and normalize a page load state name.

    Raises
    ------
    ValueError
        If value is not a load state Playwright understands

    """
    if value is None:
        return default

    normalized = value.lower().strip()
    if normalized not in WAIT_UNTIL_CHOICES:
        raise ValueError(f"Invalid wait_until: {value!r}. Must be one of: {', '.join(WAIT_UNTIL_CHOICES)}")

    return normalized  # type: ignore[return-value]


def load_config_from_env() -> ServerConfig:
    """Load configuration from environment variables.

    Returns
    -------
    ServerConfig
        Configuration loaded from environment

    """
    return ServerConfig(
        log_level=_validate_log_level(os.getenv("PDFTOOLS_MCP_LOG_LEVEL")),
        log_file=os.getenv("PDFTOOLS_MCP_LOG_FILE") or None,
        headless=_str_to_bool(os.getenv("PDFTOOLS_MCP_HEADLESS"), default=DEFAULT_HEADLESS),
        wait_until=_validate_wait_until(os.getenv("PDFTOOLS_MCP_WAIT_UNTIL")),
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for the server CLI.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser

    """
    parser = argparse.ArgumentParser(
        prog="pdftools-mcp",
        description="MCP server generating PDFs from HTML, plain text and Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output files may only be written beneath ~/Downloads, ~/Documents or ~/Desktop.

Environment Variables:
  PDFTOOLS_MCP_LOG_LEVEL     Logging level (default: INFO)
  PDFTOOLS_MCP_LOG_FILE      Also write log records to this file
  PDFTOOLS_MCP_HEADLESS      Launch Chromium headless (default: true)
  PDFTOOLS_MCP_WAIT_UNTIL    Load state to await before printing HTML:
                             load, domcontentloaded, networkidle, commit (default: networkidle)

Examples:
  # Basic usage over stdio
  pdftools-mcp

  # Verbose logging to a file
  pdftools-mcp --log-level debug --log-file /tmp/pdftools-mcp.log
        """,
    )

    try:
        version_string = f'pdftools-mcp {version("pdftools-mcp")}'
    except PackageNotFoundError:
        version_string = "pdftools-mcp (version unknown)"

    parser.add_argument("--version", action="version", version=version_string)

    headless_group = parser.add_mutually_exclusive_group()
    headless_group.add_argument(
        "--headless", action="store_true", dest="headless", help="Launch Chromium headless (default: true)"
    )
    headless_group.add_argument(
        "--no-headless", action="store_false", dest="headless", help="Launch Chromium with a visible window"
    )
    parser.set_defaults(headless=None)  # None = use env default

    parser.add_argument(
        "--wait-until",
        type=str,
        choices=list(WAIT_UNTIL_CHOICES),
        help="Page load state to await before printing HTML (default: networkidle)",
    )

    parser.add_argument(
        "--log-level", type=str, help="Logging level: DEBUG, INFO, WARNING, ERROR (case-insensitive, default: INFO)"
    )
    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write log records to this file")

    return parser


def load_config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Load configuration from parsed CLI arguments, using env as fallback.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments

    Returns
    -------
    ServerConfig
        Merged configuration (CLI overrides env)

    """
    config = load_config_from_env()

    updated_kwargs: dict[str, object] = {}

    if args.headless is not None:
        updated_kwargs.update(headless=args.headless)

    if args.wait_until is not None:
        updated_kwargs.update(wait_until=_validate_wait_until(args.wait_until))

    if args.log_level is not None:
        updated_kwargs.update(log_level=_validate_log_level(args.log_level))

    if args.log_file is not None:
        updated_kwargs.update(log_file=args.log_file)

    if updated_kwargs:
        config = config.create_updated(**updated_kwargs)

    return config


def load_config(argv: list[str] | None = None) -> ServerConfig:
    """Load and validate configuration from CLI args and environment.

    Parameters
    ----------
    argv : list[str] | None
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    ServerConfig
        Validated configuration

    Raises
    ------
    ValueError
        If configuration is invalid

    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    config = load_config_from_args(args)
    config.validate()

    return config
