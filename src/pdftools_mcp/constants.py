#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and defaults for pdftools-mcp.

This module centralizes the default values used by the tool registry,
the argument parsers and the rendering backends, so the schema the
server publishes and the behavior the dispatcher applies never drift.
"""

from typing import Literal

SERVER_NAME = "pdftools-mcp-server"
DEFAULT_CREATOR = "pdftools-mcp"

# Tool names
TOOL_HTML_TO_PDF = "generate_pdf_from_html"
TOOL_TEXT_TO_PDF = "generate_pdf_from_text"
TOOL_MARKDOWN_TO_PDF = "generate_pdf_from_markdown"

# Subdirectories of the user's home that outputs may be written beneath
ALLOWED_OUTPUT_SUBDIRS = ("Downloads", "Documents", "Desktop")
DEFAULT_OUTPUT_SUBDIR = "Downloads"

# HTML rendering (headless browser)
DEFAULT_PAGE_FORMAT = "A4"
DEFAULT_HTML_MARGIN = "1cm"
DEFAULT_PRINT_BACKGROUND = True

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]
WAIT_UNTIL_CHOICES: tuple[str, ...] = ("load", "domcontentloaded", "networkidle", "commit")
DEFAULT_WAIT_UNTIL: WaitUntil = "networkidle"
DEFAULT_HEADLESS = True

# Text rendering (document writer), sizes in points
DEFAULT_TEXT_FONT = "Helvetica"
DEFAULT_TEXT_FONT_SIZE = 12
DEFAULT_TEXT_MARGIN = 50
DEFAULT_TEXT_LEADING_RATIO = 1.2
TEXT_TAB_SIZE = 8

# Logging
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"

# Backend dependencies as (install_name, import_name, version_spec)
DEPS_HTML_RENDER = [("playwright", "playwright", ">=1.40.0")]
DEPS_TEXT_RENDER = [("reportlab", "reportlab", ">=4.0.0")]
