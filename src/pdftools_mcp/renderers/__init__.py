#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/pdftools_mcp/renderers/__init__.py
"""Rendering backends used by the tool dispatcher.

Two capabilities are consumed by the dispatcher and injected into it:

- HtmlRenderer: turns an HTML document plus print options into a PDF file.
  The default implementation drives headless Chromium through Playwright.
- DocumentWriter: lays plain text out on pages and streams a PDF to disk.
  The default implementation uses ReportLab's Platypus framework.

Both backends import their third-party libraries lazily, so the registry
and the path checks stay usable (and testable) without them installed.

"""

from pdftools_mcp.renderers.base import DocumentWriter, HtmlRenderer
from pdftools_mcp.renderers.html import PlaywrightHtmlRenderer
from pdftools_mcp.renderers.text import ReportLabDocumentWriter

__all__ = [
    "DocumentWriter",
    "HtmlRenderer",
    "PlaywrightHtmlRenderer",
    "ReportLabDocumentWriter",
]
