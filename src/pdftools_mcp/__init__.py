"""MCP server generating PDF documents from HTML, plain text and Markdown.

This package provides a Model Context Protocol (MCP) server that exposes
three document-generation tools to LLMs:

- generate_pdf_from_html: Print HTML to PDF with headless Chromium
- generate_pdf_from_text: Lay plain text out with ReportLab
- generate_pdf_from_markdown: Convert a small Markdown subset to HTML, then print it

Output files may only be written beneath the invoking user's Downloads,
Documents or Desktop directory.

Usage
-----
Run the server from command line:
    $ pdftools-mcp

With verbose logging:
    $ pdftools-mcp --log-level debug

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from pdftools_mcp.dispatcher import PdfToolDispatcher
from pdftools_mcp.exceptions import PathNotAllowedError, PdfToolsError, UnknownToolError
from pdftools_mcp.markdown_lite import markdown_to_html
from pdftools_mcp.schemas import GenerationResult, ToolDescriptor, list_tools
from pdftools_mcp.security import validate_output_path

__all__ = [
    "GenerationResult",
    "PathNotAllowedError",
    "PdfToolDispatcher",
    "PdfToolsError",
    "ToolDescriptor",
    "UnknownToolError",
    "list_tools",
    "markdown_to_html",
    "validate_output_path",
]
