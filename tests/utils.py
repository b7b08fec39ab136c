"""Test utilities for the pdftools-mcp test suite.

This module provides in-memory stand-ins for the rendering backends that
record what the dispatcher hands them, so tool behavior can be checked
without launching a browser.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pdftools_mcp.exceptions import BackendFailureError
from pdftools_mcp.options import HtmlPrintOptions, TextLayoutOptions
from pdftools_mcp.renderers.base import DocumentWriter, HtmlRenderer

FAKE_PDF_BYTES = b"%PDF-1.4\n% fake\n%%EOF\n"


@dataclass
class RenderCall:
    """One recorded backend invocation."""

    content: str
    output_path: Path
    options: object


@dataclass
class RecordingHtmlRenderer(HtmlRenderer):
    """HTML renderer that records calls and writes a placeholder PDF.

    When ``fail_with`` is set, the renderer writes a partial file first and
    then raises it, mimicking a browser dying mid-print.
    """

    fail_with: Exception | None = None
    calls: list[RenderCall] = field(default_factory=list)

    async def render(self, html: str, output_path: Path, options: HtmlPrintOptions) -> None:
        self.calls.append(RenderCall(html, output_path, options))
        if self.fail_with is not None:
            output_path.write_bytes(b"%PDF-1.4\n")
            raise self.fail_with
        output_path.write_bytes(FAKE_PDF_BYTES)


@dataclass
class RecordingDocumentWriter(DocumentWriter):
    """Document writer that records calls and writes a placeholder PDF."""

    fail_with: Exception | None = None
    calls: list[RenderCall] = field(default_factory=list)

    async def write(self, text: str, output_path: Path, options: TextLayoutOptions) -> None:
        self.calls.append(RenderCall(text, output_path, options))
        if self.fail_with is not None:
            raise self.fail_with
        output_path.write_bytes(FAKE_PDF_BYTES)


def backend_failure(message: str = "browser crashed") -> BackendFailureError:
    """Build the error a failing rendering backend raises."""
    return BackendFailureError(f"HTML rendering failed: {message}", rendering_stage="print")
