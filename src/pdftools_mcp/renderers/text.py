#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/renderers/text.py
"""Plain text to PDF writing with ReportLab.

This module provides the ReportLabDocumentWriter class which lays plain
text out as a single flowing text block using ReportLab's Platypus
framework. Line wrapping and page breaking are left to ReportLab; hard
newlines in the input are kept as line breaks.

The PDF is streamed into a file handle opened with secure_open_for_write.
The write is reported complete only after that handle has been flushed,
synced and closed.

"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path
from typing import BinaryIO
from xml.sax.saxutils import escape

from pdftools_mcp.constants import DEFAULT_CREATOR, DEPS_TEXT_RENDER, TEXT_TAB_SIZE
from pdftools_mcp.exceptions import BackendFailureError, FilesystemError, PdfToolsError
from pdftools_mcp.options import TextLayoutOptions
from pdftools_mcp.renderers.base import DocumentWriter
from pdftools_mcp.security import secure_open_for_write
from pdftools_mcp.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)


_LEADING_SPACES = re.compile(r"^ +", re.MULTILINE)
_SPACE_RUNS = re.compile(r" {2,}")


def text_to_paragraph_markup(text: str) -> str:
    """Escape text for a ReportLab Paragraph, keeping its layout.

    Paragraph markup collapses whitespace, so hard line breaks become
    ``<br/>``, tabs are expanded, and indentation and runs of spaces are
    written as non-breaking spaces. Inside a run the last space stays a
    plain one so long lines can still wrap there.

    Examples
    --------
        >>> text_to_paragraph_markup("a  b\\n  c")
        'a&nbsp; b<br/>&nbsp;&nbsp;c'

    """
    markup = escape(text).replace("\r\n", "\n").expandtabs(TEXT_TAB_SIZE)
    markup = _LEADING_SPACES.sub(lambda m: "&nbsp;" * len(m.group(0)), markup)
    markup = _SPACE_RUNS.sub(lambda m: "&nbsp;" * (len(m.group(0)) - 1) + " ", markup)
    return markup.replace("\n", "<br/>")


class ReportLabDocumentWriter(DocumentWriter):
    """Write plain text to PDF with ReportLab.

    Parameters
    ----------
    creator : str, default "pdftools-mcp"
        Value of the PDF ``Creator`` metadata field

    """

    def __init__(self, creator: str = DEFAULT_CREATOR) -> None:
        """Initialize the writer."""
        self.creator = creator

    async def write(self, text: str, output_path: Path, options: TextLayoutOptions) -> None:
        """Lay out text and stream the PDF to ``output_path``.

        ReportLab is synchronous, so the build runs in a worker thread. The
        returned coroutine completes once the output file is closed.

        """
        await asyncio.to_thread(self.write_sync, text, output_path, options)

    @requires_dependencies("document writer", DEPS_TEXT_RENDER)
    def write_sync(self, text: str, output_path: Path, options: TextLayoutOptions) -> None:
        """Blocking counterpart of :meth:`write`.

        Raises
        ------
        BackendFailureError
            If ReportLab fails to build the document (unknown font, ...)
        FilesystemError
            If the output stream cannot be opened, written or synced

        """
        with debug_timer(logger, f"Text render ({output_path.name})"):
            with secure_open_for_write(output_path) as stream:
                self._build(text, stream, options)
                try:
                    stream.flush()
                    os.fsync(stream.fileno())
                except OSError as e:
                    raise FilesystemError(
                        f"Failed to flush output file {output_path}: {e.strerror or e}",
                        file_path=str(output_path),
                        original_error=e,
                    ) from e

        logger.debug(f"Output stream closed: {output_path}")

    def _build(self, text: str, stream: BinaryIO, options: TextLayoutOptions) -> None:
        from reportlab.lib.pagesizes import LETTER
        from reportlab.lib.styles import ParagraphStyle
        from reportlab.platypus import Paragraph, SimpleDocTemplate

        try:
            style = ParagraphStyle(
                "PlainText",
                fontName=options.font,
                fontSize=options.font_size,
                leading=options.leading,
            )
            pdf_doc = SimpleDocTemplate(
                stream,
                pagesize=LETTER,
                topMargin=options.margin_top,
                leftMargin=options.margin_left,
                rightMargin=options.margin_right,
                bottomMargin=options.margin_bottom,
                creator=self.creator,
            )
            pdf_doc.build([Paragraph(text_to_paragraph_markup(text), style)])
        except PdfToolsError:
            raise
        except OSError as e:
            raise FilesystemError(f"Failed to write PDF output: {e}", original_error=e) from e
        except Exception as e:
            logger.error(f"Text rendering failed: {e!r}")
            raise BackendFailureError(f"Text rendering failed: {e}", rendering_stage="build", original_error=e) from e
