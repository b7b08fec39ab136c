#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/renderers/base.py
"""Base classes for the rendering backends.

The dispatcher only talks to these interfaces, so tests can swap in
recording fakes and deployments can swap in other engines.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pdftools_mcp.options import HtmlPrintOptions, TextLayoutOptions


class HtmlRenderer(ABC):
    """Abstract base class for HTML to PDF renderers."""

    @abstractmethod
    async def render(self, html: str, output_path: Path, options: HtmlPrintOptions) -> None:
        """Render an HTML document to a PDF file.

        Parameters
        ----------
        html : str
            Complete HTML document, used as-is
        output_path : Path
            Validated destination; its parent directory already exists
        options : HtmlPrintOptions
            Paper format, margins and background printing

        Raises
        ------
        BackendFailureError
            If the rendering engine fails at any stage

        """
        ...


class DocumentWriter(ABC):
    """Abstract base class for plain text to PDF document writers."""

    @abstractmethod
    async def write(self, text: str, output_path: Path, options: TextLayoutOptions) -> None:
        """Lay out text and stream the resulting PDF to a file.

        Implementations must return only once the output stream has been
        flushed and closed, not merely when document construction ends.

        Parameters
        ----------
        text : str
            Literal text content, written as a single text block
        output_path : Path
            Validated destination; its parent directory already exists
        options : TextLayoutOptions
            Font, font size and page margins

        Raises
        ------
        BackendFailureError
            If the document library fails
        FilesystemError
            If the output stream cannot be opened or written

        """
        ...
