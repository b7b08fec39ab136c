"""Request dispatch for the PDF generation tools.

This module maps a named tool call to the matching rendering path and
normalizes every outcome into a GenerationResult. The three branches
share nothing but the read-only allowed-root list:

- HTML: validate path, create directory, print the HTML with the
  caller's format and margins
- text: validate path, create directory, stream the text through the
  document writer
- Markdown: convert to HTML, validate path, create directory, print on
  A4 with 1cm margins

Any exception raised in a branch is caught here and returned as an
error result; callers never see a raw exception.

Classes
-------
- PdfToolDispatcher: Tool-name to rendering-path dispatcher

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from pdftools_mcp.constants import TOOL_HTML_TO_PDF, TOOL_MARKDOWN_TO_PDF, TOOL_TEXT_TO_PDF
from pdftools_mcp.exceptions import ValidationError
from pdftools_mcp.markdown_lite import markdown_to_html
from pdftools_mcp.options import HtmlPrintOptions
from pdftools_mcp.renderers.base import DocumentWriter, HtmlRenderer
from pdftools_mcp.schemas import (
    TOOL_DESCRIPTORS,
    GenerationResult,
    HtmlToolArguments,
    MarkdownToolArguments,
    TextToolArguments,
    ToolDescriptor,
    build_tool_descriptors,
    check_required_arguments,
    get_tool_descriptor,
)
from pdftools_mcp.security import (
    ALLOWED_OUTPUT_ROOTS,
    DEFAULT_OUTPUT_DIR,
    allowed_output_roots,
    default_output_dir as home_default_output_dir,
    ensure_parent_directory,
    resolve_output_target,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[GenerationResult]]


class PdfToolDispatcher:
    """Dispatch tool calls to the HTML renderer or the document writer.

    Parameters
    ----------
    html_renderer : HtmlRenderer
        Backend for the HTML and Markdown tools
    document_writer : DocumentWriter
        Backend for the text tool
    allowed_roots : sequence of Path, optional
        Canonical directories outputs must resolve beneath. Defaults to the
        roots computed from the user's home directory at startup.
    default_output_dir : Path, optional
        Directory used when a call omits ``output_dir``. Defaults to the
        user's Downloads directory.

    Examples
    --------
        >>> dispatcher = PdfToolDispatcher(PlaywrightHtmlRenderer(), ReportLabDocumentWriter())
        >>> result = asyncio.run(
        ...     dispatcher.dispatch("generate_pdf_from_text", {"text_content": "Hi", "output_filename": "hi.pdf"})
        ... )
        >>> result.text
        'PDF successfully generated from text: /home/user/Downloads/hi.pdf'

    """

    def __init__(
        self,
        html_renderer: HtmlRenderer,
        document_writer: DocumentWriter,
        allowed_roots: Sequence[Path] | None = None,
        default_output_dir: Path | None = None,
    ) -> None:
        """Initialize the dispatcher with its backends and output roots."""
        self.html_renderer = html_renderer
        self.document_writer = document_writer
        self.allowed_roots: tuple[Path, ...] = ALLOWED_OUTPUT_ROOTS if allowed_roots is None else tuple(allowed_roots)
        self.default_output_dir = DEFAULT_OUTPUT_DIR if default_output_dir is None else default_output_dir
        self.descriptors: tuple[ToolDescriptor, ...] = (
            TOOL_DESCRIPTORS if default_output_dir is None else build_tool_descriptors(self.default_output_dir)
        )
        self._handlers: dict[str, ToolHandler] = {
            TOOL_HTML_TO_PDF: self._generate_from_html,
            TOOL_TEXT_TO_PDF: self._generate_from_text,
            TOOL_MARKDOWN_TO_PDF: self._generate_from_markdown,
        }

    @classmethod
    def for_home(
        cls, home: str | Path, html_renderer: HtmlRenderer, document_writer: DocumentWriter
    ) -> PdfToolDispatcher:
        """Create a dispatcher whose roots and default directory derive from ``home``."""
        return cls(
            html_renderer,
            document_writer,
            allowed_roots=allowed_output_roots(home),
            default_output_dir=home_default_output_dir(home),
        )

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the tools this dispatcher serves, in publication order."""
        return list(self.descriptors)

    async def dispatch(self, tool_name: str, arguments: Mapping[str, Any] | None) -> GenerationResult:
        """Run one tool call.

        Parameters
        ----------
        tool_name : str
            Name of the tool to invoke
        arguments : Mapping[str, Any] | None
            Untyped argument object from the caller

        Returns
        -------
        GenerationResult
            Success naming the output path, or an error result carrying the
            message of whatever went wrong

        """
        logger.info(f"Tool call: {tool_name}")
        try:
            descriptor = get_tool_descriptor(tool_name, self.descriptors)
            if arguments is None:
                arguments = {}
            if not isinstance(arguments, Mapping):
                raise ValidationError("Tool arguments must be an object", parameter_value=arguments)
            check_required_arguments(descriptor, arguments)

            result = await self._handlers[descriptor.name](arguments)
        except Exception as e:
            logger.error(f"Tool call {tool_name} failed: {e}")
            return GenerationResult.error(str(e))

        logger.info(result.text)
        return result

    async def _generate_from_html(self, arguments: Mapping[str, Any]) -> GenerationResult:
        args = HtmlToolArguments.from_arguments(arguments, self.default_output_dir)

        output_path = await self._prepare_output(args.output_dir, args.output_filename)
        await self._render_guarded(
            output_path, lambda: self.html_renderer.render(args.html_content, output_path, args.options)
        )
        return GenerationResult.success("HTML", output_path)

    async def _generate_from_text(self, arguments: Mapping[str, Any]) -> GenerationResult:
        args = TextToolArguments.from_arguments(arguments, self.default_output_dir)

        output_path = await self._prepare_output(args.output_dir, args.output_filename)
        await self._render_guarded(
            output_path, lambda: self.document_writer.write(args.text_content, output_path, args.options)
        )
        return GenerationResult.success("text", output_path)

    async def _generate_from_markdown(self, arguments: Mapping[str, Any]) -> GenerationResult:
        args = MarkdownToolArguments.from_arguments(arguments, self.default_output_dir)
        html = markdown_to_html(args.markdown_content)

        output_path = await self._prepare_output(args.output_dir, args.output_filename)
        # Fixed A4 / 1cm, not configurable on this tool
        await self._render_guarded(
            output_path, lambda: self.html_renderer.render(html, output_path, HtmlPrintOptions())
        )
        return GenerationResult.success("Markdown", output_path)

    async def _prepare_output(self, output_dir: str | Path, output_filename: str) -> Path:
        # Validation must come first: nothing touches the disk for a rejected path
        output_path = resolve_output_target(output_dir, output_filename, self.allowed_roots)
        logger.info(f"Writing output to: {output_path}")
        await asyncio.to_thread(ensure_parent_directory, output_path)
        return output_path

    async def _render_guarded(self, output_path: Path, render: Callable[[], Awaitable[None]]) -> None:
        existed_before = output_path.exists()
        try:
            await render()
        except Exception:
            if not existed_before:
                self._discard_partial_output(output_path)
            raise

    @staticmethod
    def _discard_partial_output(output_path: Path) -> None:
        try:
            output_path.unlink(missing_ok=True)
        except OSError as cleanup_error:
            logger.warning(f"Could not remove partial output {output_path}: {cleanup_error}")
        else:
            logger.debug(f"Removed partial output {output_path}")
