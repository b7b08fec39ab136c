#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/renderers/html.py
"""HTML to PDF rendering with headless Chromium.

This module provides the PlaywrightHtmlRenderer class which prints HTML
documents to PDF using Playwright's async API. Every render launches its
own browser and closes it again, whether the render succeeds or not;
there is no pooling and no timeout beyond Playwright's own.

"""

from __future__ import annotations

import logging
from pathlib import Path

from pdftools_mcp.constants import DEFAULT_HEADLESS, DEFAULT_WAIT_UNTIL, DEPS_HTML_RENDER, WaitUntil
from pdftools_mcp.exceptions import BackendFailureError
from pdftools_mcp.options import HtmlPrintOptions
from pdftools_mcp.renderers.base import HtmlRenderer
from pdftools_mcp.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)


class PlaywrightHtmlRenderer(HtmlRenderer):
    """Render HTML to PDF with a headless Chromium instance.

    Parameters
    ----------
    headless : bool, default True
        Launch Chromium without a visible window
    wait_until : str, default "networkidle"
        Load state to wait for after setting the page content, so that
        stylesheets, fonts and images referenced by the HTML are loaded
        before printing

    """

    def __init__(self, headless: bool = DEFAULT_HEADLESS, wait_until: WaitUntil = DEFAULT_WAIT_UNTIL) -> None:
        """Initialize the renderer with browser settings."""
        self.headless = headless
        self.wait_until = wait_until

    @requires_dependencies("HTML renderer", DEPS_HTML_RENDER)
    async def render(self, html: str, output_path: Path, options: HtmlPrintOptions) -> None:
        """Render an HTML document to a PDF file.

        Parameters
        ----------
        html : str
            Complete HTML document
        output_path : Path
            Destination of the PDF
        options : HtmlPrintOptions
            Paper format, margins and background printing

        Raises
        ------
        BackendFailureError
            If launching the browser, loading the content or printing fails

        """
        from playwright.async_api import async_playwright

        stage = "launch"
        try:
            with debug_timer(logger, f"HTML render ({output_path.name})"):
                async with async_playwright() as playwright:
                    browser = await playwright.chromium.launch(headless=self.headless)
                    try:
                        page = await browser.new_page()

                        stage = "set_content"
                        await page.set_content(html, wait_until=self.wait_until)

                        stage = "print"
                        await page.pdf(
                            path=str(output_path),
                            format=options.format,
                            margin=options.to_margin_dict(),
                            print_background=options.print_background,
                        )
                        stage = "close"
                    finally:
                        await browser.close()
        except Exception as e:
            logger.error(f"HTML rendering failed during {stage}: {e}")
            raise BackendFailureError(f"HTML rendering failed: {e}", rendering_stage=stage, original_error=e) from e

        logger.debug(f"Browser printed {output_path}")
