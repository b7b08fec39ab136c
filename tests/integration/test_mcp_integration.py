"""Integration tests for the MCP server."""

import asyncio

import fitz
import pytest
from fastmcp import Client

from pdftools_mcp.dispatcher import PdfToolDispatcher
from pdftools_mcp.renderers import ReportLabDocumentWriter
from pdftools_mcp.server import create_server


@pytest.fixture
def text_dispatcher(fake_home, html_renderer):
    """Provide a dispatcher writing text through the real ReportLab backend."""
    return PdfToolDispatcher.for_home(fake_home, html_renderer, ReportLabDocumentWriter())


def _call(mcp, tool_name, arguments):
    async def run():
        async with Client(mcp) as client:
            return await client.call_tool_mcp(tool_name, arguments)

    return asyncio.run(run())


@pytest.mark.integration
class TestMCPEndToEndWorkflow:
    """Test complete tool calls through the MCP protocol layer."""

    def test_list_tools_over_protocol(self, text_dispatcher, fake_home):
        """Test that clients see the three tools with their schemas."""
        mcp = create_server(text_dispatcher)

        async def run():
            async with Client(mcp) as client:
                return await client.list_tools()

        tools = asyncio.run(run())

        assert [tool.name for tool in tools] == [
            "generate_pdf_from_html",
            "generate_pdf_from_text",
            "generate_pdf_from_markdown",
        ]
        assert tools[1].inputSchema["required"] == ["text_content", "output_filename"]
        assert tools[1].inputSchema["properties"]["output_dir"]["default"] == str(fake_home / "Downloads")

    def test_text_to_pdf_workflow(self, text_dispatcher, fake_home):
        """Test that plain text becomes a real PDF in Downloads."""
        mcp = create_server(text_dispatcher)

        result = _call(mcp, "generate_pdf_from_text", {"text_content": "Hello", "output_filename": "a.pdf"})

        output = fake_home / "Downloads" / "a.pdf"
        assert not result.isError
        assert result.content[0].text == f"PDF successfully generated from text: {output}"
        assert output.read_bytes().startswith(b"%PDF-")

    def test_forbidden_directory_over_protocol(self, text_dispatcher, html_renderer):
        """Test that path rejections come back as error results."""
        mcp = create_server(text_dispatcher)

        result = _call(
            mcp,
            "generate_pdf_from_html",
            {"html_content": "<p>x</p>", "output_filename": "x.pdf", "output_dir": "/etc"},
        )

        assert result.isError
        assert "Output path must be within allowed directories" in result.content[0].text
        assert html_renderer.calls == []

    def test_markdown_reaches_renderer_as_html(self, text_dispatcher, html_renderer, fake_home):
        """Test the Markdown tool end to end with a recording renderer."""
        mcp = create_server(text_dispatcher)

        result = _call(
            mcp,
            "generate_pdf_from_markdown",
            {"markdown_content": "# Hi\nsome **bold** text", "output_filename": "notes.pdf"},
        )

        assert not result.isError
        html = html_renderer.calls[0].content
        assert "<h1>Hi</h1>" in html
        assert "<strong>bold</strong>" in html
        assert (fake_home / "Downloads" / "notes.pdf").exists()

    def test_unknown_tool_over_protocol(self, text_dispatcher):
        """Test that calling an unregistered tool is an error result."""
        mcp = create_server(text_dispatcher)

        result = _call(mcp, "bogus_tool", {})

        assert result.isError
        assert result.content[0].text == "Error: Unknown tool: bogus_tool"


@pytest.mark.integration
class TestDispatcherWithRealWriter:
    """Test the dispatcher against the real document writer."""

    def test_text_with_options(self, text_dispatcher, fake_home):
        """Test custom layout options end to end."""
        result = asyncio.run(
            text_dispatcher.dispatch(
                "generate_pdf_from_text",
                {
                    "text_content": "Line one\nLine two",
                    "output_filename": "custom.pdf",
                    "output_dir": str(fake_home / "Documents" / "letters"),
                    "options": {"fontSize": 10, "font": "Times-Roman", "margins": {"top": 72}},
                },
            )
        )

        output = fake_home / "Documents" / "letters" / "custom.pdf"
        assert not result.is_error
        assert b"Times-Roman" in output.read_bytes()

    def test_unknown_font_leaves_no_file(self, text_dispatcher, fake_home):
        """Test that a failed build removes the file it created."""
        result = asyncio.run(
            text_dispatcher.dispatch(
                "generate_pdf_from_text",
                {"text_content": "x", "output_filename": "bad.pdf", "options": {"font": "NoSuchFont"}},
            )
        )

        assert result.is_error
        assert result.text.startswith("Error: Text rendering failed: ")
        assert not (fake_home / "Downloads" / "bad.pdf").exists()

    def test_overwrite_existing_file(self, text_dispatcher, fake_home):
        """Test that an existing file is replaced by the new PDF."""
        output = fake_home / "Desktop" / "same.pdf"
        output.parent.mkdir(parents=True)
        output.write_bytes(b"old")

        result = asyncio.run(
            text_dispatcher.dispatch(
                "generate_pdf_from_text",
                {"text_content": "new", "output_filename": "same.pdf", "output_dir": str(output.parent)},
            )
        )

        assert not result.is_error
        assert output.read_bytes().startswith(b"%PDF-")

    def test_text_layout_survives_in_pdf(self, text_dispatcher, fake_home):
        """Test that column gaps and indentation appear in the extracted page text."""
        result = asyncio.run(
            text_dispatcher.dispatch(
                "generate_pdf_from_text",
                {"text_content": "col1    col2\n    indented", "output_filename": "layout.pdf"},
            )
        )

        assert not result.is_error
        with fitz.open(fake_home / "Downloads" / "layout.pdf") as doc:
            page_text = doc[0].get_text().replace("\xa0", " ")

        assert "col1    col2" in page_text
        assert "    indented" in page_text

    def test_numeric_text_content_is_printed(self, text_dispatcher, fake_home):
        """Test that a number passed as text is written as its string form."""
        result = asyncio.run(
            text_dispatcher.dispatch("generate_pdf_from_text", {"text_content": 42, "output_filename": "n.pdf"})
        )

        assert not result.is_error
        with fitz.open(fake_home / "Downloads" / "n.pdf") as doc:
            assert "42" in doc[0].get_text()
