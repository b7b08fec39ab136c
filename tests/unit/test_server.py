"""Unit tests for the FastMCP server wiring."""

import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import NotFoundError, ToolError
from fastmcp.server.middleware import MiddlewareContext
from mcp.types import CallToolRequestParams

from pdftools_mcp.config import ServerConfig
from pdftools_mcp.renderers import PlaywrightHtmlRenderer, ReportLabDocumentWriter
from pdftools_mcp.server import DispatchedTool, UnregisteredToolMiddleware, build_dispatcher, create_server


@pytest.mark.unit
class TestDispatchedTool:
    """Tests for DispatchedTool."""

    def test_from_descriptor(self, dispatcher):
        """Test that name, description and schema are copied verbatim."""
        descriptor = dispatcher.list_tools()[1]

        tool = DispatchedTool.from_descriptor(descriptor, dispatcher)

        assert tool.name == "generate_pdf_from_text"
        assert tool.description == descriptor.description
        assert tool.parameters == descriptor.input_schema

    def test_run_success(self, dispatcher, fake_home):
        """Test that a successful call returns the confirmation text."""
        tool = DispatchedTool.from_descriptor(dispatcher.list_tools()[1], dispatcher)

        result = asyncio.run(tool.run({"text_content": "Hi", "output_filename": "a.pdf"}))

        assert len(result.content) == 1
        assert result.content[0].text == f"PDF successfully generated from text: {fake_home / 'Downloads' / 'a.pdf'}"

    def test_run_error_raises_tool_error(self, dispatcher):
        """Test that error results surface as ToolError."""
        tool = DispatchedTool.from_descriptor(dispatcher.list_tools()[0], dispatcher)

        with pytest.raises(ToolError, match="Error: Output path must be within allowed directories"):
            asyncio.run(tool.run({"html_content": "x", "output_filename": "a.pdf", "output_dir": "/etc"}))


@pytest.mark.unit
class TestCreateServer:
    """Tests for create_server and build_dispatcher."""

    def test_tools_registered_in_order(self, dispatcher):
        """Test that every registry entry is published."""
        mcp = create_server(dispatcher)

        tools = asyncio.run(mcp.get_tools())

        assert list(tools) == ["generate_pdf_from_html", "generate_pdf_from_text", "generate_pdf_from_markdown"]

    def test_server_name(self, dispatcher):
        """Test the advertised server name."""
        assert create_server(dispatcher).name == "pdftools-mcp-server"

    def test_build_dispatcher_uses_config(self):
        """Test that browser settings flow from configuration."""
        dispatcher = build_dispatcher(ServerConfig(headless=False, wait_until="load"))

        assert isinstance(dispatcher.html_renderer, PlaywrightHtmlRenderer)
        assert isinstance(dispatcher.document_writer, ReportLabDocumentWriter)
        assert dispatcher.html_renderer.headless is False
        assert dispatcher.html_renderer.wait_until == "load"


@pytest.mark.unit
class TestUnregisteredToolMiddleware:
    """Tests for UnregisteredToolMiddleware."""

    @staticmethod
    def _context(name, arguments):
        return MiddlewareContext(message=CallToolRequestParams(name=name, arguments=arguments), method="tools/call")

    def test_unknown_name_gets_dispatcher_error(self, dispatcher):
        """Test that FastMCP's not-found error is replaced by the dispatcher's result."""
        middleware = UnregisteredToolMiddleware(dispatcher)

        async def call_next(context):
            raise NotFoundError(f"Unknown tool: {context.message.name!r}")

        with pytest.raises(ToolError) as exc_info:
            asyncio.run(middleware.on_call_tool(self._context("bogus_tool", {}), call_next))

        assert str(exc_info.value) == "Error: Unknown tool: bogus_tool"

    def test_registered_tool_passes_through(self, dispatcher):
        """Test that known tools are answered by the next handler."""
        middleware = UnregisteredToolMiddleware(dispatcher)
        sentinel = object()

        async def call_next(context):
            return sentinel

        result = asyncio.run(
            middleware.on_call_tool(self._context("generate_pdf_from_text", {"text_content": "x"}), call_next)
        )

        assert result is sentinel

    def test_tool_errors_are_not_swallowed(self, dispatcher):
        """Test that errors raised by a registered tool propagate unchanged."""
        middleware = UnregisteredToolMiddleware(dispatcher)

        async def call_next(context):
            raise ToolError("Error: Output path must be within allowed directories: x")

        with pytest.raises(ToolError, match="Output path must be within allowed directories"):
            asyncio.run(middleware.on_call_tool(self._context("generate_pdf_from_html", {}), call_next))

    def test_server_answers_unknown_tool_with_error_prefix(self, dispatcher):
        """Test the full server path for an unregistered name."""
        mcp = create_server(dispatcher)

        async def run():
            async with Client(mcp) as client:
                return await client.call_tool_mcp("bogus_tool", {})

        result = asyncio.run(run())

        assert result.isError
        assert result.content[0].text == "Error: Unknown tool: bogus_tool"
