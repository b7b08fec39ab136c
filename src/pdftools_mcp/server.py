"""FastMCP server for pdftools-mcp.

This module publishes the tool registry through FastMCP over stdio. Each
registry entry becomes a FastMCP tool whose parameters are the entry's
JSON schema and whose calls are routed through the dispatcher.

Classes
-------
- DispatchedTool: FastMCP tool routing its calls to the dispatcher
- UnregisteredToolMiddleware: Routes calls to unknown tool names to the dispatcher

Functions
---------
- build_dispatcher: Wire the default rendering backends from configuration
- create_server: Build the FastMCP server around a dispatcher
- main: Server entry point (for CLI)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import NotFoundError, ToolError
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from pydantic import PrivateAttr

from pdftools_mcp.config import ServerConfig, load_config
from pdftools_mcp.constants import DEFAULT_LOG_LEVEL, SERVER_NAME
from pdftools_mcp.dispatcher import PdfToolDispatcher
from pdftools_mcp.logging_utils import configure_logging
from pdftools_mcp.renderers import PlaywrightHtmlRenderer, ReportLabDocumentWriter
from pdftools_mcp.schemas import GenerationResult, ToolDescriptor

logger = logging.getLogger(__name__)


def _to_tool_result(result: GenerationResult) -> ToolResult:
    """Convert a dispatcher outcome for FastMCP, raising error results as ``ToolError``."""
    if result.is_error:
        raise ToolError(result.text)
    return ToolResult(content=result.text)


class DispatchedTool(Tool):
    """FastMCP tool that hands every call to a PdfToolDispatcher.

    Arguments reach the dispatcher untouched; its error results are raised
    as ``ToolError`` so the transport flags them with ``isError``.
    """

    _dispatcher: Any = PrivateAttr(default=None)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: PdfToolDispatcher) -> "DispatchedTool":
        """Create the FastMCP tool for one registry entry."""
        tool = cls(name=descriptor.name, description=descriptor.description, parameters=descriptor.input_schema)
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch the call and convert the outcome for FastMCP."""
        return _to_tool_result(await self._dispatcher.dispatch(self.name, arguments))


class UnregisteredToolMiddleware(Middleware):
    """Answer calls to unregistered tool names through the dispatcher.

    FastMCP rejects such calls before any tool runs. Routing them to the
    dispatcher gives them the same ``Error: Unknown tool: <name>`` result
    the dispatcher produces for every other failure.
    """

    def __init__(self, dispatcher: PdfToolDispatcher) -> None:
        """Initialize with the dispatcher that owns the registry."""
        self.dispatcher = dispatcher

    async def on_call_tool(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, ToolResult],
    ) -> ToolResult:
        """Forward the call, falling back to the dispatcher for unknown names."""
        try:
            return await call_next(context)
        except NotFoundError:
            logger.debug(f"No FastMCP tool named {context.message.name!r}, handing call to dispatcher")
            result = await self.dispatcher.dispatch(context.message.name, context.message.arguments)
            return _to_tool_result(result)


def build_dispatcher(config: ServerConfig) -> PdfToolDispatcher:
    """Create a dispatcher with the Playwright and ReportLab backends."""
    html_renderer = PlaywrightHtmlRenderer(headless=config.headless, wait_until=config.wait_until)
    return PdfToolDispatcher(html_renderer, ReportLabDocumentWriter())


def create_server(dispatcher: PdfToolDispatcher) -> FastMCP:
    """Create and configure the FastMCP server.

    Parameters
    ----------
    dispatcher : PdfToolDispatcher
        Dispatcher serving every tool call

    Returns
    -------
    FastMCP
        Configured MCP server instance, tools registered in registry order

    """
    mcp: FastMCP = FastMCP(name=SERVER_NAME)
    mcp.add_middleware(UnregisteredToolMiddleware(dispatcher))

    for descriptor in dispatcher.list_tools():
        mcp.add_tool(DispatchedTool.from_descriptor(descriptor, dispatcher))
        logger.info(f"Registered tool: {descriptor.name}")

    return mcp


def main() -> int:
    """Run the pdftools-mcp server."""
    try:
        # Configure logging with default level first (reconfigured once config is loaded)
        configure_logging(DEFAULT_LOG_LEVEL)

        config = load_config()
        configure_logging(config.log_level, log_file=config.log_file, trace_mode=True)

        logger.info("Starting pdftools MCP server")
        logger.info(f"Configuration: headless={config.headless}, wait_until={config.wait_until}")

        dispatcher = build_dispatcher(config)
        logger.info(f"Allowed output directories: {len(dispatcher.allowed_roots)}")
        for root in dispatcher.allowed_roots:
            logger.debug(f"  - {root}")

        mcp = create_server(dispatcher)

        logger.info("Server ready, listening on stdio")
        mcp.run()  # Run with default stdio transport

    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Fatal error: {e!r}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
