"""Tool registry and input/output schemas for the MCP server.

This module declares the three tools the server publishes, together with
the JSON schemas describing their arguments, and the dataclasses the
dispatcher parses those arguments into.

Classes
-------
- ToolDescriptor: Name, description and JSON input schema of one tool
- HtmlToolArguments: Parsed arguments of generate_pdf_from_html
- TextToolArguments: Parsed arguments of generate_pdf_from_text
- MarkdownToolArguments: Parsed arguments of generate_pdf_from_markdown
- GenerationResult: Success or error outcome of one tool call

Functions
---------
- build_tool_descriptors: Registry entries for a given default output dir
- list_tools: The registry, in publication order
- get_tool_descriptor: Look up one registry entry by name

Notes
-----
Arguments are only presence-checked against each schema's ``required``
list. The schemas document types and defaults for callers; they are not
enforced beyond what the options parsers check.

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from pdftools_mcp.constants import (
    DEFAULT_HTML_MARGIN,
    DEFAULT_PAGE_FORMAT,
    DEFAULT_TEXT_FONT,
    DEFAULT_TEXT_FONT_SIZE,
    DEFAULT_TEXT_MARGIN,
    TOOL_HTML_TO_PDF,
    TOOL_MARKDOWN_TO_PDF,
    TOOL_TEXT_TO_PDF,
)
from pdftools_mcp.exceptions import UnknownToolError, ValidationError
from pdftools_mcp.options import HtmlPrintOptions, TextLayoutOptions
from pdftools_mcp.security import DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class ToolDescriptor:
    """Description of one callable tool.

    Attributes
    ----------
    name : str
        Unique tool identifier
    description : str
        Human-readable summary shown to the calling model
    input_schema : dict
        JSON schema of the accepted argument object

    """

    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def required(self) -> tuple[str, ...]:
        """Names of the arguments that must be present."""
        return tuple(self.input_schema.get("required", ()))

    def to_dict(self) -> dict[str, Any]:
        """Return the descriptor in MCP ``tools/list`` shape."""
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def _output_properties(default_output_dir: Path) -> dict[str, Any]:
    return {
        "output_filename": {
            "type": "string",
            "description": "Name of the output PDF file (without path)",
        },
        "output_dir": {
            "type": "string",
            "description": "Output directory (optional, defaults to Downloads)",
            "default": str(default_output_dir),
        },
    }


def build_tool_descriptors(default_output_dir: Path = DEFAULT_OUTPUT_DIR) -> tuple[ToolDescriptor, ...]:
    """Build the registry entries.

    Parameters
    ----------
    default_output_dir : Path
        Directory documented as the ``output_dir`` default

    Returns
    -------
    tuple[ToolDescriptor, ...]
        The HTML, text and Markdown tools, in that order

    """
    html_margin = {"type": "string", "default": DEFAULT_HTML_MARGIN}
    text_margin = {"type": "number", "default": DEFAULT_TEXT_MARGIN}

    return (
        ToolDescriptor(
            name=TOOL_HTML_TO_PDF,
            description="Generate a PDF from HTML content using a headless Chromium browser",
            input_schema={
                "type": "object",
                "properties": {
                    "html_content": {"type": "string", "description": "HTML content to convert to PDF"},
                    **_output_properties(default_output_dir),
                    "options": {
                        "type": "object",
                        "description": "PDF generation options",
                        "properties": {
                            "format": {"type": "string", "default": DEFAULT_PAGE_FORMAT},
                            "margin": {
                                "type": "object",
                                "properties": {side: dict(html_margin) for side in ("top", "right", "bottom", "left")},
                            },
                        },
                    },
                },
                "required": ["html_content", "output_filename"],
            },
        ),
        ToolDescriptor(
            name=TOOL_TEXT_TO_PDF,
            description="Generate a PDF from plain text",
            input_schema={
                "type": "object",
                "properties": {
                    "text_content": {"type": "string", "description": "Text content to convert to PDF"},
                    **_output_properties(default_output_dir),
                    "options": {
                        "type": "object",
                        "description": "PDF formatting options",
                        "properties": {
                            "fontSize": {"type": "number", "default": DEFAULT_TEXT_FONT_SIZE},
                            "font": {"type": "string", "default": DEFAULT_TEXT_FONT},
                            "margins": {
                                "type": "object",
                                "properties": {side: dict(text_margin) for side in ("top", "left", "right", "bottom")},
                            },
                        },
                    },
                },
                "required": ["text_content", "output_filename"],
            },
        ),
        ToolDescriptor(
            name=TOOL_MARKDOWN_TO_PDF,
            description="Generate a PDF from Markdown content",
            input_schema={
                "type": "object",
                "properties": {
                    "markdown_content": {"type": "string", "description": "Markdown content to convert to PDF"},
                    **_output_properties(default_output_dir),
                },
                "required": ["markdown_content", "output_filename"],
            },
        ),
    )


TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = build_tool_descriptors()


def list_tools() -> list[ToolDescriptor]:
    """Return every registered tool, in publication order."""
    return list(TOOL_DESCRIPTORS)


def get_tool_descriptor(name: str, descriptors: tuple[ToolDescriptor, ...] = TOOL_DESCRIPTORS) -> ToolDescriptor:
    """Look up a registered tool by name.

    Raises
    ------
    UnknownToolError
        If no tool with that name is registered

    """
    for descriptor in descriptors:
        if descriptor.name == name:
            return descriptor
    raise UnknownToolError(name)


def check_required_arguments(descriptor: ToolDescriptor, arguments: Mapping[str, Any]) -> None:
    """Presence-check a call's arguments against a tool's required fields.

    A key that is absent or set to ``None`` counts as missing.

    Raises
    ------
    ValidationError
        Naming every missing field

    """
    missing = [name for name in descriptor.required if arguments.get(name) is None]
    if missing:
        raise ValidationError(
            f"Missing required argument(s) for {descriptor.name}: {', '.join(missing)}",
            parameter_name=missing[0],
        )


def _output_dir(arguments: Mapping[str, Any], default_output_dir: Path) -> str | Path:
    value = arguments.get("output_dir")
    return default_output_dir if value is None or value == "" else value


@dataclass(frozen=True)
class HtmlToolArguments:
    """Arguments of ``generate_pdf_from_html``."""

    html_content: str
    output_filename: str
    output_dir: str | Path
    options: HtmlPrintOptions = field(default_factory=HtmlPrintOptions)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any], default_output_dir: Path) -> HtmlToolArguments:
        """Parse a raw argument object, applying the documented defaults."""
        return cls(
            html_content=arguments["html_content"],
            output_filename=arguments["output_filename"],
            output_dir=_output_dir(arguments, default_output_dir),
            options=HtmlPrintOptions.from_arguments(arguments.get("options")),
        )


@dataclass(frozen=True)
class TextToolArguments:
    """Arguments of ``generate_pdf_from_text``.

    Non-string ``text_content`` values are printed in their ``str`` form.
    """

    text_content: str
    output_filename: str
    output_dir: str | Path
    options: TextLayoutOptions = field(default_factory=TextLayoutOptions)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any], default_output_dir: Path) -> TextToolArguments:
        """Parse a raw argument object, applying the documented defaults."""
        return cls(
            text_content=str(arguments["text_content"]),
            output_filename=arguments["output_filename"],
            output_dir=_output_dir(arguments, default_output_dir),
            options=TextLayoutOptions.from_arguments(arguments.get("options")),
        )


@dataclass(frozen=True)
class MarkdownToolArguments:
    """Arguments of ``generate_pdf_from_markdown``.

    There is no ``options`` field; Markdown output is always printed on A4
    with 1cm margins.
    """

    markdown_content: str
    output_filename: str
    output_dir: str | Path

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any], default_output_dir: Path) -> MarkdownToolArguments:
        """Parse a raw argument object, applying the documented defaults."""
        return cls(
            markdown_content=arguments["markdown_content"],
            output_filename=arguments["output_filename"],
            output_dir=_output_dir(arguments, default_output_dir),
        )


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one tool call.

    Attributes
    ----------
    text : str
        Confirmation naming the output path, or ``"Error: <message>"``
    is_error : bool
        Whether the call failed

    """

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, source: str, output_path: Path) -> GenerationResult:
        """Build the success result for a PDF generated from ``source``."""
        return cls(text=f"PDF successfully generated from {source}: {output_path}")

    @classmethod
    def error(cls, message: str) -> GenerationResult:
        """Build an error result carrying ``message``."""
        return cls(text=f"Error: {message}", is_error=True)

    def to_content(self) -> dict[str, Any]:
        """Return the result in MCP ``tools/call`` shape."""
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload
