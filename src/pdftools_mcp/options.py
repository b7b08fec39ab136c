#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rendering options for the HTML renderer and the document writer.

The options objects are immutable and built from the untyped ``options``
object a caller passes with a tool call. Missing keys, ``None`` and empty
values fall back to the defaults published in the tool schemas; margins
are merged side by side, so a caller may override only ``top``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from pdftools_mcp.constants import (
    DEFAULT_HTML_MARGIN,
    DEFAULT_PAGE_FORMAT,
    DEFAULT_PRINT_BACKGROUND,
    DEFAULT_TEXT_FONT,
    DEFAULT_TEXT_FONT_SIZE,
    DEFAULT_TEXT_LEADING_RATIO,
    DEFAULT_TEXT_MARGIN,
)
from pdftools_mcp.exceptions import ValidationError

MARGIN_SIDES = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def _as_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError(f"'{name}' must be an object", parameter_name=name, parameter_value=value)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class HtmlPrintOptions(CloneFrozenMixin):
    """Print options handed to the headless-browser HTML renderer.

    Parameters
    ----------
    format : str, default "A4"
        Paper format name understood by Chromium (A4, Letter, Legal, ...)
    margin_top, margin_right, margin_bottom, margin_left : str, default "1cm"
        Page margins as CSS lengths
    print_background : bool, default True
        Whether background colours and images are printed

    """

    format: str = DEFAULT_PAGE_FORMAT
    margin_top: str = DEFAULT_HTML_MARGIN
    margin_right: str = DEFAULT_HTML_MARGIN
    margin_bottom: str = DEFAULT_HTML_MARGIN
    margin_left: str = DEFAULT_HTML_MARGIN
    print_background: bool = DEFAULT_PRINT_BACKGROUND

    @classmethod
    def from_arguments(cls, options: Any) -> HtmlPrintOptions:
        """Build print options from a tool call's ``options`` object.

        Raises
        ------
        ValidationError
            If ``options`` or ``options.margin`` is not an object, or a value
            has the wrong type

        """
        options = _as_mapping(options, "options")
        margin = _as_mapping(options.get("margin"), "options.margin")

        page_format = options.get("format") or DEFAULT_PAGE_FORMAT
        if not isinstance(page_format, str):
            raise ValidationError(
                "'options.format' must be a string", parameter_name="options.format", parameter_value=page_format
            )

        sides: dict[str, str] = {}
        for side in MARGIN_SIDES:
            value = margin.get(side)
            if value is None or value == "":
                sides[f"margin_{side}"] = DEFAULT_HTML_MARGIN
            elif isinstance(value, str):
                sides[f"margin_{side}"] = value
            elif _is_number(value):
                # Chromium reads bare numbers as CSS pixels
                sides[f"margin_{side}"] = f"{value}px"
            else:
                raise ValidationError(
                    f"'options.margin.{side}' must be a CSS length",
                    parameter_name=f"options.margin.{side}",
                    parameter_value=value,
                )

        return cls(format=page_format, **sides)

    def to_margin_dict(self) -> dict[str, str]:
        """Return the margins in the shape the browser's print call expects."""
        return {
            "top": self.margin_top,
            "right": self.margin_right,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
        }


@dataclass(frozen=True)
class TextLayoutOptions(CloneFrozenMixin):
    """Layout options handed to the document writer.

    Parameters
    ----------
    font : str, default "Helvetica"
        Name of a font known to the document writer (the standard PDF
        fonts such as Helvetica, Times-Roman and Courier are always there)
    font_size : float, default 12
        Font size in points
    margin_top, margin_left, margin_right, margin_bottom : float, default 50
        Page margins in points

    """

    font: str = DEFAULT_TEXT_FONT
    font_size: float = DEFAULT_TEXT_FONT_SIZE
    margin_top: float = DEFAULT_TEXT_MARGIN
    margin_left: float = DEFAULT_TEXT_MARGIN
    margin_right: float = DEFAULT_TEXT_MARGIN
    margin_bottom: float = DEFAULT_TEXT_MARGIN

    @classmethod
    def from_arguments(cls, options: Any) -> TextLayoutOptions:
        """Build layout options from a tool call's ``options`` object.

        Accepts the camel-cased ``fontSize`` key used in the tool schema.

        Raises
        ------
        ValidationError
            If ``options`` or ``options.margins`` is not an object, or a value
            has the wrong type

        """
        options = _as_mapping(options, "options")
        margins = _as_mapping(options.get("margins"), "options.margins")

        font = options.get("font") or DEFAULT_TEXT_FONT
        if not isinstance(font, str):
            raise ValidationError(
                "'options.font' must be a string", parameter_name="options.font", parameter_value=font
            )

        font_size = options.get("fontSize") or DEFAULT_TEXT_FONT_SIZE
        if not _is_number(font_size) or font_size < 0:
            raise ValidationError(
                "'options.fontSize' must be a positive number",
                parameter_name="options.fontSize",
                parameter_value=font_size,
            )

        sides: dict[str, float] = {}
        for side in MARGIN_SIDES:
            value = margins.get(side)
            if value is None:
                value = DEFAULT_TEXT_MARGIN
            elif not _is_number(value) or value < 0:
                raise ValidationError(
                    f"'options.margins.{side}' must be a non-negative number",
                    parameter_name=f"options.margins.{side}",
                    parameter_value=value,
                )
            sides[f"margin_{side}"] = value

        return cls(font=font, font_size=font_size, **sides)

    @property
    def leading(self) -> float:
        """Line height in points."""
        return self.font_size * DEFAULT_TEXT_LEADING_RATIO
