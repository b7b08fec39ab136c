#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/markdown_lite.py
"""Minimal Markdown to HTML conversion for the Markdown tool.

Only a small subset of Markdown is understood: ATX headings of level 1
to 3, ``**bold**``, ``*italic*``, inline ``code`` and hard line breaks.
Each construct is handled by one global regular-expression pass over the
whole text; there is no block structure, no paragraph grouping and no
escaping of the input. Unmatched delimiters are left as literal text.

For anything richer, callers should convert Markdown themselves and use
the HTML tool instead.

"""

from __future__ import annotations

import re

# Applied in order. Headings go longest marker first, and bold runs
# before italic so "**" pairs are consumed before single "*" pairs.
# Captures stop at "\r" too, so CRLF input keeps the CR outside the tags.
_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^### ([^\r\n]*)", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## ([^\r\n]*)", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# ([^\r\n]*)", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"\*\*([^\r\n]*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*([^\r\n]*?)\*"), r"<em>\1</em>"),
    (re.compile(r"`([^\r\n]*?)`"), r"<code>\1</code>"),
    (re.compile(r"\n"), "<br>"),
)

HTML_SHELL = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; margin: 40px; }}
    h1, h2, h3 {{ color: #333; }}
    code {{ background-color: #f4f4f4; padding: 2px 4px; border-radius: 3px; }}
  </style>
</head>
<body>
{body}
</body>
</html>
"""


def markdown_fragment_to_html(markdown: str) -> str:
    """Convert the supported Markdown subset to an HTML fragment.

    Parameters
    ----------
    markdown : str
        Markdown source

    Returns
    -------
    str
        HTML fragment with no surrounding document shell

    Examples
    --------
        >>> markdown_fragment_to_html("## Title\\n**bold** and *italic*")
        '<h2>Title</h2><br><strong>bold</strong> and <em>italic</em>'

    """
    html = markdown
    for pattern, replacement in _SUBSTITUTIONS:
        html = pattern.sub(replacement, html)
    return html


def markdown_to_html(markdown: str) -> str:
    """Convert Markdown to a complete, styled HTML document.

    The content is embedded as-is; it is not HTML-escaped.

    Parameters
    ----------
    markdown : str
        Markdown source

    Returns
    -------
    str
        UTF-8 HTML document ready for the HTML renderer

    """
    return HTML_SHELL.format(body=markdown_fragment_to_html(markdown))
