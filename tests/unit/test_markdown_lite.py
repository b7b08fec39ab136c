"""Unit tests for the minimal Markdown to HTML converter."""

import pytest

from pdftools_mcp.markdown_lite import markdown_fragment_to_html, markdown_to_html


@pytest.mark.unit
class TestHeadings:
    """Tests for ATX heading conversion."""

    @pytest.mark.parametrize(
        "markdown,expected",
        [
            ("# Title", "<h1>Title</h1>"),
            ("## Section", "<h2>Section</h2>"),
            ("### Subsection", "<h3>Subsection</h3>"),
        ],
    )
    def test_heading_levels(self, markdown, expected):
        """Test levels one to three."""
        assert markdown_fragment_to_html(markdown) == expected

    def test_heading_needs_space_after_marker(self):
        """Test that '#Title' is not a heading."""
        assert markdown_fragment_to_html("#Title") == "#Title"

    def test_heading_must_start_line(self):
        """Test that a marker mid-line is left alone."""
        assert markdown_fragment_to_html("see # not a heading") == "see # not a heading"

    def test_level_four_is_not_supported(self):
        """Test that '####' is not turned into an h3 or deeper heading."""
        assert "<h3>" not in markdown_fragment_to_html("#### Deep")

    def test_heading_on_later_line(self):
        """Test that headings match at any line start."""
        assert markdown_fragment_to_html("intro\n## Part") == "intro<br><h2>Part</h2>"

    def test_crlf_keeps_carriage_return_outside_heading(self):
        """Test that a heading ends before a CR line terminator."""
        assert markdown_fragment_to_html("# Hi\r\nx") == "<h1>Hi</h1>\r<br>x"

    def test_crlf_inline_spans(self):
        """Test that inline spans do not swallow a CR."""
        assert markdown_fragment_to_html("**a**\r\n*b*") == "<strong>a</strong>\r<br><em>b</em>"


@pytest.mark.unit
class TestInlineMarkup:
    """Tests for bold, italic and code spans."""

    def test_bold(self):
        """Test double-asterisk emphasis."""
        assert markdown_fragment_to_html("a **b** c") == "a <strong>b</strong> c"

    def test_italic(self):
        """Test single-asterisk emphasis."""
        assert markdown_fragment_to_html("a *b* c") == "a <em>b</em> c"

    def test_bold_before_italic(self):
        """Test that bold pairs are consumed before italic pairs."""
        assert markdown_fragment_to_html("**x** and *y*") == "<strong>x</strong> and <em>y</em>"

    def test_code(self):
        """Test backtick code spans."""
        assert markdown_fragment_to_html("run `ls -l` now") == "run <code>ls -l</code> now"

    def test_matches_are_non_greedy(self):
        """Test that each pair of delimiters forms its own span."""
        assert markdown_fragment_to_html("`a` and `b`") == "<code>a</code> and <code>b</code>"

    def test_unmatched_delimiters_stay_literal(self):
        """Test that a lone delimiter is left as text."""
        assert markdown_fragment_to_html("2 * 3 and `tick") == "2 * 3 and `tick"

    def test_spans_do_not_cross_lines(self):
        """Test that emphasis stops at a newline."""
        assert markdown_fragment_to_html("*a\nb*") == "*a<br>b*"


@pytest.mark.unit
class TestLineBreaks:
    """Tests for newline handling."""

    def test_every_newline_becomes_br(self):
        """Test that each newline is replaced, including blank lines."""
        assert markdown_fragment_to_html("a\n\nb\n") == "a<br><br>b<br>"

    def test_plain_text_is_unchanged(self):
        """Test that text without markup passes through verbatim."""
        assert markdown_fragment_to_html("Just words, nothing else.") == "Just words, nothing else."

    def test_html_is_not_escaped(self):
        """Test that embedded HTML reaches the output as-is."""
        assert markdown_fragment_to_html("<b>raw</b> & more") == "<b>raw</b> & more"

    def test_empty_input(self):
        """Test the empty string."""
        assert markdown_fragment_to_html("") == ""


@pytest.mark.unit
class TestMarkdownToHtml:
    """Tests for the full document wrapper."""

    def test_document_shell(self):
        """Test that the fragment is wrapped in a styled UTF-8 document."""
        html = markdown_to_html("# Hi")

        assert html.startswith("<!DOCTYPE html>")
        assert '<meta charset="utf-8">' in html
        assert "<style>" in html
        assert "font-family: Arial, sans-serif" in html
        assert "<body>\n<h1>Hi</h1>\n</body>" in html

    def test_css_braces_are_literal(self):
        """Test that the style block keeps single braces."""
        html = markdown_to_html("x")

        assert "body { font-family" in html
        assert "{{" not in html

    def test_braces_in_content_survive(self):
        """Test that braces in user content do not break formatting."""
        html = markdown_to_html("use {placeholder} and {0}")

        assert "use {placeholder} and {0}" in html

    def test_combined_document(self):
        """Test a realistic document end to end."""
        html = markdown_to_html("# Hi\nsome **bold** text")

        assert "<h1>Hi</h1><br>some <strong>bold</strong> text" in html
