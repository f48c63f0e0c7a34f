"""Tests for string builders, text helpers and logging utilities."""

import logging

import pytest

from pseudocode.location import SourceLocation
from pseudocode.stringbuilder import HtmlBuilder, StringBuilder
from pseudocode.utils.logger import get_logger
from pseudocode.utils.text import escape_html, snake_case


class TestStringBuilder:
    def test_build(self) -> None:
        sb = StringBuilder()
        sb.append("<p>").append("Hello").append("</p>")
        assert sb.build() == "<p>Hello</p>"

    def test_empty_strings_skipped(self) -> None:
        sb = StringBuilder()
        sb.append("")
        assert not sb
        assert len(sb) == 0


class TestHtmlBuilder:
    def test_text_is_escaped_once_per_run(self) -> None:
        html = HtmlBuilder()
        html.begin_p("ps-line").put_text("a < ").put_text("b & c").end_p()
        assert html.build() == '<p class="ps-line">a &lt; b &amp; c</p>'

    def test_markup_is_verbatim(self) -> None:
        html = HtmlBuilder()
        html.put_text("x<").put_html("<br/>").put_text(">y")
        assert html.build() == "x&lt;<br/>&gt;y"

    def test_div_layout(self) -> None:
        html = HtmlBuilder()
        html.begin_div("ps-root").begin_span("k").put_text("if").end_span().end_div()
        assert html.build() == '<div class="ps-root">\n<span class="k">if</span></div>'

    def test_style_attribute(self) -> None:
        html = HtmlBuilder()
        html.begin_span(None, 'font-family:"x";').end_span()
        assert html.build() == '<span style="font-family:&quot;x&quot;;"></span>'

    def test_build_trims(self) -> None:
        html = HtmlBuilder()
        html.begin_div().end_div()
        assert html.build() == "<div>\n</div>"


class TestEscapeHtml:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("a < b && c", "a &lt; b &amp;&amp; c"),
            ('"quoted"', "&quot;quoted&quot;"),
            ("it's", "it&#x27;s"),
            ("", ""),
            ("plain", "plain"),
        ],
    )
    def test_escape(self, text: str, expected: str) -> None:
        assert escape_html(text) == expected


class TestSnakeCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("lineNumberPunc", "line_number_punc"),
            ("noEnd", "no_end"),
            ("indent_size", "indent_size"),
            ("titlePrefix", "title_prefix"),
        ],
    )
    def test_convert(self, name: str, expected: str) -> None:
        assert snake_case(name) == expected


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "pseudocode.mymodule"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("pseudocode.parser").name == "pseudocode.parser"
        assert get_logger("pseudocode").name == "pseudocode"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)


class TestSourceLocation:
    def test_from_offset(self) -> None:
        loc = SourceLocation.from_offset("ab\ncd", 4)
        assert (loc.lineno, loc.col_offset, loc.offset, loc.end_offset) == (2, 2, 4, 4)

    def test_offset_is_clamped(self) -> None:
        assert SourceLocation.from_offset("ab", 10).offset == 2

    def test_str(self) -> None:
        assert str(SourceLocation(3, 5)) == "3:5"
        assert str(SourceLocation(3, 5, source_file="a.tex")) == "a.tex:3:5"

