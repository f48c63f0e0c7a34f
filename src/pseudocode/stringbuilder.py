"""String builders for O(n) HTML accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

HtmlBuilder adds tag helpers and a text buffer: plain text is collected
raw and escaped in one pass when the next tag (or markup) is written, so
adjacent text fragments always come out as a single escaped run.

Thread Safety:
Builder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from pseudocode.utils.text import escape_html


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<p>")
            >>> sb.append("Hello")
            >>> sb.append("</p>")
            >>> sb.build()
            '<p>Hello</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)


class HtmlBuilder(StringBuilder):
    """StringBuilder with tag helpers and buffered, escaped text.

    Block tags (div, p) are followed by a newline for readable output;
    spans are written inline.

    Usage:
            >>> html = HtmlBuilder()
            >>> html.begin_p("ps-line").put_text("a < b").end_p()
            >>> html.build()
            '<p class="ps-line">a &lt; b</p>'

    """

    __slots__ = ("_text",)

    def __init__(self) -> None:
        super().__init__()
        self._text: list[str] = []

    def begin_div(self, class_name: str | None = None, style: str | None = None) -> HtmlBuilder:
        self._begin_tag("div", class_name, style)
        self._parts.append("\n")
        return self

    def end_div(self) -> HtmlBuilder:
        self._end_tag("div")
        self._parts.append("\n")
        return self

    def begin_p(self, class_name: str | None = None, style: str | None = None) -> HtmlBuilder:
        self._begin_tag("p", class_name, style)
        return self

    def end_p(self) -> HtmlBuilder:
        self._end_tag("p")
        self._parts.append("\n")
        return self

    def begin_span(self, class_name: str | None = None, style: str | None = None) -> HtmlBuilder:
        self._begin_tag("span", class_name, style)
        return self

    def end_span(self) -> HtmlBuilder:
        self._end_tag("span")
        return self

    def put_text(self, text: str) -> HtmlBuilder:
        """Buffer plain text; it is escaped when flushed."""
        if text:
            self._text.append(text)
        return self

    def put_html(self, html: str) -> HtmlBuilder:
        """Write trusted markup verbatim."""
        self._flush_text()
        self.append(html)
        return self

    def build(self) -> str:
        """Flush pending text and return the markup, trimmed."""
        self._flush_text()
        return super().build().strip()

    def _flush_text(self) -> None:
        if self._text:
            self._parts.append(escape_html("".join(self._text)))
            self._text.clear()

    def _begin_tag(self, tag: str, class_name: str | None, style: str | None) -> None:
        self._flush_text()
        parts = [f"<{tag}"]
        if class_name:
            parts.append(f' class="{class_name}"')
        if style:
            parts.append(f' style="{escape_html(style)}"')
        parts.append(">")
        self._parts.append("".join(parts))

    def _end_tag(self, tag: str) -> None:
        self._flush_text()
        self._parts.append(f"</{tag}>")
