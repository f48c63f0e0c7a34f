"""Text utilities for rendering and option handling."""

from __future__ import annotations

import html as html_module
import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def escape_html(text: str) -> str:
    """Escape HTML special characters for text content and attribute values.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Examples:
        >>> escape_html("a < b && c")
        'a &lt; b &amp;&amp; c'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("'", "&#x27;")


def snake_case(name: str) -> str:
    """Convert a camelCase option name to snake_case.

    Examples:
        >>> snake_case("lineNumberPunc")
        'line_number_punc'
        >>> snake_case("indent_size")
        'indent_size'
    """
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()
