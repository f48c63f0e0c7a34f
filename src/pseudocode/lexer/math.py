"""Math span scanner mixin.

Math spans cannot be matched by a regular pattern: the scanner has to look
for the matching closing delimiter, skipping delimiters that are escaped
with a backslash, and fail loudly when the span never closes.
"""

from __future__ import annotations

from pseudocode.errors import ParseError
from pseudocode.tokens import Token, TokenType

# (opening, closing) pairs, tried in order
MATH_DELIMITERS: tuple[tuple[str, str], ...] = (
    ("$", "$"),
    ("\\(", "\\)"),
)


class MathScannerMixin:
    """Mixin providing math span scanning.

    Required Host Attributes:
        - _source: str
        - _source_len: int
        - _source_file: str | None

    """

    _source: str
    _source_len: int
    _source_file: str | None

    def _scan_math(self, start: int, whitespace: bool) -> Token | None:
        """Scan a math span starting at start.

        Args:
            start: Offset of the opening delimiter
            whitespace: Whether whitespace preceded the span

        Returns:
            MATH token whose text is the inner source, or None if no math
            delimiter opens at start.

        Raises:
            ParseError: If the span is not closed before end of input.
        """
        source = self._source
        for open_del, close_del in MATH_DELIMITERS:
            if not source.startswith(open_del, start):
                continue

            content_start = start + len(open_del)
            search = content_start
            while True:
                idx = source.find(close_del, search)
                if idx < 0:
                    raise ParseError(
                        "Math environment is not closed",
                        start,
                        source,
                        self._source_file,
                    )
                # An escaped delimiter does not close the span
                if idx > search and source[idx - 1] == "\\":
                    search = idx + len(close_del)
                    continue
                end = idx + len(close_del)
                return Token(
                    type=TokenType.MATH,
                    text=source[content_start:idx],
                    whitespace=whitespace,
                    position=start,
                    end_position=end,
                )
        return None
