"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in source text.
Used for parse errors and for the location of every parse-tree node.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    Lines and columns are 1-indexed; offsets are 0-indexed character
    positions into the source string.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source
        source_file: Source file path (optional)

    Examples:
            >>> SourceLocation.from_offset("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4, end_offset=4, source_file=None)

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "algo.tex:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        source: str,
        offset: int,
        source_file: str | None = None,
        end_offset: int | None = None,
    ) -> SourceLocation:
        """Build a location by counting lines up to offset.

        Args:
            source: Full source text
            offset: Character offset (clamped to the source length)
            source_file: Optional source file path
            end_offset: Optional end offset (defaults to offset)

        Returns:
            SourceLocation with line and column filled in
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        col = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(
            lineno=lineno,
            col_offset=col,
            offset=offset,
            end_offset=end_offset if end_offset is not None else offset,
            source_file=source_file,
        )
