"""Renderer configuration for pseudocode.

RendererOptions is an immutable bundle of presentation options, validated
when it is built so that a bad value fails before any parsing starts.

Caption numbering is the one piece of state that outlives a render call:
each ``algorithm`` with a caption takes the next number from a
CaptionCounter. Unless a counter is passed in, the process-wide
GLOBAL_CAPTION_COUNTER is used, so numbering continues across calls.

Usage:
    from pseudocode.config import CaptionCounter, RendererOptions

    options = RendererOptions(line_number=True, indent_size="1.5em")

    # Isolated numbering (tests, independent documents)
    options = RendererOptions(caption_counter=CaptionCounter())

    # Options from external sources, camelCase accepted
    options = RendererOptions.from_dict({"lineNumber": True, "noEnd": True})

"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from pseudocode.errors import ConfigError
from pseudocode.utils.text import snake_case

if TYPE_CHECKING:
    from pseudocode.math import MathBackend

EM_UNIT = "em"


class CaptionCounter:
    """Thread-safe running caption number.

    The counter is incremented before use: a counter at N numbers the
    next caption N+1.

    Usage:
            >>> counter = CaptionCounter()
            >>> counter.next()
            1
            >>> counter.reset(5)
            >>> counter.next()
            6

    """

    __slots__ = ("_lock", "_value")

    def __init__(self, value: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = value

    @property
    def value(self) -> int:
        """Number of the most recent caption (0 before the first)."""
        return self._value

    def next(self) -> int:
        """Advance and return the new caption number."""
        with self._lock:
            self._value += 1
            return self._value

    def reset(self, value: int = 0) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"CaptionCounter({self._value})"


# Process-wide counter shared by renders that do not bring their own
GLOBAL_CAPTION_COUNTER = CaptionCounter()


def parse_indent_size(value: Any) -> float:
    """Normalize an indent size to a number of ``em``.

    Accepts a number or a string with the ``em`` unit (``"1.2em"``).

    Raises:
        ConfigError: For any other unit, a non-numeric value, or a
            negative or non-finite size.
    """
    if isinstance(value, bool):
        raise ConfigError("indent_size", f"expected a length in em, got {value!r}")

    if isinstance(value, int | float):
        size = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.endswith(EM_UNIT):
            raise ConfigError("indent_size", f"unit must be '{EM_UNIT}', got {value!r}")
        try:
            size = float(text[: -len(EM_UNIT)])
        except ValueError:
            raise ConfigError("indent_size", f"not a number: {value!r}") from None
    else:
        raise ConfigError("indent_size", f"expected a length in em, got {value!r}")

    if not math.isfinite(size) or size < 0:
        raise ConfigError("indent_size", f"must be a non-negative finite length, got {value!r}")
    return size


@dataclass(frozen=True, slots=True)
class RendererOptions:
    """Immutable renderer configuration.

    Attributes:
        indent_size: Block indentation in em (number or ``"1.2em"``)
        comment_delimiter: Text placed before every comment
        line_number: Number the lines of algorithmic environments
        line_number_punc: Text after each line number
        no_end: Suppress "end ..." lines
        caption_count: When set, reset the caption counter to this value
            at the start of the render
        title_prefix: Caption keyword, e.g. "Algorithm" in "Algorithm 1"
        caption_counter: Counter to number captions with; None selects
            GLOBAL_CAPTION_COUNTER
        math_backend: Math backend for this render; None selects the
            global backend (see pseudocode.math)

    """

    indent_size: float = 1.2
    comment_delimiter: str = " // "
    line_number: bool = False
    line_number_punc: str = ":"
    no_end: bool = False
    caption_count: int | None = None
    title_prefix: str = "Algorithm"
    caption_counter: CaptionCounter | None = None
    math_backend: MathBackend | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "indent_size", parse_indent_size(self.indent_size))

        count = self.caption_count
        if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
            raise ConfigError("caption_count", f"expected an integer, got {count!r}")

        for name in ("comment_delimiter", "line_number_punc", "title_prefix"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(name, f"expected a string, got {getattr(self, name)!r}")

        for name in ("line_number", "no_end"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(name, f"expected a boolean, got {getattr(self, name)!r}")

    @property
    def counter(self) -> CaptionCounter:
        """The caption counter this render numbers captions with."""
        if self.caption_counter is not None:
            return self.caption_counter
        return GLOBAL_CAPTION_COUNTER

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> RendererOptions:
        """Create RendererOptions from a dictionary.

        Keys may be snake_case field names or their camelCase forms
        (``lineNumber``, ``noEnd``, ...). Unknown keys are silently ignored.

        Example:
            >>> options = RendererOptions.from_dict({
            ...     "lineNumber": True,
            ...     "indentSize": "2em",
            ...     "unknown_key": "ignored",
            ... })
            >>> options.indent_size
            2.0

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {}
        for key, value in config_dict.items():
            name = snake_case(key)
            if name in valid_fields:
                filtered[name] = value
        return cls(**filtered)

    def merged(self, overrides: dict[str, Any]) -> RendererOptions:
        """Return a copy with overrides applied (camelCase keys accepted)."""
        if not overrides:
            return self
        valid_fields = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = snake_case(key)
            if name not in valid_fields:
                raise ConfigError(key, "unknown option")
            changes[name] = value
        return replace(self, **changes)


def coerce_options(
    options: RendererOptions | dict[str, Any] | None, overrides: dict[str, Any] | None = None
) -> RendererOptions:
    """Build RendererOptions from any accepted options form.

    Raises:
        ConfigError: If options has an unsupported type or a bad value.
    """
    match options:
        case None:
            resolved = RendererOptions()
        case RendererOptions():
            resolved = options
        case dict():
            resolved = RendererOptions.from_dict(options)
        case _:
            raise ConfigError("options", f"expected RendererOptions or dict, got {options!r}")
    return resolved.merged(overrides or {})


__all__ = [
    "GLOBAL_CAPTION_COUNTER",
    "CaptionCounter",
    "RendererOptions",
    "coerce_options",
    "parse_indent_size",
]
