"""Shared fixtures for pseudocode tests."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from pseudocode import render_to_string
from pseudocode.config import GLOBAL_CAPTION_COUNTER, CaptionCounter
from pseudocode.math import set_math_backend
from pseudocode.utils.text import escape_html


def fake_math(source: str) -> str:
    """Deterministic stand-in for a math backend: well-formed, escaped markup."""
    return f"<m>{escape_html(source)}</m>"


@pytest.fixture
def counter() -> CaptionCounter:
    return CaptionCounter()


@pytest.fixture
def html(counter: CaptionCounter) -> Callable[..., str]:
    """Render with an isolated caption counter and the fake math backend."""

    def _render(source: str, **overrides: Any) -> str:
        overrides.setdefault("caption_counter", counter)
        overrides.setdefault("math_backend", fake_math)
        return render_to_string(source, **overrides)

    return _render


@pytest.fixture(autouse=True)
def _restore_globals() -> Iterator[None]:
    """Keep the process-wide math backend and caption counter test-local."""
    saved = GLOBAL_CAPTION_COUNTER.value
    yield
    set_math_backend(None)
    GLOBAL_CAPTION_COUNTER.reset(saved)

