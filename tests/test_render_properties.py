"""Property-based tests for renderer invariants using Hypothesis.

Random nestings of control structures are generated together with the
number of lines and end lines they must render to:
1. Every construct closes with exactly one end line of its own kind
2. ``no_end`` removes every end line but keeps ``until``
3. ``else if`` and ``else`` lines match the branches of each ``if``
4. Rendering is deterministic
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st

from pseudocode import render_to_string
from pseudocode.config import CaptionCounter
from pseudocode.utils.text import escape_html


@dataclass(frozen=True)
class Fragment:
    """Source for a run of lines and what it should render to."""

    source: str
    lines: int
    ends: Counter[str] = field(default_factory=Counter)
    elifs: int = 0
    elses: int = 0
    untils: int = 0


def _join(fragments: list[Fragment]) -> Fragment:
    ends: Counter[str] = Counter()
    for frag in fragments:
        ends.update(frag.ends)
    return Fragment(
        source="\n".join(f.source for f in fragments),
        lines=sum(f.lines for f in fragments),
        ends=ends,
        elifs=sum(f.elifs for f in fragments),
        elses=sum(f.elses for f in fragments),
        untils=sum(f.untils for f in fragments),
    )


def _wrap(body: Fragment, open_: str, close: str, end: str | None) -> Fragment:
    ends = Counter(body.ends)
    if end is not None:
        ends[end] += 1
    return Fragment(
        source=f"{open_}\n{body.source}\n{close}",
        lines=body.lines + 2,
        ends=ends,
        elifs=body.elifs,
        elses=body.elses,
        untils=body.untils + (1 if end is None else 0),
    )


def fake_math(source: str) -> str:
    return f"<m>{escape_html(source)}</m>"


_statements = st.sampled_from(
    [
        Fragment(r"\STATE $x \gets 0$", 1),
        Fragment(r"\RETURN \TRUE", 1),
        Fragment(r"\PRINT done", 1),
        Fragment(r"\BREAK", 1),
        Fragment(r"\STATE \CALL{Swap}{$a, b$} \COMMENT{swap}", 1),
    ]
)


@st.composite
def _if_fragment(draw: st.DrawFn, bodies: st.SearchStrategy[Fragment]) -> Fragment:
    then_body = _join(draw(st.lists(bodies, min_size=1, max_size=2)))
    elif_bodies = draw(st.lists(bodies, max_size=2))
    else_body = draw(st.one_of(st.none(), bodies))

    parts = [r"\IF{$a < b$}", then_body.source]
    for body in elif_bodies:
        parts += [r"\ELSIF{$a = b$}", body.source]
    if else_body is not None:
        parts += [r"\ELSE", else_body.source]
    parts.append(r"\ENDIF")

    inner = _join([then_body, *elif_bodies, *([else_body] if else_body else [])])
    ends = Counter(inner.ends)
    ends["end if"] += 1
    return Fragment(
        source="\n".join(parts),
        lines=inner.lines + 2 + len(elif_bodies) + (1 if else_body else 0),
        ends=ends,
        elifs=inner.elifs + len(elif_bodies),
        elses=inner.elses + (1 if else_body else 0),
        untils=inner.untils,
    )


def _extend(children: st.SearchStrategy[Fragment]) -> st.SearchStrategy[Fragment]:
    bodies = st.lists(children, min_size=1, max_size=3).map(_join)
    return st.one_of(
        bodies.map(lambda b: _wrap(b, r"\FOR{$i = 1$ \TO $n$}", r"\ENDFOR", "end for")),
        bodies.map(lambda b: _wrap(b, r"\FORALL{$v \in V$}", r"\ENDFOR", "end for")),
        bodies.map(lambda b: _wrap(b, r"\WHILE{$i < n$}", r"\ENDWHILE", "end while")),
        bodies.map(lambda b: _wrap(b, r"\REPEAT", r"\UNTIL{$i = n$}", None)),
        bodies.map(lambda b: _wrap(b, r"\UPON{msg}", r"\ENDUPON", "end upon")),
        bodies.map(lambda b: _wrap(b, r"\FUNCTION{F}{$x$}", r"\ENDFUNCTION", "end function")),
        bodies.map(
            lambda b: _wrap(b, r"\PROCEDURE{P}{$x$}", r"\ENDPROCEDURE", "end procedure")
        ),
        _if_fragment(bodies),
    )


_programs = st.lists(
    st.recursive(_statements, _extend, max_leaves=12), min_size=1, max_size=4
).map(_join)


def _render(program: Fragment, **overrides: Any) -> str:
    source = f"\\begin{{algorithmic}}\n{program.source}\n\\end{{algorithmic}}"
    return render_to_string(
        source, caption_counter=CaptionCounter(), math_backend=fake_math, **overrides
    )


def _keywords(html: str) -> list[str]:
    return re.findall(r'<span class="ps-keyword">([^<]*)</span>', html)


class TestEndLineProperties:
    @given(_programs)
    @settings(max_examples=100)
    def test_one_end_line_per_construct(self, program: Fragment) -> None:
        keywords = _keywords(_render(program))
        found = Counter(k for k in keywords if k.startswith("end "))
        assert found == program.ends

    @given(_programs)
    @settings(max_examples=100)
    def test_no_end_keeps_until(self, program: Fragment) -> None:
        keywords = _keywords(_render(program, no_end=True))
        assert not [k for k in keywords if k.startswith("end ")]
        assert keywords.count("until ") == program.untils

    @given(_programs)
    @settings(max_examples=100)
    def test_line_count(self, program: Fragment) -> None:
        html = _render(program, line_number=True)
        assert html.count('<p class="ps-line ps-code">') == program.lines
        numbers = re.findall(r'<span class="ps-linenum"[^>]*>(\d+):</span>', html)
        assert numbers == [str(n) for n in range(1, program.lines + 1)]

    @given(_programs)
    @settings(max_examples=100)
    def test_no_end_drops_only_end_lines(self, program: Fragment) -> None:
        html = _render(program, no_end=True)
        expected = program.lines - sum(program.ends.values())
        assert html.count('<p class="ps-line ps-code">') == expected


class TestBranchProperties:
    @given(_programs)
    @settings(max_examples=100)
    def test_elif_and_else_lines(self, program: Fragment) -> None:
        keywords = _keywords(_render(program))
        assert keywords.count("else if ") == program.elifs
        assert keywords.count("else") == program.elses


class TestDeterminism:
    @given(_programs)
    @settings(max_examples=50)
    def test_same_input_same_output(self, program: Fragment) -> None:
        assert _render(program) == _render(program)
