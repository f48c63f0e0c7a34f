"""Tests for the parse-tree visitor and transform utilities."""

import dataclasses

import pytest

from pseudocode import parse
from pseudocode.config import CaptionCounter, RendererOptions
from pseudocode.nodes import (
    Block,
    Call,
    Comment,
    Document,
    If,
    Loop,
    Math,
    Node,
    Ordinary,
)
from pseudocode.renderers.html import HtmlRenderer
from pseudocode.visitor import BaseVisitor, transform

SOURCE = r"""
\begin{algorithmic}
\FOR{$i = 1$ \TO $n$} \COMMENT{outer}
    \IF{$A[i] > m$}
        \STATE $m = A[i]$ \COMMENT{new max}
        \STATE \CALL{Log}{$m$}
    \ENDIF
\ENDFOR
\RETURN $m$
\end{algorithmic}
"""


class _KindCounter(BaseVisitor[None]):
    def __init__(self) -> None:
        self.kinds: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.kinds.append(node.kind)


class _CallCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.names: list[str] = []

    def visit_call(self, node: Call) -> None:
        self.names.append(node.name)


class _OrdinaryValues(BaseVisitor[None]):
    def __init__(self) -> None:
        self.values: list[str] = []

    def visit_ordinary(self, node: Ordinary) -> None:
        self.values.append(node.value)


class _MathSources(BaseVisitor[None]):
    def __init__(self) -> None:
        self.sources: list[str] = []

    def visit_math(self, node: Math) -> None:
        self.sources.append(node.value)


# =============================================================================
# Visitor dispatch tests
# =============================================================================


class TestVisitor:
    def test_walks_whole_tree_in_order(self) -> None:
        visitor = _KindCounter()
        visitor.visit(parse(SOURCE))
        kinds = visitor.kinds
        assert kinds[:4] == ["root", "algorithmic", "block", "loop"]
        assert kinds.count("comment") == 2
        assert kinds.count("statement") == 3
        assert kinds.count("call") == 1

    def test_specific_visit_method(self) -> None:
        collector = _CallCollector()
        collector.visit(parse(SOURCE))
        assert collector.names == ["Log"]

    def test_math_in_source_order(self) -> None:
        visitor = _MathSources()
        visitor.visit(parse(SOURCE))
        assert visitor.sources == ["i = 1", "n", "A[i] > m", "m = A[i]", "m", "m"]

    def test_visit_returns_dispatch_result(self) -> None:
        class Kind(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return node.kind

        assert Kind().visit(parse(SOURCE)) == "root"

    def test_unknown_node_goes_to_default(self) -> None:
        visitor = _KindCounter()
        visitor.visit(Node(location=parse("").location))
        assert visitor.kinds == ["node"]


# =============================================================================
# Transform tests
# =============================================================================


class TestTransform:
    def test_identity_returns_same_tree(self) -> None:
        doc = parse(SOURCE)
        assert transform(doc, lambda n: n) is doc

    def test_remove_comments(self) -> None:
        doc = parse(SOURCE)
        stripped = transform(doc, lambda n: None if isinstance(n, Comment) else n)

        visitor = _KindCounter()
        visitor.visit(stripped)
        assert "comment" not in visitor.kinds

        options = RendererOptions(math_backend=lambda s: s, caption_counter=CaptionCounter())
        html = HtmlRenderer(options).render(stripped)
        assert "ps-comment" not in html

    def test_rewrite_leaves(self) -> None:
        doc = parse(SOURCE)

        def upper(node: Node) -> Node:
            if isinstance(node, Ordinary):
                return dataclasses.replace(node, value=node.value.upper())
            return node

        new_doc = transform(doc, upper)
        assert new_doc != doc
        visitor = _OrdinaryValues()
        visitor.visit(new_doc)
        assert visitor.values == ["OUTER", "NEW", "MAX"]

    def test_original_untouched(self) -> None:
        doc = parse(SOURCE)
        before = parse(SOURCE)
        transform(doc, lambda n: None if isinstance(n, Comment) else n)
        assert doc == before

    def test_rename_calls(self) -> None:
        doc = parse(SOURCE)
        renamed = transform(
            doc,
            lambda n: dataclasses.replace(n, name="Trace") if isinstance(n, Call) else n,
        )
        collector = _CallCollector()
        collector.visit(renamed)
        assert collector.names == ["Trace"]

    def test_cannot_remove_root(self) -> None:
        with pytest.raises(TypeError, match="cannot remove root"):
            transform(parse(SOURCE), lambda n: None if isinstance(n, Document) else n)

    def test_cannot_remove_fixed_children(self) -> None:
        def drop_loop_body(node: Node) -> Node | None:
            if isinstance(node, Block) and any(isinstance(c, If) for c in node.children):
                return None
            return node

        with pytest.raises(TypeError, match="cannot remove required 'block' node"):
            transform(parse(SOURCE), drop_loop_body)

    def test_cannot_remove_if_branch(self) -> None:
        def drop_conditions(node: Node) -> Node | None:
            is_condition = node.kind == "close-text" and any(
                isinstance(c, Math) and ">" in c.value for c in node.children
            )
            if is_condition:
                return None
            return node

        with pytest.raises(TypeError, match="cannot remove required 'close-text' node"):
            transform(parse(SOURCE), drop_conditions)

    def test_loop_condition_rewrite(self) -> None:
        doc = parse(SOURCE)

        def rewrite(node: Node) -> Node:
            if isinstance(node, Math) and node.value == "n":
                return dataclasses.replace(node, value="N")
            return node

        new_doc = transform(doc, rewrite)
        loop = new_doc.children[0].children[0].children[0]
        assert isinstance(loop, Loop)
        assert loop.condition.children[-1].value == "N"
        assert isinstance(loop.body.children[1], If)

