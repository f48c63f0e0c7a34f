"""Parse-tree visitor and transformer for pseudocode.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen trees.

Example: collect all called function names:

    class CallCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_call(self, node: Call) -> None:
            self.names.append(node.name)

    collector = CallCollector()
    collector.visit(doc)

Example: drop every comment:

    new_doc = transform(doc, lambda n: None if isinstance(n, Comment) else n)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure, safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable

from pseudocode.nodes import (
    Algorithm,
    Algorithmic,
    Block,
    Call,
    Caption,
    CloseText,
    Command,
    Comment,
    CondSymbol,
    Document,
    FontCommand,
    FontDeclaration,
    Function,
    If,
    Loop,
    Math,
    Node,
    OpenText,
    Ordinary,
    QuoteSymbol,
    Repeat,
    SizeDeclaration,
    Special,
    Statement,
    TextSymbol,
    Upon,
)


class BaseVisitor[T]:
    """Base parse-tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        for child in node.children or ():
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Environment visitors --------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_algorithm(self, node: Algorithm) -> T:
        return self.visit_default(node)

    def visit_caption(self, node: Caption) -> T:
        return self.visit_default(node)

    def visit_algorithmic(self, node: Algorithmic) -> T:
        return self.visit_default(node)

    # -- Block visitors --------------------------------------------------------

    def visit_block(self, node: Block) -> T:
        return self.visit_default(node)

    def visit_if(self, node: If) -> T:
        return self.visit_default(node)

    def visit_loop(self, node: Loop) -> T:
        return self.visit_default(node)

    def visit_repeat(self, node: Repeat) -> T:
        return self.visit_default(node)

    def visit_upon(self, node: Upon) -> T:
        return self.visit_default(node)

    def visit_function(self, node: Function) -> T:
        return self.visit_default(node)

    def visit_statement(self, node: Statement) -> T:
        return self.visit_default(node)

    def visit_command(self, node: Command) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    # -- Text visitors ---------------------------------------------------------

    def visit_open_text(self, node: OpenText) -> T:
        return self.visit_default(node)

    def visit_close_text(self, node: CloseText) -> T:
        return self.visit_default(node)

    def visit_call(self, node: Call) -> T:
        return self.visit_default(node)

    def visit_ordinary(self, node: Ordinary) -> T:
        return self.visit_default(node)

    def visit_math(self, node: Math) -> T:
        return self.visit_default(node)

    def visit_special(self, node: Special) -> T:
        return self.visit_default(node)

    def visit_cond_symbol(self, node: CondSymbol) -> T:
        return self.visit_default(node)

    def visit_quote_symbol(self, node: QuoteSymbol) -> T:
        return self.visit_default(node)

    def visit_size_declaration(self, node: SizeDeclaration) -> T:
        return self.visit_default(node)

    def visit_font_declaration(self, node: FontDeclaration) -> T:
        return self.visit_default(node)

    def visit_font_command(self, node: FontCommand) -> T:
        return self.visit_default(node)

    def visit_text_symbol(self, node: TextSymbol) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Algorithm():
                return self.visit_algorithm(node)
            case Caption():
                return self.visit_caption(node)
            case Algorithmic():
                return self.visit_algorithmic(node)
            case Block():
                return self.visit_block(node)
            case If():
                return self.visit_if(node)
            case Loop():
                return self.visit_loop(node)
            case Repeat():
                return self.visit_repeat(node)
            case Upon():
                return self.visit_upon(node)
            case Function():
                return self.visit_function(node)
            case Statement():
                return self.visit_statement(node)
            case Command():
                return self.visit_command(node)
            case Comment():
                return self.visit_comment(node)
            case OpenText():
                return self.visit_open_text(node)
            case CloseText():
                return self.visit_close_text(node)
            case Call():
                return self.visit_call(node)
            case Ordinary():
                return self.visit_ordinary(node)
            case Math():
                return self.visit_math(node)
            case Special():
                return self.visit_special(node)
            case CondSymbol():
                return self.visit_cond_symbol(node)
            case QuoteSymbol():
                return self.visit_quote_symbol(node)
            case SizeDeclaration():
                return self.visit_size_declaration(node)
            case FontDeclaration():
                return self.visit_font_declaration(node)
            case FontCommand():
                return self.visit_font_command(node)
            case TextSymbol():
                return self.visit_text_symbol(node)
            case _:
                return self.visit_default(node)


# Fixed-shape nodes: the fields holding their child nodes
_CHILD_FIELDS: dict[type[Node], tuple[str, ...]] = {
    Caption: ("text",),
    Loop: ("condition", "body"),
    Repeat: ("body", "condition"),
    Upon: ("condition", "body"),
    Function: ("params", "body"),
    Statement: ("text",),
    Comment: ("text",),
    Call: ("args",),
}


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from a sequence (the
    children of a document, environment, block or text run). Nodes with a
    fixed shape (a loop's condition, an ``If`` branch) cannot be removed;
    returning None for them raises TypeError, as it does for the root.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    return fn(_transform_children(node, fn))


def _transform_required(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    result = _transform_node(node, fn)
    if result is None:
        msg = f"cannot remove required {node.kind!r} node"
        raise TypeError(msg)
    return result


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed."""
    match node:
        case Document(children=children) | Algorithm(children=children) | Algorithmic(
            children=children
        ) | Block(children=children) | OpenText(children=children) | CloseText(
            children=children
        ):
            new_children = tuple(
                result for c in children if (result := _transform_node(c, fn)) is not None
            )
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case If(children=children):
            new_children = tuple(_transform_required(c, fn) for c in children)
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case _:
            names = _CHILD_FIELDS.get(type(node), ())
            changes = {}
            for name in names:
                child = getattr(node, name)
                new_child = _transform_required(child, fn)
                if new_child is not child:
                    changes[name] = new_child
            if changes:
                return dataclasses.replace(node, **changes)

    return node
