"""Typed parse-tree nodes for pseudocode.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: the same tree can be rendered or walked any number of times
- Pattern matching: Python 3.10+ match statements work naturally

Node Hierarchy:
Node (base)
├── Leaf (atoms inside text; carry a preceding-whitespace flag)
│   ├── Ordinary
│   ├── Math
│   ├── Special
│   ├── CondSymbol
│   ├── QuoteSymbol
│   ├── SizeDeclaration
│   ├── FontDeclaration
│   ├── FontCommand
│   └── TextSymbol
├── Text (runs of inline content)
│   ├── OpenText
│   └── CloseText
├── Call
├── Comment
├── Statement, Command
├── If, Loop, Repeat, Upon, Function
├── Block
├── Caption
├── Algorithmic, Algorithm
└── Document

Every node has a ``kind`` tag (the production name) and a ``children``
tuple; leaves have no children.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass, field
from typing import ClassVar

from pseudocode.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all parse-tree nodes.

    All nodes track their source location for error messages and debugging.

    """

    kind: ClassVar[str] = "node"

    location: SourceLocation

    @property
    def children(self) -> tuple["Node", ...] | None:
        """Ordered child nodes, or None for leaves."""
        return None


# =============================================================================
# Leaf Nodes (atoms)
# =============================================================================


@dataclass(frozen=True, slots=True)
class Leaf(Node):
    """An atom inside a text run.

    ``whitespace`` records whether whitespace preceded the atom in the
    source; the renderer emits a single space for it.

    """

    value: str
    whitespace: bool = False


@dataclass(frozen=True, slots=True)
class Ordinary(Leaf):
    """A run of plain characters."""

    kind: ClassVar[str] = "ordinary"


@dataclass(frozen=True, slots=True)
class Math(Leaf):
    """Math source with delimiters stripped: ``$x$`` or ``\\(x\\)``."""

    kind: ClassVar[str] = "math"


@dataclass(frozen=True, slots=True)
class Special(Leaf):
    """Escaped special character, e.g. ``\\{`` or ``\\\\``."""

    kind: ClassVar[str] = "special"


@dataclass(frozen=True, slots=True)
class CondSymbol(Leaf):
    """Condition keyword: and, or, not, true, false, to, downto."""

    kind: ClassVar[str] = "cond-symbol"


@dataclass(frozen=True, slots=True)
class QuoteSymbol(Leaf):
    """Typographic quote mark: ` `` ' ''."""

    kind: ClassVar[str] = "quote-symbol"


@dataclass(frozen=True, slots=True)
class SizeDeclaration(Leaf):
    """Sizing declaration such as ``\\small``; value keeps source case."""

    kind: ClassVar[str] = "sizing-dclr"


@dataclass(frozen=True, slots=True)
class FontDeclaration(Leaf):
    """Font declaration such as ``\\bfseries``; styles the rest of its group."""

    kind: ClassVar[str] = "font-dclr"


@dataclass(frozen=True, slots=True)
class FontCommand(Leaf):
    """Font command such as ``\\textbf``; styles the following brace group."""

    kind: ClassVar[str] = "font-cmd"


@dataclass(frozen=True, slots=True)
class TextSymbol(Leaf):
    """Named text symbol such as ``\\textbackslash``."""

    kind: ClassVar[str] = "text-symbol"


# =============================================================================
# Text Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """A run of inline content: atoms, calls and nested brace groups.

    ``whitespace`` is meaningful for nested groups: whitespace before
    the opening brace.

    """

    children: tuple["Inline", ...] = ()
    whitespace: bool = False


@dataclass(frozen=True, slots=True)
class OpenText(Text):
    """Statement text, ended by the next non-text atom."""

    kind: ClassVar[str] = "open-text"


@dataclass(frozen=True, slots=True)
class CloseText(Text):
    """Text delimited by braces (conditions, arguments, captions, groups)."""

    kind: ClassVar[str] = "close-text"


@dataclass(frozen=True, slots=True)
class Call(Node):
    """Function call.

    Source: \\CALL{name}{args}
    Display: name(args)

    """

    kind: ClassVar[str] = "call"

    name: str
    args: CloseText
    whitespace: bool = False

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.args,)


# PEP 695 type alias for inline content
type Inline = (
    Ordinary
    | Math
    | Special
    | CondSymbol
    | QuoteSymbol
    | SizeDeclaration
    | FontDeclaration
    | FontCommand
    | TextSymbol
    | Call
    | CloseText
)


# =============================================================================
# Line Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Source: \\COMMENT{text}"""

    kind: ClassVar[str] = "comment"

    text: CloseText

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.text,)


@dataclass(frozen=True, slots=True)
class Statement(Node):
    """Statement with open text.

    ``name`` is one of state, print, return (block statements) or
    require, ensure, input, output (environment-level statements).

    """

    kind: ClassVar[str] = "statement"

    name: str
    text: OpenText

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.text,)


@dataclass(frozen=True, slots=True)
class Command(Node):
    """Bare command: break or continue."""

    kind: ClassVar[str] = "command"

    name: str

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


# =============================================================================
# Control and Definition Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Sequence of block items; rendered one indentation level deeper."""

    kind: ClassVar[str] = "block"

    children: tuple["BlockItem", ...] = ()


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional.

    Children are laid out positionally:
    ``[cond0, block0, cond1, block1, ..., condN, blockN, (else_block)?]``
    where N = num_elif.

    """

    kind: ClassVar[str] = "if"

    # No default: Node.children is a property
    children: tuple[CloseText | Block, ...] = field(kw_only=True)
    num_elif: int = 0
    has_else: bool = False

    @property
    def condition(self) -> CloseText:
        return self.children[0]  # type: ignore[return-value]

    @property
    def then_block(self) -> Block:
        return self.children[1]  # type: ignore[return-value]

    @property
    def elif_branches(self) -> tuple[tuple[CloseText, Block], ...]:
        """(condition, block) pairs of the elif branches, in order."""
        return tuple(
            (self.children[2 + 2 * i], self.children[3 + 2 * i])  # type: ignore[misc]
            for i in range(self.num_elif)
        )

    @property
    def else_block(self) -> Block | None:
        return self.children[-1] if self.has_else else None  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class Loop(Node):
    """for, forall or while loop; ``keyword`` is lower-case."""

    kind: ClassVar[str] = "loop"

    keyword: str
    condition: CloseText
    body: Block

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.condition, self.body)


@dataclass(frozen=True, slots=True)
class Repeat(Node):
    """Source: \\REPEAT block \\UNTIL{cond}"""

    kind: ClassVar[str] = "repeat"

    body: Block
    condition: CloseText

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.body, self.condition)


@dataclass(frozen=True, slots=True)
class Upon(Node):
    """Source: \\UPON{cond} block \\ENDUPON"""

    kind: ClassVar[str] = "upon"

    condition: CloseText
    body: Block

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.condition, self.body)


@dataclass(frozen=True, slots=True)
class Function(Node):
    """Function or procedure definition; ``keyword`` is lower-case."""

    kind: ClassVar[str] = "function"

    keyword: str
    name: str
    params: CloseText
    body: Block

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.params, self.body)


type BlockItem = If | Loop | Repeat | Upon | Function | Statement | Command | Comment


# =============================================================================
# Environment Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Caption(Node):
    """Source: \\caption{text}"""

    kind: ClassVar[str] = "caption"

    text: CloseText

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.text,)


@dataclass(frozen=True, slots=True)
class Algorithmic(Node):
    """Body of \\begin{algorithmic}: io statements and blocks."""

    kind: ClassVar[str] = "algorithmic"

    children: tuple[Statement | Block, ...] = ()


@dataclass(frozen=True, slots=True)
class Algorithm(Node):
    """Body of \\begin{algorithm}: captions and algorithmic environments."""

    kind: ClassVar[str] = "algorithm"

    children: tuple[Caption | Algorithmic, ...] = ()


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of the parse tree: environments in source order."""

    kind: ClassVar[str] = "root"

    children: tuple[Algorithm | Algorithmic, ...] = ()


# Leaf node classes by kind, used by the parser's atom table and serialization
LEAF_TYPES: dict[str, type[Leaf]] = {
    cls.kind: cls
    for cls in (
        Ordinary,
        Math,
        Special,
        CondSymbol,
        QuoteSymbol,
        SizeDeclaration,
        FontDeclaration,
        FontCommand,
        TextSymbol,
    )
}
