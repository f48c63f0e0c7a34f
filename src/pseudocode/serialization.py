"""Parse-tree serialization: JSON round-trip and a readable dump.

Converts typed parse-tree nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed trees to disk
- Handing the tree to tools written in other languages
- Debugging and inspection (``dump``)

All JSON output is deterministic (sorted keys).

Example:
    from pseudocode import parse
    from pseudocode.serialization import to_json, from_json

    doc = parse(source)
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure, safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from pseudocode.location import SourceLocation
from pseudocode.nodes import (
    LEAF_TYPES,
    Algorithm,
    Algorithmic,
    Block,
    Call,
    Caption,
    CloseText,
    Command,
    Comment,
    Document,
    Function,
    If,
    Leaf,
    Loop,
    Node,
    OpenText,
    Repeat,
    Statement,
    Upon,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Document,
        Algorithm,
        Caption,
        Algorithmic,
        Block,
        If,
        Loop,
        Repeat,
        Upon,
        Function,
        Statement,
        Command,
        Comment,
        Call,
        OpenText,
        CloseText,
        *LEAF_TYPES.values(),
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a parse-tree node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and SourceLocation objects.

    Args:
        node: Any parse-tree node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed parse-tree node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed parse-tree node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


# =============================================================================
# Tree dump
# =============================================================================


def _dump_value(node: Node) -> str | None:
    """The value shown next to a node's kind, if it has one."""
    match node:
        case Leaf():
            return node.value
        case Statement() | Command():
            return node.name
        case Loop():
            return node.keyword
        case Function():
            return f"{node.keyword} {node.name}"
        case Call():
            return node.name
        case If():
            return f"num_elif={node.num_elif}, has_else={str(node.has_else).lower()}"
        case _:
            return None


def dump(node: Node, indent: str = "  ") -> str:
    """Return an indented printout of the tree, one ``<kind> (value)`` per line.

    Example:
        >>> print(dump(parse("\\\\begin{algorithmic}\\\\STATE x\\\\end{algorithmic}")))
        <root>
          <algorithmic>
            <block>
              <statement> (state)
                <open-text>
                  <ordinary> (x)

    """
    lines: list[str] = []

    def walk(current: Node, level: int) -> None:
        line = f"{indent * level}<{current.kind}>"
        value = _dump_value(current)
        if value:
            line += f" ({value})"
        lines.append(line)
        for child in current.children or ():
            walk(child, level + 1)

    walk(node, 0)
    return "\n".join(lines)
