#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/ast/serialization.py
"""JSON serialization and deserialization for content trees.

The JSON format preserves every node variant, decoration parameters and
source locations, so that a merged diff tree can be written out and read
back by other tools.

Examples
--------
Serialize a tree to JSON:

    >>> from contentdiff.ast import Sequence, Space, Text
    >>> from contentdiff.ast.serialization import ast_to_json, json_to_ast
    >>> json_str = ast_to_json(Sequence((Text("a"), Space(), Text("b"))))
    >>> json_to_ast(json_str).children[2].content
    'b'

"""

from __future__ import annotations

import json
from typing import Any

from contentdiff.ast.nodes import (
    Color,
    Decoration,
    DecorationKind,
    LineBreak,
    Node,
    Raw,
    Sequence,
    Space,
    Stroke,
    Text,
)
from contentdiff.ast.visitors import NodeVisitor
from contentdiff.diagnostics import Span

SCHEMA_VERSION = 1


def _serialize_span(span: Span) -> dict[str, Any]:
    return {"source": span.source, "line": span.line, "column": span.column}


def _deserialize_span(data: dict[str, Any]) -> Span:
    return Span(source=data["source"], line=int(data["line"]), column=int(data["column"]))


def _serialize_stroke(stroke: Stroke) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if stroke.thickness_pt is not None:
        result["thickness_pt"] = stroke.thickness_pt
    if stroke.paint is not None:
        result["paint"] = stroke.paint.to_hex()
    return result


class _DictSerializer(NodeVisitor):
    """Visitor producing plain dictionaries."""

    def _base(self, node: Node, node_type: str) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": node_type}
        if node.source_location is not None:
            result["source_location"] = _serialize_span(node.source_location)
        return result

    def visit_text(self, node: Text) -> dict[str, Any]:
        result = self._base(node, "Text")
        result["content"] = node.content
        return result

    def visit_space(self, node: Space) -> dict[str, Any]:
        return self._base(node, "Space")

    def visit_line_break(self, node: LineBreak) -> dict[str, Any]:
        result = self._base(node, "LineBreak")
        if node.paragraph:
            result["paragraph"] = True
        return result

    def visit_raw(self, node: Raw) -> dict[str, Any]:
        result = self._base(node, "Raw")
        result["text"] = node.text
        return result

    def visit_decoration(self, node: Decoration) -> dict[str, Any]:
        result = self._base(node, "Decoration")
        result["kind"] = node.kind.value
        if node.fill is not None:
            result["fill"] = node.fill.to_hex()
        if node.stroke is not None:
            result["stroke"] = _serialize_stroke(node.stroke)
        result["child"] = node.child.accept(self)
        return result

    def visit_sequence(self, node: Sequence) -> dict[str, Any]:
        result = self._base(node, "Sequence")
        result["children"] = [child.accept(self) for child in node.children]
        return result


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a content tree to a JSON-compatible dictionary.

    Parameters
    ----------
    node : Node
        Root of the tree

    Returns
    -------
    dict
        Nested dictionary with a ``node_type`` key on every level

    """
    return node.accept(_DictSerializer())


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Reconstruct a content tree from a dictionary.

    Parameters
    ----------
    data : dict
        Dictionary produced by :func:`ast_to_dict`

    Returns
    -------
    Node
        Reconstructed tree

    Raises
    ------
    ValueError
        If the dictionary has an unknown or missing ``node_type``

    """
    node_type = data.get("node_type")
    location = _deserialize_span(data["source_location"]) if "source_location" in data else None

    if node_type == "Text":
        return Text(content=data["content"], source_location=location)
    if node_type == "Space":
        return Space(source_location=location)
    if node_type == "LineBreak":
        return LineBreak(paragraph=bool(data.get("paragraph", False)), source_location=location)
    if node_type == "Raw":
        return Raw(text=data["text"], source_location=location)
    if node_type == "Decoration":
        stroke = None
        if "stroke" in data:
            stroke_data = data["stroke"]
            paint = stroke_data.get("paint")
            stroke = Stroke(
                thickness_pt=stroke_data.get("thickness_pt"),
                paint=Color.from_hex(paint) if paint else None,
            )
        return Decoration(
            kind=DecorationKind(data["kind"]),
            child=dict_to_ast(data["child"]),
            fill=Color.from_hex(data["fill"]) if "fill" in data else None,
            stroke=stroke,
            source_location=location,
        )
    if node_type == "Sequence":
        return Sequence(
            children=tuple(dict_to_ast(child) for child in data.get("children", [])),
            source_location=location,
        )

    raise ValueError(f"Unknown node type: {node_type!r}")


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a content tree to a JSON string.

    Parameters
    ----------
    node : Node
        Root of the tree
    indent : int or None, default = None
        Indentation passed to :func:`json.dumps`

    Returns
    -------
    str
        JSON document with ``schema_version`` and ``content`` keys

    """
    payload = {"schema_version": SCHEMA_VERSION, "content": ast_to_dict(node)}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a content tree from a JSON string.

    Raises
    ------
    ValueError
        If the payload uses an unsupported schema version or is malformed

    """
    payload = json.loads(json_str)
    if not isinstance(payload, dict) or "content" not in payload:
        raise ValueError("JSON payload must be an object with a 'content' key")
    version = payload.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")
    return dict_to_ast(payload["content"])


__all__ = [
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
