#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/ast/__init__.py
"""Content tree model.

This package defines the node variants produced by document compilers and
consumed by typesetting engines, plus the visitor base class and helpers
for plain-text extraction and JSON serialization.

Examples
--------
    >>> from contentdiff.ast import Sequence, Space, Text, underline
    >>> from contentdiff.ast.utils import plain_text
    >>> plain_text(Sequence((Text("I"), Space(), underline(Text("am")))))
    'I am'

"""

from contentdiff.ast.nodes import (
    GREEN,
    RED,
    YELLOW,
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
    get_node_children,
    highlight,
    overline,
    sequence,
    strike,
    subscript,
    superscript,
    underline,
)
from contentdiff.ast.visitors import NodeVisitor

__all__ = [
    "GREEN",
    "RED",
    "YELLOW",
    "Color",
    "Decoration",
    "DecorationKind",
    "LineBreak",
    "Node",
    "NodeVisitor",
    "Raw",
    "Sequence",
    "Space",
    "Stroke",
    "Text",
    "get_node_children",
    "highlight",
    "overline",
    "sequence",
    "strike",
    "subscript",
    "superscript",
    "underline",
]
