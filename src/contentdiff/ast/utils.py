#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/ast/utils.py
"""Utility functions for working with content nodes.

Functions
---------
plain_text : Render a node or list of nodes to its plain text
unwrap_decorations : Strip decoration wrappers from a node
iter_leaves : Iterate over the leaf nodes of a tree in document order

Examples
--------
Decorations carry no text of their own:

    >>> from contentdiff.ast import Sequence, Space, Text, underline
    >>> plain_text(Sequence((Text("Hello"), Space(), underline(Text("world")))))
    'Hello world'

"""

from __future__ import annotations

from typing import Iterator, Union

from contentdiff.ast.nodes import Decoration, LineBreak, Node, Raw, Sequence, Space, Text
from contentdiff.ast.visitors import NodeVisitor

SPACE_TEXT = " "
LINE_BREAK_TEXT = "\n"


class _PlainTextExtractor(NodeVisitor):
    """Collect the plain text of a tree into a list of fragments."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def visit_text(self, node: Text) -> None:
        self.parts.append(node.content)

    def visit_space(self, node: Space) -> None:
        self.parts.append(SPACE_TEXT)

    def visit_line_break(self, node: LineBreak) -> None:
        self.parts.append(LINE_BREAK_TEXT)

    def visit_raw(self, node: Raw) -> None:
        self.parts.append(node.text)

    def visit_decoration(self, node: Decoration) -> None:
        node.child.accept(self)

    def visit_sequence(self, node: Sequence) -> None:
        for child in node.children:
            child.accept(self)


def plain_text(node_or_nodes: Union[Node, list[Node], tuple[Node, ...]]) -> str:
    """Extract the plain text of a node or list of nodes.

    Text and Raw contribute their content, Space contributes a single space,
    LineBreak contributes a newline and decorations contribute exactly the
    text of their child. Lists are concatenated without a joiner.

    Parameters
    ----------
    node_or_nodes : Node or sequence of Node
        Node(s) to extract text from

    Returns
    -------
    str
        Concatenated plain text

    """
    extractor = _PlainTextExtractor()
    if isinstance(node_or_nodes, (list, tuple)):
        for node in node_or_nodes:
            node.accept(extractor)
    else:
        node_or_nodes.accept(extractor)
    return "".join(extractor.parts)


def unwrap_decorations(node: Node) -> Node:
    """Return the innermost non-decoration node under ``node``."""
    while isinstance(node, Decoration):
        node = node.child
    return node


def iter_leaves(node: Node) -> Iterator[Node]:
    """Yield leaf nodes (Text, Space, LineBreak, Raw) in document order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Sequence):
            stack.extend(reversed(current.children))
        elif isinstance(current, Decoration):
            stack.append(current.child)
        else:
            yield current


__all__ = [
    "LINE_BREAK_TEXT",
    "SPACE_TEXT",
    "iter_leaves",
    "plain_text",
    "unwrap_decorations",
]
