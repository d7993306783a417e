#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/ast/visitors.py
"""Visitor pattern implementation for content tree traversal.

Visitors keep algorithms such as plain-text extraction, serialization,
layout and HTML rendering separate from the node classes themselves. Because
the node set is closed, a visitor implementing every ``visit_*`` method
covers every possible tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from contentdiff.ast.nodes import Decoration, LineBreak, Raw, Sequence, Space, Text


class NodeVisitor(ABC):
    """Abstract base class for content node visitors.

    Subclasses implement one ``visit_*`` method per node variant.

    Examples
    --------
    Count leaves in a tree:

        >>> class LeafCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node): self.count += 1
        ...     def visit_space(self, node): self.count += 1
        ...     def visit_line_break(self, node): self.count += 1
        ...     def visit_raw(self, node): self.count += 1
        ...     def visit_decoration(self, node): node.child.accept(self)
        ...     def visit_sequence(self, node):
        ...         for child in node.children:
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_space(self, node: Space) -> Any:
        """Visit a Space node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_raw(self, node: Raw) -> Any:
        """Visit a Raw node."""
        pass

    @abstractmethod
    def visit_decoration(self, node: Decoration) -> Any:
        """Visit a Decoration node."""
        pass

    @abstractmethod
    def visit_sequence(self, node: Sequence) -> Any:
        """Visit a Sequence node."""
        pass
