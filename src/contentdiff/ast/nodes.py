#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/ast/nodes.py
"""Content node classes for document representation.

This module defines the closed set of node variants that make up a content
tree. A content tree is what the document compiler produces for one source
and what the typesetting engine lays out. The diff engine reads trees and
recombines their nodes into new trees; it never mutates them, which is why
every node is a frozen dataclass.

Node Variants
-------------
Leaf nodes:
    - Text, Space, LineBreak, Raw

Container nodes:
    - Decoration (one child, presentation only)
    - Sequence (ordered children)

Decoration kinds are enumerated by :class:`DecorationKind`. Decorations never
change the underlying text of their child, which is what makes the diff
engine insensitive to them.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional

if TYPE_CHECKING:
    from contentdiff.diagnostics import Span


class DecorationKind(str, Enum):
    """Presentation wrappers recognized by the content model."""

    UNDERLINE = "underline"
    OVERLINE = "overline"
    HIGHLIGHT = "highlight"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    STRIKETHROUGH = "strikethrough"


@dataclass(frozen=True)
class Color:
    """RGBA color with 8-bit channels.

    Parameters
    ----------
    r, g, b : int
        Red, green and blue channels (0-255)
    a : int, default = 255
        Alpha channel (0-255)

    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        """Validate channel ranges.

        Raises
        ------
        ValueError
            If any channel is outside 0-255.

        """
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name} must be in 0-255, got {value}")

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``#rrggbbaa`` notation.

        Parameters
        ----------
        value : str
            Hex color string, with or without the leading ``#``

        Returns
        -------
        Color
            Parsed color

        Raises
        ------
        ValueError
            If the string is not a valid hex color

        """
        digits = value.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {value!r}") from e
        return cls(*channels)

    def to_hex(self) -> str:
        """Return ``#rrggbb`` (or ``#rrggbbaa`` when not opaque)."""
        if self.a == 255:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"


RED = Color(255, 65, 54)
GREEN = Color(46, 204, 64)
YELLOW = Color(255, 253, 17)


@dataclass(frozen=True)
class Stroke:
    """Line stroke used by strikethrough-like decorations.

    Parameters
    ----------
    thickness_pt : float or None, default = None
        Stroke thickness in points. None means the engine default.
    paint : Color or None, default = None
        Stroke color. None means the text color.

    """

    thickness_pt: Optional[float] = None
    paint: Optional[Color] = None


class Node(ABC):
    """Base class for all content nodes.

    All content nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    """

    source_location: Optional[Span]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Leaf Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content
    source_location : Span or None, default = None
        Where this node came from in the source

    """

    content: str
    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass(frozen=True)
class Space(Node):
    """Inter-word space."""

    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_space``."""
        return visitor.visit_space(self)


@dataclass(frozen=True)
class LineBreak(Node):
    """Line break node.

    Parameters
    ----------
    paragraph : bool, default = False
        True for paragraph breaks (blank line in source), False for forced
        line breaks

    """

    paragraph: bool = False
    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_line_break``."""
        return visitor.visit_line_break(self)


@dataclass(frozen=True)
class Raw(Node):
    """Raw (code) span whose text is taken verbatim."""

    text: str
    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_raw``."""
        return visitor.visit_raw(self)


# ============================================================================
# Container Nodes
# ============================================================================


@dataclass(frozen=True)
class Decoration(Node):
    """Presentation wrapper around a single child.

    Parameters
    ----------
    kind : DecorationKind
        Which decoration is applied
    child : Node
        Decorated content
    fill : Color or None, default = None
        Background fill, used by highlights
    stroke : Stroke or None, default = None
        Line stroke, used by strikethrough, underline and overline

    """

    kind: DecorationKind
    child: Node
    fill: Optional[Color] = None
    stroke: Optional[Stroke] = None
    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_decoration``."""
        return visitor.visit_decoration(self)


@dataclass(frozen=True)
class Sequence(Node):
    """Ordered list of content nodes.

    Parameters
    ----------
    children : tuple of Node, default = ()
        Child nodes in document order

    """

    children: tuple[Node, ...] = ()
    source_location: Optional[Span] = field(default=None, compare=False, repr=False)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_sequence``."""
        return visitor.visit_sequence(self)


# ============================================================================
# Constructors
# ============================================================================


def sequence(nodes: Iterable[Node]) -> Sequence:
    """Build a Sequence from any iterable of nodes."""
    return Sequence(children=tuple(nodes))


def underline(child: Node) -> Decoration:
    return Decoration(DecorationKind.UNDERLINE, child)


def overline(child: Node) -> Decoration:
    return Decoration(DecorationKind.OVERLINE, child)


def highlight(child: Node, fill: Optional[Color] = None) -> Decoration:
    return Decoration(DecorationKind.HIGHLIGHT, child, fill=fill)


def superscript(child: Node) -> Decoration:
    return Decoration(DecorationKind.SUPERSCRIPT, child)


def subscript(child: Node) -> Decoration:
    return Decoration(DecorationKind.SUBSCRIPT, child)


def strike(child: Node, stroke: Optional[Stroke] = None) -> Decoration:
    return Decoration(DecorationKind.STRIKETHROUGH, child, stroke=stroke)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list for leaves)

    """
    if isinstance(node, Sequence):
        return list(node.children)
    if isinstance(node, Decoration):
        return [node.child]
    return []
