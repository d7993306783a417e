#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/equivalence.py
"""Decoration-insensitive equivalence of diff units and content.

Two pieces of content are equivalent when their plain text is the same
codepoint sequence. Decorations are unwrapped by plain-text extraction, so
``underline(Text("a"))`` and ``Text("a")`` are equivalent. Multi-node units
are compared on the concatenated text of all their nodes, which keeps the
predicate symmetric whichever side holds more nodes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from contentdiff.ast.nodes import Node
from contentdiff.ast.utils import plain_text

if TYPE_CHECKING:
    from contentdiff.diff.units import DiffUnit

ContentLike = Union[Node, list[Node], tuple[Node, ...]]


def texts_equivalent(left: str, right: str) -> bool:
    """Compare two plain texts codepoint by codepoint."""
    if len(left) != len(right):
        return False
    return left == right


def units_equivalent(left: DiffUnit, right: DiffUnit) -> bool:
    """Return True if two diff units represent the same text.

    Parameters
    ----------
    left, right : DiffUnit
        Units to compare, typically one from each document

    Returns
    -------
    bool
        Whether the cached plain texts are identical

    """
    if left is right:
        return True
    return texts_equivalent(left.text, right.text)


def content_equivalent(left: ContentLike, right: ContentLike) -> bool:
    """Return True if two nodes (or node lists) represent the same text.

    Examples
    --------
        >>> from contentdiff.ast import Text, overline, superscript, underline
        >>> content_equivalent(Text("a"), overline(superscript(underline(Text("a")))))
        True

    """
    return texts_equivalent(plain_text(left), plain_text(right))


__all__ = [
    "content_equivalent",
    "texts_equivalent",
    "units_equivalent",
]
