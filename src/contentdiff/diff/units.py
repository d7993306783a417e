#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/units.py
"""Normalization of content trees into diff units.

A :class:`DiffUnit` is the atom the sequence differ compares. It covers a
contiguous index range of the top-level children of one document (the
*arena*) and caches the plain text of those children. Units never copy or
mutate the nodes they represent, so the merger can rebuild subtrees from
the original nodes with their formatting intact.

Spaces are folded into the unit before them, which keeps re-flowed
paragraphs (same words, different line breaks in the source) from showing
up as changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from contentdiff.ast.nodes import Node, Sequence, Space
from contentdiff.ast.utils import plain_text
from contentdiff.exceptions import MalformedContentError
from contentdiff.options import CoalesceMode

logger = logging.getLogger(__name__)

TextOf = Callable[[Node], str]


@dataclass(frozen=True, eq=False)
class DiffUnit:
    """One or more consecutive content nodes compared as a single atom.

    Parameters
    ----------
    arena : tuple of Node
        All top-level nodes of the document this unit belongs to
    start : int
        Index of the first node of this unit in ``arena``
    stop : int
        One past the index of the last node of this unit
    text : str
        Cached plain text of ``arena[start:stop]``

    Notes
    -----
    Equality is the decoration-insensitive equivalence predicate, and the
    hash is derived from the same plain text, so units can be used wherever
    hashable, comparable sequence elements are expected.

    """

    arena: tuple[Node, ...]
    start: int
    stop: int
    text: str

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.stop <= len(self.arena):
            raise ValueError(f"invalid unit range [{self.start}, {self.stop}) for arena of {len(self.arena)} nodes")

    @classmethod
    def single(cls, arena: tuple[Node, ...], index: int, text_of: TextOf = plain_text) -> DiffUnit:
        """Create a unit covering exactly ``arena[index]``, its text taken from ``text_of``."""
        return cls(arena=arena, start=index, stop=index + 1, text=text_of(arena[index]))

    @property
    def nodes(self) -> tuple[Node, ...]:
        """The original nodes represented by this unit, in order."""
        return self.arena[self.start : self.stop]

    @property
    def node_count(self) -> int:
        return self.stop - self.start

    def extended(self, text_of: TextOf = plain_text) -> DiffUnit:
        """Return a unit that also covers the node right after this one."""
        if self.stop >= len(self.arena):
            raise IndexError("cannot extend a unit past the end of its arena")
        return DiffUnit(
            arena=self.arena,
            start=self.start,
            stop=self.stop + 1,
            text=self.text + text_of(self.arena[self.stop]),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffUnit):
            return NotImplemented
        from contentdiff.diff.equivalence import units_equivalent

        return units_equivalent(self, other)

    def __hash__(self) -> int:
        return hash(self.text)

    def __repr__(self) -> str:
        return f"DiffUnit({self.text!r}, [{self.start}:{self.stop}])"


def normalize_content(
    content: Node,
    coalesce: CoalesceMode = "word",
    text_of: TextOf = plain_text,
) -> list[DiffUnit]:
    """Flatten a content tree into an ordered list of diff units.

    If ``content`` is a :class:`Sequence`, its children are folded in order:

    - a Space is appended to the previous unit;
    - in ``"following"`` mode the child right after a Space is appended to
      that same unit as well;
    - any other child starts a new unit.

    Any other node becomes a single unit on its own.

    The default ``"word"`` mode is not the classic fold, which also pulls the
    word after a Space into the unit. Under that rule the words of "I am
    here." all land in one unit ``I am here``, so changing "here" to "there"
    reports the whole phrase as changed instead of the single word. Pass
    ``coalesce="following"`` for the classic behaviour.

    Parameters
    ----------
    content : Node
        Root of a content tree
    coalesce : {"word", "following"}, default = "word"
        Space folding mode
    text_of : callable, default = plain_text
        Renders a node to the plain text units are compared by. Document
        compilers pass their own ``plain_text`` so equivalence follows the
        compiler's rendering.

    Returns
    -------
    list of DiffUnit
        Units in document order. Empty for an empty sequence.

    Raises
    ------
    MalformedContentError
        If the sequence starts with a Space

    Examples
    --------
        >>> from contentdiff.ast import Sequence, Space, Text
        >>> units = normalize_content(Sequence((Text("I"), Space(), Text("am"))))
        >>> [unit.text for unit in units]
        ['I ', 'am']

    """
    if coalesce not in ("word", "following"):
        raise ValueError(f"Unsupported coalesce mode: {coalesce}")

    if not isinstance(content, Sequence):
        return [DiffUnit(arena=(content,), start=0, stop=1, text=text_of(content))]

    arena = content.children
    units: list[DiffUnit] = []
    append = False
    for index, child in enumerate(arena):
        if isinstance(child, Space):
            if not units:
                raise MalformedContentError("content sequence starts with a space", index=index)
            units[-1] = units[-1].extended(text_of)
            append = coalesce == "following"
        elif append:
            units[-1] = units[-1].extended(text_of)
            append = False
        else:
            units.append(DiffUnit.single(arena, index, text_of))

    logger.debug("normalized %d nodes into %d units", len(arena), len(units))
    return units


__all__ = [
    "DiffUnit",
    "TextOf",
    "normalize_content",
]
