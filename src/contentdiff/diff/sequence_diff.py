#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/sequence_diff.py
"""Shortest-edit-script alignment of two diff unit sequences.

The differ produces a minimal Equal/Delete/Insert edit script between an old
and a new unit sequence, using the decoration-insensitive equivalence
predicate as its element comparator, and groups it into maximal runs.
There is no Replace operation: a changed position becomes a Delete run
followed by an Insert run.

Common prefixes and suffixes are matched first; the remaining middle section
is aligned with Myers' linear-space O((N+M)D) algorithm.

Tie-breaking
------------
Several edit scripts can share the same minimal cost. After the search, every
changed region (a maximal stretch between two matches) is rewritten so that
all its deleted units precede all its inserted units. The number of matched
units is unaffected, and the output for a given pair of inputs is always the
same.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from contentdiff.diff.equivalence import units_equivalent
from contentdiff.diff.units import DiffUnit
from contentdiff.options import EqualSource

logger = logging.getLogger(__name__)

Comparator = Callable[[DiffUnit, DiffUnit], bool]


class ChangeTag(str, Enum):
    """Kind of an alignment run."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class AlignmentRun:
    """Maximal run of consecutive operations sharing one tag.

    Parameters
    ----------
    tag : ChangeTag
        Equal, Delete or Insert
    old_range : tuple of int
        Half-open index range into the old sequence (empty for Insert)
    new_range : tuple of int
        Half-open index range into the new sequence (empty for Delete)
    old_units : tuple of DiffUnit
        Units from the old sequence covered by this run
    new_units : tuple of DiffUnit
        Units from the new sequence covered by this run

    """

    tag: ChangeTag
    old_range: tuple[int, int]
    new_range: tuple[int, int]
    old_units: tuple[DiffUnit, ...]
    new_units: tuple[DiffUnit, ...]

    def units(self, equal_source: EqualSource = "old") -> tuple[DiffUnit, ...]:
        """Units this run is materialized from.

        Delete runs use the old side, Insert runs the new side, and Equal runs
        the side named by ``equal_source``.
        """
        if self.tag is ChangeTag.DELETE:
            return self.old_units
        if self.tag is ChangeTag.INSERT:
            return self.new_units
        return self.old_units if equal_source == "old" else self.new_units

    @property
    def text(self) -> str:
        """Plain text of the run as materialized from its default side."""
        return "".join(unit.text for unit in self.units())


@dataclass(frozen=True)
class DiffStatistics:
    """Unit and run counts of an alignment."""

    equal_units: int = 0
    deleted_units: int = 0
    inserted_units: int = 0
    runs: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.deleted_units or self.inserted_units)

    @classmethod
    def from_runs(cls, runs: Sequence[AlignmentRun]) -> DiffStatistics:
        equal = deleted = inserted = 0
        for run in runs:
            if run.tag is ChangeTag.EQUAL:
                equal += len(run.old_units)
            elif run.tag is ChangeTag.DELETE:
                deleted += len(run.old_units)
            else:
                inserted += len(run.new_units)
        return cls(equal_units=equal, deleted_units=deleted, inserted_units=inserted, runs=len(runs))


def _common_prefix(old: Sequence[DiffUnit], new: Sequence[DiffUnit], equal: Comparator) -> int:
    limit = min(len(old), len(new))
    i = 0
    while i < limit and equal(old[i], new[i]):
        i += 1
    return i


def _common_suffix(old: Sequence[DiffUnit], new: Sequence[DiffUnit], prefix: int, equal: Comparator) -> int:
    limit = min(len(old), len(new)) - prefix
    k = 0
    while k < limit and equal(old[len(old) - 1 - k], new[len(new) - 1 - k]):
        k += 1
    return k


@dataclass(frozen=True)
class _Box:
    """Rectangle of the edit graph: old indices ``[left, right)``, new indices ``[top, bottom)``."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def size(self) -> int:
        return self.width + self.height

    @property
    def delta(self) -> int:
        return self.width - self.height


_Point = tuple[int, int]
_Snake = tuple[_Point, _Point]


class _MyersSearch:
    """Linear-space O((N+M)D) search for a shortest edit path.

    Each box is split at its middle snake, found by running the greedy
    search forwards from the top-left corner and backwards from the
    bottom-right corner until the two frontiers overlap.
    """

    def __init__(self, old: Sequence[DiffUnit], new: Sequence[DiffUnit], equal: Comparator) -> None:
        self.old = old
        self.new = new
        self.equal = equal

    def path(self) -> Optional[list[_Point]]:
        return self._find_path(_Box(0, 0, len(self.old), len(self.new)))

    def _find_path(self, box: _Box) -> Optional[list[_Point]]:
        snake = self._middle_snake(box)
        if snake is None:
            return None
        start, finish = snake
        head = self._find_path(_Box(box.left, box.top, start[0], start[1]))
        tail = self._find_path(_Box(finish[0], finish[1], box.right, box.bottom))
        return (head or [start]) + (tail or [finish])

    def _middle_snake(self, box: _Box) -> Optional[_Snake]:
        if box.size == 0:
            return None
        limit = (box.size + 1) // 2
        forward: list[int] = [0] * (2 * limit + 1)
        backward: list[int] = [0] * (2 * limit + 1)
        forward[1] = box.left
        backward[1] = box.bottom

        for d in range(limit + 1):
            snake = self._forward(box, forward, backward, d)
            if snake is not None:
                return snake
            snake = self._backward(box, forward, backward, d)
            if snake is not None:
                return snake
        return None

    def _forward(self, box: _Box, forward: list[int], backward: list[int], d: int) -> Optional[_Snake]:
        old, new, equal = self.old, self.new, self.equal
        for k in range(d, -d - 1, -2):
            c = k - box.delta
            if k == -d or (k != d and forward[k - 1] < forward[k + 1]):
                px = x = forward[k + 1]
            else:
                px = forward[k - 1]
                x = px + 1
            y = box.top + (x - box.left) - k
            py = y if d == 0 or x != px else y - 1

            while x < box.right and y < box.bottom and equal(old[x], new[y]):
                x += 1
                y += 1
            forward[k] = x

            if box.delta % 2 == 1 and -(d - 1) <= c <= d - 1 and y >= backward[c]:
                return (px, py), (x, y)
        return None

    def _backward(self, box: _Box, forward: list[int], backward: list[int], d: int) -> Optional[_Snake]:
        old, new, equal = self.old, self.new, self.equal
        for c in range(d, -d - 1, -2):
            k = c + box.delta
            if c == -d or (c != d and backward[c - 1] > backward[c + 1]):
                py = y = backward[c + 1]
            else:
                py = backward[c - 1]
                y = py - 1
            x = box.left + (y - box.top) + k
            px = x if d == 0 or y != py else x + 1

            while x > box.left and y > box.top and equal(old[x - 1], new[y - 1]):
                x -= 1
                y -= 1
            backward[c] = y

            if box.delta % 2 == 0 and -d <= k <= d and x <= forward[k]:
                return (x, y), (px, py)
        return None


def _myers_script(old: Sequence[DiffUnit], new: Sequence[DiffUnit], equal: Comparator) -> list[ChangeTag]:
    """Turn the shortest edit path into one tag per consumed unit."""
    path = _MyersSearch(old, new, equal).path()
    ops: list[ChangeTag] = []
    if path is None:
        return ops

    def walk_diagonal(x: int, y: int, x_end: int, y_end: int) -> _Point:
        while x < x_end and y < y_end and equal(old[x], new[y]):
            ops.append(ChangeTag.EQUAL)
            x += 1
            y += 1
        return x, y

    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        x1, y1 = walk_diagonal(x1, y1, x2, y2)
        if x2 - x1 < y2 - y1:
            ops.append(ChangeTag.INSERT)
            y1 += 1
        elif x2 - x1 > y2 - y1:
            ops.append(ChangeTag.DELETE)
            x1 += 1
        walk_diagonal(x1, y1, x2, y2)
    return ops


def _deletes_first(ops: Sequence[ChangeTag]) -> list[ChangeTag]:
    """Reorder every changed region so its deletions precede its insertions."""
    result: list[ChangeTag] = []
    deletes = inserts = 0
    for tag in (*ops, None):
        if tag is ChangeTag.DELETE:
            deletes += 1
        elif tag is ChangeTag.INSERT:
            inserts += 1
        else:
            result.extend([ChangeTag.DELETE] * deletes)
            result.extend([ChangeTag.INSERT] * inserts)
            deletes = inserts = 0
            if tag is not None:
                result.append(tag)
    return result


def edit_script(
    old: Sequence[DiffUnit],
    new: Sequence[DiffUnit],
    equal: Comparator = units_equivalent,
) -> list[ChangeTag]:
    """Compute a minimal per-unit edit script between two sequences.

    Parameters
    ----------
    old : sequence of DiffUnit
        Units of the old document
    new : sequence of DiffUnit
        Units of the new document
    equal : callable, default = units_equivalent
        Element comparator

    Returns
    -------
    list of ChangeTag
        One tag per consumed element. EQUAL consumes one unit from each side,
        DELETE one from ``old``, INSERT one from ``new``.

    Notes
    -----
    Common prefixes and suffixes are matched directly. The differing middle
    section is aligned with Myers' linear-space algorithm, which runs in
    O((N+M)D) time for D edits, so a few edits far apart in a long document
    stay cheap.

    """
    prefix = _common_prefix(old, new, equal)
    suffix = _common_suffix(old, new, prefix, equal)
    old_mid = old[prefix : len(old) - suffix]
    new_mid = new[prefix : len(new) - suffix]

    ops: list[ChangeTag] = [ChangeTag.EQUAL] * prefix
    if old_mid and new_mid:
        ops.extend(_deletes_first(_myers_script(old_mid, new_mid, equal)))
    else:
        ops.extend([ChangeTag.DELETE] * len(old_mid))
        ops.extend([ChangeTag.INSERT] * len(new_mid))
    ops.extend([ChangeTag.EQUAL] * suffix)
    return ops


def group_runs(
    ops: Sequence[ChangeTag],
    old: Sequence[DiffUnit],
    new: Sequence[DiffUnit],
) -> list[AlignmentRun]:
    """Group a per-unit edit script into maximal runs."""
    runs: list[AlignmentRun] = []
    i = j = 0
    index = 0
    while index < len(ops):
        tag = ops[index]
        old_start, new_start = i, j
        while index < len(ops) and ops[index] is tag:
            if tag is not ChangeTag.INSERT:
                i += 1
            if tag is not ChangeTag.DELETE:
                j += 1
            index += 1
        runs.append(
            AlignmentRun(
                tag=tag,
                old_range=(old_start, i),
                new_range=(new_start, j),
                old_units=tuple(old[old_start:i]),
                new_units=tuple(new[new_start:j]),
            )
        )

    if i != len(old) or j != len(new):
        raise ValueError(f"edit script consumed {i}/{len(old)} old and {j}/{len(new)} new units")
    return runs


def diff_units(
    old: Sequence[DiffUnit],
    new: Sequence[DiffUnit],
    equal: Optional[Comparator] = None,
) -> list[AlignmentRun]:
    """Align two unit sequences into maximal Equal/Delete/Insert runs.

    Parameters
    ----------
    old : sequence of DiffUnit
        Units of the old document
    new : sequence of DiffUnit
        Units of the new document
    equal : callable, optional
        Element comparator. Defaults to the equivalence predicate.

    Returns
    -------
    list of AlignmentRun
        Runs in order. Equal and Delete runs partition ``old``; Equal and
        Insert runs partition ``new``.

    Examples
    --------
        >>> from contentdiff.ast import Sequence, Text
        >>> from contentdiff.diff.units import normalize_content
        >>> runs = diff_units([], normalize_content(Sequence((Text("Hello"),))))
        >>> [run.tag.value for run in runs]
        ['insert']

    """
    comparator = equal or units_equivalent
    ops = edit_script(old, new, comparator)
    runs = group_runs(ops, old, new)
    logger.debug("aligned %d old and %d new units into %d runs", len(old), len(new), len(runs))
    return runs


__all__ = [
    "AlignmentRun",
    "ChangeTag",
    "DiffStatistics",
    "diff_units",
    "edit_script",
    "group_runs",
]
