#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/merge.py
"""Reconstruction of a single annotated content tree from alignment runs.

Each run is rebuilt from the original nodes its units represent, never from
their cached plain text, so formatting survives in unchanged, deleted and
inserted text alike. Deleted runs are struck through and highlighted with
the deletion color; inserted runs are highlighted with the insertion color.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from contentdiff.ast.nodes import Color, Decoration, DecorationKind, Node, Sequence, Stroke
from contentdiff.constants import (
    DEFAULT_DELETION_COLOR,
    DEFAULT_EQUAL_SOURCE,
    DEFAULT_INSERTION_COLOR,
    DEFAULT_STRIKE_THICKNESS_PT,
)
from contentdiff.diff.sequence_diff import AlignmentRun, ChangeTag
from contentdiff.options import EqualSource, MarkerOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerStyle:
    """Decorations used to mark changed runs.

    Parameters
    ----------
    deletion_fill : Color
        Highlight fill for deleted runs
    insertion_fill : Color
        Highlight fill for inserted runs
    strike_stroke : Stroke
        Strikethrough stroke for deleted runs
    equal_source : {"old", "new"}
        Side unchanged runs are materialized from

    """

    deletion_fill: Color = DEFAULT_DELETION_COLOR
    insertion_fill: Color = DEFAULT_INSERTION_COLOR
    strike_stroke: Stroke = field(default_factory=lambda: Stroke(thickness_pt=DEFAULT_STRIKE_THICKNESS_PT))
    equal_source: EqualSource = DEFAULT_EQUAL_SOURCE

    @classmethod
    def from_options(cls, options: MarkerOptions) -> MarkerStyle:
        return cls(
            deletion_fill=options.deletion_color,
            insertion_fill=options.insertion_color,
            strike_stroke=Stroke(thickness_pt=options.strike_thickness_pt),
            equal_source=options.equal_source,
        )

    def mark_deleted(self, body: Node) -> Decoration:
        struck = Decoration(DecorationKind.STRIKETHROUGH, body, stroke=self.strike_stroke)
        return Decoration(DecorationKind.HIGHLIGHT, struck, fill=self.deletion_fill)

    def mark_inserted(self, body: Node) -> Decoration:
        return Decoration(DecorationKind.HIGHLIGHT, body, fill=self.insertion_fill)


def run_body(run: AlignmentRun, equal_source: EqualSource = "old") -> Sequence:
    """Concatenate the original nodes of a run, in order, into a Sequence."""
    return Sequence(children=tuple(node for unit in run.units(equal_source) for node in unit.nodes))


def merge_runs(runs: Iterable[AlignmentRun], style: Optional[MarkerStyle] = None) -> Sequence:
    """Build the merged, annotated content tree.

    Parameters
    ----------
    runs : iterable of AlignmentRun
        Alignment produced by :func:`contentdiff.diff.sequence_diff.diff_units`
    style : MarkerStyle, optional
        Change markers. Defaults to red strikethrough highlight for deletions
        and green highlight for insertions.

    Returns
    -------
    Sequence
        One child per run, in run order: the bare body for Equal runs,
        ``Highlight(Strikethrough(body))`` for Delete runs and
        ``Highlight(body)`` for Insert runs.

    """
    style = style or MarkerStyle()
    children: list[Node] = []
    for run in runs:
        body = run_body(run, style.equal_source)
        if run.tag is ChangeTag.EQUAL:
            children.append(body)
        elif run.tag is ChangeTag.DELETE:
            children.append(style.mark_deleted(body))
        else:
            children.append(style.mark_inserted(body))

    merged = Sequence(children=tuple(children))
    logger.debug("merged content: %r", merged)
    return merged


__all__ = [
    "MarkerStyle",
    "merge_runs",
    "run_body",
]
