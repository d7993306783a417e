#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/__init__.py
"""Change detection and merging of content trees.

The pipeline is leaf-first:

1. :func:`~contentdiff.diff.units.normalize_content` flattens a tree into
   word-sized diff units, folding spaces into the preceding unit.
2. :func:`~contentdiff.diff.equivalence.units_equivalent` compares units by
   plain text, ignoring decorations.
3. :func:`~contentdiff.diff.sequence_diff.diff_units` aligns two unit
   sequences into maximal Equal/Delete/Insert runs.
4. :func:`~contentdiff.diff.merge.merge_runs` rebuilds one annotated tree.

Examples
--------
Compare two sources and lay out the result:
    >>> from contentdiff.compilers import MarkupCompiler
    >>> from contentdiff.source import Source
    >>> from contentdiff.typeset import TextTypesetter
    >>> from contentdiff.diff import compile_diff
    >>> result = compile_diff(
    ...     Source("a", "I am here."), Source("b", "I am there."), MarkupCompiler(), TextTypesetter()
    ... )
    >>> result.statistics.has_changes
    True

"""

from contentdiff.diff.api import ContentDiff, DiffCompilation, compile_diff, diff_content
from contentdiff.diff.equivalence import content_equivalent, units_equivalent
from contentdiff.diff.merge import MarkerStyle, merge_runs
from contentdiff.diff.sequence_diff import AlignmentRun, ChangeTag, DiffStatistics, diff_units
from contentdiff.diff.units import DiffUnit, normalize_content

__all__ = [
    "AlignmentRun",
    "ChangeTag",
    "ContentDiff",
    "DiffCompilation",
    "DiffStatistics",
    "DiffUnit",
    "MarkerStyle",
    "compile_diff",
    "content_equivalent",
    "diff_content",
    "diff_units",
    "merge_runs",
    "normalize_content",
    "units_equivalent",
]
