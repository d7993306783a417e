#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diff/api.py
"""Python API for comparing content trees and compiling the result.

:func:`diff_content` is the pure part of the pipeline: normalize both trees,
align their units and merge the alignment into one annotated tree.
:func:`compile_diff` wraps it with source evaluation before and the
convergence loop after.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from contentdiff.ast.nodes import Node, Sequence
from contentdiff.ast.utils import plain_text
from contentdiff.diagnostics import Diagnostic, Tracer
from contentdiff.diff.merge import MarkerStyle, merge_runs
from contentdiff.diff.sequence_diff import AlignmentRun, DiffStatistics, diff_units
from contentdiff.diff.units import TextOf, normalize_content
from contentdiff.exceptions import EvaluationError
from contentdiff.options import DiffOptions
from contentdiff.source import Source
from contentdiff.typeset.convergence import ConvergenceLayouter
from contentdiff.typeset.protocols import DocumentCompiler, TypesettingEngine

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT")


@dataclass(frozen=True)
class ContentDiff:
    """Merged tree together with the alignment it was built from.

    Parameters
    ----------
    merged : Sequence
        Annotated tree
    runs : tuple of AlignmentRun
        Maximal Equal/Delete/Insert runs in order
    statistics : DiffStatistics
        Unit and run counts

    """

    merged: Sequence
    runs: tuple[AlignmentRun, ...]
    statistics: DiffStatistics


@dataclass(frozen=True)
class DiffCompilation(Generic[DocumentT]):
    """Result of :func:`compile_diff`.

    Parameters
    ----------
    document : DocumentT
        Laid-out document from the last layout pass
    merged : Sequence
        Annotated content tree the document was laid out from
    runs : tuple of AlignmentRun
        Alignment behind ``merged``
    statistics : DiffStatistics
        Unit and run counts
    warnings : tuple of Diagnostic
        Deduplicated warnings from evaluation and layout
    attempts : int
        Layout passes performed
    converged : bool
        False when layout stopped at the attempt limit

    """

    document: DocumentT
    merged: Sequence
    runs: tuple[AlignmentRun, ...]
    statistics: DiffStatistics
    warnings: tuple[Diagnostic, ...]
    attempts: int
    converged: bool


def diff_content(
    old: Node,
    new: Node,
    options: Optional[DiffOptions] = None,
    text_of: Optional[TextOf] = None,
) -> ContentDiff:
    """Compare two content trees and merge them into one annotated tree.

    Parameters
    ----------
    old : Node
        Content of the old document
    new : Node
        Content of the new document
    options : DiffOptions, optional
        Coalescing mode and change markers
    text_of : callable, optional
        Plain-text rendering used to compare units. Defaults to
        :func:`contentdiff.ast.utils.plain_text`.

    Returns
    -------
    ContentDiff

    Raises
    ------
    MalformedContentError
        If either top-level sequence starts with a Space

    Examples
    --------
        >>> from contentdiff.ast import Sequence, Space, Text
        >>> result = diff_content(Sequence((Text("a"),)), Sequence((Text("a"), Space(), Text("b"))))
        >>> [run.tag.value for run in result.runs]
        ['equal', 'insert']

    """
    options = options or DiffOptions()
    text_of = text_of or plain_text
    old_units = normalize_content(old, options.coalesce, text_of)
    new_units = normalize_content(new, options.coalesce, text_of)
    logger.debug("old units: %r", old_units)
    logger.debug("new units: %r", new_units)

    runs = tuple(diff_units(old_units, new_units))
    merged = merge_runs(runs, MarkerStyle.from_options(options.markers))
    statistics = DiffStatistics.from_runs(runs)
    logger.info(
        "diff: %d equal, %d deleted, %d inserted unit(s)",
        statistics.equal_units,
        statistics.deleted_units,
        statistics.inserted_units,
    )
    return ContentDiff(merged=merged, runs=runs, statistics=statistics)


def _evaluate_both(
    old_source: Source,
    new_source: Source,
    compiler: DocumentCompiler,
    tracer: Tracer,
    parallel: bool,
) -> tuple[Node, Node]:
    if not parallel:
        return compiler.evaluate(old_source, tracer), compiler.evaluate(new_source, tracer)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="contentdiff-eval") as executor:
        old_future = executor.submit(compiler.evaluate, old_source, tracer)
        new_future = executor.submit(compiler.evaluate, new_source, tracer)
        old_error: Optional[EvaluationError] = None
        try:
            old_tree = old_future.result()
        except EvaluationError as e:
            old_error = e
        try:
            new_tree = new_future.result()
        except EvaluationError as e:
            if old_error is None:
                raise
            raise EvaluationError([*old_error.diagnostics, *e.diagnostics]) from e
        if old_error is not None:
            raise old_error
    return old_tree, new_tree


def compile_diff(
    old_source: Source,
    new_source: Source,
    compiler: DocumentCompiler,
    engine: TypesettingEngine[DocumentT, Any],
    options: Optional[DiffOptions] = None,
    tracer: Optional[Tracer] = None,
) -> DiffCompilation[DocumentT]:
    """Evaluate two sources, diff them and lay out the merged tree.

    Parameters
    ----------
    old_source : Source
        Old document source
    new_source : Source
        New document source
    compiler : DocumentCompiler
        Evaluates sources into content trees
    engine : TypesettingEngine
        Lays out the merged tree
    options : DiffOptions, optional
        Diff, marker and layout options
    tracer : Tracer, optional
        Collects diagnostics. Pass one in to inspect warnings and errors
        after a failure.

    Returns
    -------
    DiffCompilation

    Raises
    ------
    EvaluationError
        If either source fails to evaluate; diffing does not start
    LayoutError
        If layout fails or delayed diagnostics survive the convergence loop

    Examples
    --------
        >>> from contentdiff.compilers import MarkupCompiler
        >>> from contentdiff.typeset import TextTypesetter
        >>> result = compile_diff(
        ...     Source("old", "I am here."), Source("new", "I am there."), MarkupCompiler(), TextTypesetter()
        ... )
        >>> result.document.text()
        'I am herethere.'

    """
    options = options or DiffOptions()
    tracer = tracer or Tracer()

    try:
        old_tree, new_tree = _evaluate_both(old_source, new_source, compiler, tracer, options.parallel_evaluation)
    except EvaluationError as e:
        tracer.record_errors(e.diagnostics)
        logger.error("evaluation failed with %d error(s)", len(e.diagnostics))
        raise

    result = diff_content(old_tree, new_tree, options, compiler.plain_text)

    layouter: ConvergenceLayouter[DocumentT, Any] = ConvergenceLayouter(engine, options.layout.max_attempts)
    outcome = layouter.typeset(result.merged, options.layout, tracer)

    return DiffCompilation(
        document=outcome.document,
        merged=result.merged,
        runs=result.runs,
        statistics=result.statistics,
        warnings=tuple(tracer.warnings()),
        attempts=outcome.attempts,
        converged=outcome.converged,
    )


__all__ = [
    "ContentDiff",
    "DiffCompilation",
    "compile_diff",
    "diff_content",
]
