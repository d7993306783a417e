#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/convergence.py
"""Relayout until introspection converges.

Counters, references and page totals can only be resolved once a layout
pass has happened. The :class:`ConvergenceLayouter` therefore lays the
content out repeatedly, feeding each pass's introspection snapshot into the
next, until the engine reports that a snapshot agrees with the constraint it
was produced under. If that does not happen within ``max_attempts`` passes
the last document is accepted with a warning. Delayed diagnostics that are
still present once the loop settles are promoted to fatal errors.

States
------
LAYING -> CHECK_CONVERGED -> (LAYING | DONE), DONE -> FAILED when delayed
diagnostics survive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from contentdiff.ast.nodes import Node
from contentdiff.constants import DEFAULT_MAX_LAYOUT_ATTEMPTS, NON_CONVERGENCE_HINT, NON_CONVERGENCE_MESSAGE
from contentdiff.diagnostics import Tracer, warning
from contentdiff.exceptions import LayoutError
from contentdiff.typeset.protocols import TypesettingEngine

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT")
SnapshotT = TypeVar("SnapshotT")


class LayoutState(str, Enum):
    """States of the convergence loop."""

    LAYING = "laying"
    CHECK_CONVERGED = "check_converged"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class LayoutOutcome(Generic[DocumentT, SnapshotT]):
    """Result of a settled convergence loop.

    Parameters
    ----------
    document : DocumentT
        Document of the last layout pass
    snapshot : SnapshotT
        Introspection snapshot of the last layout pass
    attempts : int
        Number of layout passes performed
    converged : bool
        False when the loop gave up after ``max_attempts`` passes

    """

    document: DocumentT
    snapshot: SnapshotT
    attempts: int
    converged: bool


class ConvergenceLayouter(Generic[DocumentT, SnapshotT]):
    """Drive a typesetting engine until its introspection stabilizes.

    Parameters
    ----------
    engine : TypesettingEngine
        Engine performing the individual layout passes
    max_attempts : int, default = 5
        Upper bound on layout passes

    Examples
    --------
        >>> from contentdiff.typeset.text_engine import TextTypesetter
        >>> from contentdiff.options import LayoutOptions
        >>> from contentdiff.ast import Text
        >>> outcome = ConvergenceLayouter(TextTypesetter()).typeset(Text("hi"), LayoutOptions(), Tracer())
        >>> outcome.attempts, outcome.converged
        (1, True)

    """

    def __init__(
        self,
        engine: TypesettingEngine[DocumentT, SnapshotT],
        max_attempts: int = DEFAULT_MAX_LAYOUT_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.engine = engine
        self.max_attempts = max_attempts
        self.state = LayoutState.LAYING

    def typeset(self, content: Node, styles: Any, tracer: Tracer) -> LayoutOutcome[DocumentT, SnapshotT]:
        """Lay ``content`` out until convergence or until the attempt budget is spent.

        Parameters
        ----------
        content : Node
            Merged content tree
        styles : Any
            Style context passed through to the engine
        tracer : Tracer
            Collects warnings; its delayed diagnostics are cleared before
            every pass

        Returns
        -------
        LayoutOutcome
            Last document, its snapshot and loop bookkeeping

        Raises
        ------
        LayoutError
            If the engine fails fatally, or if delayed diagnostics remain
            after the loop settles

        """
        self.state = LayoutState.LAYING
        attempts = 0
        converged = False
        constraint: Optional[SnapshotT] = None
        document: Optional[DocumentT] = None
        snapshot: Optional[SnapshotT] = None

        while self.state not in (LayoutState.DONE, LayoutState.FAILED):
            if self.state is LayoutState.LAYING:
                logger.info("Layout iteration %d", attempts)
                # Diagnostics delayed by a previous pass belong to a stale snapshot.
                tracer.delayed()
                try:
                    document, snapshot = self.engine.layout(content, styles, constraint, tracer)
                except LayoutError as e:
                    self.state = LayoutState.FAILED
                    tracer.record_errors(e.diagnostics)
                    raise
                attempts += 1
                self.state = LayoutState.CHECK_CONVERGED

            elif self.state is LayoutState.CHECK_CONVERGED:
                assert snapshot is not None
                if self.engine.validate(snapshot, constraint):
                    converged = True
                    self.state = LayoutState.DONE
                elif attempts >= self.max_attempts:
                    logger.warning("layout did not converge after %d attempts", attempts)
                    tracer.warn(
                        warning(
                            NON_CONVERGENCE_MESSAGE.format(attempts=self.max_attempts),
                            hints=[NON_CONVERGENCE_HINT],
                        )
                    )
                    self.state = LayoutState.DONE
                else:
                    constraint = snapshot
                    self.state = LayoutState.LAYING

        delayed = tracer.delayed()
        if delayed:
            self.state = LayoutState.FAILED
            errors = [diag.promoted() for diag in delayed]
            tracer.record_errors(errors)
            logger.debug("promoting %d delayed diagnostics to errors", len(errors))
            raise LayoutError(errors)

        assert document is not None and snapshot is not None
        logger.info("Layout finished after %d attempt(s), converged=%s", attempts, converged)
        return LayoutOutcome(document=document, snapshot=snapshot, attempts=attempts, converged=converged)


__all__ = [
    "ConvergenceLayouter",
    "LayoutOutcome",
    "LayoutState",
]
