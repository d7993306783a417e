#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/protocols.py
"""Interfaces of the external collaborators driven by the diff pipeline.

The pipeline needs two collaborators:

- a :class:`DocumentCompiler` that evaluates a source into a content tree and
  reports evaluation errors by raising
  :class:`~contentdiff.exceptions.EvaluationError`;
- a :class:`TypesettingEngine` that lays a content tree out into a document
  plus an introspection snapshot, and can tell whether a snapshot is still
  valid against the constraint it was produced under.

Snapshots and constraints are opaque to the pipeline. The snapshot from one
layout pass becomes the constraint of the next; the first pass runs with no
constraint (``None``).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, TypeVar

from contentdiff.ast.nodes import Node
from contentdiff.diagnostics import Tracer
from contentdiff.source import Source

DocumentT = TypeVar("DocumentT")
SnapshotT = TypeVar("SnapshotT")


class DocumentCompiler(Protocol):
    """Turns source text into a content tree."""

    def evaluate(self, source: Source, tracer: Tracer) -> Node:
        """Evaluate ``source`` into a content tree.

        Raises
        ------
        EvaluationError
            If the source cannot be evaluated
        """
        ...

    def plain_text(self, node: Node) -> str:
        """Plain text of a node as this compiler defines it."""
        ...


class TypesettingEngine(Protocol[DocumentT, SnapshotT]):
    """Lays out content trees into documents."""

    def layout(
        self,
        content: Node,
        styles: Any,
        constraint: Optional[SnapshotT],
        tracer: Tracer,
    ) -> tuple[DocumentT, SnapshotT]:
        """Run one layout pass.

        Parameters
        ----------
        content : Node
            Tree to lay out
        styles : Any
            Shared style context
        constraint : snapshot or None
            Snapshot of the previous pass, None on the first pass
        tracer : Tracer
            Receives warnings and delayed diagnostics

        Raises
        ------
        LayoutError
            On fatal layout errors
        """
        ...

    def validate(self, snapshot: SnapshotT, constraint: Optional[SnapshotT]) -> bool:
        """Whether ``snapshot`` agrees with what the pass assumed from ``constraint``."""
        ...


__all__ = [
    "DocumentCompiler",
    "TypesettingEngine",
]
