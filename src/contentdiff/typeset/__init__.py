#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/__init__.py
"""Layout of merged content trees.

The convergence loop is engine-agnostic; :class:`TextTypesetter` is the
reference engine used by the command line tool.
"""

from contentdiff.typeset.convergence import ConvergenceLayouter, LayoutOutcome, LayoutState
from contentdiff.typeset.document import Fragment, Line, Page, SpanStyle, TypesetDocument
from contentdiff.typeset.introspection import Constraint, Introspector
from contentdiff.typeset.protocols import DocumentCompiler, TypesettingEngine
from contentdiff.typeset.text_engine import TextTypesetter

__all__ = [
    "Constraint",
    "ConvergenceLayouter",
    "DocumentCompiler",
    "Fragment",
    "Introspector",
    "LayoutOutcome",
    "LayoutState",
    "Line",
    "Page",
    "SpanStyle",
    "TextTypesetter",
    "TypesetDocument",
    "TypesettingEngine",
]
