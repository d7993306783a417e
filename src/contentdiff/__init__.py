#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/__init__.py
"""contentdiff - compare structured documents and annotate their differences.

contentdiff compares two versions of a document given as content trees
(text, spaces, line breaks, raw spans and decorations such as underline or
highlight) and merges them into one tree in which deletions are struck
through and highlighted red and insertions are highlighted green, while
unchanged text keeps its formatting. The merged tree is then laid out
repeatedly until cross-document state such as page totals settles.

Key Features
------------
- Word-level diffing that ignores decorations and line wrapping
- Deterministic Myers alignment with deletions ordered before insertions
- Formatting-preserving merge of unchanged, deleted and inserted runs
- Bounded relayout loop with delayed diagnostics
- Reference markup compiler and fixed-width text typesetter
- Text, HTML and JSON output

Examples
--------
Diff two content trees directly:

    >>> from contentdiff import diff_content
    >>> from contentdiff.ast import Sequence, Space, Text
    >>> old = Sequence((Text("I"), Space(), Text("am"), Space(), Text("here"), Text(".")))
    >>> new = Sequence((Text("I"), Space(), Text("am"), Space(), Text("there"), Text(".")))
    >>> [run.tag.value for run in diff_content(old, new).runs]
    ['equal', 'delete', 'insert', 'equal']

Run the whole pipeline on markup sources:

    >>> from contentdiff import MarkupCompiler, Source, TextTypesetter, compile_diff
    >>> result = compile_diff(Source("a", "Hello"), Source("b", "Hello world"), MarkupCompiler(), TextTypesetter())
    >>> result.statistics.inserted_units
    1

"""

from contentdiff.compilers.markup import MarkupCompiler
from contentdiff.diagnostics import Diagnostic, Severity, Span, Tracer
from contentdiff.diff.api import ContentDiff, DiffCompilation, compile_diff, diff_content
from contentdiff.exceptions import (
    CompilationError,
    ConfigurationError,
    ContentDiffError,
    EvaluationError,
    LayoutError,
    MalformedContentError,
    RenderingError,
    SourceFileError,
    ValidationError,
)
from contentdiff.options import DiffOptions, LayoutOptions, MarkerOptions
from contentdiff.source import Source
from contentdiff.typeset.convergence import ConvergenceLayouter
from contentdiff.typeset.text_engine import TextTypesetter

__version__ = "1.0.0"

__all__ = [
    "CompilationError",
    "ConfigurationError",
    "ContentDiff",
    "ContentDiffError",
    "ConvergenceLayouter",
    "Diagnostic",
    "DiffCompilation",
    "DiffOptions",
    "EvaluationError",
    "LayoutError",
    "LayoutOptions",
    "MalformedContentError",
    "MarkerOptions",
    "MarkupCompiler",
    "RenderingError",
    "Severity",
    "Source",
    "SourceFileError",
    "Span",
    "TextTypesetter",
    "Tracer",
    "ValidationError",
    "__version__",
    "compile_diff",
    "diff_content",
]
