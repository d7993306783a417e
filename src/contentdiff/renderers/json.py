#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/renderers/json.py
"""JSON renderer for diff compilations.

The output carries the alignment runs, statistics, the merged content tree
in the :mod:`contentdiff.ast.serialization` format, the laid-out page text
and all warnings, for programmatic processing.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from contentdiff.ast.serialization import ast_to_dict
from contentdiff.diff.api import DiffCompilation
from contentdiff.diff.sequence_diff import AlignmentRun, DiffStatistics
from contentdiff.typeset.document import TypesetDocument

SCHEMA_VERSION = 1


def _run_to_dict(run: AlignmentRun) -> Dict[str, Any]:
    return {
        "tag": run.tag.value,
        "old_range": list(run.old_range),
        "new_range": list(run.new_range),
        "text": run.text,
    }


def _statistics_to_dict(statistics: DiffStatistics) -> Dict[str, Any]:
    return {
        "equal_units": statistics.equal_units,
        "deleted_units": statistics.deleted_units,
        "inserted_units": statistics.inserted_units,
        "runs": statistics.runs,
        "has_changes": statistics.has_changes,
    }


class JsonDiffRenderer:
    """Render a :class:`~contentdiff.diff.api.DiffCompilation` as JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    """

    def __init__(self, pretty_print: bool = True, indent: int = 2):
        self.pretty_print = pretty_print
        self.indent = indent

    def to_dict(self, compilation: DiffCompilation[Any]) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "statistics": _statistics_to_dict(compilation.statistics),
            "runs": [_run_to_dict(run) for run in compilation.runs],
            "merged": ast_to_dict(compilation.merged),
            "layout": {"attempts": compilation.attempts, "converged": compilation.converged},
            "warnings": [str(diagnostic) for diagnostic in compilation.warnings],
        }
        if isinstance(compilation.document, TypesetDocument):
            data["pages"] = [page.text for page in compilation.document.pages]
        return data

    def render(self, compilation: DiffCompilation[Any]) -> str:
        data = self.to_dict(compilation)
        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)


__all__ = [
    "JsonDiffRenderer",
]
