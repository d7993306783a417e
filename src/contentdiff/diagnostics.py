#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/diagnostics.py
"""Diagnostics collected while evaluating and laying out documents.

A :class:`Diagnostic` is a (location, severity, message) triple with optional
hints. Diagnostics are deduplicated by a content hash of their location and
message, so repeating evaluation or layout never surfaces the same problem
twice.

The :class:`Tracer` is handed to document compilers and typesetting engines.
It accumulates warnings for the whole run and holds *delayed* diagnostics:
errors that belong to one specific layout pass and are only promoted to
fatal errors if they survive the final pass.

"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Span:
    """Location in a source document.

    Parameters
    ----------
    source : str
        Identity of the source (usually its path or name)
    line : int
        1-based line number
    column : int
        1-based column number

    """

    source: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning.

    Parameters
    ----------
    severity : Severity
        Error or warning
    message : str
        Human-readable message
    span : Span or None, default = None
        Where the problem is. None for diagnostics not tied to the source.
    hints : tuple of str, default = ()
        Suggestions shown after the message

    """

    severity: Severity
    message: str
    span: Optional[Span] = None
    hints: tuple[str, ...] = ()

    @property
    def content_hash(self) -> str:
        """Hash of (location, message) used for deduplication."""
        digest = hashlib.blake2b(digest_size=16)
        digest.update(repr(self.span).encode("utf-8"))
        digest.update(b"\x00")
        digest.update(self.message.encode("utf-8"))
        return digest.hexdigest()

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def promoted(self) -> Diagnostic:
        """Return a copy of this diagnostic with error severity."""
        return replace(self, severity=Severity.ERROR)

    def __str__(self) -> str:
        location = f"{self.span}: " if self.span is not None else ""
        return f"{location}{self.severity.value}: {self.message}"


def error(message: str, span: Optional[Span] = None, hints: Iterable[str] = ()) -> Diagnostic:
    """Create an error diagnostic."""
    return Diagnostic(Severity.ERROR, message, span, tuple(hints))


def warning(message: str, span: Optional[Span] = None, hints: Iterable[str] = ()) -> Diagnostic:
    """Create a warning diagnostic."""
    return Diagnostic(Severity.WARNING, message, span, tuple(hints))


def deduplicate(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop diagnostics whose (location, message) was already seen.

    Parameters
    ----------
    diagnostics : iterable of Diagnostic
        Diagnostics in report order

    Returns
    -------
    list of Diagnostic
        First occurrence of each distinct diagnostic, order preserved

    """
    unique: set[str] = set()
    result: list[Diagnostic] = []
    for diag in diagnostics:
        key = diag.content_hash
        if key not in unique:
            unique.add(key)
            result.append(diag)
    return result


class Tracer:
    """Collects warnings and delayed diagnostics across a compilation.

    Warnings accumulate for the lifetime of the tracer. Delayed diagnostics
    are cleared at the start of each layout pass via :meth:`delayed`, which
    hands back and forgets whatever was recorded so far.

    Examples
    --------
        >>> tracer = Tracer()
        >>> tracer.warn(warning("unused label"))
        >>> tracer.warn(warning("unused label"))
        >>> len(tracer.warnings())
        1

    """

    def __init__(self) -> None:
        self._warnings: list[Diagnostic] = []
        self._delayed: list[Diagnostic] = []
        self._errors: list[Diagnostic] = []

    def warn(self, diagnostic: Diagnostic) -> None:
        """Record a non-fatal diagnostic."""
        logger.debug("warning recorded: %s", diagnostic)
        self._warnings.append(diagnostic)

    def delay(self, diagnostic: Diagnostic) -> None:
        """Record a provisional diagnostic tied to the current layout pass."""
        logger.debug("delayed diagnostic recorded: %s", diagnostic)
        self._delayed.append(diagnostic)

    def delayed(self) -> list[Diagnostic]:
        """Take and clear the delayed diagnostics, deduplicated."""
        taken = deduplicate(self._delayed)
        self._delayed = []
        return taken

    def record_errors(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Remember fatal errors so callers can inspect them after failure."""
        self._errors.extend(diagnostics)

    def warnings(self) -> list[Diagnostic]:
        """Return all warnings recorded so far, deduplicated."""
        return deduplicate(self._warnings)

    def errors(self) -> list[Diagnostic]:
        """Return all fatal errors recorded so far, deduplicated."""
        return deduplicate(self._errors)

    def diagnostics(self) -> list[Diagnostic]:
        """Return errors followed by warnings, deduplicated."""
        return deduplicate([*self._errors, *self._warnings])


__all__ = [
    "Diagnostic",
    "Severity",
    "Span",
    "Tracer",
    "deduplicate",
    "error",
    "warning",
]
