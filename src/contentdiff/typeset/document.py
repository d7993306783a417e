#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/document.py
"""Laid-out document produced by the reference typesetter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from contentdiff.ast.nodes import Color

PAGE_SEPARATOR = "\n\f\n"


@dataclass(frozen=True)
class SpanStyle:
    """Presentation state in effect for a run of laid-out text.

    Nested decorations accumulate: a struck-through word inside a highlight
    has both ``strike`` and ``highlight`` set.
    """

    underline: bool = False
    overline: bool = False
    strike: bool = False
    strike_thickness_pt: Optional[float] = None
    highlight: Optional[Color] = None
    superscript: bool = False
    subscript: bool = False
    raw: bool = False

    @property
    def is_plain(self) -> bool:
        return self == PLAIN_STYLE


PLAIN_STYLE = SpanStyle()


@dataclass(frozen=True)
class Fragment:
    """Text with a single style."""

    text: str
    style: SpanStyle = PLAIN_STYLE

    @property
    def width(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Line:
    """One output line."""

    fragments: tuple[Fragment, ...] = ()

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    @property
    def width(self) -> int:
        return sum(fragment.width for fragment in self.fragments)


@dataclass(frozen=True)
class Page:
    """A page of lines with an optional footer.

    Parameters
    ----------
    number : int
        1-based page number
    lines : tuple of Line
        Body lines
    footer : str or None, default = None
        Rendered footer text

    """

    number: int
    lines: tuple[Line, ...]
    footer: Optional[str] = None

    @property
    def text(self) -> str:
        body = [line.text for line in self.lines]
        if self.footer is not None:
            body.append(self.footer)
        return "\n".join(body)


@dataclass(frozen=True)
class TypesetDocument:
    """Result of a layout pass.

    Parameters
    ----------
    pages : tuple of Page
        Pages in order, never empty
    width : int
        Line width the document was laid out for

    """

    pages: tuple[Page, ...]
    width: int

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def text(self) -> str:
        """Plain text of the document, pages separated by form feeds."""
        return PAGE_SEPARATOR.join(page.text for page in self.pages)


__all__ = [
    "Fragment",
    "Line",
    "PLAIN_STYLE",
    "Page",
    "SpanStyle",
    "TypesetDocument",
]
