#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/renderers/terminal.py
"""Terminal renderer for laid-out documents.

With color, fragment styles become Rich styles (background colors for
highlights, strike and underline attributes) and are rendered to ANSI text.
Without color, changes are shown with word-diff markers: ``[-deleted-]``
and ``{+inserted+}``. Markers are added after layout, so marked lines may
exceed the page width by the marker characters.
"""

from __future__ import annotations

import itertools
from io import StringIO
from typing import TYPE_CHECKING, Literal, Optional

from contentdiff.options import MarkerOptions
from contentdiff.typeset.document import PAGE_SEPARATOR, Line, SpanStyle, TypesetDocument

if TYPE_CHECKING:
    from rich.style import Style
    from rich.text import Text

ChangeMark = Literal["deleted", "inserted", None]

WORD_DIFF_MARKERS = {
    "deleted": ("[-", "-]"),
    "inserted": ("{+", "+}"),
}


class TerminalRenderer:
    """Render a :class:`TypesetDocument` for the terminal.

    Parameters
    ----------
    color : bool, default = False
        Emit ANSI styles through Rich instead of word-diff markers
    markers : MarkerOptions, optional
        Marker colors used to tell deletions from insertions

    Examples
    --------
        >>> from contentdiff.typeset.document import Fragment, Line, Page
        >>> from contentdiff.constants import DEFAULT_DELETION_COLOR
        >>> deleted = SpanStyle(strike=True, highlight=DEFAULT_DELETION_COLOR)
        >>> doc = TypesetDocument((Page(1, (Line((Fragment("a "), Fragment("b", deleted))),)),), width=80)
        >>> TerminalRenderer().render(doc)
        'a [-b-]'

    """

    def __init__(self, color: bool = False, markers: Optional[MarkerOptions] = None) -> None:
        self.color = color
        self.markers = markers or MarkerOptions()

    def classify(self, style: SpanStyle) -> ChangeMark:
        """Tell whether a fragment belongs to a deletion, an insertion or neither."""
        if style.strike and style.highlight == self.markers.deletion_color:
            return "deleted"
        if style.highlight == self.markers.insertion_color:
            return "inserted"
        return None

    def render(self, document: TypesetDocument) -> str:
        if self.color:
            return self._render_rich(document)
        pages = []
        for page in document.pages:
            lines = [self._plain_line(line) for line in page.lines]
            if page.footer is not None:
                lines.append(page.footer)
            pages.append("\n".join(lines))
        return PAGE_SEPARATOR.join(pages)

    def _plain_line(self, line: Line) -> str:
        parts: list[str] = []
        for mark, group in itertools.groupby(line.fragments, key=lambda fragment: self.classify(fragment.style)):
            text = "".join(fragment.text for fragment in group)
            if mark is None:
                parts.append(text)
            else:
                opening, closing = WORD_DIFF_MARKERS[mark]
                parts.append(f"{opening}{text}{closing}")
        return "".join(parts)

    def _rich_style(self, style: SpanStyle) -> Style:
        from rich.style import Style

        return Style(
            underline=style.underline or None,
            overline=style.overline or None,
            strike=style.strike or None,
            bgcolor=style.highlight.to_hex()[:7] if style.highlight is not None else None,
            color="black" if style.highlight is not None else None,
            dim=style.raw or None,
            italic=(style.superscript or style.subscript) or None,
        )

    def _rich_line(self, line: Line) -> Text:
        from rich.text import Text

        text = Text()
        for fragment in line.fragments:
            text.append(fragment.text, style=self._rich_style(fragment.style))
        return text

    def _render_rich(self, document: TypesetDocument) -> str:
        from rich.console import Console
        from rich.text import Text

        buffer = StringIO()
        console = Console(
            file=buffer,
            force_terminal=True,
            color_system="truecolor",
            width=document.width + 8,
            soft_wrap=True,
            highlight=False,
        )
        for index, page in enumerate(document.pages):
            if index:
                console.print(PAGE_SEPARATOR.strip("\n"))
            for line in page.lines:
                console.print(self._rich_line(line))
            if page.footer is not None:
                console.print(Text(page.footer, style="dim"))
        return buffer.getvalue().rstrip("\n")


__all__ = [
    "TerminalRenderer",
    "WORD_DIFF_MARKERS",
]
