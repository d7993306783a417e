#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/text_engine.py
"""Reference typesetting engine laying content out as fixed-width text.

The :class:`TextTypesetter` flattens a content tree into styled words,
wraps them greedily to the configured line width and splits the lines into
pages. An optional footer template may reference ``{page}`` and ``{total}``.
The total page count is only known after a pass has happened, so it is read
through the introspection constraint; on the first pass it is unknown, the
footer shows ``?`` and a delayed error is recorded, which the next pass
clears once the count is known.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from contentdiff.ast.nodes import YELLOW, Decoration, DecorationKind, LineBreak, Node, Raw, Sequence, Space, Text
from contentdiff.ast.visitors import NodeVisitor
from contentdiff.diagnostics import Span, Tracer, error, warning
from contentdiff.exceptions import LayoutError
from contentdiff.options import LayoutOptions
from contentdiff.typeset.document import PLAIN_STYLE, Fragment, Line, Page, SpanStyle, TypesetDocument
from contentdiff.typeset.introspection import Constraint, Introspector, snapshot_satisfies

logger = logging.getLogger(__name__)

PAGE_COUNT_KEY = "page_count"
UNKNOWN_TOTAL = "?"


@dataclass
class _Word:
    fragments: list[Fragment] = field(default_factory=list)
    span: Optional[Span] = None

    @property
    def width(self) -> int:
        return sum(fragment.width for fragment in self.fragments)


@dataclass(frozen=True)
class _SpaceToken:
    style: SpanStyle


@dataclass(frozen=True)
class _BreakToken:
    paragraph: bool


_Token = Union[_Word, _SpaceToken, _BreakToken]


def _apply_decoration(style: SpanStyle, node: Decoration) -> SpanStyle:
    kind = node.kind
    if kind is DecorationKind.UNDERLINE:
        return replace(style, underline=True)
    if kind is DecorationKind.OVERLINE:
        return replace(style, overline=True)
    if kind is DecorationKind.STRIKETHROUGH:
        thickness = node.stroke.thickness_pt if node.stroke is not None else None
        return replace(style, strike=True, strike_thickness_pt=thickness)
    if kind is DecorationKind.HIGHLIGHT:
        return replace(style, highlight=node.fill or YELLOW)
    if kind is DecorationKind.SUPERSCRIPT:
        return replace(style, superscript=True, subscript=False)
    return replace(style, subscript=True, superscript=False)


class _Flattener(NodeVisitor):
    """Turn a content tree into words, spaces and breaks.

    Adjacent text leaves with no Space between them belong to the same word,
    so ``Text("here")`` followed by ``Text(".")`` lays out as ``here.``.
    """

    def __init__(self) -> None:
        self.tokens: list[_Token] = []
        self._styles: list[SpanStyle] = [PLAIN_STYLE]
        self._word: Optional[_Word] = None

    @property
    def _style(self) -> SpanStyle:
        return self._styles[-1]

    def _flush(self) -> None:
        if self._word is not None and self._word.fragments:
            self.tokens.append(self._word)
        self._word = None

    def _add_text(self, text: str, style: SpanStyle, span: Optional[Span]) -> None:
        for index, segment in enumerate(text.split("\n")):
            if index:
                self._flush()
                self.tokens.append(_BreakToken(paragraph=False))
            if not segment:
                continue
            if self._word is None:
                self._word = _Word(span=span)
            self._word.fragments.append(Fragment(segment, style))

    def finish(self) -> list[_Token]:
        self._flush()
        return self.tokens

    def visit_text(self, node: Text) -> None:
        self._add_text(node.content, self._style, node.source_location)

    def visit_space(self, node: Space) -> None:
        self._flush()
        self.tokens.append(_SpaceToken(self._style))

    def visit_line_break(self, node: LineBreak) -> None:
        self._flush()
        self.tokens.append(_BreakToken(paragraph=node.paragraph))

    def visit_raw(self, node: Raw) -> None:
        self._add_text(node.text, replace(self._style, raw=True), node.source_location)

    def visit_decoration(self, node: Decoration) -> None:
        self._styles.append(_apply_decoration(self._style, node))
        try:
            node.child.accept(self)
        finally:
            self._styles.pop()

    def visit_sequence(self, node: Sequence) -> None:
        for child in node.children:
            child.accept(self)


def _split_word(fragments: list[Fragment], width: int) -> list[list[Fragment]]:
    """Hard-split a word that is wider than a line into line-sized chunks."""
    chunks: list[list[Fragment]] = [[]]
    used = 0
    for fragment in fragments:
        text = fragment.text
        while text:
            if used == width:
                chunks.append([])
                used = 0
            piece = text[: width - used]
            chunks[-1].append(Fragment(piece, fragment.style))
            used += len(piece)
            text = text[len(piece) :]
    return chunks


def _footer_fields(template: str) -> set[str]:
    try:
        return {name for _, name, _, _ in string.Formatter().parse(template) if name}
    except ValueError as e:
        raise LayoutError([error(f"invalid footer template {template!r}: {e}")]) from e


def _render_footer(template: str, page: int, total: str) -> str:
    try:
        return template.format(page=page, total=total)
    except (KeyError, IndexError, ValueError) as e:
        raise LayoutError(
            [error(f"invalid footer template {template!r}: {e}", hints=["use only {page} and {total}"])]
        ) from e


class TextTypesetter:
    """Fixed-width text typesetting engine.

    Snapshots are :class:`~contentdiff.typeset.introspection.Introspector`
    objects publishing ``page_count``.

    Examples
    --------
        >>> from contentdiff.ast import Sequence, Space, Text
        >>> doc, snapshot = TextTypesetter().layout(
        ...     Sequence((Text("a"), Space(), Text("b"))), LayoutOptions(), None, Tracer()
        ... )
        >>> doc.text()
        'a b'

    """

    def layout(
        self,
        content: Node,
        styles: Optional[LayoutOptions],
        constraint: Optional[Introspector],
        tracer: Tracer,
    ) -> tuple[TypesetDocument, Introspector]:
        """Run one layout pass.

        Parameters
        ----------
        content : Node
            Tree to lay out
        styles : LayoutOptions or None
            Page geometry and footer; defaults apply when None
        constraint : Introspector or None
            Snapshot of the previous pass
        tracer : Tracer
            Receives hard-split warnings and the delayed unknown-total error

        Returns
        -------
        tuple of (TypesetDocument, Introspector)

        Raises
        ------
        LayoutError
            If the footer template is malformed

        """
        options = styles or LayoutOptions()
        tracked = Constraint(constraint)

        flattener = _Flattener()
        content.accept(flattener)
        lines = self._wrap(flattener.finish(), options.page_width, tracer)
        pages = self._paginate(lines, options, tracked, tracer)

        document = TypesetDocument(pages=tuple(pages), width=options.page_width)
        snapshot = Introspector(values={PAGE_COUNT_KEY: document.page_count}, queried=tracked.queried)
        logger.debug("laid out %d line(s) on %d page(s)", len(lines), document.page_count)
        return document, snapshot

    def validate(self, snapshot: Introspector, constraint: Optional[Introspector]) -> bool:
        return snapshot_satisfies(snapshot, constraint)

    def _wrap(self, tokens: list[_Token], width: int, tracer: Tracer) -> list[Line]:
        lines: list[Line] = []
        current: list[Fragment] = []
        current_width = 0
        space_style: Optional[SpanStyle] = None

        for token in tokens:
            if isinstance(token, _SpaceToken):
                space_style = token.style
                continue

            if isinstance(token, _BreakToken):
                if current or not token.paragraph:
                    lines.append(Line(tuple(current)))
                if token.paragraph:
                    lines.append(Line())
                current, current_width, space_style = [], 0, None
                continue

            word_width = token.width
            if current and current_width + 1 + word_width <= width:
                current.append(Fragment(" ", space_style or PLAIN_STYLE))
                current.extend(token.fragments)
                current_width += 1 + word_width
            elif word_width <= width:
                if current:
                    lines.append(Line(tuple(current)))
                current, current_width = list(token.fragments), word_width
            else:
                tracer.warn(
                    warning(
                        f"word of {word_width} characters does not fit a line of {width}; splitting it",
                        span=token.span,
                    )
                )
                if current:
                    lines.append(Line(tuple(current)))
                *full, last = _split_word(token.fragments, width)
                lines.extend(Line(tuple(chunk)) for chunk in full)
                current = last
                current_width = sum(fragment.width for fragment in last)
            space_style = None

        if current:
            lines.append(Line(tuple(current)))
        return lines

    def _paginate(self, lines: list[Line], options: LayoutOptions, tracked: Constraint, tracer: Tracer) -> list[Page]:
        footer = options.footer
        body_height = options.page_height - (1 if footer is not None else 0)
        chunks = [lines[i : i + body_height] for i in range(0, len(lines), body_height)] or [[]]

        if footer is None:
            return [Page(number=n, lines=tuple(chunk)) for n, chunk in enumerate(chunks, start=1)]

        total = UNKNOWN_TOTAL
        if "total" in _footer_fields(footer):
            known = tracked.query(PAGE_COUNT_KEY)
            if known is None:
                tracer.delay(
                    error(
                        "page count is not known yet",
                        hints=["the total is resolved by the next layout pass"],
                    )
                )
            else:
                total = str(known)

        return [
            Page(number=n, lines=tuple(chunk), footer=_render_footer(footer, n, total))
            for n, chunk in enumerate(chunks, start=1)
        ]


__all__ = [
    "PAGE_COUNT_KEY",
    "TextTypesetter",
]
