#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/compilers/markup.py
"""Compiler for a small inline markup language.

The markup is plain text with a handful of constructs:

- words are separated by whitespace; punctuation forms its own text leaf,
  so ``here.`` compiles to ``Text("here")`` followed by ``Text(".")``;
- a blank line is a paragraph break;
- a backslash followed by whitespace (or the end of input) forces a line
  break, while a backslash followed by any other character escapes it;
- backticks delimit raw text;
- ``#name[...]`` applies a decoration, where ``name`` is one of
  ``underline``, ``overline``, ``highlight``, ``super``, ``sub`` or ``strike``.

All errors in a source are collected and raised together as an
:class:`~contentdiff.exceptions.EvaluationError`.

Examples
--------
    >>> from contentdiff.diagnostics import Tracer
    >>> from contentdiff.source import Source
    >>> tree = MarkupCompiler().evaluate(Source("doc", "I am #underline[here]."), Tracer())
    >>> MarkupCompiler().plain_text(tree)
    'I am here.'

"""

from __future__ import annotations

import bisect
import logging
import re
from typing import Optional

from contentdiff.ast.nodes import Decoration, DecorationKind, LineBreak, Node, Raw, Sequence, Space, Text
from contentdiff.ast.utils import plain_text
from contentdiff.cache import EvaluationCache
from contentdiff.diagnostics import Diagnostic, Span, Tracer, error, warning
from contentdiff.exceptions import EvaluationError
from contentdiff.source import Source

logger = logging.getLogger(__name__)

FUNCTIONS: dict[str, DecorationKind] = {
    "underline": DecorationKind.UNDERLINE,
    "overline": DecorationKind.OVERLINE,
    "highlight": DecorationKind.HIGHLIGHT,
    "super": DecorationKind.SUPERSCRIPT,
    "sub": DecorationKind.SUBSCRIPT,
    "strike": DecorationKind.STRIKETHROUGH,
}


class _MarkupParser:
    """Cursor-based parser for one source."""

    FUNCTION_PATTERN = re.compile(r"#([A-Za-z][\w-]*)")
    WHITESPACE_PATTERN = re.compile(r"\s+")
    WORD_PATTERN = re.compile(r"\w+|[^\w\s\\`#\]]+")

    def __init__(self, source: Source, tracer: Tracer) -> None:
        self.name = source.name
        self.text = source.text.replace("\r\n", "\n")
        self.tracer = tracer
        self.pos = 0
        self.errors: list[Diagnostic] = []
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", self.text)]

    def span_at(self, pos: int) -> Span:
        line = bisect.bisect_right(self._line_starts, pos)
        return Span(self.name, line, pos - self._line_starts[line - 1] + 1)

    def parse(self) -> Sequence:
        nodes = self._parse_nodes(in_brackets=False)
        return Sequence(children=tuple(_tidy(nodes)), source_location=self.span_at(0))

    def _error(self, message: str, pos: int, *hints: str) -> None:
        self.errors.append(error(message, self.span_at(pos), hints))

    def _parse_nodes(self, in_brackets: bool) -> list[Node]:
        text = self.text
        nodes: list[Node] = []

        while self.pos < len(text):
            start = self.pos
            char = text[start]

            if char == "]":
                if in_brackets:
                    return nodes
                self._error("unexpected closing bracket", start, "escape it as \\]")
                self.pos += 1

            elif char.isspace():
                match = self.WHITESPACE_PATTERN.match(text, start)
                assert match is not None
                self.pos = match.end()
                if match.group().count("\n") >= 2:
                    nodes.append(LineBreak(paragraph=True, source_location=self.span_at(start)))
                else:
                    nodes.append(Space(source_location=self.span_at(start)))

            elif char == "\\":
                following = text[start + 1 : start + 2]
                if not following or following.isspace():
                    nodes.append(LineBreak(source_location=self.span_at(start)))
                    match = self.WHITESPACE_PATTERN.match(text, start + 1)
                    self.pos = match.end() if match else start + 1
                else:
                    nodes.append(Text(following, source_location=self.span_at(start)))
                    self.pos = start + 2

            elif char == "`":
                end = text.find("`", start + 1)
                if end == -1:
                    self._error("unclosed raw text", start, "add a closing backtick")
                    self.pos = len(text)
                else:
                    nodes.append(Raw(text[start + 1 : end], source_location=self.span_at(start)))
                    self.pos = end + 1

            elif char == "#" and self.FUNCTION_PATTERN.match(text, start):
                decoration = self._parse_function(start)
                if decoration is not None:
                    nodes.append(decoration)

            elif char == "#":
                nodes.append(Text("#", source_location=self.span_at(start)))
                self.pos += 1

            else:
                match = self.WORD_PATTERN.match(text, start)
                assert match is not None
                nodes.append(Text(match.group(), source_location=self.span_at(start)))
                self.pos = match.end()

        return nodes

    def _parse_function(self, start: int) -> Optional[Decoration]:
        match = self.FUNCTION_PATTERN.match(self.text, start)
        assert match is not None
        name = match.group(1)
        self.pos = match.end()

        kind = FUNCTIONS.get(name)
        if kind is None:
            self._error(f"unknown function: {name}", start, f"available functions: {', '.join(FUNCTIONS)}")

        if not self.text.startswith("[", self.pos):
            self._error(f"expected '[' after #{name}", self.pos)
            return None

        open_pos = self.pos
        self.pos += 1
        body = _tidy(self._parse_nodes(in_brackets=True))
        if self.pos >= len(self.text):
            self._error("unclosed bracket", open_pos, "add a closing ]")
        else:
            self.pos += 1

        if kind is None:
            return None
        if not body:
            self.tracer.warn(warning(f"#{name} has an empty body", self.span_at(start)))

        child: Node = body[0] if len(body) == 1 else Sequence(children=tuple(body))
        return Decoration(kind, child, source_location=self.span_at(start))


def _tidy(nodes: list[Node]) -> list[Node]:
    """Drop spaces at the edges of a sequence and next to line breaks."""
    result: list[Node] = []
    for node in nodes:
        if isinstance(node, Space) and (not result or isinstance(result[-1], (Space, LineBreak))):
            continue
        if isinstance(node, LineBreak) and result and isinstance(result[-1], Space):
            result.pop()
        result.append(node)
    while result and isinstance(result[-1], Space):
        result.pop()
    return result


class MarkupCompiler:
    """Document compiler for the inline markup language.

    Parameters
    ----------
    cache : EvaluationCache, optional
        Cache of evaluated trees keyed by the SHA-256 of the source name and text

    """

    def __init__(self, cache: Optional[EvaluationCache[Node]] = None) -> None:
        self.cache = cache

    def evaluate(self, source: Source, tracer: Tracer) -> Node:
        """Evaluate a source into a content tree.

        Raises
        ------
        EvaluationError
            With every distinct error found in the source

        """
        key = source.cache_key
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("evaluation cache hit for %s", source.name)
                return cached

        parser = _MarkupParser(source, tracer)
        tree = parser.parse()
        if parser.errors:
            raise EvaluationError(parser.errors, f"Failed to evaluate {source.name}")

        logger.debug("evaluated %s into %d top-level node(s)", source.name, len(tree.children))
        if self.cache is not None:
            self.cache.put(key, tree)
        return tree

    def plain_text(self, node: Node) -> str:
        return plain_text(node)


__all__ = [
    "FUNCTIONS",
    "MarkupCompiler",
]
