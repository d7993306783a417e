#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/renderers/html.py
"""HTML renderer for merged content trees.

Decorations map onto inline HTML elements, so the deletion and insertion
markers produced by the merger show up as colored ``<mark>`` elements with
a struck-through ``<s>`` inside for deletions. The page optionally starts
with a summary of the diff statistics.
"""

from __future__ import annotations

from html import escape
from io import StringIO
from typing import Optional

from contentdiff.ast.nodes import YELLOW, Decoration, DecorationKind, LineBreak, Node, Raw, Sequence, Space, Text
from contentdiff.ast.visitors import NodeVisitor
from contentdiff.diff.sequence_diff import DiffStatistics
from contentdiff.exceptions import RenderingError


class _InlineHtmlBuilder(NodeVisitor):
    """Render a content tree to an inline HTML fragment."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def visit_text(self, node: Text) -> None:
        self.parts.append(escape(node.content))

    def visit_space(self, node: Space) -> None:
        self.parts.append(" ")

    def visit_line_break(self, node: LineBreak) -> None:
        self.parts.append("<br>\n<br>\n" if node.paragraph else "<br>\n")

    def visit_raw(self, node: Raw) -> None:
        self.parts.append(f"<code>{escape(node.text)}</code>")

    def visit_decoration(self, node: Decoration) -> None:
        opening, closing = self._tags(node)
        self.parts.append(opening)
        node.child.accept(self)
        self.parts.append(closing)

    def visit_sequence(self, node: Sequence) -> None:
        for child in node.children:
            child.accept(self)

    @staticmethod
    def _tags(node: Decoration) -> tuple[str, str]:
        kind = node.kind
        if kind is DecorationKind.UNDERLINE:
            return "<u>", "</u>"
        if kind is DecorationKind.OVERLINE:
            return "<span class='overline'>", "</span>"
        if kind is DecorationKind.HIGHLIGHT:
            fill = (node.fill or YELLOW).to_hex()
            return f"<mark style='background-color: {fill}'>", "</mark>"
        if kind is DecorationKind.SUPERSCRIPT:
            return "<sup>", "</sup>"
        if kind is DecorationKind.SUBSCRIPT:
            return "<sub>", "</sub>"
        if node.stroke is not None:
            return f"<s style='text-decoration-thickness: {node.stroke.thickness_pt:g}pt'>", "</s>"
        return "<s>", "</s>"


class HtmlDiffRenderer:
    """Render a merged content tree as a standalone HTML page.

    Parameters
    ----------
    inline_styles : bool, default = True
        If True, include CSS styles in the output
    title : str, default = "Document Diff"
        Page title and heading

    Examples
    --------
        >>> from contentdiff.ast import Sequence, Text, highlight
        >>> html = HtmlDiffRenderer().render_fragment(Sequence((Text("a"), highlight(Text("b")))))
        >>> html
        "a<mark style='background-color: #fffd11'>b</mark>"

    """

    def __init__(self, inline_styles: bool = True, title: str = "Document Diff"):
        self.inline_styles = inline_styles
        self.title = title

    def render_fragment(self, content: Node) -> str:
        """Render just the content, without the surrounding page."""
        builder = _InlineHtmlBuilder()
        try:
            content.accept(builder)
        except (AttributeError, TypeError) as e:
            raise RenderingError(f"Cannot render content to HTML: {e}", rendering_stage="html", original_error=e) from e
        return "".join(builder.parts)

    def render(self, content: Node, statistics: Optional[DiffStatistics] = None) -> str:
        """Render a merged tree to a complete HTML document.

        Parameters
        ----------
        content : Node
            Merged content tree
        statistics : DiffStatistics, optional
            When given, a summary block precedes the content

        Returns
        -------
        str
            HTML page

        """
        output = StringIO()
        self._write_html_prefix(output)
        if statistics is not None:
            self._render_summary(statistics, output)
        output.write("      <div class='diff-body'>")
        output.write(self.render_fragment(content))
        output.write("</div>\n")
        self._write_html_suffix(output)
        return output.getvalue()

    def _write_html_prefix(self, output: StringIO) -> None:
        output.write("<!DOCTYPE html>\n")
        output.write("<html lang='en'>\n")
        output.write("<head>\n")
        output.write("  <meta charset='UTF-8'>\n")
        output.write(f"  <title>{escape(self.title)}</title>\n")
        if self.inline_styles:
            output.write("  <style>\n")
            output.write(self._get_css())
            output.write("  </style>\n")
        output.write("</head>\n")
        output.write("<body>\n")
        output.write("  <div class='container'>\n")
        output.write(f"    <h1>{escape(self.title)}</h1>\n")
        output.write("    <div class='diff-content'>\n")

    def _write_html_suffix(self, output: StringIO) -> None:
        output.write("    </div>\n")
        output.write("  </div>\n")
        output.write("</body>\n")
        output.write("</html>\n")

    def _render_summary(self, statistics: DiffStatistics, output: StringIO) -> None:
        output.write("      <div class='diff-summary'>\n")
        output.write("        <h2>Summary</h2>\n")
        output.write("        <dl>\n")
        output.write(f"          <dt>Unchanged units</dt><dd>{statistics.equal_units}</dd>\n")
        output.write(f"          <dt>Deleted units</dt><dd>{statistics.deleted_units}</dd>\n")
        output.write(f"          <dt>Inserted units</dt><dd>{statistics.inserted_units}</dd>\n")
        output.write("        </dl>\n")
        output.write("      </div>\n")

    def _get_css(self) -> str:
        return """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            line-height: 1.6;
            color: #333;
            max-width: 960px;
            margin: 0 auto;
            padding: 20px;
        }
        .diff-summary {
            background-color: #f0f4ff;
            border: 1px solid #cbd7f7;
            border-radius: 6px;
            padding: 12px 16px;
            margin-bottom: 20px;
        }
        .diff-summary dl {
            display: grid;
            grid-template-columns: max-content 1fr;
            gap: 4px 16px;
            margin: 0;
        }
        .diff-body {
            white-space: normal;
        }
        .overline {
            text-decoration: overline;
        }
        code {
            font-family: 'Courier New', Courier, monospace;
        }
        """


__all__ = [
    "HtmlDiffRenderer",
]
