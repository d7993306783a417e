#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_renderers.py
"""Tests for the HTML, terminal and JSON renderers."""

import json

import pytest
from utils import sentence

from contentdiff.ast import LineBreak, Raw, Sequence, Text, overline, subscript, superscript, underline
from contentdiff.ast.nodes import Color
from contentdiff.compilers import MarkupCompiler
from contentdiff.diff.api import compile_diff, diff_content
from contentdiff.options import DiffOptions, LayoutOptions, MarkerOptions
from contentdiff.renderers.html import HtmlDiffRenderer
from contentdiff.renderers.json import SCHEMA_VERSION, JsonDiffRenderer
from contentdiff.renderers.terminal import TerminalRenderer
from contentdiff.source import Source
from contentdiff.typeset import TextTypesetter


@pytest.fixture
def here_there():
    return compile_diff(
        Source("old", "I am here."),
        Source("new", "I am there."),
        MarkupCompiler(),
        TextTypesetter(),
    )


@pytest.mark.unit
class TestHtmlDiffRenderer:
    """Tests for HtmlDiffRenderer."""

    def test_change_markers(self):
        merged = diff_content(sentence("I am here."), sentence("I am there.")).merged
        html = HtmlDiffRenderer().render_fragment(merged)
        assert html == (
            "I am "
            "<mark style='background-color: #ff4136'><s style='text-decoration-thickness: 1.5pt'>here</s></mark>"
            "<mark style='background-color: #2ecc40'>there</mark>"
            "."
        )

    def test_decorations(self):
        content = Sequence(
            (
                underline(Text("u")),
                overline(Text("o")),
                superscript(Text("2")),
                subscript(Text("i")),
                Raw("x"),
                LineBreak(),
                LineBreak(paragraph=True),
            )
        )
        html = HtmlDiffRenderer().render_fragment(content)
        assert html == (
            "<u>u</u><span class='overline'>o</span><sup>2</sup><sub>i</sub><code>x</code><br>\n<br>\n<br>\n"
        )

    def test_text_is_escaped(self):
        assert HtmlDiffRenderer().render_fragment(Sequence((Text("<b>&"),))) == "&lt;b&gt;&amp;"

    def test_full_page(self, here_there):
        html = HtmlDiffRenderer(title="My <Diff>").render(here_there.merged, here_there.statistics)
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>My &lt;Diff&gt;</title>" in html
        assert "<dt>Deleted units</dt><dd>1</dd>" in html
        assert "<style>" in html
        assert html.rstrip().endswith("</html>")

    def test_without_styles_or_summary(self, here_there):
        html = HtmlDiffRenderer(inline_styles=False).render(here_there.merged)
        assert "<style>" not in html
        assert "diff-summary" not in html


@pytest.mark.unit
class TestTerminalRenderer:
    """Tests for TerminalRenderer."""

    def test_word_diff_markers(self, here_there):
        assert TerminalRenderer().render(here_there.document) == "I am [-here-]{+there+}."

    def test_custom_marker_colors(self):
        markers = MarkerOptions(deletion_color=Color(0, 0, 255), insertion_color=Color(255, 0, 255))
        result = compile_diff(
            Source("old", "a b"),
            Source("new", "a c"),
            MarkupCompiler(),
            TextTypesetter(),
            DiffOptions(markers=markers),
        )
        assert TerminalRenderer(markers=markers).render(result.document) == "a [-b-]{+c+}"
        assert TerminalRenderer().render(result.document) == "a bc"

    def test_pages_and_footer(self):
        result = compile_diff(
            Source("old", "a \\ b \\ c"),
            Source("new", "a \\ b \\ c"),
            MarkupCompiler(),
            TextTypesetter(),
            DiffOptions(layout=LayoutOptions(page_height=3, footer="{page}/{total}")),
        )
        assert TerminalRenderer().render(result.document) == "a\nb\n1/2\n\f\nc\n2/2"

    def test_color_output(self, here_there):
        output = TerminalRenderer(color=True).render(here_there.document)
        assert "\x1b[" in output
        assert "here" in output
        assert "[-" not in output


@pytest.mark.unit
class TestJsonDiffRenderer:
    """Tests for JsonDiffRenderer."""

    def test_structure(self, here_there):
        data = json.loads(JsonDiffRenderer().render(here_there))
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["statistics"] == {
            "equal_units": 3,
            "deleted_units": 1,
            "inserted_units": 1,
            "runs": 4,
            "has_changes": True,
        }
        assert [run["tag"] for run in data["runs"]] == ["equal", "delete", "insert", "equal"]
        assert data["runs"][1] == {"tag": "delete", "old_range": [2, 3], "new_range": [2, 2], "text": "here"}
        assert data["layout"] == {"attempts": 1, "converged": True}
        assert data["pages"] == ["I am herethere."]
        assert data["warnings"] == []
        assert data["merged"]["node_type"] == "Sequence"

    def test_compact(self, here_there):
        assert "\n" not in JsonDiffRenderer(pretty_print=False).render(here_there)
