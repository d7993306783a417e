#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_merge.py
"""Tests for rebuilding an annotated tree from alignment runs."""

import pytest
from utils import sentence, words

from contentdiff.ast import Sequence, Space, Text
from contentdiff.ast.nodes import GREEN, RED, Color, Decoration, DecorationKind, Stroke, underline
from contentdiff.ast.utils import iter_leaves, plain_text
from contentdiff.diff.api import diff_content
from contentdiff.diff.merge import MarkerStyle, merge_runs, run_body
from contentdiff.diff.sequence_diff import ChangeTag, diff_units
from contentdiff.diff.units import normalize_content
from contentdiff.options import DiffOptions, MarkerOptions


def merged_for(old, new, style=None):
    return merge_runs(diff_units(normalize_content(old), normalize_content(new)), style)


@pytest.mark.unit
class TestMergeRuns:
    """Tests for merge_runs."""

    def test_changed_word_scenario(self):
        merged = merged_for(sentence("I am here."), sentence("I am there."))
        equal_head, deleted, inserted, equal_tail = merged.children

        assert plain_text(equal_head) == "I am "
        assert not isinstance(equal_head, Decoration)

        assert deleted.kind is DecorationKind.HIGHLIGHT
        assert deleted.fill == RED
        assert deleted.child.kind is DecorationKind.STRIKETHROUGH
        assert deleted.child.stroke == Stroke(thickness_pt=1.5)
        assert plain_text(deleted) == "here"

        assert inserted.kind is DecorationKind.HIGHLIGHT
        assert inserted.fill == GREEN
        assert plain_text(inserted) == "there"

        assert plain_text(equal_tail) == "."

    def test_identical_content_has_no_markers(self):
        merged = merged_for(words("Hello", "World!"), words("Hello", "World!"))
        assert len(merged.children) == 1
        assert not any(isinstance(node, Decoration) for node in merged.children)
        assert plain_text(merged) == "Hello World!"

    def test_empty_old_document(self):
        merged = merged_for(Sequence(()), words("Hello", "World!"))
        (only,) = merged.children
        assert only.fill == GREEN
        assert plain_text(only) == "Hello World!"

    def test_empty_new_document(self):
        merged = merged_for(words("Hello", "World!"), Sequence(()))
        (only,) = merged.children
        assert only.fill == RED
        assert only.child.kind is DecorationKind.STRIKETHROUGH

    def test_both_empty(self):
        assert merge_runs([]) == Sequence(())

    def test_formatting_preserved_in_unchanged_text(self):
        old = Sequence((underline(Text("keep")), Space(), Text("old")))
        new = Sequence((underline(Text("keep")), Space(), Text("new")))
        merged = merged_for(old, new)
        assert merged.children[0] == Sequence((underline(Text("keep")), Space()))

    def test_every_leaf_appears_once(self):
        old = words("a", "b", "c", "d")
        new = words("a", "x", "c", "y", "z")
        merged = merged_for(old, new)
        old_leaves = list(iter_leaves(old))
        new_leaves = list(iter_leaves(new))
        runs = diff_units(normalize_content(old), normalize_content(new))
        equal_leaves = sum(
            len(list(iter_leaves(run_body(run)))) for run in runs if run.tag is ChangeTag.EQUAL
        )
        assert len(list(iter_leaves(merged))) == len(old_leaves) + len(new_leaves) - equal_leaves

    def test_equal_source_new(self):
        old = Sequence((Text("a"),))
        new = Sequence((underline(Text("a")),))
        runs = diff_units(normalize_content(old), normalize_content(new))
        assert merge_runs(runs, MarkerStyle(equal_source="new")).children[0] == Sequence((underline(Text("a")),))
        assert merge_runs(runs).children[0] == Sequence((Text("a"),))

    def test_custom_marker_style(self):
        style = MarkerStyle(deletion_fill=Color(0, 0, 0), insertion_fill=Color(1, 1, 1), strike_stroke=Stroke(3.0))
        merged = merged_for(words("a"), words("b"), style)
        deleted, inserted = merged.children
        assert deleted.fill == Color(0, 0, 0)
        assert deleted.child.stroke == Stroke(3.0)
        assert inserted.fill == Color(1, 1, 1)

    def test_marker_style_from_options(self):
        options = MarkerOptions(deletion_color=Color(9, 9, 9), strike_thickness_pt=2.0, equal_source="new")
        style = MarkerStyle.from_options(options)
        assert style.deletion_fill == Color(9, 9, 9)
        assert style.strike_stroke == Stroke(thickness_pt=2.0)
        assert style.equal_source == "new"


@pytest.mark.unit
class TestDiffContent:
    """Tests for the pure diff_content entry point."""

    def test_returns_runs_and_statistics(self):
        result = diff_content(sentence("I am here."), sentence("I am there."))
        assert [run.tag for run in result.runs] == [
            ChangeTag.EQUAL,
            ChangeTag.DELETE,
            ChangeTag.INSERT,
            ChangeTag.EQUAL,
        ]
        assert result.statistics.deleted_units == 1
        assert result.statistics.inserted_units == 1

    def test_options_reach_the_merger(self):
        options = DiffOptions(markers=MarkerOptions(insertion_color=Color(0, 0, 255)))
        result = diff_content(Sequence(()), words("new"), options)
        assert result.merged.children[0].fill == Color(0, 0, 255)

    def test_following_mode(self):
        options = DiffOptions(coalesce="following")
        result = diff_content(sentence("I am here."), sentence("I am there."), options)
        assert [run.text for run in result.runs] == ["I am here", "I am there", "."]
