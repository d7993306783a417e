#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_diff_units.py
"""Tests for normalizing content trees into diff units."""

import pytest
from utils import words

from contentdiff.ast import LineBreak, Raw, Sequence, Space, Text
from contentdiff.ast.nodes import underline
from contentdiff.ast.utils import plain_text
from contentdiff.diff.units import DiffUnit, normalize_content
from contentdiff.exceptions import MalformedContentError


def texts(units):
    return [unit.text for unit in units]


@pytest.mark.unit
class TestNormalizeContent:
    """Tests for normalize_content."""

    def test_spaces_attach_to_previous_unit(self):
        assert texts(normalize_content(words("I", "am", "here"))) == ["I ", "am ", "here"]

    def test_punctuation_is_its_own_unit(self):
        tree = Sequence((Text("I"), Space(), Text("am"), Space(), Text("here"), Text(".")))
        assert texts(normalize_content(tree)) == ["I ", "am ", "here", "."]

    def test_consecutive_spaces_fold_into_one_unit(self):
        tree = Sequence((Text("a"), Space(), Space(), Text("b")))
        assert texts(normalize_content(tree)) == ["a  ", "b"]

    def test_following_mode_glues_the_next_child(self):
        tree = Sequence((Text("I"), Space(), Text("am"), Space(), Text("here"), Text(".")))
        assert texts(normalize_content(tree, coalesce="following")) == ["I am here", "."]

    def test_leading_space_is_malformed(self):
        with pytest.raises(MalformedContentError) as exc_info:
            normalize_content(Sequence((Space(), Text("a"))))
        assert exc_info.value.index == 0

    def test_empty_sequence_has_no_units(self):
        assert normalize_content(Sequence(())) == []

    def test_non_sequence_is_a_single_unit(self):
        units = normalize_content(underline(Text("alone")))
        assert len(units) == 1
        assert units[0].text == "alone"
        assert units[0].nodes == (underline(Text("alone")),)

    def test_line_breaks_and_raw_are_units(self):
        tree = Sequence((Text("a"), LineBreak(), Raw("x y")))
        assert texts(normalize_content(tree)) == ["a", "\n", "x y"]

    def test_units_reference_original_nodes(self):
        first = underline(Text("I"))
        tree = Sequence((first, Space(), Text("am")))
        units = normalize_content(tree)
        assert units[0].nodes[0] is first
        assert units[0].nodes[1] == Space()
        assert units[0].arena is tree.children

    def test_custom_text_rendering(self):
        tree = Sequence((Text("a"), Space(), LineBreak(), Text("B")))

        def text_of(node):
            return "" if isinstance(node, LineBreak) else plain_text(node).lower()

        assert texts(normalize_content(tree, text_of=text_of)) == ["a ", "", "b"]

    def test_custom_text_rendering_of_single_node(self):
        units = normalize_content(Text("Alone"), text_of=lambda node: plain_text(node).upper())
        assert texts(units) == ["ALONE"]

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            normalize_content(words("a"), coalesce="sentence")  # type: ignore[arg-type]


@pytest.mark.unit
class TestDiffUnit:
    """Tests for the DiffUnit handle."""

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            DiffUnit(arena=(Text("a"),), start=0, stop=2, text="a")

    def test_extended_past_end(self):
        unit = DiffUnit.single((Text("a"),), 0)
        with pytest.raises(IndexError):
            unit.extended()

    def test_equality_ignores_decorations(self):
        left = DiffUnit.single((Text("a"),), 0)
        right = DiffUnit.single((underline(Text("a")),), 0)
        assert left == right
        assert hash(left) == hash(right)

    def test_inequality(self):
        assert DiffUnit.single((Text("a"),), 0) != DiffUnit.single((Text("b"),), 0)

    def test_node_count(self):
        arena = (Text("a"), Space())
        assert DiffUnit.single(arena, 0).extended().node_count == 2
