#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options_and_sources.py
"""Tests for option validation, sources and the evaluation cache."""

import pytest

from contentdiff.ast.nodes import GREEN, RED
from contentdiff.cache import MemoryCache
from contentdiff.exceptions import SourceFileError
from contentdiff.options import DiffOptions, LayoutOptions, MarkerOptions
from contentdiff.source import Source, decode_source_bytes


@pytest.mark.unit
class TestOptions:
    """Tests for the frozen option classes."""

    def test_defaults(self):
        options = DiffOptions()
        assert options.markers.deletion_color == RED
        assert options.markers.insertion_color == GREEN
        assert options.markers.strike_thickness_pt == 1.5
        assert options.markers.equal_source == "old"
        assert options.layout.max_attempts == 5
        assert options.layout.footer is None
        assert options.coalesce == "word"
        assert not options.parallel_evaluation

    def test_create_updated_returns_copy(self):
        layout = LayoutOptions()
        updated = layout.create_updated(page_width=40)
        assert updated.page_width == 40
        assert layout.page_width == 80

    def test_frozen(self):
        with pytest.raises(AttributeError):
            LayoutOptions().page_width = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: MarkerOptions(strike_thickness_pt=0),
            lambda: MarkerOptions(equal_source="both"),
            lambda: LayoutOptions(max_attempts=0),
            lambda: LayoutOptions(page_width=3),
            lambda: LayoutOptions(page_height=1),
            lambda: DiffOptions(coalesce="char"),
        ],
    )
    def test_invalid_values(self, factory):
        with pytest.raises(ValueError):
            factory()

    def test_create_updated_validates(self):
        with pytest.raises(ValueError):
            LayoutOptions().create_updated(max_attempts=-1)


@pytest.mark.unit
class TestSource:
    """Tests for reading sources."""

    def test_from_path(self, write_file):
        path = write_file("doc.txt", "I am here.")
        source = Source.from_path(path)
        assert source.text == "I am here."
        assert source.name == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceFileError) as exc_info:
            Source.from_path(tmp_path / "missing.txt")
        assert exc_info.value.file_path == str(tmp_path / "missing.txt")

    def test_directory_is_not_a_source(self, tmp_path):
        with pytest.raises(SourceFileError):
            Source.from_path(tmp_path)

    def test_cache_key_depends_on_name_and_text(self):
        assert Source("a", "x").cache_key == Source("a", "x").cache_key
        assert Source("a", "x").cache_key != Source("b", "x").cache_key
        assert Source("a", "x").cache_key != Source("a", "y").cache_key
        assert Source("ab", "c").cache_key != Source("a", "bc").cache_key

    def test_decode_utf8_bom(self):
        assert decode_source_bytes("\ufeffhé".encode("utf-8")) == "hé"

    def test_decode_non_utf8(self):
        data = "Grüße aus Köln, schöne Grüße".encode("latin-1")
        assert "K" in decode_source_bytes(data)


@pytest.mark.unit
class TestMemoryCache:
    """Tests for the LRU evaluation cache."""

    def test_get_and_put(self):
        cache = MemoryCache()
        assert cache.get("k") is None
        cache.put("k", "v")
        assert cache.get("k") == "v"
        assert (cache.hits, cache.misses) == (1, 1)

    def test_least_recently_used_is_evicted(self):
        cache = MemoryCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3
        assert len(cache) == 2

    def test_clear(self):
        cache = MemoryCache()
        cache.put("a", 1)
        cache.clear()
        assert len(cache) == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            MemoryCache(max_entries=0)
