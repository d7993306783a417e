#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_config.py
"""Tests for configuration loading and discovery."""

import pytest

from contentdiff.ast.nodes import Color
from contentdiff.config import (
    CONFIG_ENV_VAR,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    merge_configs,
    options_from_config,
)
from contentdiff.exceptions import ConfigurationError, ValidationError

TOML_CONFIG = """
coalesce = "following"

[markers]
deletion_color = "#aa0000"

[layout]
page_width = 60
footer = "Page {page} of {total}"
"""


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty working directory and home, and no config env var."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return work, home


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_toml(self, write_file):
        config = load_config_file(write_file("c.toml", TOML_CONFIG))
        assert config["coalesce"] == "following"
        assert config["layout"]["page_width"] == 60

    def test_yaml(self, write_file):
        config = load_config_file(write_file("c.yaml", "layout:\n  page_width: 50\n"))
        assert config == {"layout": {"page_width": 50}}

    def test_json(self, write_file):
        config = load_config_file(write_file("c.json", '{"parallel_evaluation": true}'))
        assert config == {"parallel_evaluation": True}

    def test_pyproject_section(self, write_file):
        path = write_file("pyproject.toml", "[project]\nname = 'x'\n\n[tool.contentdiff.layout]\npage_width = 40\n")
        assert load_config_file(path) == {"layout": {"page_width": 40}}

    def test_pyproject_without_section(self, write_file):
        assert load_config_file(write_file("pyproject.toml", "[project]\nname = 'x'\n")) == {}

    def test_empty_yaml(self, write_file):
        assert load_config_file(write_file("c.yaml", "")) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_format(self, write_file):
        with pytest.raises(ConfigurationError, match="Unsupported config file format"):
            load_config_file(write_file("c.ini", "[x]"))

    @pytest.mark.parametrize(
        "name, content",
        [("c.toml", "layout = ["), ("c.yaml", "a: [1"), ("c.json", "{not json")],
    )
    def test_malformed(self, write_file, name, content):
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config_file(write_file(name, content))

    def test_not_a_mapping(self, write_file):
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config_file(write_file("c.yaml", "- a\n- b\n"))

    def test_configuration_error_is_validation_error(self, tmp_path):
        with pytest.raises(ValidationError):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
class TestDiscovery:
    """Tests for config discovery and priority."""

    def test_found_in_parent(self, tmp_path, write_file):
        config = write_file("project/.contentdiff.toml", TOML_CONFIG)
        nested = tmp_path / "project" / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config

    def test_pyproject_needs_section(self, tmp_path, write_file):
        write_file("project/pyproject.toml", "[project]\nname = 'x'\n")
        assert discover_config_file(tmp_path / "project", home=tmp_path / "nohome") is None

        pyproject = write_file("project/pyproject.toml", "[tool.contentdiff]\ncoalesce = 'word'\n")
        assert discover_config_file(tmp_path / "project", home=tmp_path / "nohome") == pyproject

    def test_home_fallback(self, tmp_path, write_file):
        (tmp_path / "work").mkdir()
        home_config = write_file("home/.contentdiff.yaml", "coalesce: word\n")
        assert discover_config_file(tmp_path / "work", home=tmp_path / "home") == home_config

    def test_no_config_gives_empty_mapping(self, isolated):
        assert load_config_with_priority() == {}

    def test_discovered_in_working_directory(self, isolated):
        work, _ = isolated
        (work / ".contentdiff.json").write_text('{"coalesce": "following"}', encoding="utf-8")
        assert load_config_with_priority() == {"coalesce": "following"}

    def test_env_var_beats_discovery(self, isolated, monkeypatch):
        work, home = isolated
        (work / ".contentdiff.json").write_text('{"coalesce": "following"}', encoding="utf-8")
        env_config = home / "env.yaml"
        env_config.write_text("coalesce: word\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_config))
        assert load_config_with_priority() == {"coalesce": "word"}

    def test_explicit_path_beats_env_var(self, isolated, monkeypatch, write_file):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(write_file("env.json", '{"coalesce": "word"}')))
        explicit = write_file("explicit.json", '{"coalesce": "following"}')
        assert load_config_with_priority(str(explicit)) == {"coalesce": "following"}


@pytest.mark.unit
class TestOptionsFromConfig:
    """Tests for converting configuration to DiffOptions."""

    def test_empty_config_gives_defaults(self):
        options = options_from_config({})
        assert options.coalesce == "word"
        assert options.layout.page_width == 80

    def test_full_config(self, write_file):
        options = options_from_config(load_config_file(write_file("c.toml", TOML_CONFIG)))
        assert options.coalesce == "following"
        assert options.markers.deletion_color == Color(170, 0, 0)
        assert options.layout.page_width == 60
        assert options.layout.footer == "Page {page} of {total}"

    @pytest.mark.parametrize(
        "config, message",
        [
            ({"colour": "red"}, "Unknown top-level option"),
            ({"markers": {"color": "#fff"}}, "Unknown markers option"),
            ({"layout": {"width": 10}}, "Unknown layout option"),
            ({"layout": {"page_width": 2}}, "Invalid configuration"),
            ({"markers": {"deletion_color": "red"}}, "Invalid configuration"),
            ({"coalesce": "char"}, "Invalid configuration"),
        ],
    )
    def test_invalid(self, config, message):
        with pytest.raises(ConfigurationError, match=message):
            options_from_config(config)

    def test_merge_configs(self):
        merged = merge_configs({"layout": {"page_width": 60}, "coalesce": "word"}, {"layout": {"footer": "{page}"}})
        assert merged == {"layout": {"page_width": 60, "footer": "{page}"}, "coalesce": "word"}
