#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Tests for the command-line interface."""

import json
import logging

import pytest

from contentdiff.cli import (
    EXIT_ERROR,
    EXIT_EVALUATION_ERROR,
    EXIT_FILE_ERROR,
    EXIT_LAYOUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    apply_cli_overrides,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from contentdiff.config import CONFIG_ENV_VAR
from contentdiff.diagnostics import error
from contentdiff.exceptions import (
    ConfigurationError,
    EvaluationError,
    LayoutError,
    RenderingError,
    SourceFileError,
)
from contentdiff.logging_utils import PACKAGE_LOGGER
from contentdiff.options import DiffOptions


@pytest.fixture(autouse=True)
def clean_environment(tmp_path, monkeypatch):
    """Keep config discovery and logging handlers from leaking between tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()


@pytest.fixture
def documents(write_file):
    old = write_file("old.txt", "Hello World! I am here.")
    new = write_file("new.txt", "Hello World! I am there.")
    return str(old), str(new)


@pytest.mark.cli
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception, code",
        [
            (EvaluationError([error("x")]), EXIT_EVALUATION_ERROR),
            (LayoutError([error("x")]), EXIT_LAYOUT_ERROR),
            (RenderingError("x"), EXIT_LAYOUT_ERROR),
            (ConfigurationError("x"), EXIT_VALIDATION_ERROR),
            (SourceFileError("x"), EXIT_FILE_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, code):
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.cli
class TestArguments:
    """Tests for argument parsing and option overrides."""

    def test_overrides(self):
        args = create_parser().parse_args(
            ["a", "b", "--page-width", "40", "--footer", "{page}", "--equal-source", "new", "--parallel"]
        )
        options = apply_cli_overrides(DiffOptions(), args)
        assert options.layout.page_width == 40
        assert options.layout.footer == "{page}"
        assert options.layout.page_height == 60
        assert options.markers.equal_source == "new"
        assert options.parallel_evaluation

    def test_no_overrides_keeps_options(self):
        options = DiffOptions(coalesce="following")
        assert apply_cli_overrides(options, create_parser().parse_args(["a", "b"])) is options

    def test_rejects_non_positive_numbers(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["a", "b", "--max-attempts", "0"])
        assert exc_info.value.code == 2


@pytest.mark.cli
class TestMain:
    """Tests for running the CLI end to end."""

    def test_text_output(self, documents, capsys):
        assert main([*documents, "--color", "never"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Hello World! I am [-here-]{+there+}.\n"

    def test_identical_documents(self, write_file, capsys):
        old = write_file("a.txt", "Hello World! I am here.")
        new = write_file("b.txt", "Hello World!\nI am here.")
        assert main([str(old), str(new)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Hello World! I am here.\n"

    def test_json_output_file(self, documents, tmp_path):
        output = tmp_path / "out" / "diff.json"
        output.parent.mkdir()
        assert main([*documents, "--format", "json", "-o", str(output)]) == EXIT_SUCCESS
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["statistics"]["deleted_units"] == 1

    def test_html_output(self, documents, capsys):
        assert main([*documents, "--format", "html"]) == EXIT_SUCCESS
        assert "<mark style='background-color: #2ecc40'>there</mark>" in capsys.readouterr().out

    def test_footer_converges(self, write_file, capsys):
        path = str(write_file("doc.txt", "a \\ b \\ c"))
        code = main([path, path, "--page-height", "3", "--footer", "{page}/{total}"])
        assert code == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "a\nb\n1/2\n\f\nc\n2/2\n"
        assert "did not converge" not in captured.err

    def test_missing_file(self, documents, capsys):
        assert main([documents[0], "missing.txt"]) == EXIT_FILE_ERROR
        assert "Source file not found" in capsys.readouterr().err

    def test_evaluation_error(self, documents, write_file, capsys):
        bad = write_file("bad.txt", "I am #bogus[here].")
        assert main([documents[0], str(bad)]) == EXIT_EVALUATION_ERROR
        err = capsys.readouterr().err
        assert "unknown function: bogus" in err
        assert "hint:" in err

    def test_layout_error(self, documents, capsys):
        assert main([*documents, "--footer", "{nope}"]) == EXIT_LAYOUT_ERROR
        assert "invalid footer template" in capsys.readouterr().err

    def test_missing_config(self, documents, capsys):
        assert main([*documents, "--config", "missing.toml"]) == EXIT_VALIDATION_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_config_file_is_discovered(self, documents, write_file, capsys):
        write_file(".contentdiff.toml", "[markers]\nequal_source = 'new'\n\n[layout]\npage_width = 12\n")
        assert main(list(documents)) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Hello World!\nI am\n[-here-]{+there+}.\n"

    def test_unwritable_output(self, documents, tmp_path, capsys):
        target = tmp_path / "missing-dir" / "out.txt"
        assert main([*documents, "-o", str(target)]) == EXIT_FILE_ERROR
