#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/conftest.py
"""Pytest configuration and shared fixtures for the contentdiff test suite."""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from contentdiff.compilers.markup import MarkupCompiler
from contentdiff.diagnostics import Tracer
from contentdiff.source import Source

settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def tracer() -> Tracer:
    return Tracer()


@pytest.fixture
def compile_markup(tracer):
    """Evaluate a markup string with a fresh compiler."""
    compiler = MarkupCompiler()

    def _compile(text: str, name: str = "doc"):
        return compiler.evaluate(Source(name, text), tracer)

    return _compile


@pytest.fixture
def write_file(tmp_path: Path):
    """Write a text file below the test's temporary directory."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
