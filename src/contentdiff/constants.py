#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/constants.py
"""Default values shared across contentdiff."""

from __future__ import annotations

from contentdiff.ast.nodes import GREEN, RED

# Diff markers
DEFAULT_DELETION_COLOR = RED
DEFAULT_INSERTION_COLOR = GREEN
DEFAULT_STRIKE_THICKNESS_PT = 1.5
DEFAULT_EQUAL_SOURCE = "old"

# Convergence loop
DEFAULT_MAX_LAYOUT_ATTEMPTS = 5
NON_CONVERGENCE_MESSAGE = "layout did not converge within {attempts} attempts"
NON_CONVERGENCE_HINT = "check if any states or queries are updating themselves"

# Reference typesetter
DEFAULT_PAGE_WIDTH = 80
DEFAULT_PAGE_HEIGHT = 60
MIN_PAGE_WIDTH = 8
MIN_PAGE_HEIGHT = 2

# Evaluation cache
DEFAULT_CACHE_MAX_ENTRIES = 128

# Configuration discovery
CONFIG_FILENAMES = [".contentdiff.toml", ".contentdiff.yaml", ".contentdiff.yml", ".contentdiff.json"]
PYPROJECT_SECTION = "contentdiff"
