#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/renderers/__init__.py
"""Output renderers for merged trees and laid-out documents."""

from contentdiff.renderers.html import HtmlDiffRenderer
from contentdiff.renderers.json import JsonDiffRenderer
from contentdiff.renderers.terminal import TerminalRenderer

__all__ = [
    "HtmlDiffRenderer",
    "JsonDiffRenderer",
    "TerminalRenderer",
]
