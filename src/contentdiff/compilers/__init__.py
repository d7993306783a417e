#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/compilers/__init__.py
"""Document compilers turning source text into content trees."""

from contentdiff.compilers.markup import MarkupCompiler

__all__ = [
    "MarkupCompiler",
]
