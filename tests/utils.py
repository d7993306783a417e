#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/utils.py
"""Helpers shared by the test modules."""

from contentdiff.ast import Sequence, Space, Text
from contentdiff.ast.nodes import Node


def words(*parts: str) -> Sequence:
    """Build a Sequence of Text nodes separated by Space nodes."""
    children: list[Node] = []
    for index, part in enumerate(parts):
        if index:
            children.append(Space())
        children.append(Text(part))
    return Sequence(tuple(children))


def sentence(text: str) -> Sequence:
    """Split on single spaces and detach a trailing period, like the markup compiler does."""
    children: list[Node] = []
    tokens = text.split(" ") if text else []
    for index, token in enumerate(tokens):
        if index:
            children.append(Space())
        if token.endswith(".") and len(token) > 1:
            children.append(Text(token[:-1]))
            children.append(Text("."))
        else:
            children.append(Text(token))
    return Sequence(tuple(children))
