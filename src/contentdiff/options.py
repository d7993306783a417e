#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/options.py
"""Option classes for diffing and layout.

All options are frozen dataclasses. Use :meth:`CloneFrozenMixin.create_updated`
to derive a modified copy. Field ``metadata`` carries CLI help text.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from contentdiff.ast.nodes import Color
from contentdiff.constants import (
    DEFAULT_DELETION_COLOR,
    DEFAULT_EQUAL_SOURCE,
    DEFAULT_INSERTION_COLOR,
    DEFAULT_MAX_LAYOUT_ATTEMPTS,
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    DEFAULT_STRIKE_THICKNESS_PT,
    MIN_PAGE_HEIGHT,
    MIN_PAGE_WIDTH,
)

EqualSource = Literal["old", "new"]
CoalesceMode = Literal["word", "following"]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MarkerOptions(CloneFrozenMixin):
    """How inserted and deleted runs are marked in the merged tree.

    Parameters
    ----------
    deletion_color : Color
        Highlight fill around deleted runs
    insertion_color : Color
        Highlight fill around inserted runs
    strike_thickness_pt : float, default = 1.5
        Strikethrough thickness for deleted runs, in points
    equal_source : {"old", "new"}, default = "old"
        Which document unchanged runs are materialized from

    """

    deletion_color: Color = field(
        default=DEFAULT_DELETION_COLOR,
        metadata={"help": "Highlight color for deleted text (#rrggbb)", "importance": "core"},
    )
    insertion_color: Color = field(
        default=DEFAULT_INSERTION_COLOR,
        metadata={"help": "Highlight color for inserted text (#rrggbb)", "importance": "core"},
    )
    strike_thickness_pt: float = field(
        default=DEFAULT_STRIKE_THICKNESS_PT,
        metadata={"help": "Strikethrough thickness for deleted text, in points", "importance": "advanced"},
    )
    equal_source: EqualSource = field(
        default=DEFAULT_EQUAL_SOURCE,
        metadata={
            "help": "Take unchanged text (and its formatting) from the 'old' or the 'new' document",
            "choices": ["old", "new"],
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.strike_thickness_pt <= 0:
            raise ValueError(f"strike_thickness_pt must be positive, got {self.strike_thickness_pt}")
        if self.equal_source not in ("old", "new"):
            raise ValueError(f"equal_source must be 'old' or 'new', got {self.equal_source!r}")


@dataclass(frozen=True)
class LayoutOptions(CloneFrozenMixin):
    """Options for the convergence loop and the reference typesetter.

    Parameters
    ----------
    max_attempts : int, default = 5
        Maximum number of layout passes before accepting a non-converged layout
    page_width : int, default = 80
        Characters per line
    page_height : int, default = 60
        Lines per page, including the footer line when one is configured
    footer : str or None, default = None
        Footer template. ``{page}`` and ``{total}`` are substituted; ``{total}``
        is only known after a first layout pass.

    """

    max_attempts: int = field(
        default=DEFAULT_MAX_LAYOUT_ATTEMPTS,
        metadata={"help": "Maximum number of layout passes", "importance": "advanced"},
    )
    page_width: int = field(
        default=DEFAULT_PAGE_WIDTH,
        metadata={"help": "Characters per line", "importance": "core"},
    )
    page_height: int = field(
        default=DEFAULT_PAGE_HEIGHT,
        metadata={"help": "Lines per page", "importance": "core"},
    )
    footer: Optional[str] = field(
        default=None,
        metadata={"help": "Footer template, e.g. 'Page {page} of {total}'", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.page_width < MIN_PAGE_WIDTH:
            raise ValueError(f"page_width must be at least {MIN_PAGE_WIDTH}, got {self.page_width}")
        if self.page_height < MIN_PAGE_HEIGHT:
            raise ValueError(f"page_height must be at least {MIN_PAGE_HEIGHT}, got {self.page_height}")


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Top-level options for :func:`contentdiff.diff.api.compile_diff`.

    Parameters
    ----------
    markers : MarkerOptions
        Change marker styling
    layout : LayoutOptions
        Layout loop and page geometry
    coalesce : {"word", "following"}, default = "word"
        How spaces are folded into diff units. ``"word"`` attaches each space
        to the word before it. ``"following"`` additionally glues the child
        after a space onto the same unit, so space-separated runs form one unit.
    parallel_evaluation : bool, default = False
        Evaluate the two source documents on two worker threads

    """

    markers: MarkerOptions = field(default_factory=MarkerOptions)
    layout: LayoutOptions = field(default_factory=LayoutOptions)
    coalesce: CoalesceMode = field(
        default="word",
        metadata={"help": "Space coalescing mode for diff units", "choices": ["word", "following"]},
    )
    parallel_evaluation: bool = field(
        default=False,
        metadata={"help": "Evaluate both documents concurrently", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.coalesce not in ("word", "following"):
            raise ValueError(f"coalesce must be 'word' or 'following', got {self.coalesce!r}")


__all__ = [
    "CloneFrozenMixin",
    "CoalesceMode",
    "DiffOptions",
    "EqualSource",
    "LayoutOptions",
    "MarkerOptions",
]
