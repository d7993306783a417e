#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/typeset/introspection.py
"""Introspection snapshots for the reference typesetter.

A layout pass reads facts about the previous pass (the page count, for
instance) through a :class:`Constraint`, which remembers every key it was
asked for. The pass then publishes what it actually produced as an
:class:`Introspector`. A pass is valid when every fact it read from the
previous pass still holds in the new snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

_MISSING = object()


@dataclass(frozen=True)
class Introspector:
    """Facts published by one layout pass.

    Parameters
    ----------
    values : dict
        Facts produced by the pass, keyed by name
    queried : frozenset of str
        Keys the pass read from its constraint

    """

    values: dict[str, Any] = field(default_factory=dict)
    queried: frozenset[str] = frozenset()

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class Constraint:
    """Read access to the previous snapshot that records what was read.

    Parameters
    ----------
    previous : Introspector or None
        Snapshot of the previous pass. None on the first pass, in which case
        every query answers with its default.

    """

    def __init__(self, previous: Optional[Introspector] = None) -> None:
        self.previous = previous
        self._queried: set[str] = set()

    def query(self, key: str, default: Any = None) -> Any:
        self._queried.add(key)
        if self.previous is None:
            return default
        return self.previous.get(key, default)

    @property
    def queried(self) -> frozenset[str]:
        return frozenset(self._queried)


def snapshot_satisfies(snapshot: Introspector, constraint: Optional[Introspector]) -> bool:
    """Check whether a pass's assumptions held.

    Parameters
    ----------
    snapshot : Introspector
        Snapshot produced by the pass
    constraint : Introspector or None
        Snapshot the pass was laid out against

    Returns
    -------
    bool
        True when the pass read nothing, or when every key it read has the
        same value in ``snapshot`` as it had in ``constraint``

    """
    if not snapshot.queried:
        return True
    if constraint is None:
        return False
    return all(
        constraint.values.get(key, _MISSING) == snapshot.values.get(key, _MISSING) for key in snapshot.queried
    )


__all__ = [
    "Constraint",
    "Introspector",
    "snapshot_satisfies",
]
