"""Domain datatypes for ranked directory entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """One ranked item: a file, or a directory with its summed tree size."""

    name: str
    size: int


@dataclass(frozen=True)
class TreeSize:
    """Result of one tree-size aggregation.

    ``skipped`` counts directories and children that could not be read and
    therefore contributed nothing to ``total``.
    """

    total: int
    skipped: int = 0


__all__ = [
    "Entry",
    "TreeSize",
]
