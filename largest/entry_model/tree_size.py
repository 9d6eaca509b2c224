"""Iterative tree-size aggregation over regular files."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .types import TreeSize

logger = logging.getLogger(__name__)


def measure_tree_size(root: Path) -> TreeSize:
    """Sum regular-file bytes under ``root`` using an explicit LIFO frontier.

    Directory symlinks are not followed. Unreadable directories and children
    are skipped and counted in ``TreeSize.skipped``; no ``OSError`` escapes.
    A non-directory ``root`` measures as its own size when it is a regular
    file and ``0`` otherwise.
    """
    try:
        root_stat = os.stat(root)
    except OSError as exc:
        logger.debug("cannot stat %s: %s", root, exc)
        return TreeSize(total=0, skipped=1)

    if not stat.S_ISDIR(root_stat.st_mode):
        if stat.S_ISREG(root_stat.st_mode):
            return TreeSize(total=int(root_stat.st_size))
        return TreeSize(total=0)

    frontier: list[str] = [os.fspath(root)]
    total = 0
    skipped = 0

    while frontier:
        directory = frontier.pop()
        try:
            with os.scandir(directory) as children:
                for child in children:
                    try:
                        if child.is_dir(follow_symlinks=False):
                            frontier.append(child.path)
                            continue
                        child_stat = child.stat(follow_symlinks=False)
                    except OSError as exc:
                        skipped += 1
                        logger.debug("skipping %s: %s", child.path, exc)
                        continue
                    if stat.S_ISREG(child_stat.st_mode):
                        total += int(child_stat.st_size)
        except OSError as exc:
            skipped += 1
            logger.debug("skipping directory %s: %s", directory, exc)

    return TreeSize(total=total, skipped=skipped)


def compute_tree_size(root: Path) -> int:
    """Return total regular-file bytes reachable under ``root``."""
    return measure_tree_size(root).total


__all__ = [
    "compute_tree_size",
    "measure_tree_size",
]
