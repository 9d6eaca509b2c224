"""Collect ranked entries for the immediate children of a target directory."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path

from .entry_model.tree_size import compute_tree_size
from .entry_model.types import Entry
from .runtime.coordinator import DirectorySizeCoordinator, ResultCollection

logger = logging.getLogger(__name__)


def collect_entries(
    target: Path,
    include_dirs: bool,
    *,
    max_workers: int | None = None,
    measure: Callable[[Path], int] = compute_tree_size,
) -> list[Entry]:
    """List ``target`` children as ``Entry`` values.

    Only a failure to list ``target`` itself, or a stat failure on a child,
    raises ``OSError``. With ``include_dirs`` a child that vanished between
    listing and stat is skipped instead, and each subdirectory is measured by
    its own concurrent task; the call returns after all of them finish.
    Without ``include_dirs`` subdirectories are left out entirely.

    The returned order is unspecified.
    """
    with os.scandir(target) as scanned:
        names = [child.name for child in scanned]

    results = ResultCollection()
    coordinator = DirectorySizeCoordinator(results, measure=measure, max_workers=max_workers)

    try:
        for name in names:
            child_path = Path(target) / name
            try:
                child_stat = os.stat(child_path)
            except FileNotFoundError:
                if not include_dirs:
                    raise
                logger.debug("skipping vanished entry %s", child_path)
                continue

            if not stat.S_ISDIR(child_stat.st_mode):
                results.append(Entry(name=name, size=int(child_stat.st_size)))
            elif include_dirs:
                coordinator.submit(name, child_path)
    except BaseException:
        coordinator.abandon()
        raise

    entries = coordinator.join()
    logger.debug(
        "collected %d entries from %s (%d measured directories)",
        len(entries),
        target,
        coordinator.submitted,
    )
    return entries


__all__ = [
    "collect_entries",
]
