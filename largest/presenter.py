"""Sort collected entries and print the largest ones with humanized sizes."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from .entry_model.types import Entry

DECIMAL_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB")
BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_size(size: int, binary: bool = False) -> str:
    """Humanize a byte count.

    Decimal (base 1000) by default, IEC (base 1024) with ``binary``. Values
    below 10 print as plain bytes; scaled values keep one decimal only while
    below 10, e.g. ``"1.5 kB"`` and ``"15 kB"``.
    """
    if size < 10:
        return f"{size} B"

    base = 1024 if binary else 1000
    units = BINARY_UNITS if binary else DECIMAL_UNITS
    exponent = 0
    while exponent < len(units) - 1 and size >= base ** (exponent + 1):
        exponent += 1

    value = int((size / base**exponent) * 10 + 0.5) / 10
    if value < 10:
        return f"{value:.1f} {units[exponent]}"
    return f"{value:.0f} {units[exponent]}"


def sort_largest(entries: Iterable[Entry]) -> list[Entry]:
    """Return entries by descending size; ties keep their collection order."""
    return sorted(entries, key=lambda entry: entry.size, reverse=True)


def top_entries(entries: Iterable[Entry], lines: int) -> list[Entry]:
    """Return at most ``lines`` of the largest entries."""
    return sort_largest(entries)[: max(0, lines)]


def render_largest(entries: Iterable[Entry], lines: int, binary: bool = False) -> str:
    out: list[str] = []
    for entry in top_entries(entries, lines):
        out.append(f"{entry.name} {format_size(entry.size, binary=binary)}\n")
    return "".join(out)


def print_largest(
    entries: Iterable[Entry],
    lines: int,
    binary: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Write ``<name> <size>`` rows for the top ``lines`` entries."""
    out = stream if stream is not None else sys.stdout
    out.write(render_largest(entries, lines, binary=binary))


__all__ = [
    "format_size",
    "sort_largest",
    "top_entries",
    "render_largest",
    "print_largest",
]
