"""largest: rank the biggest files and directories of one directory.

Only ``main`` is exported here; importing the package stays cheap because the
collector, threads and config loading live behind ``largest.cli``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the ``largest`` command (imports ``largest.cli`` on first use)."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
