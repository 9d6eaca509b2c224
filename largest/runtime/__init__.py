"""Run-time support: option resolution and concurrent size measurement.

Submodules are imported directly (``largest.runtime.config``,
``largest.runtime.coordinator``) to keep package import side-effect free.
"""

from __future__ import annotations
