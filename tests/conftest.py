"""Make ``import largest`` pick up this checkout when running pytest.

Without an editable install the repository root may be missing from
sys.path, so it is prepended here.
"""

from __future__ import annotations

import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))
