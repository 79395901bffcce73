"""Pytest configuration.

Goal: make `import kinemalearn` work reliably when running tests without
installing the package (editable install).

This repo uses a flat layout (kinemalearn/ at repo root). Some environments run
pytest with a working directory where repo root isn't on sys.path, leading to
`ModuleNotFoundError: kinemalearn`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


@pytest.fixture()
def rng():
    import numpy as np

    return np.random.default_rng(1234)
