"""Pytest configuration.

Puts the project root on sys.path so 'import patience' works without an
install, and pins matplotlib to a non-interactive backend.
"""

from __future__ import annotations

import random
import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0)
