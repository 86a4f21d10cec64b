"""Pytest configuration.

Puts the project root on sys.path so the flat modules import without an install.
"""

from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
