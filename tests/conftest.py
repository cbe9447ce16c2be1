from __future__ import annotations

from pathlib import Path

import pytest

from zenclass_queries.db import MemoryStore

SAMPLE_DIR = Path(__file__).resolve().parents[1] / "sample-data"


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sample_dir() -> Path:
    return SAMPLE_DIR
