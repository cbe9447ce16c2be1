"""Seed data source.

Each collection is seeded from `<name>.json` in the seed directory. Files are
decoded with `bson.json_util`, so MongoDB extended JSON such as
`{"$date": "2020-10-15T00:00:00Z"}` arrives as native values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from bson import json_util

log = logging.getLogger(__name__)

class SeedDataError(ValueError):
    """A seed file exists but does not hold a JSON array of objects."""


SEED_COLLECTIONS: tuple[str, ...] = (
    "users",
    "codekata",
    "attendance",
    "topics",
    "tasks",
    "company_drives",
    "mentors",
)


def seed_path(seed_dir: Path, name: str) -> Path:
    return seed_dir / f"{name}.json"


def read_seed(seed_dir: Path, name: str) -> list[dict[str, Any]]:
    """Read one seed file and return its records.

    Args:
        seed_dir: Directory containing the seed files.
        name: Collection name (file stem).

    Returns:
        The list of records held by the file.

    Raises:
        OSError: if the file is missing or unreadable.
        SeedDataError: if the file is not a JSON array of objects.
    """
    path = seed_path(seed_dir, name)
    try:
        docs = json_util.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise SeedDataError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(docs, list):
        raise SeedDataError(f"{path} must contain a JSON array, got {type(docs).__name__}")
    if not all(isinstance(d, dict) for d in docs):
        raise SeedDataError(f"{path} must contain only JSON objects")

    log.debug("Read %d records from %s", len(docs), path)
    return docs
