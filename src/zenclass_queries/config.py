"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
resolves the MongoDB target, database name and seed directory from the
environment (and an optional `.env` file at the project root).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_MONGO_URI = "mongodb://127.0.0.1:27017"
DEFAULT_MONGO_DB = "zenclass"
SRV_PREFIX = "mongodb+srv://"


@dataclass(frozen=True)
class Settings:
    """Container for run configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Target MongoDB database name.
        seed_dir: Directory holding the `<collection>.json` seed files.
        store: Store backend, either "mongo" or "memory".
    """
    mongo_uri: str
    mongo_db: str
    seed_dir: Path
    store: str = "mongo"


def display_uri(uri: str) -> str:
    """Return a log-safe rendition of a MongoDB URI.

    Atlas (`mongodb+srv://`) URIs usually embed credentials, so they are
    replaced by a placeholder.
    """
    if uri.startswith(SRV_PREFIX):
        return f"{SRV_PREFIX}<atlas-cluster>"
    return uri


def get_settings(
    uri: str | None = None,
    seed_dir: str | Path | None = None,
    store: str = "mongo",
) -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    The connection URI is taken from `MONGODB_URI`, then `MONGO_URI`, then the
    `uri` argument, then the local default.

    Args:
        uri: Optional URI supplied on the command line.
        seed_dir: Optional seed directory overriding `SEED_DATA_DIR`.
        store: Store backend name ("mongo" or "memory").

    Raises:
        ValueError: if `store` names an unknown backend.
    """
    if store not in ("mongo", "memory"):
        raise ValueError(f"Unknown store backend: {store!r}")

    mongo_uri = (
        os.getenv("MONGODB_URI")
        or os.getenv("MONGO_URI")
        or uri
        or DEFAULT_MONGO_URI
    ).strip()
    mongo_db = os.getenv("MONGO_DB", DEFAULT_MONGO_DB)
    if seed_dir is None:
        seed_dir = os.getenv("SEED_DATA_DIR", "sample-data")

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        seed_dir=Path(seed_dir),
        store=store,
    )
