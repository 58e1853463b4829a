"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the MongoDB location and collection names from the environment (a `.env`
file at the project root is loaded first).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Target MongoDB database name.
        raw_collection: Collection holding ingested, uncleaned records.
        table_collection: Collection holding the cleaned base table.
        view_name: Name of the MongoDB view exposing the cleaned projection.
        data_dir: Local directory for CSV inputs and exports.
    """
    mongo_uri: str
    mongo_db: str
    raw_collection: str
    table_collection: str
    view_name: str
    data_dir: Path


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if a collection name is blank or the view name collides
            with one of the collections.
    """
    mongo_uri = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    mongo_db = os.getenv("MONGO_DB", "housing")
    raw_collection = os.getenv("RAW_COLLECTION", "raw_housing").strip()
    table_collection = os.getenv("TABLE_COLLECTION", "nashville_housing").strip()
    view_name = os.getenv("VIEW_NAME", "nashville_housing_cleaned").strip()
    data_dir = Path(os.getenv("HOUSING_DATA_DIR", "data"))

    if not (raw_collection and table_collection and view_name):
        raise RuntimeError(
            "RAW_COLLECTION, TABLE_COLLECTION and VIEW_NAME must not be blank."
        )
    if view_name in (raw_collection, table_collection):
        raise RuntimeError(
            f"VIEW_NAME {view_name!r} must differ from the raw and table collections."
        )

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        raw_collection=raw_collection,
        table_collection=table_collection,
        view_name=view_name,
        data_dir=data_dir,
    )
