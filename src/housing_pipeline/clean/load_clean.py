"""Persist the cleaned base table and publish its MongoDB view.

Module notes:
- The table collection is keyed by `unique_id` and fully replaced per row.
- Rows removed by duplicate elimination are deleted from the collection.
- Dates are normalized for BSON compatibility.
"""
from __future__ import annotations

import logging
from typing import Any

from pymongo.database import Database

from housing_pipeline.config import get_settings
from housing_pipeline.db import bulk_replace, create_view, get_client, get_db
from housing_pipeline.schema import VIEW_PROJECTION
from housing_pipeline.table import PropertyTable

log = logging.getLogger(__name__)


def _default_db() -> Database[dict[str, Any]]:
    s = get_settings()
    return get_db(get_client(s.mongo_uri), s.mongo_db)


def load_table_to_mongo(
    table: PropertyTable,
    db: Database[dict[str, Any]] | None = None,
    collection_name: str | None = None,
) -> int:
    """Write the cleaned base table into its collection.

    Args:
        table: Cleaned (finalized) property table.
        db: Target database; defaults to the one from `get_settings()`.
        collection_name: Defaults to `Settings.table_collection`.

    Returns:
        Number of documents written.
    """
    if db is None:
        db = _default_db()
    if collection_name is None:
        collection_name = get_settings().table_collection
    collection = db[collection_name]

    log.info("Loading %d cleaned rows into %s...", len(table), collection_name)

    docs = table.frame.to_dict(orient="records")
    written = bulk_replace(collection, docs, "unique_id")

    ids = [d["unique_id"] for d in docs]
    stale = collection.delete_many({"unique_id": {"$nin": ids}})

    log.info(
        "Clean load complete: written=%d deleted=%d", written, stale.deleted_count
    )
    return written


def publish_view(
    db: Database[dict[str, Any]] | None = None,
    view_name: str | None = None,
    collection_name: str | None = None,
) -> None:
    """Create (or replace) the cleaned view over the table collection."""
    if db is None:
        db = _default_db()
    if view_name is None or collection_name is None:
        s = get_settings()
        view_name = view_name or s.view_name
        collection_name = collection_name or s.table_collection
    create_view(db, view_name, collection_name, VIEW_PROJECTION)
