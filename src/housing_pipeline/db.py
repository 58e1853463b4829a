"""MongoDB helpers: clients, batched replace-upserts and standing views.

Centralizes creation of Mongo clients, the bulk write utility used by the
raw and cleaned loaders, and creation of the cleaned MongoDB view.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable
from pymongo import MongoClient, ReplaceOne
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

import certifi
import pandas as pd

log = logging.getLogger(__name__)

BATCH_SIZE = 1000


def get_client(uri: str) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    TLS with the certifi CA bundle is enabled for `mongodb+srv://` URIs
    (hosted clusters); local URIs connect in plain text.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
    }
    if uri.startswith("mongodb+srv://"):
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


def normalize_doc(doc: dict[str, Any]) -> dict[str, Any]:
    """Convert non-BSON-safe values (dates, NaN/NaT, numpy scalars) in place."""
    for k, v in list(doc.items()):
        if v is None or isinstance(v, str):
            continue
        if v is pd.NaT:
            doc[k] = None
        elif isinstance(v, pd.Timestamp):
            doc[k] = v.to_pydatetime()
        elif isinstance(v, datetime):
            continue
        elif isinstance(v, date):
            doc[k] = datetime.combine(v, datetime.min.time())
        elif pd.isna(v):
            doc[k] = None
        elif hasattr(v, "item"):
            doc[k] = v.item()
    return doc


def _chunks(data: list[Any], size: int) -> Iterable[list[Any]]:
    for i in range(0, len(data), size):
        yield data[i : i + size]


def bulk_replace(
    collection: Collection[dict[str, Any]],
    docs: Iterable[dict[str, Any]],
    key_field: str,
    batch_size: int = BATCH_SIZE,
) -> int:
    """Replace-upsert documents using `key_field` as the selector.

    Whole documents are replaced so that columns dropped during cleaning do
    not linger in previously stored documents. A failed batch is logged and
    skipped.

    Args:
        collection: Target PyMongo collection.
        docs: Iterable of document dictionaries.
        key_field: Document key to use for the selector.
        batch_size: Number of ops per bulk_write call.

    Returns:
        Number of documents written (upserted or modified) in successful batches.
    """
    ops = [
        ReplaceOne({key_field: d[key_field]}, normalize_doc(dict(d)), upsert=True)
        for d in docs
        if key_field in d
    ]
    written = 0

    for batch in _chunks(ops, batch_size):
        try:
            result = collection.bulk_write(batch, ordered=False)
            written += result.upserted_count + result.modified_count
        except PyMongoError as e:
            log.warning("bulk_replace batch failed on %s: %s", collection.name, e)

    return written


def view_pipeline(projection: list[tuple[str, str]]) -> list[dict[str, Any]]:
    """Aggregation pipeline renaming `(source, alias)` pairs in the given order."""
    return [{"$replaceRoot": {"newRoot": {alias: f"${src}" for src, alias in projection}}}]


def create_view(
    db: Database[dict[str, Any]],
    name: str,
    source: str,
    projection: list[tuple[str, str]],
) -> None:
    """(Re)create a MongoDB view `name` over collection `source`.

    MongoDB evaluates views on read, so the view always reflects the current
    contents of `source`.
    """
    if name in db.list_collection_names():
        db.drop_collection(name)
    db.create_collection(name, viewOn=source, pipeline=view_pipeline(projection))
    log.info("Created view %s on %s", name, source)
