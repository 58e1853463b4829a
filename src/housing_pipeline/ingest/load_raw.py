"""Raw-layer loading utilities.

This module validates pandas/Dask partitions against `RawRecord` and upserts
them into the raw MongoDB collection in batches, keyed by `unique_id`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import pandas as pd
from pydantic import ValidationError
from pymongo.collection import Collection

from housing_pipeline.config import get_settings
from housing_pipeline.db import bulk_replace, get_client, normalize_doc
from housing_pipeline.models import RawRecord

log = logging.getLogger(__name__)


def validate_raw_partition(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate partition rows with `RawRecord`.

    Returns:
        A tuple of (list_of_valid_documents, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        rec = normalize_doc(rec)
        try:
            m = RawRecord.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError as e:
            bad += 1
            log.debug("Rejected raw row unique_id=%s: %s", rec.get("unique_id"), e)

    return good, bad


def _load_partition(
    pdf: pd.DataFrame,
    collection: Collection[dict[str, Any]] | None = None,
) -> int:
    """Upsert a pandas partition into the raw collection.

    Notes:
        When no collection is passed (the Dask worker case) this function
        creates and closes its own MongoDB connection for isolation.

    Returns:
        The number of documents written from this partition.
    """
    if pdf is None or len(pdf) == 0:
        return 0

    docs, bad = validate_raw_partition(pdf)
    if bad:
        log.warning("Skipped %d invalid raw row(s) in partition", bad)

    ingest_ts = datetime.now(timezone.utc)
    for d in docs:
        d["ingest_ts"] = ingest_ts

    if collection is not None:
        return bulk_replace(collection, docs, "unique_id")

    settings = get_settings()
    client = get_client(settings.mongo_uri)
    try:
        coll = client[settings.mongo_db][settings.raw_collection]
        return bulk_replace(coll, docs, "unique_id")
    finally:
        client.close()


def load_raw_to_mongo(ddf: Any) -> int:
    """Load a Dask DataFrame into the raw collection using partitioned upserts.

    Args:
        ddf: Dask DataFrame with record columns (see `read_housing_csv`).

    Returns:
        Total number of documents written.
    """
    row_count = ddf.shape[0].compute()
    log.info("Loading %d rows into the raw collection...", row_count)

    counts = ddf.map_partitions(
        _load_partition,
        meta=("written", "int"),
    ).compute()

    total = int(counts.sum())
    log.info("Loaded %d raw documents.", total)
    return total
