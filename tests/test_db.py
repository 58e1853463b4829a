from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd

from housing_pipeline.clean.load_clean import load_table_to_mongo, publish_view
from housing_pipeline.clean.pipeline import clean_table
from housing_pipeline.db import bulk_replace, normalize_doc, view_pipeline
from housing_pipeline.schema import VIEW_COLUMNS, VIEW_PROJECTION

from fakes import FakeCollection, FakeDatabase


def test_normalize_doc_makes_values_bson_safe() -> None:
    doc = normalize_doc({
        "d": date(2013, 4, 9),
        "ts": pd.Timestamp("2013-04-09 10:00"),
        "nat": pd.NaT,
        "nan": float("nan"),
        "i": np.int64(7),
        "s": "x",
        "n": None,
    })
    assert doc["d"] == datetime(2013, 4, 9)
    assert doc["ts"] == datetime(2013, 4, 9, 10)
    assert doc["nat"] is None
    assert doc["nan"] is None
    assert doc["i"] == 7 and type(doc["i"]) is int
    assert doc["s"] == "x"
    assert doc["n"] is None


def test_bulk_replace_batches_and_skips_keyless_docs() -> None:
    coll = FakeCollection()
    docs = [{"unique_id": i, "v": i} for i in range(5)] + [{"v": 99}]
    assert bulk_replace(coll, docs, "unique_id", batch_size=2) == 5
    assert coll.batches == 3
    assert bulk_replace(coll, docs[:2], "unique_id") == 2
    assert len(coll.docs) == 5


def test_view_pipeline_renames_in_order() -> None:
    (stage,) = view_pipeline(VIEW_PROJECTION)
    root = stage["$replaceRoot"]["newRoot"]
    assert list(root) == VIEW_COLUMNS
    assert root["property_city"] == "$property_split_city"
    assert root["sale_date"] == "$new_sale_date"


def test_load_table_replaces_rows_and_deletes_stale(raw_frame: pd.DataFrame) -> None:
    db = FakeDatabase()
    db["housing"].docs[3001] = {"unique_id": 3001, "property_address": "stale"}

    table, _, _ = clean_table(raw_frame)
    written = load_table_to_mongo(table, db, "housing")

    stored = db["housing"].docs
    assert written == 5
    assert sorted(stored) == [2001, 2045, 3000, 4000, 16918]
    assert "property_address" not in stored[2045]
    assert stored[16918]["new_sale_date"] == datetime(2014, 4, 9)


def test_publish_view_recreates_existing_view() -> None:
    db = FakeDatabase()
    db.views["cleaned"] = {"viewOn": "old"}

    publish_view(db, "cleaned", "housing")

    assert db.views["cleaned"]["viewOn"] == "housing"
    assert db.views["cleaned"]["pipeline"] == view_pipeline(VIEW_PROJECTION)
