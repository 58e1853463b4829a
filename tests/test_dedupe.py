from __future__ import annotations

import pandas as pd

from housing_pipeline.clean.dedupe import drop_duplicate_sales, rank_duplicates
from housing_pipeline.schema import DUPLICATE_KEY
from housing_pipeline.table import PropertyTable

from conftest import make_record


def test_keeps_lowest_unique_id_per_group(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    removed = drop_duplicate_sales(table)

    ids = set(table.frame["unique_id"])
    assert removed == 1
    assert 3000 in ids
    assert 3001 not in ids


def test_key_tuple_unique_after_dedupe() -> None:
    pdf = pd.DataFrame([
        make_record(9, parcel_id="P", legal_reference="L"),
        make_record(3, parcel_id="P", legal_reference="L"),
        make_record(5, parcel_id="P", legal_reference="L"),
        make_record(7, parcel_id="P", legal_reference="L", sale_price=1),
    ])
    table = PropertyTable(pdf)
    assert drop_duplicate_sales(table) == 2

    assert sorted(table.frame["unique_id"]) == [3, 7]
    assert not table.frame.duplicated(subset=DUPLICATE_KEY).any()


def test_null_key_values_group_together() -> None:
    pdf = pd.DataFrame([
        make_record(1, parcel_id="P", property_address=None, legal_reference="L"),
        make_record(2, parcel_id="P", property_address=None, legal_reference="L"),
    ])
    table = PropertyTable(pdf)
    assert drop_duplicate_sales(table) == 1
    assert table.frame["unique_id"].tolist() == [1]


def test_rank_is_aligned_to_table_rows() -> None:
    pdf = pd.DataFrame([
        make_record(20, parcel_id="P", legal_reference="L"),
        make_record(10, parcel_id="P", legal_reference="L"),
        make_record(30, parcel_id="Q", legal_reference="L"),
    ])
    rank = rank_duplicates(PropertyTable(pdf))
    assert rank.tolist() == [2, 1, 1]
