from __future__ import annotations

import pandas as pd
import pytest

from housing_pipeline.clean.backfill import backfill_property_address, preview_backfill
from housing_pipeline.errors import MissingPrecondition
from housing_pipeline.table import PropertyTable


def test_backfill_uses_lowest_unique_id_sibling(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    filled = backfill_property_address(table)

    addr = table.frame.set_index("unique_id")["property_address"]
    assert filled == 1
    assert addr[16918] == "412  ROSEHILL CT, GOODLETTSVILLE"
    assert addr[2045] == "410  ROSEHILL CT, GOODLETTSVILLE"


def test_backfill_leaves_orphans_null(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    backfill_property_address(table)
    assert table.frame.set_index("unique_id")["property_address"].isna()[4000]


def test_no_record_with_addressed_sibling_stays_null(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    backfill_property_address(table)
    pdf = table.frame
    addressed = set(pdf.loc[pdf["property_address"].notna(), "parcel_id"])
    still_null = pdf[pdf["property_address"].isna()]
    assert not still_null["parcel_id"].isin(addressed).any()


def test_backfill_is_idempotent(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    backfill_property_address(table)
    before = table.frame.copy()
    assert backfill_property_address(table) == 0
    pd.testing.assert_frame_equal(before, table.frame)


def test_preview_does_not_mutate(raw_frame: pd.DataFrame) -> None:
    table = PropertyTable(raw_frame)
    preview = preview_backfill(table)

    assert preview["unique_id"].tolist() == [16918]
    assert preview.loc[0, "new_property_address"] == "412  ROSEHILL CT, GOODLETTSVILLE"
    assert table.frame["property_address"].isna().sum() == 2


def test_backfill_requires_property_address() -> None:
    table = PropertyTable(pd.DataFrame({"unique_id": [1], "parcel_id": ["A"]}))
    with pytest.raises(MissingPrecondition, match="address backfill"):
        backfill_property_address(table)
