from __future__ import annotations

import pandas as pd

from housing_pipeline.clean.explore import (
    count_missing_addresses,
    sold_as_vacant_counts,
    split_preview,
)


def test_count_missing_addresses(raw_frame: pd.DataFrame) -> None:
    assert count_missing_addresses(raw_frame) == 2


def test_sold_as_vacant_counts_ascending() -> None:
    pdf = pd.DataFrame({"sold_as_vacant": ["No", "No", "No", "Y", "Yes", "Yes", "N", "N"]})
    out = sold_as_vacant_counts(pdf)
    assert list(out.columns) == ["sold_as_vacant", "count"]
    assert out["count"].tolist() == sorted(out["count"].tolist())
    assert dict(zip(out["sold_as_vacant"], out["count"]))["No"] == 3


def test_split_preview_leaves_input_untouched(raw_frame: pd.DataFrame) -> None:
    before = raw_frame.copy()
    out = split_preview(raw_frame)

    assert len(out) == len(raw_frame)
    assert out.loc[0, "property_split_city"] == "GOODLETTSVILLE"
    assert out.loc[5, "owner_split_city"] == "CLARKSVILLE"
    pd.testing.assert_frame_equal(before, raw_frame)
