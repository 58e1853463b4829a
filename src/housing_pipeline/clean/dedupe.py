"""Duplicate elimination by rank within the duplicate key.

Rows agreeing on (`parcel_id`, `property_address`, `sale_price`, `sale_date`,
`legal_reference`) are ranked by `unique_id`; every row ranked after the first
is deleted. Null key values group together.
"""
from __future__ import annotations

import logging

import pandas as pd

from housing_pipeline.schema import DUPLICATE_KEY
from housing_pipeline.table import PropertyTable

log = logging.getLogger(__name__)

PASS_NAME = "duplicate elimination"


def rank_duplicates(table: PropertyTable) -> pd.Series:
    """Return the 1-based rank of each row within its duplicate group.

    The returned Series is aligned to the table's index.
    """
    table.require(PASS_NAME, "unique_id", *DUPLICATE_KEY)
    ordered = table.frame.sort_values("unique_id", kind="stable")
    rank = ordered.groupby(DUPLICATE_KEY, dropna=False, sort=False).cumcount() + 1
    return rank.reindex(table.frame.index).rename("row_num")


def drop_duplicate_sales(table: PropertyTable) -> int:
    """Delete every row ranked above 1 within its duplicate group.

    Returns:
        Number of rows removed.
    """
    rank = rank_duplicates(table)
    doomed = rank.index[rank > 1]

    if len(doomed):
        table.frame.drop(index=doomed, inplace=True)
        table.frame.reset_index(drop=True, inplace=True)

    log.info("Removed %d duplicate rows, %d remain", len(doomed), len(table.frame))
    return len(doomed)
