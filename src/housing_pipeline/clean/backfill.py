"""Address backfill: fill null property addresses from sibling records.

Records sharing a `parcel_id` describe the same physical parcel, so a missing
`property_address` can be copied from any sibling that has one. When several
siblings qualify, the one with the smallest `unique_id` is used.
"""
from __future__ import annotations

import logging

import pandas as pd

from housing_pipeline.table import PropertyTable

log = logging.getLogger(__name__)

PASS_NAME = "address backfill"


def sibling_address_index(pdf: pd.DataFrame) -> pd.Series:
    """Map `parcel_id` -> address of the lowest-`unique_id` record with one."""
    donors = pdf[pdf["parcel_id"].notna() & pdf["property_address"].notna()]
    donors = donors.sort_values("unique_id", kind="stable")
    donors = donors.drop_duplicates(subset="parcel_id", keep="first")
    return donors.set_index("parcel_id")["property_address"]


def preview_backfill(table: PropertyTable) -> pd.DataFrame:
    """Return the rows the backfill would change, without mutating the table.

    Returns:
        DataFrame with columns `unique_id`, `parcel_id`, `property_address`
        (currently null) and `new_property_address`.
    """
    table.require(PASS_NAME, "unique_id", "parcel_id", "property_address")
    pdf = table.frame
    index = sibling_address_index(pdf)

    missing = pdf.loc[pdf["property_address"].isna(), ["unique_id", "parcel_id", "property_address"]]
    out = missing.copy()
    out["new_property_address"] = out["parcel_id"].map(index)
    return out[out["new_property_address"].notna()].reset_index(drop=True)


def backfill_property_address(table: PropertyTable) -> int:
    """Fill null `property_address` values in place from same-parcel siblings.

    A record whose parcel has no addressed sibling keeps its null address.

    Returns:
        Number of records whose address was filled.
    """
    table.require(PASS_NAME, "unique_id", "parcel_id", "property_address")
    pdf = table.frame
    index = sibling_address_index(pdf)

    mask = pdf["property_address"].isna()
    fills = pdf.loc[mask, "parcel_id"].map(index)
    fills = fills[fills.notna()]

    if not fills.empty:
        pdf.loc[fills.index, "property_address"] = fills

    log.info(
        "Backfilled %d of %d null property addresses", len(fills), int(mask.sum())
    )
    return len(fills)
