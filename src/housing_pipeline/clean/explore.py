"""Read-only exploratory queries over a raw or partly cleaned table."""
from __future__ import annotations

import pandas as pd

from housing_pipeline.clean.transform import split_owner_address, split_property_address


def count_missing_addresses(pdf: pd.DataFrame) -> int:
    """Number of records with a null `property_address`."""
    return int(pdf["property_address"].isna().sum())


def sold_as_vacant_counts(pdf: pd.DataFrame) -> pd.DataFrame:
    """Distinct `sold_as_vacant` values with their counts, least frequent first."""
    counts = (
        pdf["sold_as_vacant"]
        .value_counts()
        .rename_axis("sold_as_vacant")
        .reset_index(name="count")
    )
    return counts.sort_values("count", kind="stable").reset_index(drop=True)


def split_preview(pdf: pd.DataFrame) -> pd.DataFrame:
    """Show how both address splitters would split each record.

    Returns:
        DataFrame with `unique_id`, the two raw address columns and the five
        split parts. `pdf` is not modified.
    """
    prop = [split_property_address(v) for v in pdf["property_address"]]
    owner = [split_owner_address(v) for v in pdf["owner_address"]]
    return pd.DataFrame(
        {
            "unique_id": pdf["unique_id"].to_numpy(),
            "property_address": pdf["property_address"].to_numpy(),
            "property_split_address": [p[0] for p in prop],
            "property_split_city": [p[1] for p in prop],
            "owner_address": pdf["owner_address"].to_numpy(),
            "owner_split_address": [o[0] for o in owner],
            "owner_split_city": [o[1] for o in owner],
            "owner_split_state": [o[2] for o in owner],
        }
    )
