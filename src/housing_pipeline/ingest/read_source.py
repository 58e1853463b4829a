"""Reading helpers for the housing sales CSV export.

`normalize_columns` maps the spreadsheet's CamelCase headers to the pipeline's
snake_case record columns and coerces numeric fields; `read_housing_csv`
applies it partition-wise to a Dask DataFrame.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast
import logging
import re

import pandas as pd
import dask.dataframe as dd

from housing_pipeline.schema import RECORD_COLUMNS, SOURCE_HEADERS

log = logging.getLogger(__name__)

NUMERIC_COLUMNS = [
    "acreage",
    "land_value",
    "building_value",
    "total_value",
    "year_built",
    "bedrooms",
    "full_bath",
    "half_bath",
]

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def header_to_column(header: str) -> str:
    """Return the record column name for a source header.

    Known headers use the explicit mapping (``"UniqueID "`` -> ``unique_id``);
    anything else is snake_cased.
    """
    name = str(header).strip()
    if name in SOURCE_HEADERS:
        return SOURCE_HEADERS[name]
    return _CAMEL_RE.sub("_", name).replace(" ", "_").lower()


def _to_number(s: pd.Series) -> pd.Series:
    s = s.astype(object).where(s.notna(), None)
    return pd.to_numeric(s, errors="coerce")


def normalize_columns(pdf: pd.DataFrame) -> pd.DataFrame:
    """Rename, select and type the record columns of one partition.

    Columns not in the record schema are dropped; record columns absent from
    the source are added as nulls so every partition has the same layout.

    Args:
        pdf: Pandas DataFrame read with all columns as strings.

    Returns:
        DataFrame with exactly `RECORD_COLUMNS`, in that order.
    """
    pdf = pdf.rename(columns={c: header_to_column(c) for c in pdf.columns})
    for col in RECORD_COLUMNS:
        if col not in pdf.columns:
            pdf[col] = None
    pdf = pdf[RECORD_COLUMNS].copy()

    pdf["unique_id"] = _to_number(pdf["unique_id"]).astype("Int64")
    for col in NUMERIC_COLUMNS:
        pdf[col] = _to_number(pdf[col]).astype("float64")

    text = [c for c in RECORD_COLUMNS if c != "unique_id" and c not in NUMERIC_COLUMNS]
    for col in text:
        pdf[col] = pdf[col].astype(object).where(pdf[col].notna(), None)
    return pdf


def read_housing_csv(path: Path, blocksize: str | None = "64MB") -> Any:
    """Read the housing CSV into a Dask DataFrame with record columns.

    Args:
        path: CSV file exported from the housing spreadsheet.
        blocksize: Dask partition size; ``None`` reads a single partition.

    Returns:
        Dask DataFrame whose partitions have been through `normalize_columns`.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Source CSV not found: {path}")

    dd_mod = cast(Any, dd)
    ddf = dd_mod.read_csv(
        str(path),
        dtype=str,
        blocksize=blocksize,
        keep_default_na=True,
    )
    meta = normalize_columns(ddf._meta)
    log.info("Reading %s in %d partition(s)", path, ddf.npartitions)
    return ddf.map_partitions(normalize_columns, meta=meta)


def read_housing_frame(path: Path) -> pd.DataFrame:
    """Read the whole CSV into one pandas DataFrame (for local cleaning)."""
    return read_housing_csv(path).compute().reset_index(drop=True)
