"""Row-local cleaning passes.

Date normalization, the two compound-address splitters and the sold-as-vacant
normalizer only look at one record at a time. Each pass has a pure value-level
function (easy to test) and a table-level function that writes the derived
column(s) in place. All of them are safe to run more than once.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import pandas as pd

from housing_pipeline.errors import MalformedDateError
from housing_pipeline.schema import OWNER_SPLIT_COLUMNS, PROPERTY_SPLIT_COLUMNS
from housing_pipeline.table import PropertyTable

log = logging.getLogger(__name__)

SOLD_AS_VACANT_MAP = {"Y": "Yes", "N": "No"}


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))


# -----------------------------
# Standardize date
# -----------------------------
def to_sale_date(value: Any, unique_id: Any = None) -> date | None:
    """Return the date-only part of a raw `sale_date` value.

    Accepts `date`/`datetime`/`pd.Timestamp` objects and strings such as
    ``"2013-04-09"``, ``"2013-04-09 00:00:00.000"`` or ``"April 9, 2013"``.
    Any other type, numbers included, is rejected even when its string form
    would parse (``20130409`` fails, ``"20130409"`` does not).

    Raises:
        MalformedDateError: if the value cannot be parsed as a date.
    """
    if _is_missing(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateError(unique_id, value)

    try:
        parsed = pd.to_datetime(value.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedDateError(unique_id, value) from e

    if pd.isna(parsed):
        raise MalformedDateError(unique_id, value)
    return parsed.date()


def normalize_sale_dates(table: PropertyTable) -> list[MalformedDateError]:
    """Write `new_sale_date` from `sale_date` for every record.

    Unparseable values leave `new_sale_date` null and are returned instead of
    raised, so one bad record does not stop the rest.

    Returns:
        The per-record errors, in table order.
    """
    table.require("date normalization", "unique_id", "sale_date")
    pdf = table.frame

    errors: list[MalformedDateError] = []
    values: list[date | None] = []
    for uid, raw in zip(pdf["unique_id"], pdf["sale_date"]):
        try:
            values.append(to_sale_date(raw, uid))
        except MalformedDateError as e:
            errors.append(e)
            values.append(None)

    pdf["new_sale_date"] = pd.Series(values, index=pdf.index, dtype=object)

    if errors:
        log.warning("%d sale_date value(s) could not be parsed", len(errors))
    return errors


# -----------------------------
# Split property address
# -----------------------------
def split_property_address(value: Any) -> tuple[str | None, str | None]:
    """Split ``"<street>, <city>"`` at the first comma.

    The city keeps any later commas verbatim. A value without a comma is all
    street, with a null city.
    """
    if _is_missing(value):
        return None, None
    text = str(value)
    street, sep, city = text.partition(",")
    if not sep:
        return text.strip(), None
    return street.strip(), city.strip()


def split_property_addresses(table: PropertyTable) -> int:
    """Write `property_split_address` and `property_split_city` in place.

    Returns:
        Number of records that had an address to split.
    """
    table.require("property address split", "property_address")
    pdf = table.frame

    parts = [split_property_address(v) for v in pdf["property_address"]]
    for i, col in enumerate(PROPERTY_SPLIT_COLUMNS):
        pdf[col] = pd.Series([p[i] for p in parts], index=pdf.index, dtype=object)

    split = sum(1 for street, _ in parts if street is not None)
    log.info("Split %d property addresses", split)
    return split


# -----------------------------
# Split owner address
# -----------------------------
def split_owner_address(value: Any) -> tuple[str | None, str | None, str | None]:
    """Split ``"<street>, <city>, <state>"`` reading from the right.

    The state is the last segment and the city the one before it. The street
    is everything before that, so extra commas stay in the street. Missing
    leading segments are null.
    """
    if _is_missing(value):
        return None, None, None
    segments = [s.strip() for s in str(value).rsplit(",", 2)]
    padded: list[str | None] = [None] * (3 - len(segments)) + list(segments)
    return padded[0], padded[1], padded[2]


def split_owner_addresses(table: PropertyTable) -> int:
    """Write `owner_split_address`, `owner_split_city`, `owner_split_state`.

    Returns:
        Number of records that had an owner address to split.
    """
    table.require("owner address split", "owner_address")
    pdf = table.frame

    parts = [split_owner_address(v) for v in pdf["owner_address"]]
    for i, col in enumerate(OWNER_SPLIT_COLUMNS):
        pdf[col] = pd.Series([p[i] for p in parts], index=pdf.index, dtype=object)

    split = sum(1 for p in parts if any(x is not None for x in p))
    log.info("Split %d owner addresses", split)
    return split


# -----------------------------
# Normalize sold_as_vacant
# -----------------------------
def normalize_vacant_flag(value: Any) -> Any:
    """Map "Y"/"N" to "Yes"/"No"; anything else is returned unchanged."""
    if isinstance(value, str):
        return SOLD_AS_VACANT_MAP.get(value, value)
    return value


def normalize_sold_as_vacant(table: PropertyTable) -> int:
    """Rewrite `sold_as_vacant` codes in place.

    Returns:
        Number of values that changed.
    """
    table.require("sold-as-vacant normalization", "sold_as_vacant")
    pdf = table.frame

    before = pdf["sold_as_vacant"]
    changed = int(before.isin(list(SOLD_AS_VACANT_MAP)).sum())
    pdf["sold_as_vacant"] = before.map(normalize_vacant_flag)

    log.info("Normalized %d sold_as_vacant codes", changed)
    return changed
