"""Validation utilities for the cleaned view.

This module validates view rows against the Pydantic `CleanRecord` model
after converting pandas missing values and timestamps into native Python types.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import pandas as pd
from pydantic import ValidationError

from housing_pipeline.models import CleanRecord

log = logging.getLogger(__name__)


def _native(value: Any) -> Any:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date) or isinstance(value, str):
        return value
    if value is None or pd.isna(value):
        return None
    return value


def validate_view(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate cleaned view rows using Pydantic.

    Args:
        pdf: DataFrame produced by `CleanedView.frame()`.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        rec = {k: _native(v) for k, v in rec.items()}
        try:
            m = CleanRecord.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError as e:
            bad += 1
            log.debug("Invalid view row unique_id=%s: %s", rec.get("unique_id"), e)

    if bad:
        log.warning("%d cleaned row(s) failed validation", bad)
    return good, bad
