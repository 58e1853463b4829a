"""Ordered cleaning pipeline and its report.

`CleaningPipeline.run` applies the passes in dependency order:

1. address backfill
2. duplicate elimination
3. date normalization
4. property address split
5. owner address split
6. sold-as-vacant normalization
7. schema finalization

Per-record problems (unparseable dates) are collected into a `CleaningReport`.
Missing record columns abort with `MissingPrecondition` before any pass runs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from housing_pipeline.clean.backfill import backfill_property_address
from housing_pipeline.clean.dedupe import drop_duplicate_sales
from housing_pipeline.clean.finalize import finalize_schema, is_finalized
from housing_pipeline.clean.transform import (
    normalize_sale_dates,
    normalize_sold_as_vacant,
    split_owner_addresses,
    split_property_addresses,
)
from housing_pipeline.errors import CleaningError
from housing_pipeline.schema import RECORD_COLUMNS
from housing_pipeline.table import CleanedView, PropertyTable

log = logging.getLogger(__name__)


@dataclass
class CleaningReport:
    """Outcome of one pipeline run.

    Attributes:
        rows_in: Row count before cleaning.
        rows_out: Row count after cleaning.
        counts: Per-pass counters (filled, removed, split, normalized).
        errors: Per-record errors collected during the run.
        skipped: Names of passes that were not applied.
    """
    rows_in: int = 0
    rows_out: int = 0
    counts: dict[str, int] = field(default_factory=dict)
    errors: list[CleaningError] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> dict[str, Any]:
        return {
            "rows_in": self.rows_in,
            "rows_out": self.rows_out,
            **self.counts,
            "errors": len(self.errors),
            "skipped": list(self.skipped),
        }


class CleaningPipeline:
    """Runs the cleaning passes over one `PropertyTable`."""

    def __init__(self, table: PropertyTable) -> None:
        self.table = table

    @classmethod
    def from_frame(cls, pdf: pd.DataFrame) -> "CleaningPipeline":
        return cls(PropertyTable(pdf))

    def run(self) -> tuple[CleanedView, CleaningReport]:
        """Apply all passes in order and return the cleaned view and a report.

        A table that is already finalized is left untouched: duplicate
        elimination and the column drop cannot be repeated against it.
        """
        table = self.table
        report = CleaningReport(rows_in=len(table))

        if is_finalized(table):
            log.info("Table is already cleaned; skipping all passes")
            report.skipped = [
                "address backfill",
                "duplicate elimination",
                "date normalization",
                "property address split",
                "owner address split",
                "sold-as-vacant normalization",
                "schema finalization",
            ]
            report.rows_out = len(table)
            return table.view(), report

        table.require("cleaning pipeline", *RECORD_COLUMNS)
        log.info("Starting cleaning pipeline on %d rows", len(table))

        report.counts["addresses_backfilled"] = backfill_property_address(table)
        report.counts["duplicates_removed"] = drop_duplicate_sales(table)
        report.errors.extend(normalize_sale_dates(table))
        report.counts["property_addresses_split"] = split_property_addresses(table)
        report.counts["owner_addresses_split"] = split_owner_addresses(table)
        report.counts["vacant_codes_normalized"] = normalize_sold_as_vacant(table)
        view = finalize_schema(table)

        report.rows_out = len(table)
        log.info("Cleaning complete: %s", report.summary())
        return view, report


def clean_table(pdf: pd.DataFrame) -> tuple[PropertyTable, CleanedView, CleaningReport]:
    """Convenience: wrap `pdf` in a table, clean it and return all three parts."""
    pipeline = CleaningPipeline.from_frame(pdf)
    view, report = pipeline.run()
    return pipeline.table, view, report
