"""Schema finalization: drop raw compound columns and expose the cleaned view."""
from __future__ import annotations

import logging

from housing_pipeline.schema import DERIVED_COLUMNS, OBSOLETE_COLUMNS
from housing_pipeline.table import CleanedView, PropertyTable

log = logging.getLogger(__name__)

PASS_NAME = "schema finalization"


def is_finalized(table: PropertyTable) -> bool:
    """True once the raw columns are gone and every derived column exists."""
    return table.has_columns(*DERIVED_COLUMNS) and not any(
        c in table.columns for c in OBSOLETE_COLUMNS
    )


def finalize_schema(table: PropertyTable) -> CleanedView:
    """Drop `sale_date`, `owner_address` and `property_address` in place.

    The derived replacements must already exist.

    Raises:
        MissingPrecondition: if any derived column is missing.
    """
    table.require(PASS_NAME, *DERIVED_COLUMNS)
    dropped = table.drop_columns(OBSOLETE_COLUMNS)
    log.info("Dropped columns: %s", ", ".join(dropped) or "none")
    return table.view()
