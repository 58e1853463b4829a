"""The mutable property table and its cleaned standing view.

`PropertyTable` owns the single pandas DataFrame that every cleaning pass
mutates in place. `CleanedView` is a projection over that table which is
re-derived on every access, so it always reflects the current table state.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import pandas as pd

from housing_pipeline.errors import MissingPrecondition, SchemaError
from housing_pipeline.schema import VIEW_PROJECTION

log = logging.getLogger(__name__)


class PropertyTable:
    """A property-records table with a unique, non-null `unique_id` column."""

    def __init__(self, frame: pd.DataFrame) -> None:
        if "unique_id" not in frame.columns:
            raise SchemaError("table has no unique_id column")
        if frame["unique_id"].isna().any():
            raise SchemaError("unique_id must not be null")
        dupes = frame["unique_id"][frame["unique_id"].duplicated()]
        if not dupes.empty:
            raise SchemaError(
                f"unique_id must be unique; repeated: {sorted(dupes.unique().tolist())[:10]}"
            )
        self.frame = frame.reset_index(drop=True).copy()

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def columns(self) -> list[str]:
        return list(self.frame.columns)

    def has_columns(self, *names: str) -> bool:
        return all(n in self.frame.columns for n in names)

    def require(self, pass_name: str, *names: str) -> None:
        """Raise `MissingPrecondition` unless every column in `names` exists."""
        missing = [n for n in names if n not in self.frame.columns]
        if missing:
            raise MissingPrecondition(pass_name, missing)

    def drop_columns(self, names: Iterable[str]) -> list[str]:
        """Drop the given columns in place; returns the ones actually dropped."""
        present = [n for n in names if n in self.frame.columns]
        if present:
            self.frame.drop(columns=present, inplace=True)
        return present

    def view(self) -> "CleanedView":
        return CleanedView(self)


class CleanedView:
    """Standing, read-only projection of a `PropertyTable`.

    Nothing is copied when the view is created; `frame()` evaluates the
    projection against the table as it is at call time.
    """

    def __init__(self, table: PropertyTable) -> None:
        self._table = table

    @property
    def columns(self) -> list[str]:
        return [alias for _, alias in VIEW_PROJECTION]

    def frame(self) -> pd.DataFrame:
        """Return the current projection as a new DataFrame.

        Raises:
            MissingPrecondition: if a projected column does not exist yet.
        """
        sources = [src for src, _ in VIEW_PROJECTION]
        self._table.require("cleaned view", *sources)
        out = self._table.frame[sources].copy()
        out.columns = self.columns
        return out.reset_index(drop=True)

    def __len__(self) -> int:
        return len(self._table)
