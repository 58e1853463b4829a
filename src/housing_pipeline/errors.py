"""Error types raised or collected by the cleaning passes.

`MalformedDateError` is a per-record problem and is collected into a
`CleaningReport`; `MissingPrecondition` and `SchemaError` abort the pipeline.
"""

from __future__ import annotations

from typing import Any, Iterable


class CleaningError(Exception):
    """Base class for all cleaning errors."""


class SchemaError(CleaningError):
    """The input table cannot be cleaned (missing or non-unique `unique_id`)."""


class MissingPrecondition(CleaningError):
    """A pass was invoked without the columns an earlier pass provides."""

    def __init__(self, pass_name: str, missing: Iterable[str]) -> None:
        self.pass_name = pass_name
        self.missing = sorted(missing)
        super().__init__(
            f"{pass_name}: missing required column(s) {', '.join(self.missing)}"
        )


class MalformedDateError(CleaningError):
    """A `sale_date` value that cannot be parsed as a date."""

    def __init__(self, unique_id: Any, value: Any) -> None:
        self.unique_id = unique_id
        self.value = value
        super().__init__(f"unique_id={unique_id}: cannot parse sale_date {value!r}")
