"""housing_pipeline package.

Contains modules for ingesting the Nashville housing sales table into MongoDB,
running the ordered cleaning passes over it (address backfill, duplicate
removal, date normalization, address splitting, categorical normalization and
schema finalization) and publishing the cleaned standing view.

Architecture:
- Raw CSV -> raw collection -> cleaned table -> cleaned view
- Dask is used for partitioned CSV ingestion
- Cleaning runs on a single in-memory pandas table, one pass at a time
- Pydantic models validate raw rows and cleaned view rows
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
