"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `ingest`, `clean`, `inspect`, and `all`. Each command
is implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List

from dotenv import load_dotenv
import pandas as pd

from housing_pipeline.config import get_settings
from housing_pipeline.logging_config import configure_logging
from housing_pipeline.db import get_client, get_db

# INGEST
from housing_pipeline.ingest.read_source import read_housing_csv, read_housing_frame
from housing_pipeline.ingest.load_raw import load_raw_to_mongo

# CLEAN
from housing_pipeline.clean.pipeline import clean_table
from housing_pipeline.clean.validate import validate_view
from housing_pipeline.clean.load_clean import load_table_to_mongo, publish_view
from housing_pipeline.clean.backfill import preview_backfill
from housing_pipeline.clean.explore import (
    count_missing_addresses,
    sold_as_vacant_counts,
    split_preview,
)
from housing_pipeline.table import PropertyTable

log = logging.getLogger(__name__)

DEFAULT_CSV_NAME = "nashville_housing.csv"


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _load_collection_to_frame(
    collection: Any,
    projection: dict[str, Any],
    batch_size: int = 50_000,
) -> pd.DataFrame:
    """Load a MongoDB collection into a pandas DataFrame using batched reads."""
    cursor = collection.find({}, projection).batch_size(batch_size)

    pdf_batches: List[pd.DataFrame] = []
    buffer: List[dict[str, Any]] = []

    for doc in cursor:
        buffer.append(doc)
        if len(buffer) >= batch_size:
            pdf_batches.append(pd.DataFrame(buffer))
            buffer.clear()

    if buffer:
        pdf_batches.append(pd.DataFrame(buffer))

    if not pdf_batches:
        return pd.DataFrame()

    pdf = pd.concat(pdf_batches, ignore_index=True)
    log.info("Loaded %d documents from %s", len(pdf), collection.name)
    return pdf


def _default_csv() -> Path:
    """Source CSV path used when `--csv` is omitted: `<data_dir>/nashville_housing.csv`."""
    return get_settings().data_dir / DEFAULT_CSV_NAME


def _source_frame(csv: Path | None) -> pd.DataFrame:
    """Read the raw table from `csv` if given, else from the raw collection."""
    if csv is not None:
        return read_housing_frame(csv)

    s = get_settings()
    with get_client(s.mongo_uri) as client:
        db = get_db(client, s.mongo_db)
        pdf = _load_collection_to_frame(
            db[s.raw_collection], {"_id": False, "ingest_ts": False}
        )
    if pdf.empty:
        raise RuntimeError(f"{s.raw_collection} is empty. Run ingest first.")
    return pdf


# --------------------------------------------------
# INGEST
# --------------------------------------------------
def cmd_ingest(args: argparse.Namespace) -> None:
    """Read the source CSV and load it into the raw collection.

    Args:
        args: argparse namespace with `csv` and `blocksize`.
    """
    csv = args.csv if args.csv is not None else _default_csv()
    ddf = read_housing_csv(csv, blocksize=args.blocksize)
    load_raw_to_mongo(ddf)
    log.info("Ingest completed.")


# --------------------------------------------------
# CLEAN
# --------------------------------------------------
def cmd_clean(args: argparse.Namespace) -> None:
    """Run the cleaning pipeline and persist or export the cleaned view.

    With `--out`, the view is written to CSV and MongoDB is not touched.
    Otherwise the cleaned table is written to the table collection and the
    MongoDB view is (re)created over it.
    """
    pdf = _source_frame(args.csv)
    table, view, report = clean_table(pdf)

    for err in report.errors[:20]:
        log.warning("  %s", err)
    if len(report.errors) > 20:
        log.warning("  ... %d more date error(s)", len(report.errors) - 20)

    _, bad = validate_view(view.frame())
    log.info("View validation: %d row(s) failed", bad)

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        view.frame().to_csv(args.out, index=False)
        log.info("Wrote %d cleaned rows to %s", len(view), args.out)
        return

    s = get_settings()
    with get_client(s.mongo_uri) as client:
        db = get_db(client, s.mongo_db)
        load_table_to_mongo(table, db, s.table_collection)
        publish_view(db, s.view_name, s.table_collection)
        log.info("%s count=%d", s.view_name, db[s.view_name].count_documents({}))


# --------------------------------------------------
# INSPECT
# --------------------------------------------------
def cmd_inspect(args: argparse.Namespace) -> None:
    """Print data-quality figures for the raw table without modifying it."""
    pdf = _source_frame(args.csv)
    table = PropertyTable(pdf)

    print(f"rows: {len(table)}")
    print(f"null property_address: {count_missing_addresses(table.frame)}")
    print(f"backfillable from siblings: {len(preview_backfill(table))}")
    print("sold_as_vacant values:")
    print(sold_as_vacant_counts(table.frame).to_string(index=False))
    print(f"address splits (first {args.preview} rows):")
    print(split_preview(table.frame).head(args.preview).to_string(index=False))


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> None:
    """Convenience: run ingest -> clean (from the raw collection)."""
    cmd_ingest(args)
    cmd_clean(argparse.Namespace(csv=None, out=None))


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="housing_pipeline")
    p.add_argument("--log-level", default="INFO")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ingest = sub.add_parser("ingest")
    p_ingest.add_argument("--csv", type=Path, default=None)
    p_ingest.add_argument("--blocksize", default="64MB")

    p_clean = sub.add_parser("clean")
    p_clean.add_argument("--csv", type=Path, default=None)
    p_clean.add_argument("--out", type=Path, default=None)

    p_inspect = sub.add_parser("inspect")
    p_inspect.add_argument("--csv", type=Path, default=None)
    p_inspect.add_argument("--preview", type=int, default=10)

    p_all = sub.add_parser("all")
    p_all.add_argument("--csv", type=Path, default=None)
    p_all.add_argument("--blocksize", default="64MB")

    return p


def main() -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()

    args = build_parser().parse_args()
    configure_logging(Path("logs/pipeline.log"), args.log_level)

    if args.cmd == "ingest":
        cmd_ingest(args)
    elif args.cmd == "clean":
        cmd_clean(args)
    elif args.cmd == "inspect":
        cmd_inspect(args)
    elif args.cmd == "all":
        cmd_all(args)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
