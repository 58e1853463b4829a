"""Utilities to configure consistent logging across the pipeline."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# driver chatter that drowns pass-level messages at DEBUG
QUIET_LOGGERS = ("pymongo", "fsspec")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(log_path: Path | None = None, level: int | str = logging.INFO) -> None:
    """Configure root logging handlers and formatting.

    Calling this again replaces the handlers installed by a previous call, so
    the CLI and tests can reconfigure logging in the same process.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level as an int or a name such as ``"DEBUG"``.

    Raises:
        ValueError: if `level` is not a known level name.
    """
    resolved = _resolve_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
