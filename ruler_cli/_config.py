"""Settings from environment variables; an optional .env in the working directory is loaded first."""

from __future__ import annotations

import logging
import os
import pathlib

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

load_dotenv(pathlib.Path.cwd() / ".env", override=False)

_LOG_LEVEL_ENV     = "RULER_LOG_LEVEL"
_RECORD_FORMAT_ENV = "RULER_RECORD_FORMAT"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def log_level() -> str:
    level = os.getenv(_LOG_LEVEL_ENV, "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"


def record_format() -> str:
    return os.getenv(_RECORD_FORMAT_ENV, "json").lower()


def setup_logging(level: str | None = None) -> None:
    """Route the `ruler` loggers through rich; `level` overrides RULER_LOG_LEVEL."""
    logging.basicConfig(
        level=(level or log_level()).upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )
