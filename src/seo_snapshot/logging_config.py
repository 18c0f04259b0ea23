"""Logging configuration for the snapshot service."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Per-request chatter from the HTTP client and server
QUIET_LOGGERS = ('httpx', 'httpcore', 'uvicorn.access')


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for the CLI and the HTTP API.

    Log records go to stderr so stdout stays reserved for snapshot output,
    e.g. `seo-snapshot snapshot URL -o json > profile.json`.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: Optional file that receives the same records
    """
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
