from __future__ import annotations

import logging
import os
import sys

# Connection pool chatter for every segment GET, shown only at DEBUG
NOISY_LOGGERS = ("urllib3",)


def setup_logging(default_level: str | None = None) -> None:
    """Send log lines to stderr so stdout stays reserved for streamed output."""
    level_name = (default_level or os.getenv("CRAWL_LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else max(level, logging.WARNING))
