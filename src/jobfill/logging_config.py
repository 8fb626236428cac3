"""Root logger setup for the jobfill CLI.

Two output modes:

* plain text (default) — ``time level logger — message`` on stderr
* JSON lines — one object per record, for log shippers::

    {"severity": "INFO", "message": "...", "logger": "...", "time": "..."}
"""

from __future__ import annotations

import json
import logging
import sys


class JsonLineFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object with severity."""
        entry = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Level name (``DEBUG``, ``INFO``, ...). Unknown names fall back to INFO.
        json_output: Emit JSON lines instead of plain text.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s — %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    logging.root.handlers.clear()
    logging.root.addHandler(handler)
    logging.root.setLevel(log_level)

    # Quieten noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
