"""Logging setup shared by the CLI, the REST server, and the MCP server.

Everything goes to stderr: the MCP transport owns stdout.
"""

from __future__ import annotations

import logging
import sys

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"name": "%(name)s", "message": "%(message)s"}'
)


def configure_logging(level: str | int = "INFO", log_format: str = "text") -> None:
    """Replace root handlers with a single stderr handler."""
    if isinstance(level, str):
        level = level.upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(_JSON_FORMAT if log_format.lower() == "json" else _TEXT_FORMAT)
    )
    root_logger.addHandler(handler)

    # urllib3 logs full request URLs at DEBUG, and Gemini takes its key in the query.
    logging.getLogger("urllib3").setLevel(max(logging.INFO, root_logger.level))
