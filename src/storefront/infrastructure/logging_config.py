"""Console logging setup shared by the CLI and the web server."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Add a console handler unless the root logger already has one; always set the level."""
    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level)
