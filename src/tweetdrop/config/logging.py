"""Logging setup for the batch jobs."""

from __future__ import annotations

import logging

# Per-request loggers; held at WARNING.
_HTTP_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    ``verbose`` lowers the level to DEBUG so every dropped candidate is
    logged. Pass ``force=True`` to reconfigure an already configured root
    logger.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
