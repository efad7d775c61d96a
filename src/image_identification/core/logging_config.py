"""
Logging setup for the image identification function.

Every module logs through a child of the ``image-identification`` logger.
Only that parent carries a handler and a level; children propagate to it, so
one call to ``configure_logging`` decides what the whole function emits.
"""

import os
import sys
import logging
from typing import Optional

ROOT_LOGGER = "image-identification"

FORMATS = {
    "structured": (
        "%(asctime)s | %(name)s | %(levelname)-8s | "
        "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
    ),
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "image-identification-stdout"


def resolve_level(debug: bool = False, level: Optional[str] = None) -> int:
    """DEBUG wins; then ``level``, then ``LOG_LEVEL``; anything unknown is INFO."""
    if debug:
        return logging.DEBUG
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    debug: bool = False,
    level: Optional[str] = None,
    format_type: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the function's parent logger.

    Safe to call again: the stdout handler installed by a previous call is
    replaced, never duplicated, and the level is recomputed. Other handlers
    attached to the parent are left alone.

    Args:
        debug: The ``DEBUG`` setting of the function; forces DEBUG level
        level: Explicit level name, used when ``debug`` is off
        format_type: "structured" or "simple" (defaults to LOG_FORMAT or structured)

    Returns:
        The ``image-identification`` logger

    Environment Variables:
        LOG_LEVEL: Level used when neither ``debug`` nor ``level`` is given
        LOG_FORMAT: Format used when ``format_type`` is not given
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolve_level(debug, level))

    chosen = (format_type or os.getenv("LOG_FORMAT") or "structured").lower()
    # The Fn runtime collects function logs from stdout
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(FORMATS.get(chosen, FORMATS["structured"]), datefmt=DATE_FORMAT)
    )

    for previous in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(previous)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the parent logger or one of its children.

    ``name`` may be a suffix ("serialization") or a full dotted name under
    ``image-identification``. The level of an existing logger is never
    touched here; the parent is configured from the environment only if
    nothing configured it yet.
    """
    if not name or name == ROOT_LOGGER:
        full_name = ROOT_LOGGER
    elif name.startswith(ROOT_LOGGER + "."):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER}.{name}"

    if not any(h.get_name() == HANDLER_NAME for h in logging.getLogger(ROOT_LOGGER).handlers):
        configure_logging()
    return logging.getLogger(full_name)
