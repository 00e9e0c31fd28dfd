# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Centralized configuration for environment variables."""

import logging
import os

logger = logging.getLogger(__name__)

WORKERS_ENV = "EXTRA_INNINGS_WORKERS"


def get_workers_override() -> int | None:
    """Return the worker count from the environment, or None if unset or invalid."""
    raw = os.environ.get(WORKERS_ENV, "").strip()
    if not raw:
        return None
    try:
        workers = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", WORKERS_ENV, raw)
        return None
    if workers < 1:
        logger.warning("Ignoring %s=%r: must be at least 1", WORKERS_ENV, raw)
        return None
    return workers


def get_max_workers() -> int:
    """Return the default number of worker processes for a parallel run."""
    return get_workers_override() or os.cpu_count() or 1
