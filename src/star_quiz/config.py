"""Configuration: catalog path, default magnitude filter, and shuffle seed from environment."""

from __future__ import annotations

import logging
import os

from star_quiz.constants import DEFAULT_MAX_MAGNITUDE

logger = logging.getLogger(__name__)

# Env var overrides with sensible defaults.
DEFAULT_CATALOG_PATH = 'data/named_stars.csv.gz'


def get_catalog_path() -> str:
    """Return star catalog file (STAR_QUIZ_CATALOG env var or default).

    Returns:
        Path string to a .csv or .csv.gz catalog.
    """
    return os.environ.get('STAR_QUIZ_CATALOG', DEFAULT_CATALOG_PATH)


def get_default_max_magnitude() -> float:
    """Return initial magnitude filter (STAR_QUIZ_MAX_MAGNITUDE env var or default).

    Unparseable values are ignored with a warning.

    Returns:
        Faintest magnitude shown.
    """
    raw = os.environ.get('STAR_QUIZ_MAX_MAGNITUDE', '').strip()
    if not raw:
        return DEFAULT_MAX_MAGNITUDE
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            'Ignoring STAR_QUIZ_MAX_MAGNITUDE=%r (not a number); using %s',
            raw,
            DEFAULT_MAX_MAGNITUDE,
        )
        return DEFAULT_MAX_MAGNITUDE


def get_random_seed() -> int | None:
    """Return quiz shuffle seed (STAR_QUIZ_SEED env var) or None for OS entropy."""
    raw = os.environ.get('STAR_QUIZ_SEED', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning('Ignoring STAR_QUIZ_SEED=%r (not an integer)', raw)
        return None
