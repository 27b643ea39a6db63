"""Configuration: catalog file paths from environment, with bundled defaults."""

import os
from pathlib import Path

DATA_DIR = Path(__file__).parent / 'data'
DEFAULT_CATALOG_PATH = DATA_DIR / 'bright_stars.txt'
DEFAULT_CONSTELLATIONS_PATH = DATA_DIR / 'constellations.txt'


def get_catalog_path() -> str:
    """Return star catalog path (STARSAVER_CATALOG env var or bundled catalog)."""
    path = os.environ.get('STARSAVER_CATALOG', '').strip()
    return path or str(DEFAULT_CATALOG_PATH)


def get_constellations_path() -> str:
    """Return constellation figure path (STARSAVER_CONSTELLATIONS or bundled file)."""
    path = os.environ.get('STARSAVER_CONSTELLATIONS', '').strip()
    return path or str(DEFAULT_CONSTELLATIONS_PATH)


def get_log_level() -> str | None:
    """Return the STARSAVER_LOG level name if set to a valid level, else None."""
    level = os.environ.get('STARSAVER_LOG', '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None
