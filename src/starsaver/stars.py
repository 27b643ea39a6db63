"""Star catalog and constellation figure readers.

Catalog numbers are 1-based and dense: the entry for catalog number n is
stored at table index n - 1, and every structure that refers to stars by
catalog number goes through catalog_index().
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from starsaver.angle_utils import parse_sexagesimal
from starsaver.constants import ARCSEC_PER_DEGREE, DEGREES_PER_HOUR_RA

logger = logging.getLogger(__name__)


class CatalogIndexError(ValueError):
    """Catalog number outside [1, table size]."""


class CatalogFormatError(ValueError):
    """Malformed line in a star catalog or constellation file."""


@dataclass(frozen=True)
class StarEntry:
    """A catalog star: J2000.0 position and proper motion in radians."""

    catalog_number: int
    right_ascension: float
    declination: float
    ra_motion: float  # radians per Julian year
    dec_motion: float  # radians per Julian year
    magnitude: float
    name: str | None = None


@dataclass(frozen=True)
class ConstellationFigure:
    """Stick figure of a constellation: segments as catalog-number pairs."""

    abbreviation: str
    segments: tuple[tuple[int, int], ...]


def catalog_index(catalog_number: int, table_size: int) -> int:
    """Table index of a catalog number.

    Raises:
        CatalogIndexError: If catalog_number is outside [1, table_size].
    """
    if not 1 <= catalog_number <= table_size:
        raise CatalogIndexError(
            f'Catalog number {catalog_number} outside 1..{table_size}'
        )
    return catalog_number - 1


def _arcsec_to_rad(value: float) -> float:
    return math.radians(value / ARCSEC_PER_DEGREE)


def _parse_star_line(line: str, where: str) -> StarEntry:
    fields = line.split(None, 6)
    if len(fields) < 6:
        raise CatalogFormatError(f'{where}: expected at least 6 fields, got {len(fields)}')
    try:
        number = int(fields[0])
        pm_ra, pm_dec, magnitude = float(fields[3]), float(fields[4]), float(fields[5])
    except ValueError as e:
        raise CatalogFormatError(f'{where}: {e}') from e
    ra_hours = parse_sexagesimal(fields[1])
    dec_deg = parse_sexagesimal(fields[2])
    if ra_hours is None or dec_deg is None:
        raise CatalogFormatError(f'{where}: invalid RA {fields[1]!r} or Dec {fields[2]!r}')
    if not 0.0 <= ra_hours < 24.0 or not -90.0 <= dec_deg <= 90.0:
        raise CatalogFormatError(f'{where}: RA or Dec out of range')
    name = fields[6].strip() if len(fields) > 6 else None
    return StarEntry(
        catalog_number=number,
        right_ascension=math.radians(ra_hours * DEGREES_PER_HOUR_RA),
        declination=math.radians(dec_deg),
        ra_motion=_arcsec_to_rad(pm_ra),
        dec_motion=_arcsec_to_rad(pm_dec),
        magnitude=magnitude,
        name=name or None,
    )


def read_star_catalog(filepath: str | Path) -> tuple[StarEntry, ...]:
    """Read a whitespace-separated star catalog.

    Format, one star per line ('#' starts a comment line):
    ``number  RA(h:m:s)  Dec(d:m:s)  pm_RA  pm_Dec  magnitude  [name]``.
    Proper motions are rates of RA and Dec in arcseconds per Julian year.

    Parameters:
        filepath: Path to the catalog file.

    Returns:
        Entries ordered by catalog number, so entry n is at index n - 1.

    Raises:
        CatalogFormatError: On a malformed line, a duplicate or missing
            catalog number.
    """
    path = Path(filepath)
    entries: dict[int, StarEntry] = {}
    with path.open(encoding='utf-8') as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith('#'):
                continue
            entry = _parse_star_line(line, f'{path.name}:{lineno}')
            if entry.catalog_number in entries:
                raise CatalogFormatError(
                    f'{path.name}:{lineno}: duplicate catalog number {entry.catalog_number}'
                )
            entries[entry.catalog_number] = entry
    expected = set(range(1, len(entries) + 1))
    if set(entries) != expected:
        missing = sorted(expected - set(entries))[:5]
        raise CatalogFormatError(
            f'{path.name}: catalog numbers must run 1..{len(entries)}; missing {missing}'
        )
    logger.info('Read %d stars from %s', len(entries), path)
    return tuple(entries[n] for n in range(1, len(entries) + 1))


def stars_by_magnitude(stars: Sequence[StarEntry]) -> tuple[int, ...]:
    """Catalog numbers ordered brightest first (ties by catalog number)."""
    ordered = sorted(stars, key=lambda s: (s.magnitude, s.catalog_number))
    return tuple(s.catalog_number for s in ordered)


def read_constellations(
    filepath: str | Path, table_size: int
) -> tuple[ConstellationFigure, ...]:
    """Read constellation stick figures.

    Format: ``ABBR segment_count n1 n2 n3 n4 ...``; consecutive catalog
    numbers pair into segments. Every number is checked against the catalog
    size so that frame lookups cannot go out of range.

    Raises:
        CatalogFormatError: On a malformed line.
        CatalogIndexError: If a segment names a star not in the catalog.
    """
    path = Path(filepath)
    figures: list[ConstellationFigure] = []
    with path.open(encoding='utf-8') as f:
        for lineno, raw in enumerate(f, start=1):
            parts = raw.split()
            if not parts or parts[0].startswith('#'):
                continue
            where = f'{path.name}:{lineno}'
            try:
                count = int(parts[1])
                numbers = [int(p) for p in parts[2:]]
            except (IndexError, ValueError) as e:
                raise CatalogFormatError(f'{where}: {e}') from e
            if len(numbers) != 2 * count:
                raise CatalogFormatError(
                    f'{where}: {count} segments need {2 * count} numbers, got {len(numbers)}'
                )
            for number in numbers:
                catalog_index(number, table_size)
            segments = tuple(zip(numbers[0::2], numbers[1::2]))
            figures.append(ConstellationFigure(abbreviation=parts[0], segments=segments))
    logger.info('Read %d constellation figures from %s', len(figures), path)
    return tuple(figures)
