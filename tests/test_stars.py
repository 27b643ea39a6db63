"""Tests for the star catalog and constellation readers."""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from starsaver.config import DEFAULT_CATALOG_PATH, DEFAULT_CONSTELLATIONS_PATH
from starsaver.stars import (
    CatalogFormatError,
    CatalogIndexError,
    catalog_index,
    read_constellations,
    read_star_catalog,
    stars_by_magnitude,
)


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_bundled_catalog_is_dense() -> None:
    """Entry n sits at index n - 1."""
    stars = read_star_catalog(DEFAULT_CATALOG_PATH)
    assert len(stars) == 40
    assert [s.catalog_number for s in stars] == list(range(1, 41))
    sirius = stars[0]
    assert sirius.name == 'Sirius'
    assert sirius.magnitude == pytest.approx(-1.46)
    assert sirius.right_ascension == pytest.approx(math.radians(15.0 * (6 + 45 / 60 + 8.9 / 3600)))
    assert sirius.declination == pytest.approx(math.radians(-(16 + 42 / 60 + 58 / 3600)))
    assert stars[32].name is None


def test_proper_motion_converted_to_radians_per_year(tmp_path: Path) -> None:
    path = _write(tmp_path, 'one.txt', '1 00:00:00 +00:00:00 3.6 -7.2 1.0 Test Star\n')
    (star,) = read_star_catalog(path)
    assert star.ra_motion == pytest.approx(math.radians(0.001))
    assert star.dec_motion == pytest.approx(math.radians(-0.002))
    assert star.name == 'Test Star'


def test_stars_by_magnitude_brightest_first() -> None:
    stars = read_star_catalog(DEFAULT_CATALOG_PATH)
    order = stars_by_magnitude(stars)
    assert order[0] == 1
    magnitudes = [stars[n - 1].magnitude for n in order]
    assert magnitudes == sorted(magnitudes)


def test_catalog_index_bounds() -> None:
    assert catalog_index(1, 40) == 0
    assert catalog_index(40, 40) == 39
    for bad in (0, 41, -3):
        with pytest.raises(CatalogIndexError):
            catalog_index(bad, 40)


def test_catalog_rejects_duplicate_number(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        'dup.txt',
        '1 00:00:00 00:00:00 0 0 1.0\n1 01:00:00 00:00:00 0 0 2.0\n',
    )
    with pytest.raises(CatalogFormatError, match='duplicate'):
        read_star_catalog(path)


def test_catalog_rejects_gap(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        'gap.txt',
        '1 00:00:00 00:00:00 0 0 1.0\n3 01:00:00 00:00:00 0 0 2.0\n',
    )
    with pytest.raises(CatalogFormatError, match='missing'):
        read_star_catalog(path)


@pytest.mark.parametrize(
    'line',
    [
        '1 00:00:00 00:00:00 0 0',
        'one 00:00:00 00:00:00 0 0 1.0',
        '1 xx 00:00:00 0 0 1.0',
        '1 25:00:00 00:00:00 0 0 1.0',
        '1 00:00:00 95:00:00 0 0 1.0',
    ],
)
def test_catalog_rejects_malformed_line(tmp_path: Path, line: str) -> None:
    path = _write(tmp_path, 'bad.txt', line + '\n')
    with pytest.raises(CatalogFormatError):
        read_star_catalog(path)


def test_catalog_skips_comments_and_blank_lines(tmp_path: Path) -> None:
    path = _write(tmp_path, 'c.txt', '# header\n\n1 00:00:00 00:00:00 0 0 1.0\n')
    assert len(read_star_catalog(path)) == 1


def test_bundled_constellations() -> None:
    figures = read_constellations(DEFAULT_CONSTELLATIONS_PATH, 40)
    by_name = {f.abbreviation: f for f in figures}
    assert len(by_name['Ori'].segments) == 7
    assert by_name['Gem'].segments == ((17, 13),)


def test_constellation_count_mismatch(tmp_path: Path) -> None:
    path = _write(tmp_path, 'fig.txt', 'Abc 2 1 2 2\n')
    with pytest.raises(CatalogFormatError):
        read_constellations(path, 10)


def test_constellation_star_out_of_range(tmp_path: Path) -> None:
    """A segment naming a star beyond the catalog is rejected at load time."""
    path = _write(tmp_path, 'fig.txt', 'Abc 1 1 11\n')
    with pytest.raises(CatalogIndexError):
        read_constellations(path, 10)
