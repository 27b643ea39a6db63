"""Tests for the planet and Moon tables."""

from __future__ import annotations

import math

import pytest

from starsaver.constants import EARTH, JUPITER, MARS, NEPTUNE, NUM_PLANETS, SUN
from starsaver.planets import build_moon_entry, build_planet_table, parse_planet


def test_planet_table_layout() -> None:
    """Nine rows indexed Sun..Neptune; only the Sun lacks elements."""
    table = build_planet_table()
    assert len(table) == NUM_PLANETS
    assert [p.index for p in table] == list(range(NUM_PLANETS))
    assert table[SUN].name == 'Sun'
    assert table[SUN].elements is None
    assert table[EARTH].name == 'Earth'
    assert all(p.elements is not None for p in table[1:])


def test_planet_table_extras_only_for_outer_planets() -> None:
    table = build_planet_table()
    assert table[MARS].extras is None
    assert table[JUPITER].extras is not None
    assert table[NEPTUNE].extras is not None


def test_planet_elements_are_radians() -> None:
    """Jupiter's inclination of 1.2986 degrees is stored in radians."""
    jupiter = build_planet_table()[JUPITER]
    assert jupiter.elements.inclination == pytest.approx(math.radians(1.29861416))
    assert jupiter.elements.semi_major_axis == pytest.approx(5.20248019)


def test_planet_symbols() -> None:
    table = build_planet_table()
    assert table[JUPITER].symbol_ascii == 'J'
    assert table[SUN].symbol_unicode == '☉'


def test_moon_entry() -> None:
    moon = build_moon_entry()
    assert moon.name == 'Moon'
    assert moon.symbol_ascii == 'M'
    assert moon.elements.semi_major_axis == pytest.approx(60.2666)
    assert moon.rates.mean_anomaly == pytest.approx(math.radians(13.0649929509))


@pytest.mark.parametrize(
    'value,expected', [('jupiter', JUPITER), ('Mars', MARS), (' SUN ', SUN), ('3', EARTH)]
)
def test_parse_planet(value: str, expected: int) -> None:
    assert parse_planet(value) == expected


@pytest.mark.parametrize('value', ['9', 'Pluto', ''])
def test_parse_planet_rejects_unknown(value: str) -> None:
    with pytest.raises(ValueError):
        parse_planet(value)
