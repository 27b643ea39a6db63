"""Tests for Kepler's equation and the planet, Moon, and star position models."""

from __future__ import annotations

import math

import numpy as np
import pytest

from starsaver.constants import EARTH, JUPITER, SUN
from starsaver.frames import rectangular_to_spherical
from starsaver.orbits import (
    geocentric_positions,
    moon_geocentric,
    moon_mean_longitude,
    planet_heliocentric,
    resolve_moon,
    solve_kepler,
    star_position,
)
from starsaver.planets import build_moon_entry, build_planet_table

J2000 = 2451545.0


def test_solve_kepler_zero_anomaly() -> None:
    """M = 0 gives E = 0 for any eccentricity."""
    solution = solve_kepler(0.0, 0.7)
    assert solution.converged
    assert solution.eccentric_anomaly == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize('mean_anomaly,eccentricity', [(1.0, 0.5), (-2.5, 0.2), (3.0, 0.9)])
def test_solve_kepler_satisfies_equation(mean_anomaly: float, eccentricity: float) -> None:
    """E - e sin E reproduces M within the tolerance."""
    solution = solve_kepler(mean_anomaly, eccentricity)
    E = solution.eccentric_anomaly
    assert solution.converged
    assert solution.iterations <= 30
    assert E - eccentricity * math.sin(E) == pytest.approx(mean_anomaly, abs=1e-6)


def test_solve_kepler_reports_iteration_cap() -> None:
    """Hitting the cap returns the last estimate flagged unconverged."""
    solution = solve_kepler(0.1, 0.99, tolerance=1e-6, max_iterations=1)
    assert not solution.converged
    assert solution.iterations == 1
    assert math.isfinite(solution.eccentric_anomaly)


def test_star_position_at_epoch_unchanged() -> None:
    assert star_position(1.0, 1e-5, 0.5, -1e-5, J2000) == pytest.approx((1.0, 0.5))


def test_star_position_applies_annual_motion_and_wraps() -> None:
    """One Julian year of motion, with right ascension wrapped past 2pi."""
    ra, dec = star_position(2.0 * math.pi - 0.001, 0.002, 0.3, -0.01, J2000 + 365.25)
    assert ra == pytest.approx(0.001)
    assert dec == pytest.approx(0.29)


def test_earth_heliocentric_distance_near_perihelion() -> None:
    """Earth is about 0.983 AU from the Sun in early January."""
    earth = build_planet_table()[EARTH]
    position = planet_heliocentric(earth.elements, earth.rates, earth.extras, J2000)
    assert float(np.linalg.norm(position)) == pytest.approx(0.9833, abs=0.002)


def test_geocentric_positions_excludes_earth() -> None:
    """Every body but Earth is present; the Sun is the negated Earth vector."""
    planets = build_planet_table()
    positions = geocentric_positions(planets, J2000)
    assert EARTH not in positions
    assert set(positions) == {0, 1, 2, 4, 5, 6, 7, 8}
    earth = planets[EARTH]
    earth_vector = planet_heliocentric(earth.elements, earth.rates, earth.extras, J2000)
    assert positions[SUN].equatorial == pytest.approx(tuple(-v for v in earth_vector))


def test_sun_position_at_j2000() -> None:
    """Sun near RA 281.3 deg, Dec -23.0 deg on 2000-01-01."""
    sun = geocentric_positions(build_planet_table(), J2000)[SUN]
    ra, dec = rectangular_to_spherical(*sun.equatorial)
    assert ra == pytest.approx(math.radians(281.29), abs=0.01)
    assert dec == pytest.approx(math.radians(-23.03), abs=0.01)


def test_jupiter_position_at_j2000() -> None:
    """Jupiter near RA 24.0 deg, Dec 8.7 deg on 2000-01-01."""
    jupiter = geocentric_positions(build_planet_table(), J2000)[JUPITER]
    ra, dec = rectangular_to_spherical(*jupiter.equatorial)
    assert jupiter.converged
    assert ra == pytest.approx(math.radians(23.99), abs=0.05)
    assert dec == pytest.approx(math.radians(8.66), abs=0.05)


def test_moon_position_at_j2000() -> None:
    """Moon near RA 222 deg, Dec -11 deg, about 60 Earth radii away."""
    moon = build_moon_entry()
    vector = moon_geocentric(moon.elements, moon.rates, J2000)
    ra, dec = rectangular_to_spherical(*vector)
    assert ra == pytest.approx(math.radians(221.7), abs=0.05)
    assert dec == pytest.approx(math.radians(-10.8), abs=0.05)
    assert 55.0 < float(np.linalg.norm(vector)) < 65.0


def test_resolve_moon_frames_agree() -> None:
    """Equatorial and ecliptic vectors have the same length."""
    moon = build_moon_entry()
    solution = resolve_moon(moon.elements, moon.rates, J2000 + 10.0)
    assert float(np.linalg.norm(solution.equatorial)) == pytest.approx(
        float(np.linalg.norm(solution.ecliptic))
    )


def test_moon_mean_longitude_advances_daily() -> None:
    """Mean longitude advances about 13.18 degrees per day."""
    moon = build_moon_entry()
    start = moon_mean_longitude(moon.elements, moon.rates, J2000)
    end = moon_mean_longitude(moon.elements, moon.rates, J2000 + 1.0)
    advance = (end - start) % (2.0 * math.pi)
    assert advance == pytest.approx(math.radians(13.176), abs=1e-3)
