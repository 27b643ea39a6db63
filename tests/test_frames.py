"""Tests for coordinate frame conversions."""

from __future__ import annotations

import math

import pytest

from starsaver.frames import (
    OBLIQUITY_J2000,
    ecliptic_to_equatorial,
    equatorial_to_horizontal,
    horizontal_to_equatorial,
    horizontal_to_spherical,
    rectangular_to_spherical,
)

BOSTON_LAT = math.radians(42.361145)
BOSTON_LON = math.radians(-71.057083)


def test_rectangular_to_spherical_axes() -> None:
    assert rectangular_to_spherical(1.0, 0.0, 0.0) == pytest.approx((0.0, 0.0))
    assert rectangular_to_spherical(0.0, 1.0, 0.0) == pytest.approx((math.pi / 2, 0.0))
    ra, dec = rectangular_to_spherical(0.0, -2.0, 0.0)
    assert ra == pytest.approx(1.5 * math.pi)
    assert rectangular_to_spherical(0.0, 0.0, 5.0)[1] == pytest.approx(math.pi / 2)


def test_ecliptic_to_equatorial_tilts_y_axis() -> None:
    """The ecliptic y axis rises out of the equator by the obliquity."""
    x, y, z = ecliptic_to_equatorial(0.0, 1.0, 0.0)
    assert x == pytest.approx(0.0)
    assert y == pytest.approx(math.cos(OBLIQUITY_J2000))
    assert z == pytest.approx(math.sin(OBLIQUITY_J2000))


def test_pole_altitude_equals_latitude() -> None:
    """The celestial pole stands at the observer's latitude, due north."""
    azimuth, altitude = equatorial_to_horizontal(0.0, math.pi / 2, 1.234, BOSTON_LAT, BOSTON_LON)
    assert altitude == pytest.approx(BOSTON_LAT)
    assert math.cos(azimuth) == pytest.approx(1.0)


def test_meridian_transit_is_due_south() -> None:
    """An equatorial body on the local meridian is due south."""
    gmst = 2.0
    ra = gmst + BOSTON_LON
    azimuth, altitude = equatorial_to_horizontal(ra, 0.0, gmst, BOSTON_LAT, BOSTON_LON)
    assert azimuth == pytest.approx(math.pi)
    assert altitude == pytest.approx(math.pi / 2 - BOSTON_LAT)


def test_rising_body_is_east() -> None:
    """Hour angle -6h on the equator is on the eastern horizon."""
    gmst = 1.0
    ra = gmst + BOSTON_LON + math.pi / 2
    azimuth, altitude = equatorial_to_horizontal(ra, 0.0, gmst, BOSTON_LAT, BOSTON_LON)
    assert azimuth == pytest.approx(math.pi / 2)
    assert altitude == pytest.approx(0.0, abs=1e-12)


def test_horizontal_to_equatorial_inverts() -> None:
    """horizontal_to_equatorial undoes equatorial_to_horizontal."""
    gmst, ra, dec = 4.0, 1.1, -0.3
    azimuth, altitude = equatorial_to_horizontal(ra, dec, gmst, BOSTON_LAT, BOSTON_LON)
    ra2, dec2 = horizontal_to_equatorial(azimuth, altitude, gmst, BOSTON_LAT, BOSTON_LON)
    assert ra2 == pytest.approx(ra)
    assert dec2 == pytest.approx(dec)


def test_horizontal_to_spherical_orientation() -> None:
    """Zenith maps to phi 0; north to theta pi/2, east to pi, west to 0."""
    theta, phi = horizontal_to_spherical(0.0, math.pi / 2)
    assert phi == pytest.approx(0.0)
    assert theta == pytest.approx(math.pi / 2)
    assert horizontal_to_spherical(math.pi / 2, 0.0) == pytest.approx((math.pi, math.pi / 2))
    theta, _ = horizontal_to_spherical(1.5 * math.pi, 0.0)
    assert math.cos(theta) == pytest.approx(1.0)
