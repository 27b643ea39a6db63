"""Conversions between rectangular, equatorial, ecliptic, and horizontal frames.

All angles are radians. Azimuth is measured from north through east.
"""

from __future__ import annotations

import math

import numpy as np

from starsaver.angle_utils import wrap_two_pi
from starsaver.constants import HALF_PI, OBLIQUITY_J2000_DEG

OBLIQUITY_J2000 = math.radians(OBLIQUITY_J2000_DEG)


def rotation_x(angle: float) -> np.ndarray:
    """Matrix rotating a vector by angle about the x axis (counterclockwise)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rotation_z(angle: float) -> np.ndarray:
    """Matrix rotating a vector by angle about the z axis (counterclockwise)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def ecliptic_to_equatorial(
    x: float, y: float, z: float, obliquity: float = OBLIQUITY_J2000
) -> tuple[float, float, float]:
    """Rotate ecliptic rectangular coordinates into the equatorial frame."""
    eq = rotation_x(obliquity) @ np.array([x, y, z])
    return float(eq[0]), float(eq[1]), float(eq[2])


def rectangular_to_spherical(x: float, y: float, z: float) -> tuple[float, float]:
    """Equatorial rectangular coordinates to (right ascension, declination).

    Parameters:
        x, y, z: Rectangular equatorial coordinates in any length unit.

    Returns:
        (ra, dec) in radians; ra in [0, 2π), dec in [-π/2, π/2].
    """
    ra = wrap_two_pi(math.atan2(y, x))
    dec = math.atan2(z, math.hypot(x, y))
    return ra, dec


def equatorial_to_horizontal(
    ra: float,
    dec: float,
    sidereal_time: float,
    latitude: float,
    longitude: float,
) -> tuple[float, float]:
    """Equatorial coordinates to horizontal coordinates for an observer.

    Parameters:
        ra: Right ascension (radians).
        dec: Declination (radians).
        sidereal_time: Greenwich mean sidereal time (radians).
        latitude: Observer latitude (radians, north positive).
        longitude: Observer longitude (radians, east positive).

    Returns:
        (azimuth, altitude) in radians; azimuth in [0, 2π) from north through east.
    """
    hour_angle = sidereal_time + longitude - ra
    sin_dec, cos_dec = math.sin(dec), math.cos(dec)
    sin_lat, cos_lat = math.sin(latitude), math.cos(latitude)
    cos_ha = math.cos(hour_angle)

    sin_alt = sin_dec * sin_lat + cos_dec * cos_lat * cos_ha
    altitude = math.asin(max(-1.0, min(1.0, sin_alt)))
    azimuth = math.atan2(
        -cos_dec * math.sin(hour_angle),
        sin_dec * cos_lat - cos_dec * sin_lat * cos_ha,
    )
    return wrap_two_pi(azimuth), altitude


def horizontal_to_equatorial(
    azimuth: float,
    altitude: float,
    sidereal_time: float,
    latitude: float,
    longitude: float,
) -> tuple[float, float]:
    """Inverse of equatorial_to_horizontal; returns (ra, dec) in radians."""
    sin_alt, cos_alt = math.sin(altitude), math.cos(altitude)
    sin_lat, cos_lat = math.sin(latitude), math.cos(latitude)
    cos_az = math.cos(azimuth)

    sin_dec = sin_alt * sin_lat + cos_alt * cos_lat * cos_az
    dec = math.asin(max(-1.0, min(1.0, sin_dec)))
    hour_angle = math.atan2(
        -cos_alt * math.sin(azimuth),
        sin_alt * cos_lat - cos_alt * sin_lat * cos_az,
    )
    return wrap_two_pi(sidereal_time + longitude - hour_angle), dec


def horizontal_to_spherical(azimuth: float, altitude: float) -> tuple[float, float]:
    """Horizontal coordinates to the projector's polar convention.

    phi is the co-latitude measured from the zenith. theta is the azimuth
    turned a quarter circle so that north plots at the top of the chart, east
    at the left, and west at the right.

    Returns:
        (theta, phi) in radians.
    """
    return wrap_two_pi(azimuth + HALF_PI), HALF_PI - altitude
