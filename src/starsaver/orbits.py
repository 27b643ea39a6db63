"""Orbit resolution: Kepler's equation, planet and Moon positions, proper motion.

Planet positions follow the JPL approximate-positions recipe: propagate the
elements linearly, solve Kepler's equation, place the body in its orbital
plane, rotate into the J2000 ecliptic, then into the equatorial frame.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from starsaver.angle_utils import wrap_pi, wrap_two_pi
from starsaver.constants import (
    DAYS_PER_JULIAN_YEAR,
    EARTH,
    J2000_JD,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
    LUNAR_EPOCH_JD,
    SUN,
)
from starsaver.frames import ecliptic_to_equatorial, rotation_x, rotation_z
from starsaver.planets.base import (
    KeplerElements,
    KeplerRates,
    LunarElements,
    LunarRates,
    PerturbationTerms,
    PlanetEntry,
)
from starsaver.time_utils import julian_centuries

logger = logging.getLogger(__name__)

Vector = tuple[float, float, float]


@dataclass(frozen=True)
class KeplerSolution:
    """Eccentric anomaly with the iteration count and convergence indicator."""

    eccentric_anomaly: float
    iterations: int
    converged: bool


@dataclass(frozen=True)
class OrbitSolution:
    """Resolved position in the equatorial and ecliptic frames."""

    equatorial: Vector
    ecliptic: Vector
    converged: bool = True


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> KeplerSolution:
    """Solve E - e sin E = M by Newton iteration.

    Iteration stops when the correction drops to tolerance or after
    max_iterations steps; in the latter case the last estimate is returned
    with converged=False.

    Parameters:
        mean_anomaly: M in radians.
        eccentricity: e, 0 <= e < 1.
        tolerance: Convergence threshold on the Newton step (radians).
        max_iterations: Iteration cap.

    Returns:
        KeplerSolution with E in radians.
    """
    e = eccentricity
    E = mean_anomaly + e * math.sin(mean_anomaly)
    for iteration in range(1, max_iterations + 1):
        delta_M = mean_anomaly - (E - e * math.sin(E))
        delta_E = delta_M / (1.0 - e * math.cos(E))
        E += delta_E
        if abs(delta_E) <= tolerance:
            return KeplerSolution(E, iteration, True)
    return KeplerSolution(E, max_iterations, False)


def star_position(
    ra: float, ra_motion: float, dec: float, dec_motion: float, jd: float
) -> tuple[float, float]:
    """Apply linear proper motion from J2000.0 to jd.

    Parameters:
        ra: Right ascension at J2000.0 (radians).
        ra_motion: Rate of right ascension (radians per Julian year).
        dec: Declination at J2000.0 (radians).
        dec_motion: Rate of declination (radians per Julian year).
        jd: Julian date.

    Returns:
        (ra, dec) in radians, ra in [0, 2π).
    """
    years = (jd - J2000_JD) / DAYS_PER_JULIAN_YEAR
    return wrap_two_pi(ra + ra_motion * years), dec + dec_motion * years


def _orbit_to_ecliptic(
    semi_major_axis: float,
    eccentricity: float,
    eccentric_anomaly: float,
    arg_periapsis: float,
    inclination: float,
    node: float,
) -> np.ndarray:
    E = eccentric_anomaly
    e = eccentricity
    in_plane = np.array(
        [
            semi_major_axis * (math.cos(E) - e),
            semi_major_axis * math.sqrt(1.0 - e * e) * math.sin(E),
            0.0,
        ]
    )
    rotation = rotation_z(node) @ rotation_x(inclination) @ rotation_z(arg_periapsis)
    return rotation @ in_plane


def _solution(ecliptic: np.ndarray, converged: bool) -> OrbitSolution:
    ecl = (float(ecliptic[0]), float(ecliptic[1]), float(ecliptic[2]))
    return OrbitSolution(ecliptic_to_equatorial(*ecl), ecl, converged)


def resolve_planet(
    elements: KeplerElements,
    rates: KeplerRates,
    extras: PerturbationTerms | None,
    jd: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> OrbitSolution:
    """Heliocentric position of a planet at jd (AU), both frames."""
    T = julian_centuries(jd)
    a = elements.semi_major_axis + rates.semi_major_axis * T
    e = elements.eccentricity + rates.eccentricity * T
    inclination = elements.inclination + rates.inclination * T
    mean_longitude = elements.mean_longitude + rates.mean_longitude * T
    long_perihelion = elements.long_perihelion + rates.long_perihelion * T
    node = elements.long_ascending_node + rates.long_ascending_node * T

    mean_anomaly = mean_longitude - long_perihelion
    if extras is not None:
        mean_anomaly += (
            extras.b * T * T
            + extras.c * math.cos(extras.f * T)
            + extras.s * math.sin(extras.f * T)
        )
    kepler = solve_kepler(wrap_pi(mean_anomaly), e, tolerance, max_iterations)
    ecliptic = _orbit_to_ecliptic(
        a, e, kepler.eccentric_anomaly, long_perihelion - node, inclination, node
    )
    return _solution(ecliptic, kepler.converged)


def planet_heliocentric(
    elements: KeplerElements,
    rates: KeplerRates,
    extras: PerturbationTerms | None,
    jd: float,
) -> Vector:
    """Heliocentric equatorial (ICRF-aligned) rectangular position in AU."""
    return resolve_planet(elements, rates, extras, jd).equatorial


def lunar_elements_at(elements: LunarElements, rates: LunarRates, jd: float) -> LunarElements:
    """Lunar elements propagated to jd."""
    d = jd - LUNAR_EPOCH_JD
    return LunarElements(
        long_ascending_node=elements.long_ascending_node + rates.long_ascending_node * d,
        inclination=elements.inclination + rates.inclination * d,
        arg_perigee=elements.arg_perigee + rates.arg_perigee * d,
        semi_major_axis=elements.semi_major_axis + rates.semi_major_axis * d,
        eccentricity=elements.eccentricity + rates.eccentricity * d,
        mean_anomaly=elements.mean_anomaly + rates.mean_anomaly * d,
    )


def resolve_moon(
    elements: LunarElements,
    rates: LunarRates,
    jd: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> OrbitSolution:
    """Geocentric position of the Moon at jd (Earth radii), both frames."""
    now = lunar_elements_at(elements, rates, jd)
    kepler = solve_kepler(
        wrap_pi(now.mean_anomaly), now.eccentricity, tolerance, max_iterations
    )
    ecliptic = _orbit_to_ecliptic(
        now.semi_major_axis,
        now.eccentricity,
        kepler.eccentric_anomaly,
        now.arg_perigee,
        now.inclination,
        now.long_ascending_node,
    )
    return _solution(ecliptic, kepler.converged)


def moon_geocentric(elements: LunarElements, rates: LunarRates, jd: float) -> Vector:
    """Geocentric equatorial rectangular position of the Moon in Earth radii."""
    return resolve_moon(elements, rates, jd).equatorial


def moon_mean_longitude(elements: LunarElements, rates: LunarRates, jd: float) -> float:
    """Moon's mean longitude (node + argument of perigee + mean anomaly), [0, 2π)."""
    now = lunar_elements_at(elements, rates, jd)
    return wrap_two_pi(now.long_ascending_node + now.arg_perigee + now.mean_anomaly)


def geocentric_positions(
    planets: Sequence[PlanetEntry],
    jd: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> dict[int, OrbitSolution]:
    """Geocentric positions of the Sun and planets, keyed by planet index.

    Earth's heliocentric position is resolved once and subtracted from every
    other planet. The Sun is the negation of Earth's heliocentric position.
    Earth itself is not included.

    Raises:
        ValueError: If a planet other than the Sun has no elements.
    """
    earth = planets[EARTH]
    if earth.elements is None or earth.rates is None:
        raise ValueError('Earth entry has no orbital elements')
    earth_solution = resolve_planet(
        earth.elements, earth.rates, earth.extras, jd, tolerance, max_iterations
    )
    earth_eq = np.array(earth_solution.equatorial)
    earth_ecl = np.array(earth_solution.ecliptic)

    positions: dict[int, OrbitSolution] = {}
    for planet in planets:
        if planet.index == EARTH:
            continue
        if planet.index == SUN:
            eq, ecl, converged = -earth_eq, -earth_ecl, earth_solution.converged
        else:
            if planet.elements is None or planet.rates is None:
                raise ValueError(f'{planet.name} entry has no orbital elements')
            helio = resolve_planet(
                planet.elements, planet.rates, planet.extras, jd, tolerance, max_iterations
            )
            eq = np.array(helio.equatorial) - earth_eq
            ecl = np.array(helio.ecliptic) - earth_ecl
            converged = helio.converged and earth_solution.converged
        positions[planet.index] = OrbitSolution(
            (float(eq[0]), float(eq[1]), float(eq[2])),
            (float(ecl[0]), float(ecl[1]), float(ecl[2])),
            converged,
        )
    if not earth_solution.converged:
        logger.debug('Earth Kepler solve did not converge at JD %.6f', jd)
    return positions
