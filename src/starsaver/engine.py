"""Position update driver: one pass of the sky pipeline per simulated instant.

For every body: equatorial position -> horizontal coordinates -> zenith
stereographic projection -> display cell. Each update returns a new immutable
SkyFrame; renderers read positions from it by table index and never from the
catalog entries themselves.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from starsaver.angle_utils import wrap_two_pi
from starsaver.constants import NUM_MOON_PHASES, SUN, TWO_PI
from starsaver.frames import (
    equatorial_to_horizontal,
    horizontal_to_spherical,
    rectangular_to_spherical,
)
from starsaver.orbits import (
    geocentric_positions,
    moon_mean_longitude,
    resolve_moon,
    star_position,
)
from starsaver.params import EngineConfig
from starsaver.planets.base import MoonEntry, PlanetEntry
from starsaver.projection import GridGeometry, is_projectable, stereographic_north
from starsaver.stars import StarEntry, catalog_index, stars_by_magnitude
from starsaver.time_utils import sidereal_time

logger = logging.getLogger(__name__)

_PHASE_BIN_WIDTH = TWO_PI / NUM_MOON_PHASES


@dataclass(frozen=True)
class BodyPosition:
    """Derived per-frame position of one body."""

    right_ascension: float
    declination: float
    azimuth: float
    altitude: float
    radius: float
    angle: float
    row: int
    col: int
    visible: bool


@dataclass(frozen=True)
class SkyFrame:
    """All body positions for one instant.

    stars is indexed by table index (catalog number - 1); planets is keyed by
    planet index and never contains Earth.
    """

    julian_date: float
    sidereal_time: float
    stars: tuple[BodyPosition, ...]
    planets: dict[int, BodyPosition]
    moon: BodyPosition
    moon_phase: int
    unconverged: tuple[str, ...] = ()

    def star(self, catalog_number: int) -> BodyPosition:
        """Position of a star by catalog number.

        Raises:
            CatalogIndexError: If the catalog number is not in the table.
        """
        return self.stars[catalog_index(catalog_number, len(self.stars))]

    def segment(self, catalog_a: int, catalog_b: int) -> tuple[BodyPosition, BodyPosition]:
        """Both endpoint positions of a constellation segment."""
        return self.star(catalog_a), self.star(catalog_b)


def moon_phase_index(sun_ecliptic_longitude: float, moon_longitude: float) -> int:
    """Phase bin 0-7 from the Moon's elongation east of the Sun.

    Bins are 45° wide and centred on the principal phases: 0 new,
    2 first quarter, 4 full, 6 last quarter.
    """
    elongation = wrap_two_pi(moon_longitude - sun_ecliptic_longitude)
    return int((elongation + 0.5 * _PHASE_BIN_WIDTH) // _PHASE_BIN_WIDTH) % NUM_MOON_PHASES


class SkyEngine:
    """Resolves, projects, and maps every body for a given Julian date."""

    def __init__(
        self,
        config: EngineConfig,
        stars: Sequence[StarEntry],
        planets: Sequence[PlanetEntry],
        moon: MoonEntry,
    ) -> None:
        for index, star in enumerate(stars):
            if star.catalog_number != index + 1:
                raise ValueError(
                    f'Star at index {index} has catalog number {star.catalog_number}; '
                    f'expected {index + 1}'
                )
        self.config = config
        self.stars = tuple(stars)
        # Catalog numbers brightest first, for draw order.
        self.magnitude_order = stars_by_magnitude(self.stars)
        self.planets = tuple(planets)
        self.moon = moon
        self._geometry: GridGeometry = config.grid.geometry()

    def _project(self, ra: float, dec: float, gmst: float) -> BodyPosition:
        observer = self.config.observer
        azimuth, altitude = equatorial_to_horizontal(
            ra, dec, gmst, observer.latitude, observer.longitude
        )
        theta, phi = horizontal_to_spherical(azimuth, altitude)
        radius, angle = stereographic_north(1.0, theta, phi)
        row, col = self._geometry.to_cell(radius, angle)
        return BodyPosition(
            right_ascension=ra,
            declination=dec,
            azimuth=azimuth,
            altitude=altitude,
            radius=radius,
            angle=angle,
            row=row,
            col=col,
            visible=is_projectable(radius),
        )

    def update(self, jd: float) -> SkyFrame:
        """Compute a SkyFrame for Julian date jd."""
        gmst = sidereal_time(jd)
        tolerance = self.config.kepler_tolerance
        max_iterations = self.config.kepler_max_iterations
        unconverged: list[str] = []

        star_positions = tuple(
            self._project(
                *star_position(
                    star.right_ascension, star.ra_motion, star.declination, star.dec_motion, jd
                ),
                gmst,
            )
            for star in self.stars
        )

        geocentric = geocentric_positions(self.planets, jd, tolerance, max_iterations)
        planet_positions: dict[int, BodyPosition] = {}
        for index, solution in geocentric.items():
            if not solution.converged:
                unconverged.append(self.planets[index].name)
            ra, dec = rectangular_to_spherical(*solution.equatorial)
            planet_positions[index] = self._project(ra, dec, gmst)

        moon_solution = resolve_moon(
            self.moon.elements, self.moon.rates, jd, tolerance, max_iterations
        )
        if not moon_solution.converged:
            unconverged.append(self.moon.name)
        moon_ra, moon_dec = rectangular_to_spherical(*moon_solution.equatorial)
        moon_position = self._project(moon_ra, moon_dec, gmst)

        sun_x, sun_y, _ = geocentric[SUN].ecliptic
        phase = moon_phase_index(
            math.atan2(sun_y, sun_x),
            moon_mean_longitude(self.moon.elements, self.moon.rates, jd),
        )

        if unconverged:
            logger.debug(
                'Kepler solve hit the iteration cap at JD %.6f for %s',
                jd,
                ', '.join(unconverged),
            )
        return SkyFrame(
            julian_date=jd,
            sidereal_time=gmst,
            stars=star_positions,
            planets=planet_positions,
            moon=moon_position,
            moon_phase=phase,
            unconverged=tuple(unconverged),
        )
