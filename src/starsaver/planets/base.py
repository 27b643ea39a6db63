"""Orbital element dataclasses and planet/Moon table entries.

Angles are stored in radians; tables in degrees are converted once by the
``from_degrees`` constructors when the entries are built.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from starsaver.constants import MOON_PHASE_ASCII


@dataclass(frozen=True)
class KeplerElements:
    """Heliocentric osculating elements at J2000.0 (Standish convention)."""

    semi_major_axis: float  # AU
    eccentricity: float
    inclination: float
    mean_longitude: float
    long_perihelion: float
    long_ascending_node: float

    @classmethod
    def from_degrees(
        cls, a: float, e: float, i: float, L: float, w_bar: float, node: float
    ) -> KeplerElements:
        return cls(a, e, math.radians(i), math.radians(L), math.radians(w_bar), math.radians(node))


@dataclass(frozen=True)
class KeplerRates:
    """Secular rates of KeplerElements per Julian century."""

    semi_major_axis: float
    eccentricity: float
    inclination: float
    mean_longitude: float
    long_perihelion: float
    long_ascending_node: float

    @classmethod
    def from_degrees(
        cls, a: float, e: float, i: float, L: float, w_bar: float, node: float
    ) -> KeplerRates:
        return cls(a, e, math.radians(i), math.radians(L), math.radians(w_bar), math.radians(node))


@dataclass(frozen=True)
class PerturbationTerms:
    """Extra mean-anomaly terms b T² + c cos(f T) + s sin(f T) for outer planets."""

    b: float
    c: float
    s: float
    f: float

    @classmethod
    def from_degrees(cls, b: float, c: float, s: float, f: float) -> PerturbationTerms:
        return cls(math.radians(b), math.radians(c), math.radians(s), math.radians(f))


@dataclass(frozen=True)
class LunarElements:
    """Geocentric lunar elements at the lunar epoch (JD 2451543.5)."""

    long_ascending_node: float
    inclination: float
    arg_perigee: float
    semi_major_axis: float  # Earth radii
    eccentricity: float
    mean_anomaly: float

    @classmethod
    def from_degrees(
        cls, node: float, i: float, w: float, a: float, e: float, M: float
    ) -> LunarElements:
        return cls(math.radians(node), math.radians(i), math.radians(w), a, e, math.radians(M))


@dataclass(frozen=True)
class LunarRates:
    """Rates of LunarElements per day."""

    long_ascending_node: float
    inclination: float
    arg_perigee: float
    semi_major_axis: float
    eccentricity: float
    mean_anomaly: float

    @classmethod
    def from_degrees(
        cls, node: float, i: float, w: float, a: float, e: float, M: float
    ) -> LunarRates:
        return cls(math.radians(node), math.radians(i), math.radians(w), a, e, math.radians(M))


@dataclass(frozen=True)
class PlanetEntry:
    """One row of the planet table. The Sun carries no elements."""

    index: int
    name: str
    symbol_unicode: str
    symbol_ascii: str
    elements: KeplerElements | None = None
    rates: KeplerRates | None = None
    extras: PerturbationTerms | None = None


@dataclass(frozen=True)
class MoonEntry:
    """The Moon's orbital elements and display symbols."""

    elements: LunarElements
    rates: LunarRates
    name: str = 'Moon'
    symbol_ascii: str = MOON_PHASE_ASCII
