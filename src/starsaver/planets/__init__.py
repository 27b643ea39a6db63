"""Planet and Moon tables built from the published element sets."""

from __future__ import annotations

import logging

from starsaver.constants import EARTH, NUM_PLANETS, PLANET_NAMES, SUN
from starsaver.planets.base import (
    KeplerElements,
    KeplerRates,
    LunarElements,
    LunarRates,
    MoonEntry,
    PerturbationTerms,
    PlanetEntry,
)
from starsaver.planets.elements import (
    MOON_ELEMENTS_DEG,
    MOON_RATES_DEG,
    PLANET_ELEMENTS_DEG,
    PLANET_EXTRAS_DEG,
    PLANET_RATES_DEG,
    PLANET_SYMBOLS_ASCII,
    PLANET_SYMBOLS_UNICODE,
)

logger = logging.getLogger(__name__)

__all__ = [
    'KeplerElements',
    'KeplerRates',
    'LunarElements',
    'LunarRates',
    'MoonEntry',
    'PerturbationTerms',
    'PlanetEntry',
    'build_moon_entry',
    'build_planet_table',
    'parse_planet',
]


def build_planet_table() -> tuple[PlanetEntry, ...]:
    """Planet table indexed SUN..NEPTUNE; Earth's row is the geocentric reference."""
    table: list[PlanetEntry] = []
    for index in range(NUM_PLANETS):
        name = PLANET_NAMES[index]
        if index == SUN:
            elements = rates = extras = None
        else:
            elements = KeplerElements.from_degrees(*PLANET_ELEMENTS_DEG[name])
            rates = KeplerRates.from_degrees(*PLANET_RATES_DEG[name])
            extras_deg = PLANET_EXTRAS_DEG.get(name)
            extras = PerturbationTerms.from_degrees(*extras_deg) if extras_deg else None
        table.append(
            PlanetEntry(
                index=index,
                name=name,
                symbol_unicode=PLANET_SYMBOLS_UNICODE[index],
                symbol_ascii=PLANET_SYMBOLS_ASCII[index],
                elements=elements,
                rates=rates,
                extras=extras,
            )
        )
    if table[EARTH].elements is None:
        raise RuntimeError('Earth elements are required as the geocentric reference')
    return tuple(table)


def build_moon_entry() -> MoonEntry:
    """Moon entry from the geocentric lunar elements."""
    return MoonEntry(
        elements=LunarElements.from_degrees(*MOON_ELEMENTS_DEG),
        rates=LunarRates.from_degrees(*MOON_RATES_DEG),
    )


def parse_planet(value: str) -> int:
    """Parse a planet index (0-8) or case-insensitive name to its table index.

    Raises:
        ValueError: If the value names no planet.
    """
    text = value.strip()
    if text.isdigit():
        index = int(text)
        if 0 <= index < NUM_PLANETS:
            return index
        raise ValueError(f'planet index must be 0-{NUM_PLANETS - 1}, got {index}')
    for index, name in enumerate(PLANET_NAMES):
        if name.lower() == text.lower():
            return index
    logger.warning('Unknown planet %r', value)
    raise ValueError(f'Unknown planet {value!r}')
