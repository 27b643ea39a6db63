"""Immutable configuration values for the engine, grid, and chart."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from starsaver.constants import (
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_LABEL_THRESHOLD,
    DEFAULT_LATITUDE_DEG,
    DEFAULT_LONGITUDE_DEG,
    DEFAULT_THRESHOLD,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
)
from starsaver.projection import GridGeometry


@dataclass(frozen=True)
class Observer:
    """Observer location in radians (latitude north, longitude east), sea level."""

    latitude: float
    longitude: float

    @classmethod
    def from_degrees(cls, latitude_deg: float, longitude_deg: float) -> Observer:
        """Build an Observer from degrees.

        Raises:
            ValueError: If latitude is outside [-90, 90] or longitude outside
                [-180, 180].
        """
        if not -90.0 <= latitude_deg <= 90.0:
            raise ValueError(f'Latitude out of range [-90°, 90°]: {latitude_deg}')
        if not -180.0 <= longitude_deg <= 180.0:
            raise ValueError(f'Longitude out of range [-180°, 180°]: {longitude_deg}')
        return cls(math.radians(latitude_deg), math.radians(longitude_deg))


@dataclass(frozen=True)
class DisplayGrid:
    """Display surface: rows, columns, and optional cell aspect (height / width)."""

    height: int = DEFAULT_GRID_HEIGHT
    width: int = DEFAULT_GRID_WIDTH
    cell_aspect: float | None = None

    def __post_init__(self) -> None:
        # Validates dimensions and aspect.
        GridGeometry.for_grid(self.height, self.width, self.cell_aspect)

    def geometry(self) -> GridGeometry:
        return GridGeometry.for_grid(self.height, self.width, self.cell_aspect)

    def contains(self, row: int, col: int) -> bool:
        """True if (row, col) lies on the grid."""
        return 0 <= row < self.height and 0 <= col < self.width


@dataclass(frozen=True)
class EngineConfig:
    """Everything the position update driver needs besides the catalogs."""

    observer: Observer = field(
        default_factory=lambda: Observer.from_degrees(DEFAULT_LATITUDE_DEG, DEFAULT_LONGITUDE_DEG)
    )
    grid: DisplayGrid = field(default_factory=DisplayGrid)
    kepler_tolerance: float = KEPLER_TOLERANCE
    kepler_max_iterations: int = KEPLER_MAX_ITERATIONS


@dataclass(frozen=True)
class ChartOptions:
    """What the chart writer draws and with which symbol set."""

    threshold: float = DEFAULT_THRESHOLD
    label_threshold: float = DEFAULT_LABEL_THRESHOLD
    unicode: bool = True
    constellations: bool = False
    grid: bool = False
