"""Zenith-centred stereographic projection and mapping onto a display grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

from starsaver.constants import HORIZON_TOLERANCE


def stereographic_north(R: float, theta: float, phi: float) -> tuple[float, float]:
    """Project a point of a sphere onto the plane tangent at its north pole.

    The plane radius 2R tan(phi/2) is divided by the radius of the projected
    equator (2R), so the pole maps to 0 and phi = π/2 maps to 1. The mapping is
    conformal and diverges as phi approaches π.

    Parameters:
        R: Sphere radius.
        theta: Azimuthal angle around the pole (radians).
        phi: Co-latitude from the pole (radians).

    Returns:
        (radius, angle) in the plane; angle equals theta.
    """
    radius = 2.0 * R * math.tan(0.5 * phi) / (2.0 * R)
    return radius, theta


def is_projectable(radius: float) -> bool:
    """True if a projected radius lies on or inside the horizon circle."""
    return abs(radius) <= 1.0 + HORIZON_TOLERANCE


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class GridGeometry:
    """Centre and radii (in cells) of the ellipse the unit disk maps onto."""

    v_center: float
    h_center: float
    v_radius: float
    h_radius: float

    @classmethod
    def for_grid(
        cls, height: int, width: int, cell_aspect: float | None = None
    ) -> GridGeometry:
        """Geometry for a grid of height rows and width columns.

        Parameters:
            height: Number of rows (at least 1).
            width: Number of columns (at least 1).
            cell_aspect: Cell height divided by cell width. None stretches the
                disk to the ellipse inscribed in the grid; a value keeps it
                circular on screen.

        Raises:
            ValueError: If a dimension is below 1 or cell_aspect is not positive.
        """
        if height < 1 or width < 1:
            raise ValueError(f'Grid must be at least 1x1, got {height}x{width}')
        v_center = (height - 1) / 2.0
        h_center = (width - 1) / 2.0
        if cell_aspect is None:
            return cls(v_center, h_center, v_center, h_center)
        if cell_aspect <= 0:
            raise ValueError(f'cell_aspect must be positive, got {cell_aspect!r}')
        v_radius = min(v_center, h_center / cell_aspect)
        return cls(v_center, h_center, v_radius, v_radius * cell_aspect)

    def to_cell(self, radius: float, angle: float) -> tuple[int, int]:
        """Map a plane point (radius, angle) to a (row, col) cell."""
        row = round_half_up(self.v_center - self.v_radius * radius * math.sin(angle))
        col = round_half_up(self.h_center + self.h_radius * radius * math.cos(angle))
        return row, col

    def center_cell(self) -> tuple[int, int]:
        """Cell of the projection centre (the zenith)."""
        return round_half_up(self.v_center), round_half_up(self.h_center)


def polar_to_grid(
    radius: float,
    angle: float,
    height: int,
    width: int,
    cell_aspect: float | None = None,
) -> tuple[int, int]:
    """Map a unit-disk point onto an integer display grid.

    Rows grow downward, so angle π/2 is the top of the grid. Results outside
    [0, height) x [0, width) are possible near the disk edge; callers clip.

    Returns:
        (row, col) cell indices.
    """
    return GridGeometry.for_grid(height, width, cell_aspect).to_cell(radius, angle)


def fit_square_grid(rows: int, cols: int, cell_aspect: float) -> tuple[int, int]:
    """Largest (height, width) that shows a circle undistorted in a terminal.

    Parameters:
        rows: Terminal rows available.
        cols: Terminal columns available.
        cell_aspect: Cell height divided by cell width.

    Returns:
        (height, width) no larger than (rows, cols).
    """
    if cell_aspect <= 0:
        raise ValueError(f'cell_aspect must be positive, got {cell_aspect!r}')
    width = min(cols, round_half_up(rows * cell_aspect))
    height = min(rows, round_half_up(width / cell_aspect))
    return max(height, 1), max(width, 1)
