"""Character-grid sky chart built from a SkyFrame.

The chart never computes coordinates: every cell and visibility flag comes
from the frame. Cells that fall outside the grid are dropped.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from starsaver.constants import (
    EARTH,
    HALF_PI,
    MOON_PHASE_UNICODE,
)
from starsaver.engine import BodyPosition, SkyFrame
from starsaver.params import ChartOptions, DisplayGrid
from starsaver.planets.base import MoonEntry, PlanetEntry
from starsaver.projection import round_half_up
from starsaver.stars import ConstellationFigure, StarEntry, catalog_index, stars_by_magnitude

# (magnitude upper bound, unicode glyph, ascii glyph), brightest first
_STAR_GLYPHS = (
    (0.5, '✦', '*'),
    (1.5, '★', '*'),
    (2.5, '•', '+'),
    (math.inf, '·', '.'),
)
# Candidate spoke spacings in degrees, finest first
_GRID_STEPS_DEG = (10, 15, 30, 45, 90)
_GRID_MIN_ROWS = 10  # rows between adjacent spokes at the horizon


def star_glyph(magnitude: float, unicode: bool = True) -> str:
    """Glyph for a star of the given magnitude."""
    for limit, glyph_unicode, glyph_ascii in _STAR_GLYPHS:
        if magnitude < limit:
            return glyph_unicode if unicode else glyph_ascii
    # NaN magnitudes compare false against every limit.
    return _STAR_GLYPHS[-1][1] if unicode else _STAR_GLYPHS[-1][2]


class _Canvas:
    """Rows of single-cell strings with clipping."""

    def __init__(self, grid: DisplayGrid) -> None:
        self.grid = grid
        self.cells = [[' '] * grid.width for _ in range(grid.height)]

    def put(self, row: int, col: int, glyph: str) -> None:
        if self.grid.contains(row, col):
            self.cells[row][col] = glyph

    def text(self, row: int, col: int, text: str) -> None:
        for offset, char in enumerate(text):
            self.put(row, col + offset, char)

    def line(self, r0: int, c0: int, r1: int, c1: int, glyph: str) -> None:
        """Bresenham line between two cells, endpoints included."""
        dr, dc = abs(r1 - r0), abs(c1 - c0)
        step_r = 1 if r1 >= r0 else -1
        step_c = 1 if c1 >= c0 else -1
        err = dc - dr
        r, c = r0, c0
        while True:
            self.put(r, c, glyph)
            if r == r1 and c == c1:
                return
            e2 = 2 * err
            if e2 > -dr:
                err -= dr
                c += step_c
            if e2 < dc:
                err += dc
                r += step_r

    def lines(self) -> list[str]:
        return [''.join(row).rstrip() for row in self.cells]


def _draw_constellations(
    canvas: _Canvas,
    frame: SkyFrame,
    stars: Sequence[StarEntry],
    figures: Sequence[ConstellationFigure],
    options: ChartOptions,
) -> None:
    line_glyph = '·' if options.unicode else '.'
    node_glyph = '○' if options.unicode else '+'
    for figure in figures:
        for number_a, number_b in figure.segments:
            a, b = frame.segment(number_a, number_b)
            if not (a.visible and b.visible):
                continue
            mag_a = stars[catalog_index(number_a, len(stars))].magnitude
            mag_b = stars[catalog_index(number_b, len(stars))].magnitude
            if mag_a > options.threshold or mag_b > options.threshold:
                continue
            canvas.line(a.row, a.col, b.row, b.col, line_glyph)
            canvas.put(a.row, a.col, node_glyph)
            canvas.put(b.row, b.col, node_glyph)


def _draw_stars(
    canvas: _Canvas,
    frame: SkyFrame,
    stars: Sequence[StarEntry],
    magnitude_order: Sequence[int],
    options: ChartOptions,
) -> None:
    # Dimmest first so brighter stars end up on top.
    for number in reversed(magnitude_order):
        star = stars[catalog_index(number, len(stars))]
        if star.magnitude > options.threshold:
            continue
        position = frame.star(number)
        if not position.visible:
            continue
        canvas.put(position.row, position.col, star_glyph(star.magnitude, options.unicode))
        if star.name and star.magnitude <= options.label_threshold:
            canvas.text(position.row - 1, position.col + 1, star.name)


def _draw_body(canvas: _Canvas, position: BodyPosition, glyph: str, label: str | None) -> None:
    if not position.visible:
        return
    canvas.put(position.row, position.col, glyph)
    if label:
        canvas.text(position.row - 1, position.col + 1, label)


def grid_step_degrees(v_radius: float) -> int:
    """Finest spoke spacing whose neighbouring spokes end at least 10 rows apart.

    Parameters:
        v_radius: Vertical radius of the horizon ellipse, in rows.

    Returns:
        A step from 10, 15, 30, 45 or 90 degrees; 90 when even that is too
        crowded.
    """
    for step in _GRID_STEPS_DEG:
        if round_half_up(v_radius * math.sin(math.radians(step))) >= _GRID_MIN_ROWS:
            return step
    return _GRID_STEPS_DEG[-1]


def _draw_azimuthal_grid(canvas: _Canvas, options: ChartOptions) -> None:
    geometry = canvas.grid.geometry()
    center_row, center_col = geometry.center_cell()
    glyph = '·' if options.unicode else '.'
    for azimuth_deg in range(0, 360, grid_step_degrees(geometry.v_radius)):
        angle = math.radians(azimuth_deg) + HALF_PI
        row, col = geometry.to_cell(1.0, angle)
        canvas.line(center_row, center_col, row, col, glyph)
        label = str(azimuth_deg)
        # Keep labels inside the grid on the right-hand side.
        col_offset = -(len(label) - 1) if col > center_col else 0
        canvas.text(row, col + col_offset, label)


def _draw_cardinal_directions(canvas: _Canvas) -> None:
    center_row, center_col = canvas.grid.geometry().center_cell()
    canvas.put(0, center_col, 'N')
    canvas.put(canvas.grid.height - 1, center_col, 'S')
    canvas.put(center_row, 0, 'E')
    canvas.put(center_row, canvas.grid.width - 1, 'W')


def render_chart(
    frame: SkyFrame,
    grid: DisplayGrid,
    stars: Sequence[StarEntry],
    planets: Sequence[PlanetEntry],
    moon: MoonEntry,
    options: ChartOptions,
    constellations: Sequence[ConstellationFigure] = (),
    magnitude_order: Sequence[int] | None = None,
) -> list[str]:
    """Draw a frame onto a character grid.

    Parameters:
        frame: Positions computed for grid.
        grid: Display surface the frame was computed for.
        stars: Catalog (index = catalog number - 1).
        planets: Planet table, for symbols and names.
        moon: Moon entry, for its ASCII symbol.
        options: Threshold, labels, symbol set, overlays.
        constellations: Figures drawn when options.constellations is set.
        magnitude_order: Catalog numbers brightest first, as kept by
            SkyEngine.magnitude_order; sorted here when None.

    Returns:
        One string per grid row, trailing blanks removed.
    """
    if magnitude_order is None:
        magnitude_order = stars_by_magnitude(stars)
    canvas = _Canvas(grid)
    if options.grid:
        _draw_azimuthal_grid(canvas, options)
    if options.constellations:
        _draw_constellations(canvas, frame, stars, constellations, options)
    _draw_stars(canvas, frame, stars, magnitude_order, options)
    # Farthest planets first so the closest are drawn on top.
    for index in sorted(frame.planets, reverse=True):
        if index == EARTH:
            continue
        planet = planets[index]
        glyph = planet.symbol_unicode if options.unicode else planet.symbol_ascii
        _draw_body(canvas, frame.planets[index], glyph, planet.name)
    moon_glyph = MOON_PHASE_UNICODE[frame.moon_phase] if options.unicode else moon.symbol_ascii
    _draw_body(canvas, frame.moon, moon_glyph, moon.name)
    if not options.grid:
        _draw_cardinal_directions(canvas)
    return canvas.lines()
