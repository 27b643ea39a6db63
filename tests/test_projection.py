"""Tests for the stereographic projection and grid mapping."""

from __future__ import annotations

import math

import pytest

from starsaver.projection import (
    GridGeometry,
    fit_square_grid,
    is_projectable,
    polar_to_grid,
    round_half_up,
    stereographic_north,
)


def test_stereographic_pole_and_equator() -> None:
    """The pole maps to 0 and the projected equator to 1, angle unchanged."""
    assert stereographic_north(1.0, 0.3, 0.0) == pytest.approx((0.0, 0.3))
    radius, angle = stereographic_north(5.0, 1.0, math.pi / 2)
    assert radius == pytest.approx(1.0)
    assert angle == 1.0


def test_stereographic_below_horizon_exceeds_one() -> None:
    radius, _ = stereographic_north(1.0, 0.0, math.pi / 2 + 0.1)
    assert radius > 1.0
    assert not is_projectable(radius)


def test_is_projectable_at_horizon() -> None:
    """The horizon itself is visible despite floating-point error."""
    assert is_projectable(math.tan(math.pi / 4))
    assert is_projectable(1.0 + 1e-13)
    assert not is_projectable(1.0 + 1e-9)


def test_round_half_up() -> None:
    """Halves round away from zero."""
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -3
    assert round_half_up(2.4) == 2
    assert round_half_up(0.5) == 1


def test_polar_to_grid_centre_and_edges() -> None:
    """Centre, top, left, and right of a 41x81 grid."""
    assert polar_to_grid(0.0, 0.0, 41, 81) == (20, 40)
    assert polar_to_grid(1.0, math.pi / 2, 41, 81) == (0, 40)
    assert polar_to_grid(1.0, math.pi, 41, 81) == (20, 0)
    assert polar_to_grid(1.0, 0.0, 41, 81) == (20, 80)
    assert polar_to_grid(1.0, 1.5 * math.pi, 41, 81) == (40, 40)


def test_grid_geometry_with_aspect() -> None:
    """Cell aspect keeps the disk circular and inside the grid."""
    fitted = GridGeometry.for_grid(41, 81, 2.0)
    assert (fitted.v_radius, fitted.h_radius) == (20.0, 40.0)
    narrow = GridGeometry.for_grid(41, 81, 2.5)
    assert narrow.v_radius == pytest.approx(16.0)
    assert narrow.h_radius == pytest.approx(40.0)
    assert narrow.center_cell() == (20, 40)


@pytest.mark.parametrize(
    'height,width,aspect', [(0, 10, None), (10, 0, None), (10, 10, 0.0), (10, 10, -1.0)]
)
def test_grid_geometry_rejects_bad_input(height: int, width: int, aspect: float | None) -> None:
    with pytest.raises(ValueError):
        GridGeometry.for_grid(height, width, aspect)


def test_fit_square_grid() -> None:
    """Largest undistorted grid fitting the terminal."""
    assert fit_square_grid(40, 200, 2.0) == (40, 80)
    assert fit_square_grid(40, 50, 2.0) == (25, 50)
    with pytest.raises(ValueError):
        fit_square_grid(40, 50, 0.0)
