"""CLI entry point: starsaver chart|positions subcommands."""

from __future__ import annotations

import argparse
import logging
import math
import shutil
import sys
from typing import NoReturn, TextIO

from starsaver.angle_utils import format_sexagesimal
from starsaver.config import get_catalog_path, get_constellations_path, get_log_level
from starsaver.constants import (
    DEFAULT_ANIMATION_MULT,
    DEFAULT_CELL_ASPECT,
    DEFAULT_FPS,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_LABEL_THRESHOLD,
    DEFAULT_LATITUDE_DEG,
    DEFAULT_LONGITUDE_DEG,
    DEFAULT_THRESHOLD,
    DEGREES_PER_HOUR_RA,
    EARTH,
    MOON_PHASE_NAMES,
    PLANET_NAMES,
)
from starsaver.engine import BodyPosition, SkyEngine, SkyFrame
from starsaver.params import ChartOptions, DisplayGrid, EngineConfig, Observer
from starsaver.planets import build_moon_entry, build_planet_table, parse_planet
from starsaver.projection import fit_square_grid
from starsaver.rendering.text_chart import render_chart
from starsaver.stars import read_constellations, read_star_catalog
from starsaver.time_utils import current_julian_date, frame_step_days, julian_date

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or STARSAVER_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _start_julian_date(datetime_text: str | None) -> float:
    if datetime_text is None:
        return current_julian_date()
    return julian_date(datetime_text)


def _display_grid(args: argparse.Namespace) -> DisplayGrid:
    if not args.fit:
        return DisplayGrid(height=args.height, width=args.width, cell_aspect=args.aspect)
    aspect = DEFAULT_CELL_ASPECT if args.aspect is None else args.aspect
    columns, lines = shutil.get_terminal_size()
    # Leave the last line for the shell prompt.
    height, width = fit_square_grid(max(lines - 1, 1), columns, aspect)
    logger.debug('Terminal %dx%d fits a %dx%d grid', lines, columns, height, width)
    return DisplayGrid(height=height, width=width, cell_aspect=aspect)


def _build_engine(args: argparse.Namespace) -> SkyEngine:
    observer = Observer.from_degrees(args.latitude, args.longitude)
    grid = _display_grid(args)
    stars = read_star_catalog(args.catalog or get_catalog_path())
    return SkyEngine(
        EngineConfig(observer=observer, grid=grid),
        stars,
        build_planet_table(),
        build_moon_entry(),
    )


def _format_position(name: str, position: BodyPosition) -> str:
    ra_hours = math.degrees(position.right_ascension) / DEGREES_PER_HOUR_RA
    ra = format_sexagesimal(ra_hours, 'hm')
    dec = format_sexagesimal(math.degrees(position.declination), 'dm')
    cell = f'({position.row:3d},{position.col:3d})' if position.visible else '   below   '
    return (
        f'{name:<12} {ra:>12} {dec:>12} '
        f'az {math.degrees(position.azimuth):7.2f} alt {math.degrees(position.altitude):7.2f} '
        f'{cell}'
    )


def _write_positions(
    frame: SkyFrame, engine: SkyEngine, out: TextIO, body: int | None = None
) -> None:
    out.write(f'JD {frame.julian_date:.6f}  GMST {math.degrees(frame.sidereal_time):.4f} deg\n')
    for index, position in sorted(frame.planets.items()):
        if body is None or body == index:
            out.write(_format_position(PLANET_NAMES[index], position) + '\n')
    if body is None:
        phase = MOON_PHASE_NAMES[frame.moon_phase]
        out.write(_format_position(engine.moon.name, frame.moon) + f'  {phase}\n')
    if frame.unconverged:
        logger.warning('Kepler solve did not converge for %s', ', '.join(frame.unconverged))


def _chart_cmd(args: argparse.Namespace) -> int:
    """Print one chart per frame, stepping simulated time between frames.

    Returns:
        Exit code 0 on success, 1 on invalid input.
    """
    try:
        engine = _build_engine(args)
        jd = _start_julian_date(args.datetime)
        if args.frames < 1:
            raise ValueError(f'frames must be greater than or equal to 1, got {args.frames}')
        step = frame_step_days(args.fps, args.animation_mult)
        constellations = ()
        if args.constellations:
            constellations = read_constellations(
                args.constellation_file or get_constellations_path(), len(engine.stars)
            )
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    options = ChartOptions(
        threshold=args.threshold,
        label_threshold=args.label_thresh,
        unicode=not args.no_unicode,
        constellations=args.constellations,
        grid=args.grid,
    )
    for frame_number in range(args.frames):
        frame = engine.update(jd)
        if frame_number > 0:
            sys.stdout.write('\n')
        lines = render_chart(
            frame,
            engine.config.grid,
            engine.stars,
            engine.planets,
            engine.moon,
            options,
            constellations,
            engine.magnitude_order,
        )
        sys.stdout.write('\n'.join(lines) + '\n')
        jd += step
    return 0


def _positions_cmd(args: argparse.Namespace) -> int:
    """Print a table of Sun, planet, and Moon positions.

    Returns:
        Exit code 0 on success, 1 on invalid input.
    """
    try:
        engine = _build_engine(args)
        jd = _start_julian_date(args.datetime)
        body = parse_planet(args.body) if args.body else None
        if body == EARTH:
            raise ValueError("Earth is the observer's location; choose another body")
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    _write_positions(engine.update(jd), engine, sys.stdout, body)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-a',
        '--latitude',
        type=float,
        default=DEFAULT_LATITUDE_DEG,
        help='Observer latitude in degrees, north positive (default: Boston, MA)',
    )
    parser.add_argument(
        '-o',
        '--longitude',
        type=float,
        default=DEFAULT_LONGITUDE_DEG,
        help='Observer longitude in degrees, east positive (default: Boston, MA)',
    )
    parser.add_argument(
        '-d',
        '--datetime',
        type=str,
        default=None,
        help='Observation time in UTC, yyyy-mm-ddThh:mm:ss (default: now)',
    )
    parser.add_argument('--height', type=int, default=DEFAULT_GRID_HEIGHT, help='Grid rows')
    parser.add_argument('--width', type=int, default=DEFAULT_GRID_WIDTH, help='Grid columns')
    parser.add_argument(
        '--aspect',
        type=float,
        default=None,
        help='Cell height / cell width; keeps the sky circular (default: fill the grid)',
    )
    parser.add_argument(
        '--fit',
        action='store_true',
        help='Size the grid to the terminal; overrides --height and --width',
    )
    parser.add_argument('--catalog', type=str, default=None, help='Star catalog file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')


def main() -> int:
    """Entry point for starsaver CLI (chart | positions).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='starsaver',
        description='View stars, planets, and the Moon, right in your terminal.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    chart_parser = subparsers.add_parser('chart', help='Draw the sky as a character grid')
    _add_common_arguments(chart_parser)
    chart_parser.add_argument(
        '-t',
        '--threshold',
        type=float,
        default=DEFAULT_THRESHOLD,
        help='Draw stars at or brighter than this magnitude',
    )
    chart_parser.add_argument(
        '-l',
        '--label-thresh',
        type=float,
        default=DEFAULT_LABEL_THRESHOLD,
        help='Label named stars at or brighter than this magnitude',
    )
    chart_parser.add_argument('--frames', type=int, default=1, help='Number of frames to print')
    chart_parser.add_argument(
        '-f', '--fps', type=int, default=DEFAULT_FPS, help='Frames per simulated second'
    )
    chart_parser.add_argument(
        '-m',
        '--animation-mult',
        type=float,
        default=DEFAULT_ANIMATION_MULT,
        help='Simulated time speed relative to real time',
    )
    chart_parser.add_argument(
        '--constellations', action='store_true', help='Draw constellation stick figures'
    )
    chart_parser.add_argument(
        '--constellation-file', type=str, default=None, help='Constellation figure file'
    )
    chart_parser.add_argument('--grid', action='store_true', help='Draw an azimuthal grid')
    chart_parser.add_argument(
        '--no-unicode', action='store_true', help='Only use ASCII characters'
    )

    positions_parser = subparsers.add_parser(
        'positions', help='List Sun, planet, and Moon positions'
    )
    _add_common_arguments(positions_parser)
    positions_parser.add_argument(
        '--body',
        type=str,
        default=None,
        help='Only this body (name or index 0-8, except Earth 3)',
    )

    args = parser.parse_args()
    _configure_logging(args.verbose)
    if args.command == 'chart':
        return _chart_cmd(args)
    return _positions_cmd(args)


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
