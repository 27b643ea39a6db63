"""Angle wrapping, sexagesimal parsing, and formatting."""

from __future__ import annotations

import math
import re

from starsaver.constants import TWO_PI

_SEXAGESIMAL_SPLIT = re.compile(r'[\s:]+')


def wrap_two_pi(angle: float) -> float:
    """Wrap an angle in radians into [0, 2π).

    Parameters:
        angle: Angle in radians.

    Returns:
        Equivalent angle in [0, 2π).
    """
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def wrap_pi(angle: float) -> float:
    """Wrap an angle in radians into [-π, π)."""
    return wrap_two_pi(angle + math.pi) - math.pi


def parse_sexagesimal(string: str) -> float | None:
    """Parse 'd m s', 'd m', or 'd' (space or colon separated) to a single value.

    Minutes and seconds must be non-negative; a leading minus sign applies to
    the whole value, so '-0 30' is -0.5. The result is in the units of the
    first field (hours for right ascension, degrees for declination).

    Parameters:
        string: Sexagesimal text such as '06 45 08.9' or '-16:42:58'.

    Returns:
        Value in the units of the first field, or None on parse failure.
    """
    text = string.strip()
    if not text:
        return None
    fields = _SEXAGESIMAL_SPLIT.split(text)
    if len(fields) > 3:
        return None
    try:
        numbers = [float(f) for f in fields]
    except ValueError:
        return None
    if any(n < 0 for n in numbers[1:]):
        return None
    value = abs(numbers[0])
    for divisor, n in zip((60.0, 3600.0), numbers[1:]):
        value += n / divisor
    return -value if text.startswith('-') else value


def format_sexagesimal(value: float, separator: str = '::', ndecimal: int = 1) -> str:
    """Format a value in hours or degrees as 'dd mm ss.s'.

    Parameters:
        value: Angle in hours (right ascension) or degrees.
        separator: Two characters placed after the first and second fields
            (e.g. 'hm' for '06h45m08.9', 'dm' for '-16d42m58.0').
        ndecimal: Decimal places for the seconds field.

    Returns:
        Formatted string, with a leading '-' for negative values.
    """
    sep1, sep2 = (separator + '  ')[:2]
    scale = 10**ndecimal
    total = round(abs(value) * 3600.0 * scale)
    whole_seconds, frac = divmod(total, scale)
    minutes, seconds = divmod(whole_seconds, 60)
    degrees, minutes = divmod(minutes, 60)
    sign = '-' if value < 0 and total > 0 else ''
    frac_text = f'.{frac:0{ndecimal}d}' if ndecimal > 0 else ''
    return f'{sign}{degrees:02d}{sep1}{minutes:02d}{sep2}{seconds:02d}{frac_text}'
