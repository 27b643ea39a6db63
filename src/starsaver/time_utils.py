"""Julian dates and sidereal time, with calendar day numbers from rms-julian."""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone

import julian

from starsaver.angle_utils import wrap_two_pi
from starsaver.constants import (
    DAYS_PER_JULIAN_CENTURY,
    GMST_AT_J2000_DEG,
    GMST_RATE_DEG_PER_DAY,
    GMST_T2_DEG,
    GMST_T3_DIVISOR,
    J2000_JD,
    J2000_MIDNIGHT_JD,
    SECONDS_PER_DAY,
)

logger = logging.getLogger(__name__)

# yyyy-mm-ddThh:mm:ss, optionally with a space separator or trailing Z
_DATETIME_RE = re.compile(
    r'(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[T ]'
    r'(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}(?:\.\d+)?)Z?'
)


class ParseError(ValueError):
    """Date-time string does not match yyyy-mm-ddThh:mm:ss."""


def _julian_date_from_parts(
    year: int, month: int, day: int, hour: int, minute: int, second: float
) -> float:
    day_number = int(julian.day_from_ymd(year, month, day))
    seconds = hour * 3600.0 + minute * 60.0 + second
    return J2000_MIDNIGHT_JD + day_number + seconds / SECONDS_PER_DAY


def julian_date(text: str) -> float:
    """Convert a UTC date-time string to a Julian date.

    Parameters:
        text: UTC date-time as 'yyyy-mm-ddThh:mm:ss' (a space may replace the
            'T'; a trailing 'Z' is accepted).

    Returns:
        Julian date in days; the fraction encodes the time of day.

    Raises:
        ParseError: If the string does not match the grammar or names an
            impossible calendar date or time.
    """
    match = _DATETIME_RE.fullmatch(text.strip())
    if match is None:
        raise ParseError(f'Unable to parse datetime string {text!r}')
    fields = match.groupdict()
    year, month, day = int(fields['year']), int(fields['month']), int(fields['day'])
    hour, minute = int(fields['hour']), int(fields['minute'])
    second = float(fields['second'])
    if hour > 23 or minute > 59 or second >= 60.0:
        raise ParseError(f'Invalid time of day in {text!r}')
    # Julian calendar before 1582-10-15, Gregorian after; dates in the gap and
    # out-of-range fields do not map back to themselves.
    day_number = julian.day_from_ymd(year, month, day)
    if tuple(int(v) for v in julian.ymd_from_day(day_number)) != (year, month, day):
        raise ParseError(f'Invalid calendar date in {text!r}')
    return _julian_date_from_parts(year, month, day, hour, minute, second)


def julian_date_from_datetime(dt: datetime) -> float:
    """Convert a datetime to a Julian date. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    second = dt.second + dt.microsecond / 1.0e6
    return _julian_date_from_parts(dt.year, dt.month, dt.day, dt.hour, dt.minute, second)


def current_julian_date() -> float:
    """Julian date of the system clock (UTC)."""
    jd = julian_date_from_datetime(datetime.now(timezone.utc))
    logger.debug('Current Julian date %.6f', jd)
    return jd


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def sidereal_time(jd: float) -> float:
    """Greenwich mean sidereal time.

    Parameters:
        jd: Julian date (UTC).

    Returns:
        GMST in radians, wrapped into [0, 2π).
    """
    d = jd - J2000_JD
    t = julian_centuries(jd)
    gmst_deg = (
        GMST_AT_J2000_DEG
        + GMST_RATE_DEG_PER_DAY * d
        + GMST_T2_DEG * t * t
        - t * t * t / GMST_T3_DIVISOR
    )
    return wrap_two_pi(math.radians(math.fmod(gmst_deg, 360.0)))


def frame_step_days(fps: int, animation_mult: float = 1.0) -> float:
    """Simulated time advanced per frame, in days.

    Parameters:
        fps: Frames per second (at least 1).
        animation_mult: Speed relative to real time (2.0 is twice real time).

    Returns:
        Increment to add to the Julian date after each frame.

    Raises:
        ValueError: If fps is less than 1.
    """
    if fps < 1:
        raise ValueError(f'fps must be greater than or equal to 1, got {fps}')
    return animation_mult / fps / SECONDS_PER_DAY
