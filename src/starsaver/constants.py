"""Fixed constants: epochs, unit conversions, body indices, and display glyphs."""

import math

# Epochs (Julian dates)
J2000_JD = 2451545.0  # 2000-01-01 12:00 UTC
J2000_MIDNIGHT_JD = 2451544.5  # 2000-01-01 00:00 UTC; rms-julian day 0
LUNAR_EPOCH_JD = 2451543.5  # 2000 Jan 0.0 UT; day 0 of the lunar element rates

# Time
SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0

# Angles
TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h
ARCSEC_PER_DEGREE = 3600.0

# Obliquity of the ecliptic at J2000 (degrees)
OBLIQUITY_J2000_DEG = 23.43928

# Greenwich mean sidereal time polynomial (degrees; Meeus 12.4)
GMST_AT_J2000_DEG = 280.46061837
GMST_RATE_DEG_PER_DAY = 360.98564736629
GMST_T2_DEG = 0.000387933
GMST_T3_DIVISOR = 38710000.0

# Kepler solver defaults
KEPLER_TOLERANCE = 1.0e-6  # radians
KEPLER_MAX_ITERATIONS = 30

# Projected radius above 1 by more than this is below the horizon
HORIZON_TOLERANCE = 1.0e-12

# Planet table indices. Earth is resolved as the geocentric reference only.
SUN = 0
MERCURY = 1
VENUS = 2
EARTH = 3
MARS = 4
JUPITER = 5
SATURN = 6
URANUS = 7
NEPTUNE = 8
NUM_PLANETS = 9

PLANET_NAMES = (
    'Sun',
    'Mercury',
    'Venus',
    'Earth',
    'Mars',
    'Jupiter',
    'Saturn',
    'Uranus',
    'Neptune',
)

# Moon phase bins: 0 = new, 2 = first quarter, 4 = full, 6 = last quarter
NUM_MOON_PHASES = 8
MOON_PHASE_NAMES = (
    'new',
    'waxing crescent',
    'first quarter',
    'waxing gibbous',
    'full',
    'waning gibbous',
    'last quarter',
    'waning crescent',
)
MOON_PHASE_UNICODE = ('🌑︎', '🌒︎', '🌓︎', '🌔︎', '🌕︎', '🌖︎', '🌗︎', '🌘︎')
MOON_PHASE_ASCII = 'M'

# Defaults (Boston, MA)
DEFAULT_LATITUDE_DEG = 42.361145
DEFAULT_LONGITUDE_DEG = -71.057083
DEFAULT_THRESHOLD = 3.0  # stars at or brighter than this magnitude are drawn
DEFAULT_LABEL_THRESHOLD = 0.5  # stars at or brighter than this are labeled
DEFAULT_FPS = 24
DEFAULT_ANIMATION_MULT = 1.0
DEFAULT_GRID_HEIGHT = 41
DEFAULT_GRID_WIDTH = 81
DEFAULT_CELL_ASPECT = 2.0  # typical terminal cell height / width
