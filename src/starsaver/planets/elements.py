"""Orbital element tables (degrees, as published).

Planets: Standish, "Keplerian Elements for Approximate Positions of the Major
Planets", tables 2a and 2b (3000 BC to AD 3000), including the extra
mean-anomaly terms for Jupiter through Neptune. Rates are per Julian century
from J2000.0.

Moon: geocentric elements after Schlyter, "How to compute planetary
positions". Rates are per day from JD 2451543.5.
"""

# name: (a, e, I, L, long. perihelion, long. ascending node)
PLANET_ELEMENTS_DEG: dict[str, tuple[float, float, float, float, float, float]] = {
    'Mercury': (0.38709843, 0.20563661, 7.00559432, 252.25166724, 77.45771895, 48.33961819),
    'Venus': (0.72332102, 0.00676399, 3.39777545, 181.97970850, 131.76755713, 76.67261496),
    'Earth': (1.00000018, 0.01673163, -0.00054346, 100.46691572, 102.93005885, -5.11260389),
    'Mars': (1.52371243, 0.09336511, 1.85181869, -4.56813164, -23.91744784, 49.71320984),
    'Jupiter': (5.20248019, 0.04853590, 1.29861416, 34.33479152, 14.27495244, 100.29282654),
    'Saturn': (9.54149883, 0.05550825, 2.49424102, 50.07571329, 92.86136063, 113.63998702),
    'Uranus': (19.18797948, 0.04685740, 0.77298127, 314.20276625, 172.43404441, 73.96250215),
    'Neptune': (30.06952752, 0.00895439, 1.77005520, 304.22289287, 46.68158724, 131.78635853),
}

PLANET_RATES_DEG: dict[str, tuple[float, float, float, float, float, float]] = {
    'Mercury': (0.00000000, 0.00002123, -0.00590158, 149472.67486623, 0.15940013, -0.12214182),
    'Venus': (-0.00000026, -0.00005107, 0.00043494, 58517.81560260, 0.05679648, -0.27274174),
    'Earth': (-0.00000003, -0.00003661, -0.01337178, 35999.37306329, 0.31795260, -0.24123856),
    'Mars': (0.00000097, 0.00009149, -0.00724757, 19140.29934243, 0.45223625, -0.26852431),
    'Jupiter': (-0.00002864, 0.00018026, -0.00322699, 3034.90371757, 0.18199196, 0.13024619),
    'Saturn': (-0.00003065, -0.00032044, 0.00451969, 1222.11494724, 0.54179478, -0.25015002),
    'Uranus': (-0.00020455, -0.00001550, -0.00180155, 428.49512595, 0.09266985, 0.05739699),
    'Neptune': (0.00006447, 0.00000818, 0.00022400, 218.46515314, 0.01009938, -0.00606302),
}

# name: (b, c, s, f)
PLANET_EXTRAS_DEG: dict[str, tuple[float, float, float, float]] = {
    'Jupiter': (-0.00012452, 0.06064060, -0.35635438, 38.35125000),
    'Saturn': (0.00025899, -0.13434469, 0.87320147, 38.35125000),
    'Uranus': (0.00058331, -0.97731848, 0.17689245, 7.67025000),
    'Neptune': (-0.00041348, 0.68346318, -0.10162547, 7.67025000),
}

# (long. ascending node, inclination, arg. perigee, a [Earth radii], e, mean anomaly)
MOON_ELEMENTS_DEG = (125.1228, 5.1454, 318.0634, 60.2666, 0.054900, 115.3654)
MOON_RATES_DEG = (-0.0529538083, 0.0, 0.1643573223, 0.0, 0.0, 13.0649929509)

# index order matches constants.PLANET_NAMES
PLANET_SYMBOLS_UNICODE = ('☉', '☿', '♀', '🜨', '♂', '♃', '♄', '⛢', '♆')
PLANET_SYMBOLS_ASCII = ('@', 'h', 'v', 'e', 'm', 'J', 'S', 'U', 'N')
