"""Sky position and projection engine for a terminal star chart.

This package computes where stars, the Sun, the planets, and the Moon appear
in the sky for an observer and maps them onto a character grid:
- Time: Julian date and Greenwich mean sidereal time
- Orbits: Keplerian propagation for planets and the Moon, proper motion for stars
- Frames and projection: alt-azimuth conversion and zenith stereographic projection
- Engine: per-frame pipeline producing display cells and visibility flags

Calendar day numbers come from rms-julian.
"""

__all__: list[str] = []
