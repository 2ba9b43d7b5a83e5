"""Coordinate conversions.

Geodetic locations on a reference ellipsoid (:mod:`.geodetic`) and the
celestial coordinate systems (:mod:`.systems`): equatorial, ecliptic,
horizontal and galactic.
"""

from astroframe.coordinates.geodetic import (
    distance,
    geocentric_to_geodetic,
    geodetic_to_cartesian,
    geodetic_to_geocentric,
)
from astroframe.coordinates.systems import (
    GALACTIC_POLE_DEC,
    GALACTIC_POLE_NODE_J2000,
    GALACTIC_POLE_RA,
    CoordinateSystem,
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
    equatorial_to_galactic,
    equatorial_to_horizontal,
    galactic_to_equatorial,
    horizontal_to_equatorial,
    obliquity_for,
    transform,
)

__all__ = [
    "CoordinateSystem",
    "GALACTIC_POLE_DEC",
    "GALACTIC_POLE_NODE_J2000",
    "GALACTIC_POLE_RA",
    "distance",
    "ecliptic_to_equatorial",
    "equatorial_to_ecliptic",
    "equatorial_to_galactic",
    "equatorial_to_horizontal",
    "galactic_to_equatorial",
    "geocentric_to_geodetic",
    "geodetic_to_cartesian",
    "geodetic_to_geocentric",
    "horizontal_to_equatorial",
    "obliquity_for",
    "transform",
]
