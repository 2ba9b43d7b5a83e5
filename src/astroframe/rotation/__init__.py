"""Spherical rotations and elementary rotation matrices.

The rotate-to / rotate-from pair is the primitive behind every coordinate
system conversion.  Each has an exact and a fast (approximate trigonometry)
evaluation sharing one formula.
"""

from astroframe.rotation._spherical import (
    SphericalPosition,
    angular_distance,
    normalize_angle,
    rotate_from,
    rotate_position_from,
    rotate_position_to,
    rotate_to,
)
from astroframe.rotation._trig import EXACT, FAST, Trig, fast_asin, fast_atan2, fast_cos, fast_sin
from astroframe.rotation.matrices import Rx, Ry, Rz, cartesian_to_spherical, spherical_to_cartesian

__all__ = [
    "EXACT",
    "FAST",
    "Rx",
    "Ry",
    "Rz",
    "SphericalPosition",
    "Trig",
    "angular_distance",
    "cartesian_to_spherical",
    "fast_asin",
    "fast_atan2",
    "fast_cos",
    "fast_sin",
    "normalize_angle",
    "rotate_from",
    "rotate_position_from",
    "rotate_position_to",
    "rotate_to",
    "spherical_to_cartesian",
]
