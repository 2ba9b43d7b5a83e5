"""Elementary rotation matrices and spherical/cartesian conversions.

Rotations are *passive* (frame) rotations with the SOFA sign convention:
``Rx(a) @ v`` expresses ``v`` in a frame rotated by ``a`` about x.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.config import get_dtype
from astroframe.utils import to_radians


def Rx(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Rotation matrix, shape ``(3, 3)``.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[1.0, 0.0, 0.0],
                      [0.0,  +c,  +s],
                      [0.0,  -s,  +c]])


def Ry(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Rotation matrix, shape ``(3, 3)``.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c, 0.0,  -s],
                      [0.0, 1.0, 0.0],
                      [ +s, 0.0,  +c]])


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Rotation matrix, shape ``(3, 3)``.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,  +s, 0.0],
                      [ -s,  +c, 0.0],
                      [0.0, 0.0, 1.0]])


def spherical_to_cartesian(lon: ArrayLike, lat: ArrayLike, radius: ArrayLike = 1.0) -> Array:
    """Convert spherical coordinates to a rectangular vector.

    Args:
        lon: Longitude (or right ascension) in radians.
        lat: Latitude (or declination) in radians.
        radius: Distance, in any unit.

    Returns:
        Vector ``[x, y, z]`` in the unit of *radius*, shape ``(3,)``.
    """
    lon = jnp.asarray(lon, dtype=get_dtype())
    lat = jnp.asarray(lat, dtype=get_dtype())
    cl = jnp.cos(lat)
    return radius * jnp.array([cl * jnp.cos(lon), cl * jnp.sin(lon), jnp.sin(lat)])


def cartesian_to_spherical(v: ArrayLike) -> tuple[Array, Array, Array]:
    """Convert a rectangular vector to spherical coordinates.

    The zero vector maps to ``(0, 0, 0)``; a vector along the z-axis has
    longitude 0.

    Args:
        v: Vector ``[x, y, z]``.

    Returns:
        ``(lon, lat, radius)`` with *lon* in ``[0, 2*pi)``.
    """
    v = jnp.asarray(v, dtype=get_dtype())
    x, y, z = v[0], v[1], v[2]
    rxy = jnp.sqrt(x * x + y * y)
    r = jnp.sqrt(x * x + y * y + z * z)
    lon = jnp.arctan2(y, x) % (2.0 * jnp.pi)
    lat = jnp.arctan2(z, rxy)
    return lon, lat, r
