"""Two-mode spherical rotation about a reference pole and node.

``rotate_to`` takes a position expressed relative to a reference pole and
node and returns it in the frame in which that pole sits at
``(pole_lon, pole_lat)``.  ``rotate_from`` goes the other way.  Every
coordinate-pair conversion in :mod:`astroframe.coordinates.systems` is a
call to one of the two with suitably chosen pole and node.

Both functions evaluate a single formula with a pluggable :class:`Trig`
bundle, so the exact and fast variants cannot drift apart.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.config import get_dtype
from astroframe.rotation._trig import EXACT, FAST, Trig

_TWO_PI = 2.0 * jnp.pi


def normalize_angle(angle: ArrayLike) -> Array:
    """Reduce an angle to ``[0, 2*pi)``.

    Args:
        angle: Angle in radians.

    Returns:
        Equivalent angle in ``[0, 2*pi)``.
    """
    angle = jnp.asarray(angle, dtype=get_dtype())
    wrapped = angle % _TWO_PI
    # Floating-point modulo can land exactly on 2*pi for tiny negative inputs
    return jnp.where(wrapped >= _TWO_PI, 0.0, wrapped)


class SphericalPosition(NamedTuple):
    """Immutable spherical position.

    Build instances with :meth:`of` to get a normalized longitude; direct
    construction stores the values unchanged.

    Attributes:
        lon: Longitude or right ascension in radians, ``[0, 2*pi)``.
        lat: Latitude or declination in radians.
        radius: Distance in any unit chosen by the caller.
    """

    lon: Array
    lat: Array
    radius: Array

    @classmethod
    def of(cls, lon: ArrayLike, lat: ArrayLike, radius: ArrayLike = 1.0) -> SphericalPosition:
        """Create a position with its longitude normalized to ``[0, 2*pi)``."""
        return cls(
            normalize_angle(lon),
            jnp.asarray(lat, dtype=get_dtype()),
            jnp.asarray(radius, dtype=get_dtype()),
        )


def _rotate_to(
    trig: Trig,
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    lon: ArrayLike,
    lat: ArrayLike,
) -> tuple[Array, Array]:
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)

    sin_lat, cos_lat = trig.sin(lat), trig.cos(lat)
    sin_pole, cos_pole = trig.sin(pole_lat), trig.cos(pole_lat)
    delta = lon - node_lon
    sin_delta = trig.sin(delta)

    z = sin_lat * sin_pole + cos_lat * cos_pole * sin_delta
    y = cos_lat * trig.cos(delta)
    x = sin_lat * cos_pole - cos_lat * sin_pole * sin_delta

    out_lat = trig.asin(jnp.clip(z, -1.0, 1.0))
    out_lon = pole_lon + trig.atan2(y, x)
    return normalize_angle(out_lon), out_lat


def _rotate_from(
    trig: Trig,
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    lon: ArrayLike,
    lat: ArrayLike,
) -> tuple[Array, Array]:
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)

    sin_lat, cos_lat = trig.sin(lat), trig.cos(lat)
    sin_pole, cos_pole = trig.sin(pole_lat), trig.cos(pole_lat)
    delta = lon - pole_lon

    z = sin_lat * sin_pole + cos_lat * cos_pole * trig.cos(delta)
    y = sin_lat - z * sin_pole
    x = cos_lat * cos_pole * trig.sin(delta)

    out_lat = trig.asin(jnp.clip(z, -1.0, 1.0))
    out_lon = node_lon + trig.atan2(y, x)
    return normalize_angle(out_lon), out_lat


def rotate_to(
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    lon: ArrayLike,
    lat: ArrayLike,
    *,
    fast: bool = False,
) -> tuple[Array, Array]:
    """Rotate a position into the frame whose pole is at ``(pole_lon, pole_lat)``.

    ``lat' = asin(sin(lat) sin(pole_lat) + cos(lat) cos(pole_lat) sin(lon - node))``

    ``lon' = pole_lon + atan2(cos(lat) cos(lon - node),
    sin(lat) cos(pole_lat) - cos(lat) sin(pole_lat) sin(lon - node))``

    A position that coincides with the pole gives ``atan2(0, 0) = 0`` and
    therefore ``lon' = pole_lon``.

    Args:
        pole_lon: Longitude of the reference pole in the output frame [rad].
        pole_lat: Latitude of the reference pole in the output frame [rad].
        node_lon: Longitude of the reference node in the input frame [rad].
        lon: Input longitude [rad].
        lat: Input latitude [rad].
        fast: Evaluate with the reduced-precision trigonometry.

    Returns:
        ``(lon, lat)`` in the output frame, longitude in ``[0, 2*pi)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from astroframe.rotation import rotate_to
        lon, lat = rotate_to(0.0, jnp.pi / 2, jnp.pi / 2, 1.0, 0.5)
        ```
    """
    return _rotate_to(FAST if fast else EXACT, pole_lon, pole_lat, node_lon, lon, lat)


def rotate_from(
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    lon: ArrayLike,
    lat: ArrayLike,
    *,
    fast: bool = False,
) -> tuple[Array, Array]:
    """Inverse of :func:`rotate_to` for the same pole and node.

    ``lat' = asin(s)``, ``s = sin(lat) sin(pole_lat) + cos(lat) cos(pole_lat) cos(lon - pole_lon)``

    ``lon' = node + atan2(sin(lat) - s sin(pole_lat), cos(lat) cos(pole_lat) sin(lon - pole_lon))``

    Args:
        pole_lon: Longitude of the reference pole in the input frame [rad].
        pole_lat: Latitude of the reference pole in the input frame [rad].
        node_lon: Longitude of the reference node in the output frame [rad].
        lon: Input longitude [rad].
        lat: Input latitude [rad].
        fast: Evaluate with the reduced-precision trigonometry.

    Returns:
        ``(lon, lat)`` in the output frame, longitude in ``[0, 2*pi)``.
    """
    return _rotate_from(FAST if fast else EXACT, pole_lon, pole_lat, node_lon, lon, lat)


def rotate_position_to(
    position: SphericalPosition,
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """:func:`rotate_to` on a :class:`SphericalPosition`, keeping its radius."""
    lon, lat = rotate_to(pole_lon, pole_lat, node_lon, position.lon, position.lat, fast=fast)
    return SphericalPosition(lon, lat, position.radius)


def rotate_position_from(
    position: SphericalPosition,
    pole_lon: ArrayLike,
    pole_lat: ArrayLike,
    node_lon: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """:func:`rotate_from` on a :class:`SphericalPosition`, keeping its radius."""
    lon, lat = rotate_from(pole_lon, pole_lat, node_lon, position.lon, position.lat, fast=fast)
    return SphericalPosition(lon, lat, position.radius)


def angular_distance(a: SphericalPosition, b: SphericalPosition) -> Array:
    """Great-circle separation between two positions (haversine form).

    Args:
        a: First position.
        b: Second position.

    Returns:
        Separation in radians, ``[0, pi]``.
    """
    dlat = b.lat - a.lat
    dlon = b.lon - a.lon
    h = jnp.sin(0.5 * dlat) ** 2 + jnp.cos(a.lat) * jnp.cos(b.lat) * jnp.sin(0.5 * dlon) ** 2
    return 2.0 * jnp.arcsin(jnp.sqrt(jnp.clip(h, 0.0, 1.0)))
