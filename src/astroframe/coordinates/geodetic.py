"""Geodetic <-> geocentric conversion on a reference ellipsoid.

Geocentric distances are expressed in units of the ellipsoid's equatorial
radius and heights in metres above the ellipsoid, following the
Astronomical Almanac (page K5) convention.

The inverse transform starts from the closed-form solution of the forward
equations (an auxiliary latitude ``atan(tan(geo_lat)/f)`` and a quadratic in
the height).  That solution alone is good to the milliarcsecond level in
latitude near the surface but degrades linearly with height (about 1 cm per
km), so by default it is followed by a short fixed-point refinement of the
latitude.  ``iterations=0`` returns the closed-form value unchanged.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.config import get_dtype
from astroframe.ellipsoid import EllipsoidModel, as_ellipsoid
from astroframe.rotation import spherical_to_cartesian


def _squared_axis_ratio(inverse_flattening: float) -> float:
    fl = 1.0 - 1.0 / inverse_flattening
    return fl * fl


def _axes_m(radius_km: float, fl: float, cos_lat: Array, sin_lat: Array) -> tuple[Array, Array]:
    # Distances from the polar axis and equatorial plane of the surface point,
    # divided by cos(lat) and sin(lat) respectively.
    u = 1.0 / jnp.sqrt(cos_lat * cos_lat + fl * sin_lat * sin_lat)
    return radius_km * u * 1000.0, radius_km * fl * u * 1000.0


def geodetic_to_geocentric(
    ellipsoid: EllipsoidModel,
    lon: ArrayLike,
    lat: ArrayLike,
    height: ArrayLike,
) -> tuple[Array, Array, Array]:
    """Convert a geodetic location to geocentric (planetocentric) coordinates.

    Args:
        ellipsoid: Reference ellipsoid.
        lon: Geodetic longitude [rad]. Returned unchanged.
        lat: Geodetic latitude [rad].
        height: Height above the ellipsoid [m]. Not rounded.

    Returns:
        ``(geo_lon, geo_lat, geo_rad)``: longitude and geocentric latitude in
        radians, distance from the centre in equatorial radii.

    References:

        1. *The Astronomical Almanac*, page K5.
    """
    e = as_ellipsoid(ellipsoid)
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)
    height = jnp.asarray(height, dtype=dtype)

    fl = _squared_axis_ratio(e.inverse_flattening)
    co = jnp.cos(lat)
    si = jnp.sin(lat)
    a, b = _axes_m(e.equatorial_radius, fl, co, si)
    a = a + height
    b = b + height

    x = a * co
    z = b * si
    rho = jnp.sqrt(x * x + z * z)
    # Same value as sign(lat) * acos(a cos(lat) / rho), without the loss of
    # precision of acos near the equator.
    geo_lat = jnp.arctan2(z, x)
    return lon, geo_lat, rho / (1000.0 * e.equatorial_radius)


def _height_on_normal(a: Array, b: Array, co: Array, si: Array, rho: Array) -> Array:
    coef_a = co * co + si * si
    coef_b = 2.0 * a * co * co + 2.0 * b * si * si
    coef_c = a * a * co * co + b * b * si * si - rho * rho
    return (-coef_b + jnp.sqrt(coef_b * coef_b - 4.0 * coef_a * coef_c)) / (2.0 * coef_a)


def geocentric_to_geodetic(
    ellipsoid: EllipsoidModel,
    geo_lon: ArrayLike,
    geo_lat: ArrayLike,
    geo_rad: ArrayLike,
    *,
    iterations: int = 2,
) -> tuple[Array, Array, Array]:
    """Convert geocentric coordinates to a geodetic location.

    Args:
        ellipsoid: Reference ellipsoid.
        geo_lon: Geocentric longitude [rad]. Returned unchanged.
        geo_lat: Geocentric latitude [rad].
        geo_rad: Distance from the centre in equatorial radii.
        iterations: Number of latitude refinement passes after the
            closed-form solution. ``0`` returns the closed-form inverse.

    Returns:
        ``(lon, lat, height)``: geodetic longitude and latitude in radians,
        height above the ellipsoid in metres.
    """
    e = as_ellipsoid(ellipsoid)
    dtype = get_dtype()
    geo_lon = jnp.asarray(geo_lon, dtype=dtype)
    geo_lat = jnp.asarray(geo_lat, dtype=dtype)
    geo_rad = jnp.asarray(geo_rad, dtype=dtype)

    fl = _squared_axis_ratio(e.inverse_flattening)
    rho = geo_rad * (1000.0 * e.equatorial_radius)
    sin_geo = jnp.sin(geo_lat)
    cos_geo = jnp.cos(geo_lat)

    # Auxiliary latitude: exact for points on the surface
    lat = jnp.arctan2(sin_geo, fl * cos_geo)
    co, si = jnp.cos(lat), jnp.sin(lat)
    a, b = _axes_m(e.equatorial_radius, fl, co, si)
    height = _height_on_normal(a, b, co, si, rho)

    if iterations <= 0:
        lat = jnp.arccos(jnp.clip(rho * cos_geo / (a + height), -1.0, 1.0))
        return geo_lon, jnp.where(geo_lat < 0.0, -lat, lat), height

    for _ in range(iterations):
        # tan(lat) = tan(geo_lat) (a + h) / (b + h)
        lat = jnp.arctan2((a + height) * sin_geo, (b + height) * cos_geo)
        co, si = jnp.cos(lat), jnp.sin(lat)
        a, b = _axes_m(e.equatorial_radius, fl, co, si)
        height = _height_on_normal(a, b, co, si, rho)

    return geo_lon, lat, height


def geodetic_to_cartesian(
    ellipsoid: EllipsoidModel,
    lon: ArrayLike,
    lat: ArrayLike,
    height: ArrayLike,
) -> Array:
    """Body-fixed rectangular position of a geodetic location.

    Args:
        ellipsoid: Reference ellipsoid.
        lon: Geodetic longitude [rad].
        lat: Geodetic latitude [rad].
        height: Height above the ellipsoid [m].

    Returns:
        Position ``[x, y, z]`` in km, shape ``(3,)``.
    """
    e = as_ellipsoid(ellipsoid)
    geo_lon, geo_lat, geo_rad = geodetic_to_geocentric(e, lon, lat, height)
    return spherical_to_cartesian(geo_lon, geo_lat, geo_rad * e.equatorial_radius)


def distance(
    ellipsoid: EllipsoidModel,
    lon1: ArrayLike,
    lat1: ArrayLike,
    lon2: ArrayLike,
    lat2: ArrayLike,
) -> Array:
    """Distance between two points at zero height on an ellipsoid.

    Andoyer's method as given by Meeus, accurate to about 50 m on the Earth.

    Args:
        ellipsoid: Reference ellipsoid shared by both points.
        lon1: Longitude of the first point [rad].
        lat1: Latitude of the first point [rad].
        lon2: Longitude of the second point [rad].
        lat2: Latitude of the second point [rad].

    Returns:
        Distance in km. Coincident points give 0.

    References:

        1. J. Meeus, *Astronomical Algorithms*, 2nd ed., 1998, chapter 11.
    """
    e = as_ellipsoid(ellipsoid)
    dtype = get_dtype()
    lat1 = jnp.asarray(lat1, dtype=dtype)
    lat2 = jnp.asarray(lat2, dtype=dtype)
    lon1 = jnp.asarray(lon1, dtype=dtype)
    lon2 = jnp.asarray(lon2, dtype=dtype)

    f_ = (lat1 + lat2) * 0.5
    g_ = (lat1 - lat2) * 0.5
    l_ = (lon1 - lon2) * 0.5
    sg, cg = jnp.sin(g_), jnp.cos(g_)
    sl, cl = jnp.sin(l_), jnp.cos(l_)
    sf, cf = jnp.sin(f_), jnp.cos(f_)

    s = sg * sg * cl * cl + cf * cf * sl * sl
    c = cg * cg * cl * cl + sf * sf * sl * sl
    coincident = s <= 0.0
    s_safe = jnp.where(coincident, 1.0, s)

    w = jnp.arctan(jnp.sqrt(s_safe / c))
    r = jnp.sqrt(s_safe * c) / w
    d = 2.0 * w * e.equatorial_radius
    h1 = (3.0 * r - 1.0) / (2.0 * c)
    h2 = (3.0 * r + 1.0) / (2.0 * s_safe)
    flat = 1.0 / e.inverse_flattening
    result = d * (1.0 + flat * h1 * sf * sf * cg * cg - flat * h2 * cf * cf * sg * sg)
    return jnp.where(coincident, 0.0, result)
