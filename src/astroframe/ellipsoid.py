"""Reference ellipsoids.

Ellipsoids are described by an equatorial radius and an inverse flattening.
Named presets are immutable :class:`Ellipsoid` values.  Each body of
:class:`~astroframe.bodies.Body` has its own ellipsoid derived from its IAU
radii, and :class:`CustomEllipsoid` is a mutable slot for user supplied
radii.  Derived quantities are free functions that accept either kind.

A spherical body has infinite inverse flattening; it is represented by the
large finite :data:`SPHERICAL_INVERSE_FLATTENING` so the formulas stay
defined.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Union

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.bodies import Body
from astroframe.config import get_dtype
from astroframe.errors import InvalidInputError

"""
Inverse flattening used for bodies with equal equatorial and polar radii.
"""
SPHERICAL_INVERSE_FLATTENING = 1.0e12


class Ellipsoid(NamedTuple):
    """Immutable reference ellipsoid.

    Attributes:
        name: Identifier of the ellipsoid.
        equatorial_radius: Equatorial radius [km].
        inverse_flattening: ``1/f``; greater than 1.
    """

    name: str
    equatorial_radius: float
    inverse_flattening: float


WGS72 = Ellipsoid("WGS72", 6378.135, 298.26)
WGS84 = Ellipsoid("WGS84", 6378.137, 298.257223563)
IERS1989 = Ellipsoid("IERS1989", 6378.136, 298.257)
MERIT1983 = Ellipsoid("MERIT1983", 6378.137, 298.257)
GRS80 = Ellipsoid("GRS80", 6378.137, 298.257222101)
GRS67 = Ellipsoid("GRS67", 6378.160, 298.247167)
IAU1976 = Ellipsoid("IAU1976", 6378.140, 298.257)
IAU1964 = Ellipsoid("IAU1964", 6378.160, 298.25)
IERS2003 = Ellipsoid("IERS2003", 6378.1366, 298.25642)
LATEST = IERS2003

ELLIPSOIDS: dict[str, Ellipsoid] = {
    e.name: e
    for e in (WGS72, WGS84, IERS1989, MERIT1983, GRS80, GRS67, IAU1976, IAU1964, IERS2003)
}
ELLIPSOIDS["LATEST"] = LATEST


def _inverse_flattening(equatorial_radius: float, polar_radius: float) -> float:
    if not (equatorial_radius > 0.0 and polar_radius > 0.0):
        raise InvalidInputError(
            f"Ellipsoid radii must be positive, got {equatorial_radius} and {polar_radius}"
        )
    if polar_radius > equatorial_radius:
        raise InvalidInputError(
            f"Polar radius {polar_radius} km exceeds equatorial radius {equatorial_radius} km"
        )
    if polar_radius == equatorial_radius:
        return SPHERICAL_INVERSE_FLATTENING
    return equatorial_radius / (equatorial_radius - polar_radius)


def ellipsoid_from_radii(name: str, equatorial_radius: float, polar_radius: float) -> Ellipsoid:
    """Build an ellipsoid from its equatorial and polar radii.

    Args:
        name: Identifier of the ellipsoid.
        equatorial_radius: Equatorial radius [km].
        polar_radius: Polar radius [km], not larger than *equatorial_radius*.

    Returns:
        The ellipsoid. Spheres get :data:`SPHERICAL_INVERSE_FLATTENING`.

    Raises:
        InvalidInputError: If a radius is not positive or the body is prolate.
    """
    return Ellipsoid(name, float(equatorial_radius), _inverse_flattening(equatorial_radius, polar_radius))


def body_ellipsoid(body: Body) -> Ellipsoid:
    """Return the IAU ellipsoid of a solar system body."""
    data = body.data
    return ellipsoid_from_radii(body.name, data.equatorial_radius, data.polar_radius)


class CustomEllipsoid:
    """Mutable ellipsoid slot for user supplied radii.

    The slot starts as a copy of *base* (WGS84 by default) and is changed
    with :meth:`set_radii`.  Consumers that need a stable value take a
    :meth:`snapshot`.

    Args:
        name: Identifier of the slot.
        base: Initial parameters.
    """

    def __init__(self, name: str = "CUSTOM", base: Ellipsoid = WGS84) -> None:
        self._name = name
        self._equatorial_radius = base.equatorial_radius
        self._inverse_flattening = base.inverse_flattening

    @property
    def name(self) -> str:
        return self._name

    @property
    def equatorial_radius(self) -> float:
        return self._equatorial_radius

    @property
    def inverse_flattening(self) -> float:
        return self._inverse_flattening

    def set_radii(self, equatorial_radius: float, polar_radius: float) -> None:
        """Replace the parameters of the slot. May be called any number of times.

        Args:
            equatorial_radius: Equatorial radius [km].
            polar_radius: Polar radius [km].

        Raises:
            InvalidInputError: If a radius is not positive or the body is prolate.
        """
        ifl = _inverse_flattening(equatorial_radius, polar_radius)
        self._equatorial_radius = float(equatorial_radius)
        self._inverse_flattening = ifl

    def snapshot(self) -> Ellipsoid:
        """Immutable copy of the current parameters."""
        return Ellipsoid(self._name, self._equatorial_radius, self._inverse_flattening)

    def __repr__(self) -> str:
        return (
            f"CustomEllipsoid(name={self._name!r}, equatorial_radius={self._equatorial_radius}, "
            f"inverse_flattening={self._inverse_flattening})"
        )


EllipsoidModel = Union[Ellipsoid, CustomEllipsoid]


def as_ellipsoid(model: EllipsoidModel) -> Ellipsoid:
    """Return an immutable :class:`Ellipsoid` for a preset or custom model."""
    if isinstance(model, CustomEllipsoid):
        return model.snapshot()
    if isinstance(model, Ellipsoid):
        return model
    raise InvalidInputError(f"Not an ellipsoid: {model!r}")


def get_ellipsoid(name: str) -> Ellipsoid:
    """Look up a preset or body ellipsoid by name (case insensitive).

    Raises:
        InvalidInputError: If *name* is unknown.
    """
    key = name.upper()
    if key in ELLIPSOIDS:
        return ELLIPSOIDS[key]
    if key in Body.__members__:
        return body_ellipsoid(Body[key])
    raise InvalidInputError(f"Unknown ellipsoid '{name}'")


def flattening(model: EllipsoidModel) -> float:
    """Flattening ``f = 1/ifl``."""
    return 1.0 / model.inverse_flattening


def polar_radius(model: EllipsoidModel) -> float:
    """Polar radius ``R (1 - f)`` [km]."""
    return model.equatorial_radius * (1.0 - flattening(model))


def eccentricity_squared(model: EllipsoidModel) -> float:
    """First eccentricity squared ``e^2 = f (2 - f)``."""
    f = flattening(model)
    return f * (2.0 - f)


def radius_at_latitude(model: EllipsoidModel, lat: ArrayLike) -> Array:
    """Approximate radius at a given latitude, ``R (1 - f sin^2 lat)`` [km].

    Args:
        model: Ellipsoid.
        lat: Latitude in radians.

    Returns:
        Radius in km.
    """
    lat = jnp.asarray(lat, dtype=get_dtype())
    return model.equatorial_radius * (1.0 - flattening(model) * jnp.sin(lat) ** 2)


def is_spherical(model: EllipsoidModel) -> bool:
    return model.inverse_flattening >= SPHERICAL_INVERSE_FLATTENING or math.isinf(
        model.inverse_flattening
    )
