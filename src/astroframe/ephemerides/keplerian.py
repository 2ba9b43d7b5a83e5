"""Approximate heliocentric planetary states from JPL Keplerian elements.

Provides heliocentric position and velocity vectors for the eight major
planets, referred to the mean equator and equinox of J2000.  Positions are
computed from time-varying Keplerian elements (JPL Table 1, valid 1800-2050
AD) and are returned in AU; velocities are the exact time derivative of the
same model, obtained with :func:`jax.jvp`, in AU/day.

Accuracy is approximately 1 arcminute for inner planets and up to 10
arcminutes for outer planets over the valid date range.  ``Body.EARTH`` is
served by the Earth-Moon barycentre elements.

This is the built-in provider behind ``Algorithm.JPL_KEPLERIAN``; the
high-accuracy theories are registered by callers.

References:
    E.M. Standish & J.G. Williams, "Keplerian Elements for
    Approximate Positions of the Major Planets",
    https://ssd.jpl.nasa.gov/planets/approx_pos.html
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.bodies import Body
from astroframe.config import get_angle_tolerance, get_dtype
from astroframe.ephemerides._jpl_keplerian_coefficients import TABLE1_ELEMENTS, TABLE1_OBLIQUITY
from astroframe.errors import ConvergenceError, UnsupportedBodyError
from astroframe.rotation import Rx, Rz
from astroframe.time import julian_centuries

KEPLERIAN_BODIES: tuple[Body, ...] = tuple(TABLE1_ELEMENTS)


def solve_kepler(mean_anomaly: ArrayLike, e: ArrayLike, *, max_iterations: int = 15) -> Array:
    """Solve Kepler's equation ``M = E - e * sin(E)`` for ``E``.

    Newton-Raphson iteration with a fixed number of steps, implemented with
    ``jax.lax.fori_loop``.  When the result is concrete (not traced) the
    residual is checked against the dtype's angle tolerance.

    Args:
        mean_anomaly: Mean anomaly [rad].
        e: Eccentricity, ``0 <= e < 1``.
        max_iterations: Number of Newton steps.

    Returns:
        Eccentric anomaly [rad].

    Raises:
        ConvergenceError: If the residual after *max_iterations* steps
            exceeds the tolerance.
    """
    M = jnp.asarray(mean_anomaly, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    # Initial guess: M for low eccentricity, pi for high eccentricity
    E0 = jnp.where(e < 0.8, M, jnp.pi)

    def newton_step(_, E):
        f = E - e * jnp.sin(E) - M
        return E - f / (1.0 - e * jnp.cos(E))

    E = jax.lax.fori_loop(0, max_iterations, newton_step, E0)
    residual = jnp.max(jnp.abs(E - e * jnp.sin(E) - M))
    if not isinstance(residual, jax.core.Tracer) and residual > get_angle_tolerance():
        raise ConvergenceError(
            f"Kepler's equation did not converge after {max_iterations} iterations "
            f"(residual {float(residual):.3e} rad)",
            max_iterations,
        )
    return E


def _elements(body: Body) -> Array:
    try:
        coeffs = TABLE1_ELEMENTS[body]
    except KeyError:
        raise UnsupportedBodyError(f"No Keplerian elements for {body.name}") from None
    return jnp.asarray(coeffs, dtype=get_dtype())


def _position_ecliptic(coeffs: Array, jd_tdb: Array) -> Array:
    T = julian_centuries(jd_tdb)

    # Propagate elements: element = element_0 + element_dot * T
    a = coeffs[0, 0] + coeffs[0, 1] * T
    e = coeffs[1, 0] + coeffs[1, 1] * T
    incl = coeffs[2, 0] + coeffs[2, 1] * T
    L = coeffs[3, 0] + coeffs[3, 1] * T
    lon_peri = coeffs[4, 0] + coeffs[4, 1] * T
    lon_node = coeffs[5, 0] + coeffs[5, 1] * T

    omega = lon_peri - lon_node
    M = L - lon_peri

    # Wrap M to [-180, 180] degrees
    M = M % 360.0
    M = jnp.where(M > 180.0, M - 360.0, M)

    E = solve_kepler(jnp.deg2rad(M), e)

    # Orbital plane coordinates (AU)
    x_prime = a * (jnp.cos(E) - e)
    y_prime = a * jnp.sqrt(1.0 - e * e) * jnp.sin(E)

    r_orbital = jnp.stack([x_prime, y_prime, jnp.zeros_like(x_prime)])
    return Rz(-lon_node, use_degrees=True) @ (
        Rx(-incl, use_degrees=True) @ (Rz(-omega, use_degrees=True) @ r_orbital)
    )


def keplerian_position(body: Body, jd_tdb: ArrayLike) -> Array:
    """Heliocentric position of a planet, mean equator and equinox of J2000.

    Args:
        body: A planet, or ``Body.EARTH`` for the Earth-Moon barycentre.
        jd_tdb: Julian date, TDB.

    Returns:
        Position in AU. Shape ``(3,)``.

    Raises:
        UnsupportedBodyError: If *body* is not one of the eight planets.

    Examples:
        ```python
        from astroframe.bodies import Body
        from astroframe.ephemerides import keplerian_position
        r = keplerian_position(Body.MARS, 2460476.5)
        ```
    """
    coeffs = _elements(body)
    jd = jnp.asarray(jd_tdb, dtype=get_dtype())
    return Rx(-TABLE1_OBLIQUITY, use_degrees=True) @ _position_ecliptic(coeffs, jd)


def keplerian_state(body: Body, jd_tdb: ArrayLike) -> Array:
    """Heliocentric position and velocity of a planet.

    Args:
        body: A planet, or ``Body.EARTH`` for the Earth-Moon barycentre.
        jd_tdb: Julian date, TDB.

    Returns:
        ``[x, y, z, vx, vy, vz]`` in AU and AU/day, mean equator and equinox
        of J2000. Shape ``(6,)``.

    Raises:
        UnsupportedBodyError: If *body* is not one of the eight planets.
        ConvergenceError: If Kepler's equation cannot be solved.
    """
    jd = jnp.asarray(jd_tdb, dtype=get_dtype())
    r = keplerian_position(body, jd)
    _, v = jax.jvp(lambda t: keplerian_position(body, t), (jd,), (jnp.ones_like(jd),))
    return jnp.concatenate([r, v])
