"""Exact and reduced-precision trigonometric primitives.

Both bundles expose the same four callables so that a single formula can be
evaluated with either one.  The fast bundle replaces the library functions
with short polynomial approximations; its maximum error is below 1e-5 rad
for ``atan2`` / ``asin`` and below 4e-6 for ``sin`` / ``cos``.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

_PI = jnp.pi
_HALF_PI = 0.5 * jnp.pi
_TWO_PI = 2.0 * jnp.pi


class Trig(NamedTuple):
    """Bundle of trigonometric primitives used by the spherical rotations.

    Attributes:
        sin: Sine of an angle in radians.
        cos: Cosine of an angle in radians.
        atan2: Two-argument arctangent ``atan2(y, x)``.
        asin: Arcsine, argument already clipped to ``[-1, 1]``.
    """

    sin: Callable[[ArrayLike], Array]
    cos: Callable[[ArrayLike], Array]
    atan2: Callable[[ArrayLike, ArrayLike], Array]
    asin: Callable[[ArrayLike], Array]


def fast_sin(x: ArrayLike) -> Array:
    """Polynomial sine, odd Taylor series through x^9 after range reduction."""
    x = jnp.asarray(x)
    x = x - _TWO_PI * jnp.round(x / _TWO_PI)
    x = jnp.where(x > _HALF_PI, _PI - x, jnp.where(x < -_HALF_PI, -_PI - x, x))
    x2 = x * x
    return x * (
        1.0 + x2 * (-1.0 / 6.0 + x2 * (1.0 / 120.0 + x2 * (-1.0 / 5040.0 + x2 / 362880.0)))
    )


def fast_cos(x: ArrayLike) -> Array:
    """Polynomial cosine, ``fast_sin(x + pi/2)``."""
    return fast_sin(jnp.asarray(x) + _HALF_PI)


def fast_atan2(y: ArrayLike, x: ArrayLike) -> Array:
    """Polynomial two-argument arctangent.

    The ratio of the smaller to the larger component is fed to a cubic
    minimax approximation of ``atan`` on ``[0, 1]`` and the result is unfolded
    into the correct octant.  ``fast_atan2(0, 0)`` returns 0.

    Args:
        y: Ordinate.
        x: Abscissa.

    Returns:
        Angle in radians in ``(-pi, pi]``.
    """
    y = jnp.asarray(y)
    x = jnp.asarray(x)
    ax = jnp.abs(x)
    ay = jnp.abs(y)
    big = jnp.maximum(ax, ay)
    small = jnp.minimum(ax, ay)
    a = small / jnp.where(big == 0.0, 1.0, big)
    s = a * a
    r = ((-0.0464964749 * s + 0.15931422) * s - 0.327622764) * s * a + a
    r = jnp.where(ay > ax, _HALF_PI - r, r)
    r = jnp.where(x < 0.0, _PI - r, r)
    return jnp.where(y < 0.0, -r, r)


def fast_asin(x: ArrayLike) -> Array:
    """Polynomial arcsine built on :func:`fast_atan2`."""
    x = jnp.asarray(x)
    return fast_atan2(x, jnp.sqrt(jnp.maximum(0.0, 1.0 - x * x)))


EXACT = Trig(sin=jnp.sin, cos=jnp.cos, atan2=jnp.arctan2, asin=jnp.arcsin)
"""Library trigonometry."""

FAST = Trig(sin=fast_sin, cos=fast_cos, atan2=fast_atan2, asin=fast_asin)
"""Reduced-precision polynomial trigonometry."""
