"""Angle and unit conversion helpers.

These helpers wrap the ``use_degrees`` convention used throughout
astroframe, providing JAX-traceable degree/radian conversion via
``jnp.where``.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def hms_to_radians(hours: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert a right ascension given as hours, minutes and seconds to radians.

    Args:
        hours: Hours. The sign of *hours* applies to the whole value.
        minutes: Minutes of time.
        seconds: Seconds of time.

    Returns:
        Angle in radians.
    """
    sign = -1.0 if hours < 0 else 1.0
    total = abs(hours) + minutes / 60.0 + seconds / 3600.0
    return sign * total * float(jnp.pi) / 12.0

def dms_to_radians(degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert an angle given as degrees, arcminutes and arcseconds to radians.

    Args:
        degrees: Degrees. The sign of *degrees* applies to the whole value.
        minutes: Arcminutes.
        seconds: Arcseconds.

    Returns:
        Angle in radians.
    """
    sign = -1.0 if degrees < 0 else 1.0
    total = abs(degrees) + minutes / 60.0 + seconds / 3600.0
    return sign * total * float(jnp.pi) / 180.0
