"""Mean obliquity of the ecliptic.

Each reduction method has its own polynomial in ``u = T/100`` (units of
10000 Julian years), evaluated in arcseconds.  For dates more than 10000
years from J2000 every polynomial diverges and the long-term expression of
Vondrák et al. (2011) is used instead.

The true obliquity (mean plus nutation in obliquity) lives in
:mod:`astroframe.nutation`.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._types import ReductionMethod
from astroframe.config import get_dtype
from astroframe.constants import AS2RAD, TWO_PI


class _ObliquityModel(NamedTuple):
    start: float
    coeffs: tuple[float, ...]


# Capitaine et al. 2003, Hilton et al. 2006
_CAPITAINE = _ObliquityModel(
    84381.406,
    (-468367.69, -183.1, 200340.0, -5760.0, -43400.0, 0.0, 0.0, 0.0, 0.0, 0.0),
)
# Williams 1994, DE403
_WILLIAMS = _ObliquityModel(
    84381.406173,
    (-468339.6, -175.0, 199890.0, -5138.0, -24967.0, -3905.0, 712.0, 2787.0, 579.0, 245.0),
)
# Simon et al. 1994
_SIMON = _ObliquityModel(
    84381.412,
    (-468092.7, -152.0, 199890.0, -5138.0, -24967.0, -3905.0, 712.0, 2787.0, 579.0, 245.0),
)
# Laskar 1986
_LASKAR = _ObliquityModel(
    84381.448,
    (-468093.0, -155.0, 199925.0, -5138.0, -24967.0, -3905.0, 712.0, 2787.0, 579.0, 245.0),
)
# Lieske et al. 1977
_IAU1976 = _ObliquityModel(
    84381.448,
    (-468150.0, -590.0, 181300.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
)

_MODELS: dict[ReductionMethod, _ObliquityModel] = {
    ReductionMethod.IAU_2009: _CAPITAINE,
    ReductionMethod.IAU_2006: _CAPITAINE,
    ReductionMethod.IAU_2000: _CAPITAINE,
    ReductionMethod.WILLIAMS_1994: _WILLIAMS,
    ReductionMethod.JPL_DE4XX: _WILLIAMS,
    ReductionMethod.SIMON_1994: _SIMON,
    ReductionMethod.LASKAR_1986: _LASKAR,
    ReductionMethod.IAU_1976: _IAU1976,
}

# Vondrák et al. 2011, long-term obliquity: polynomial and periodic terms
# (period [centuries], cosine amplitude ["], sine amplitude ["]).
_VONDRAK_POLYNOMIAL = (84028.206305, 0.3624445, -0.00004039, -110e-9)
_VONDRAK_PERIODIC = (
    (409.90, 753.872780, -1704.720302),
    (396.15, -247.805823, -862.308358),
    (537.22, 379.471484, 447.832178),
    (402.90, -53.880558, -889.571909),
    (417.15, -90.109153, 190.402846),
    (288.92, -353.600190, -56.564991),
    (4043.00, -63.115353, -296.222622),
    (306.00, -28.248187, -75.859952),
    (277.00, 17.703387, 67.473503),
    (203.00, 38.911307, 3.014055),
)

"""
Centuries from J2000 beyond which the long-term model replaces the polynomials.
"""
LONG_TERM_THRESHOLD = 100.0


def _polynomial_obliquity(t: Array, model: _ObliquityModel) -> Array:
    u0 = t / 100.0
    u = u0
    rval = jnp.asarray(model.start, dtype=t.dtype)
    for coeff in model.coeffs:
        rval = rval + u * coeff / 100.0
        u = u * u0
    return rval * AS2RAD


def long_term_obliquity(t: ArrayLike) -> Array:
    """Mean obliquity from the long-term model of Vondrák et al. (2011).

    Args:
        t: Julian centuries from J2000 (TT).

    Returns:
        Mean obliquity in radians.

    References:

        1. J. Vondrák, N. Capitaine and P. Wallace, *New precession expressions, valid for long time intervals*, A&A 534, 2011.
    """
    t = jnp.asarray(t, dtype=get_dtype())
    w = TWO_PI * t
    y = jnp.zeros_like(t)
    for period, c, s in _VONDRAK_PERIODIC:
        a = w / period
        y = y + c * jnp.cos(a) + s * jnp.sin(a)

    power = jnp.ones_like(t)
    for coeff in _VONDRAK_POLYNOMIAL:
        y = y + coeff * power
        power = power * t
    return y * AS2RAD


def mean_obliquity(t: ArrayLike, method: ReductionMethod) -> Array:
    """Mean obliquity of the ecliptic for a reduction method.

    Args:
        t: Julian centuries from J2000 (TT).
        method: Reduction method selecting the obliquity expression.

    Returns:
        Mean obliquity in radians.

    Examples:
        ```python
        from astroframe import ReductionMethod
        from astroframe.obliquity import mean_obliquity
        eps0 = mean_obliquity(0.0, ReductionMethod.IAU_2006)  # 84381.406"
        ```
    """
    t = jnp.asarray(t, dtype=get_dtype())
    polynomial = _polynomial_obliquity(t, _MODELS[method])
    return jnp.where(jnp.abs(t) > LONG_TERM_THRESHOLD, long_term_obliquity(t), polynomial)
