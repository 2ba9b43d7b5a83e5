"""Conversion of celestial pole offsets dX/dY to nutation corrections."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._types import Frame, ReductionMethod
from astroframe.config import get_dtype
from astroframe.constants import RAD2AS
from astroframe.frames import to_output_frame
from astroframe.obliquity import mean_obliquity
from astroframe.precession import precess_from_j2000
from astroframe.time import julian_centuries


def dxdy_to_dpsideps(
    dx: ArrayLike,
    dy: ArrayLike,
    jd_tt: ArrayLike,
    frame: Frame = Frame.ICRF,
) -> tuple[Array, Array]:
    """Convert celestial pole offsets to corrections in longitude and obliquity.

    The pole offset vector (observed minus modelled) is formed in the GCRS
    with a trivial model of the pole trajectory for its z component,
    rotated into *frame*, precessed to the mean equator and equinox of date
    (IAU 2006) and resolved into dPsi and dEps.

    Args:
        dx: Celestial pole offset dX [arcsec].
        dy: Celestial pole offset dY [arcsec].
        jd_tt: Julian date, TT.
        frame: Frame in which the offsets are resolved.

    Returns:
        Tuple of (dpsi, deps) [arcsec].

    References:

        1. G. H. Kaplan, *Another look at non-rotating origins*, USNO/AA
           Technical Note 2003-03, eqs. (7)-(9), 2003.
    """
    dx = jnp.asarray(dx, dtype=get_dtype())
    dy = jnp.asarray(dy, dtype=get_dtype())
    t = julian_centuries(jd_tt)
    sine = jnp.sin(mean_obliquity(t, ReductionMethod.IAU_2006))

    x = 2004.19 * t / RAD2AS
    dz = -(x + 0.5 * x**3) * dx

    dp1 = jnp.array([dx, dy, dz]) / RAD2AS
    dp2 = to_output_frame(dp1, Frame.ICRF, frame)
    dp3 = precess_from_j2000(jd_tt, dp2, ReductionMethod.IAU_2006)

    return dp3[0] / sine * RAD2AS, dp3[1] * RAD2AS
