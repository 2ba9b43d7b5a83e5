"""Nutation, true obliquity and apparent sidereal time.

Two nutation theories are provided:

- IAU 1980 (Wahr 1981), used by the IAU 1976, Laskar 1986, Simon 1994,
  Williams 1994 and JPL DE4xx reductions.
- IAU 2000A (MHB2000 luni-solar and planetary terms), used by the IAU 2000
  family.  For IAU 2006/2009 the P03-compatible J2 rate adjustment is
  applied on top.

Both series are evaluated with a single matrix product over all terms.
Observed corrections (dPsi, dEps) from the Earth orientation data are added
when supplied.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._nutation_data import IAU1980_TERMS, LUNI_SOLAR_TERMS, PLANETARY_TERMS
from astroframe._types import ReductionMethod
from astroframe.config import get_dtype
from astroframe.constants import AS2RAD, SECONDS_PER_DAY, TURNAS, TWO_PI
from astroframe.eop._types import EOPCorrections
from astroframe.obliquity import mean_obliquity
from astroframe.rotation import Rx, Rz, normalize_angle
from astroframe.time import greenwich_mean_sidereal_time, julian_centuries, utc_to_tt

# 0.1 microarcsecond to radians
_U2R = AS2RAD / 1.0e7


def _turn_arcsec(a: Array) -> Array:
    return jnp.mod(a, TURNAS) * AS2RAD


def _iau1980_arguments(t: Array) -> Array:
    # Delaunay arguments (l, l', F, D, Om) of the IAU 1980 theory
    mm = _turn_arcsec(1717915922.633 * t + 485866.733) + (0.064 * t + 31.310) * t * t * AS2RAD
    ms = _turn_arcsec(129596581.224 * t + 1287099.804) - (0.012 * t + 0.577) * t * t * AS2RAD
    ff = _turn_arcsec(1739527263.137 * t + 335778.877) + (0.011 * t - 13.257) * t * t * AS2RAD
    dd = _turn_arcsec(1602961601.328 * t + 1072261.307) + (0.019 * t - 6.891) * t * t * AS2RAD
    om = _turn_arcsec(-6962890.539 * t + 450160.280) + (0.008 * t + 7.455) * t * t * AS2RAD
    return jnp.array([mm, ms, ff, dd, om])


def _iau2000_arguments(t: Array) -> Array:
    # Delaunay arguments (l, l', F, D, Om), Simon et al. (1994)
    el = 485868.249036 + t * (1717915923.2178 + t * (31.8792 + t * (0.051635 + t * -0.00024470)))
    elp = 1287104.79305 + t * (129596581.0481 + t * (-0.5532 + t * (0.000136 + t * -0.00001149)))
    f = 335779.526232 + t * (1739527262.8478 + t * (-12.7512 + t * (-0.001037 + t * 0.00000417)))
    d = 1072260.70369 + t * (1602961601.2090 + t * (-6.3706 + t * (0.006593 + t * -0.00003169)))
    om = 450160.398036 + t * (-6962890.5431 + t * (7.4722 + t * (0.007702 + t * -0.00005939)))
    return jnp.array([_turn_arcsec(el), _turn_arcsec(elp), _turn_arcsec(f), _turn_arcsec(d), _turn_arcsec(om)])


def _planetary_arguments(t: Array) -> Array:
    # MHB2000 simplified Delaunay arguments and planetary mean longitudes
    args = (
        2.35555598 + 8328.6914269554 * t,
        1.627905234 + 8433.466158131 * t,
        5.198466741 + 7771.3771468121 * t,
        2.18243920 - 33.757045 * t,
        4.402608842 + 2608.7903141574 * t,
        3.176146697 + 1021.3285546211 * t,
        1.753470314 + 628.3075849991 * t,
        6.203480913 + 334.0612426700 * t,
        0.599546497 + 52.9690962641 * t,
        0.874016757 + 21.3299104960 * t,
        5.481293871 + 7.4781598567 * t,
        5.321159000 + 3.8127774000 * t,
    )
    apa = (0.02438175 + 0.00000538691 * t) * t
    return jnp.array([jnp.mod(a, TWO_PI) for a in args] + [apa])


def nutation_iau1980(t: ArrayLike) -> tuple[Array, Array]:
    """Nutation in longitude and obliquity, IAU 1980 theory.

    Args:
        t: Julian centuries from J2000 (TT).

    Returns:
        Tuple of (dpsi, deps) [radians].

    References:

        1. P. K. Seidelmann, *1980 IAU Theory of Nutation: The Final Report
           of the IAU Working Group on Nutation*, Celest. Mech. 27, 1982.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    t10 = t / 10.0
    args = _iau1980_arguments(t)

    terms = jnp.array(IAU1980_TERMS, dtype=dtype)
    arg = terms[:, :5] @ args
    c = jnp.sum((terms[:, 5] + terms[:, 6] * t10) * jnp.sin(arg))
    d = jnp.sum((terms[:, 7] + terms[:, 8] * t10) * jnp.cos(arg))

    # 18.6-year term
    om = args[4]
    c = c + (-171996.0 - 174.2 * t) * jnp.sin(om)
    d = d + (92025.0 + 8.9 * t) * jnp.cos(om)

    return 1.0e-4 * c * AS2RAD, 1.0e-4 * d * AS2RAD


def nutation_iau2000a(t: ArrayLike) -> tuple[Array, Array]:
    """Nutation in longitude and obliquity, IAU 2000A model.

    Vectorized over the 678 luni-solar and 687 planetary terms.

    Args:
        t: Julian centuries from J2000 (TT).

    Returns:
        Tuple of (dpsi, deps) [radians].

    References:

        1. P. M. Mathews, T. A. Herring and B. A. Buffett, *Modeling of
           nutation and precession: New nutation series for nonrigid Earth
           and insights into the Earth's interior*, J. Geophys. Res. 107, 2002.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)

    ls = jnp.array(LUNI_SOLAR_TERMS, dtype=dtype)
    ls_args = ls[:, :5] @ _iau2000_arguments(t)
    ls_sin = jnp.sin(ls_args)
    ls_cos = jnp.cos(ls_args)
    dpsi_ls = jnp.sum((ls[:, 5] + ls[:, 6] * t) * ls_sin + ls[:, 7] * ls_cos)
    deps_ls = jnp.sum((ls[:, 8] + ls[:, 9] * t) * ls_cos + ls[:, 10] * ls_sin)

    pl = jnp.array(PLANETARY_TERMS, dtype=dtype)
    pl_args = pl[:, :13] @ _planetary_arguments(t)
    pl_sin = jnp.sin(pl_args)
    pl_cos = jnp.cos(pl_args)
    dpsi_pl = jnp.sum(pl[:, 13] * pl_sin + pl[:, 14] * pl_cos)
    deps_pl = jnp.sum(pl[:, 15] * pl_sin + pl[:, 16] * pl_cos)

    return (dpsi_ls + dpsi_pl) * _U2R, (deps_ls + deps_pl) * _U2R


def nutation(
    jd_tt: ArrayLike,
    method: ReductionMethod,
    eop: EOPCorrections | None = None,
) -> tuple[Array, Array]:
    """Nutation in longitude and obliquity for a reduction method.

    Args:
        jd_tt: Julian date, TT.
        method: Reduction method selecting the theory.
        eop: Observed corrections. Their ``dpsi`` and ``deps`` [arcsec] are
            added to the theory.

    Returns:
        Tuple of (dpsi, deps) [radians].

    Examples:
        ```python
        from astroframe import ReductionMethod
        from astroframe.nutation import nutation
        dpsi, deps = nutation(2451545.0, ReductionMethod.IAU_2006)
        ```
    """
    t = julian_centuries(jd_tt)
    if method.is_iau2000_family:
        dpsi, deps = nutation_iau2000a(t)
        if method is not ReductionMethod.IAU_2000:
            # Adjustment for the J2 rate of IAU 2006 precession
            fj2 = -2.7774e-6 * t
            dpsi = dpsi + dpsi * (0.4697e-6 + fj2)
            deps = deps + deps * fj2
    else:
        dpsi, deps = nutation_iau1980(t)

    if eop is not None:
        dpsi = dpsi + eop.dpsi * AS2RAD
        deps = deps + eop.deps * AS2RAD
    return dpsi, deps


def true_obliquity(
    jd_tt: ArrayLike,
    method: ReductionMethod,
    eop: EOPCorrections | None = None,
) -> Array:
    """Mean obliquity of date plus nutation in obliquity [radians]."""
    _, deps = nutation(jd_tt, method, eop)
    return mean_obliquity(julian_centuries(jd_tt), method) + deps


def nutation_matrix(
    jd_tt: ArrayLike,
    method: ReductionMethod,
    eop: EOPCorrections | None = None,
) -> Array:
    """Rotation matrix from the mean to the true equator and equinox of date.

    ``N = R1(-eps_true) R3(-dpsi) R1(eps_mean)``

    Args:
        jd_tt: Julian date, TT.
        method: Reduction method.
        eop: Observed nutation corrections.

    Returns:
        Rotation matrix, shape ``(3, 3)``.
    """
    dpsi, deps = nutation(jd_tt, method, eop)
    eps_mean = mean_obliquity(julian_centuries(jd_tt), method)
    return Rx(-(eps_mean + deps)) @ Rz(-dpsi) @ Rx(eps_mean)


def nutate(
    jd_tt: ArrayLike,
    v: ArrayLike,
    method: ReductionMethod,
    mean_to_true: bool = True,
    eop: EOPCorrections | None = None,
) -> Array:
    """Apply or remove nutation on a position or a position-velocity vector.

    Args:
        jd_tt: Julian date, TT.
        v: Vector of shape ``(3,)`` or ``(6,)``. A velocity part is rotated
            with the same matrix as the position.
        method: Reduction method.
        mean_to_true: ``True`` to go from mean to true equator and equinox,
            ``False`` for the inverse.
        eop: Observed nutation corrections.

    Returns:
        Rotated vector with the shape of *v*.
    """
    v = jnp.asarray(v, dtype=get_dtype())
    n = nutation_matrix(jd_tt, method, eop)
    if not mean_to_true:
        n = n.T
    return (v.reshape(-1, 3) @ n.T).reshape(v.shape)


def equation_of_equinoxes(
    jd_tt: ArrayLike,
    method: ReductionMethod,
    eop: EOPCorrections | None = None,
) -> Array:
    """Equation of the equinoxes [radians].

    ``dpsi cos(eps_mean)``, plus the complementary terms of Capitaine et al.
    (2003) for the IAU 2000 family.
    """
    t = julian_centuries(jd_tt)
    dpsi, _ = nutation(jd_tt, method, eop)
    eqeq = dpsi * jnp.cos(mean_obliquity(t, method))
    if not method.is_iau2000_family:
        return eqeq

    _, _, f, d, om = _iau2000_arguments(t)
    fd = 2.0 * f - 2.0 * d
    ct = (
        2640.96e-6 * jnp.sin(om)
        + 63.52e-6 * jnp.sin(2.0 * om)
        + 11.75e-6 * jnp.sin(fd + 3.0 * om)
        + 11.21e-6 * jnp.sin(fd + om)
        - 4.55e-6 * jnp.sin(fd + 2.0 * om)
        + 2.02e-6 * jnp.sin(2.0 * f + 3.0 * om)
        + 1.98e-6 * jnp.sin(2.0 * f + om)
        - 1.72e-6 * jnp.sin(3.0 * om)
        - 0.87e-6 * t * jnp.sin(om)
    )
    return eqeq + ct * AS2RAD


def apparent_sidereal_time(
    jd_utc: ArrayLike,
    method: ReductionMethod,
    longitude: ArrayLike = 0.0,
    eop: EOPCorrections | None = None,
) -> Array:
    """Local apparent sidereal time.

    Args:
        jd_utc: Julian date, UTC.
        method: Reduction method.
        longitude: East longitude of the observer [radians].
        eop: Earth orientation corrections. Supplies UT1-UTC and the
            observed nutation corrections; zero when omitted.

    Returns:
        Local apparent sidereal time in radians, ``[0, 2*pi)``.
    """
    ut1_utc = 0.0 if eop is None else eop.ut1_utc
    jd_ut1 = jnp.asarray(jd_utc, dtype=get_dtype()) + ut1_utc / SECONDS_PER_DAY
    jd_tt = utc_to_tt(jd_utc)
    gmst = greenwich_mean_sidereal_time(jd_ut1, jd_tt, method)
    return normalize_angle(gmst + equation_of_equinoxes(jd_tt, method, eop) + longitude)
