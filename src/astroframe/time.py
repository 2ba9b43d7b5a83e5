"""Time scales, calendar conversions and sidereal time.

Julian dates are plain floats (or JAX scalars) tagged by their scale in the
argument name: ``jd_utc``, ``jd_ut1``, ``jd_tt``, ``jd_tdb``.  Sidereal time
depends on the reduction method because each precession theory comes with
its own GMST expression.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from astroframe._types import ReductionMethod
from astroframe.config import get_dtype
from astroframe.constants import (
    AS2RAD,
    J2000,
    JD_MJD_OFFSET,
    JULIAN_DAYS_PER_CENTURY,
    SECONDS_PER_DAY,
    TT_TAI,
    TWO_PI,
)

# Leap second table: (MJD of introduction, TAI-UTC in seconds)
# Each entry marks the MJD at which TAI-UTC steps to the given value.
# Source: IERS Bulletin C / USNO leap second table (1972-01-01 through 2017-01-01).
_LEAP_SECOND_TABLE: tuple[tuple[float, float], ...] = (
    (41317.0, 10.0),  # 1972-01-01
    (41499.0, 11.0),  # 1972-07-01
    (41683.0, 12.0),  # 1973-01-01
    (42048.0, 13.0),  # 1974-01-01
    (42413.0, 14.0),  # 1975-01-01
    (42778.0, 15.0),  # 1976-01-01
    (43144.0, 16.0),  # 1977-01-01
    (43509.0, 17.0),  # 1978-01-01
    (43874.0, 18.0),  # 1979-01-01
    (44239.0, 19.0),  # 1980-01-01
    (44786.0, 20.0),  # 1981-07-01
    (45151.0, 21.0),  # 1982-01-01
    (45516.0, 22.0),  # 1983-07-01
    (46247.0, 23.0),  # 1985-07-01
    (47161.0, 24.0),  # 1988-01-01
    (47892.0, 25.0),  # 1990-01-01
    (48257.0, 26.0),  # 1991-01-01
    (48804.0, 27.0),  # 1992-07-01
    (49169.0, 28.0),  # 1993-07-01
    (49534.0, 29.0),  # 1994-07-01
    (50083.0, 30.0),  # 1996-01-01
    (50630.0, 31.0),  # 1997-07-01
    (51179.0, 32.0),  # 1999-01-01
    (53736.0, 33.0),  # 2006-01-01
    (54832.0, 34.0),  # 2009-01-01
    (56109.0, 35.0),  # 2012-07-01
    (57204.0, 36.0),  # 2015-07-01
    (57754.0, 37.0),  # 2017-01-01
)

"""
Ratio of the length of a UT1 day to a sidereal day, minus one.
"""
_SIDEREAL_RATE_EXCESS = 0.00273781191135448


def leap_seconds_tai_utc(mjd: ArrayLike) -> jax.Array:
    """Return TAI-UTC (cumulative leap seconds) for a given MJD.

    For dates before 1972 returns 10.0; after the last table entry returns
    the most recent value.

    Args:
        mjd: Modified Julian Date (UTC), scalar or array.

    Returns:
        TAI-UTC in seconds.
    """
    mjd = jnp.asarray(mjd, dtype=get_dtype())
    mjd_breaks = jnp.array([m for m, _ in _LEAP_SECOND_TABLE], dtype=get_dtype())
    tai_utc_vals = jnp.array([v for _, v in _LEAP_SECOND_TABLE], dtype=get_dtype())

    # idx - 1 is the last entry <= mjd
    idx = jnp.searchsorted(mjd_breaks, mjd, side="right")
    return jnp.where(idx == 0, tai_utc_vals[0], tai_utc_vals[idx - 1])


def utc_to_tt(jd_utc: ArrayLike) -> jax.Array:
    """Convert a UTC Julian date to Terrestrial Time.

    ``jd_tt = jd_utc + (TAI-UTC + 32.184) / 86400``

    Args:
        jd_utc: Julian date, UTC.

    Returns:
        Julian date, TT.
    """
    jd_utc = jnp.asarray(jd_utc, dtype=get_dtype())
    tai_utc = leap_seconds_tai_utc(jd_utc - JD_MJD_OFFSET)
    return jd_utc + (tai_utc + TT_TAI) / SECONDS_PER_DAY


def utc_to_ut1(jd_utc: ArrayLike, ut1_utc: ArrayLike) -> jax.Array:
    """Apply a UT1-UTC offset [s] to a UTC Julian date."""
    return jnp.asarray(jd_utc, dtype=get_dtype()) + ut1_utc / SECONDS_PER_DAY


def tt_to_tdb(jd_tt: ArrayLike) -> jax.Array:
    """Approximate Barycentric Dynamical Time from Terrestrial Time.

    Uses the two leading periodic terms of TDB-TT (error below 30 us).

    Args:
        jd_tt: Julian date, TT.

    Returns:
        Julian date, TDB.
    """
    jd_tt = jnp.asarray(jd_tt, dtype=get_dtype())
    g = (357.53 + 0.98560028 * (jd_tt - J2000)) * (jnp.pi / 180.0)
    return jd_tt + (0.001657 * jnp.sin(g) + 0.000014 * jnp.sin(2.0 * g)) / SECONDS_PER_DAY


def julian_centuries(jd: ArrayLike) -> jax.Array:
    """Julian centuries elapsed since J2000.0 in the scale of *jd*."""
    return (jnp.asarray(jd, dtype=get_dtype()) - J2000) / JULIAN_DAYS_PER_CENTURY


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Modified Julian Date.

    Valid from year 1583 onward.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    b = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)
    mjd = 365 * year - 679004 + b + jnp.floor(30.6001 * (month + 1)) + day
    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return jnp.floor(mjd).astype(get_dtype()) + frac_day


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Julian Date."""
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def mjd_to_date(mjd: int) -> tuple[int, int, int]:
    """Calendar date ``(year, month, day)`` of the day containing an integer MJD.

    Pure Python integer arithmetic (Fliegel & Van Flandern), used for record
    bookkeeping rather than inside array computations.

    Args:
        mjd: Modified Julian Date of the day.

    Returns:
        ``(year, month, day)``.
    """
    jdn = int(mjd) + 2400001
    a = jdn + 68569
    b = (4 * a) // 146097
    a = a - (146097 * b + 3) // 4
    c = (4000 * (a + 1)) // 1461001
    a = a - (1461 * c) // 4 + 31
    d = (80 * a) // 2447
    day = a - (2447 * d) // 80
    a = d // 11
    month = d + 2 - 12 * a
    year = 100 * (b - 49) + c + a
    return year, month, day


def earth_rotation_angle(jd_ut1: ArrayLike) -> jax.Array:
    """Earth Rotation Angle (IAU 2000 model).

    Args:
        jd_ut1: Julian date, UT1.

    Returns:
        Earth Rotation Angle in radians, ``[0, 2*pi)``.
    """
    jd_ut1 = jnp.asarray(jd_ut1, dtype=get_dtype())
    t = jd_ut1 - J2000
    f = jnp.fmod(jd_ut1, 1.0)
    return ((f + 0.7790572732640 + _SIDEREAL_RATE_EXCESS * t) % 1.0) * TWO_PI


def _gmst_polynomial(
    jd_ut1: jax.Array, c1: float, c2: float, c3: float, c4: float = 0.0
) -> jax.Array:
    # GMST at 0h UT1 as a polynomial in T0, plus the rotation elapsed since midnight
    jd0 = jnp.floor(jd_ut1 - 0.5) + 0.5
    t0 = (jd0 - J2000) / JULIAN_DAYS_PER_CENTURY
    secs = (jd_ut1 - jd0) * SECONDS_PER_DAY
    gmst0 = (((c4 * t0 + c3) * t0 + c2) * t0 + c1) * t0 + 24110.54841
    msday = 1.0 + (((4.0 * c4 * t0 + 3.0 * c3) * t0 + 2.0 * c2) * t0 + c1) / (SECONDS_PER_DAY * JULIAN_DAYS_PER_CENTURY)
    return ((gmst0 + msday * secs) * (15.0 * AS2RAD)) % TWO_PI


def greenwich_mean_sidereal_time(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    method: ReductionMethod,
) -> jax.Array:
    """Greenwich mean sidereal time for a reduction method.

    - IAU 2000 family: Earth Rotation Angle plus the precession polynomial
      of Capitaine et al. (2003 for IAU 2000, 2005 for IAU 2006/2009),
      evaluated in TT.
    - IAU 1976, Laskar 1986: Aoki et al. (1982) expression.
    - Williams 1994, Simon 1994: Williams (1994).
    - JPL DE4xx: Williams (1994) updated to DE403.

    Args:
        jd_ut1: Julian date, UT1.
        jd_tt: Julian date, TT. Only used by the IAU 2000 family.
        method: Reduction method.

    Returns:
        GMST in radians, ``[0, 2*pi)``.

    References:

        1. N. Capitaine, P. T. Wallace and J. Chapront, *Expressions for IAU 2000 precession quantities*, A&A 412, 2003.
        2. J. G. Williams, *Contributions to the Earth's obliquity rate, precession, and nutation*, AJ 108, 1994.
    """
    jd_ut1 = jnp.asarray(jd_ut1, dtype=get_dtype())

    if method.is_iau2000_family:
        t = julian_centuries(jd_tt)
        era = earth_rotation_angle(jd_ut1)
        if method is ReductionMethod.IAU_2000:
            poly = 0.014506 + (4612.15739966 + (1.39667721 + (-0.00009344 + 0.00001882 * t) * t) * t) * t
        else:
            poly = 0.014506 + (
                4612.156534 + (1.3915817 + (-0.00000044 + (-0.000029956 - 0.0000000368 * t) * t) * t) * t
            ) * t
        return (era + poly * AS2RAD) % TWO_PI

    if method in (ReductionMethod.IAU_1976, ReductionMethod.LASKAR_1986):
        return _gmst_polynomial(jd_ut1, 8640184.812866, 9.3104e-2, -6.2e-6)
    if method is ReductionMethod.JPL_DE4XX:
        return _gmst_polynomial(jd_ut1, 8640184.7942063, 9.27701e-2, -3.0e-7, -2.0e-6)
    return _gmst_polynomial(jd_ut1, 8640184.7928613, 9.27695e-2, -3.0e-7, -2.0e-6)
