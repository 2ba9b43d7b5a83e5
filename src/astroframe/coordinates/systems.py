"""Conversions between equatorial, ecliptic, horizontal and galactic coordinates.

Every conversion is a single spherical rotation
(:func:`~astroframe.rotation.rotate_to` or
:func:`~astroframe.rotation.rotate_from`) with a pole and node chosen for
the pair of systems.  Equatorial coordinates are the hub: :func:`transform`
goes through them when neither side is equatorial.

Radii are carried through unchanged.  All angles are in radians.
"""

from __future__ import annotations

import enum

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._types import EphemerisConfig, EphemType, Frame
from astroframe.constants import DEG2RAD, J2000, PI_OVER_TWO
from astroframe.eop._types import EOPCorrections
from astroframe.errors import InvalidInputError
from astroframe.frames import to_output_frame
from astroframe.nutation import true_obliquity
from astroframe.obliquity import mean_obliquity
from astroframe.precession import precess
from astroframe.rotation import (
    SphericalPosition,
    cartesian_to_spherical,
    rotate_from,
    rotate_position_from,
    rotate_position_to,
    rotate_to,
    spherical_to_cartesian,
)
from astroframe.time import julian_centuries
from astroframe.utils import dms_to_radians, hms_to_radians

_PI = jnp.pi

"""
Right ascension of the north galactic pole, FK5 J2000. Units: *rad*

References:

1. J.-C. Liu, Z. Zhu and H. Zhang, *Reconsidering the galactic coordinate system*, A&A 526, 2011.
"""
GALACTIC_POLE_RA = hms_to_radians(12, 51, 26.27549)

"""
Declination of the north galactic pole, FK5 J2000. Units: *rad*
"""
GALACTIC_POLE_DEC = dms_to_radians(27, 7, 41.7043)

"""
Equatorial longitude of the ascending node of the galactic plane, FK5 J2000. Units: *rad*
"""
GALACTIC_POLE_NODE_J2000 = 32.93191857 * DEG2RAD


class CoordinateSystem(enum.Enum):
    """Celestial coordinate systems handled by :func:`transform`."""

    EQUATORIAL = "EQUATORIAL"
    ECLIPTIC = "ECLIPTIC"
    HORIZONTAL = "HORIZONTAL"
    GALACTIC = "GALACTIC"


def horizontal_to_equatorial(
    position: SphericalPosition,
    sidereal_time: ArrayLike,
    latitude: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Horizontal (azimuth from north through east, altitude) to equatorial.

    Args:
        position: Azimuth and altitude.
        sidereal_time: Local apparent sidereal time.
        latitude: Observer latitude.
        fast: Use the reduced-precision trigonometry.

    Returns:
        Right ascension and declination of date.
    """
    lon, lat = rotate_to(sidereal_time, latitude, PI_OVER_TWO, -_PI - position.lon, position.lat, fast=fast)
    return SphericalPosition(lon, lat, position.radius)


def equatorial_to_horizontal(
    position: SphericalPosition,
    sidereal_time: ArrayLike,
    latitude: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Equatorial to horizontal coordinates.

    Args:
        position: Right ascension and declination of date.
        sidereal_time: Local apparent sidereal time.
        latitude: Observer latitude.
        fast: Use the reduced-precision trigonometry.

    Returns:
        Azimuth (from north through east) and geometric altitude.

    Examples:
        ```python
        from astroframe.coordinates import equatorial_to_horizontal
        from astroframe.rotation import SphericalPosition
        hz = equatorial_to_horizontal(SphericalPosition.of(1.0, 0.3), 1.2, 0.7)
        ```
    """
    lon, lat = rotate_from(-sidereal_time, latitude, PI_OVER_TWO, -position.lon, position.lat, fast=fast)
    return SphericalPosition.of(lon + _PI, lat, position.radius)


def ecliptic_to_equatorial(
    position: SphericalPosition,
    obliquity: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Ecliptic longitude and latitude to right ascension and declination."""
    return rotate_position_to(position, -PI_OVER_TWO, PI_OVER_TWO - obliquity, 0.0, fast=fast)


def equatorial_to_ecliptic(
    position: SphericalPosition,
    obliquity: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Right ascension and declination to ecliptic longitude and latitude."""
    return rotate_position_from(position, PI_OVER_TWO, PI_OVER_TWO + obliquity, 0.0, fast=fast)


def _output_equinox(config: EphemerisConfig, jd_tt: ArrayLike) -> ArrayLike:
    return jd_tt if config.equinox is None else config.equinox


def galactic_to_equatorial(
    position: SphericalPosition,
    config: EphemerisConfig,
    jd_tt: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Galactic to equatorial coordinates in the frame and equinox of *config*.

    The rotation gives FK5 J2000 coordinates, which are then converted to
    ``config.frame`` and precessed to ``config.equinox`` (the equinox of
    *jd_tt* when that is ``None``).

    Args:
        position: Galactic longitude and latitude.
        config: Output frame, equinox and precession method.
        jd_tt: Julian date (TT) of the computation.
        fast: Use the reduced-precision trigonometry for the rotation.

    Returns:
        Right ascension and declination.

    Raises:
        UnsupportedConfigurationError: If ``config.frame`` is FK4.
    """
    lon, lat = rotate_to(
        GALACTIC_POLE_RA, GALACTIC_POLE_DEC, GALACTIC_POLE_NODE_J2000, position.lon, position.lat, fast=fast
    )
    v = spherical_to_cartesian(lon, lat)
    v = to_output_frame(v, Frame.FK5, config.frame)
    v = precess(J2000, _output_equinox(config, jd_tt), v, config.method)
    lon, lat, _ = cartesian_to_spherical(v)
    return SphericalPosition(lon, lat, position.radius)


def equatorial_to_galactic(
    position: SphericalPosition,
    config: EphemerisConfig,
    jd_tt: ArrayLike,
    *,
    fast: bool = False,
) -> SphericalPosition:
    """Equatorial coordinates in the frame and equinox of *config* to galactic.

    Inverse of :func:`galactic_to_equatorial`: the input is precessed to
    J2000 and converted to FK5 before the rotation.

    Raises:
        UnsupportedConfigurationError: If ``config.frame`` is FK4.
    """
    v = spherical_to_cartesian(position.lon, position.lat)
    v = precess(_output_equinox(config, jd_tt), J2000, v, config.method)
    v = to_output_frame(v, config.frame, Frame.FK5)
    ra, dec, _ = cartesian_to_spherical(v)
    lon, lat = rotate_from(GALACTIC_POLE_RA, GALACTIC_POLE_DEC, GALACTIC_POLE_NODE_J2000, ra, dec, fast=fast)
    return SphericalPosition(lon, lat, position.radius)


def obliquity_for(
    config: EphemerisConfig,
    jd_tt: ArrayLike,
    eop: EOPCorrections | None = None,
) -> Array:
    """Obliquity to use for ecliptic conversions under *config*.

    The true obliquity of date for apparent positions, the mean obliquity
    otherwise.
    """
    if config.ephem_type is EphemType.APPARENT:
        return true_obliquity(jd_tt, config.method, eop)
    return mean_obliquity(julian_centuries(jd_tt), config.method)


def _to_equatorial(
    position: SphericalPosition,
    system: CoordinateSystem,
    config: EphemerisConfig,
    jd_tt: ArrayLike | None,
    sidereal_time: ArrayLike | None,
    latitude: ArrayLike | None,
    fast: bool,
) -> SphericalPosition:
    if system is CoordinateSystem.EQUATORIAL:
        return position
    if system is CoordinateSystem.HORIZONTAL:
        return horizontal_to_equatorial(position, sidereal_time, latitude, fast=fast)
    if system is CoordinateSystem.ECLIPTIC:
        return ecliptic_to_equatorial(position, obliquity_for(config, jd_tt), fast=fast)
    return galactic_to_equatorial(position, config, jd_tt, fast=fast)


def _from_equatorial(
    position: SphericalPosition,
    system: CoordinateSystem,
    config: EphemerisConfig,
    jd_tt: ArrayLike | None,
    sidereal_time: ArrayLike | None,
    latitude: ArrayLike | None,
    fast: bool,
) -> SphericalPosition:
    if system is CoordinateSystem.EQUATORIAL:
        return position
    if system is CoordinateSystem.HORIZONTAL:
        return equatorial_to_horizontal(position, sidereal_time, latitude, fast=fast)
    if system is CoordinateSystem.ECLIPTIC:
        return equatorial_to_ecliptic(position, obliquity_for(config, jd_tt), fast=fast)
    return equatorial_to_galactic(position, config, jd_tt, fast=fast)


def _check_arguments(
    systems: tuple[CoordinateSystem, ...],
    jd_tt: ArrayLike | None,
    sidereal_time: ArrayLike | None,
    latitude: ArrayLike | None,
) -> None:
    if CoordinateSystem.HORIZONTAL in systems and (sidereal_time is None or latitude is None):
        raise InvalidInputError("Horizontal coordinates need the sidereal time and the observer latitude")
    needs_date = (CoordinateSystem.ECLIPTIC, CoordinateSystem.GALACTIC)
    if any(s in needs_date for s in systems) and jd_tt is None:
        raise InvalidInputError("Ecliptic and galactic coordinates need the date (jd_tt)")


def transform(
    position: SphericalPosition,
    from_system: CoordinateSystem,
    to_system: CoordinateSystem,
    *,
    config: EphemerisConfig | None = None,
    jd_tt: ArrayLike | None = None,
    sidereal_time: ArrayLike | None = None,
    latitude: ArrayLike | None = None,
    fast: bool = False,
) -> SphericalPosition:
    """Convert a position between any two coordinate systems.

    Args:
        position: Input position.
        from_system: System of *position*.
        to_system: Requested system.
        config: Frame, equinox, method and ephemeris type. Defaults to
            :class:`~astroframe.EphemerisConfig` defaults.
        jd_tt: Julian date (TT). Required for ecliptic and galactic
            coordinates.
        sidereal_time: Local apparent sidereal time. Required for
            horizontal coordinates.
        latitude: Observer latitude. Required for horizontal coordinates.
        fast: Use the reduced-precision trigonometry.

    Returns:
        The position in *to_system*.

    Raises:
        InvalidInputError: If an argument needed by one of the systems is
            missing.

    Examples:
        ```python
        from astroframe.coordinates import CoordinateSystem, transform
        from astroframe.rotation import SphericalPosition
        ecl = transform(
            SphericalPosition.of(1.0, 0.2),
            CoordinateSystem.EQUATORIAL,
            CoordinateSystem.ECLIPTIC,
            jd_tt=2451545.0,
        )
        ```
    """
    if from_system is to_system:
        return position
    _check_arguments((from_system, to_system), jd_tt, sidereal_time, latitude)
    config = EphemerisConfig() if config is None else config
    args = (config, jd_tt, sidereal_time, latitude, fast)
    equatorial = _to_equatorial(position, from_system, *args)
    return _from_equatorial(equatorial, to_system, *args)

