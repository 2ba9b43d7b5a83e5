"""Observer location and its position in the solar system.

An :class:`ObserverFrame` is a geodetic location (longitude, latitude,
height) on the ellipsoid of its host body.  It provides the two vectors an
ephemeris computation needs:

- :meth:`ObserverFrame.topocentric_observer_vector`: position and velocity
  of the observer relative to the centre of its body, in the ICRF;
- :meth:`ObserverFrame.heliocentric_position_of_observer`: heliocentric
  position and velocity of the body itself, obtained from the providers of
  a :class:`~astroframe.ephemerides.ProviderRegistry`.

The geocentric form of the location is computed on first use and memoized;
every setter clears the memo.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from astroframe._types import EphemerisConfig
from astroframe.bodies import (
    Body,
    central_body,
    is_natural_satellite,
    mean_rotation_rate,
    prime_meridian_angle,
    satellite_index,
)
from astroframe.config import get_dtype
from astroframe.constants import AS2RAD, AU, PI_OVER_TWO, SECONDS_PER_DAY
from astroframe.coordinates.geodetic import distance, geocentric_to_geodetic, geodetic_to_geocentric
from astroframe.ellipsoid import WGS84, Ellipsoid, EllipsoidModel, as_ellipsoid, body_ellipsoid
from astroframe.eop import EarthOrientationStore, EOPCorrections
from astroframe.ephemerides import ProviderRegistry, default_registry
from astroframe.errors import InvalidInputError, UnsupportedBodyError
from astroframe.frames import dynamical_to_icrs
from astroframe.nutation import apparent_sidereal_time, nutate
from astroframe.precession import precess_to_j2000
from astroframe.rotation import spherical_to_cartesian
from astroframe.time import tt_to_tdb, utc_to_tt

UNSUPPORTED_SATELLITE_MESSAGE = (
    "unsupported body. Use one of the main satellites of Mars, Jupiter, Saturn, or Uranus."
)


def _obtain_eop(store: EarthOrientationStore, jd_utc: float, config: EphemerisConfig) -> EOPCorrections:
    return store.obtain_eop(
        jd_utc,
        config.method,
        correct_for_eop=config.correct_for_eop,
        correct_for_tides=config.correct_eop_for_tides,
        allow_prediction=config.allow_eop_prediction,
        frame=config.frame,
    )


def _check_latitude(lat: float) -> float:
    lat = float(lat)
    if not -PI_OVER_TWO <= lat <= PI_OVER_TWO:
        raise InvalidInputError(f"Latitude {lat} rad is outside [-pi/2, pi/2]")
    return lat


class ObserverFrame:
    """Geodetic location of an observer on a solar system body.

    Args:
        lon: East longitude [rad].
        lat: Geodetic latitude [rad].
        height: Height above the ellipsoid [m].
        ellipsoid: Reference ellipsoid. Defaults to WGS84 on the Earth and
            to the IAU ellipsoid of *body* elsewhere.
        body: Host body, or ``None`` for an observer not attached to a
            physical body (no topocentric correction).
        name: Free-form label.

    Raises:
        InvalidInputError: If *lat* is outside ``[-pi/2, pi/2]``.

    Examples:
        ```python
        from astroframe.observer import ObserverFrame
        from astroframe.utils import dms_to_radians
        madrid = ObserverFrame(dms_to_radians(-3, 42), dms_to_radians(40, 25), 693.0, name="Madrid")
        geo_lon, geo_lat, geo_rad = madrid.geocentric_location()
        ```
    """

    def __init__(
        self,
        lon: float,
        lat: float,
        height: float,
        *,
        ellipsoid: EllipsoidModel | None = None,
        body: Body | None = Body.EARTH,
        name: str = "",
    ) -> None:
        if ellipsoid is None:
            ellipsoid = WGS84 if body in (Body.EARTH, None) else body_ellipsoid(body)
        self._lon = float(lon)
        self._lat = _check_latitude(lat)
        self._height = float(height)
        self._ellipsoid = ellipsoid
        self._body = body
        self.name = name
        self._geocentric: tuple[Array, Array, Array] | None = None
        self._geocentric_ellipsoid: Ellipsoid | None = None

    @classmethod
    def from_geocentric(
        cls,
        geo_lon: float,
        geo_lat: float,
        geo_rad: float,
        *,
        ellipsoid: EllipsoidModel | None = None,
        body: Body | None = Body.EARTH,
        name: str = "",
        iterations: int = 2,
    ) -> ObserverFrame:
        """Build an observer from geocentric coordinates.

        Args:
            geo_lon: Geocentric longitude [rad].
            geo_lat: Geocentric latitude [rad].
            geo_rad: Distance from the centre in equatorial radii.
            ellipsoid: Reference ellipsoid, defaulted as in the constructor.
            body: Host body.
            name: Free-form label.
            iterations: Latitude refinement passes of the inverse transform.
        """
        if ellipsoid is None:
            ellipsoid = WGS84 if body in (Body.EARTH, None) else body_ellipsoid(body)
        lon, lat, height = geocentric_to_geodetic(ellipsoid, geo_lon, geo_lat, geo_rad, iterations=iterations)
        return cls(float(lon), float(lat), float(height), ellipsoid=ellipsoid, body=body, name=name)

    def __repr__(self) -> str:
        return (
            f"ObserverFrame(lon={self._lon!r}, lat={self._lat!r}, height={self._height!r}, "
            f"ellipsoid={as_ellipsoid(self._ellipsoid).name!r}, body={self._body}, name={self.name!r})"
        )

    # Location

    @property
    def longitude(self) -> float:
        return self._lon

    @longitude.setter
    def longitude(self, value: float) -> None:
        self._lon = float(value)
        self._invalidate()

    @property
    def latitude(self) -> float:
        return self._lat

    @latitude.setter
    def latitude(self, value: float) -> None:
        self._lat = _check_latitude(value)
        self._invalidate()

    @property
    def height(self) -> float:
        """Height above the ellipsoid [m]."""
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = float(value)
        self._invalidate()

    @property
    def ellipsoid(self) -> EllipsoidModel:
        return self._ellipsoid

    @ellipsoid.setter
    def ellipsoid(self, value: EllipsoidModel) -> None:
        self._ellipsoid = value
        self._invalidate()

    @property
    def body(self) -> Body | None:
        return self._body

    def _invalidate(self) -> None:
        self._geocentric = None
        self._geocentric_ellipsoid = None

    def geodetic_location(self) -> tuple[float, float, float]:
        """``(lon, lat, height)`` in radians and metres."""
        return self._lon, self._lat, self._height

    def geocentric_location(self) -> tuple[Array, Array, Array]:
        """``(geo_lon, geo_lat, geo_rad)``, computed on first use.

        ``geo_rad`` is in units of the equatorial radius.  A
        :class:`~astroframe.ellipsoid.CustomEllipsoid` changed after the
        last call is picked up.
        """
        current = as_ellipsoid(self._ellipsoid)
        if self._geocentric is None or self._geocentric_ellipsoid != current:
            self._geocentric = geodetic_to_geocentric(current, self._lon, self._lat, self._height)
            self._geocentric_ellipsoid = current
        return self._geocentric

    def distance_to(self, other: ObserverFrame) -> Array:
        """Surface distance to another observer on the same ellipsoid [km].

        Raises:
            InvalidInputError: If the observers use different ellipsoids.
        """
        mine = as_ellipsoid(self._ellipsoid)
        if mine != as_ellipsoid(other.ellipsoid):
            raise InvalidInputError(
                f"Cannot measure a distance between locations on different ellipsoids "
                f"({mine.name} and {as_ellipsoid(other.ellipsoid).name})"
            )
        return distance(mine, self._lon, self._lat, other.longitude, other.latitude)

    def correct_for_polar_motion(
        self,
        jd_utc: float,
        config: EphemerisConfig,
        store: EarthOrientationStore,
    ) -> None:
        """Move the location from the mean pole to the instantaneous pole.

        The site vector is rotated by the polar motion angles y and then x
        of *store*, which shifts a terrestrial site by up to about 10 m.
        Observers on other bodies are left unchanged.

        Args:
            jd_utc: Julian date, UTC.
            config: Reduction options used to look up the polar motion.
            store: Earth orientation data.

        Raises:
            UnsupportedBodyError: If the observer has no host body.
        """
        if self._body is None:
            raise UnsupportedBodyError("Observer must be on some Solar System body.")
        if self._body is not Body.EARTH:
            return

        eop = _obtain_eop(store, jd_utc, config)
        x = eop.pm_x * AS2RAD
        y = eop.pm_y * AS2RAD

        xm = math.cos(self._lon) * math.cos(self._lat)
        ym = math.sin(self._lon) * math.cos(self._lat)
        zm = math.sin(self._lat)

        zw = -ym * math.sin(y) + zm * math.cos(y)
        xt = xm * math.cos(x) - zw * math.sin(x)
        yt = ym * math.cos(y) + zm * math.sin(y)
        zt = xm * math.sin(x) + zw * math.cos(x)

        # setters clear the geocentric memo
        self.longitude = math.atan2(yt, xt) if (xt != 0.0 or yt != 0.0) else 0.0
        self.latitude = math.atan2(zt, math.hypot(xt, yt))

    # Vectors for ephemeris computations

    def _rotation_angle(
        self,
        jd_utc: float,
        config: EphemerisConfig,
        store: EarthOrientationStore | None,
    ) -> Array:
        if self._body is Body.EARTH:
            eop = EOPCorrections() if store is None else _obtain_eop(store, jd_utc, config)
            return apparent_sidereal_time(jd_utc, config.method, self._lon, eop)
        jd_tdb = float(tt_to_tdb(utc_to_tt(jd_utc)))
        return jnp.asarray(prime_meridian_angle(self._body, jd_tdb) + self._lon, dtype=get_dtype())

    def topocentric_observer_vector(
        self,
        jd_utc: float,
        config: EphemerisConfig,
        store: EarthOrientationStore | None = None,
    ) -> Array:
        """Position and velocity of the observer relative to its body's centre.

        On the Earth the angle of the location is the local apparent
        sidereal time, using the Earth orientation corrections of *store*
        (none when *store* is omitted); the nutation is then removed.  On
        other bodies the angle is the prime meridian rotation angle plus the
        longitude.  The vector is precessed to J2000 and rotated from the
        dynamical frame to the ICRS.

        Args:
            jd_utc: Julian date, UTC.
            config: Reduction options.
            store: Earth orientation data.

        Returns:
            ``[x, y, z, vx, vy, vz]`` in AU and AU/day, ICRF. All zero when
            ``config.topocentric`` is false or the observer has no body.
        """
        dtype = get_dtype()
        if not config.topocentric or self._body is None:
            return jnp.zeros(6, dtype=dtype)

        jd_tt = utc_to_tt(jd_utc)
        angle = self._rotation_angle(jd_utc, config, store)
        _, geo_lat, geo_rad = self.geocentric_location()
        radius_au = geo_rad * as_ellipsoid(self._ellipsoid).equatorial_radius / AU

        pos = spherical_to_cartesian(angle, geo_lat, radius_au)
        # Distance from the rotation axis, not from the centre
        r = jnp.hypot(pos[0], pos[1])
        vel_mod = r * mean_rotation_rate(self._body) * SECONDS_PER_DAY
        vel = jnp.stack([-vel_mod * jnp.sin(angle), vel_mod * jnp.cos(angle), jnp.zeros_like(vel_mod)])

        state = jnp.concatenate([pos, vel])
        if self._body is Body.EARTH:
            state = nutate(jd_tt, state, config.method, mean_to_true=False)

        pos = precess_to_j2000(jd_tt, state[:3], config.method)
        vel = precess_to_j2000(jd_tt, state[3:], config.method)
        return dynamical_to_icrs(jnp.concatenate([pos, vel]))

    def heliocentric_position_of_observer(
        self,
        jd_tdb: float,
        config: EphemerisConfig,
        providers: ProviderRegistry | None = None,
    ) -> Array:
        """Heliocentric position and velocity of the observer's body.

        For a natural satellite the satellite's state relative to its planet
        is added to the planet's heliocentric state; the Moon is added to the
        Earth's.  Providers are looked up by ``(config.algorithm, body)``.

        Args:
            jd_tdb: Julian date, TDB.
            config: Selects the algorithm.
            providers: Provider registry. Defaults to
                :func:`~astroframe.ephemerides.default_registry`.

        Returns:
            ``[x, y, z, vx, vy, vz]`` in AU and AU/day, mean equator and
            equinox of J2000. Zero for an observer on the Sun.

        Raises:
            UnsupportedBodyError: If the body is a satellite other than the
                main satellites of Mars, Jupiter, Saturn or Uranus (or the
                Moon), or the observer has no body.
            UnsupportedConfigurationError: If no provider is registered for
                a required ``(algorithm, body)`` pair.
        """
        registry = default_registry() if providers is None else providers
        dtype = get_dtype()
        body = self._body
        if body is None:
            raise UnsupportedBodyError("Observer is not attached to a body")
        if body is Body.SUN:
            return jnp.zeros(6, dtype=dtype)

        out = jnp.zeros(6, dtype=dtype)
        if is_natural_satellite(body):
            if body is Body.MOON:
                out = registry.get(config.algorithm, Body.MOON)(jd_tdb)
            elif satellite_index(body) == 0:
                raise UnsupportedBodyError(UNSUPPORTED_SATELLITE_MESSAGE)
            else:
                provider = registry.find(config.algorithm, body)
                if provider is None:
                    raise UnsupportedBodyError(UNSUPPORTED_SATELLITE_MESSAGE)
                out = provider(jd_tdb)
            body = central_body(body)

        home = registry.get(config.algorithm, body)(jd_tdb)
        return jnp.asarray(out, dtype=dtype) + jnp.asarray(home, dtype=dtype)
