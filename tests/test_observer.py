"""Tests for the observer location and the observer vectors."""

from __future__ import annotations

import math

import jax.numpy as jnp
import numpy as np
import pytest

from astroframe._types import Algorithm, EphemerisConfig, ReductionMethod
from astroframe.bodies import Body
from astroframe.constants import AS2RAD, AU, OMEGA_EARTH, SECONDS_PER_DAY
from astroframe.ellipsoid import IAU1976, WGS84, CustomEllipsoid, body_ellipsoid
from astroframe.eop import EarthOrientationStore, EOPRecord, EOPSeries, TableEOPSource
from astroframe.ephemerides import ProviderRegistry, default_registry, keplerian_state
from astroframe.errors import InvalidInputError, UnsupportedBodyError, UnsupportedConfigurationError
from astroframe.observer import UNSUPPORTED_SATELLITE_MESSAGE, ObserverFrame
from astroframe.utils import dms_to_radians

JD = 2460000.5
CONFIG = EphemerisConfig(method=ReductionMethod.IAU_2006)


def _angle_between(a, b) -> float:
    a = np.asarray(a)
    b = np.asarray(b)
    return math.atan2(np.linalg.norm(np.cross(a, b)), float(np.dot(a, b)))


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------


class TestLocation:
    def test_defaults(self):
        obs = ObserverFrame(0.1, 0.2, 300.0, name="site")
        assert obs.geodetic_location() == (0.1, 0.2, 300.0)
        assert obs.ellipsoid is WGS84
        assert obs.body is Body.EARTH
        assert obs.name == "site"

    def test_body_ellipsoid_default(self):
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.MARS)
        assert obs.ellipsoid == body_ellipsoid(Body.MARS)

    def test_no_body_uses_wgs84(self):
        assert ObserverFrame(0.0, 0.0, 0.0, body=None).ellipsoid is WGS84

    @pytest.mark.parametrize("lat", [1.6, -1.6, math.pi])
    def test_latitude_out_of_range(self, lat):
        with pytest.raises(InvalidInputError, match="outside"):
            ObserverFrame(0.0, lat, 0.0)

    def test_latitude_setter_validates(self):
        obs = ObserverFrame(0.0, 0.0, 0.0)
        with pytest.raises(InvalidInputError):
            obs.latitude = 2.0

    def test_repr(self):
        text = repr(ObserverFrame(0.0, 0.5, 10.0, name="Madrid"))
        assert "WGS84" in text
        assert "Madrid" in text


class TestGeocentricLocation:
    def test_memoized(self):
        obs = ObserverFrame(0.3, 0.7, 693.0)
        assert obs.geocentric_location() is obs.geocentric_location()

    @pytest.mark.parametrize(
        "attr, value",
        [("longitude", 0.5), ("latitude", 0.2), ("height", 5000.0), ("ellipsoid", IAU1976)],
    )
    def test_setter_invalidates(self, attr, value):
        obs = ObserverFrame(0.3, 0.7, 693.0)
        before = obs.geocentric_location()
        setattr(obs, attr, value)
        after = obs.geocentric_location()
        assert after is not before
        assert any(float(a) != float(b) for a, b in zip(before, after))

    def test_custom_ellipsoid_change_picked_up(self):
        custom = CustomEllipsoid()
        obs = ObserverFrame(0.0, 0.7, 0.0, ellipsoid=custom)
        _, lat_before, _ = obs.geocentric_location()
        custom.set_radii(6378.137, 6300.0)
        _, lat_after, _ = obs.geocentric_location()
        assert float(lat_after) < float(lat_before)

    def test_from_geocentric_round_trip(self):
        obs = ObserverFrame(dms_to_radians(-3, 42), dms_to_radians(40, 25), 693.0)
        back = ObserverFrame.from_geocentric(*obs.geocentric_location())
        assert back.longitude == pytest.approx(obs.longitude, abs=1e-12)
        assert back.latitude == pytest.approx(obs.latitude, abs=5e-9)
        assert back.height == pytest.approx(693.0, abs=1e-3)

    def test_from_geocentric_on_mars(self):
        back = ObserverFrame.from_geocentric(0.0, 0.0, 1.0, body=Body.MARS)
        assert back.ellipsoid == body_ellipsoid(Body.MARS)
        assert back.height == pytest.approx(0.0, abs=1e-4)


class TestDistanceTo:
    def test_same_ellipsoid(self):
        a = ObserverFrame(0.0, 0.0, 0.0)
        b = ObserverFrame(0.0, 0.0, 0.0)
        b.longitude = 0.01
        assert float(a.distance_to(b)) == pytest.approx(0.01 * WGS84.equatorial_radius, rel=1e-3)

    def test_different_ellipsoids(self):
        a = ObserverFrame(0.0, 0.0, 0.0)
        b = ObserverFrame(0.1, 0.0, 0.0, ellipsoid=IAU1976)
        with pytest.raises(InvalidInputError, match="different ellipsoids"):
            a.distance_to(b)


# ---------------------------------------------------------------------------
# Topocentric observer vector
# ---------------------------------------------------------------------------


class TestTopocentricObserverVector:
    def test_disabled(self):
        obs = ObserverFrame(0.3, 0.7, 693.0)
        out = obs.topocentric_observer_vector(JD, EphemerisConfig(topocentric=False))
        np.testing.assert_array_equal(np.asarray(out), np.zeros(6))

    def test_no_body(self):
        out = ObserverFrame(0.3, 0.7, 693.0, body=None).topocentric_observer_vector(JD, CONFIG)
        np.testing.assert_array_equal(np.asarray(out), np.zeros(6))

    def test_position_length(self):
        obs = ObserverFrame(0.3, 0.7, 693.0)
        out = obs.topocentric_observer_vector(JD, CONFIG)
        _, _, geo_rad = obs.geocentric_location()
        expected = float(geo_rad) * WGS84.equatorial_radius / AU
        assert float(jnp.linalg.norm(out[:3])) == pytest.approx(expected, rel=1e-12)

    def test_equatorial_speed(self):
        """An observer on the equator moves at about 465 m/s."""
        out = ObserverFrame(0.0, 0.0, 0.0).topocentric_observer_vector(JD, CONFIG)
        speed = float(jnp.linalg.norm(out[3:])) * AU / SECONDS_PER_DAY
        assert speed == pytest.approx(WGS84.equatorial_radius * OMEGA_EARTH, rel=1e-9)
        assert speed == pytest.approx(0.4651, abs=1e-3)

    def test_speed_uses_distance_from_axis(self):
        obs = ObserverFrame(0.0, math.radians(60.0), 0.0)
        out = obs.topocentric_observer_vector(JD, CONFIG)
        _, geo_lat, geo_rad = obs.geocentric_location()
        axis_distance = float(geo_rad * jnp.cos(geo_lat)) * WGS84.equatorial_radius
        speed = float(jnp.linalg.norm(out[3:])) * AU / SECONDS_PER_DAY
        assert speed == pytest.approx(axis_distance * OMEGA_EARTH, rel=1e-9)

    def test_velocity_perpendicular_to_position(self):
        out = ObserverFrame(1.0, -0.4, 100.0).topocentric_observer_vector(JD, CONFIG)
        assert _angle_between(out[:3], out[3:]) == pytest.approx(math.pi / 2, abs=1e-9)

    def test_moves_with_time(self):
        obs = ObserverFrame(0.0, 0.0, 0.0)
        a = obs.topocentric_observer_vector(JD, CONFIG)
        b = obs.topocentric_observer_vector(JD + 0.25, CONFIG)
        # A quarter of a day is a little more than a quarter turn
        assert _angle_between(a[:3], b[:3]) == pytest.approx(math.pi / 2, abs=0.01)

    def test_ut1_offset_rotates_observer(self):
        record = EOPRecord(60000, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        store = EarthOrientationStore({EOPSeries.IAU2000: TableEOPSource([record])})
        store.force_eop(JD, CONFIG.method, ut1_utc=1.0, pm_x=0.0, pm_y=0.0, dx=0.0, dy=0.0)

        obs = ObserverFrame(0.0, 0.0, 0.0)
        plain = obs.topocentric_observer_vector(JD, CONFIG)
        shifted = obs.topocentric_observer_vector(JD, CONFIG, store)
        # One second of UT1 is 15.04 arcseconds of rotation
        assert _angle_between(plain[:3], shifted[:3]) == pytest.approx(
            OMEGA_EARTH * 1.0, rel=1e-3
        )

    def test_store_without_eop_correction(self):
        record = EOPRecord(60000, 0.0, 0.0, 0.5, 0.0, 0.0, 0.0)
        store = EarthOrientationStore({EOPSeries.IAU2000: TableEOPSource([record])})
        obs = ObserverFrame(0.0, 0.0, 0.0)
        config = EphemerisConfig(method=ReductionMethod.IAU_2006, correct_for_eop=False)
        out = obs.topocentric_observer_vector(JD, config, store)
        np.testing.assert_allclose(
            np.asarray(out), np.asarray(obs.topocentric_observer_vector(JD, config)), atol=1e-18
        )

    def test_other_body_ignores_store(self):
        source = TableEOPSource([EOPRecord(60000, 0.0, 0.0, 0.5, 0.0, 0.0, 0.0)])
        store = EarthOrientationStore({EOPSeries.IAU2000: source})
        obs = ObserverFrame(0.0, 0.3, 0.0, body=Body.MARS)
        out = obs.topocentric_observer_vector(JD, CONFIG, store)
        assert source.reads == 0
        _, _, geo_rad = obs.geocentric_location()
        expected = float(geo_rad) * body_ellipsoid(Body.MARS).equatorial_radius / AU
        assert float(jnp.linalg.norm(out[:3])) == pytest.approx(expected, rel=1e-12)

    def test_retrograde_rotator(self):
        """Venus rotates backwards, the speed is still the distance times the rate."""
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.VENUS)
        out = obs.topocentric_observer_vector(JD, CONFIG)
        rate = abs(Body.VENUS.data.rotation_rate_deg_per_day) * math.pi / 180.0
        speed = float(jnp.linalg.norm(out[3:]))
        assert speed == pytest.approx(6051.8 / AU * rate, rel=1e-9)


# ---------------------------------------------------------------------------
# Polar motion
# ---------------------------------------------------------------------------


def _forced_store(pm_x: float, pm_y: float) -> EarthOrientationStore:
    store = EarthOrientationStore({})
    store.force_eop(JD, CONFIG.method, ut1_utc=0.0, pm_x=pm_x, pm_y=pm_y, dx=0.0, dy=0.0)
    return store


class TestCorrectForPolarMotion:
    def test_x_tilts_greenwich_meridian(self):
        obs = ObserverFrame(0.0, 0.0, 0.0)
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.2, 0.0))
        assert obs.longitude == pytest.approx(0.0, abs=1e-15)
        assert obs.latitude == pytest.approx(0.2 * AS2RAD, rel=1e-12)

    def test_y_tilts_ninety_degrees_east(self):
        obs = ObserverFrame(math.pi / 2.0, 0.0, 0.0)
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.0, 0.3))
        assert obs.longitude == pytest.approx(math.pi / 2.0, abs=1e-15)
        assert obs.latitude == pytest.approx(-0.3 * AS2RAD, rel=1e-12)

    def test_shift_is_metres(self):
        obs = ObserverFrame(0.4, 0.7, 0.0)
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.25, 0.35))
        before = [math.cos(0.4) * math.cos(0.7), math.sin(0.4) * math.cos(0.7), math.sin(0.7)]
        lon, lat, _ = obs.geodetic_location()
        after = [math.cos(lon) * math.cos(lat), math.sin(lon) * math.cos(lat), math.sin(lat)]
        metres = _angle_between(before, after) * 6378137.0
        assert 5.0 < metres < 15.0

    def test_clears_geocentric_memo(self):
        obs = ObserverFrame(0.0, 0.0, 0.0)
        _, lat_before, _ = obs.geocentric_location()
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.2, 0.0))
        _, lat_after, _ = obs.geocentric_location()
        assert float(lat_after) > float(lat_before)

    def test_zero_polar_motion_keeps_location(self):
        obs = ObserverFrame(1.1, -0.4, 50.0)
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.0, 0.0))
        assert obs.longitude == pytest.approx(1.1, abs=1e-15)
        assert obs.latitude == pytest.approx(-0.4, abs=1e-15)

    def test_other_body_unchanged(self):
        obs = ObserverFrame(0.3, 0.2, 0.0, body=Body.MARS)
        obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.2, 0.3))
        assert obs.geodetic_location() == (0.3, 0.2, 0.0)

    def test_no_body_raises(self):
        obs = ObserverFrame(0.3, 0.2, 0.0, body=None)
        with pytest.raises(UnsupportedBodyError, match="Solar System body"):
            obs.correct_for_polar_motion(JD, CONFIG, _forced_store(0.2, 0.3))


# ---------------------------------------------------------------------------
# Heliocentric position of the observer
# ---------------------------------------------------------------------------


def _constant(values):
    state = jnp.asarray(values, dtype=jnp.float64)

    def provider(jd_tdb: float):
        return state

    return provider


class TestHeliocentricPosition:
    def test_earth(self):
        out = ObserverFrame(0.0, 0.0, 0.0).heliocentric_position_of_observer(JD, EphemerisConfig())
        np.testing.assert_allclose(np.asarray(out), np.asarray(keplerian_state(Body.EARTH, JD)), atol=1e-15)

    def test_sun(self):
        out = ObserverFrame(0.0, 0.0, 0.0, body=Body.SUN).heliocentric_position_of_observer(JD, CONFIG)
        np.testing.assert_array_equal(np.asarray(out), np.zeros(6))

    def test_no_body(self):
        with pytest.raises(UnsupportedBodyError):
            ObserverFrame(0.0, 0.0, 0.0, body=None).heliocentric_position_of_observer(JD, CONFIG)

    def test_moon_needs_provider(self):
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.MOON)
        with pytest.raises(UnsupportedConfigurationError, match="JPL_KEPLERIAN for MOON"):
            obs.heliocentric_position_of_observer(JD, CONFIG)

    def test_moon_added_to_earth(self):
        registry = default_registry()
        registry.register(Body.MOON, _constant([0.002, 0.0, 0.0, 0.0, 0.0005, 0.0]))
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.MOON)
        out = obs.heliocentric_position_of_observer(JD, CONFIG, registry)
        earth = keplerian_state(Body.EARTH, JD)
        np.testing.assert_allclose(np.asarray(out - earth), [0.002, 0.0, 0.0, 0.0, 0.0005, 0.0], atol=1e-15)

    def test_satellite_added_to_planet(self):
        registry = default_registry()
        registry.register(Body.IO, _constant([0.0, 0.0028, 0.0, -0.01, 0.0, 0.0]))
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.IO)
        out = obs.heliocentric_position_of_observer(JD, CONFIG, registry)
        jupiter = keplerian_state(Body.JUPITER, JD)
        np.testing.assert_allclose(np.asarray(out - jupiter), [0.0, 0.0028, 0.0, -0.01, 0.0, 0.0], atol=1e-14)

    def test_satellite_without_provider(self):
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.TITAN)
        with pytest.raises(UnsupportedBodyError, match="main satellites"):
            obs.heliocentric_position_of_observer(JD, CONFIG)
        assert UNSUPPORTED_SATELLITE_MESSAGE.startswith("unsupported body")

    def test_algorithm_without_provider(self):
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.MARS)
        with pytest.raises(UnsupportedConfigurationError, match="VSOP87 for MARS"):
            obs.heliocentric_position_of_observer(JD, EphemerisConfig(algorithm=Algorithm.VSOP87))

    def test_custom_registry(self):
        registry = ProviderRegistry()
        registry.register(Body.MARS, _constant([1.5, 0.0, 0.0, 0.0, 0.013, 0.0]), Algorithm.VSOP87)
        obs = ObserverFrame(0.0, 0.0, 0.0, body=Body.MARS)
        out = obs.heliocentric_position_of_observer(JD, EphemerisConfig(algorithm=Algorithm.VSOP87), registry)
        np.testing.assert_array_equal(np.asarray(out), [1.5, 0.0, 0.0, 0.0, 0.013, 0.0])
