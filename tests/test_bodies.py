"""Tests for the observer host bodies."""

import math

import pytest

from astroframe.bodies import (
    SATELLITES,
    Body,
    central_body,
    is_natural_satellite,
    mean_rotation_rate,
    prime_meridian_angle,
    satellite_index,
)
from astroframe.constants import J2000, OMEGA_EARTH


class TestCentralBody:
    def test_sun_has_none(self):
        assert central_body(Body.SUN) is None

    def test_planets_orbit_sun(self):
        for body in (Body.MERCURY, Body.EARTH, Body.NEPTUNE, Body.PLUTO):
            assert central_body(body) is Body.SUN

    def test_satellites(self):
        assert central_body(Body.MOON) is Body.EARTH
        assert central_body(Body.TITAN) is Body.SATURN
        assert central_body(Body.OBERON) is Body.URANUS


class TestIsNaturalSatellite:
    @pytest.mark.parametrize("body", [Body.MOON, Body.PHOBOS, Body.IO, Body.HYPERION, Body.MIRANDA])
    def test_satellites(self, body):
        assert is_natural_satellite(body)

    @pytest.mark.parametrize("body", [Body.SUN, Body.EARTH, Body.JUPITER, Body.PLUTO])
    def test_not_satellites(self, body):
        assert not is_natural_satellite(body)


class TestSatelliteIndex:
    def test_one_based(self):
        assert satellite_index(Body.IO) == 1
        assert satellite_index(Body.CALLISTO) == 4
        assert satellite_index(Body.DEIMOS) == 2
        assert satellite_index(Body.IAPETUS) == 8
        assert satellite_index(Body.OBERON) == 5

    def test_moon_is_not_indexed(self):
        assert satellite_index(Body.MOON) == 0

    def test_planet_is_not_indexed(self):
        assert satellite_index(Body.SATURN) == 0
        assert satellite_index(Body.SUN) == 0

    def test_every_listed_satellite_orbits_its_planet(self):
        for planet, members in SATELLITES.items():
            for member in members:
                assert central_body(member) is planet


class TestRotation:
    def test_earth_rate(self):
        assert mean_rotation_rate(Body.EARTH) == OMEGA_EARTH

    def test_mars_rate(self):
        """Mars rotates once per 24.6229 h sidereal day."""
        assert mean_rotation_rate(Body.MARS) == pytest.approx(2.0 * math.pi / (24.6229 * 3600.0), rel=1e-5)

    def test_retrograde_rate(self):
        assert mean_rotation_rate(Body.VENUS) < 0.0

    def test_prime_meridian_at_j2000(self):
        assert prime_meridian_angle(Body.MARS, J2000) == pytest.approx(math.radians(176.630), abs=1e-12)

    @pytest.mark.parametrize("body", [Body.EARTH, Body.VENUS, Body.URANUS, Body.IO])
    def test_prime_meridian_range(self, body):
        for jd in (J2000 - 1234.5, J2000 + 0.3, J2000 + 9000.7):
            w = prime_meridian_angle(body, jd)
            assert 0.0 <= w < 2.0 * math.pi

    def test_prime_meridian_advances_by_rate(self):
        w0 = prime_meridian_angle(Body.JUPITER, J2000)
        w1 = prime_meridian_angle(Body.JUPITER, J2000 + 0.1)
        expected = (w0 + math.radians(870.536 * 0.1)) % (2.0 * math.pi)
        assert w1 == pytest.approx(expected, abs=1e-9)

    def test_data(self):
        assert Body.EARTH.data.equatorial_radius == 6378.1366
        assert Body.JUPITER.data.central_body == "SUN"
