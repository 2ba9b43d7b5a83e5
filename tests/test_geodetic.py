"""Tests for the geodetic <-> geocentric conversions and surface distances."""

from __future__ import annotations

import math

import jax.numpy as jnp
import numpy as np
import pytest

from astroframe.coordinates import (
    distance,
    geocentric_to_geodetic,
    geodetic_to_cartesian,
    geodetic_to_geocentric,
)
from astroframe.ellipsoid import IAU1976, WGS84, CustomEllipsoid, body_ellipsoid
from astroframe.bodies import Body

MAS = math.radians(1.0 / 3600.0 / 1000.0)


# ---------------------------------------------------------------------------
# Forward transform
# ---------------------------------------------------------------------------


class TestGeodeticToGeocentric:
    def test_equator_sea_level(self):
        lon, geo_lat, geo_rad = geodetic_to_geocentric(WGS84, 0.3, 0.0, 0.0)
        assert float(lon) == pytest.approx(0.3)
        assert float(geo_lat) == pytest.approx(0.0, abs=1e-15)
        assert float(geo_rad) == pytest.approx(1.0, abs=1e-15)

    def test_pole_sea_level(self):
        _, geo_lat, geo_rad = geodetic_to_geocentric(WGS84, 0.0, math.pi / 2, 0.0)
        assert float(geo_lat) == pytest.approx(math.pi / 2, abs=1e-12)
        assert float(geo_rad) == pytest.approx(6356.752314245 / 6378.137, abs=1e-12)

    def test_geocentric_latitude_smaller(self):
        """Geocentric latitude is closer to the equator on an oblate body."""
        lat = math.radians(45.0)
        _, geo_lat, _ = geodetic_to_geocentric(WGS84, 0.0, lat, 0.0)
        # Difference is about 11.5 arcminutes at 45 degrees
        assert math.degrees(lat - float(geo_lat)) * 60.0 == pytest.approx(11.5, abs=0.1)

    def test_southern_hemisphere_symmetric(self):
        _, north, rn = geodetic_to_geocentric(WGS84, 0.0, 0.6, 100.0)
        _, south, rs = geodetic_to_geocentric(WGS84, 0.0, -0.6, 100.0)
        assert float(south) == pytest.approx(-float(north), abs=1e-15)
        assert float(rs) == pytest.approx(float(rn), abs=1e-15)

    def test_height_not_rounded(self):
        _, _, r1 = geodetic_to_geocentric(WGS84, 0.0, 0.7, 693.0)
        _, _, r2 = geodetic_to_geocentric(WGS84, 0.0, 0.7, 693.4)
        assert float(r2 - r1) * WGS84.equatorial_radius * 1000.0 == pytest.approx(0.4, abs=1e-4)

    def test_spherical_body(self):
        moon = body_ellipsoid(Body.MOON)
        _, geo_lat, geo_rad = geodetic_to_geocentric(moon, 0.0, 0.5, 1000.0)
        assert float(geo_lat) == pytest.approx(0.5, abs=1e-9)
        assert float(geo_rad) == pytest.approx(1.0 + 1.0 / 1737.4, abs=1e-9)


# ---------------------------------------------------------------------------
# Inverse transform
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize("height", [-500.0, 0.0, 693.0, 8848.0, 20000.0, 50000.0])
    @pytest.mark.parametrize("lat_deg", [-89.0, -60.0, -23.5, 0.5, 40.4, 75.0, 89.9])
    def test_round_trip(self, lat_deg, height):
        lat = math.radians(lat_deg)
        geo = geodetic_to_geocentric(WGS84, 1.0, lat, height)
        lon, lat_back, h_back = geocentric_to_geodetic(WGS84, *geo)
        assert float(lon) == pytest.approx(1.0)
        assert abs(float(lat_back) - lat) < MAS
        assert abs(float(h_back) - height) < 1e-3

    def test_closed_form_only_near_surface(self):
        """Without refinement the inverse is still good close to the surface."""
        lat = math.radians(40.4)
        geo = geodetic_to_geocentric(WGS84, 0.0, lat, 100.0)
        _, lat_back, h_back = geocentric_to_geodetic(WGS84, *geo, iterations=0)
        assert abs(float(lat_back) - lat) < 10 * MAS
        assert abs(float(h_back) - 100.0) < 0.01

    def test_refinement_improves_high_altitude(self):
        lat = math.radians(40.4)
        geo = geodetic_to_geocentric(WGS84, 0.0, lat, 50000.0)
        _, lat0, _ = geocentric_to_geodetic(WGS84, *geo, iterations=0)
        _, lat2, _ = geocentric_to_geodetic(WGS84, *geo, iterations=2)
        assert abs(float(lat2) - lat) <= abs(float(lat0) - lat)

    def test_vectorized(self):
        lats = jnp.array([-0.5, 0.0, 0.5, 1.2])
        heights = jnp.array([0.0, 10.0, 1000.0, 30000.0])
        geo = geodetic_to_geocentric(WGS84, jnp.zeros(4), lats, heights)
        _, lat_back, h_back = geocentric_to_geodetic(WGS84, *geo)
        np.testing.assert_allclose(np.asarray(lat_back), np.asarray(lats), atol=MAS)
        np.testing.assert_allclose(np.asarray(h_back), np.asarray(heights), atol=1e-3)

    def test_custom_ellipsoid(self):
        custom = CustomEllipsoid()
        custom.set_radii(3396.19, 3376.2)
        geo = geodetic_to_geocentric(custom, 0.0, 0.3, 2000.0)
        _, lat_back, h_back = geocentric_to_geodetic(custom, *geo)
        assert abs(float(lat_back) - 0.3) < MAS
        assert abs(float(h_back) - 2000.0) < 1e-3


# ---------------------------------------------------------------------------
# Rectangular position and distance
# ---------------------------------------------------------------------------


class TestCartesian:
    def test_equator_prime_meridian(self):
        v = geodetic_to_cartesian(WGS84, 0.0, 0.0, 0.0)
        np.testing.assert_allclose(np.asarray(v), [6378.137, 0.0, 0.0], atol=1e-9)

    def test_height_along_normal_at_pole(self):
        v = geodetic_to_cartesian(WGS84, 0.0, math.pi / 2, 1000.0)
        assert float(v[2]) == pytest.approx(6356.752314245 + 1.0, abs=1e-6)


class TestDistance:
    def test_meeus_example(self):
        """Paris to Washington, Meeus example 11.c: 6181.63 km."""
        lon_paris = -math.radians(-(2.0 + 20.0 / 60.0 + 14.0 / 3600.0))
        lat_paris = math.radians(48.0 + 50.0 / 60.0 + 11.0 / 3600.0)
        lon_wash = -math.radians(77.0 + 3.0 / 60.0 + 56.0 / 3600.0)
        lat_wash = math.radians(38.0 + 55.0 / 60.0 + 17.0 / 3600.0)
        d = distance(IAU1976, lon_paris, lat_paris, lon_wash, lat_wash)
        assert float(d) == pytest.approx(6181.63, abs=0.05)

    def test_coincident_points(self):
        assert float(distance(WGS84, 0.4, 0.3, 0.4, 0.3)) == 0.0

    def test_symmetric(self):
        d1 = distance(WGS84, 0.1, 0.2, 1.0, -0.4)
        d2 = distance(WGS84, 1.0, -0.4, 0.1, 0.2)
        assert float(d1) == pytest.approx(float(d2), rel=1e-12)

    def test_quarter_meridian(self):
        """Equator to pole along a meridian is about 10002 km on WGS84."""
        d = distance(WGS84, 0.0, 0.0, 0.0, math.pi / 2 - 1e-9)
        assert float(d) == pytest.approx(10001.97, abs=1.0)
