"""Tests for the reference ellipsoids."""

from __future__ import annotations

import math

import pytest

from astroframe.bodies import Body
from astroframe.ellipsoid import (
    ELLIPSOIDS,
    IERS2003,
    LATEST,
    SPHERICAL_INVERSE_FLATTENING,
    WGS84,
    CustomEllipsoid,
    Ellipsoid,
    as_ellipsoid,
    body_ellipsoid,
    eccentricity_squared,
    ellipsoid_from_radii,
    flattening,
    get_ellipsoid,
    is_spherical,
    polar_radius,
    radius_at_latitude,
)
from astroframe.errors import InvalidInputError


class TestPresets:
    def test_wgs84_parameters(self):
        assert WGS84.equatorial_radius == 6378.137
        assert WGS84.inverse_flattening == 298.257223563

    def test_latest_is_iers2003(self):
        assert LATEST is IERS2003
        assert ELLIPSOIDS["LATEST"] == IERS2003

    def test_all_presets_oblate(self):
        for ell in ELLIPSOIDS.values():
            assert ell.inverse_flattening > 1.0
            assert ell.equatorial_radius > 6378.0

    def test_presets_immutable(self):
        with pytest.raises(AttributeError):
            WGS84.equatorial_radius = 1.0


class TestLookup:
    def test_case_insensitive(self):
        assert get_ellipsoid("wgs84") is WGS84

    def test_body_name(self):
        mars = get_ellipsoid("Mars")
        assert mars.name == "MARS"
        assert mars.equatorial_radius == pytest.approx(3396.19)

    def test_unknown_name(self):
        with pytest.raises(InvalidInputError, match="Unknown ellipsoid"):
            get_ellipsoid("NOT_AN_ELLIPSOID")


# ---------------------------------------------------------------------------
# Construction from radii
# ---------------------------------------------------------------------------


class TestFromRadii:
    def test_inverse_flattening(self):
        ell = ellipsoid_from_radii("TEST", 100.0, 99.0)
        assert ell.inverse_flattening == pytest.approx(100.0)

    def test_spherical_body(self):
        ell = ellipsoid_from_radii("SPHERE", 1737.4, 1737.4)
        assert ell.inverse_flattening == SPHERICAL_INVERSE_FLATTENING
        assert is_spherical(ell)

    def test_infinite_inverse_flattening_is_spherical(self):
        assert is_spherical(Ellipsoid("INF", 1.0, math.inf))

    @pytest.mark.parametrize("req, rpol", [(0.0, 1.0), (-5.0, -6.0), (10.0, 0.0)])
    def test_non_positive_radius(self, req, rpol):
        with pytest.raises(InvalidInputError):
            ellipsoid_from_radii("BAD", req, rpol)

    def test_prolate_rejected(self):
        with pytest.raises(InvalidInputError):
            ellipsoid_from_radii("PROLATE", 100.0, 101.0)

    def test_body_ellipsoid_earth_matches_iers2003(self):
        ell = body_ellipsoid(Body.EARTH)
        assert ell.equatorial_radius == pytest.approx(IERS2003.equatorial_radius)
        assert ell.inverse_flattening == pytest.approx(IERS2003.inverse_flattening, rel=1e-4)

    def test_moon_is_spherical(self):
        assert is_spherical(body_ellipsoid(Body.MOON))


# ---------------------------------------------------------------------------
# CustomEllipsoid
# ---------------------------------------------------------------------------


class TestCustomEllipsoid:
    def test_starts_as_wgs84(self):
        custom = CustomEllipsoid()
        assert custom.equatorial_radius == WGS84.equatorial_radius
        assert custom.inverse_flattening == WGS84.inverse_flattening

    def test_set_radii(self):
        custom = CustomEllipsoid()
        custom.set_radii(1000.0, 990.0)
        assert custom.equatorial_radius == 1000.0
        assert custom.inverse_flattening == pytest.approx(100.0)

    def test_set_radii_again(self):
        custom = CustomEllipsoid()
        custom.set_radii(1000.0, 990.0)
        custom.set_radii(3396.19, 3376.2)
        assert custom.equatorial_radius == 3396.19
        assert custom.inverse_flattening == pytest.approx(3396.19 / (3396.19 - 3376.2))

    def test_invalid_radii_leave_slot_unchanged(self):
        custom = CustomEllipsoid()
        with pytest.raises(InvalidInputError):
            custom.set_radii(1000.0, 1001.0)
        assert custom.equatorial_radius == WGS84.equatorial_radius

    def test_snapshot_is_frozen(self):
        custom = CustomEllipsoid("MINE")
        snap = custom.snapshot()
        custom.set_radii(1000.0, 990.0)
        assert snap.equatorial_radius == WGS84.equatorial_radius
        assert snap.name == "MINE"

    def test_as_ellipsoid(self):
        custom = CustomEllipsoid()
        assert isinstance(as_ellipsoid(custom), Ellipsoid)
        assert as_ellipsoid(WGS84) is WGS84

    def test_as_ellipsoid_rejects_other(self):
        with pytest.raises(InvalidInputError):
            as_ellipsoid("WGS84")


# ---------------------------------------------------------------------------
# Derived quantities
# ---------------------------------------------------------------------------


class TestDerived:
    def test_flattening(self):
        assert flattening(WGS84) == pytest.approx(1.0 / 298.257223563)

    def test_polar_radius(self):
        assert polar_radius(WGS84) == pytest.approx(6356.752314245, abs=1e-6)

    def test_eccentricity_squared(self):
        assert eccentricity_squared(WGS84) == pytest.approx(6.69437999014e-3, rel=1e-10)

    def test_radius_at_latitude(self):
        assert float(radius_at_latitude(WGS84, 0.0)) == pytest.approx(WGS84.equatorial_radius)
        assert float(radius_at_latitude(WGS84, math.pi / 2)) == pytest.approx(polar_radius(WGS84))

    def test_custom_model_accepted(self):
        custom = CustomEllipsoid()
        custom.set_radii(1000.0, 990.0)
        assert polar_radius(custom) == pytest.approx(990.0)
