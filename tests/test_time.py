"""Tests for time scales, calendar conversions and sidereal time."""

from __future__ import annotations

import math

import jax.numpy as jnp
import pytest

from astroframe._types import ReductionMethod
from astroframe.constants import J2000, SECONDS_PER_DAY
from astroframe.time import (
    caldate_to_jd,
    caldate_to_mjd,
    earth_rotation_angle,
    greenwich_mean_sidereal_time,
    julian_centuries,
    leap_seconds_tai_utc,
    mjd_to_date,
    tt_to_tdb,
    utc_to_tt,
    utc_to_ut1,
)


# ---------------------------------------------------------------------------
# Leap seconds and time scales
# ---------------------------------------------------------------------------


class TestLeapSeconds:
    def test_before_1972(self):
        assert float(leap_seconds_tai_utc(40000.0)) == 10.0

    def test_first_entry(self):
        assert float(leap_seconds_tai_utc(41317.0)) == 10.0

    def test_step_on_introduction_day(self):
        assert float(leap_seconds_tai_utc(53735.999)) == 32.0
        assert float(leap_seconds_tai_utc(53736.0)) == 33.0

    def test_after_last_entry(self):
        assert float(leap_seconds_tai_utc(60000.0)) == 37.0

    def test_vectorized(self):
        out = leap_seconds_tai_utc(jnp.array([41317.0, 51544.0, 60000.0]))
        assert list(map(float, out)) == [10.0, 32.0, 37.0]


class TestTimeScales:
    def test_utc_to_tt_2024(self):
        jd_utc = 2460310.5
        delta = (float(utc_to_tt(jd_utc)) - jd_utc) * SECONDS_PER_DAY
        assert delta == pytest.approx(69.184, abs=1e-4)

    def test_utc_to_tt_2000(self):
        delta = (float(utc_to_tt(J2000)) - J2000) * SECONDS_PER_DAY
        assert delta == pytest.approx(64.184, abs=1e-4)

    def test_utc_to_ut1(self):
        jd = float(utc_to_ut1(2460310.5, -0.5))
        assert (jd - 2460310.5) * SECONDS_PER_DAY == pytest.approx(-0.5, abs=1e-4)

    def test_tdb_close_to_tt(self):
        for jd in (2451545.0, 2455000.0, 2460310.5):
            diff = (float(tt_to_tdb(jd)) - jd) * SECONDS_PER_DAY
            assert abs(diff) < 2e-3

    def test_julian_centuries(self):
        assert float(julian_centuries(J2000)) == 0.0
        assert float(julian_centuries(J2000 + 36525.0)) == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------


class TestCalendar:
    def test_j2000_mjd(self):
        assert float(caldate_to_mjd(2000, 1, 1, 12)) == pytest.approx(51544.5)

    def test_jd(self):
        assert float(caldate_to_jd(2000, 1, 1, 12)) == pytest.approx(J2000)

    def test_february(self):
        assert float(caldate_to_mjd(2024, 2, 29)) == pytest.approx(60369.0)

    def test_fraction_of_day(self):
        mjd = float(caldate_to_mjd(2000, 1, 1, 6, 30, 36.0))
        assert mjd == pytest.approx(51544.0 + (6.5 + 0.01) / 24.0, abs=1e-10)

    @pytest.mark.parametrize(
        "mjd, date",
        [
            (51544, (2000, 1, 1)),
            (60369, (2024, 2, 29)),
            (41317, (1972, 1, 1)),
            (0, (1858, 11, 17)),
        ],
    )
    def test_mjd_to_date(self, mjd, date):
        assert mjd_to_date(mjd) == date

    def test_mjd_to_date_round_trip(self):
        for mjd in range(58000, 58800, 37):
            y, m, d = mjd_to_date(mjd)
            assert float(caldate_to_mjd(y, m, d)) == mjd


# ---------------------------------------------------------------------------
# Sidereal time
# ---------------------------------------------------------------------------


class TestSiderealTime:
    def test_era_at_j2000(self):
        era = float(earth_rotation_angle(J2000))
        assert era == pytest.approx(0.7790572732640 * 2.0 * math.pi, abs=1e-12)

    def test_era_rate(self):
        """One UT1 day advances the angle by a little more than one turn."""
        e0 = float(earth_rotation_angle(J2000))
        e1 = float(earth_rotation_angle(J2000 + 1.0))
        assert ((e1 - e0) % (2.0 * math.pi)) == pytest.approx(0.00273781191135448 * 2.0 * math.pi, abs=1e-10)

    def test_gmst_iau1976_j2000(self):
        gmst = float(greenwich_mean_sidereal_time(J2000, J2000, ReductionMethod.IAU_1976))
        assert math.degrees(gmst) == pytest.approx(280.46061837, abs=1e-7)

    def test_gmst_laskar_matches_iau1976(self):
        a = greenwich_mean_sidereal_time(2455000.3, 2455000.3, ReductionMethod.IAU_1976)
        b = greenwich_mean_sidereal_time(2455000.3, 2455000.3, ReductionMethod.LASKAR_1986)
        assert float(a) == float(b)

    @pytest.mark.parametrize("method", list(ReductionMethod))
    def test_methods_agree_within_arcsecond(self, method):
        jd = 2458849.5
        ref = float(greenwich_mean_sidereal_time(jd, jd, ReductionMethod.IAU_2006))
        gmst = float(greenwich_mean_sidereal_time(jd, jd, method))
        diff = (gmst - ref + math.pi) % (2.0 * math.pi) - math.pi
        # 1 arcsecond
        assert abs(diff) < 5e-6

    @pytest.mark.parametrize("method", list(ReductionMethod))
    def test_range(self, method):
        gmst = float(greenwich_mean_sidereal_time(2460000.9, 2460000.9, method))
        assert 0.0 <= gmst < 2.0 * math.pi

    def test_iau2006_sofa_reference(self):
        """SOFA GMST06 test case: UT1 = TT = 2400000.5 + 53736."""
        gmst = float(greenwich_mean_sidereal_time(2453736.5, 2453736.5, ReductionMethod.IAU_2006))
        assert gmst == pytest.approx(1.754174971870091203, abs=1e-12)
