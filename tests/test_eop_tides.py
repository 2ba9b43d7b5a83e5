"""Tests for the ocean tide model and the pole offset conversion."""

from __future__ import annotations

import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from astroframe._types import Frame
from astroframe.constants import AS2RAD, J2000
from astroframe.eop import dxdy_to_dpsideps, ray_tidal_corrections


# ---------------------------------------------------------------------------
# Ray et al. (1994) orthotide model
# ---------------------------------------------------------------------------


class TestRayTidalCorrections:
    def test_iers_reference_case(self):
        """IERS Conventions ORTHO_EOP test case at MJD 47100."""
        dx, dy, dut1 = ray_tidal_corrections(47100.0)
        assert float(dx) == pytest.approx(-162.8386373279636530e-6, abs=1e-12)
        assert float(dy) == pytest.approx(117.7907525842668974e-6, abs=1e-12)
        assert float(dut1) == pytest.approx(-23.39092370609808214e-6, abs=1e-12)

    def test_magnitude(self):
        """Tidal polar motion stays below 1 mas and UT1 below 0.1 ms."""
        mjd = jnp.linspace(58000.0, 58002.0, 97)
        dx, dy, dut1 = jax.vmap(ray_tidal_corrections)(mjd)
        assert float(jnp.max(jnp.abs(dx))) < 1e-3
        assert float(jnp.max(jnp.abs(dy))) < 1e-3
        assert float(jnp.max(jnp.abs(dut1))) < 1e-4

    def test_subdaily_variation(self):
        """The signal is diurnal: it changes appreciably within six hours."""
        _, _, a = ray_tidal_corrections(58000.0)
        _, _, b = ray_tidal_corrections(58000.25)
        assert float(a) != pytest.approx(float(b), abs=1e-7)

    def test_vmap_matches_scalar(self):
        mjd = jnp.array([50000.0, 55000.5, 60000.25])
        dx, _, _ = jax.vmap(ray_tidal_corrections)(mjd)
        scalar = [float(ray_tidal_corrections(m)[0]) for m in mjd]
        np.testing.assert_allclose(np.asarray(dx), scalar, atol=1e-15)

    def test_jit(self):
        eager = ray_tidal_corrections(58123.4)
        jitted = jax.jit(ray_tidal_corrections)(58123.4)
        for a, b in zip(eager, jitted):
            assert float(a) == pytest.approx(float(b), abs=1e-15)


# ---------------------------------------------------------------------------
# dX/dY to dPsi/dEps
# ---------------------------------------------------------------------------


class TestDxDyToDpsiDeps:
    def test_at_j2000(self):
        """At J2000 the offsets are only resolved along the ecliptic."""
        dpsi, deps = dxdy_to_dpsideps(1e-3, 2e-3, J2000)
        assert float(dpsi) == pytest.approx(1e-3 / math.sin(84381.406 * AS2RAD), abs=1e-15)
        assert float(deps) == pytest.approx(2e-3, abs=1e-15)

    def test_zero(self):
        dpsi, deps = dxdy_to_dpsideps(0.0, 0.0, 2460000.5)
        assert float(dpsi) == 0.0
        assert float(deps) == 0.0

    def test_linear(self):
        a = dxdy_to_dpsideps(1e-4, -3e-4, 2458000.5)
        b = dxdy_to_dpsideps(2e-4, -6e-4, 2458000.5)
        assert float(b[0]) == pytest.approx(2.0 * float(a[0]), rel=1e-12)
        assert float(b[1]) == pytest.approx(2.0 * float(a[1]), rel=1e-12)

    def test_close_to_first_order_relation(self):
        """Two decades after J2000 the first-order relation still holds to a few percent."""
        dpsi, deps = dxdy_to_dpsideps(1e-3, 1e-3, 2458849.5)
        assert float(dpsi) == pytest.approx(1e-3 / math.sin(84381.406 * AS2RAD), rel=0.05)
        assert float(deps) == pytest.approx(1e-3, rel=0.05)

    def test_frame_bias_is_second_order(self):
        a = dxdy_to_dpsideps(1e-3, 1e-3, 2458849.5, Frame.ICRF)
        b = dxdy_to_dpsideps(1e-3, 1e-3, 2458849.5, Frame.DYNAMICAL_EQUINOX_J2000)
        assert float(a[0]) == pytest.approx(float(b[0]), abs=1e-9)
        assert float(a[1]) == pytest.approx(float(b[1]), abs=1e-9)
