"""Tests for the Keplerian planetary states and the provider registry.

Validates heliocentric distances, velocities against finite differences,
JIT compatibility and the (algorithm, body) provider lookup.
"""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from astroframe._types import Algorithm
from astroframe.bodies import Body
from astroframe.ephemerides import (
    KEPLERIAN_BODIES,
    ProviderRegistry,
    default_registry,
    keplerian_position,
    keplerian_state,
    solve_kepler,
)
from astroframe.errors import ConvergenceError, UnsupportedBodyError, UnsupportedConfigurationError

JD_2024 = 2460476.5

# ---------------------------------------------------------------------------
# Orbital distance ranges (heliocentric, in AU), perihelion to aphelion with
# margin for the approximate model.
# ---------------------------------------------------------------------------
_DISTANCE_RANGES_AU = {
    Body.MERCURY: (0.30, 0.48),
    Body.VENUS: (0.71, 0.73),
    Body.EARTH: (0.98, 1.02),
    Body.MARS: (1.36, 1.67),
    Body.JUPITER: (4.9, 5.5),
    Body.SATURN: (9.0, 10.1),
    Body.URANUS: (18.3, 20.1),
    Body.NEPTUNE: (29.8, 30.4),
}


# ===========================================================================
# Kepler's equation
# ===========================================================================


class TestSolveKepler:
    @pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.9])
    def test_residual(self, e):
        M = jnp.linspace(-3.0, 3.0, 13)
        E = solve_kepler(M, e)
        np.testing.assert_allclose(np.asarray(E - e * jnp.sin(E)), np.asarray(M), atol=1e-12)

    def test_circular(self):
        assert float(solve_kepler(1.2, 0.0)) == pytest.approx(1.2, abs=1e-15)

    def test_not_converged_raises(self):
        with pytest.raises(ConvergenceError) as info:
            solve_kepler(1.0, 0.5, max_iterations=0)
        assert info.value.iterations == 0

    def test_traced_does_not_raise(self):
        E = jax.jit(lambda m: solve_kepler(m, 0.5, max_iterations=0))(1.0)
        assert float(E) == pytest.approx(1.0)


# ===========================================================================
# Keplerian planetary states
# ===========================================================================


class TestKeplerianState:
    def test_bodies(self):
        assert set(KEPLERIAN_BODIES) == set(_DISTANCE_RANGES_AU)

    @pytest.mark.parametrize("body", list(_DISTANCE_RANGES_AU))
    def test_distance_range(self, body):
        lo, hi = _DISTANCE_RANGES_AU[body]
        r = float(jnp.linalg.norm(keplerian_position(body, JD_2024)))
        assert lo < r < hi

    def test_earth_at_j2000(self):
        """Earth-Moon barycentre on 2000-01-01.5, equatorial J2000."""
        r = keplerian_position(Body.EARTH, 2451545.0)
        np.testing.assert_allclose(np.asarray(r), [-0.1771, 0.8873, 0.3847], atol=5e-3)

    def test_earth_speed(self):
        v = keplerian_state(Body.EARTH, JD_2024)[3:]
        assert 0.0167 < float(jnp.linalg.norm(v)) < 0.0177

    @pytest.mark.parametrize("body", [Body.MERCURY, Body.EARTH, Body.JUPITER])
    def test_velocity_matches_finite_difference(self, body):
        h = 0.01
        state = keplerian_state(body, JD_2024)
        fd = (keplerian_position(body, JD_2024 + h) - keplerian_position(body, JD_2024 - h)) / (2.0 * h)
        np.testing.assert_allclose(np.asarray(state[3:]), np.asarray(fd), rtol=1e-5, atol=1e-9)

    def test_prograde_orbits(self):
        """Angular momentum points to the north ecliptic pole."""
        for body in KEPLERIAN_BODIES:
            state = keplerian_state(body, JD_2024)
            h = jnp.cross(state[:3], state[3:])
            assert float(h[2]) > 0.0

    def test_jit(self):
        eager = keplerian_state(Body.MARS, JD_2024)
        jitted = jax.jit(lambda t: keplerian_state(Body.MARS, t))(JD_2024)
        np.testing.assert_allclose(np.asarray(jitted), np.asarray(eager), atol=1e-14)

    def test_vmap(self):
        jds = jnp.array([2451545.0, 2455000.0, JD_2024])
        states = jax.vmap(lambda t: keplerian_state(Body.VENUS, t))(jds)
        assert states.shape == (3, 6)
        np.testing.assert_allclose(
            np.asarray(states[2]), np.asarray(keplerian_state(Body.VENUS, JD_2024)), atol=1e-14
        )

    def test_unsupported_body(self):
        with pytest.raises(UnsupportedBodyError, match="MOON"):
            keplerian_state(Body.MOON, JD_2024)


# ===========================================================================
# Provider registry
# ===========================================================================


def _fixed(value: float):
    def provider(jd_tdb: float):
        return jnp.full(6, value)

    return provider


class TestProviderRegistry:
    def test_default_registry(self):
        registry = default_registry()
        assert len(registry) == len(KEPLERIAN_BODIES)
        for body in KEPLERIAN_BODIES:
            assert (Algorithm.JPL_KEPLERIAN, body) in registry
        assert (Algorithm.JPL_KEPLERIAN, Body.MOON) not in registry
        assert (Algorithm.VSOP87, Body.MARS) not in registry

    def test_default_provider_is_keplerian(self):
        state = default_registry().get(Algorithm.JPL_KEPLERIAN, Body.SATURN)(JD_2024)
        np.testing.assert_array_equal(np.asarray(state), np.asarray(keplerian_state(Body.SATURN, JD_2024)))

    def test_get_missing_raises(self):
        with pytest.raises(UnsupportedConfigurationError, match="Invalid/unsupported algorithm MOSHIER for PLUTO."):
            ProviderRegistry().get(Algorithm.MOSHIER, Body.PLUTO)

    def test_find_missing(self):
        assert ProviderRegistry().find(Algorithm.MOSHIER, Body.PLUTO) is None

    def test_algorithm_independent_fallback(self):
        registry = ProviderRegistry()
        registry.register(Body.IO, _fixed(1.0))
        for algorithm in Algorithm:
            assert float(registry.get(algorithm, Body.IO)(JD_2024)[0]) == 1.0

    def test_specific_entry_wins(self):
        registry = ProviderRegistry()
        registry.register(Body.IO, _fixed(1.0))
        registry.register(Body.IO, _fixed(2.0), Algorithm.ELP2000)
        assert float(registry.get(Algorithm.ELP2000, Body.IO)(JD_2024)[0]) == 2.0
        assert float(registry.get(Algorithm.VSOP87, Body.IO)(JD_2024)[0]) == 1.0

    def test_replace_and_unregister(self):
        registry = ProviderRegistry()
        registry.register(Body.MARS, _fixed(1.0), Algorithm.VSOP87)
        registry.register(Body.MARS, _fixed(3.0), Algorithm.VSOP87)
        assert len(registry) == 1
        assert float(registry.get(Algorithm.VSOP87, Body.MARS)(JD_2024)[0]) == 3.0
        registry.unregister(Body.MARS, Algorithm.VSOP87)
        assert len(registry) == 0
        registry.unregister(Body.MARS, Algorithm.VSOP87)

    def test_iteration(self):
        registry = ProviderRegistry()
        registry.register(Body.MARS, _fixed(1.0), Algorithm.VSOP87)
        registry.register(Body.IO, _fixed(1.0))
        assert set(registry) == {(Algorithm.VSOP87, Body.MARS), (None, Body.IO)}

    def test_contains_rejects_other_keys(self):
        assert "MARS" not in default_registry()
