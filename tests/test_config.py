"""Tests for astroframe.config dtype switching."""

import jax
import jax.numpy as jnp
import pytest

from astroframe.config import get_angle_tolerance, get_dtype, set_dtype
from astroframe.rotation import Rx


@pytest.fixture(autouse=True)
def _reset_dtype():
    """Restore float64 after every test in this module."""
    yield
    set_dtype(jnp.float64)


class TestSetGetDtype:
    def test_default_is_float64(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float32)
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_string_dtype_rejected(self):
        with pytest.raises(ValueError):
            set_dtype("float32")

    def test_failed_set_keeps_previous(self):
        set_dtype(jnp.float32)
        with pytest.raises(ValueError):
            set_dtype(jnp.float16)
        assert get_dtype() == jnp.float32


class TestAngleTolerance:
    def test_float64(self):
        set_dtype(jnp.float64)
        assert get_angle_tolerance() == 1e-12

    def test_float32(self):
        set_dtype(jnp.float32)
        assert get_angle_tolerance() == 1e-5


class TestDtypeOutputs:
    def test_rotation_float64(self):
        set_dtype(jnp.float64)
        assert Rx(0.3).dtype == jnp.float64

    def test_rotation_float32(self):
        set_dtype(jnp.float32)
        assert Rx(0.3).dtype == jnp.float32
