"""Tests for the frame bias rotations between the ICRS, dynamical J2000 and FK5 frames."""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
import pytest

from astroframe._types import Frame
from astroframe.constants import AS2RAD
from astroframe.errors import UnsupportedConfigurationError
from astroframe.frames import (
    dynamical_to_icrs,
    frame_bias_matrix,
    from_output_frame,
    icrs_to_dynamical,
    to_output_frame,
)

_STATE = jnp.array([0.3, -0.8, 0.52, 0.01, 0.002, -0.004])


class TestFrameBiasMatrix:
    def test_icrf_identity(self):
        np.testing.assert_array_equal(np.asarray(frame_bias_matrix(Frame.ICRF)), np.eye(3))

    @pytest.mark.parametrize("frame", [Frame.DYNAMICAL_EQUINOX_J2000, Frame.FK5])
    def test_orthonormal_to_second_order(self, frame):
        m = frame_bias_matrix(frame)
        np.testing.assert_allclose(np.asarray(m @ m.T), np.eye(3), atol=1e-13)

    def test_dynamical_bias_size(self):
        """The offsets are tens of milliarcseconds."""
        m = frame_bias_matrix(Frame.DYNAMICAL_EQUINOX_J2000)
        assert float(m[0, 1]) == pytest.approx(-0.01460 * AS2RAD)
        assert float(m[2, 0]) == pytest.approx(-0.0166170 * AS2RAD)
        assert float(m[2, 1]) == pytest.approx(-0.0068192 * AS2RAD)

    def test_fk4_unsupported(self):
        with pytest.raises(UnsupportedConfigurationError, match="Unsupported frame conversion involving FK4."):
            frame_bias_matrix(Frame.FK4)


class TestToOutputFrame:
    def test_same_frame_unchanged(self):
        out = to_output_frame(_STATE, Frame.FK5, Frame.FK5)
        np.testing.assert_array_equal(np.asarray(out), np.asarray(_STATE))

    def test_same_fk4_frame_passes_through(self):
        out = to_output_frame(_STATE[:3], Frame.FK4, Frame.FK4)
        np.testing.assert_array_equal(np.asarray(out), np.asarray(_STATE[:3]))

    @pytest.mark.parametrize("other", [Frame.ICRF, Frame.FK5, Frame.DYNAMICAL_EQUINOX_J2000])
    def test_fk4_conversion_raises(self, other):
        with pytest.raises(UnsupportedConfigurationError):
            to_output_frame(_STATE, Frame.FK4, other)
        with pytest.raises(UnsupportedConfigurationError):
            to_output_frame(_STATE, other, Frame.FK4)

    @pytest.mark.parametrize("frame", [Frame.DYNAMICAL_EQUINOX_J2000, Frame.FK5])
    def test_round_trip(self, frame):
        out = to_output_frame(_STATE, Frame.ICRF, frame)
        back = from_output_frame(out, frame)
        np.testing.assert_allclose(np.asarray(back), np.asarray(_STATE), atol=1e-13)

    def test_state_vector_shape(self):
        out = icrs_to_dynamical(_STATE)
        assert out.shape == (6,)
        np.testing.assert_allclose(np.asarray(out[:3]), np.asarray(icrs_to_dynamical(_STATE[:3])), atol=1e-16)
        np.testing.assert_allclose(np.asarray(out[3:]), np.asarray(icrs_to_dynamical(_STATE[3:])), atol=1e-16)

    def test_small_rotation(self):
        """The bias moves a unit vector by less than 30 mas."""
        v = jnp.array([0.0, 0.6, 0.8])
        shift = jnp.linalg.norm(icrs_to_dynamical(v) - v)
        assert 0.0 < float(shift) < 0.03 * AS2RAD

    def test_dynamical_to_icrs_inverse(self):
        v = _STATE[:3]
        np.testing.assert_allclose(np.asarray(dynamical_to_icrs(icrs_to_dynamical(v))), np.asarray(v), atol=1e-13)

    def test_fk5_via_icrs(self):
        """Dynamical to FK5 equals dynamical to ICRS followed by ICRS to FK5."""
        direct = to_output_frame(_STATE, Frame.DYNAMICAL_EQUINOX_J2000, Frame.FK5)
        via = to_output_frame(dynamical_to_icrs(_STATE), Frame.ICRF, Frame.FK5)
        np.testing.assert_allclose(np.asarray(direct), np.asarray(via), atol=1e-15)
