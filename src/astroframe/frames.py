"""Frame biases between the ICRS, the J2000 dynamical frame and FK5.

All three frames share the equinox J2000 and differ by milliarcsecond
rotations.  Each is related to the ICRS by a bias matrix built from the
offsets of its pole (xi0, eta0) and of its origin of right ascension (da0),
to first order with second-order terms on the diagonal.

FK4 (B1950) needs the full Aoki et al. transformation with E-terms of
aberration and is not supported.

References:

    1. J. L. Hilton and C. Y. Hohenkerk, *Rotation matrix from the mean
       dynamical equator and equinox at J2000.0 to the ICRS*, A&A 413, 2004.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._types import Frame
from astroframe.config import get_dtype
from astroframe.constants import AS2RAD
from astroframe.errors import UnsupportedConfigurationError

# Frame biases (xi0, eta0, da0) relative to the ICRS [arcsec]
_DYNAMICAL_BIAS = (-0.0166170, -0.0068192, -0.01460)
_FK5_BIAS = (9.1e-3, -19.9e-3, -22.9e-3)


def _bias_matrix(xi0: float, eta0: float, da0: float) -> Array:
    xi0 = xi0 * AS2RAD
    eta0 = eta0 * AS2RAD
    da0 = da0 * AS2RAD
    xx = 1.0 - 0.5 * (da0 * da0 + xi0 * xi0)
    yy = 1.0 - 0.5 * (da0 * da0 + eta0 * eta0)
    zz = 1.0 - 0.5 * (eta0 * eta0 + xi0 * xi0)
    return jnp.array([[xx, da0, -xi0],
                      [-da0, yy, -eta0],
                      [xi0, eta0, zz]], dtype=get_dtype())


def frame_bias_matrix(frame: Frame) -> Array:
    """Rotation matrix from the ICRS to *frame*.

    Args:
        frame: Target frame.

    Returns:
        Rotation matrix, shape ``(3, 3)``. The identity for ``Frame.ICRF``.

    Raises:
        UnsupportedConfigurationError: For ``Frame.FK4``.
    """
    if frame is Frame.ICRF:
        return jnp.eye(3, dtype=get_dtype())
    if frame is Frame.DYNAMICAL_EQUINOX_J2000:
        return _bias_matrix(*_DYNAMICAL_BIAS)
    if frame is Frame.FK5:
        return _bias_matrix(*_FK5_BIAS)
    raise UnsupportedConfigurationError(f"Unsupported frame conversion involving {frame.name}.")


def _rotate(m: Array, v: ArrayLike) -> Array:
    v = jnp.asarray(v, dtype=get_dtype())
    return (v.reshape(-1, 3) @ m.T).reshape(v.shape)


def to_output_frame(v: ArrayLike, input_frame: Frame, output_frame: Frame) -> Array:
    """Transform a J2000 rectangular vector between frames.

    Args:
        v: Position ``(3,)`` or position-velocity ``(6,)`` vector.
        input_frame: Frame of *v*.
        output_frame: Requested frame.

    Returns:
        Vector in *output_frame*, shape of *v*.

    Raises:
        UnsupportedConfigurationError: If either frame is FK4 and the frames
            differ.
    """
    if input_frame is output_frame:
        return jnp.asarray(v, dtype=get_dtype())
    m = frame_bias_matrix(output_frame) @ frame_bias_matrix(input_frame).T
    return _rotate(m, v)


def from_output_frame(v: ArrayLike, output_frame: Frame, input_frame: Frame = Frame.ICRF) -> Array:
    """Inverse of :func:`to_output_frame`: bring a vector back to *input_frame*."""
    return to_output_frame(v, output_frame, input_frame)


def icrs_to_dynamical(v: ArrayLike) -> Array:
    """ICRS to mean dynamical equator and equinox of J2000."""
    return to_output_frame(v, Frame.ICRF, Frame.DYNAMICAL_EQUINOX_J2000)


def dynamical_to_icrs(v: ArrayLike) -> Array:
    """Mean dynamical equator and equinox of J2000 to ICRS."""
    return to_output_frame(v, Frame.DYNAMICAL_EQUINOX_J2000, Frame.ICRF)
