"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout astroframe.  The default is ``jnp.float64``: Earth orientation
corrections are applied at the milliarcsecond level and single precision
cannot resolve them.  Selecting ``jnp.float64`` enables JAX's 64-bit mode
(``jax_enable_x64``), which is done at import time for the default.

Call ``set_dtype`` **before** any JIT compilation.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float32, jnp.float64)

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for astroframe.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: Either ``jnp.float32`` or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_angle_tolerance() -> float:
    """Return the dtype-adaptive tolerance for angle comparisons in radians.

    - ``float32``: 1e-5 rad
    - ``float64``: 1e-12 rad

    Returns:
        float: Tolerance in radians.
    """
    if _dtype == jnp.float64:
        return 1e-12
    return 1e-5
