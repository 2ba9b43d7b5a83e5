"""Lagrange interpolation over a short window of daily EOP records."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe.config import get_dtype
from astroframe.errors import InvalidInputError


def lagrange_interpolate(xs: ArrayLike, ys: ArrayLike, x: ArrayLike) -> Array:
    """Evaluate the Lagrange polynomial through ``(xs, ys)`` at *x*.

    The polynomial has degree ``len(xs) - 1``, so data that are polynomial
    of that degree or lower are reproduced exactly.  A single point gives a
    constant.

    Args:
        xs: Distinct abscissae, shape ``(n,)``.
        ys: Ordinates, shape ``(n,)``.
        x: Point of evaluation.

    Returns:
        Interpolated value.

    Raises:
        InvalidInputError: If the inputs are empty or of different lengths.

    Examples:
        ```python
        from astroframe.eop import lagrange_interpolate
        lagrange_interpolate([0.0, 1.0, 2.0], [1.0, 3.0, 5.0], 0.5)  # 2.0
        ```
    """
    dtype = get_dtype()
    xs = jnp.asarray(xs, dtype=dtype)
    ys = jnp.asarray(ys, dtype=dtype)
    if xs.ndim != 1 or xs.shape != ys.shape or xs.shape[0] == 0:
        raise InvalidInputError(
            f"Interpolation needs matching non-empty 1-D inputs, got {xs.shape} and {ys.shape}"
        )
    x = jnp.asarray(x, dtype=dtype)

    n = xs.shape[0]
    diff = x - xs
    denom = xs[:, None] - xs[None, :]
    eye = jnp.eye(n, dtype=bool)
    # Basis polynomial L_i(x) = prod_{j != i} (x - x_j) / (x_i - x_j)
    num = jnp.where(eye, 1.0, diff[None, :])
    den = jnp.where(eye, 1.0, denom)
    basis = jnp.prod(num / den, axis=1)
    return jnp.sum(basis * ys)
