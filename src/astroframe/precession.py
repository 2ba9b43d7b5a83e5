"""Precession of rectangular equatorial vectors between J2000 and a date.

Every reduction method is expressed as a single rotation matrix
``P(jd_tt)`` that carries a vector referred to the mean equator and equinox
of J2000 to the mean equator and equinox of the date.  Precessing back to
J2000 applies the transpose, so the two directions are exact inverses.

Formulations:

- IAU 2006/2009: Capitaine et al. (2003) angles psi_A, omega_A, chi_A,
  ``P = R3(chi_A) R1(-omega_A) R3(-psi_A) R1(eps_0)``.
- IAU 2000: Lieske et al. (1977) angles with the IAU 2000 precession rate
  corrections, same composition.
- IAU 1976: Lieske et al. (1977) zeta_A, z_A, theta_A.
- Laskar 1986, Simon 1994, Williams 1994, JPL DE4xx: precession in
  longitude and the node and inclination of the moving ecliptic, applied
  through the ecliptic of J2000 and of the date.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astroframe._types import ReductionMethod
from astroframe.config import get_dtype
from astroframe.constants import AS2RAD, J2000
from astroframe.obliquity import mean_obliquity
from astroframe.rotation import Rx, Ry, Rz
from astroframe.time import julian_centuries

# Ecliptic precession polynomials, highest power first, in thousands of Julian
# years: precession in longitude ["/T, then multiplied by T], node of the
# moving ecliptic [rad] and its inclination [rad].
_LASKAR_NODE = (
    6.6402e-16, -2.69151e-15, -1.547021e-12, 7.521313e-12, 6.3190131e-10, -3.48388152e-9,
    -1.813065896e-7, 2.75036225e-8, 7.4394531426e-5, -0.042078604317, 3.052112654975,
)
_LASKAR_INCLINATION = (
    1.2147e-16, 7.3759e-17, -8.26287e-14, 2.503410e-13, 2.4650839e-11, -5.4000441e-11,
    1.32115526e-9, -5.998737027e-7, -1.6242797091e-5, 0.002278495537, 0.0,
)
_WILLIAMS_NODE = (
    6.6402e-16, -2.69151e-15, -1.547021e-12, 7.521313e-12, 1.9e-10, -3.54e-9,
    -1.8103e-7, 1.26e-7, 7.436169e-5, -0.04207794833, 3.052115282424,
)
_WILLIAMS_INCLINATION = (
    1.2147e-16, 7.3759e-17, -8.26287e-14, 2.503410e-13, 2.4650839e-11, -5.4000441e-11,
    1.32115526e-9, -6.012e-7, -1.62442e-5, 0.00227850649, 0.0,
)

_ECLIPTIC_MODELS: dict[ReductionMethod, tuple[tuple[float, ...], tuple[float, ...], tuple[float, ...]]] = {
    ReductionMethod.WILLIAMS_1994: (
        (-8.66e-10, -4.759e-8, 2.424e-7, 1.3095e-5, 1.7451e-4, -1.8055e-3, -0.235316, 0.076, 110.5407, 50287.70000),
        _WILLIAMS_NODE,
        _WILLIAMS_INCLINATION,
    ),
    # DE403 corrections to Williams (1994)
    ReductionMethod.JPL_DE4XX: (
        (-8.66e-10, -4.759e-8, 2.424e-7, 1.3095e-5, 1.7451e-4, -1.8055e-3, -0.235316, 0.076, 110.5414, 50287.91959),
        _WILLIAMS_NODE,
        _WILLIAMS_INCLINATION,
    ),
    ReductionMethod.SIMON_1994: (
        (-8.66e-10, -4.759e-8, 2.424e-7, 1.3095e-5, 1.7451e-4, -1.8055e-3, -0.235316, 0.07732, 111.2022, 50288.200),
        (
            6.6402e-16, -2.69151e-15, -1.547021e-12, 7.521313e-12, 1.9e-10, -3.54e-9,
            -1.8103e-7, 2.579e-8, 7.4379679e-5, -0.0420782900, 3.0521126906,
        ),
        (
            1.2147e-16, 7.3759e-17, -8.26287e-14, 2.503410e-13, 2.4650839e-11, -5.4000441e-11,
            1.32115526e-9, -5.99908e-7, -1.624383e-5, 0.002278492868, 0.0,
        ),
    ),
    ReductionMethod.LASKAR_1986: (
        (-8.66e-10, -4.759e-8, 2.424e-7, 1.3095e-5, 1.7451e-4, -1.8055e-3, -0.235316, 0.07732, 111.1971, 50290.966),
        _LASKAR_NODE,
        _LASKAR_INCLINATION,
    ),
}


def _horner(coeffs: tuple[float, ...], t: Array) -> Array:
    value = jnp.zeros_like(t)
    for c in coeffs:
        value = value * t + c
    return value


def _equatorial_angles(t: Array, method: ReductionMethod) -> tuple[Array, Array, Array, Array]:
    if method is ReductionMethod.IAU_2000:
        eps0 = 84381.448
        psi_a = ((-0.001147 * t - 1.07259) * t + 5038.7784) * t - 0.29965 * t
        omega_a = ((-0.007726 * t + 0.05127) * t) * t + eps0 - 0.02524 * t
        chi_a = ((-0.001125 * t - 2.38064) * t + 10.5526) * t
    else:
        eps0 = 84381.406
        psi_a = ((((-0.0000000951 * t + 0.000132851) * t - 0.00114045) * t - 1.0790069) * t + 5038.481507) * t
        omega_a = (
            (((0.0000003337 * t - 0.000000467) * t - 0.00772503) * t + 0.0512623) * t - 0.025754
        ) * t + eps0
        chi_a = ((((-0.0000000560 * t + 0.000170663) * t - 0.00121197) * t - 2.3814292) * t + 10.556403) * t
    return psi_a * AS2RAD, omega_a * AS2RAD, chi_a * AS2RAD, jnp.asarray(eps0 * AS2RAD, dtype=t.dtype)


def precession_angles(jd_tt: ArrayLike, method: ReductionMethod) -> tuple[Array, ...]:
    """Precession angles from J2000 to a date.

    Args:
        jd_tt: Julian date (TT) of the mean equinox of date.
        method: Reduction method.

    Returns:
        IAU 2000 family: ``(psi_A, omega_A, chi_A, eps_0)``. IAU 1976:
        ``(zeta_A, z_A, theta_A)``. Ecliptic formulations: ``(p_A, node,
        inclination)``. All in radians.
    """
    t = julian_centuries(jd_tt)
    if method.is_iau2000_family:
        return _equatorial_angles(t, method)
    if method is ReductionMethod.IAU_1976:
        zeta = (2306.2181 + (0.30188 + 0.017998 * t) * t) * t
        z = (2306.2181 + (1.09468 + 0.018203 * t) * t) * t
        theta = (2004.3109 + (-0.42665 - 0.041833 * t) * t) * t
        return zeta * AS2RAD, z * AS2RAD, theta * AS2RAD

    longitude, node, inclination = _ECLIPTIC_MODELS[method]
    tm = t / 10.0
    p_a = _horner(longitude, tm) * AS2RAD * tm
    return p_a, _horner(node, tm), _horner(inclination, tm)


def precession_matrix(jd_tt: ArrayLike, method: ReductionMethod) -> Array:
    """Rotation matrix from the mean equator and equinox of J2000 to that of a date.

    Args:
        jd_tt: Julian date (TT) of the target equinox.
        method: Reduction method.

    Returns:
        Rotation matrix, shape ``(3, 3)``.

    Examples:
        ```python
        from astroframe import ReductionMethod
        from astroframe.precession import precession_matrix
        P = precession_matrix(2460000.5, ReductionMethod.IAU_2006)
        ```
    """
    jd_tt = jnp.asarray(jd_tt, dtype=get_dtype())
    if method.is_iau2000_family:
        psi_a, omega_a, chi_a, eps0 = precession_angles(jd_tt, method)
        return Rz(chi_a) @ Rx(-omega_a) @ Rz(-psi_a) @ Rx(eps0)
    if method is ReductionMethod.IAU_1976:
        zeta, z, theta = precession_angles(jd_tt, method)
        return Rz(-z) @ Ry(theta) @ Rz(-zeta)

    p_a, node, inclination = precession_angles(jd_tt, method)
    eps_j2000 = mean_obliquity(0.0, method)
    eps_date = mean_obliquity(julian_centuries(jd_tt), method)
    return Rx(-eps_date) @ Rz(-node - p_a) @ Rx(inclination) @ Rz(node) @ Rx(eps_j2000)


def precess_from_j2000(jd_tt: ArrayLike, v: ArrayLike, method: ReductionMethod) -> Array:
    """Precess a rectangular vector from J2000 to the mean equinox of *jd_tt*."""
    return precession_matrix(jd_tt, method) @ jnp.asarray(v, dtype=get_dtype())


def precess_to_j2000(jd_tt: ArrayLike, v: ArrayLike, method: ReductionMethod) -> Array:
    """Precess a rectangular vector from the mean equinox of *jd_tt* to J2000."""
    return precession_matrix(jd_tt, method).T @ jnp.asarray(v, dtype=get_dtype())


def precess(jd0_tt: ArrayLike, jd_tt: ArrayLike, v: ArrayLike, method: ReductionMethod) -> Array:
    """Precess a rectangular vector between two arbitrary equinoxes.

    Args:
        jd0_tt: Julian date (TT) of the input equinox.
        jd_tt: Julian date (TT) of the output equinox.
        v: Vector referred to the mean equinox of *jd0_tt*.
        method: Reduction method.

    Returns:
        Vector referred to the mean equinox of *jd_tt*.
    """
    v = jnp.asarray(v, dtype=get_dtype())
    if jd0_tt != J2000:
        v = precess_to_j2000(jd0_tt, v, method)
    if jd_tt != J2000:
        v = precess_from_j2000(jd_tt, v, method)
    return v
