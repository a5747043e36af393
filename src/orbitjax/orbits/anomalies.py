"""Anomaly conversions for elliptic and hyperbolic orbits.

Converts between true, eccentric, hyperbolic-eccentric and mean anomaly.
The closed-form directions are single expressions; the mean-to-eccentric
directions solve Kepler's equation (or its hyperbolic analogue) with
:func:`~orbitjax.solvers.newton_raphson`.

None of these conversions has a parabolic branch.  Passing ``e = 1``
(within the singularity tolerance) raises
:class:`~orbitjax.errors.UnsupportedRegimeError`; parabolic orbits are
only handled by the Cartesian/Keplerian state conversions through the
semi-latus rectum.

The eccentricity must be a scalar; anomalies may be scalars or arrays.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype
from orbitjax.errors import DomainViolationError, UnsupportedRegimeError
from orbitjax.orbits.regimes import OrbitShape, classify_shape
from orbitjax.solvers import (
    NewtonRaphsonConfig,
    hyperbolic_kepler_equation,
    kepler_equation,
    newton_raphson,
)
from orbitjax.utils import from_radians, to_radians


def _elliptic_eccentricity(e: ArrayLike) -> Array:
    shape = classify_shape(e)
    if shape is OrbitShape.PARABOLIC:
        raise UnsupportedRegimeError(
            f"Anomaly conversion is unsupported for parabolic anomaly (e = {float(e)})"
        )
    if not shape.is_closed:
        raise UnsupportedRegimeError(
            f"Elliptic anomaly conversion requires 0 <= e < 1. Got: {float(e)}"
        )
    return jnp.asarray(e, dtype=get_dtype())


def _hyperbolic_eccentricity(e: ArrayLike) -> Array:
    shape = classify_shape(e)
    if shape is OrbitShape.PARABOLIC:
        raise UnsupportedRegimeError(
            f"Anomaly conversion is unsupported for parabolic anomaly (e = {float(e)})"
        )
    if shape is not OrbitShape.HYPERBOLIC:
        raise UnsupportedRegimeError(
            f"Hyperbolic anomaly conversion requires e > 1. Got: {float(e)}"
        )
    return jnp.asarray(e, dtype=get_dtype())


# ──────────────────────────────────────────────
# Elliptic anomalies
# ──────────────────────────────────────────────


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not elliptic.

    References:
        O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
        Applications*, 2012. Eq. 2.65.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_eccentric_to_mean
        M = anomaly_eccentric_to_mean(90.0, 0.1, use_degrees=True)
        ```
    """
    e = _elliptic_eccentricity(e)
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    M = E - e * jnp.sin(E)
    return from_radians(M, use_degrees)


def anomaly_mean_to_eccentric(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    config: NewtonRaphsonConfig | None = None,
) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Solves Kepler's equation ``M = E - e * sin(E)`` for ``E`` by
    Newton-Raphson iteration.  The mean anomaly is not wrapped, so the
    result lies on the same revolution as ``M``.

    The initial guess is ``M`` for ``e < 0.8`` and Danby's
    ``M + 0.85 e sign(sin M)`` otherwise.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.
        config: Solver settings. Defaults to :class:`NewtonRaphsonConfig()`.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not elliptic.
        NonConvergenceError: If the solver exceeds its iteration cap.

    References:
        J. M. A. Danby, *Fundamentals of Celestial Mechanics*, 1988,
        Sec. 6.6.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(84.27, 0.1, use_degrees=True)
        ```
    """
    e = _elliptic_eccentricity(e)
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())

    M = to_radians(anm_mean, use_degrees)
    E0 = jnp.where(e < 0.8, M, M + 0.85 * e * jnp.sign(jnp.sin(M)))

    residual, derivative = kepler_equation(e, M)
    E = newton_raphson(residual, derivative, E0, config)
    return from_radians(E, use_degrees)


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Uses the two-argument arctangent so the result lies in the same
    half-plane as the input, in ``(-pi, pi]``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not elliptic.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_true_to_eccentric
        E = anomaly_true_to_eccentric(90.0, 0.1, use_degrees=True)
        ```
    """
    e = _elliptic_eccentricity(e)
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())

    nu = to_radians(anm_true, use_degrees)
    E = jnp.arctan2(jnp.sin(nu) * jnp.sqrt(1.0 - e**2), jnp.cos(nu) + e)
    return from_radians(E, use_degrees)


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to true anomaly.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not elliptic.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_eccentric_to_true
        nu = anomaly_eccentric_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    e = _elliptic_eccentricity(e)
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    nu = jnp.arctan2(jnp.sin(E) * jnp.sqrt(1.0 - e**2), jnp.cos(E) - e)
    return from_radians(nu, use_degrees)


# ──────────────────────────────────────────────
# Hyperbolic anomalies
# ──────────────────────────────────────────────


def anomaly_hyperbolic_to_mean(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic eccentric anomaly to mean anomaly.

    Applies the hyperbolic Kepler equation: ``M = e * sinh(H) - H``.

    Args:
        anm_hyp: Hyperbolic eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not hyperbolic.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 56, eq. 2-38, 2010.
    """
    e = _hyperbolic_eccentricity(e)
    anm_hyp = jnp.asarray(anm_hyp, dtype=get_dtype())

    H = to_radians(anm_hyp, use_degrees)
    M = e * jnp.sinh(H) - H
    return from_radians(M, use_degrees)


def anomaly_mean_to_hyperbolic(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    config: NewtonRaphsonConfig | None = None,
) -> Array:
    """Convert mean anomaly to hyperbolic eccentric anomaly.

    Solves ``M = e * sinh(H) - H`` for ``H`` by Newton-Raphson iteration,
    seeded with ``asinh(M / e)``.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.
        config: Solver settings. Defaults to :class:`NewtonRaphsonConfig()`.

    Returns:
        Hyperbolic eccentric anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not hyperbolic.
        NonConvergenceError: If the solver exceeds its iteration cap.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_mean_to_hyperbolic
        H = anomaly_mean_to_hyperbolic(4.1085, 2.4)
        ```
    """
    e = _hyperbolic_eccentricity(e)
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())

    M = to_radians(anm_mean, use_degrees)
    H0 = jnp.arcsinh(M / e)

    residual, derivative = hyperbolic_kepler_equation(e, M)
    H = newton_raphson(residual, derivative, H0, config)
    return from_radians(H, use_degrees)


def anomaly_true_to_hyperbolic(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to hyperbolic eccentric anomaly.

    Uses ``tanh(H/2) = sqrt((e-1)/(e+1)) tan(nu/2)``.  The true anomaly
    must lie strictly between the asymptotes, ``|nu| < acos(-1/e)``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic eccentric anomaly (unbounded). Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not hyperbolic.
        DomainViolationError: If the true anomaly is on or beyond an
            asymptote.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 56, eq. 2-35, 2010.
    """
    e = _hyperbolic_eccentricity(e)
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())

    nu = to_radians(anm_true, use_degrees)
    tanh_half_H = jnp.sqrt((e - 1.0) / (e + 1.0)) * jnp.tan(nu / 2.0)
    if not bool(jnp.all(jnp.abs(tanh_half_H) < 1.0)):
        raise DomainViolationError(
            f"True anomaly lies beyond the asymptotes of a hyperbola with e = {float(e)}"
        )
    H = 2.0 * jnp.arctanh(tanh_half_H)
    return from_radians(H, use_degrees)


def anomaly_hyperbolic_to_true(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic eccentric anomaly to true anomaly.

    Args:
        anm_hyp: Hyperbolic eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-acos(-1/e), acos(-1/e))``. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is not hyperbolic.
    """
    e = _hyperbolic_eccentricity(e)
    anm_hyp = jnp.asarray(anm_hyp, dtype=get_dtype())

    H = to_radians(anm_hyp, use_degrees)
    nu = 2.0 * jnp.arctan(jnp.sqrt((e + 1.0) / (e - 1.0)) * jnp.tanh(H / 2.0))
    return from_radians(nu, use_degrees)


# ──────────────────────────────────────────────
# Composite conversions
# ──────────────────────────────────────────────


def anomaly_true_to_mean(
    anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert true anomaly to mean anomaly.

    Composite conversion: true -> eccentric -> mean for closed orbits,
    true -> hyperbolic -> mean for hyperbolic orbits.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e != 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is parabolic.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_true_to_mean
        M = anomaly_true_to_mean(90.0, 0.1, use_degrees=True)
        ```
    """
    if classify_shape(e) is OrbitShape.HYPERBOLIC:
        return anomaly_hyperbolic_to_mean(
            anomaly_true_to_hyperbolic(anm_true, e, use_degrees), e, use_degrees
        )
    return anomaly_eccentric_to_mean(
        anomaly_true_to_eccentric(anm_true, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_mean_to_true(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    config: NewtonRaphsonConfig | None = None,
) -> Array:
    """Convert mean anomaly to true anomaly.

    Composite conversion: mean -> eccentric -> true for closed orbits,
    mean -> hyperbolic -> true for hyperbolic orbits.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e != 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.
        config: Solver settings. Defaults to :class:`NewtonRaphsonConfig()`.

    Returns:
        True anomaly. Units: *rad* or *deg*

    Raises:
        UnsupportedRegimeError: If ``e`` is parabolic.
        NonConvergenceError: If the solver exceeds its iteration cap.

    Examples:
        ```python
        from orbitjax.orbits import anomaly_mean_to_true
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    if classify_shape(e) is OrbitShape.HYPERBOLIC:
        return anomaly_hyperbolic_to_true(
            anomaly_mean_to_hyperbolic(anm_mean, e, use_degrees, config), e, use_degrees
        )
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, use_degrees, config),
        e,
        use_degrees,
    )
