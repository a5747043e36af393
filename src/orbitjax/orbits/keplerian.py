"""Two-body orbit quantities and elapsed-time conversions.

This module provides mean motion, orbital period and semi-latus rectum,
and the conversions between elapsed time and mean anomaly for elliptic
(``a > 0``) and hyperbolic (``a < 0``) orbits:

    ``M = M0 + n * dt``,  ``n = sqrt(gm / |a|^3)``

The gravitational parameter is always supplied by the caller and
defaults to :data:`~orbitjax.constants.GM_EARTH`.  Parabolic orbits have
no semi-major axis and therefore no mean motion; they are not handled
here.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype
from orbitjax.constants import GM_EARTH
from orbitjax.errors import DomainViolationError, UnsupportedRegimeError
from orbitjax.orbits.regimes import validate_gravitational_parameter

# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────


def _elliptic_sma(a: ArrayLike) -> Array:
    a = jnp.asarray(a, dtype=get_dtype())
    if not bool(jnp.all(a > 0.0)):
        raise UnsupportedRegimeError(
            f"Elliptic time conversion requires a positive semi-major axis. Got: {a}"
        )
    return a


def _hyperbolic_sma(a: ArrayLike) -> Array:
    a = jnp.asarray(a, dtype=get_dtype())
    if not bool(jnp.all(a < 0.0)):
        raise UnsupportedRegimeError(
            f"Hyperbolic time conversion requires a negative semi-major axis. Got: {a}"
        )
    return a


# ──────────────────────────────────────────────
# Mean motion, period and semi-latus rectum
# ──────────────────────────────────────────────


def mean_motion(a: ArrayLike, gm: ArrayLike = GM_EARTH) -> Array:
    """Compute the mean motion of an orbit.

    Uses ``|a|`` so the same expression serves elliptic and hyperbolic
    orbits.

    Args:
        a: Semi-major axis, non-zero. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Mean motion. Units: *rad/s*

    Raises:
        DomainViolationError: If ``a`` is zero or ``gm`` is not positive.

    Examples:
        ```python
        from orbitjax.orbits import mean_motion
        n = mean_motion(6878.1363e3)
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    if not bool(jnp.all(a != 0.0)):
        raise DomainViolationError(f"Semi-major axis must be non-zero. Got: {a}")
    gm = validate_gravitational_parameter(gm)
    return jnp.sqrt(gm / jnp.abs(a) ** 3)


def orbital_period(a: ArrayLike, gm: ArrayLike = GM_EARTH) -> Array:
    """Compute the orbital period of an elliptic orbit.

    Args:
        a: Semi-major axis, positive. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Orbital period. Units: *s*

    Raises:
        UnsupportedRegimeError: If ``a`` is not positive.
    """
    a = _elliptic_sma(a)
    return 2.0 * jnp.pi / mean_motion(a, gm)


def semi_latus_rectum(a: ArrayLike, e: ArrayLike) -> Array:
    """Compute the semi-latus rectum ``p = a (1 - e^2)``.

    Positive for both ellipses (``a > 0, e < 1``) and hyperbolae
    (``a < 0, e > 1``).

    Args:
        a: Semi-major axis. Units: *m*
        e: Eccentricity. Dimensionless.

    Returns:
        Semi-latus rectum. Units: *m*
    """
    a = jnp.asarray(a, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return a * (1.0 - e * e)


# ──────────────────────────────────────────────
# Elapsed time <-> mean anomaly
# ──────────────────────────────────────────────


def elapsed_time_to_mean_anomaly_elliptic(
    dt: ArrayLike,
    a: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    anm_mean_epoch: ArrayLike = 0.0,
) -> Array:
    """Convert elapsed time to mean anomaly on an elliptic orbit.

    Args:
        dt: Time elapsed since the epoch. Units: *s*
        a: Semi-major axis, positive. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        anm_mean_epoch: Mean anomaly at the epoch. Units: *rad*

    Returns:
        Mean anomaly ``M0 + n dt`` (not wrapped). Units: *rad*

    Raises:
        UnsupportedRegimeError: If ``a`` is not positive.

    Examples:
        ```python
        from orbitjax.orbits import elapsed_time_to_mean_anomaly_elliptic
        M = elapsed_time_to_mean_anomaly_elliptic(4000.0, 2500e3)
        ```
    """
    a = _elliptic_sma(a)
    dt = jnp.asarray(dt, dtype=get_dtype())
    return jnp.asarray(anm_mean_epoch, dtype=get_dtype()) + mean_motion(a, gm) * dt


def mean_anomaly_to_elapsed_time_elliptic(
    anm_mean: ArrayLike,
    a: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    anm_mean_epoch: ArrayLike = 0.0,
) -> Array:
    """Convert mean anomaly to elapsed time on an elliptic orbit.

    Args:
        anm_mean: Mean anomaly. Units: *rad*
        a: Semi-major axis, positive. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        anm_mean_epoch: Mean anomaly at the epoch. Units: *rad*

    Returns:
        Elapsed time ``(M - M0) / n``. Units: *s*

    Raises:
        UnsupportedRegimeError: If ``a`` is not positive.
    """
    a = _elliptic_sma(a)
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    return (anm_mean - jnp.asarray(anm_mean_epoch, dtype=get_dtype())) / mean_motion(a, gm)


def elapsed_time_to_mean_anomaly_hyperbolic(
    dt: ArrayLike,
    a: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    anm_mean_epoch: ArrayLike = 0.0,
) -> Array:
    """Convert elapsed time to mean anomaly on a hyperbolic orbit.

    Args:
        dt: Time elapsed since the epoch. Units: *s*
        a: Semi-major axis, negative. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        anm_mean_epoch: Mean anomaly at the epoch. Units: *rad*

    Returns:
        Hyperbolic mean anomaly ``M0 + n dt``. Units: *rad*

    Raises:
        UnsupportedRegimeError: If ``a`` is not negative.
    """
    a = _hyperbolic_sma(a)
    dt = jnp.asarray(dt, dtype=get_dtype())
    return jnp.asarray(anm_mean_epoch, dtype=get_dtype()) + mean_motion(a, gm) * dt


def mean_anomaly_to_elapsed_time_hyperbolic(
    anm_mean: ArrayLike,
    a: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    anm_mean_epoch: ArrayLike = 0.0,
) -> Array:
    """Convert mean anomaly to elapsed time on a hyperbolic orbit.

    Args:
        anm_mean: Hyperbolic mean anomaly. Units: *rad*
        a: Semi-major axis, negative. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        anm_mean_epoch: Mean anomaly at the epoch. Units: *rad*

    Returns:
        Elapsed time ``(M - M0) / n``. Units: *s*

    Raises:
        UnsupportedRegimeError: If ``a`` is not negative.
    """
    a = _hyperbolic_sma(a)
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    return (anm_mean - jnp.asarray(anm_mean_epoch, dtype=get_dtype())) / mean_motion(a, gm)
