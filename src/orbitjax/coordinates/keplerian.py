"""Keplerian orbital element ↔ inertial Cartesian state vector conversions.

Converts between osculating Keplerian orbital elements
``[a | p, e, i, RAAN, omega, nu]`` and inertial Cartesian state vectors
``[x, y, z, vx, vy, vz]`` for every conic: circular, elliptical,
parabolic and hyperbolic.

| Index | Element                                    | Units         |
|-------|--------------------------------------------|---------------|
| 0     | *a*: semi-major axis, or *p* if parabolic  | m             |
| 1     | *e*: eccentricity                          | dimensionless |
| 2     | *i*: inclination                           | rad           |
| 3     | *Ω*: right ascension (RAAN)                | rad           |
| 4     | *ω*: argument of periapsis                 | rad           |
| 5     | *ν*: true anomaly                          | rad           |

Undefined angles are fixed by convention:

- equatorial orbits: ``RAAN = 0`` and ``omega`` is the longitude of
  periapsis;
- circular inclined orbits: ``omega = 0`` and ``nu`` is the argument of
  latitude;
- circular equatorial orbits: ``RAAN = omega = 0`` and ``nu`` is the
  true longitude.

The :func:`state_koe_mean_to_cartesian` / :func:`state_cartesian_to_koe_mean`
pair use the mean anomaly ``M`` in place of ``nu``.

Any self-consistent unit system works; ``gm`` defaults to
:data:`~orbitjax.constants.GM_EARTH` in SI units.

References:
    1. D. Vallado, *Fundamentals of Astrodynamics and Applications
       (4th Ed.)*, 2010, Algorithms 9 and 10.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 2.2.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype, get_singularity_tolerance
from orbitjax.constants import GM_EARTH
from orbitjax.errors import DomainViolationError, UnsupportedRegimeError
from orbitjax.orbits import (
    OrbitShape,
    anomaly_mean_to_true,
    anomaly_true_to_mean,
    classify_geometry,
    classify_shape,
    validate_gravitational_parameter,
    validate_inclination,
)
from orbitjax.solvers import NewtonRaphsonConfig
from orbitjax.states import as_state_vector
from orbitjax.utils import wrap_to_2pi

logger = logging.getLogger(__name__)

# Eccentricity and node vector computed from a Cartesian state carry a few
# ulps of rounding error; singular-geometry checks are widened accordingly.
_COMPUTED_TOLERANCE_SCALE = 100.0


def _signed_angle(a: Array, b: Array, axis: Array) -> Array:
    """Angle from ``a`` to ``b`` measured positively about ``axis``, in ``(-pi, pi]``."""
    return jnp.arctan2(jnp.dot(axis, jnp.cross(a, b)), jnp.dot(a, b))


def state_koe_to_cartesian(
    x_oe: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    use_degrees: bool = False,
) -> Array:
    """Convert Keplerian orbital elements to an inertial Cartesian state.

    Builds position and velocity in the perifocal frame from ``p``, ``e``
    and ``nu``, then rotates them into the inertial frame through the
    3-1-3 sequence (RAAN, i, omega) using the perifocal P and Q vectors.

    The semi-latus rectum is ``a (1 - e^2)`` for non-parabolic orbits and
    the stored value for parabolic ones.

    Args:
        x_oe: Orbital elements ``[a | p, e, i, RAAN, omega, nu]``.
            Size parameter in *m*, angles in *rad* (or *deg* if
            ``use_degrees=True``).
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret angular elements as degrees.

    Returns:
        Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.

    Raises:
        DomainViolationError: If the inclination is outside ``[0, pi]``,
            the eccentricity is negative, the size parameter has the
            wrong sign for the eccentricity, or the true anomaly lies
            beyond the asymptotes of an open orbit.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.constants import GM_EARTH
        from orbitjax.coordinates import state_koe_to_cartesian
        oe = jnp.array([7000e3, 0.01, 0.9, 0.0, 0.0, 0.0])
        state = state_koe_to_cartesian(oe, GM_EARTH)
        ```

    References:
        O. Montenbruck and E. Gill, *Satellite Orbits*, 2012, Eq. 2.43–2.44.
    """
    x_oe = as_state_vector(x_oe, 6, "Keplerian elements")
    gm = validate_gravitational_parameter(gm)

    size = x_oe[0]
    e = x_oe[1]
    i = x_oe[2]
    raan = x_oe[3]
    omega = x_oe[4]
    nu = x_oe[5]

    if use_degrees:
        i = jnp.deg2rad(i)
        raan = jnp.deg2rad(raan)
        omega = jnp.deg2rad(omega)
        nu = jnp.deg2rad(nu)

    shape = classify_shape(e)
    validate_inclination(i)
    logger.debug("Keplerian -> Cartesian for %s orbit", shape.value)

    if shape is OrbitShape.PARABOLIC:
        p = size
    else:
        p = size * (1.0 - e * e)
    if not float(p) > 0.0:
        raise DomainViolationError(
            f"Size parameter {float(size)} is inconsistent with eccentricity {float(e)}"
        )

    cos_nu = jnp.cos(nu)
    sin_nu = jnp.sin(nu)
    denom = 1.0 + e * cos_nu
    if not float(denom) > 0.0:
        raise DomainViolationError(
            f"True anomaly {float(nu)} lies beyond the asymptotes of an orbit with e = {float(e)}"
        )

    # Perifocal unit vectors (Montenbruck & Gill Eq. 2.43)
    cos_o = jnp.cos(omega)
    sin_o = jnp.sin(omega)
    cos_R = jnp.cos(raan)
    sin_R = jnp.sin(raan)
    cos_i = jnp.cos(i)
    sin_i = jnp.sin(i)

    P = jnp.array(
        [
            cos_o * cos_R - sin_o * cos_i * sin_R,
            cos_o * sin_R + sin_o * cos_i * cos_R,
            sin_o * sin_i,
        ]
    )

    Q = jnp.array(
        [
            -sin_o * cos_R - cos_o * cos_i * sin_R,
            -sin_o * sin_R + cos_o * cos_i * cos_R,
            cos_o * sin_i,
        ]
    )

    r_mag = p / denom
    r_vec = r_mag * cos_nu * P + r_mag * sin_nu * Q
    v_vec = jnp.sqrt(gm / p) * (-sin_nu * P + (e + cos_nu) * Q)

    return jnp.concatenate([r_vec, v_vec])


def state_cartesian_to_koe(
    x_cart: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    use_degrees: bool = False,
) -> Array:
    """Convert an inertial Cartesian state to Keplerian orbital elements.

    Derives the osculating elements from the angular momentum vector
    ``h = r x v``, the eccentricity vector ``(v x h)/gm - r/|r|`` and the
    node vector ``z x h``.  The orbit is classified first; each regime
    then fixes its undefined angles as described in the module docstring.

    All angles come from two-argument arctangents measured about ``h``,
    so they are quadrant-correct without separate sign checks (the sign
    of ``r . v`` and of the z-components is implied by the signed angle).
    Output angles are wrapped to ``[0, 2pi)``.

    Args:
        x_cart: Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        Orbital elements ``[a | p, e, i, RAAN, omega, nu]``. Index 0 holds
        the semi-latus rectum and ``e`` is exactly 1 when the
        orbit is parabolic.

    Raises:
        DomainViolationError: If the state is not finite, has zero angular
            momentum (rectilinear motion), or yields an inclination cosine
            outside ``[-1, 1]``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.coordinates import state_cartesian_to_koe
        state = jnp.array([1.0, 2.0, 1.0, -0.25, -0.25, 0.5])
        oe = state_cartesian_to_koe(state, gm=1.0)
        ```

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, 2010, Algorithm 9.
    """
    x_cart = as_state_vector(x_cart, 6, "Cartesian state")
    gm = validate_gravitational_parameter(gm)
    tol = _COMPUTED_TOLERANCE_SCALE * get_singularity_tolerance()

    r = x_cart[:3]
    v = x_cart[3:6]

    r_mag = jnp.linalg.norm(r)
    v_mag = jnp.linalg.norm(v)

    # Angular momentum
    h = jnp.cross(r, v)
    h_mag = jnp.linalg.norm(h)
    if not float(h_mag) > 0.0:
        raise DomainViolationError("Cartesian state has zero angular momentum (rectilinear orbit)")
    h_hat = h / h_mag

    # Eccentricity vector
    e_vec = jnp.cross(v, h) / gm - r / r_mag
    ecc = jnp.linalg.norm(e_vec)

    # Node vector, z x h
    n_vec = jnp.array([-h[1], h[0], 0.0])
    n_mag = jnp.linalg.norm(n_vec)

    # Inclination
    cos_i = h[2] / h_mag
    if not abs(float(cos_i)) <= 1.0 + tol:
        raise DomainViolationError(
            f"Inclination cosine {float(cos_i)} is outside [-1, 1]"
        )
    # atan2 keeps full precision near i = 0 and i = pi, where arccos does not
    i = jnp.arctan2(n_mag, h[2])

    shape = classify_shape(ecc, tol)
    geometry = classify_geometry(i, tol)
    logger.debug("Cartesian -> Keplerian for %s %s orbit", geometry.value, shape.value)

    # Right ascension of the ascending node; the x-axis stands in for the
    # undefined node line of an equatorial orbit
    if geometry.is_equatorial:
        raan = jnp.zeros((), dtype=get_dtype())
        node = jnp.array([1.0, 0.0, 0.0], dtype=get_dtype())
    else:
        raan = wrap_to_2pi(jnp.arctan2(n_vec[1], n_vec[0]))
        node = n_vec

    # Argument of periapsis and true anomaly; a circular orbit folds
    # omega into nu (argument of latitude / true longitude)
    if shape is OrbitShape.CIRCULAR:
        omega = jnp.zeros((), dtype=get_dtype())
        nu = wrap_to_2pi(_signed_angle(node, r, h_hat))
    else:
        omega = wrap_to_2pi(_signed_angle(node, e_vec, h_hat))
        nu = wrap_to_2pi(_signed_angle(e_vec, r, h_hat))

    # Size parameter: semi-latus rectum for a parabola, vis-viva otherwise.
    # A parabola is reported with e = 1 exactly.
    if shape is OrbitShape.PARABOLIC:
        size = h_mag * h_mag / gm
        ecc = jnp.ones((), dtype=get_dtype())
    else:
        energy = 0.5 * v_mag * v_mag - gm / r_mag
        size = -gm / (2.0 * energy)

    if use_degrees:
        i = jnp.rad2deg(i)
        raan = jnp.rad2deg(raan)
        omega = jnp.rad2deg(omega)
        nu = jnp.rad2deg(nu)

    return jnp.array([size, ecc, i, raan, omega, nu])


def state_koe_mean_to_cartesian(
    x_oe: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    use_degrees: bool = False,
    config: NewtonRaphsonConfig | None = None,
) -> Array:
    """Convert mean-anomaly orbital elements to an inertial Cartesian state.

    Solves Kepler's equation (elliptic or hyperbolic) for the true
    anomaly, then applies :func:`state_koe_to_cartesian`.

    Args:
        x_oe: Orbital elements ``[a, e, i, RAAN, omega, M]``.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret angular elements as degrees.
        config: Newton-Raphson settings for the Kepler solve.

    Returns:
        Cartesian state ``[x, y, z, vx, vy, vz]``.

    Raises:
        UnsupportedRegimeError: If the orbit is parabolic.
        NonConvergenceError: If Kepler's equation does not converge.
    """
    x_oe = as_state_vector(x_oe, 6, "Keplerian elements")
    if classify_shape(x_oe[1]) is OrbitShape.PARABOLIC:
        raise UnsupportedRegimeError("Mean-anomaly elements are unsupported for parabolic orbits")

    nu = anomaly_mean_to_true(x_oe[5], x_oe[1], use_degrees, config)
    return state_koe_to_cartesian(x_oe.at[5].set(nu), gm, use_degrees)


def state_cartesian_to_koe_mean(
    x_cart: ArrayLike,
    gm: ArrayLike = GM_EARTH,
    use_degrees: bool = False,
) -> Array:
    """Convert an inertial Cartesian state to mean-anomaly orbital elements.

    Applies :func:`state_cartesian_to_koe`, then converts the true
    anomaly to mean anomaly.  Elliptic mean anomalies are wrapped to
    ``[0, 2pi)``; hyperbolic ones are unbounded and left as computed.

    Args:
        x_cart: Cartesian state ``[x, y, z, vx, vy, vz]``.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        Orbital elements ``[a, e, i, RAAN, omega, M]``.

    Raises:
        UnsupportedRegimeError: If the orbit is parabolic.
    """
    x_oe = state_cartesian_to_koe(x_cart, gm)
    tol = _COMPUTED_TOLERANCE_SCALE * get_singularity_tolerance()
    shape = classify_shape(x_oe[1], tol)
    if shape is OrbitShape.PARABOLIC:
        raise UnsupportedRegimeError("Mean-anomaly elements are unsupported for parabolic orbits")

    # A computed eccentricity this close to zero is treated as exactly circular
    e = jnp.zeros((), dtype=get_dtype()) if shape is OrbitShape.CIRCULAR else x_oe[1]
    M = anomaly_true_to_mean(x_oe[5], e)
    if shape.is_closed:
        M = wrap_to_2pi(M)
    x_oe = x_oe.at[5].set(M)

    if use_degrees:
        x_oe = x_oe.at[2:].set(jnp.rad2deg(x_oe[2:]))
    return x_oe
