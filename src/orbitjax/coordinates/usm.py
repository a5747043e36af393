"""Keplerian orbital element ↔ Unified State Model (USM) conversions.

The Unified State Model describes an orbit by three velocity hodograph
elements and a unit quaternion:

| Index | Element     | Meaning                                          |
|-------|-------------|--------------------------------------------------|
| 0     | *C*         | ``sqrt(gm / p)``, hodograph centre offset        |
| 1     | *Rf1*       | ``-e C sin(RAAN + omega)``                       |
| 2     | *Rf2*       | ``e C cos(RAAN + omega)``                        |
| 3-5   | *ε1, ε2, ε3*| quaternion vector part                           |
| 6     | *η*         | quaternion scalar part                           |

The quaternion rotates the inertial frame into the rotating orbital
frame. It is built from the inclination and the two combined angles
``RAAN - u`` and ``RAAN + u``, where ``u = omega + nu`` is the argument of
latitude, so it stays regular for circular and equatorial orbits.

The inverse conversion recovers the longitude ``lambda = RAAN + u`` from
``(ε3, η)``. Both vanish for a retrograde equatorial orbit (``i = pi``),
where the longitude is undefined and :class:`~orbitjax.errors.DegenerateGeometryError`
is raised.

References:
    1. S. Altman, *A Unified State Model of Orbital Trajectory and
       Attitude Dynamics*, Celestial Mechanics 6, 1972.
    2. D. Vittaldev, E. Mooij and M. Naeije, *Unified State Model
       theory and application in Astrodynamics*, Celestial Mechanics
       and Dynamical Astronomy 112, 2012.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype, get_singularity_tolerance
from orbitjax.constants import GM_EARTH
from orbitjax.errors import DegenerateGeometryError, DomainViolationError
from orbitjax.orbits import (
    OrbitShape,
    classify_shape,
    validate_gravitational_parameter,
    validate_inclination,
)
from orbitjax.states import as_state_vector
from orbitjax.utils import wrap_to_2pi

logger = logging.getLogger(__name__)

# Recovered hodograph radius and quaternion products carry a few ulps of
# rounding error; regime checks on them are widened accordingly.
_COMPUTED_TOLERANCE_SCALE = 100.0


def state_koe_to_usm(x_oe: ArrayLike, gm: ArrayLike = GM_EARTH) -> Array:
    """Convert Keplerian orbital elements to Unified State Model elements.

    Args:
        x_oe: Orbital elements ``[a | p, e, i, RAAN, omega, nu]``. Size
            parameter in *m*, angles in *rad*. Index 0 holds the
            semi-latus rectum when the orbit is parabolic.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        USM elements ``[C, Rf1, Rf2, epsilon1, epsilon2, epsilon3, eta]``.
        Velocity elements in *m/s*; the quaternion has unit norm.

    Raises:
        DomainViolationError: If the inclination is outside ``[0, pi]``,
            the eccentricity is negative, or the semi-latus rectum is not
            positive.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.coordinates import state_koe_to_usm
        oe = jnp.array([7000e3, 0.01, 0.9, 0.3, 0.2, 0.1])
        usm = state_koe_to_usm(oe)
        ```
    """
    x_oe = as_state_vector(x_oe, 6, "Keplerian elements")
    gm = validate_gravitational_parameter(gm)

    size, e, i, raan, omega, nu = (x_oe[k] for k in range(6))

    shape = classify_shape(e)
    validate_inclination(i)
    logger.debug("Keplerian -> USM for %s orbit", shape.value)

    if shape is OrbitShape.PARABOLIC:
        p = size
    else:
        p = size * (1.0 - e * e)
    if not float(p) > 0.0:
        raise DomainViolationError(
            f"Size parameter {float(size)} is inconsistent with eccentricity {float(e)}"
        )

    # Velocity hodograph
    C = jnp.sqrt(gm / p)
    R = e * C
    lon_peri = raan + omega
    rf1 = -R * jnp.sin(lon_peri)
    rf2 = R * jnp.cos(lon_peri)

    # Quaternion from inclination, RAAN and argument of latitude
    u = omega + nu
    sin_hi = jnp.sin(0.5 * i)
    cos_hi = jnp.cos(0.5 * i)
    half_diff = 0.5 * (raan - u)
    half_sum = 0.5 * (raan + u)

    eps1 = sin_hi * jnp.cos(half_diff)
    eps2 = sin_hi * jnp.sin(half_diff)
    eps3 = cos_hi * jnp.sin(half_sum)
    eta = cos_hi * jnp.cos(half_sum)

    return jnp.array([C, rf1, rf2, eps1, eps2, eps3, eta])


def state_usm_to_koe(x_usm: ArrayLike, gm: ArrayLike = GM_EARTH) -> Array:
    """Convert Unified State Model elements to Keplerian orbital elements.

    Recovers the longitude ``lambda = RAAN + omega + nu`` from the
    quaternion, rotates the hodograph elements into the orbital frame to
    obtain the radial and transverse velocity components, and reads the
    remaining elements off those. Every angle comes from a two-argument
    arctangent and is wrapped to ``[0, 2pi)``.

    Undefined angles follow the same conventions as
    :func:`~orbitjax.coordinates.state_cartesian_to_koe`: ``RAAN = 0`` for
    equatorial orbits and ``omega = 0`` for circular ones.

    Args:
        x_usm: USM elements ``[C, Rf1, Rf2, epsilon1, epsilon2, epsilon3, eta]``.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Orbital elements ``[a | p, e, i, RAAN, omega, nu]``. Index 0 holds
        the semi-latus rectum and ``e`` is exactly 1 when the
        orbit is parabolic.

    Raises:
        DomainViolationError: If ``C`` is not positive or an element is
            not finite.
        DegenerateGeometryError: If ``epsilon3`` and ``eta`` both vanish,
            leaving the longitude undefined.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.coordinates import state_koe_to_usm, state_usm_to_koe
        oe = jnp.array([7000e3, 0.01, 0.9, 0.3, 0.2, 0.1])
        oe_back = state_usm_to_koe(state_koe_to_usm(oe))
        ```
    """
    x_usm = as_state_vector(x_usm, 7, "USM elements")
    gm = validate_gravitational_parameter(gm)
    tol = _COMPUTED_TOLERANCE_SCALE * get_singularity_tolerance()

    C, rf1, rf2, eps1, eps2, eps3, eta = (x_usm[k] for k in range(7))
    if not float(C) > 0.0:
        raise DomainViolationError(f"Hodograph element C must be positive. Got: {float(C)}")

    if abs(float(eps3)) < tol and abs(float(eta)) < tol:
        logger.warning(
            "USM quaternion has epsilon3 = eta = 0; longitude is undefined for this "
            "retrograde equatorial orbit"
        )
        raise DegenerateGeometryError(
            "Longitude is undefined when epsilon3 and eta are both zero"
        )

    # Longitude lambda = RAAN + omega + nu
    den = eps3 * eps3 + eta * eta
    cos_lam = (eta * eta - eps3 * eps3) / den
    sin_lam = 2.0 * eps3 * eta / den
    lam = jnp.arctan2(sin_lam, cos_lam)

    # Radial (ve1 = R sin nu) and transverse (ve2 = C + R cos nu) velocity
    ve1 = rf1 * cos_lam + rf2 * sin_lam
    ve2 = C - rf1 * sin_lam + rf2 * cos_lam

    R = jnp.hypot(rf1, rf2)
    e = R / C

    shape = classify_shape(e, tol)
    logger.debug("USM -> Keplerian for %s orbit", shape.value)

    # A parabola is reported with e = 1 exactly
    if shape is OrbitShape.PARABOLIC:
        size = gm / (C * C)
        e = jnp.ones((), dtype=get_dtype())
    else:
        size = gm / (2.0 * C * ve2 - (ve1 * ve1 + ve2 * ve2))

    # Inclination
    cos_i = 1.0 - 2.0 * (eps1 * eps1 + eps2 * eps2)
    i = jnp.arccos(jnp.clip(cos_i, -1.0, 1.0))

    # Right ascension of the ascending node
    if abs(float(eps1)) < tol and abs(float(eps2)) < tol:
        raan = jnp.zeros((), dtype=get_dtype())
    else:
        raan = jnp.arctan2(eps1 * eps3 + eps2 * eta, eps1 * eta - eps2 * eps3)

    # Argument of periapsis and true anomaly
    if shape is OrbitShape.CIRCULAR:
        omega = jnp.zeros((), dtype=get_dtype())
        nu = lam - raan
    else:
        nu = jnp.arctan2(ve1, ve2 - C)
        omega = lam - raan - nu

    return jnp.array(
        [size, e, i, wrap_to_2pi(raan), wrap_to_2pi(omega), wrap_to_2pi(nu)]
    )
