"""Orbit shape and geometry classification.

Every element conversion first classifies its input and then dispatches
to the formula for that regime:

- :class:`OrbitShape`: circular, elliptical, parabolic or hyperbolic,
  decided from the eccentricity.
- :class:`OrbitGeometry`: inclined, prograde equatorial (``i = 0``) or
  retrograde equatorial (``i = pi``), decided from the inclination or
  from the angular momentum direction.

Classification works on concrete values (Python ``if``), so it happens
before any array computation and is not traceable under ``jax.jit``.
"""

from __future__ import annotations

import enum
import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype, get_machine_epsilon, get_singularity_tolerance
from orbitjax.errors import DomainViolationError


class OrbitShape(enum.Enum):
    """Conic section of a two-body orbit.

    Attributes:
        CIRCULAR: ``e = 0`` (within tolerance). Argument of periapsis is
            undefined and set to zero.
        ELLIPTICAL: ``0 < e < 1``.
        PARABOLIC: ``e = 1`` (within tolerance). Semi-major axis is
            undefined; the semi-latus rectum is used instead.
        HYPERBOLIC: ``e > 1``. Semi-major axis is negative.
    """

    CIRCULAR = "circular"
    ELLIPTICAL = "elliptical"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"

    @property
    def is_closed(self) -> bool:
        """``True`` for circular and elliptical orbits."""
        return self in (OrbitShape.CIRCULAR, OrbitShape.ELLIPTICAL)


class OrbitGeometry(enum.Enum):
    """Orientation class of the orbital plane.

    Attributes:
        INCLINED: The node line is defined.
        EQUATORIAL: Prograde equatorial, ``i = 0``. RAAN is undefined and
            set to zero.
        RETROGRADE_EQUATORIAL: ``i = pi``. RAAN is undefined and set to
            zero.
    """

    INCLINED = "inclined"
    EQUATORIAL = "equatorial"
    RETROGRADE_EQUATORIAL = "retrograde_equatorial"

    @property
    def is_equatorial(self) -> bool:
        """``True`` when the node line is undefined."""
        return self is not OrbitGeometry.INCLINED


def classify_shape(e: ArrayLike, tol: float | None = None) -> OrbitShape:
    """Classify an orbit by its eccentricity.

    Args:
        e: Eccentricity. Dimensionless.
        tol: Singularity tolerance. Defaults to
            :func:`~orbitjax.config.get_singularity_tolerance`.

    Returns:
        OrbitShape: The orbit shape.

    Raises:
        DomainViolationError: If ``e`` is negative or not finite.

    Examples:
        ```python
        from orbitjax.orbits import classify_shape
        classify_shape(0.3)
        ```
    """
    if tol is None:
        tol = get_singularity_tolerance()
    e = float(e)
    if not math.isfinite(e) or e < 0.0:
        raise DomainViolationError(f"Eccentricity must be finite and non-negative. Got: {e}")
    if e < tol:
        return OrbitShape.CIRCULAR
    if abs(e - 1.0) < tol:
        return OrbitShape.PARABOLIC
    if e < 1.0:
        return OrbitShape.ELLIPTICAL
    return OrbitShape.HYPERBOLIC


def classify_geometry(i: ArrayLike, tol: float | None = None) -> OrbitGeometry:
    """Classify an orbital plane by its inclination.

    Args:
        i: Inclination, expected in ``[0, pi]``. Units: *rad*
        tol: Singularity tolerance. Defaults to
            :func:`~orbitjax.config.get_singularity_tolerance`.

    Returns:
        OrbitGeometry: The plane orientation class.

    Raises:
        DomainViolationError: If ``i`` lies outside ``[0, pi]``.
    """
    if tol is None:
        tol = get_singularity_tolerance()
    i = validate_inclination(i)
    if abs(math.sin(i)) >= tol:
        return OrbitGeometry.INCLINED
    return OrbitGeometry.EQUATORIAL if i < 0.5 * math.pi else OrbitGeometry.RETROGRADE_EQUATORIAL


def validate_inclination(i: ArrayLike) -> float:
    """Check that an inclination lies in ``[0, pi]``.

    Both endpoints are valid.  The upper bound allows for ``pi`` rounding
    up when stored in the configured float dtype.

    Args:
        i: Inclination. Units: *rad*

    Returns:
        float: The inclination as a Python float.

    Raises:
        DomainViolationError: If ``i`` is outside ``[0, pi]`` or not finite.
    """
    i = float(i)
    if not (0.0 <= i <= math.pi * (1.0 + get_machine_epsilon())):
        raise DomainViolationError(
            f"Inclination must be in range [0, π] radians. Got: {i}"
        )
    return i


def validate_gravitational_parameter(gm: ArrayLike) -> Array:
    """Check that a gravitational parameter is positive.

    Args:
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        The gravitational parameter as an array in the configured dtype.

    Raises:
        DomainViolationError: If any element of ``gm`` is not positive.
    """
    gm = jnp.asarray(gm, dtype=get_dtype())
    if not bool(jnp.all(gm > 0.0)):
        raise DomainViolationError(f"Gravitational parameter must be positive. Got: {gm}")
    return gm
