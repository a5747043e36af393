"""Value types for orbit state representations.

Provides immutable containers for the three state representations the
converters move between:

- :class:`CartesianState`: inertial position and velocity.
- :class:`KeplerianElements`: classical orbital elements with true
  anomaly, in the ``[a | p, e, i, RAAN, omega, nu]`` vector convention.
- :class:`USMElements`: Unified State Model elements
  ``[C, Rf1, Rf2, epsilon1, epsilon2, epsilon3, eta]``.

All three are :class:`~typing.NamedTuple` subclasses, so JAX treats them
as pytrees and ``jnp.asarray(state)`` yields the state vector directly.
The conversion functions accept either these types or plain arrays.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype, get_singularity_tolerance
from orbitjax.errors import DomainViolationError


def as_state_vector(x: ArrayLike, size: int, name: str) -> Array:
    """Coerce a state to a finite 1-D array of the expected length.

    Args:
        x: State as an array, sequence, or one of the state NamedTuples.
        size: Required number of components.
        name: Representation name used in error messages.

    Returns:
        Array of shape ``(size,)`` in the configured dtype.

    Raises:
        DomainViolationError: If the shape is wrong or any component is
            NaN or infinite.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    if x.shape != (size,):
        raise DomainViolationError(f"{name} must have shape ({size},). Got: {x.shape}")
    if not bool(jnp.all(jnp.isfinite(x))):
        raise DomainViolationError(f"{name} must be finite. Got: {x}")
    return x


class CartesianState(NamedTuple):
    """Inertial Cartesian position and velocity.

    Attributes:
        x: Position x-component. Units: *m*
        y: Position y-component. Units: *m*
        z: Position z-component. Units: *m*
        vx: Velocity x-component. Units: *m/s*
        vy: Velocity y-component. Units: *m/s*
        vz: Velocity z-component. Units: *m/s*
    """

    x: float
    y: float
    z: float
    vx: float
    vy: float
    vz: float

    @classmethod
    def from_vector(cls, v: ArrayLike) -> CartesianState:
        """Create from a 6-element vector ``[x, y, z, vx, vy, vz]``."""
        v = as_state_vector(v, 6, "Cartesian state")
        return cls(*(v[k] for k in range(6)))

    def to_vector(self) -> Array:
        """Return the state as a shape ``(6,)`` array."""
        return jnp.asarray(self, dtype=get_dtype())

    @property
    def position(self) -> Array:
        """Position vector, shape ``(3,)``."""
        return self.to_vector()[:3]

    @property
    def velocity(self) -> Array:
        """Velocity vector, shape ``(3,)``."""
        return self.to_vector()[3:]


class KeplerianElements(NamedTuple):
    """Classical orbital elements with true anomaly.

    The first component is the semi-major axis for every orbit except a
    parabola, where it holds the semi-latus rectum instead (the
    semi-major axis is undefined for ``e = 1``).

    Attributes:
        a_or_p: Semi-major axis (signed: positive for ellipses, negative
            for hyperbolae), or semi-latus rectum when parabolic. Units: *m*
        e: Eccentricity, ``e >= 0``. Dimensionless.
        i: Inclination in ``[0, pi]``. Units: *rad*
        raan: Right ascension of the ascending node. Units: *rad*
        omega: Argument of periapsis. Units: *rad*
        nu: True anomaly. Units: *rad*
    """

    a_or_p: float
    e: float
    i: float
    raan: float
    omega: float
    nu: float

    @classmethod
    def from_vector(cls, v: ArrayLike) -> KeplerianElements:
        """Create from a 6-element vector ``[a | p, e, i, RAAN, omega, nu]``."""
        v = as_state_vector(v, 6, "Keplerian elements")
        return cls(*(v[k] for k in range(6)))

    def to_vector(self) -> Array:
        """Return the elements as a shape ``(6,)`` array."""
        return jnp.asarray(self, dtype=get_dtype())

    def is_parabolic(self) -> bool:
        """Whether the semi-latus rectum is the stored size parameter."""
        return abs(float(self.e) - 1.0) < get_singularity_tolerance()

    @property
    def semi_major_axis(self) -> Array:
        """Semi-major axis, or NaN for a parabolic orbit."""
        if self.is_parabolic():
            return jnp.asarray(jnp.nan, dtype=get_dtype())
        return jnp.asarray(self.a_or_p, dtype=get_dtype())

    @property
    def semi_latus_rectum(self) -> Array:
        """Semi-latus rectum ``p``, defined for every orbit shape."""
        if self.is_parabolic():
            return jnp.asarray(self.a_or_p, dtype=get_dtype())
        a = jnp.asarray(self.a_or_p, dtype=get_dtype())
        return a * (1.0 - self.e * self.e)


class USMElements(NamedTuple):
    """Unified State Model elements.

    Three velocity hodograph parameters followed by a unit quaternion
    describing the orientation of the orbital plane together with the
    current position along the orbit.

    Attributes:
        c: Hodograph element ``C = sqrt(gm / p)``. Units: *m/s*
        rf1: Hodograph element ``Rf1 = -e C sin(RAAN + omega)``. Units: *m/s*
        rf2: Hodograph element ``Rf2 = e C cos(RAAN + omega)``. Units: *m/s*
        epsilon1: First quaternion vector component.
        epsilon2: Second quaternion vector component.
        epsilon3: Third quaternion vector component.
        eta: Quaternion scalar component.
    """

    c: float
    rf1: float
    rf2: float
    epsilon1: float
    epsilon2: float
    epsilon3: float
    eta: float

    @classmethod
    def from_vector(cls, v: ArrayLike) -> USMElements:
        """Create from a 7-element vector ``[C, Rf1, Rf2, e1, e2, e3, eta]``."""
        v = as_state_vector(v, 7, "USM elements")
        return cls(*(v[k] for k in range(7)))

    def to_vector(self) -> Array:
        """Return the elements as a shape ``(7,)`` array."""
        return jnp.asarray(self, dtype=get_dtype())

    def quaternion_norm(self) -> Array:
        """Euclidean norm of ``[epsilon1, epsilon2, epsilon3, eta]``; 1 for valid elements."""
        return jnp.linalg.norm(self.to_vector()[3:])

    def hodograph_radius(self) -> Array:
        """Hodograph radius ``R = sqrt(Rf1^2 + Rf2^2) = e C``."""
        return jnp.hypot(
            jnp.asarray(self.rf1, dtype=get_dtype()), jnp.asarray(self.rf2, dtype=get_dtype())
        )
