"""State representation conversions.

This sub-module provides functions for converting between the orbit
state representations used by orbitjax:

- **Keplerian**: orbital elements ``[a | p, e, i, Ω, ω, ν]`` ↔ inertial
  Cartesian ``[x, y, z, vx, vy, vz]``, plus the mean-anomaly variants
  ``[a, e, i, Ω, ω, M]``
- **USM**: orbital elements ↔ Unified State Model
  ``[C, Rf1, Rf2, ε1, ε2, ε3, η]``
"""

from .keplerian import (
    state_cartesian_to_koe,
    state_cartesian_to_koe_mean,
    state_koe_mean_to_cartesian,
    state_koe_to_cartesian,
)
from .usm import (
    state_koe_to_usm,
    state_usm_to_koe,
)

__all__ = [
    "state_koe_to_cartesian",
    "state_cartesian_to_koe",
    "state_koe_mean_to_cartesian",
    "state_cartesian_to_koe_mean",
    "state_koe_to_usm",
    "state_usm_to_koe",
]
