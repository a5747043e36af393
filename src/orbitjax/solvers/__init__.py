"""Iterative solvers.

This sub-module provides the Newton-Raphson root finder used to invert
Kepler's equation, its configuration dataclass, and the residual /
derivative pairs for the elliptic and hyperbolic Kepler equations.
"""

from .config import NewtonRaphsonConfig
from .newton_raphson import (
    hyperbolic_kepler_equation,
    kepler_equation,
    newton_raphson,
)

__all__ = [
    "NewtonRaphsonConfig",
    "newton_raphson",
    "kepler_equation",
    "hyperbolic_kepler_equation",
]
