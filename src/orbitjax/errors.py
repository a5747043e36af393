"""Exceptions raised by the orbit element conversions.

Every conversion either returns a state in the requested representation
or raises one of the exceptions below.  None of them are retried
internally; the caller decides whether to try again with different
inputs.

The concrete classes also derive from the matching builtin
(``ValueError`` / ``RuntimeError``) so existing ``except ValueError``
handlers keep working.
"""

from __future__ import annotations


class OrbitConversionError(Exception):
    """Base class for all orbitjax conversion failures."""


class DomainViolationError(OrbitConversionError, ValueError):
    """An input lies outside the domain of the conversion.

    Raised for inclinations outside ``[0, pi]``, negative eccentricities,
    non-finite state components, and element sets whose size parameter is
    inconsistent with their eccentricity.
    """


class UnsupportedRegimeError(OrbitConversionError, ValueError):
    """The conversion has no branch for the orbit shape it was given.

    The anomaly and time conversions have no parabolic branch, elliptic
    conversions reject ``e >= 1`` and hyperbolic conversions reject
    ``e <= 1``.
    """


class DegenerateGeometryError(OrbitConversionError, ValueError):
    """The orientation angles cannot be recovered from the given state.

    Raised by the USM inverse on the pure-retrograde singularity
    (``epsilon3 = eta = 0``, i.e. ``i = pi``), where RAAN, argument of
    periapsis and true anomaly are undefined.
    """


class NonConvergenceError(OrbitConversionError, RuntimeError):
    """Newton-Raphson iteration hit its iteration cap without converging.

    Args:
        message: Human-readable description.
        iterations: Number of iterations performed.
        last_step: Magnitude of the final Newton step.
    """

    def __init__(self, message: str, iterations: int, last_step: float) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.last_step = last_step
