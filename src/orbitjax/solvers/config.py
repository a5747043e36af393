"""Configuration dataclass for the Newton-Raphson root finder.

:class:`NewtonRaphsonConfig` carries the convergence tolerance and the
iteration cap used when solving Kepler's equation and its hyperbolic
analogue.  Instances are immutable and validated on construction, so a
single config can be shared freely between conversions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NewtonRaphsonConfig:
    """Convergence settings for :func:`~orbitjax.solvers.newton_raphson`.

    Iteration stops once the magnitude of the Newton step falls below
    ``tolerance`` (or a few ulps of the iterate, whichever is larger).
    Exceeding ``max_iterations`` raises
    :class:`~orbitjax.errors.NonConvergenceError`.

    Args:
        tolerance: Absolute step tolerance [rad].
        max_iterations: Maximum number of Newton steps.

    Examples:
        ```python
        from orbitjax.solvers import NewtonRaphsonConfig
        config = NewtonRaphsonConfig(tolerance=1e-12)
        config.max_iterations
        ```
    """

    tolerance: float = 1e-8
    max_iterations: int = 100

    def __post_init__(self) -> None:
        if not self.tolerance > 0.0:
            raise ValueError(
                f"tolerance must be positive, got {self.tolerance}"
            )
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError(
                f"max_iterations must be an integer, got {self.max_iterations!r}"
            )
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )

    @staticmethod
    def high_precision() -> NewtonRaphsonConfig:
        """Preset: tight tolerance for time-domain conversions.

        Returns:
            NewtonRaphsonConfig: Configuration with ``tolerance=1e-11``.
        """
        return NewtonRaphsonConfig(tolerance=1e-11)
