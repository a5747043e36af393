"""Newton-Raphson root finding for Kepler's equation.

Provides a stateless scalar (element-wise) Newton-Raphson solver and the
residual/derivative pairs for the elliptic and hyperbolic forms of
Kepler's equation:

- elliptic:   ``f(E) = E - e sin(E) - M``
- hyperbolic: ``f(H) = e sinh(H) - H - M``

The iteration runs in ``jax.lax.while_loop`` so it stops as soon as the
Newton step is below tolerance.  The convergence check after the loop
needs concrete values, so :func:`newton_raphson` itself is an eager
function and cannot be traced under ``jax.jit``.
"""

from __future__ import annotations

import logging
from typing import Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype, get_machine_epsilon
from orbitjax.errors import NonConvergenceError
from orbitjax.solvers.config import NewtonRaphsonConfig

logger = logging.getLogger(__name__)

ScalarFunction = Callable[[Array], Array]

# Steps smaller than this many ulps of the iterate count as converged
_ULP_FACTOR = 4.0


def newton_raphson(
    residual: ScalarFunction,
    derivative: ScalarFunction,
    x0: ArrayLike,
    config: NewtonRaphsonConfig | None = None,
) -> Array:
    """Find a root of ``residual`` by Newton-Raphson iteration.

    Iterates ``x <- x - f(x) / f'(x)`` until every element's step is no
    larger than ``max(config.tolerance, 4 * eps * max(1, |x|))``.  The
    ulp floor keeps large-magnitude roots (e.g. multi-revolution mean
    anomalies) from stalling just above an unreachable absolute
    tolerance.

    Args:
        residual: Function ``f(x)`` whose root is sought.
        derivative: Its derivative ``f'(x)``.
        x0: Initial guess. Scalars and arrays are both accepted; arrays
            are solved element-wise.
        config: Convergence settings. Defaults to
            :class:`NewtonRaphsonConfig()`.

    Returns:
        The root, with the shape of ``x0``.

    Raises:
        NonConvergenceError: If the iteration cap is reached, or a step
            evaluates to NaN, before convergence.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.solvers import newton_raphson
        root = newton_raphson(lambda x: x**2 - 2.0, lambda x: 2.0 * x, 1.0)
        ```
    """
    if config is None:
        config = NewtonRaphsonConfig()

    x0 = jnp.asarray(x0, dtype=get_dtype())
    tolerance = config.tolerance
    max_iterations = config.max_iterations
    ulp = _ULP_FACTOR * get_machine_epsilon()

    def step_limit(x):
        return jnp.maximum(tolerance, ulp * jnp.maximum(1.0, jnp.abs(x)))

    def cond(carry):
        x, step, k = carry
        unconverged = jnp.any(jnp.abs(step) > step_limit(x))
        return unconverged & (k < max_iterations)

    def body(carry):
        x, _, k = carry
        step = residual(x) / derivative(x)
        return x - step, step, k + 1

    init = (x0, jnp.full_like(x0, jnp.inf), jnp.asarray(0, dtype=jnp.int32))
    x, step, iterations = jax.lax.while_loop(cond, body, init)

    iterations = int(iterations)
    last_step = float(jnp.max(jnp.abs(step)))

    # NaN steps fail this comparison as well
    if not bool(jnp.all(jnp.abs(step) <= step_limit(x))):
        logger.error(
            "Newton-Raphson failed to converge after %d iterations (|dx| = %s)",
            iterations,
            last_step,
        )
        raise NonConvergenceError(
            f"Newton-Raphson did not converge within {max_iterations} iterations "
            f"(last step {last_step}, tolerance {tolerance})",
            iterations=iterations,
            last_step=last_step,
        )

    logger.debug(
        "Newton-Raphson converged in %d iterations (|dx| = %.3e)", iterations, last_step
    )
    return x


def kepler_equation(e: ArrayLike, anm_mean: ArrayLike) -> tuple[ScalarFunction, ScalarFunction]:
    """Residual and derivative of the elliptic Kepler equation.

    Args:
        e: Eccentricity, ``0 <= e < 1``.
        anm_mean: Mean anomaly. Units: *rad*

    Returns:
        ``(f, df)`` with ``f(E) = E - e sin(E) - M`` and
        ``df(E) = 1 - e cos(E)``.
    """

    def residual(E):
        return E - e * jnp.sin(E) - anm_mean

    def derivative(E):
        return 1.0 - e * jnp.cos(E)

    return residual, derivative


def hyperbolic_kepler_equation(
    e: ArrayLike, anm_mean: ArrayLike
) -> tuple[ScalarFunction, ScalarFunction]:
    """Residual and derivative of the hyperbolic Kepler equation.

    Args:
        e: Eccentricity, ``e > 1``.
        anm_mean: Hyperbolic mean anomaly. Units: *rad*

    Returns:
        ``(f, df)`` with ``f(H) = e sinh(H) - H - M`` and
        ``df(H) = e cosh(H) - 1``.
    """

    def residual(H):
        return e * jnp.sinh(H) - H - anm_mean

    def derivative(H):
        return e * jnp.cosh(H) - 1.0

    return residual, derivative
