"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout orbitjax.  The default is ``jnp.float32`` for GPU/TPU
compatibility.  Switching to ``jnp.float64`` automatically enables
JAX's 64-bit mode (``jax_enable_x64``).

Element conversions near singular geometries (circular, parabolic,
equatorial orbits) are only meaningful in double precision; call
``set_dtype(jnp.float64)`` before converting states that need the
``1e-15`` singularity tolerance.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for orbitjax.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype


def get_singularity_tolerance() -> float:
    """Return the dtype-adaptive tolerance for singular-geometry checks.

    Used to decide whether an orbit is circular (``e ~ 0``), parabolic
    (``e ~ 1``), equatorial (node vector ~ 0), or whether a USM quaternion
    sits on the pure-retrograde singularity.

    - ``float64``:  1e-15
    - ``float32``:  1e-7
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Absolute singularity tolerance.
    """
    if _dtype == jnp.float64:
        return 1e-15
    if _dtype == jnp.float32:
        return 1e-7
    # float16 and bfloat16
    return 1e-3


def get_machine_epsilon() -> float:
    """Return the machine epsilon of the configured float dtype.

    Returns:
        float: Spacing between 1.0 and the next representable value.
    """
    return float(jnp.finfo(_dtype).eps)
