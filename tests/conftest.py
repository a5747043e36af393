import jax.numpy as jnp
import pytest

from orbitjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Run every test in float64 unless the module overrides it.

    The singular-geometry tolerances (circular, parabolic, equatorial) are
    only meaningful in double precision. test_config.py installs its own
    autouse fixture that switches back to float32.
    """
    set_dtype(jnp.float64)
