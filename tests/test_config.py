"""Tests for the orbitjax.config module."""

import jax.numpy as jnp
import pytest

from orbitjax.config import (
    get_dtype,
    get_machine_epsilon,
    get_singularity_tolerance,
    set_dtype,
)
from orbitjax.coordinates import state_cartesian_to_koe, state_koe_to_cartesian
from orbitjax.orbits import anomaly_mean_to_eccentric, mean_motion

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")


class TestSingularityTolerance:
    def test_float32(self):
        assert get_singularity_tolerance() == 1e-7

    def test_float64(self):
        set_dtype(jnp.float64)
        assert get_singularity_tolerance() == 1e-15

    def test_half_precision(self):
        for dtype in (jnp.float16, jnp.bfloat16):
            set_dtype(dtype)
            assert get_singularity_tolerance() == 1e-3

    def test_machine_epsilon_tracks_dtype(self):
        eps32 = get_machine_epsilon()
        set_dtype(jnp.float64)
        eps64 = get_machine_epsilon()
        assert eps32 == pytest.approx(1.1920929e-07)
        assert eps64 == pytest.approx(2.220446049250313e-16)


class TestDtypeFlowsThroughConversions:
    def test_mean_motion_float32(self):
        n = mean_motion(7000e3)
        assert n.dtype == jnp.float32

    def test_mean_motion_float64(self):
        set_dtype(jnp.float64)
        n = mean_motion(7000e3)
        assert n.dtype == jnp.float64

    def test_kepler_solve_float32(self):
        """Kepler's equation converges in single precision."""
        E = anomaly_mean_to_eccentric(1.0, 0.1)
        assert E.dtype == jnp.float32
        assert jnp.abs(E - 0.1 * jnp.sin(E) - 1.0) < 1e-5

    def test_cartesian_roundtrip_float32(self):
        """Element conversions run in single precision with float32 outputs."""
        oe = jnp.array([7000e3, 0.01, 0.9, 0.3, 0.2, 0.1])
        state = state_koe_to_cartesian(oe)
        assert state.dtype == jnp.float32
        oe_back = state_cartesian_to_koe(state)
        assert oe_back.dtype == jnp.float32
        assert jnp.abs(oe_back[0] - 7000e3) / 7000e3 < 1e-4
        assert jnp.abs(oe_back[2] - 0.9) < 1e-4
