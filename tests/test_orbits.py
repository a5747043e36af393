import jax.numpy as jnp
import pytest

from orbitjax.constants import GM_EARTH, GM_SUN
from orbitjax.errors import DomainViolationError, UnsupportedRegimeError
from orbitjax.orbits import (
    elapsed_time_to_mean_anomaly_elliptic,
    elapsed_time_to_mean_anomaly_hyperbolic,
    mean_anomaly_to_elapsed_time_elliptic,
    mean_anomaly_to_elapsed_time_hyperbolic,
    mean_motion,
    orbital_period,
    semi_latus_rectum,
)

_TIME_TOL = 1e-11         # seconds / radians
_PERIOD_TOL = 1e-6        # seconds

# Reference cases
_A_ELLIPTIC = 2500e3
_DT_ELLIPTIC = 4000.0
_M_ELLIPTIC = 20.203139659369779

_A_HYPERBOLIC = -40000e3
_DT_HYPERBOLIC = 1000.0
_M_HYPERBOLIC = 0.078918514294413


# ──────────────────────────────────────────────
# Mean motion and period
# ──────────────────────────────────────────────


class TestMeanMotion:
    def test_mean_motion_elliptic(self):
        n = mean_motion(_A_ELLIPTIC)
        assert jnp.abs(n - jnp.sqrt(GM_EARTH / _A_ELLIPTIC**3)) < 1e-15

    def test_mean_motion_uses_absolute_sma(self):
        assert mean_motion(-7000e3) == mean_motion(7000e3)

    def test_mean_motion_custom_gm(self):
        n = mean_motion(1.0, gm=1.0)
        assert jnp.abs(n - 1.0) < 1e-15

    def test_non_positive_gm_raises(self):
        with pytest.raises(DomainViolationError):
            mean_motion(7000e3, gm=0.0)

    def test_zero_sma_raises(self):
        with pytest.raises(DomainViolationError, match="non-zero"):
            mean_motion(0.0)

    def test_zero_sma_in_array_raises(self):
        with pytest.raises(DomainViolationError):
            mean_motion(jnp.array([7000e3, 0.0]))


class TestOrbitalPeriod:
    def test_period_matches_mean_motion(self):
        T = orbital_period(7000e3)
        assert jnp.abs(T - 2.0 * jnp.pi / mean_motion(7000e3)) < _PERIOD_TOL

    def test_earth_year(self):
        """One AU around the Sun takes about 365.25 days."""
        T = orbital_period(1.495978707e11, GM_SUN)
        assert jnp.abs(T / 86400.0 - 365.25) < 0.1

    def test_hyperbolic_sma_raises(self):
        with pytest.raises(UnsupportedRegimeError):
            orbital_period(-7000e3)


class TestSemiLatusRectum:
    def test_ellipse(self):
        assert jnp.abs(semi_latus_rectum(7000e3, 0.1) - 7000e3 * 0.99) < 1e-6

    def test_hyperbola_positive(self):
        assert semi_latus_rectum(-7000e3, 2.0) > 0.0


# ──────────────────────────────────────────────
# Elapsed time <-> mean anomaly
# ──────────────────────────────────────────────


class TestEllipticTime:
    def test_time_to_mean_anomaly(self):
        M = elapsed_time_to_mean_anomaly_elliptic(_DT_ELLIPTIC, _A_ELLIPTIC, GM_EARTH)
        assert jnp.abs(M - _M_ELLIPTIC) < _TIME_TOL

    def test_mean_anomaly_to_time(self):
        dt = mean_anomaly_to_elapsed_time_elliptic(_M_ELLIPTIC, _A_ELLIPTIC, GM_EARTH)
        assert jnp.abs(dt - _DT_ELLIPTIC) < 1e-9

    def test_epoch_offset(self):
        M = elapsed_time_to_mean_anomaly_elliptic(
            _DT_ELLIPTIC, _A_ELLIPTIC, GM_EARTH, anm_mean_epoch=1.5
        )
        assert jnp.abs(M - (_M_ELLIPTIC + 1.5)) < _TIME_TOL
        dt = mean_anomaly_to_elapsed_time_elliptic(M, _A_ELLIPTIC, GM_EARTH, anm_mean_epoch=1.5)
        assert jnp.abs(dt - _DT_ELLIPTIC) < 1e-9

    def test_negative_elapsed_time(self):
        M = elapsed_time_to_mean_anomaly_elliptic(-_DT_ELLIPTIC, _A_ELLIPTIC)
        assert jnp.abs(M + _M_ELLIPTIC) < _TIME_TOL

    def test_full_period(self):
        T = orbital_period(_A_ELLIPTIC)
        M = elapsed_time_to_mean_anomaly_elliptic(T, _A_ELLIPTIC)
        assert jnp.abs(M - 2.0 * jnp.pi) < _TIME_TOL

    def test_negative_sma_raises(self):
        with pytest.raises(UnsupportedRegimeError):
            elapsed_time_to_mean_anomaly_elliptic(_DT_ELLIPTIC, _A_HYPERBOLIC)
        with pytest.raises(UnsupportedRegimeError):
            mean_anomaly_to_elapsed_time_elliptic(_M_ELLIPTIC, _A_HYPERBOLIC)


class TestHyperbolicTime:
    def test_time_to_mean_anomaly(self):
        M = elapsed_time_to_mean_anomaly_hyperbolic(_DT_HYPERBOLIC, _A_HYPERBOLIC, GM_EARTH)
        assert jnp.abs(M - _M_HYPERBOLIC) < _TIME_TOL

    def test_mean_anomaly_to_time(self):
        dt = mean_anomaly_to_elapsed_time_hyperbolic(_M_HYPERBOLIC, _A_HYPERBOLIC, GM_EARTH)
        assert jnp.abs(dt - _DT_HYPERBOLIC) < 1e-9

    def test_positive_sma_raises(self):
        with pytest.raises(UnsupportedRegimeError):
            elapsed_time_to_mean_anomaly_hyperbolic(_DT_HYPERBOLIC, _A_ELLIPTIC)
        with pytest.raises(UnsupportedRegimeError):
            mean_anomaly_to_elapsed_time_hyperbolic(_M_HYPERBOLIC, _A_ELLIPTIC)

    def test_vectorized(self):
        dts = jnp.array([0.0, 500.0, 1000.0])
        M = elapsed_time_to_mean_anomaly_hyperbolic(dts, _A_HYPERBOLIC)
        assert M.shape == (3,)
        assert jnp.abs(M[2] - _M_HYPERBOLIC) < _TIME_TOL
        assert jnp.abs(M[1] - 0.5 * _M_HYPERBOLIC) < _TIME_TOL
