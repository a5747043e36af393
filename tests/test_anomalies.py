import jax.numpy as jnp
import pytest

from orbitjax.constants import DEG2RAD
from orbitjax.errors import (
    DomainViolationError,
    NonConvergenceError,
    UnsupportedRegimeError,
)
from orbitjax.orbits import (
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_hyperbolic,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    anomaly_true_to_mean,
)
from orbitjax.solvers import NewtonRaphsonConfig

_ANOMALY_TOL = 1e-8       # radians
_ANOMALY_LOOSE_TOL = 1e-4 # radians (reference values quoted to 4 decimals)
_ANOMALY_DEG_TOL = 1e-6   # degrees

# Earth orbit reference case
_E_EARTH = 0.01671
_NU_EARTH_DEG = 61.6755418
_E_ANM_EARTH = 1.061789204


# ──────────────────────────────────────────────
# Elliptic
# ──────────────────────────────────────────────


class TestEllipticAnomalies:
    def test_true_to_eccentric_reference(self):
        E = anomaly_true_to_eccentric(_NU_EARTH_DEG * DEG2RAD, _E_EARTH)
        assert jnp.abs(E - _E_ANM_EARTH) < _ANOMALY_TOL

    def test_eccentric_to_true_reference(self):
        nu = anomaly_eccentric_to_true(_E_ANM_EARTH, _E_EARTH)
        assert jnp.abs(nu - _NU_EARTH_DEG * DEG2RAD) < _ANOMALY_TOL

    def test_eccentric_to_mean_reference(self):
        M = anomaly_eccentric_to_mean(_E_ANM_EARTH, _E_EARTH, use_degrees=False)
        assert jnp.abs(M - 60.0 * DEG2RAD) < _ANOMALY_TOL

    def test_mean_to_eccentric_reference(self):
        E = anomaly_mean_to_eccentric(60.0 * DEG2RAD, _E_EARTH)
        assert jnp.abs(E - _E_ANM_EARTH) < _ANOMALY_TOL

    def test_degrees(self):
        E_deg = anomaly_mean_to_eccentric(60.0, _E_EARTH, use_degrees=True)
        assert jnp.abs(E_deg - _E_ANM_EARTH / DEG2RAD) < _ANOMALY_DEG_TOL

    def test_circular_identity(self):
        """All anomalies coincide on a circular orbit."""
        assert jnp.abs(anomaly_true_to_eccentric(1.2, 0.0) - 1.2) < 1e-15
        assert jnp.abs(anomaly_mean_to_eccentric(1.2, 0.0) - 1.2) < 1e-15

    def test_true_to_eccentric_quadrants(self):
        """Eccentric anomaly stays on the same side of the apse line."""
        for nu in (0.5, 2.0, -2.0, -0.5):
            E = anomaly_true_to_eccentric(nu, 0.6)
            assert jnp.sign(E) == jnp.sign(nu)

    @pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.9, 0.99])
    @pytest.mark.parametrize("M", [0.1, 1.0, 3.0, 5.5])
    def test_mean_eccentric_roundtrip(self, e, M):
        E = anomaly_mean_to_eccentric(M, e)
        assert jnp.abs(anomaly_eccentric_to_mean(E, e) - M) < _ANOMALY_TOL

    def test_multi_revolution_mean_anomaly(self):
        """Mean anomaly is not wrapped before solving."""
        M = 4.0 * jnp.pi + 1.0
        E = anomaly_mean_to_eccentric(M, 0.3)
        assert E > 4.0 * jnp.pi
        assert jnp.abs(E - 0.3 * jnp.sin(E) - M) < _ANOMALY_TOL

    @pytest.mark.parametrize("M", [4.0 * jnp.pi + 0.1, -6.0 * jnp.pi + 5.0])
    def test_multi_revolution_high_eccentricity(self, M):
        """The high-eccentricity seed stays on the revolution of M."""
        E = anomaly_mean_to_eccentric(M, 0.95)
        assert jnp.abs(E - 0.95 * jnp.sin(E) - M) < _ANOMALY_TOL
        assert jnp.floor(E / (2.0 * jnp.pi)) == jnp.floor(M / (2.0 * jnp.pi))

    def test_high_precision_config(self):
        E = anomaly_mean_to_eccentric(1.0, 0.7, config=NewtonRaphsonConfig.high_precision())
        assert jnp.abs(E - 0.7 * jnp.sin(E) - 1.0) < 1e-11

    def test_non_convergence(self):
        config = NewtonRaphsonConfig(tolerance=1e-14, max_iterations=1)
        with pytest.raises(NonConvergenceError):
            anomaly_mean_to_eccentric(0.1, 0.9, config=config)

    @pytest.mark.parametrize("e", [1.5, 3.0])
    def test_hyperbolic_eccentricity_rejected(self, e):
        with pytest.raises(UnsupportedRegimeError):
            anomaly_true_to_eccentric(0.5, e)

    def test_parabolic_rejected(self):
        with pytest.raises(UnsupportedRegimeError, match="parabolic"):
            anomaly_mean_to_eccentric(0.5, 1.0)

    def test_negative_eccentricity_rejected(self):
        with pytest.raises(DomainViolationError):
            anomaly_eccentric_to_mean(0.5, -0.1)


# ──────────────────────────────────────────────
# Hyperbolic
# ──────────────────────────────────────────────


class TestHyperbolicAnomalies:
    def test_true_to_hyperbolic_reference(self):
        H = anomaly_true_to_hyperbolic(0.5291, 3.0)
        assert jnp.abs(H - 0.3879) < _ANOMALY_LOOSE_TOL

    def test_hyperbolic_to_true_reference(self):
        nu = anomaly_hyperbolic_to_true(0.3879, 3.0)
        assert jnp.abs(nu - 0.5291) < _ANOMALY_LOOSE_TOL

    def test_hyperbolic_to_mean_reference(self):
        M = anomaly_hyperbolic_to_mean(1.6013761449, 2.4)
        assert jnp.abs(M - 235.4 * DEG2RAD) < _ANOMALY_TOL

    def test_mean_to_hyperbolic_reference(self):
        H = anomaly_mean_to_hyperbolic(235.4 * DEG2RAD, 2.4)
        assert jnp.abs(H - 1.6013761449) < _ANOMALY_TOL

    def test_mean_to_hyperbolic_degrees(self):
        H_deg = anomaly_mean_to_hyperbolic(235.4, 2.4, use_degrees=True)
        assert jnp.abs(H_deg * DEG2RAD - 1.6013761449) < _ANOMALY_TOL

    @pytest.mark.parametrize("e", [1.1, 2.0, 10.0])
    @pytest.mark.parametrize("M", [-5.0, -0.2, 0.3, 20.0])
    def test_mean_hyperbolic_roundtrip(self, e, M):
        H = anomaly_mean_to_hyperbolic(M, e)
        assert jnp.abs(anomaly_hyperbolic_to_mean(H, e) - M) < _ANOMALY_TOL * max(1.0, abs(M))

    def test_true_hyperbolic_roundtrip(self):
        for nu in (-1.5, -0.3, 0.0, 0.7, 1.9):
            H = anomaly_true_to_hyperbolic(nu, 2.0)
            assert jnp.abs(anomaly_hyperbolic_to_true(H, 2.0) - nu) < _ANOMALY_TOL

    def test_beyond_asymptote_raises(self):
        """e = 2 has asymptotes at +/-120 degrees."""
        with pytest.raises(DomainViolationError, match="asymptotes"):
            anomaly_true_to_hyperbolic(130.0, 2.0, use_degrees=True)

    def test_elliptic_eccentricity_rejected(self):
        with pytest.raises(UnsupportedRegimeError):
            anomaly_mean_to_hyperbolic(0.5, 0.5)

    def test_parabolic_rejected(self):
        with pytest.raises(UnsupportedRegimeError, match="parabolic"):
            anomaly_true_to_hyperbolic(0.5, 1.0)


# ──────────────────────────────────────────────
# Composite true <-> mean
# ──────────────────────────────────────────────


class TestTrueMean:
    def test_elliptic_roundtrip(self):
        M = anomaly_true_to_mean(_NU_EARTH_DEG, _E_EARTH, use_degrees=True)
        assert jnp.abs(M - 60.0) < _ANOMALY_DEG_TOL
        nu = anomaly_mean_to_true(M, _E_EARTH, use_degrees=True)
        assert jnp.abs(nu - _NU_EARTH_DEG) < _ANOMALY_DEG_TOL

    def test_hyperbolic_dispatch(self):
        M = anomaly_true_to_mean(0.5291, 3.0)
        H = anomaly_true_to_hyperbolic(0.5291, 3.0)
        assert jnp.abs(M - anomaly_hyperbolic_to_mean(H, 3.0)) < 1e-14
        nu = anomaly_mean_to_true(M, 3.0)
        assert jnp.abs(nu - 0.5291) < _ANOMALY_TOL

    def test_parabolic_rejected(self):
        with pytest.raises(UnsupportedRegimeError):
            anomaly_true_to_mean(0.5, 1.0)
        with pytest.raises(UnsupportedRegimeError):
            anomaly_mean_to_true(0.5, 1.0)
