"""Keplerian orbit mechanics.

This sub-module provides functions for:

- **Regime classification**: orbit shape (circular, elliptical,
  parabolic, hyperbolic) and plane geometry (inclined, equatorial,
  retrograde equatorial).
- **Anomaly conversions**: converting between true, eccentric,
  hyperbolic-eccentric and mean anomalies, solving Kepler's equation
  with Newton-Raphson iteration where needed.
- **Time conversions**: mean motion, orbital period, and elapsed time
  <-> mean anomaly for elliptic and hyperbolic orbits.
"""

from .anomalies import (
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
from .keplerian import (
    elapsed_time_to_mean_anomaly_elliptic,
    elapsed_time_to_mean_anomaly_hyperbolic,
    mean_anomaly_to_elapsed_time_elliptic,
    mean_anomaly_to_elapsed_time_hyperbolic,
    mean_motion,
    orbital_period,
    semi_latus_rectum,
)
from .regimes import (
    OrbitGeometry,
    OrbitShape,
    classify_geometry,
    classify_shape,
    validate_gravitational_parameter,
    validate_inclination,
)

__all__ = [
    "OrbitShape",
    "OrbitGeometry",
    "classify_shape",
    "classify_geometry",
    "validate_inclination",
    "validate_gravitational_parameter",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_true",
    "anomaly_hyperbolic_to_mean",
    "anomaly_mean_to_hyperbolic",
    "anomaly_true_to_hyperbolic",
    "anomaly_hyperbolic_to_true",
    "anomaly_true_to_mean",
    "anomaly_mean_to_true",
    "mean_motion",
    "orbital_period",
    "semi_latus_rectum",
    "elapsed_time_to_mean_anomaly_elliptic",
    "mean_anomaly_to_elapsed_time_elliptic",
    "elapsed_time_to_mean_anomaly_hyperbolic",
    "mean_anomaly_to_elapsed_time_hyperbolic",
]
