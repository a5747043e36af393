"""
orbitjax converts two-body orbit states between Cartesian, Keplerian and Unified State Model representations in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    TWO_PI,
    AU,
    GM_EARTH,
    GM_SUN,
    GM_MOON,
    GM_MARS,
)

from .config import set_dtype, get_dtype

from .errors import (
    OrbitConversionError,
    DomainViolationError,
    UnsupportedRegimeError,
    DegenerateGeometryError,
    NonConvergenceError,
)

from .states import (
    CartesianState,
    KeplerianElements,
    USMElements,
)

from .solvers import (
    NewtonRaphsonConfig,
    newton_raphson,
)

from .coordinates import (
    state_koe_to_cartesian,
    state_cartesian_to_koe,
    state_koe_mean_to_cartesian,
    state_cartesian_to_koe_mean,
    state_koe_to_usm,
    state_usm_to_koe,
)

from .orbits import (
    OrbitShape,
    OrbitGeometry,
    classify_shape,
    classify_geometry,
    mean_motion,
    orbital_period,
    semi_latus_rectum,
    anomaly_eccentric_to_mean,
    anomaly_mean_to_eccentric,
    anomaly_true_to_eccentric,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_mean_to_hyperbolic,
    anomaly_true_to_hyperbolic,
    anomaly_hyperbolic_to_true,
    anomaly_true_to_mean,
    anomaly_mean_to_true,
    elapsed_time_to_mean_anomaly_elliptic,
    mean_anomaly_to_elapsed_time_elliptic,
    elapsed_time_to_mean_anomaly_hyperbolic,
    mean_anomaly_to_elapsed_time_hyperbolic,
)
