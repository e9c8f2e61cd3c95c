"""Analytics package: randomness tests and critical values."""

from .critical_values import (
    inverse_normal_cdf,
    z_critical_two_tailed,
    chi_square_critical_value,
)
from .randomness import (
    chi_square_test,
    autocorrelation_test,
    lag_dependency_test,
    ChiSquareResult,
    AutocorrelationResult,
    LagDependencyResult,
)

__all__ = [
    "inverse_normal_cdf",
    "z_critical_two_tailed",
    "chi_square_critical_value",
    "chi_square_test",
    "autocorrelation_test",
    "lag_dependency_test",
    "ChiSquareResult",
    "AutocorrelationResult",
    "LagDependencyResult",
]
