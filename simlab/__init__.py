"""SimLab: random-digit queue and inventory simulation with randomness tests."""

from .errors import (
    SimulationError,
    InvalidParameter,
    InvalidDistribution,
    InsufficientRandomDigits,
    NotMapped,
    NumericDomainError,
)
from .rng import mid_square, lcg, normalize_values
from .domain.distribution import build_cumulative_table, map_digit_to_value
from .simulation import run_single_server, run_multi_server, run_inventory, mm1_measures
from .analytics import chi_square_test, autocorrelation_test, lag_dependency_test

__version__ = "1.0.0"

__all__ = [
    "SimulationError",
    "InvalidParameter",
    "InvalidDistribution",
    "InsufficientRandomDigits",
    "NotMapped",
    "NumericDomainError",
    "mid_square",
    "lcg",
    "normalize_values",
    "build_cumulative_table",
    "map_digit_to_value",
    "run_single_server",
    "run_multi_server",
    "run_inventory",
    "mm1_measures",
    "chi_square_test",
    "autocorrelation_test",
    "lag_dependency_test",
]
