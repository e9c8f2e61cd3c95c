"""
Statistical tests for sequences of random numbers in [0, 1].

- chi_square_test: frequency (uniformity) test over k equal intervals
- autocorrelation_test: lag-k sample autocorrelation for every lag
  1..N-1, each converted to a Z statistic with standard error 1/√N
- lag_dependency_test: single-lag textbook test on overlapping pairs
  (Banks et al., Discrete-Event System Simulation)

All tests are deterministic and return immutable result objects.
"""
from dataclasses import dataclass
from typing import Sequence, Tuple
import logging
import math

import numpy as np

from ..config import DEFAULT_CHI_SQUARE_INTERVALS, DEFAULT_SIGNIFICANCE
from ..domain.validation import require, validate_count, validate_probability, validate_unit_interval
from ..errors import InvalidParameter
from .critical_values import chi_square_critical_value, z_critical_two_tailed

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IntervalCount:
    """Observed vs expected frequency for one interval [start, end)."""
    start: float
    end: float
    oi: int
    ei: float
    chi_part: float


@dataclass(frozen=True)
class ChiSquareResult:
    intervals: Tuple[IntervalCount, ...]
    chi_stat: float
    critical_value: float
    dof: int
    alpha: float
    n: int
    is_uniform: bool


@dataclass(frozen=True)
class LagCorrelation:
    lag: int
    correlation: float
    z_stat: float
    significant: bool


@dataclass(frozen=True)
class AutocorrelationResult:
    """
    Autocorrelation over every lag.

    Attributes:
        lags: One LagCorrelation per lag 1..N-1
        mean, variance: Sample statistics (variance with divisor N-1)
        standard_error: 1/√N
        critical_value: Two-tailed z critical value for alpha
        average_abs_correlation: Mean of |r_k| across all lags
        significant_lags: Lags with |Z_k| > critical value
        is_independent: True when no lag is significant
    """
    lags: Tuple[LagCorrelation, ...]
    mean: float
    variance: float
    standard_error: float
    critical_value: float
    average_abs_correlation: float
    significant_lags: Tuple[int, ...]
    alpha: float
    n: int
    is_independent: bool


@dataclass(frozen=True)
class LagDependencyResult:
    pairs: Tuple[Tuple[float, float], ...]
    lag: int
    correlation: float   # rho_hat
    sigma: float         # standard deviation of rho_hat
    z_stat: float
    critical_value: float
    alpha: float
    n: int
    is_independent: bool


def _as_array(numbers: Sequence[float]) -> np.ndarray:
    arr = np.asarray(list(numbers), dtype=float)
    require(validate_unit_interval(arr.tolist()))
    return arr


# ---------------------------------------------------------------------------
# Chi-square uniformity
# ---------------------------------------------------------------------------

def chi_square_test(
    numbers: Sequence[float],
    k: int = DEFAULT_CHI_SQUARE_INTERVALS,
    alpha: float = DEFAULT_SIGNIFICANCE,
) -> ChiSquareResult:
    """
    Chi-square frequency test for uniformity on [0, 1].

    Intervals are [i/k, (i+1)/k); the last one is closed so that a draw of
    exactly 1.0 is counted.

    Args:
        numbers: Sequence in [0, 1] (at least one)
        k: Number of equal intervals (>= 1)
        alpha: Significance level in (0, 1)

    Returns:
        ChiSquareResult; is_uniform iff chi_stat < critical value
        (always accepted with a single interval, which has no degrees of
        freedom)

    Raises:
        InvalidParameter: empty input, number outside [0, 1], k < 1 or
            alpha outside (0, 1)
    """
    require(validate_count(k, "Number of intervals"))
    require(validate_probability(alpha))
    arr = _as_array(numbers)
    n = int(arr.size)
    if n == 0:
        raise InvalidParameter("At least one number is required")

    ei = n / k
    intervals = []
    chi_stat = 0.0
    for i in range(k):
        start = i / k
        end = (i + 1) / k
        if i == k - 1:
            mask = (arr >= start) & (arr <= end)
        else:
            mask = (arr >= start) & (arr < end)
        oi = int(np.count_nonzero(mask))
        chi_part = (oi - ei) ** 2 / ei
        chi_stat += chi_part
        intervals.append(IntervalCount(start=start, end=end, oi=oi, ei=ei, chi_part=chi_part))

    dof = k - 1
    critical_value = chi_square_critical_value(dof, alpha)
    is_uniform = True if dof == 0 else chi_stat < critical_value

    logger.debug(
        f"Chi-square: N={n}, k={k}, stat={chi_stat:.4f}, "
        f"critical={critical_value:.4f}, uniform={is_uniform}"
    )

    return ChiSquareResult(
        intervals=tuple(intervals),
        chi_stat=chi_stat,
        critical_value=critical_value,
        dof=dof,
        alpha=alpha,
        n=n,
        is_uniform=is_uniform,
    )


# ---------------------------------------------------------------------------
# Autocorrelation over all lags
# ---------------------------------------------------------------------------

def autocorrelation_test(numbers: Sequence[float], alpha: float = DEFAULT_SIGNIFICANCE) -> AutocorrelationResult:
    """
    Autocorrelation independence test over every lag k = 1..N-1.

        r_k = (1/(N-k)) Σ (x_i - mean)(x_{i+k} - mean) / variance
        Z_k = r_k / (1/√N)

    Lag k is significant iff |Z_k| > z_{1-α/2}. A constant sequence has
    zero variance; every r_k is then 0.

    Raises:
        InvalidParameter: fewer than 2 numbers, number outside [0, 1] or
            alpha outside (0, 1)
    """
    require(validate_probability(alpha))
    arr = _as_array(numbers)
    n = int(arr.size)
    if n < 2:
        raise InvalidParameter(f"Autocorrelation needs at least 2 numbers, got {n}")

    if np.all(arr == arr[0]):
        mean = float(arr[0])
        variance = 0.0
    else:
        mean = float(np.mean(arr))
        variance = float(np.var(arr, ddof=1))

    deviations = arr - mean
    standard_error = 1 / math.sqrt(n)
    critical_value = z_critical_two_tailed(alpha)

    lags = []
    for lag in range(1, n):
        if variance == 0.0:
            r = 0.0
        else:
            covariance = float(np.dot(deviations[:n - lag], deviations[lag:])) / (n - lag)
            r = covariance / variance
        z = r / standard_error
        lags.append(LagCorrelation(
            lag=lag,
            correlation=r,
            z_stat=z,
            significant=abs(z) > critical_value,
        ))

    significant_lags = tuple(l.lag for l in lags if l.significant)
    average_abs = sum(abs(l.correlation) for l in lags) / len(lags)
    is_independent = not significant_lags

    logger.debug(
        f"Autocorrelation: N={n}, significant lags={list(significant_lags)}, "
        f"independent={is_independent}"
    )

    return AutocorrelationResult(
        lags=tuple(lags),
        mean=mean,
        variance=variance,
        standard_error=standard_error,
        critical_value=critical_value,
        average_abs_correlation=average_abs,
        significant_lags=significant_lags,
        alpha=alpha,
        n=n,
        is_independent=is_independent,
    )


# ---------------------------------------------------------------------------
# Single-lag dependency test (Banks)
# ---------------------------------------------------------------------------

def lag_dependency_test(
    numbers: Sequence[float],
    lag: int = 1,
    alpha: float = DEFAULT_SIGNIFICANCE,
) -> LagDependencyResult:
    """
    Textbook autocorrelation test for one lag on overlapping pairs.

        ρ̂ = Σ x_j x_{j+lag} / M - 0.25           (M = N - lag pairs)
        σ = √(13M + 7) / (12(M + 1))
        Z = ρ̂ / σ

    Independent iff |Z| <= z_{1-α/2}.

    Raises:
        InvalidParameter: lag < 1, lag >= N, number outside [0, 1] or
            alpha outside (0, 1)
    """
    require(validate_count(lag, "Lag"))
    require(validate_probability(alpha))
    arr = _as_array(numbers)
    n = int(arr.size)
    if lag >= n:
        raise InvalidParameter(f"Lag {lag} leaves no pairs in a sequence of {n} numbers")

    x = arr[:n - lag]
    y = arr[lag:]
    m = n - lag
    rho = float(np.dot(x, y)) / m - 0.25
    sigma = math.sqrt(13 * m + 7) / (12 * (m + 1))
    z = rho / sigma
    critical_value = z_critical_two_tailed(alpha)

    return LagDependencyResult(
        pairs=tuple(zip(x.tolist(), y.tolist())),
        lag=lag,
        correlation=rho,
        sigma=sigma,
        z_stat=z,
        critical_value=critical_value,
        alpha=alpha,
        n=n,
        is_independent=abs(z) <= critical_value,
    )
