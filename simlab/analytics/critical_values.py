"""
Critical values for the randomness tests.

- inverse_normal_cdf: Acklam's rational approximation of Φ⁻¹(p), relative
  error below 1.15e-9 over the whole open interval (0, 1). Three regimes:
  lower tail (p < 0.02425), central, upper tail (p > 0.97575).
- z_critical_two_tailed: textbook table for α in {0.10, 0.05, 0.01},
  inverse normal otherwise.
- chi_square_critical_value: exact for 1 and 2 degrees of freedom,
  Wilson-Hilferty cube approximation beyond.

    χ²(df=1) upper α point = z_{1-α/2}²
    χ²(df=2) upper α point = -2 ln α           (exponential with rate 1/2)
    χ²(df)   upper α point ≈ df (1 - 2/(9df) + z_{1-α} √(2/(9df)))³
"""
import math

from ..config import Z_CRITICAL_TABLE
from ..errors import InvalidParameter, NumericDomainError

# Acklam coefficients
_A = (-3.969683028665376e+01, 2.209460984245205e+02, -2.759285104469687e+02,
      1.383577518672690e+02, -3.066479806614716e+01, 2.506628277459239e+00)
_B = (-5.447609879822406e+01, 1.615858368580409e+02, -1.556989798598866e+02,
      6.680131188771972e+01, -1.328068155288572e+01)
_C = (-7.784894002430293e-03, -3.223964580411365e-01, -2.400758277161838e+00,
      -2.549732539343734e+00, 4.374664141464968e+00, 2.938163982698783e+00)
_D = (7.784695709041462e-03, 3.224671290700398e-01, 2.445134137142996e+00,
      3.754408661907416e+00)

P_LOW = 0.02425
P_HIGH = 1 - P_LOW


def _tail(q: float) -> float:
    c, d = _C, _D
    return ((((((c[0] * q + c[1]) * q + c[2]) * q + c[3]) * q + c[4]) * q + c[5]) /
            ((((d[0] * q + d[1]) * q + d[2]) * q + d[3]) * q + 1))


def inverse_normal_cdf(p: float) -> float:
    """
    Standard normal quantile Φ⁻¹(p).

    Raises:
        NumericDomainError: p outside the open interval (0, 1)

    Examples:
        >>> round(inverse_normal_cdf(0.975), 4)
        1.96
        >>> inverse_normal_cdf(0.5)
        0.0
    """
    if not 0 < p < 1:
        raise NumericDomainError(f"Probability must be in (0, 1), got {p}")

    if p < P_LOW:
        return _tail(math.sqrt(-2 * math.log(p)))
    if p > P_HIGH:
        return -_tail(math.sqrt(-2 * math.log(1 - p)))

    a, b = _A, _B
    q = p - 0.5
    r = q * q
    return ((((((a[0] * r + a[1]) * r + a[2]) * r + a[3]) * r + a[4]) * r + a[5]) * q /
            (((((b[0] * r + b[1]) * r + b[2]) * r + b[3]) * r + b[4]) * r + 1))


def _check_alpha(alpha: float) -> None:
    if not 0 < alpha < 1:
        raise InvalidParameter(f"Significance level must be in (0, 1), got {alpha}")


def z_critical_two_tailed(alpha: float) -> float:
    """
    Two-tailed standard normal critical value z_{1-α/2}.

    Examples:
        >>> z_critical_two_tailed(0.05)
        1.96
    """
    _check_alpha(alpha)
    for table_alpha, z in Z_CRITICAL_TABLE.items():
        if math.isclose(alpha, table_alpha):
            return z
    return inverse_normal_cdf(1 - alpha / 2)


def chi_square_critical_value(dof: int, alpha: float) -> float:
    """
    Upper-α critical value of the chi-square distribution.

    Args:
        dof: Degrees of freedom (>= 0); 0 yields 0.0
        alpha: Significance level in (0, 1)

    Examples:
        >>> round(chi_square_critical_value(2, 0.05), 3)
        5.991
        >>> round(chi_square_critical_value(9, 0.05), 1)
        16.9
    """
    _check_alpha(alpha)
    if dof < 0:
        raise InvalidParameter(f"Degrees of freedom cannot be negative, got {dof}")

    if dof == 0:
        return 0.0
    if dof == 1:
        return inverse_normal_cdf(1 - alpha / 2) ** 2
    if dof == 2:
        return -2 * math.log(alpha)

    z = inverse_normal_cdf(1 - alpha)
    h = 2 / (9 * dof)
    return dof * (1 - h + z * math.sqrt(h)) ** 3
