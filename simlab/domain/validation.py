"""
Centralized validation rules for simulation inputs.

Validators return (is_valid, error_message) so the presentation layer can
show the message directly; require() turns a failed check into an
InvalidParameter for the simulators.
"""
from typing import Iterable, Optional, Tuple

from ..errors import InvalidParameter


def validate_count(count: int, name: str = "count", min_val: int = 1) -> Tuple[bool, str]:
    """
    Validate an integer run length (customers, cycles, days...).

    Args:
        count: Value to validate
        name: Parameter name used in the message
        min_val: Minimum allowed value (inclusive)

    Returns:
        (is_valid, error_message)
    """
    if isinstance(count, bool) or not isinstance(count, int):
        return False, f"{name} must be an integer"

    if count < min_val:
        return False, f"{name} must be at least {min_val}"

    return True, ""


def validate_probability(alpha: float, name: str = "significance level") -> Tuple[bool, str]:
    """
    Validate a probability in the open interval (0, 1).

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(alpha, (int, float)) or isinstance(alpha, bool):
        return False, f"{name} must be a number"
    if not 0 < alpha < 1:
        return False, f"{name} must be strictly between 0 and 1, got {alpha}"
    return True, ""


def validate_unit_interval(numbers: Iterable[float]) -> Tuple[bool, str]:
    """Every number must lie in [0, 1]."""
    for idx, x in enumerate(numbers):
        if not (0.0 <= x <= 1.0):
            return False, f"number at position {idx + 1} ({x}) is outside [0, 1]"
    return True, ""


def require(check: Tuple[bool, str], context: Optional[str] = None) -> None:
    """
    Raise InvalidParameter when a validator failed.

    Args:
        check: (is_valid, error_message) from a validate_* function
        context: Optional prefix for the message
    """
    is_valid, message = check
    if not is_valid:
        if context:
            message = f"{context}: {message}"
        raise InvalidParameter(message)
