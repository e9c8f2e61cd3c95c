"""
Pseudo-random number generators and value normalization.

Two classroom generators feed the simulators and the randomness tests:

- Mid-square method (von Neumann): square the seed, zero-pad to 2*d
  digits, keep the middle d digits.
- Linear congruential generator: x_{n+1} = (a * x_n + c) mod m

Both are deterministic. The mid-square method degenerates quickly (it
collapses to 0 or falls into short cycles); that behaviour is part of
what the randomness tests are meant to expose and is reproduced as is.

Raw outputs are rescaled to random-digit ranges with normalize_values().
"""
from typing import List, Optional, Sequence
import math

from .config import DEFAULT_MID_SQUARE_DIGITS
from .errors import InvalidParameter


def digit_count(value: int) -> int:
    """Number of decimal digits in a non-negative integer (0 has one digit)."""
    return len(str(abs(int(value))))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Examples:
        >>> round_half_up(37.5)
        38
        >>> round_half_up(37.4)
        37
        >>> round_half_up(-2.5)
        -3
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def mid_square(seed: int, count: int, digits: Optional[int] = None) -> List[int]:
    """
    Generate numbers with the mid-square method.

    Each step squares the current value, left-pads the decimal string
    to 2*digits characters with zeros and keeps `digits` characters
    starting at floor(digits/2). The extracted number is both the
    emitted value and the next seed.

    Args:
        seed: Non-negative starting value
        count: How many values to emit
        digits: Width of the extracted middle. Defaults to
                max(4, digit_count(seed)).

    Returns:
        List of `count` integers in [0, 10**digits)

    Raises:
        InvalidParameter: negative seed or count, or digits < 1

    Examples:
        >>> mid_square(1234, 3)
        [5227, 3215, 3362]
    """
    if seed < 0:
        raise InvalidParameter(f"Seed must be non-negative, got {seed}")
    if count < 0:
        raise InvalidParameter(f"Count must be non-negative, got {count}")
    if digits is None:
        digits = max(DEFAULT_MID_SQUARE_DIGITS, digit_count(seed))
    if digits < 1:
        raise InvalidParameter(f"Digits must be >= 1, got {digits}")

    start = digits // 2
    numbers = []
    current = seed
    for _ in range(count):
        squared = str(current * current).zfill(digits * 2)
        current = int(squared[start:start + digits])
        numbers.append(current)
    return numbers


def lcg(seed: int, multiplier: int, increment: int, modulus: int, count: int) -> List[int]:
    """
    Linear congruential generator.

    Emits x_1..x_count of x_{n+1} = (a * x_n + c) mod m; the seed x_0
    itself is not emitted.

    Args:
        seed: z0
        multiplier: a
        increment: c
        modulus: m (> 0)
        count: How many values to emit

    Returns:
        List of `count` integers in [0, m)

    Raises:
        InvalidParameter: m <= 0 or count < 0
    """
    if modulus <= 0:
        raise InvalidParameter(f"Modulus m must be > 0, got {modulus}")
    if count < 0:
        raise InvalidParameter(f"Count must be non-negative, got {count}")

    numbers = []
    current = seed
    for _ in range(count):
        current = (multiplier * current + increment) % modulus
        numbers.append(current)
    return numbers


def normalize_values(values: Sequence[int], scale: int, source_max: float) -> List[int]:
    """
    Rescale raw generator output to [0, scale].

    Each value becomes round_half_up(value / source_max * scale). Use
    source_max = m for the LCG and 10**digits for the mid-square method.

    Args:
        values: Raw generator output
        scale: Target scale (100 for two-digit numbers, 10 for one-digit)
        source_max: Exclusive upper bound of the generator

    Raises:
        InvalidParameter: scale or source_max not positive
    """
    if scale <= 0:
        raise InvalidParameter(f"Scale must be > 0, got {scale}")
    if source_max <= 0:
        raise InvalidParameter(f"Source maximum must be > 0, got {source_max}")
    return [round_half_up(v / source_max * scale) for v in values]


def to_unit_interval(values: Sequence[int], source_max: float) -> List[float]:
    """Map raw generator output to [0, 1) for the randomness tests."""
    if source_max <= 0:
        raise InvalidParameter(f"Source maximum must be > 0, got {source_max}")
    return [v / source_max for v in values]
