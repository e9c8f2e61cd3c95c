"""
Cumulative distribution tables and random-digit lookup.

A discrete distribution [(value, probability), ...] becomes a table of
contiguous random-digit ranges partitioning [1, scale]:

    range_start = previous range_end + 1
    range_end   = min(scale, round(cumulative * scale))

A random digit is mapped to the value whose range contains it, with the
draw 0 ("00" for two-digit numbers) standing for `scale`.
"""
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import logging

from ..config import PROBABILITY_TOLERANCE, TWO_DIGIT_SCALE
from ..errors import InvalidDistribution, InvalidParameter, NotMapped
from ..rng import round_half_up
from .models import CumulativeRow, DistributionRow

logger = logging.getLogger(__name__)

DistributionLike = Iterable[Union[DistributionRow, Tuple[float, float]]]


def as_distribution(rows: DistributionLike) -> List[DistributionRow]:
    """Accept DistributionRow objects or plain (value, probability) pairs."""
    normalized = []
    for row in rows:
        if isinstance(row, DistributionRow):
            normalized.append(row)
        else:
            value, probability = row
            normalized.append(DistributionRow(value=value, probability=probability))
    return normalized


def expected_value(rows: DistributionLike) -> float:
    """E[X] = sum(value * probability)."""
    return sum(r.value * r.probability for r in as_distribution(rows))


def build_cumulative_table(rows: DistributionLike, scale: int = TWO_DIGIT_SCALE) -> Tuple[CumulativeRow, ...]:
    """
    Build the cumulative probability table with random-digit ranges.

    Args:
        rows: Distribution as DistributionRow or (value, probability) pairs
        scale: 100 for two-digit random numbers, 10 for one-digit

    Returns:
        Tuple of CumulativeRow, one per input row, in input order

    Raises:
        InvalidDistribution: empty distribution, negative probability or
            probabilities not summing to 1 within
            PROBABILITY_TOLERANCE
        InvalidParameter: scale < 1

    Examples:
        >>> [(r.range_start, r.range_end) for r in build_cumulative_table([(1, .25), (2, .75)])]
        [(1, 25), (26, 100)]
    """
    if scale < 1:
        raise InvalidParameter(f"Scale must be >= 1, got {scale}")

    dist = as_distribution(rows)
    if not dist:
        raise InvalidDistribution("Add at least one row")

    running = 0.0
    cumulative = []
    for row in dist:
        if row.probability < 0:
            raise InvalidDistribution(f"Probability cannot be negative: {row.probability}")
        running += row.probability
        cumulative.append(running)

    if abs(running - 1) > PROBABILITY_TOLERANCE:
        raise InvalidDistribution(f"Probabilities must sum to 1 (got {running:.4f})")

    table = []
    previous_end = 0
    last = len(dist) - 1
    for idx, (row, cum) in enumerate(zip(dist, cumulative)):
        # The last range always closes at scale
        end = scale if idx == last else min(scale, round_half_up(cum * scale))
        table.append(CumulativeRow(
            value=row.value,
            probability=row.probability,
            cumulative=cum,
            range_start=previous_end + 1,
            range_end=end,
        ))
        previous_end = end

    return tuple(table)


def map_digit_to_value(
    digit: int,
    table: Sequence[CumulativeRow],
    scale: Optional[int] = None,
) -> float:
    """
    Map a random digit to a distribution value.

    Args:
        digit: Random number in [0, scale]; 0 is read as `scale`
        table: Cumulative table built for the same scale
        scale: Digit scale of the table; read from the last range end
            when omitted

    Returns:
        Value of the first row whose range contains the digit

    Raises:
        NotMapped: digit outside [0, scale] or not covered by any range
    """
    if scale is None:
        if not table:
            raise NotMapped(digit)
        scale = table[-1].range_end
    if digit < 0 or digit > scale:
        raise NotMapped(digit, scale)

    normalized = scale if digit == 0 else digit
    for row in table:
        if row.contains(normalized):
            return row.value
    raise NotMapped(digit, scale)


def map_digits(
    digits: Sequence[int],
    table: Sequence[CumulativeRow],
    scale: Optional[int] = None,
    label: str = "",
) -> List[float]:
    """Map a whole digit stream, naming the stream in any NotMapped error."""
    values = []
    for digit in digits:
        try:
            values.append(map_digit_to_value(digit, table, scale))
        except NotMapped as e:
            raise NotMapped(digit, e.scale, label=label) from None
    return values
