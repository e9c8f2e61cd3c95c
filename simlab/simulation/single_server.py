"""
Single-server queue simulation driven by random-digit tables.

Per customer i (strictly sequential, each row depends on the previous):

    interarrival_i = 0 for the first customer, else map(arrival digit)
    arrival_i      = arrival_{i-1} + interarrival_i
    service_start  = max(arrival_i, service_end_{i-1})
    waiting_i      = service_start - arrival_i
    idle_i         = service_start - service_end_{i-1}
    service_end    = service_start + service_i
"""
from typing import Sequence
import logging

from ..config import TWO_DIGIT_SCALE
from ..domain.distribution import DistributionLike, build_cumulative_table, map_digits
from ..domain.models import SingleServerResult, SingleServerRow, SingleServerSummary
from ..domain.validation import require, validate_count
from ..errors import InsufficientRandomDigits

logger = logging.getLogger(__name__)


def check_digit_supply(arrival_digits: Sequence[int], service_digits: Sequence[int], count: int) -> None:
    """count-1 arrival digits (the first customer draws none) and count service digits."""
    if len(arrival_digits) < count - 1:
        raise InsufficientRandomDigits("arrival", count - 1, len(arrival_digits))
    if len(service_digits) < count:
        raise InsufficientRandomDigits("service", count, len(service_digits))


def summarize(rows: Sequence[SingleServerRow]) -> SingleServerSummary:
    n = len(rows)
    total_waiting = sum(r.waiting for r in rows)
    total_service = sum(r.service for r in rows)
    total_time_in_system = sum(r.time_in_system for r in rows)
    last_end = rows[-1].service_end

    # Aggregate idle counts non-negative gaps only; rows keep the raw value
    idle_for_percent = sum(max(r.idle, 0) for r in rows)

    return SingleServerSummary(
        avg_waiting=total_waiting / n,
        avg_service=total_service / n,
        avg_time_in_system=total_time_in_system / n,
        idle_percent=(idle_for_percent / last_end) * 100 if last_end else 0.0,
        utilization=(total_service / last_end) * 100 if last_end else 0.0,
        total_interarrival=sum(r.interarrival for r in rows),
        total_service=total_service,
        total_waiting=total_waiting,
        total_idle=sum(r.idle for r in rows),
        total_time_in_system=total_time_in_system,
        last_service_end=last_end,
    )


def run_single_server(
    interarrival_distribution: DistributionLike,
    service_distribution: DistributionLike,
    arrival_digits: Sequence[int],
    service_digits: Sequence[int],
    count: int,
) -> SingleServerResult:
    """
    Simulate `count` customers through one server.

    Args:
        interarrival_distribution: (value, probability) rows for time between arrivals
        service_distribution: (value, probability) rows for service time
        arrival_digits: Two-digit random numbers for customers 2..count
        service_digits: Two-digit random numbers for customers 1..count
        count: Number of customers (>= 1)

    Returns:
        SingleServerResult with both tables, the ledger and the summary

    Raises:
        InvalidParameter: count < 1
        InvalidDistribution: a distribution fails table validation
        InsufficientRandomDigits: too few arrival or service digits
        NotMapped: a digit outside 0-100
    """
    require(validate_count(count, "Number of customers"))

    arrival_table = build_cumulative_table(interarrival_distribution, TWO_DIGIT_SCALE)
    service_table = build_cumulative_table(service_distribution, TWO_DIGIT_SCALE)

    check_digit_supply(arrival_digits, service_digits, count)
    arrival_used = list(arrival_digits[:count - 1])
    service_used = list(service_digits[:count])
    interarrivals = map_digits(arrival_used, arrival_table, TWO_DIGIT_SCALE, label="arrival")
    services = map_digits(service_used, service_table, TWO_DIGIT_SCALE, label="service")

    logger.debug(f"Single-server run: {count} customers")

    rows = []
    arrival = 0
    previous_end = 0
    for i in range(count):
        interarrival = 0 if i == 0 else interarrivals[i - 1]
        arrival = arrival + interarrival
        service = services[i]

        service_start = max(arrival, previous_end)
        waiting = service_start - arrival
        idle = service_start - previous_end
        service_end = service_start + service

        rows.append(SingleServerRow(
            customer=i + 1,
            arrival_digit=0 if i == 0 else arrival_used[i - 1],
            interarrival=interarrival,
            arrival=arrival,
            service_digit=service_used[i],
            service=service,
            service_start=service_start,
            service_end=service_end,
            waiting=waiting,
            idle=idle,
            time_in_system=waiting + service,
        ))
        previous_end = service_end

    summary = summarize(rows)
    logger.debug(
        f"Single-server done: avg waiting {summary.avg_waiting:.3f}, "
        f"utilization {summary.utilization:.1f}%"
    )

    return SingleServerResult(
        arrival_table=arrival_table,
        service_table=service_table,
        rows=tuple(rows),
        summary=summary,
    )
