"""
Two-server queue simulation (Able/Baker style).

Each customer draws ONE service digit which is looked up in both service
tables; the server that actually takes the customer determines which of
the two mapped times applies. Server selection per customer:

1. both servers idle at arrival -> priority server
2. exactly one idle             -> that server
3. both busy                    -> the one that frees first (tie: server 1)

Idle time accrues only on the server selected, for the gap between its
previous end and the new start.
"""
from typing import List, Optional, Sequence
import logging

from ..config import DEFAULT_PRIORITY_SERVER, TWO_DIGIT_SCALE, VALID_SERVERS
from ..domain.distribution import DistributionLike, build_cumulative_table, map_digits
from ..domain.models import MultiServerResult, MultiServerRow, MultiServerSummary
from ..domain.validation import require, validate_count
from ..errors import InvalidParameter
from .single_server import check_digit_supply

logger = logging.getLogger(__name__)


def select_server(arrival: float, server1_end: float, server2_end: float, priority_server: int) -> int:
    """
    Pick the server for a customer arriving at `arrival`.

    Examples:
        >>> select_server(5, 0, 0, priority_server=2)
        2
        >>> select_server(5, 7, 3, priority_server=1)
        2
        >>> select_server(5, 8, 8, priority_server=2)
        1
    """
    server1_idle = arrival >= server1_end
    server2_idle = arrival >= server2_end

    if server1_idle and server2_idle:
        return priority_server
    if server1_idle:
        return 1
    if server2_idle:
        return 2
    return 1 if server1_end <= server2_end else 2


def _only(server: int, which: int, value: float) -> Optional[float]:
    return value if server == which else None


def summarize(rows: Sequence[MultiServerRow]) -> MultiServerSummary:
    n = len(rows)
    used1 = [r for r in rows if r.server_used == 1]
    used2 = [r for r in rows if r.server_used == 2]

    total_service1 = sum(r.service1 for r in used1)
    total_service2 = sum(r.service2 for r in used2)
    total_idle1 = sum(max(r.idle1, 0) for r in rows)
    total_idle2 = sum(max(r.idle2, 0) for r in rows)
    total_waiting = sum(r.waiting for r in rows)

    last_end1 = max((r.service_end1 for r in used1), default=0)
    last_end2 = max((r.service_end2 for r in used2), default=0)
    last_end = max(last_end1, last_end2)

    def percent(part: float) -> float:
        return (part / last_end) * 100 if last_end else 0.0

    return MultiServerSummary(
        avg_waiting=total_waiting / n,
        total_waiting=total_waiting,
        avg_service1=total_service1 / len(used1) if used1 else 0.0,
        avg_service2=total_service2 / len(used2) if used2 else 0.0,
        idle_percent1=percent(total_idle1),
        idle_percent2=percent(total_idle2),
        utilization1=percent(total_service1),
        utilization2=percent(total_service2),
        customers_server1=len(used1),
        customers_server2=len(used2),
        last_service_end=last_end,
    )


def run_multi_server(
    interarrival_distribution: DistributionLike,
    service_distribution1: DistributionLike,
    service_distribution2: DistributionLike,
    arrival_digits: Sequence[int],
    service_digits: Sequence[int],
    count: int,
    priority_server: int = DEFAULT_PRIORITY_SERVER,
) -> MultiServerResult:
    """
    Simulate `count` customers through two parallel servers.

    Args:
        interarrival_distribution: Time between arrivals
        service_distribution1: Service time of server 1
        service_distribution2: Service time of server 2
        arrival_digits: Two-digit random numbers for customers 2..count
        service_digits: One two-digit number per customer, shared by both tables
        count: Number of customers (>= 1)
        priority_server: Server taking the customer when both are idle (1 or 2)

    Returns:
        MultiServerResult

    Raises:
        InvalidParameter: count < 1 or priority_server not 1/2
        InvalidDistribution, InsufficientRandomDigits, NotMapped
    """
    require(validate_count(count, "Number of customers"))
    if priority_server not in VALID_SERVERS or isinstance(priority_server, bool):
        raise InvalidParameter(f"Priority server must be 1 or 2, got {priority_server}")

    arrival_table = build_cumulative_table(interarrival_distribution, TWO_DIGIT_SCALE)
    service_table1 = build_cumulative_table(service_distribution1, TWO_DIGIT_SCALE)
    service_table2 = build_cumulative_table(service_distribution2, TWO_DIGIT_SCALE)

    check_digit_supply(arrival_digits, service_digits, count)
    arrival_used = list(arrival_digits[:count - 1])
    service_used = list(service_digits[:count])
    interarrivals = map_digits(arrival_used, arrival_table, TWO_DIGIT_SCALE, label="arrival")
    services1 = map_digits(service_used, service_table1, TWO_DIGIT_SCALE, label="server 1")
    services2 = map_digits(service_used, service_table2, TWO_DIGIT_SCALE, label="server 2")

    logger.debug(f"Two-server run: {count} customers, priority server {priority_server}")

    rows: List[MultiServerRow] = []
    server_end = {1: 0, 2: 0}
    arrival = 0
    for i in range(count):
        interarrival = 0 if i == 0 else interarrivals[i - 1]
        arrival = arrival + interarrival
        candidate = {1: services1[i], 2: services2[i]}

        server = select_server(arrival, server_end[1], server_end[2], priority_server)
        previous_end = server_end[server]
        service_start = max(arrival, previous_end)
        service = candidate[server]
        service_end = service_start + service
        waiting = service_start - arrival
        idle = {1: 0, 2: 0}
        idle[server] = max(0, arrival - previous_end)
        server_end[server] = service_end

        rows.append(MultiServerRow(
            customer=i + 1,
            arrival_digit=0 if i == 0 else arrival_used[i - 1],
            interarrival=interarrival,
            arrival=arrival,
            service_digit=service_used[i],
            server_used=server,
            service1=_only(server, 1, candidate[1]),
            service_start1=_only(server, 1, service_start),
            service_end1=_only(server, 1, service_end),
            service2=_only(server, 2, candidate[2]),
            service_start2=_only(server, 2, service_start),
            service_end2=_only(server, 2, service_end),
            waiting=waiting,
            idle1=idle[1],
            idle2=idle[2],
            time_in_system=waiting + service,
        ))

    summary = summarize(rows)
    logger.debug(
        f"Two-server done: server 1 served {summary.customers_server1}, "
        f"server 2 served {summary.customers_server2}"
    )

    return MultiServerResult(
        arrival_table=arrival_table,
        service_table1=service_table1,
        service_table2=service_table2,
        priority_server=priority_server,
        rows=tuple(rows),
        summary=summary,
    )
