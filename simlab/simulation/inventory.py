"""
Periodic-review inventory simulation with backlog and random lead times.

Policy (review every `days_per_cycle` days, order up to `inventory_limit`):

    Day loop, strictly sequential:
        1. receive pending orders due today
        2. pay accumulated shortage (backlog) out of on-hand stock
        3. draw demand, satisfy from stock, add the unmet part to backlog
        4. last day of cycle: Q = limit - ending_inventory + backlog
           if Q > 0: draw lead time L (one-digit table), order arrives
           on absolute day today + L + 1

Reorder point = ceil(E[demand] * E[lead time]) + 1; the order-up-to
level must exceed it.

Lead-time digits are consumed one per placed order. Running out of them
does not abort the run: further reorders are skipped and a warning is
logged.

Author: SimLab Team
"""
from typing import List, Optional, Sequence, Tuple
import logging
import math

from ..config import ONE_DIGIT_SCALE, TWO_DIGIT_SCALE
from ..domain.distribution import (
    DistributionLike,
    as_distribution,
    build_cumulative_table,
    expected_value,
    map_digits,
)
from ..domain.models import InventoryResult, InventoryRow, InventorySummary, PendingOrder
from ..domain.validation import require, validate_count
from ..errors import InsufficientRandomDigits, InvalidParameter

logger = logging.getLogger(__name__)


def reorder_point(demand_distribution: DistributionLike, lead_time_distribution: DistributionLike) -> int:
    """
    Derived reorder point: ceil(E[demand] * E[lead time]) + 1.

    Examples:
        >>> reorder_point([(0, .1), (1, .25), (2, .35), (3, .21), (4, .09)],
        ...               [(1, .6), (2, .3), (3, .1)])
        4
    """
    return math.ceil(expected_value(demand_distribution) * expected_value(lead_time_distribution)) + 1


def to_cycle_day(absolute_day: int, days_per_cycle: int) -> Tuple[int, int]:
    """
    Convert a 1-based absolute day to (cycle, day) coordinates.

    Examples:
        >>> to_cycle_day(5, 5)
        (1, 5)
        >>> to_cycle_day(8, 5)
        (2, 3)
    """
    cycle = math.ceil(absolute_day / days_per_cycle)
    day = absolute_day % days_per_cycle
    if day == 0:
        day = days_per_cycle
    return cycle, day


def _days_until_next_arrival(pending: List[PendingOrder], cycle: int, day: int) -> Optional[int]:
    this_cycle = [o.arrival_day for o in pending if o.arrival_cycle == cycle]
    if not this_cycle:
        return None
    return max(0, min(this_cycle) - day - 1)


def summarize(rows: Sequence[InventoryRow]) -> InventorySummary:
    total_days = len(rows)
    shortage_days = sum(1 for r in rows if r.shortage > 0)
    return InventorySummary(
        avg_ending_inventory=sum(r.ending_inventory for r in rows) / total_days,
        shortage_days=shortage_days,
        shortage_probability=shortage_days / total_days,
        total_days=total_days,
        orders_placed=sum(1 for r in rows if r.order_placed),
    )


def run_inventory(
    demand_distribution: DistributionLike,
    lead_time_distribution: DistributionLike,
    demand_digits: Sequence[int],
    lead_time_digits: Sequence[int],
    cycles: int,
    days_per_cycle: int,
    initial_inventory: int,
    inventory_limit: int,
    initial_order_quantity: int = 0,
    initial_order_lead_time: int = 0,
) -> InventoryResult:
    """
    Simulate `cycles * days_per_cycle` days of a periodic-review system.

    Args:
        demand_distribution: Daily demand, two-digit random numbers (scale 100)
        lead_time_distribution: Lead time in days, one-digit random numbers (scale 10)
        demand_digits: One digit per simulated day
        lead_time_digits: Consumed one per placed order
        cycles: Number of review cycles (>= 1)
        days_per_cycle: Review period in days (>= 1)
        initial_inventory: On hand before day 1 (>= 0)
        inventory_limit: Order-up-to level M (> reorder point)
        initial_order_quantity: Stock already in transit before day 1 (>= 0)
        initial_order_lead_time: Days until that stock arrives (>= 0)

    Returns:
        InventoryResult

    Raises:
        InvalidParameter: invalid horizon, non-integer or negative stock levels,
            invalid initial order
        InvalidDistribution: a distribution fails table validation
        InsufficientRandomDigits: fewer demand digits than simulated days
        NotMapped: a demand or lead-time digit outside its scale
    """
    require(validate_count(cycles, "Number of cycles"))
    require(validate_count(days_per_cycle, "Days per cycle"))
    require(validate_count(initial_inventory, "Initial inventory", min_val=0))
    require(validate_count(inventory_limit, "Inventory limit", min_val=0))

    demand_rows = as_distribution(demand_distribution)
    lead_time_rows = as_distribution(lead_time_distribution)
    demand_table = build_cumulative_table(demand_rows, TWO_DIGIT_SCALE)
    lead_time_table = build_cumulative_table(lead_time_rows, ONE_DIGIT_SCALE)

    rop = reorder_point(demand_rows, lead_time_rows)
    if inventory_limit <= rop:
        raise InvalidParameter(
            f"Inventory limit ({inventory_limit}) must be greater than reorder point ({rop})"
        )
    require(validate_count(initial_order_quantity, "Initial order quantity", min_val=0))
    require(validate_count(initial_order_lead_time, "Initial order lead time", min_val=0))

    total_days = cycles * days_per_cycle
    if len(demand_digits) < total_days:
        raise InsufficientRandomDigits("demand", total_days, len(demand_digits))
    demand_used = list(demand_digits[:total_days])
    demands = map_digits(demand_used, demand_table, TWO_DIGIT_SCALE, label="demand")
    lead_times = map_digits(list(lead_time_digits), lead_time_table, ONE_DIGIT_SCALE, label="lead time")

    logger.debug(
        f"Inventory run: {cycles} cycles x {days_per_cycle} days, "
        f"limit {inventory_limit}, reorder point {rop}"
    )

    pending: List[PendingOrder] = []
    if initial_order_quantity > 0:
        arrival_cycle, arrival_day = to_cycle_day(initial_order_lead_time + 1, days_per_cycle)
        pending.append(PendingOrder(initial_order_quantity, arrival_cycle, arrival_day))

    rows: List[InventoryRow] = []
    inventory = initial_inventory
    shortage = 0
    lead_index = 0
    exhausted_logged = False

    for cycle in range(1, cycles + 1):
        for day in range(1, days_per_cycle + 1):
            arriving = [o for o in pending if o.arrives_on(cycle, day)]
            pending = [o for o in pending if not o.arrives_on(cycle, day)]
            inventory += sum(o.quantity for o in arriving)
            beginning_inventory = inventory

            days_until_arrival = _days_until_next_arrival(pending, cycle, day)

            # Backlog is served before today's demand
            if shortage > 0:
                paid = min(inventory, shortage)
                inventory -= paid
                shortage -= paid

            absolute_day = (cycle - 1) * days_per_cycle + day
            demand = demands[absolute_day - 1]
            if inventory >= demand:
                ending_inventory = inventory - demand
            else:
                shortage += demand - inventory
                ending_inventory = 0

            order_quantity = None
            lead_time_digit = None
            order_placed = False
            if day == days_per_cycle:
                order_quantity = inventory_limit - ending_inventory + shortage
                if order_quantity > 0:
                    if lead_index < len(lead_times):
                        lead_time_digit = lead_time_digits[lead_index]
                        lead_time = lead_times[lead_index]
                        lead_index += 1
                        arrival_cycle, arrival_day = to_cycle_day(
                            absolute_day + int(lead_time) + 1, days_per_cycle
                        )
                        pending.append(PendingOrder(order_quantity, arrival_cycle, arrival_day))
                        days_until_arrival = int(lead_time)
                        order_placed = True
                    elif not exhausted_logged:
                        logger.warning(
                            f"Lead-time digits exhausted at cycle {cycle}; "
                            f"no further orders will be placed"
                        )
                        exhausted_logged = True

            rows.append(InventoryRow(
                cycle=cycle,
                day=day,
                beginning_inventory=beginning_inventory,
                demand_digit=demand_used[absolute_day - 1],
                demand=demand,
                ending_inventory=ending_inventory,
                shortage=shortage,
                order_quantity=order_quantity,
                lead_time_digit=lead_time_digit,
                days_until_arrival=days_until_arrival,
                order_placed=order_placed,
            ))
            inventory = ending_inventory

    summary = summarize(rows)
    logger.debug(
        f"Inventory done: {summary.shortage_days} shortage days, "
        f"avg ending inventory {summary.avg_ending_inventory:.2f}"
    )

    return InventoryResult(
        demand_table=demand_table,
        lead_time_table=lead_time_table,
        reorder_point=rop,
        rows=tuple(rows),
        summary=summary,
    )
