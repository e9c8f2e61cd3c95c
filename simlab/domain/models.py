"""
Domain models for simlab.

Pure data classes + value objects. No I/O, no side effects.
Every result is created fresh by one simulation or test run and is
never mutated afterwards.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple


class _Records:
    """Mixin: flatten a ledger into plain dicts for the presentation layer."""

    def as_records(self) -> List[Dict[str, Any]]:
        return [asdict(row) for row in self.rows]


# ---------------------------------------------------------------------------
# Distributions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DistributionRow:
    """One (value, probability) pair of a discrete distribution."""
    value: float
    probability: float


@dataclass(frozen=True)
class CumulativeRow:
    """
    Distribution row with its cumulative probability and digit range.

    Attributes:
        value: Outcome (time, demand, lead time...)
        probability: P(value)
        cumulative: Running sum of probabilities up to this row
        range_start: First random digit assigned to this row (inclusive)
        range_end: Last random digit assigned to this row (inclusive)
    """
    value: float
    probability: float
    cumulative: float
    range_start: int
    range_end: int

    def contains(self, digit: int) -> bool:
        return self.range_start <= digit <= self.range_end


# ---------------------------------------------------------------------------
# Single-server queue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SingleServerRow:
    """One customer of the single-server ledger."""
    customer: int
    arrival_digit: int          # 0 for the first customer (no draw)
    interarrival: float
    arrival: float
    service_digit: int
    service: float
    service_start: float
    service_end: float
    waiting: float
    idle: float                 # raw value, kept even if negative
    time_in_system: float


@dataclass(frozen=True)
class SingleServerSummary:
    """Aggregate performance of a single-server run."""
    avg_waiting: float
    avg_service: float
    avg_time_in_system: float
    idle_percent: float
    utilization: float
    total_interarrival: float
    total_service: float
    total_waiting: float
    total_idle: float
    total_time_in_system: float
    last_service_end: float


@dataclass(frozen=True)
class SingleServerResult(_Records):
    arrival_table: Tuple[CumulativeRow, ...]
    service_table: Tuple[CumulativeRow, ...]
    rows: Tuple[SingleServerRow, ...]
    summary: SingleServerSummary


# ---------------------------------------------------------------------------
# Two-server queue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MultiServerRow:
    """
    One customer of the two-server ledger.

    Fields of the server that did not serve the customer are None.
    """
    customer: int
    arrival_digit: int
    interarrival: float
    arrival: float
    service_digit: int
    server_used: int
    service1: Optional[float]
    service_start1: Optional[float]
    service_end1: Optional[float]
    service2: Optional[float]
    service_start2: Optional[float]
    service_end2: Optional[float]
    waiting: float
    idle1: float
    idle2: float
    time_in_system: float

    @property
    def service(self) -> float:
        return self.service1 if self.server_used == 1 else self.service2


@dataclass(frozen=True)
class MultiServerSummary:
    """Aggregate performance of a two-server run, per server."""
    avg_waiting: float
    total_waiting: float
    avg_service1: float
    avg_service2: float
    idle_percent1: float
    idle_percent2: float
    utilization1: float
    utilization2: float
    customers_server1: int
    customers_server2: int
    last_service_end: float


@dataclass(frozen=True)
class MultiServerResult(_Records):
    arrival_table: Tuple[CumulativeRow, ...]
    service_table1: Tuple[CumulativeRow, ...]
    service_table2: Tuple[CumulativeRow, ...]
    priority_server: int
    rows: Tuple[MultiServerRow, ...]
    summary: MultiServerSummary


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

@dataclass
class PendingOrder:
    """Replenishment order in transit - owned by a single inventory run."""
    quantity: int
    arrival_cycle: int
    arrival_day: int

    def arrives_on(self, cycle: int, day: int) -> bool:
        return self.arrival_cycle == cycle and self.arrival_day == day


@dataclass(frozen=True)
class InventoryRow:
    """
    One simulated day of the periodic-review ledger.

    Attributes:
        beginning_inventory: On hand after today's arrivals
        shortage: Accumulated backlog at the end of the day
        order_quantity: Review-day Q (None on non-review days)
        lead_time_digit: Digit drawn for the lead time (None if no order)
        days_until_arrival: Days until the next pending order of this cycle
        order_placed: True when a replenishment order was queued today
    """
    cycle: int
    day: int
    beginning_inventory: int
    demand_digit: int
    demand: int
    ending_inventory: int
    shortage: int
    order_quantity: Optional[int] = None
    lead_time_digit: Optional[int] = None
    days_until_arrival: Optional[int] = None
    order_placed: bool = False


@dataclass(frozen=True)
class InventorySummary:
    avg_ending_inventory: float
    shortage_days: int
    shortage_probability: float
    total_days: int
    orders_placed: int


@dataclass(frozen=True)
class InventoryResult(_Records):
    demand_table: Tuple[CumulativeRow, ...]
    lead_time_table: Tuple[CumulativeRow, ...]
    reorder_point: int
    rows: Tuple[InventoryRow, ...]
    summary: InventorySummary


# ---------------------------------------------------------------------------
# Analytic queueing model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QueueMeasures:
    """M/M/1 steady-state measures of performance."""
    arrival_rate: float
    service_rate: float
    ls: float
    lq: float
    ws: float
    wq: float
    utilization_percent: float
    idle_percent: float
    pn: Optional[float] = None
    n: Optional[int] = None
