"""
Example usage of the SimLab simulators and randomness tests.

Runs the classroom scenarios end to end: generate random numbers,
rescale them to random digits, simulate, then test the raw stream.

Author: SimLab Team
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from simlab import (
    autocorrelation_test,
    chi_square_test,
    lcg,
    mid_square,
    mm1_measures,
    normalize_values,
    run_inventory,
    run_multi_server,
    run_single_server,
)
from simlab.config import load_settings
from simlab.rng import to_unit_interval
from simlab.utils.logging_config import setup_logging


ARRIVAL = [(1, 0.25), (2, 0.35), (3, 0.40)]
SERVICE = [(2, 0.30), (3, 0.50), (4, 0.20)]
ABLE = [(2, 0.30), (3, 0.28), (4, 0.25), (5, 0.17)]
BAKER = [(3, 0.35), (4, 0.25), (5, 0.20), (6, 0.20)]
DEMAND = [(0, 0.10), (1, 0.25), (2, 0.35), (3, 0.21), (4, 0.09)]
LEAD_TIME = [(1, 0.6), (2, 0.3), (3, 0.1)]


def example_generators(settings):
    """Example 1: Mid-square and LCG streams."""
    print("=" * 70)
    print("EXAMPLE 1: Random Number Generators")
    print("=" * 70)

    squares = mid_square(5735, 8, digits=settings.mid_square_digits)
    congruential = lcg(27, 17, 43, 100, 8)

    print(f"\nMid-square (seed 5735): {squares}")
    print(f"  as two-digit numbers: {normalize_values(squares, 100, 10 ** settings.mid_square_digits)}")
    print(f"LCG (z0=27, a=17, c=43, m=100): {congruential}")


def example_single_server():
    """Example 2: Single-server queue with textbook digits."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Single-Server Queue")
    print("=" * 70)

    result = run_single_server(
        ARRIVAL, SERVICE,
        arrival_digits=[15, 64, 12, 87],
        service_digits=[5, 44, 70, 22, 91],
        count=5,
    )

    print(f"\n{'Cust':>4} {'Arr':>4} {'Svc':>4} {'Start':>5} {'End':>4} {'Wait':>4} {'Idle':>4}")
    for row in result.rows:
        print(f"{row.customer:>4} {row.arrival:>4} {row.service:>4} {row.service_start:>5} "
              f"{row.service_end:>4} {row.waiting:>4} {row.idle:>4}")

    s = result.summary
    print(f"\nAverage waiting: {s.avg_waiting:.2f}")
    print(f"Average service: {s.avg_service:.2f}")
    print(f"Idle: {s.idle_percent:.1f}%  Utilization: {s.utilization:.1f}%")


def example_two_servers(settings):
    """Example 3: Able/Baker with a shared service digit."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Two-Server Queue")
    print("=" * 70)

    digits = normalize_values(lcg(7, 21, 13, 100, 12), 100, 100)
    result = run_multi_server(
        ARRIVAL, ABLE, BAKER,
        arrival_digits=digits[:5],
        service_digits=digits[5:11],
        count=6,
        priority_server=settings.priority_server,
    )

    for row in result.rows:
        print(f"Customer {row.customer}: arrives {row.arrival}, server {row.server_used}, "
              f"service {row.service}, waits {row.waiting}")

    s = result.summary
    print(f"\nServer 1 utilization: {s.utilization1:.1f}% ({s.customers_server1} customers)")
    print(f"Server 2 utilization: {s.utilization2:.1f}% ({s.customers_server2} customers)")


def example_inventory():
    """Example 4: Periodic review with backlog."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Inventory System")
    print("=" * 70)

    result = run_inventory(
        DEMAND, LEAD_TIME,
        demand_digits=[24, 35, 65, 81, 54, 3, 87, 27, 73, 70],
        lead_time_digits=[5, 0, 3, 4, 8],
        cycles=2,
        days_per_cycle=5,
        initial_inventory=3,
        inventory_limit=11,
        initial_order_quantity=8,
        initial_order_lead_time=2,
    )

    print(f"\nReorder point: {result.reorder_point}")
    for row in result.rows:
        order = f"order {row.order_quantity}" if row.order_placed else ""
        print(f"Cycle {row.cycle} day {row.day}: demand {row.demand}, "
              f"ending {row.ending_inventory}, shortage {row.shortage} {order}")

    print(f"\nAverage ending inventory: {result.summary.avg_ending_inventory:.2f}")
    print(f"Shortage days: {result.summary.shortage_days}")


def example_randomness_tests(settings):
    """Example 5: Chi-square and autocorrelation on an LCG stream."""
    print("\n" + "=" * 70)
    print("EXAMPLE 5: Randomness Tests")
    print("=" * 70)

    numbers = to_unit_interval(lcg(1, 13, 7, 64, 40), 64)

    chi = chi_square_test(numbers, k=settings.chi_square_intervals, alpha=settings.significance_level)
    print(f"\nChi-square: {chi.chi_stat:.3f} vs {chi.critical_value:.3f} "
          f"-> {'uniform' if chi.is_uniform else 'not uniform'}")

    auto = autocorrelation_test(numbers, alpha=settings.significance_level)
    print(f"Autocorrelation: significant lags {list(auto.significant_lags)} "
          f"-> {'independent' if auto.is_independent else 'dependent'}")

    measures = mm1_measures(0.5, 1.0, n=2)
    print(f"M/M/1 (λ=0.5, μ=1): Ls={measures.ls:.2f}, Wq={measures.wq:.2f}, P2={measures.pn:.3f}")


def main():
    """Run all examples."""
    setup_logging()
    settings = load_settings()

    print("\n" + "=" * 70)
    print(" SIMLAB - USAGE EXAMPLES")
    print("=" * 70)

    example_generators(settings)
    example_single_server()
    example_two_servers(settings)
    example_inventory()
    example_randomness_tests(settings)

    print("\n" + "=" * 70)
    print(" All examples completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
