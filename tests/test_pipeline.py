"""
End-to-end flows: generate numbers, rescale them to random digits, feed
them to a simulator and test the raw stream for randomness.
"""

import pytest

import simlab
from simlab.rng import to_unit_interval


ARRIVAL = [(1, 0.25), (2, 0.35), (3, 0.40)]
SERVICE = [(2, 0.30), (3, 0.50), (4, 0.20)]


class TestGeneratorToSimulation:

    def test_lcg_digits_drive_single_server(self):
        raw = simlab.lcg(27, 17, 43, 100, 9)
        digits = simlab.normalize_values(raw, 100, 100)
        assert digits == raw

        result = simlab.run_single_server(ARRIVAL, SERVICE, digits[:4], digits[4:9], count=5)
        assert len(result.rows) == 5
        for previous, current in zip(result.rows, result.rows[1:]):
            assert current.service_start >= previous.service_end
            assert current.arrival >= previous.arrival

    def test_mid_square_digits_drive_inventory(self):
        raw = simlab.mid_square(5735, 10)
        demand_digits = simlab.normalize_values(raw, 100, 10 ** 4)
        lead_digits = simlab.normalize_values(simlab.lcg(7, 5, 3, 16, 4), 10, 16)

        result = simlab.run_inventory(
            [(0, 0.10), (1, 0.25), (2, 0.35), (3, 0.21), (4, 0.09)],
            [(1, 0.6), (2, 0.3), (3, 0.1)],
            demand_digits,
            lead_digits,
            cycles=2,
            days_per_cycle=5,
            initial_inventory=3,
            inventory_limit=11,
        )
        assert result.summary.total_days == 10
        assert all(r.ending_inventory >= 0 for r in result.rows)

    def test_same_inputs_same_output(self):
        digits = simlab.normalize_values(simlab.mid_square(1234, 12), 100, 10 ** 4)
        first = simlab.run_multi_server(ARRIVAL, SERVICE, SERVICE, digits[:5], digits[5:11], count=6)
        second = simlab.run_multi_server(ARRIVAL, SERVICE, SERVICE, digits[:5], digits[5:11], count=6)
        assert first == second


class TestGeneratorToRandomnessTests:

    def test_full_period_lcg_passes_uniformity(self):
        numbers = to_unit_interval(simlab.lcg(0, 5, 3, 16, 16), 16)
        assert simlab.chi_square_test(numbers, k=4).is_uniform

    def test_degenerate_mid_square_is_constant(self):
        numbers = to_unit_interval(simlab.mid_square(2500, 6), 10 ** 4)
        result = simlab.autocorrelation_test(numbers)
        assert result.variance == 0.0
        assert simlab.chi_square_test(numbers, k=4).is_uniform is False

    def test_public_errors_share_base(self):
        with pytest.raises(simlab.SimulationError):
            simlab.build_cumulative_table([(1, 0.2)], 100)
