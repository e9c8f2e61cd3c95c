"""
Tests for cumulative distribution tables and random-digit lookup.

Validates:
- Range assignment at scale 100 and scale 10
- Partition of [1, scale] with no gaps or overlaps
- Probability-sum validation with tolerance
- Mapper totality over [0, scale] and the "00" convention
"""

import pytest

from simlab.domain.distribution import (
    as_distribution,
    build_cumulative_table,
    expected_value,
    map_digit_to_value,
    map_digits,
)
from simlab.domain.models import DistributionRow
from simlab.errors import InvalidDistribution, InvalidParameter, NotMapped


ARRIVAL = [(1, 0.25), (2, 0.35), (3, 0.40)]
LEAD_TIME = [(1, 0.6), (2, 0.3), (3, 0.1)]
DEMAND = [(0, 0.10), (1, 0.25), (2, 0.35), (3, 0.21), (4, 0.09)]


def _ranges(table):
    return [(r.range_start, r.range_end) for r in table]


class TestBuildCumulativeTable:
    """Test range construction."""

    def test_two_digit_ranges(self):
        table = build_cumulative_table(ARRIVAL, 100)
        assert _ranges(table) == [(1, 25), (26, 60), (61, 100)]
        assert [r.value for r in table] == [1, 2, 3]
        assert table[-1].cumulative == pytest.approx(1.0)

    def test_one_digit_ranges(self):
        table = build_cumulative_table(LEAD_TIME, 10)
        assert _ranges(table) == [(1, 6), (7, 9), (10, 10)]

    def test_scale_changes_ranges(self):
        """Same distribution, different digit width."""
        assert _ranges(build_cumulative_table(LEAD_TIME, 100)) == [(1, 60), (61, 90), (91, 100)]

    def test_demand_table(self):
        table = build_cumulative_table(DEMAND, 100)
        assert _ranges(table) == [(1, 10), (11, 35), (36, 70), (71, 91), (92, 100)]

    @pytest.mark.parametrize("dist,scale", [
        (ARRIVAL, 100),
        (LEAD_TIME, 10),
        (DEMAND, 100),
        (DEMAND, 10),
        ([(1, 0.3333), (2, 0.3333), (3, 0.3334)], 100),
        ([(5, 1.0)], 10),
        ([(1, 0.2), (2, 0.0), (3, 0.8)], 100),
        ([(1, 0.1)] * 10, 100),
    ])
    def test_ranges_partition_scale(self, dist, scale):
        """Every digit in [1, scale] is covered exactly once."""
        table = build_cumulative_table(dist, scale)
        assert table[0].range_start == 1
        assert table[-1].range_end == scale
        for previous, current in zip(table, table[1:]):
            assert current.range_start == previous.range_end + 1
        covered = [d for r in table for d in range(r.range_start, r.range_end + 1)]
        assert covered == list(range(1, scale + 1))

    def test_sum_within_tolerance(self):
        table = build_cumulative_table([(1, 0.5), (2, 0.5009)], 100)
        assert table[-1].range_end == 100

    def test_sum_outside_tolerance(self):
        with pytest.raises(InvalidDistribution):
            build_cumulative_table([(1, 0.5), (2, 0.4)], 100)

    def test_sum_just_short_rejected(self):
        """0.96 would leave digits 97-100 unassigned."""
        with pytest.raises(InvalidDistribution):
            build_cumulative_table([(1, 0.5), (2, 0.46)], 100)

    def test_tolerance_is_fixed(self):
        with pytest.raises(TypeError):
            build_cumulative_table([(1, 0.5), (2, 0.46)], 100, tolerance=0.05)

    def test_last_range_closes_at_scale(self):
        """A sum inside tolerance but short of 1 still covers the top digit."""
        table = build_cumulative_table([(1, 0.5), (2, 0.4995)], 10000)
        assert table[-1].range_end == 10000
        assert map_digit_to_value(10000, table) == 2
        assert map_digit_to_value(0, table) == 2

    def test_empty_distribution(self):
        with pytest.raises(InvalidDistribution):
            build_cumulative_table([], 100)

    def test_negative_probability(self):
        with pytest.raises(InvalidDistribution):
            build_cumulative_table([(1, 1.2), (2, -0.2)], 100)

    def test_invalid_distribution_is_invalid_parameter(self):
        with pytest.raises(InvalidParameter):
            build_cumulative_table([(1, 0.7)], 100)

    def test_invalid_scale(self):
        with pytest.raises(InvalidParameter):
            build_cumulative_table(ARRIVAL, 0)

    def test_accepts_distribution_rows(self):
        rows = [DistributionRow(1, 0.5), DistributionRow(2, 0.5)]
        assert _ranges(build_cumulative_table(rows, 10)) == [(1, 5), (6, 10)]


class TestMapDigitToValue:
    """Test random-digit lookup."""

    @pytest.fixture
    def arrival_table(self):
        return build_cumulative_table(ARRIVAL, 100)

    def test_range_boundaries(self, arrival_table):
        assert map_digit_to_value(1, arrival_table) == 1
        assert map_digit_to_value(25, arrival_table) == 1
        assert map_digit_to_value(26, arrival_table) == 2
        assert map_digit_to_value(60, arrival_table) == 2
        assert map_digit_to_value(61, arrival_table) == 3
        assert map_digit_to_value(100, arrival_table) == 3

    def test_double_zero_is_top_of_range(self, arrival_table):
        assert map_digit_to_value(0, arrival_table) == 3

    def test_single_zero_is_ten(self):
        table = build_cumulative_table(LEAD_TIME, 10)
        assert map_digit_to_value(0, table, scale=10) == 3
        assert map_digit_to_value(6, table, scale=10) == 1
        assert map_digit_to_value(7, table, scale=10) == 2

    @pytest.mark.parametrize("dist,scale", [(ARRIVAL, 100), (DEMAND, 100), (LEAD_TIME, 10)])
    def test_totality(self, dist, scale):
        table = build_cumulative_table(dist, scale)
        values = {v for v, _ in dist}
        for r in range(0, scale + 1):
            assert map_digit_to_value(r, table, scale) in values

    @pytest.mark.parametrize("dist,scale", [(ARRIVAL, 100), (DEMAND, 100), (LEAD_TIME, 10)])
    def test_totality_with_inferred_scale(self, dist, scale):
        """Scale defaults to the table's own last range end."""
        table = build_cumulative_table(dist, scale)
        values = {v for v, _ in dist}
        for r in range(0, scale + 1):
            assert map_digit_to_value(r, table) in values

    def test_one_digit_zero_without_scale(self):
        table = build_cumulative_table(LEAD_TIME, 10)
        assert map_digit_to_value(0, table) == 3
        with pytest.raises(NotMapped, match=r"0-10\)"):
            map_digit_to_value(11, table)

    def test_out_of_range_digit(self, arrival_table):
        with pytest.raises(NotMapped):
            map_digit_to_value(101, arrival_table)
        with pytest.raises(NotMapped):
            map_digit_to_value(-1, arrival_table)

    def test_out_of_range_for_one_digit_table(self):
        table = build_cumulative_table(LEAD_TIME, 10)
        with pytest.raises(NotMapped):
            map_digit_to_value(11, table, scale=10)

    def test_map_digits_names_stream(self, arrival_table):
        assert map_digits([15, 64, 0], arrival_table) == [1, 3, 3]
        with pytest.raises(NotMapped, match="arrival"):
            map_digits([15, 250], arrival_table, label="arrival")


class TestDistributionHelpers:

    def test_as_distribution(self):
        rows = as_distribution([(1, 0.5), DistributionRow(2, 0.5)])
        assert rows == [DistributionRow(1, 0.5), DistributionRow(2, 0.5)]

    def test_expected_value(self):
        assert expected_value(DEMAND) == pytest.approx(1.94)
        assert expected_value(LEAD_TIME) == pytest.approx(1.5)
