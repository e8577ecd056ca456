"""
Tests for duration formatting.
"""

import unittest

import pytest

from rtss.duration import (
    duration_to_human,
    duration_to_sortable,
    get_formatter,
)

MS = 1_000_000
SECOND = 1_000_000_000


class HumanFormatTester(unittest.TestCase):
    """Test the variable-width human format."""

    @pytest.mark.unit
    def test_negligible_durations_are_empty(self):
        self.assertEqual(duration_to_human(0), "")
        self.assertEqual(duration_to_human(100), "")

    @pytest.mark.unit
    def test_sub_second_units(self):
        self.assertEqual(duration_to_human(101), "0.1μs")
        self.assertEqual(duration_to_human(12_300), "12.3μs")
        self.assertEqual(duration_to_human(100_000), "100.0μs")
        self.assertEqual(duration_to_human(423_100_000), "423.1ms")
        self.assertEqual(duration_to_human(999 * MS), "999.0ms")

    @pytest.mark.unit
    def test_seconds_with_centiseconds(self):
        self.assertEqual(duration_to_human(SECOND), "1.00s")
        self.assertEqual(duration_to_human(1500 * MS), "1.50s")
        self.assertEqual(duration_to_human(SECOND + 994 * MS), "1.99s")

    @pytest.mark.unit
    def test_centiseconds_round_half_up(self):
        self.assertEqual(duration_to_human(SECOND + 5 * MS), "1.01s")

    @pytest.mark.unit
    def test_rounding_carries_into_next_second(self):
        """x.996s must never render as x.100s."""
        self.assertEqual(duration_to_human(SECOND + 996 * MS), "2.00s")
        self.assertEqual(duration_to_human(59 * SECOND + 996 * MS), "1m0.00s")

    @pytest.mark.unit
    def test_larger_units(self):
        self.assertEqual(duration_to_human(3723 * SECOND + 450 * MS), "1h2m3.45s")
        self.assertEqual(duration_to_human(90 * SECOND), "1m30.00s")
        self.assertEqual(duration_to_human(90061 * SECOND), "1d1h1m1.00s")

    @pytest.mark.unit
    def test_lower_units_shown_once_higher_unit_emitted(self):
        self.assertEqual(duration_to_human(3600 * SECOND), "1h0m0.00s")
        self.assertEqual(duration_to_human(3605 * SECOND), "1h0m5.00s")
        self.assertEqual(duration_to_human(86400 * SECOND), "1d0h0m0.00s")


class SortableFormatTester(unittest.TestCase):
    """Test the fixed-width sortable format."""

    @pytest.mark.unit
    def test_zero(self):
        self.assertEqual(duration_to_sortable(0), "00:00:00.000000")

    @pytest.mark.unit
    def test_fields(self):
        self.assertEqual(
            duration_to_sortable(3723 * SECOND + 456_789), "01:02:03.000456"
        )
        self.assertEqual(duration_to_sortable(59 * SECOND + 999_999_999), "00:00:59.999999")

    @pytest.mark.unit
    def test_hours_are_not_folded_into_days(self):
        self.assertEqual(duration_to_sortable(30 * 3600 * SECOND), "30:00:00.000000")

    @pytest.mark.unit
    def test_string_order_matches_duration_order(self):
        durations = [
            0,
            1_000,
            999_999,
            MS,
            SECOND - 1_000,
            SECOND,
            59 * SECOND,
            60 * SECOND,
            3599 * SECOND + 999 * MS,
            3600 * SECOND,
            86400 * SECOND,
            99 * 3600 * SECOND,
        ]
        formatted = [duration_to_sortable(d) for d in durations]
        self.assertEqual(formatted, sorted(formatted))
        self.assertEqual(len(set(formatted)), len(formatted))
        self.assertEqual(len({len(f) for f in formatted}), 1)


class FormatterLookupTester(unittest.TestCase):
    @pytest.mark.unit
    def test_known_names(self):
        self.assertIs(get_formatter("human"), duration_to_human)
        self.assertIs(get_formatter("sortable"), duration_to_sortable)

    @pytest.mark.unit
    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            get_formatter("iso8601")


if __name__ == "__main__":
    unittest.main()
