"""Tests for contours.classifier module."""

import pytest

from contours.classifier import (
    BASIC_LINE_TABLE,
    basic_lines,
    case_index,
    corner_binary,
    resolve_saddle,
)

SADDLE_CODES = (5, 10)


def _corners_for_code(code):
    """Corner values 0/1 whose classification at 0.5 gives ``code``."""
    return [float((code >> k) & 1) for k in range(4)]


class TestCornerBinary:
    """Tests for corner_binary function."""

    def test_strictly_above(self):
        """Only values strictly above the threshold set a bit."""
        assert corner_binary([4.0, 5.0, 6.0, 5.0], 5.0) == [0, 0, 1, 0]

    def test_preserves_order(self):
        assert corner_binary([9, 0, 0, 9], 1) == [1, 0, 0, 1]


class TestCaseIndex:
    """Tests for case_index function."""

    def test_weights(self):
        """Bit k should weigh 2**k."""
        assert case_index([1, 0, 0, 0]) == 1
        assert case_index([0, 1, 0, 0]) == 2
        assert case_index([0, 0, 1, 0]) == 4
        assert case_index([0, 0, 0, 1]) == 8
        assert case_index([1, 1, 1, 1]) == 15

    def test_checkerboard(self):
        assert case_index([1, 0, 1, 0]) == 5
        assert case_index([0, 1, 0, 1]) == 10


class TestBasicLineTable:
    """Tests for the lookup table constant."""

    def test_has_16_entries(self):
        assert len(BASIC_LINE_TABLE) == 16

    def test_no_crossing_cases_empty(self):
        assert BASIC_LINE_TABLE[0] == ()
        assert BASIC_LINE_TABLE[15] == ()

    @pytest.mark.parametrize('code', [c for c in range(16) if c not in SADDLE_CODES])
    def test_point_symmetric(self, code):
        """Complementing the code should give the same pattern."""
        assert BASIC_LINE_TABLE[15 - code] == BASIC_LINE_TABLE[code]

    def test_edges_in_range(self):
        for pattern in BASIC_LINE_TABLE:
            assert len(pattern) <= 2
            for e1, e2 in pattern:
                assert 0 <= e1 <= 3
                assert 0 <= e2 <= 3


class TestBasicLines:
    """Tests for basic_lines function."""

    @pytest.mark.parametrize('code', [c for c in range(16) if c not in SADDLE_CODES])
    def test_matches_table(self, code):
        """Non-ambiguous codes should come straight from the table."""
        assert basic_lines(_corners_for_code(code), 0.5) == BASIC_LINE_TABLE[code]

    def test_all_below(self):
        assert basic_lines([1.0, 2.0, 3.0, 4.0], 10.0) == ()

    def test_all_above(self):
        assert basic_lines([1.0, 2.0, 3.0, 4.0], 0.0) == ()

    def test_value_equal_to_threshold_is_below(self):
        """A corner equal to the threshold counts as below."""
        assert basic_lines([5.0, 5.0, 5.0, 5.0], 5.0) == ()

    def test_single_corner(self):
        """Only bottom-left above: cut across bottom and left edges."""
        assert basic_lines([10.0, 0.0, 0.0, 0.0], 5.0) == ((0, 3),)


class TestSaddle:
    """Tests for saddle disambiguation by the cell mean."""

    def test_code5_mean_above(self):
        """Corners [5,1,5,1], mean 3 >= 2."""
        assert basic_lines([5.0, 1.0, 5.0, 1.0], 2.0) == ((0, 3), (1, 2))

    def test_code5_mean_below(self):
        """Corners [5,1,5,1], mean 3 < 4."""
        assert basic_lines([5.0, 1.0, 5.0, 1.0], 4.0) == ((0, 1), (2, 3))

    def test_code5_mean_equal(self):
        """Mean equal to the threshold takes the 'above' branch."""
        assert basic_lines([5.0, 1.0, 5.0, 1.0], 3.0) == ((0, 3), (1, 2))

    def test_code10_mean_above(self):
        assert basic_lines([1.0, 5.0, 1.0, 5.0], 2.0) == ((0, 1), (2, 3))

    def test_code10_mean_below(self):
        assert basic_lines([1.0, 5.0, 1.0, 5.0], 4.0) == ((0, 3), (1, 2))

    def test_resolve_saddle_passthrough(self):
        """Non-saddle codes are returned from the table unchanged."""
        assert resolve_saddle(6, [0.0, 1.0, 1.0, 0.0], 0.5) == ((0, 2),)
