"""
Tests for the line list search.
"""

import pytest
import numpy as np

from snformal.integral.line_search import line_search


@pytest.fixture
def line_list():
    return np.array([9.0, 7.0, 5.0, 3.0, 1.0])


def test_above_all_lines(line_list):
    assert line_search(line_list, 10.0) == 0


def test_below_all_lines(line_list):
    assert line_search(line_list, 0.5) == len(line_list)


def test_between_lines(line_list):
    """Returns the first line below the target."""
    assert line_search(line_list, 6.0) == 2
    assert line_search(line_list, 8.9) == 1


def test_exact_match(line_list):
    """A line at the target frequency is included."""
    assert line_search(line_list, 7.0) == 1
    assert line_search(line_list, 9.0) == 0
    assert line_search(line_list, 1.0) == 4


def test_returns_int(line_list):
    assert isinstance(line_search(line_list, 4.0), int)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
