"""Unit tests for minor-unit helpers"""

import pytest
from decimal import Decimal
from venue_ledger.utils.money_utils import divide_round_half_up, is_whole_amount


@pytest.mark.parametrize(
    "numerator,divisor,expected",
    [
        (100, 3, 33),  # 33.33
        (200, 3, 67),  # 66.67
        (3000, 3, 1000),
        (5, 2, 3),  # tie rounds up
        (7, 2, 4),  # tie rounds up
        (1, 3, 0),
        (0, 3, 0),
    ],
)
def test_divide_round_half_up(numerator, divisor, expected):
    assert divide_round_half_up(numerator, divisor) == expected


def test_divide_round_half_up_exact_for_large_amounts():
    """Test no float precision loss beyond 2**53"""
    assert divide_round_half_up(3 * 10**18 + 1, 3) == 10**18


def test_divide_round_half_up_rejects_bad_input():
    with pytest.raises(ValueError):
        divide_round_half_up(10, 0)
    with pytest.raises(ValueError):
        divide_round_half_up(-1, 3)


def test_is_whole_amount():
    assert is_whole_amount(100)
    assert is_whole_amount(0)
    assert not is_whole_amount(100.0)
    assert not is_whole_amount(Decimal("100"))
    assert not is_whole_amount(True)
    assert not is_whole_amount("100")
