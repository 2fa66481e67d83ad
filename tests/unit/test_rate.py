from __future__ import annotations

import pytest

from shift_ledger.codec.rate import rate
from shift_ledger.models.config_models import RateMode


@pytest.mark.parametrize("completed", [0, 3, 10, -2])
@pytest.mark.parametrize("mode", [RateMode.FRACTION, RateMode.PERCENT])
def test_zero_total_yields_zero(completed, mode):
    assert rate(completed, 0, mode) == 0


def test_fraction_full_precision():
    assert rate(3, 4) == 0.75
    assert rate(2, 3, RateMode.FRACTION) == 2 / 3
    assert isinstance(rate(4, 4), float)


def test_percent_is_integer():
    result = rate(2, 3, RateMode.PERCENT)
    assert result == 67
    assert isinstance(result, int)


def test_percent_rounds_half_away_from_zero():
    # 1/8 = 12.5% -> 13, 5/8 = 62.5% -> 63 (banker's rounding would give 12 and 62)
    assert rate(1, 8, RateMode.PERCENT) == 13
    assert rate(5, 8, RateMode.PERCENT) == 63
    # 1/200 = 0.5% -> 1
    assert rate(1, 200, RateMode.PERCENT) == 1


def test_mode_accepts_string_value():
    assert rate(1, 2, "percent") == 50
    assert rate(1, 2, "fraction") == 0.5


def test_result_clamped_to_range():
    assert rate(5, 4, RateMode.FRACTION) == 1.0
    assert rate(5, 4, RateMode.PERCENT) == 100
    assert rate(-1, 4, RateMode.FRACTION) == 0.0


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        rate(1, 2, "ratio")
