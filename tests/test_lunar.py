"""
Tests for lunar calculator selection and the ephem-backed calculator.
"""
from datetime import date

import pytest

from thainews.calendar import (
    LunarCalculatorUnavailable,
    NullLunarCalculator,
    compute_wan_phra_dates,
    get_lunar_calculator,
)


def test_disabled_calculator_is_null():
    calculator = get_lunar_calculator(enabled=False)
    assert isinstance(calculator, NullLunarCalculator)
    assert calculator.is_available is False


def test_null_calculator_raises():
    with pytest.raises(LunarCalculatorUnavailable):
        NullLunarCalculator().lunar_day(date(2024, 4, 1))


# =============================================================================
# Ephem calculator (optional dependency)
# =============================================================================

@pytest.fixture
def ephem_calculator():
    pytest.importorskip("ephem")
    from thainews.calendar.ephem_calculator import EphemLunarCalculator
    return EphemLunarCalculator()


def test_enabled_calculator_uses_ephem(ephem_calculator):
    assert get_lunar_calculator(enabled=True).is_available is True


def test_full_moon_day_is_waxing_15(ephem_calculator):
    # Full moon 2024-04-23 23:49 UTC = 2024-04-24 06:49 Bangkok
    lunar = ephem_calculator.lunar_day(date(2024, 4, 24))
    assert lunar.is_waxing is True
    assert lunar.day == 15
    assert lunar.label == "ขึ้น 15 ค่ำ"


def test_new_moon_day_closes_waning_half(ephem_calculator):
    # New moon 2024-04-08 18:21 UTC = 2024-04-09 01:21 Bangkok
    lunar = ephem_calculator.lunar_day(date(2024, 4, 9))
    assert lunar.is_waxing is False
    assert lunar.is_holy_day is True
    assert lunar.day in (14, 15)

    after = ephem_calculator.lunar_day(date(2024, 4, 10))
    assert after.is_waxing is True
    assert after.day == 1


def test_april_2024_wan_phra(ephem_calculator):
    dates = {d.date: d.label for d in compute_wan_phra_dates(ephem_calculator, 2024, 4)}
    assert dates[date(2024, 4, 17)] == "ขึ้น 8 ค่ำ"
    assert dates[date(2024, 4, 24)] == "ขึ้น 15 ค่ำ"
    assert date(2024, 4, 9) in dates
    assert 3 <= len(dates) <= 5
