import pytest

from timeclock.payroll.calculator.standard_calculator import TruncatingWageCalculator


@pytest.mark.parametrize(
    "minutes, wage",
    [(0, 0), (59, 0), (60, 1500), (119, 1500), (120, 3000), (480, 12000)],
)
def test_wage_truncates_to_whole_hours(minutes, wage):
    assert TruncatingWageCalculator().daily_wage(minutes) == wage


def test_negative_minutes_earn_nothing():
    assert TruncatingWageCalculator().daily_wage(-30) == 0


def test_custom_rate_and_unit():
    calc = TruncatingWageCalculator(hourly_rate=1000, minute_unit=15)
    assert calc.daily_wage(44) == 2 * 1000


@pytest.mark.parametrize("kwargs", [{"minute_unit": 0}, {"minute_unit": -60}, {"hourly_rate": -1}])
def test_invalid_configuration_is_rejected(kwargs):
    with pytest.raises(ValueError):
        TruncatingWageCalculator(**kwargs)


def test_period_total():
    assert TruncatingWageCalculator().period_total([12000, 0, 7500]) == 19500
