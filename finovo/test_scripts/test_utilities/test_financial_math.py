"""
Test financial math utilities (SIP, EMI, retirement, goal SIP).
All tests are independent of each other and need no database.
"""
import json
from decimal import Decimal

import pytest

from finovo.app.utils.decimal_utils import quantize_money, round_to_unit
from finovo.app.utils.financial_math import (
    FinancialInputError,
    annuity_due_factor,
    compute_emi,
    compute_goal_sip,
    compute_retirement_plan,
    compute_sip,
    compute_sip_schedule,
    monthly_rate,
    )

REL_TOLERANCE = Decimal("1e-6")


def assert_close(actual: Decimal, expected: Decimal, rel: Decimal = REL_TOLERANCE):
    assert abs(actual - expected) <= abs(expected) * rel, f"{actual} != {expected} (rel {rel})"


# ============================================================================
# TESTS: primitives
# ============================================================================

def test_monthly_rate_twelve_percent():
    """12% per year is 1% per month."""
    assert monthly_rate(Decimal("12")) == Decimal("0.01")


def test_annuity_due_factor_zero_rate_is_period_count():
    assert annuity_due_factor(Decimal("0"), 60) == Decimal(60)


def test_annuity_due_factor_single_period():
    """One payment at the start of one period grows by one period."""
    assert annuity_due_factor(Decimal("0.01"), 1) == Decimal("1.01")


# ============================================================================
# TESTS: compute_sip
# ============================================================================

def test_sip_reference_scenario():
    """5,000/month at 12% for 20 years grows to about 4,995,740."""
    result = compute_sip(5000, 12, 20)

    assert result.total_invested == Decimal("1200000")
    assert round_to_unit(result.future_value) == Decimal("4995740")
    assert round_to_unit(result.total_returns) == Decimal("3795740")


@pytest.mark.parametrize("amount,percent,years", [
    (5000, 12, 20),
    (1, Decimal("0.5"), 1),
    ("2500.50", "7.25", 15),
    (100000, 30, 40),
    ])
def test_sip_totals_are_consistent(amount, percent, years):
    """total_invested = P*years*12 and future_value = invested + returns."""
    result = compute_sip(amount, percent, years)

    assert result.total_invested == Decimal(str(amount)) * years * 12
    assert result.future_value == result.total_invested + result.total_returns
    assert result.total_returns > 0


def test_sip_zero_rate_has_no_returns():
    result = compute_sip(1000, 0, 10)

    assert result.future_value == Decimal("1000") * 120
    assert result.total_returns == Decimal("0")


def test_sip_future_value_grows_with_rate():
    low = compute_sip(5000, 8, 10).future_value
    high = compute_sip(5000, 12, 10).future_value
    assert high > low


# ============================================================================
# TESTS: compute_sip_schedule
# ============================================================================

def test_sip_schedule_has_one_row_per_year():
    rows = compute_sip_schedule(5000, 12, 20)

    assert len(rows) == 20
    assert [row.year for row in rows] == list(range(1, 21))


def test_sip_schedule_last_row_matches_sip():
    rows = compute_sip_schedule(5000, 12, 20)
    result = compute_sip(5000, 12, 20)

    assert rows[-1].value == result.future_value
    assert rows[-1].investment == result.total_invested
    assert rows[-1].returns == result.total_returns


def test_sip_schedule_strictly_increasing_with_positive_rate():
    rows = compute_sip_schedule(1000, 10, 15)
    values = [row.value for row in rows]
    assert all(later > earlier for earlier, later in zip(values, values[1:]))


def test_sip_schedule_zero_rate_is_linear():
    rows = compute_sip_schedule(1000, 0, 5)

    assert [row.value for row in rows] == [Decimal(12000 * k) for k in range(1, 6)]
    assert all(row.returns == 0 for row in rows)


def test_sip_schedule_can_be_iterated_twice():
    rows = compute_sip_schedule(1000, 10, 3)
    assert list(rows) == list(rows)


# ============================================================================
# TESTS: compute_emi
# ============================================================================

def test_emi_reference_scenario():
    """1,000,000 at 8.5% for 20 years costs about 8,678 per month."""
    result = compute_emi(1000000, Decimal("8.5"), 20)

    assert round_to_unit(result.monthly_emi) == Decimal("8678")
    assert result.total_payable == result.monthly_emi * 240
    assert result.total_interest == result.total_payable - Decimal("1000000")


def test_emi_zero_rate_is_principal_over_periods():
    result = compute_emi(120000, 0, 10)

    assert result.monthly_emi == Decimal("1000")
    assert result.total_interest == Decimal("0")


def test_emi_interest_is_positive_with_positive_rate():
    result = compute_emi(500000, 9, 5)
    assert result.total_interest > 0
    assert result.monthly_emi > Decimal("500000") / 60


# ============================================================================
# TESTS: compute_goal_sip
# ============================================================================

def test_goal_sip_reference_scenario():
    """2,000,000 in 5 years at 12% needs about 24,246 per month."""
    result = compute_goal_sip(2000000, 5, 12)

    assert round_to_unit(result.required_monthly_sip) == Decimal("24246")
    assert result.total_invested == result.required_monthly_sip * 60
    assert result.wealth_gained == Decimal("2000000") - result.total_invested


@pytest.mark.parametrize("target,years,percent", [
    (2000000, 5, 12),
    (100000, 1, Decimal("6.5")),
    (50000000, 30, 10),
    (750000, 7, 0),
    ])
def test_goal_sip_round_trips_through_sip(target, years, percent):
    """Feeding the goal SIP back into compute_sip reproduces the target."""
    monthly = compute_goal_sip(target, years, percent).required_monthly_sip

    future_value = compute_sip(monthly, percent, years).future_value

    assert_close(future_value, Decimal(str(target)))


def test_goal_sip_zero_rate_is_target_over_periods():
    assert compute_goal_sip(120000, 10, 0).required_monthly_sip == Decimal("1000")


# ============================================================================
# TESTS: compute_retirement_plan
# ============================================================================

def test_retirement_plan_reference_values():
    plan = compute_retirement_plan(30, 60, 50000, 6, 10)

    assert plan.years_to_retirement == 30
    assert abs(plan.future_monthly_expenses - Decimal("287174.56")) < Decimal("0.01")
    assert plan.required_corpus == plan.future_monthly_expenses * 12 / (Decimal("10") / 100)


def test_retirement_sip_reaches_corpus():
    plan = compute_retirement_plan(25, 55, 40000, 5, 11)

    future_value = compute_sip(plan.required_monthly_sip, 11, plan.years_to_retirement).future_value

    assert_close(future_value, plan.required_corpus)


def test_retirement_zero_inflation_keeps_expenses():
    plan = compute_retirement_plan(40, 41, 30000, 0, 8)
    assert plan.future_monthly_expenses == Decimal("30000")


@pytest.mark.parametrize("current_age,retirement_age", [(60, 60), (60, 55)])
def test_retirement_age_must_be_after_current_age(current_age, retirement_age):
    with pytest.raises(FinancialInputError) as exc_info:
        compute_retirement_plan(current_age, retirement_age, 50000, 6, 10)
    assert exc_info.value.field == "retirement_age"


def test_retirement_requires_positive_expected_return():
    with pytest.raises(FinancialInputError) as exc_info:
        compute_retirement_plan(30, 60, 50000, 6, 0)
    assert exc_info.value.field == "expected_return_percent"


# ============================================================================
# TESTS: input validation
# ============================================================================

@pytest.mark.parametrize("call,field", [
    (lambda: compute_sip(0, 12, 10), "monthly_amount"),
    (lambda: compute_sip(-100, 12, 10), "monthly_amount"),
    (lambda: compute_sip(1000, -1, 10), "annual_return_percent"),
    (lambda: compute_sip(1000, 12, 0), "years"),
    (lambda: compute_sip(1000, 12, Decimal("2.5")), "years"),
    (lambda: compute_sip(1000, 12, True), "years"),
    (lambda: compute_sip(None, 12, 10), "monthly_amount"),
    (lambda: compute_sip("abc", 12, 10), "monthly_amount"),
    (lambda: compute_sip(float("nan"), 12, 10), "monthly_amount"),
    (lambda: compute_sip(Decimal("Infinity"), 12, 10), "monthly_amount"),
    (lambda: compute_sip_schedule(1000, 12, -3), "years"),
    (lambda: compute_emi(0, 8, 10), "principal"),
    (lambda: compute_emi(100000, -8, 10), "annual_rate_percent"),
    (lambda: compute_emi(100000, 8, 0), "tenure_years"),
    (lambda: compute_goal_sip(0, 5, 12), "target_amount"),
    (lambda: compute_goal_sip(100000, 0, 12), "years"),
    (lambda: compute_goal_sip(100000, 5, -2), "expected_return_percent"),
    (lambda: compute_retirement_plan(0, 60, 50000, 6, 10), "current_age"),
    (lambda: compute_retirement_plan(30, 60, 0, 6, 10), "monthly_expenses_today"),
    (lambda: compute_retirement_plan(30, 60, 50000, -1, 10), "inflation_percent"),
    ])
def test_invalid_inputs_are_rejected(call, field):
    """Every rejection names the offending field and is a ValueError."""
    with pytest.raises(FinancialInputError) as exc_info:
        call()
    assert exc_info.value.field == field
    assert isinstance(exc_info.value, ValueError)


def test_integral_decimal_years_are_accepted():
    assert compute_sip(1000, 12, Decimal("10")) == compute_sip(1000, 12, 10)


# ============================================================================
# TESTS: serialization
# ============================================================================

def test_json_output_is_rounded_to_cents():
    """Python attributes keep full precision, JSON carries 2 decimals."""
    result = compute_sip(5000, 12, 20)

    data = json.loads(result.model_dump_json())

    assert Decimal(data["future_value"]) == quantize_money(result.future_value)
    assert Decimal(data["future_value"]).as_tuple().exponent == -2
    assert result.future_value != quantize_money(result.future_value)


# ============================================================================
# TESTS: extreme rates
# ============================================================================

@pytest.mark.parametrize("percent", [Decimal("1e-27"), Decimal("1e-40"), Decimal("1e-300")])
def test_sip_vanishing_rate_never_loses_contributions(percent):
    """A rate that barely moves 1 + r still returns at least what was paid in."""
    result = compute_sip(1000, percent, 10)

    assert result.future_value >= result.total_invested == Decimal("120000")
    assert result.total_returns >= 0
    assert_close(result.future_value, Decimal("120000"))


@pytest.mark.parametrize("percent", [Decimal("1e-27"), Decimal("1e-300")])
def test_emi_and_goal_vanishing_rate_match_zero_rate(percent):
    emi = compute_emi(120000, percent, 10)
    goal = compute_goal_sip(120000, 10, percent)

    assert_close(emi.monthly_emi, Decimal("1000"))
    assert emi.total_interest >= 0
    assert_close(goal.required_monthly_sip, Decimal("1000"))
    assert goal.total_invested <= Decimal("120000")


def test_sip_schedule_vanishing_rate_is_non_decreasing():
    rows = compute_sip_schedule(1000, Decimal("1e-27"), 5)

    values = [row.value for row in rows]
    assert values == sorted(values)
    assert all(row.returns >= 0 for row in rows)


@pytest.mark.parametrize("call,field", [
    (lambda: compute_sip(1000, Decimal("1e900"), 100), "annual_return_percent"),
    (lambda: compute_sip_schedule(1000, Decimal("1e90000"), 100), "annual_return_percent"),
    (lambda: compute_emi(100000, Decimal("1e3000"), 50), "annual_rate_percent"),
    (lambda: compute_goal_sip(100000, 100, Decimal("1e900")), "expected_return_percent"),
    (lambda: compute_retirement_plan(20, 100, 50000, Decimal("1e20000"), 10), "inflation_percent"),
    ])
def test_overflowing_rate_is_an_input_error(call, field):
    with pytest.raises(FinancialInputError) as exc_info:
        call()
    assert exc_info.value.field == field


@pytest.mark.parametrize("call,field", [
    (lambda: compute_sip(5000, 1000, 100), "future_value"),
    (lambda: compute_sip_schedule(5000, 1000, 100), "value"),
    (lambda: compute_emi(Decimal("1e23"), 50, 50), "total_payable"),
    (lambda: compute_retirement_plan(30, 60, 50000, 6, Decimal("1e-30")), "required_corpus"),
    (lambda: compute_goal_sip(Decimal("1e30"), 5, 12), "target_amount"),
    ])
def test_results_beyond_max_result_are_rejected(call, field):
    """Results must stay small enough to serialize with cents."""
    with pytest.raises(FinancialInputError) as exc_info:
        call()
    assert exc_info.value.field == field
