"""
Financial mathematics utility functions.

Provides the time-value-of-money calculators used by Finovo:
- SIP future value (annuity-due, monthly compounding) and its yearly schedule
- EMI for a reducing-balance loan
- Retirement corpus and the monthly SIP needed to build it
- Goal-based SIP sizing (inverse of the SIP future value)

All functions are pure (no side effects, no I/O, no logging) and reusable.

Key concepts:
- Rates are given as annual percentages (12 = 12%) and converted to a
  monthly rate r = annual / 100 / 12
- Durations are whole years, n = years * 12 monthly periods
- Formulas run in a local Decimal context with 50 significant digits
- A zero rate, or one too small to move 1 + r at that precision, is
  handled with the closed-form limit, never as an error

Note:
    Inputs are rejected with FinancialInputError before any arithmetic:
    non-positive amounts, non-positive or non-integer durations, negative
    rates and malformed numbers. Nothing is clamped. Inputs whose results
    overflow, or reach MAX_RESULT, raise FinancialInputError as well.
"""
from contextlib import contextmanager
from decimal import Decimal, DecimalException, InvalidOperation, localcontext
from typing import List

from finovo.app.schemas.calculators import (
    SIPResult,
    SIPScheduleRow,
    EMIResult,
    RetirementPlan,
    GoalSIPResult,
    )

MONTHS_PER_YEAR = 12

# Results must still quantize to cents in the default 28-digit context
MAX_RESULT = Decimal("1e24")

_PRECISION = 50

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")


class FinancialInputError(ValueError):
    """Raised when a calculator input is rejected before computation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


# ============================================================================
# INPUT VALIDATION
# ============================================================================

def _to_decimal(value, field: str) -> Decimal:
    """
    Convert a numeric input to a finite Decimal.

    Accepts Decimal, int, float and numeric strings. Booleans, None, NaN and
    infinities are rejected.
    """
    if value is None or isinstance(value, bool):
        raise FinancialInputError(field, f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise FinancialInputError(field, f"expected a number, got {value!r}")
    if not result.is_finite():
        raise FinancialInputError(field, f"must be a finite number, got {value!r}")
    return result


def _positive_amount(value, field: str) -> Decimal:
    amount = _to_decimal(value, field)
    if amount <= 0:
        raise FinancialInputError(field, f"must be greater than zero, got {amount}")
    return amount


def _non_negative_percent(value, field: str) -> Decimal:
    percent = _to_decimal(value, field)
    if percent < 0:
        raise FinancialInputError(field, f"must not be negative, got {percent}")
    return percent


def _positive_years(value, field: str) -> int:
    """Durations and ages are whole numbers; integral Decimals are accepted."""
    if isinstance(value, bool):
        raise FinancialInputError(field, f"expected a whole number, got {value!r}")
    if isinstance(value, int):
        years = value
    else:
        number = _to_decimal(value, field)
        if number != number.to_integral_value():
            raise FinancialInputError(field, f"must be a whole number, got {number}")
        years = int(number)
    if years <= 0:
        raise FinancialInputError(field, f"must be greater than zero, got {years}")
    return years


@contextmanager
def _computing(field: str):
    """Run formulas at _PRECISION; Decimal traps (overflow, ...) become input errors."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            yield
        except DecimalException as e:
            raise FinancialInputError(field, f"out of computable range ({type(e).__name__})") from e


def _in_range(value: Decimal, field: str) -> Decimal:
    if abs(value) >= MAX_RESULT:
        raise FinancialInputError(field, f"result too large to compute (limit {MAX_RESULT:E})")
    return value


# ============================================================================
# ANNUITY-DUE PRIMITIVES
# ============================================================================

def monthly_rate(annual_percent: Decimal) -> Decimal:
    """
    Convert an annual percentage into the monthly rate.

    Example:
        >>> monthly_rate(Decimal("12"))
        Decimal('0.01')
    """
    return annual_percent / _HUNDRED / MONTHS_PER_YEAR


def annuity_due_factor(rate: Decimal, periods: int) -> Decimal:
    """
    Future value of 1 paid at the start of each of `periods` periods.

    Formula: ((1 + r)^n - 1) / r * (1 + r), and n when (1 + r)^n rounds to
    exactly 1 (r == 0 or a vanishing rate). The factor is never below n for
    r >= 0, so rounding at tiny rates is bounded by n.
    """
    growth = (_ONE + rate) ** periods
    if growth == _ONE:
        return Decimal(periods)
    return max((growth - _ONE) / rate * (_ONE + rate), Decimal(periods))


def sip_future_value(monthly_amount: Decimal, rate: Decimal, periods: int) -> Decimal:
    """FV = P * (((1+r)^n - 1) / r) * (1+r); FV = P * n when r == 0."""
    return monthly_amount * annuity_due_factor(rate, periods)


def sip_contribution_for_target(target: Decimal, rate: Decimal, periods: int) -> Decimal:
    """
    Inverse of sip_future_value: the monthly amount that grows to `target`.

    Formula: P = FV * r / (((1+r)^n - 1) * (1+r)); P = FV / n when r == 0.
    """
    return target / annuity_due_factor(rate, periods)


# ============================================================================
# CALCULATORS
# ============================================================================

def compute_sip(monthly_amount, annual_return_percent, years) -> SIPResult:
    """
    Future value of a Systematic Investment Plan.

    Contributions are made at the start of each month and compound monthly.

    Args:
        monthly_amount: Fixed monthly contribution (> 0)
        annual_return_percent: Expected annual return in percent (>= 0)
        years: Duration in whole years (> 0)

    Returns:
        SIPResult with total_invested, future_value, total_returns

    Raises:
        FinancialInputError: On invalid input

    Example:
        >>> compute_sip(5000, 12, 20).future_value  # about 4,995,740
    """
    amount = _positive_amount(monthly_amount, "monthly_amount")
    percent = _non_negative_percent(annual_return_percent, "annual_return_percent")
    duration = _positive_years(years, "years")

    periods = duration * MONTHS_PER_YEAR
    with _computing("annual_return_percent"):
        future_value = _in_range(sip_future_value(amount, monthly_rate(percent), periods), "future_value")
        total_invested = amount * periods

        return SIPResult(
            total_invested=total_invested,
            future_value=future_value,
            total_returns=future_value - total_invested,
            )


def compute_sip_schedule(monthly_amount, annual_return_percent, years) -> List[SIPScheduleRow]:
    """
    Year-by-year growth of a SIP.

    Row k applies the SIP formula with k*12 contributions, so the last row
    equals compute_sip(...) for the same inputs. Values are strictly
    increasing when the rate is positive.

    Returns:
        List with exactly `years` rows, year 1 first
    """
    amount = _positive_amount(monthly_amount, "monthly_amount")
    percent = _non_negative_percent(annual_return_percent, "annual_return_percent")
    duration = _positive_years(years, "years")

    rows: List[SIPScheduleRow] = []
    with _computing("annual_return_percent"):
        rate = monthly_rate(percent)
        for year in range(1, duration + 1):
            periods = year * MONTHS_PER_YEAR
            investment = amount * periods
            value = _in_range(sip_future_value(amount, rate, periods), "value")
            rows.append(SIPScheduleRow(
                year=year,
                investment=investment,
                value=value,
                returns=value - investment,
                ))
    return rows


def compute_emi(principal, annual_rate_percent, tenure_years) -> EMIResult:
    """
    Equated Monthly Installment for a reducing-balance loan.

    Formula: E = P * r * (1+r)^n / ((1+r)^n - 1); E = P / n when r == 0.

    Args:
        principal: Loan amount (> 0)
        annual_rate_percent: Annual interest rate in percent (>= 0)
        tenure_years: Loan tenure in whole years (> 0)

    Returns:
        EMIResult with monthly_emi, total_payable, total_interest

    Example:
        >>> compute_emi(1000000, Decimal("8.5"), 20).monthly_emi  # about 8,678
    """
    loan = _positive_amount(principal, "principal")
    percent = _non_negative_percent(annual_rate_percent, "annual_rate_percent")
    tenure = _positive_years(tenure_years, "tenure_years")

    periods = tenure * MONTHS_PER_YEAR
    with _computing("annual_rate_percent"):
        rate = monthly_rate(percent)
        growth = (_ONE + rate) ** periods
        if growth == _ONE:
            emi = loan / periods
        else:
            # Never below the interest-free installment
            emi = max(loan * rate * growth / (growth - _ONE), loan / periods)

        total_payable = _in_range(emi * periods, "total_payable")
        return EMIResult(
            monthly_emi=emi,
            total_payable=total_payable,
            total_interest=total_payable - loan,
            )


def compute_retirement_plan(
    current_age,
    retirement_age,
    monthly_expenses_today,
    inflation_percent,
    expected_return_percent,
    ) -> RetirementPlan:
    """
    Size a retirement corpus and the monthly SIP needed to build it.

    Steps:
    1. Y = retirement_age - current_age (must be > 0)
    2. Inflate today's monthly expenses: E_f = E_0 * (1 + inflation/100)^Y
    3. Perpetuity corpus: C = E_f * 12 / (expected_return/100)
    4. Monthly SIP reaching C in Y years at the same return (annuity-due)

    The corpus is a perpetuity approximation: it is never drawn down.

    Raises:
        FinancialInputError: On invalid input, including
            retirement_age <= current_age and a zero expected return
    """
    start_age = _positive_years(current_age, "current_age")
    end_age = _positive_years(retirement_age, "retirement_age")
    if end_age <= start_age:
        raise FinancialInputError(
            "retirement_age",
            f"must be greater than current_age ({start_age}), got {end_age}",
            )
    expenses = _positive_amount(monthly_expenses_today, "monthly_expenses_today")
    inflation = _non_negative_percent(inflation_percent, "inflation_percent")
    expected_return = _positive_amount(expected_return_percent, "expected_return_percent")

    years = end_age - start_age
    with _computing("inflation_percent"):
        future_expenses = _in_range(expenses * (_ONE + inflation / _HUNDRED) ** years, "future_monthly_expenses")
    with _computing("expected_return_percent"):
        corpus = _in_range(future_expenses * MONTHS_PER_YEAR / (expected_return / _HUNDRED), "required_corpus")
        monthly_sip = sip_contribution_for_target(corpus, monthly_rate(expected_return), years * MONTHS_PER_YEAR)

    return RetirementPlan(
        years_to_retirement=years,
        future_monthly_expenses=future_expenses,
        required_corpus=corpus,
        required_monthly_sip=monthly_sip,
        )


def compute_goal_sip(target_amount, years, expected_return_percent) -> GoalSIPResult:
    """
    Monthly SIP needed to accumulate `target_amount` in `years` years.

    Inverse of compute_sip: feeding the result back into compute_sip with the
    same rate and duration reproduces the target.

    Example:
        >>> compute_goal_sip(2000000, 5, 12).required_monthly_sip  # about 24,246
    """
    target = _positive_amount(target_amount, "target_amount")
    duration = _positive_years(years, "years")
    percent = _non_negative_percent(expected_return_percent, "expected_return_percent")

    periods = duration * MONTHS_PER_YEAR
    _in_range(target, "target_amount")
    with _computing("expected_return_percent"):
        monthly_sip = sip_contribution_for_target(target, monthly_rate(percent), periods)
        total_invested = monthly_sip * periods

        return GoalSIPResult(
            required_monthly_sip=monthly_sip,
            total_invested=total_invested,
            wealth_gained=target - total_invested,
            )
