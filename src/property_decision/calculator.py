"""
Core bond math: standard annuity payment, amortization schedule and
accelerated repayment with an extra monthly payment.

Key conventions:
- Rates are annual percentages (13.75 = 13.75%); interest accrues monthly at rate/12.
- The standard payment is fixed for the whole term.
- Accelerated repayment pays (payment + extra) against the running balance;
  the final payment is capped at the remaining balance.
- If the accelerated simulation cannot finish (payment does not beat the
  interest, balance stalls, or 2x the term is exhausted) the original
  schedule is returned with zero savings.
"""

import logging

from property_decision.data.rates import MAX_STUCK_MONTHS, STUCK_TOLERANCE
from property_decision.errors import require_non_negative, require_positive
from property_decision.models import (
    AcceleratedSchedule,
    AmortizationRow,
    LoanProjection,
    OriginalSchedule,
)

logger = logging.getLogger(__name__)


def _validate_loan_args(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    extra_payment: float = 0.0,
) -> None:
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_pct", annual_rate_pct)
    require_positive("term_years", term_years)
    require_non_negative("extra_payment", extra_payment)


def monthly_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Standard annuity payment: P*r*(1+r)^n / ((1+r)^n - 1).
    Degenerates to P/n at a zero rate; returns 0 for a zero principal.
    """
    _validate_loan_args(principal, annual_rate_pct, term_years)
    if principal == 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    n = term_years * 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def build_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    extra_payment: float = 0.0,
) -> list[AmortizationRow]:
    """
    Month-by-month schedule paying (standard payment + extra) until the
    balance is cleared or the contractual term ends.
    """
    _validate_loan_args(principal, annual_rate_pct, term_years, extra_payment)

    r = annual_rate_pct / 100 / 12
    payment = monthly_payment(principal, annual_rate_pct, term_years) + extra_payment

    balance = principal
    schedule: list[AmortizationRow] = []

    for month in range(1, term_years * 12 + 1):
        if balance <= STUCK_TOLERANCE:
            break
        interest = balance * r
        principal_paid = min(payment - interest, balance)
        schedule.append(
            AmortizationRow(
                month=month,
                balance=balance,
                interest=interest,
                principal=principal_paid,
                payment=interest + principal_paid,
            )
        )
        balance -= principal_paid

    return schedule


def equity_after(schedule: list[AmortizationRow], months: int) -> float:
    """Principal repaid during the first `months` of a schedule."""
    return sum(row.principal for row in schedule[:months])


def _original_only(
    payment: float,
    extra_payment: float,
    original: OriginalSchedule,
) -> LoanProjection:
    return LoanProjection(
        monthly_payment=payment,
        extra_payment=extra_payment,
        original=original,
        accelerated=AcceleratedSchedule(
            total_interest=original.total_interest,
            total_payments=original.total_payments,
            term_months=original.term_months,
            years_saved=0.0,
            interest_saved=0.0,
            converged=False,
        ),
    )


def compute_loan_projection(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    extra_payment: float = 0.0,
) -> LoanProjection:
    """
    Original vs accelerated repayment for a bond.

    The accelerated simulation runs for at most 2x the term. It is abandoned
    (original schedule returned, converged=False) when payment + extra does
    not exceed interest-only on the principal, or when the balance moves by
    less than STUCK_TOLERANCE for more than MAX_STUCK_MONTHS months in a row.
    """
    _validate_loan_args(principal, annual_rate_pct, term_years, extra_payment)

    r = annual_rate_pct / 100 / 12
    total_months = term_years * 12
    max_iterations = total_months * 2

    payment = monthly_payment(principal, annual_rate_pct, term_years)
    original_total_payments = payment * total_months
    original = OriginalSchedule(
        total_interest=original_total_payments - principal,
        total_payments=original_total_payments,
        term_months=total_months,
    )

    # Payment must beat interest-only on the opening balance. For principal > 0
    # the annuity payment always does, so this and the stall/cap guards below
    # only catch a zero principal or float drift.
    if payment + extra_payment <= principal * r:
        logger.debug(
            "Payment %.2f + extra %.2f does not cover interest; keeping original schedule",
            payment, extra_payment,
        )
        return _original_only(payment, extra_payment, original)

    balance = principal
    months = 0
    total_interest = 0.0
    stuck_count = 0

    while balance > STUCK_TOLERANCE and months < max_iterations:
        interest = balance * r
        total_interest += interest
        principal_paid = min(payment + extra_payment - interest, balance)
        previous = balance
        balance -= principal_paid
        months += 1

        if abs(previous - balance) < STUCK_TOLERANCE:
            stuck_count += 1
            if stuck_count > MAX_STUCK_MONTHS:
                break
        else:
            stuck_count = 0

    if balance > STUCK_TOLERANCE:
        logger.debug(
            "Accelerated schedule did not converge after %d months; keeping original",
            months,
        )
        return _original_only(payment, extra_payment, original)

    # Float drift can leave a zero-extra simulation a hair above the closed form
    total_interest = min(total_interest, original.total_interest)
    months = min(months, total_months)

    return LoanProjection(
        monthly_payment=payment,
        extra_payment=extra_payment,
        original=original,
        accelerated=AcceleratedSchedule(
            total_interest=total_interest,
            total_payments=total_interest + principal,
            term_months=months,
            years_saved=(total_months - months) / 12,
            interest_saved=original.total_interest - total_interest,
            converged=True,
        ),
    )
