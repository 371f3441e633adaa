"""
Scenario aggregation: affordability, savings progress and available
monthly cash for the three competing choices.

  live-in       = net - housing - expenses - allocation
  rent-out      = net + rental - housing - expenses - allocation - rent
  keep renting  = net - rent - expenses - allocation

housing = bond payment + levies. The bond payment uses the same closed-form
annuity as calculator.monthly_payment.
"""

import calendar
import math
from datetime import date
from typing import Optional

from property_decision.calculator import monthly_payment
from property_decision.data.rates import (
    AFFORDABILITY_GOOD_MAX_PCT,
    AFFORDABILITY_MODERATE_MAX_PCT,
    RATE_SHOCK_PCT,
    VACANCY_ALLOWANCE,
)
from property_decision.errors import unbounded_ratio
from property_decision.models import (
    AffordabilityStatus,
    ConsolidatedResult,
    PropertyInputs,
    PropertyMetrics,
)
from property_decision.tax import compute_income_breakdown


def classify_affordability(housing_to_income_ratio: float) -> AffordabilityStatus:
    """
    Boundaries (inclusive upper bound):
      <= 30% -> Good
      <= 40% -> Moderate
      else   -> High  (including an unbounded ratio)
    """
    if housing_to_income_ratio <= AFFORDABILITY_GOOD_MAX_PCT:
        return "Good"
    if housing_to_income_ratio <= AFFORDABILITY_MODERATE_MAX_PCT:
        return "Moderate"
    return "High"


def months_to_target(remaining: float, monthly_savings: float) -> float:
    """
    ceil(remaining / monthly_savings).

    Returns 0 when nothing remains and math.inf when monthly savings are
    zero or negative.
    """
    if remaining <= 0:
        return 0
    months = unbounded_ratio(remaining, monthly_savings)
    return months if math.isinf(months) else math.ceil(months)


def compute_property_metrics(
    inputs: PropertyInputs,
    bond_payment: float,
    housing_cost: float,
    gross_income: float,
) -> PropertyMetrics:
    vacancy_loss = inputs.rental_income * VACANCY_ALLOWANCE
    net_rent = inputs.rental_income - vacancy_loss - inputs.property_levies

    shocked_payment = monthly_payment(
        inputs.loan_amount,
        inputs.interest_rate + RATE_SHOCK_PCT,
        inputs.loan_term_years,
    )

    return PropertyMetrics(
        rental_yield=unbounded_ratio(inputs.rental_income * 12, inputs.house_price) * 100,
        net_rental_yield=unbounded_ratio(net_rent * 12, inputs.house_price) * 100,
        rental_coverage=unbounded_ratio(inputs.rental_income, housing_cost) * 100,
        bond_coverage=unbounded_ratio(inputs.rental_income, bond_payment) * 100,
        loan_to_value=unbounded_ratio(inputs.loan_amount, inputs.house_price) * 100,
        foreign_income_dependence=unbounded_ratio(
            inputs.monthly_income_foreign * inputs.exchange_rate, gross_income
        ) * 100,
        rate_increase_impact=shocked_payment - bond_payment,
    )


def compute_all(inputs: PropertyInputs) -> ConsolidatedResult:
    """Derive every figure the dashboard shows from one input record."""
    income = compute_income_breakdown(inputs)
    net_income = income.net_income

    # Property
    loan_amount = inputs.loan_amount
    interest_rate = inputs.interest_rate
    bond_payment = monthly_payment(loan_amount, interest_rate, inputs.loan_term_years)
    housing_cost = bond_payment + inputs.property_levies

    # Affordability
    ratio = unbounded_ratio(housing_cost, net_income) * 100
    disposable = net_income - housing_cost - inputs.personal_expenses

    # Savings progress
    current_rent = inputs.monthly_rent
    fixed_costs = inputs.personal_expenses + inputs.personal_allocation
    if inputs.monthly_savings is not None:
        savings_per_month = inputs.monthly_savings
    else:
        savings_per_month = net_income - current_rent - fixed_costs
    current_savings = inputs.current_savings or 0.0
    target = (
        inputs.target_down_payment
        if inputs.target_down_payment is not None
        else inputs.down_payment
    )
    shortfall = target - current_savings

    return ConsolidatedResult(
        total_monthly_income=income.total_gross,
        monthly_net_income=net_income,
        monthly_tax=income.tax.monthly_tax,
        loan_amount=loan_amount,
        interest_rate=interest_rate,
        monthly_bond_payment=bond_payment,
        total_housing_cost=housing_cost,
        housing_to_income_ratio=ratio,
        disposable_after_housing=disposable,
        affordability_status=classify_affordability(ratio),
        current_savings=current_savings,
        savings_target=target,
        down_payment_shortfall=shortfall,
        monthly_savings=savings_per_month,
        months_to_target=months_to_target(shortfall, savings_per_month),
        current_rent=current_rent,
        standard_available=net_income - housing_cost - fixed_costs,
        rent_out_available=(
            net_income + inputs.rental_income - housing_cost - fixed_costs - current_rent
        ),
        rent_and_save_available=net_income - current_rent - fixed_costs,
        metrics=compute_property_metrics(
            inputs, bond_payment, housing_cost, income.total_gross
        ),
    )


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def projected_target_date(result: ConsolidatedResult, as_of: date) -> Optional[date]:
    """Date the savings target is reached, or None when it never is."""
    if math.isinf(result.months_to_target):
        return None
    return add_months(as_of, int(result.months_to_target))
