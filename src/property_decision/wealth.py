"""
Wealth position after a fixed number of years for each scenario.

  keep renting : savings balance (current savings + monthly savings, compounding
                 at the investment return rate)
  buy, live in : equity repaid + appreciation, only when live-in cash is positive
  buy, rent out: equity repaid + appreciation + net rental after the
                 vacancy/maintenance allowance, bond payment and levies
"""

from property_decision.calculator import build_amortization_schedule, equity_after
from property_decision.config import settings
from property_decision.data.rates import RENTAL_COST_ALLOWANCE
from property_decision.models import ConsolidatedResult, PropertyInputs, WealthPosition


def future_savings(current: float, monthly: float, annual_return_pct: float, months: int) -> float:
    monthly_return = annual_return_pct / 12 / 100
    balance = current
    for _ in range(months):
        balance = balance * (1 + monthly_return) + monthly
    return balance


def compute_five_year_positions(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
    years: int = 5,
) -> list[WealthPosition]:
    months = years * 12

    schedule = build_amortization_schedule(
        result.loan_amount, result.interest_rate, inputs.loan_term_years
    )
    equity = equity_after(schedule, months)
    appreciation = inputs.house_price * ((1 + settings.appreciation_rate) ** years - 1)

    savings = future_savings(
        result.current_savings,
        max(result.monthly_savings, 0.0),
        inputs.investment_return_rate,
        months,
    )

    monthly_net_rental = (
        inputs.rental_income * (1 - RENTAL_COST_ALLOWANCE)
        - result.monthly_bond_payment
        - inputs.property_levies
    )
    net_rental = monthly_net_rental * months

    live_in_affordable = result.standard_available > 0
    live_in_equity = equity if live_in_affordable else 0.0
    live_in_appreciation = appreciation if live_in_affordable else 0.0

    return [
        WealthPosition(
            scenario="keep_renting",
            savings=savings,
            equity=0.0,
            appreciation=0.0,
            net_rental_income=0.0,
            total_position=savings,
        ),
        WealthPosition(
            scenario="buy_live_in",
            savings=0.0,
            equity=live_in_equity,
            appreciation=live_in_appreciation,
            net_rental_income=0.0,
            total_position=live_in_equity + live_in_appreciation,
        ),
        WealthPosition(
            scenario="buy_rent_out",
            savings=0.0,
            equity=equity,
            appreciation=appreciation,
            net_rental_income=net_rental,
            total_position=equity + appreciation + net_rental,
        ),
    ]
