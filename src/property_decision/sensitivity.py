"""
What-if sweeps around the rent-out scenario.

Every sample is an incremental delta applied to the base
`rent_out_available` figure; the aggregate is NOT recomputed per sample.
This assumes the perturbed variable has no second-order effect on other
terms (a weaker exchange rate does not lower the tax bill, a vacancy does
not change the affordability ratio). If the scenario formulas in
scenarios.py change, these deltas must be kept in step by hand.
"""

from property_decision.data.rates import (
    EXCHANGE_RATE_FACTORS,
    FOREIGN_INCOME_VARIATIONS_PCT,
    RENTAL_VARIATIONS_PCT,
    VACANCY_MONTHS,
)
from property_decision.models import (
    ConsolidatedResult,
    ExchangeRateImpact,
    ForeignIncomeSensitivity,
    PropertyInputs,
    RentalSensitivity,
    SensitivityReport,
    VacancyImpact,
)


def estimate_time_impact(
    monthly_payment: float,
    extra_payment: float,
    term_months: int,
) -> float:
    """
    Rough years saved on the bond by paying `extra_payment` on top.

    Scales the term by payment / (payment + extra) instead of re-running the
    amortizer. Returns 0 when the extra is not positive or there is no payment.
    """
    if monthly_payment <= 0:
        return 0.0
    payment_ratio = (monthly_payment + extra_payment) / monthly_payment
    if payment_ratio <= 1:
        return 0.0
    estimated_term = term_months / payment_ratio
    return (term_months - estimated_term) / 12


def rental_variations(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
) -> list[RentalSensitivity]:
    base_rental = inputs.rental_income
    term_months = inputs.loan_term_years * 12
    rows = []
    for percent in RENTAL_VARIATIONS_PCT:
        income = base_rental * (1 + percent / 100)
        delta = income - base_rental
        rows.append(
            RentalSensitivity(
                variation=percent,
                income=income,
                available=result.rent_out_available + delta,
                time_impact=estimate_time_impact(
                    result.monthly_bond_payment, delta, term_months
                ),
            )
        )
    return rows


def vacancy_impacts(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
) -> list[VacancyImpact]:
    rows = []
    for months in VACANCY_MONTHS:
        lost_income = inputs.rental_income * months
        monthly_impact = lost_income / 12
        rows.append(
            VacancyImpact(
                months=months,
                lost_income=lost_income,
                monthly_impact=monthly_impact,
                new_available=result.rent_out_available - monthly_impact,
            )
        )
    return rows


def exchange_rate_impacts(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
) -> list[ExchangeRateImpact]:
    base_value = inputs.monthly_income_foreign * inputs.exchange_rate
    rows = []
    for factor in EXCHANGE_RATE_FACTORS:
        rate = inputs.exchange_rate * factor
        local_value = inputs.monthly_income_foreign * rate
        net_change = local_value - base_value
        rows.append(
            ExchangeRateImpact(
                rate=rate,
                local_value=local_value,
                net_change=net_change,
                new_available=result.rent_out_available + net_change,
            )
        )
    return rows


def foreign_income_variations(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
) -> list[ForeignIncomeSensitivity]:
    base_amount = inputs.monthly_income_foreign
    base_value = base_amount * inputs.exchange_rate
    rows = []
    for percent in FOREIGN_INCOME_VARIATIONS_PCT:
        amount = base_amount * (1 + percent / 100)
        local_value = amount * inputs.exchange_rate
        net_change = local_value - base_value
        rows.append(
            ForeignIncomeSensitivity(
                variation=percent,
                amount=amount,
                local_value=local_value,
                net_change=net_change,
                new_available=result.rent_out_available + net_change,
            )
        )
    return rows


def compute_sensitivity(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
) -> SensitivityReport:
    """All four sweeps against a previously computed ConsolidatedResult."""
    return SensitivityReport(
        base_rental_income=inputs.rental_income,
        base_available=result.rent_out_available,
        rental_variations=rental_variations(inputs, result),
        vacancy=vacancy_impacts(inputs, result),
        exchange_rate=exchange_rate_impacts(inputs, result),
        foreign_income=foreign_income_variations(inputs, result),
    )
