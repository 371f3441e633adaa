"""
Test cases for scenarios.py (consolidated result, affordability, savings progress).
"""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from property_decision.calculator import monthly_payment
from property_decision.models import PropertyInputs
from property_decision.scenarios import (
    add_months,
    classify_affordability,
    compute_all,
    months_to_target,
    projected_target_date,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_inputs(**kwargs) -> PropertyInputs:
    defaults = dict(
        house_price=2_500_000,
        down_payment=600_000,
        prime_rate=11.75,
        premium_above_prime=2.0,
        loan_term_years=20,
        monthly_income_local=10_000,
        monthly_income_foreign=1_600,
        exchange_rate=18.5,
        rental_income=18_000,
        monthly_rent=9_500,
        investment_return_rate=9.0,
        personal_allocation=2_000,
        personal_expenses=6_000,
        property_levies=1_800,
        current_savings=150_000,
    )
    defaults.update(kwargs)
    return PropertyInputs(**defaults)


# ── Test 1: Worked example ────────────────────────────────────────────────────

def test_consolidated_worked_example():
    inputs = make_inputs()
    result = compute_all(inputs)

    assert result.total_monthly_income == pytest.approx(39_600)
    assert result.monthly_net_income == pytest.approx(31_884.67, abs=0.01)
    assert result.loan_amount == 1_900_000
    assert result.interest_rate == pytest.approx(13.75)
    assert result.monthly_bond_payment == pytest.approx(23_300, abs=50)
    assert result.total_housing_cost == pytest.approx(result.monthly_bond_payment + 1_800)

    expected_ratio = result.total_housing_cost / result.monthly_net_income * 100
    assert result.housing_to_income_ratio == pytest.approx(expected_ratio)
    assert result.affordability_status == "High"


def test_scenario_cash_figures():
    inputs = make_inputs()
    result = compute_all(inputs)
    net = result.monthly_net_income
    housing = result.total_housing_cost
    fixed = inputs.personal_expenses + inputs.personal_allocation

    assert result.standard_available == pytest.approx(net - housing - fixed)
    assert result.rent_out_available == pytest.approx(
        net + inputs.rental_income - housing - fixed - inputs.monthly_rent
    )
    assert result.rent_and_save_available == pytest.approx(net - inputs.monthly_rent - fixed)
    assert result.disposable_after_housing == pytest.approx(
        net - housing - inputs.personal_expenses
    )


def test_bond_payment_matches_amortizer():
    inputs = make_inputs()
    result = compute_all(inputs)
    assert result.monthly_bond_payment == monthly_payment(1_900_000, 13.75, 20)


def test_compute_all_is_deterministic():
    inputs = make_inputs()
    assert compute_all(inputs) == compute_all(inputs)


# ── Test 2: Savings progress ──────────────────────────────────────────────────

def test_savings_progress_defaults_to_down_payment_target():
    result = compute_all(make_inputs())

    assert result.savings_target == 600_000
    assert result.down_payment_shortfall == 450_000
    assert result.monthly_savings == pytest.approx(result.rent_and_save_available)
    assert result.months_to_target == math.ceil(450_000 / result.monthly_savings)


def test_explicit_target_and_monthly_savings_override():
    result = compute_all(make_inputs(target_down_payment=500_000, monthly_savings=10_000))

    assert result.savings_target == 500_000
    assert result.monthly_savings == 10_000
    assert result.months_to_target == 35


def test_missing_current_savings_counts_as_zero():
    result = compute_all(make_inputs(current_savings=None, monthly_savings=50_000))
    assert result.current_savings == 0.0
    assert result.months_to_target == 12


def test_months_to_target_guards():
    assert months_to_target(0, 1_000) == 0
    assert months_to_target(-500, 0) == 0
    assert months_to_target(100, 30) == 4
    assert math.isinf(months_to_target(1_000, 0))
    assert math.isinf(months_to_target(1_000, -250))


# ── Test 3: Affordability bands ───────────────────────────────────────────────

def test_affordability_boundaries():
    assert classify_affordability(25.0) == "Good"
    assert classify_affordability(30.0) == "Good"       # inclusive
    assert classify_affordability(30.01) == "Moderate"
    assert classify_affordability(40.0) == "Moderate"   # inclusive
    assert classify_affordability(40.01) == "High"
    assert classify_affordability(math.inf) == "High"


def test_zero_income_is_unbounded_not_nan():
    result = compute_all(make_inputs(monthly_income_local=0, monthly_income_foreign=0))

    assert result.monthly_net_income == 0
    assert math.isinf(result.housing_to_income_ratio)
    assert result.affordability_status == "High"
    assert math.isinf(result.months_to_target)
    assert not math.isnan(result.metrics.foreign_income_dependence)


# ── Test 4: Property metrics ──────────────────────────────────────────────────

def test_property_metrics():
    result = compute_all(make_inputs())
    metrics = result.metrics

    assert metrics.rental_yield == pytest.approx(18_000 * 12 / 2_500_000 * 100)
    assert metrics.loan_to_value == pytest.approx(76.0)
    assert metrics.foreign_income_dependence == pytest.approx(29_600 / 39_600 * 100)
    assert metrics.bond_coverage == pytest.approx(18_000 / result.monthly_bond_payment * 100)
    assert metrics.net_rental_yield < metrics.rental_yield
    assert metrics.rate_increase_impact > 0


def test_zero_price_property_has_unbounded_yield():
    result = compute_all(make_inputs(house_price=0, down_payment=0))
    assert result.loan_amount == 0
    assert result.monthly_bond_payment == 0
    assert math.isinf(result.metrics.rental_yield)
    assert result.metrics.loan_to_value == 0.0


# ── Test 5: Input validation ──────────────────────────────────────────────────

def test_down_payment_above_price_is_rejected():
    with pytest.raises(ValidationError, match="down_payment"):
        make_inputs(down_payment=3_000_000)


@pytest.mark.parametrize("field", ["house_price", "rental_income", "exchange_rate"])
def test_negative_fields_are_rejected(field):
    with pytest.raises(ValidationError) as exc:
        make_inputs(**{field: -1})
    assert exc.value.errors()[0]["loc"] == (field,)


@pytest.mark.parametrize(
    "field, value",
    [
        ("rental_income", float("nan")),
        ("monthly_rent", float("nan")),
        ("exchange_rate", float("inf")),
        ("personal_expenses", float("nan")),
        ("current_savings", float("nan")),
    ],
)
def test_non_finite_fields_are_rejected(field, value):
    with pytest.raises(ValidationError) as exc:
        make_inputs(**{field: value})
    assert exc.value.errors()[0]["loc"][0] == field


def test_non_positive_term_is_rejected():
    with pytest.raises(ValidationError):
        make_inputs(loan_term_years=0)


# ── Test 6: Projected date ────────────────────────────────────────────────────

def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


def test_projected_target_date():
    result = compute_all(make_inputs(monthly_savings=50_000))
    assert projected_target_date(result, date(2025, 1, 1)) == date(2025, 10, 1)

    stalled = compute_all(make_inputs(monthly_savings=0))
    assert projected_target_date(stalled, date(2025, 1, 1)) is None
