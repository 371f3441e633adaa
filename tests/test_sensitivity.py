"""
Test cases for sensitivity.py.
"""

import pytest

from property_decision.data.rates import (
    EXCHANGE_RATE_FACTORS,
    FOREIGN_INCOME_VARIATIONS_PCT,
    RENTAL_VARIATIONS_PCT,
)
from property_decision.models import PropertyInputs
from property_decision.scenarios import compute_all
from property_decision.sensitivity import compute_sensitivity, estimate_time_impact


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def inputs() -> PropertyInputs:
    return PropertyInputs(
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


@pytest.fixture
def result(inputs):
    return compute_all(inputs)


# ── Test 1: Rental income sweep ───────────────────────────────────────────────

def test_rental_variations(inputs, result):
    report = compute_sensitivity(inputs, result)
    rows = report.rental_variations

    assert [r.variation for r in rows] == list(RENTAL_VARIATIONS_PCT)
    for row in rows:
        delta = row.income - inputs.rental_income
        assert row.income == pytest.approx(18_000 * (1 + row.variation / 100))
        assert row.available == pytest.approx(result.rent_out_available + delta)

    base = next(r for r in rows if r.variation == 0)
    assert base.available == result.rent_out_available
    assert base.time_impact == 0.0


def test_time_impact_only_for_higher_rent(inputs, result):
    report = compute_sensitivity(inputs, result)
    for row in report.rental_variations:
        if row.variation <= 0:
            assert row.time_impact == 0.0
        else:
            assert row.time_impact > 0.0

    plus_ten = next(r for r in report.rental_variations if r.variation == 10)
    ratio = (result.monthly_bond_payment + 1_800) / result.monthly_bond_payment
    assert plus_ten.time_impact == pytest.approx((240 - 240 / ratio) / 12)


def test_estimate_time_impact_guards():
    assert estimate_time_impact(0, 1_000, 240) == 0.0
    assert estimate_time_impact(20_000, 0, 240) == 0.0
    assert estimate_time_impact(20_000, -500, 240) == 0.0
    assert estimate_time_impact(10_000, 10_000, 240) == pytest.approx(10.0)


# ── Test 2: Vacancy ───────────────────────────────────────────────────────────

def test_one_month_vacancy_is_rent_over_twelve(inputs, result):
    report = compute_sensitivity(inputs, result)
    one_month = report.vacancy[0]

    assert one_month.months == 1
    assert one_month.lost_income == inputs.rental_income
    assert one_month.monthly_impact == inputs.rental_income / 12
    assert one_month.new_available == result.rent_out_available - inputs.rental_income / 12


def test_two_month_vacancy(inputs, result):
    report = compute_sensitivity(inputs, result)
    two_months = report.vacancy[1]

    assert two_months.months == 2
    assert two_months.lost_income == pytest.approx(36_000)
    assert two_months.monthly_impact == pytest.approx(3_000)
    assert two_months.new_available == pytest.approx(result.rent_out_available - 3_000)


# ── Test 3: Exchange rate and foreign income ─────────────────────────────────

def test_exchange_rate_sweep(inputs, result):
    report = compute_sensitivity(inputs, result)
    rows = report.exchange_rate

    assert len(rows) == len(EXCHANGE_RATE_FACTORS)
    for factor, row in zip(EXCHANGE_RATE_FACTORS, rows):
        assert row.rate == pytest.approx(18.5 * factor)
        assert row.local_value == pytest.approx(1_600 * 18.5 * factor)
        assert row.net_change == pytest.approx(1_600 * 18.5 * (factor - 1))
        assert row.new_available == pytest.approx(result.rent_out_available + row.net_change)

    middle = rows[EXCHANGE_RATE_FACTORS.index(1.0)]
    assert middle.net_change == 0.0


def test_foreign_income_sweep(inputs, result):
    report = compute_sensitivity(inputs, result)
    rows = report.foreign_income

    assert [r.variation for r in rows] == list(FOREIGN_INCOME_VARIATIONS_PCT)
    minus_ten = rows[0]
    assert minus_ten.amount == pytest.approx(1_440)
    assert minus_ten.net_change == pytest.approx(-2_960)
    assert minus_ten.new_available == pytest.approx(result.rent_out_available - 2_960)


# ── Test 4: Incremental deltas, not a recompute ───────────────────────────────

def test_deltas_follow_the_supplied_base(inputs, result):
    """Shifting the base available cash shifts every sample by the same amount."""
    shifted = result.model_copy(update={"rent_out_available": result.rent_out_available + 1_000})

    base_report = compute_sensitivity(inputs, result)
    shifted_report = compute_sensitivity(inputs, shifted)

    assert shifted_report.base_available == base_report.base_available + 1_000
    for a, b in zip(base_report.vacancy, shifted_report.vacancy):
        assert b.new_available == pytest.approx(a.new_available + 1_000)
    for a, b in zip(base_report.exchange_rate, shifted_report.exchange_rate):
        assert b.new_available == pytest.approx(a.new_available + 1_000)
