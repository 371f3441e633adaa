"""
Test cases for tax.py.
"""

import pytest

from property_decision.data.rates import PRIMARY_REBATE, TAX_BRACKETS
from property_decision.errors import InvalidInputError
from property_decision.models import PropertyInputs
from property_decision.tax import (
    compute_income_breakdown,
    compute_tax,
    select_bracket,
    tax_at,
    tax_brackets,
    zero_tax_threshold,
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
    )
    defaults.update(kwargs)
    return PropertyInputs(**defaults)


# ── Test 1: Worked example (local + foreign income) ──────────────────────────

def test_income_breakdown_worked_example():
    """10,000 local + 1,600 foreign at 18.5 lands in the 31% bracket."""
    income = compute_income_breakdown(make_inputs())

    assert income.foreign_income == pytest.approx(29_600)
    assert income.total_gross == pytest.approx(39_600)
    assert income.tax.annual_gross == pytest.approx(475_200)
    assert income.tax.applied_bracket.threshold == 370_500
    assert income.tax.applied_bracket.rate == 31
    assert income.tax.tax_before_rebate == pytest.approx(109_819, abs=1)
    assert income.tax.annual_tax == pytest.approx(92_584, abs=1)
    assert income.tax.monthly_tax == pytest.approx(7_715.33, abs=0.01)
    assert income.net_income == pytest.approx(31_884.67, abs=0.01)


# ── Test 2: Bracket selection ────────────────────────────────────────────────

def test_select_bracket_uses_highest_threshold_not_exceeding_income():
    brackets = tax_brackets()
    assert select_bracket(0, brackets).threshold == 0
    assert select_bracket(237_099.99, brackets).threshold == 0
    assert select_bracket(237_100, brackets).threshold == 237_100   # inclusive
    assert select_bracket(500_000, brackets).threshold == 370_500
    assert select_bracket(5_000_000, brackets).threshold == 1_817_000


def test_brackets_are_ascending():
    thresholds = [b.threshold for b in tax_brackets()]
    assert thresholds == sorted(thresholds)
    assert len(thresholds) == len(TAX_BRACKETS)


# ── Test 3: Bracket continuity ───────────────────────────────────────────────

def test_bracket_continuity():
    """Base amount of each bracket equals the tax at its threshold under the previous bracket."""
    brackets = tax_brackets()
    for previous, current in zip(brackets, brackets[1:]):
        assert tax_at(current.threshold, previous) == pytest.approx(current.base_amount, abs=0.5)


def test_no_jump_at_thresholds():
    for bracket in tax_brackets()[1:]:
        below = compute_tax(bracket.threshold - 0.01).tax_before_rebate
        above = compute_tax(bracket.threshold + 0.01).tax_before_rebate
        assert above - below == pytest.approx(0.0, abs=1.0)


# ── Test 4: Rebate floor ─────────────────────────────────────────────────────

def test_income_below_rebate_threshold_pays_no_tax():
    threshold = zero_tax_threshold()
    assert threshold == pytest.approx(PRIMARY_REBATE / 0.18)

    result = compute_tax(threshold - 1_000)
    assert result.annual_tax == 0.0
    assert result.monthly_tax == 0.0
    assert result.effective_rate == 0.0


def test_zero_income_has_zero_effective_rate():
    result = compute_tax(0)
    assert result.annual_tax == 0.0
    assert result.effective_rate == 0.0


# ── Test 5: Monotonicity ─────────────────────────────────────────────────────

def test_tax_and_effective_rate_are_monotonic():
    incomes = [100_000, 200_000, 237_100, 300_000, 475_200, 700_000, 1_000_000, 2_500_000]
    results = [compute_tax(income) for income in incomes]
    for lower, higher in zip(results, results[1:]):
        assert lower.annual_tax <= higher.annual_tax
        assert lower.effective_rate <= higher.effective_rate


# ── Test 6: Invalid input ────────────────────────────────────────────────────

def test_negative_income_is_rejected():
    with pytest.raises(InvalidInputError) as exc:
        compute_tax(-1)
    assert exc.value.field == "annual_income"


def test_non_finite_income_is_rejected():
    with pytest.raises(InvalidInputError):
        compute_tax(float("inf"))
