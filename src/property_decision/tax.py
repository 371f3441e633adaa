"""
Personal income tax and income breakdown.

Progressive tax:
  - Select the bracket with the greatest threshold not exceeding income.
  - Tax = bracket base amount + (income - threshold) x marginal rate.
  - The primary rebate is subtracted once from the annual figure.
  - Tax is floored at zero: income below rebate / 18% pays nothing.

Foreign income is converted at the input exchange rate and taxed together
with local income; there is no separate foreign tax credit.
"""

from property_decision.data.rates import PRIMARY_REBATE, TAX_BRACKETS
from property_decision.errors import require_non_negative, unbounded_ratio
from property_decision.models import (
    IncomeBreakdown,
    PropertyInputs,
    TaxBracket,
    TaxResult,
)


def tax_brackets() -> list[TaxBracket]:
    """Return the bracket table ordered by ascending threshold."""
    brackets = [TaxBracket(**entry) for entry in TAX_BRACKETS]
    brackets.sort(key=lambda b: b.threshold)
    return brackets


def select_bracket(annual_income: float, brackets: list[TaxBracket]) -> TaxBracket:
    """
    Return the bracket with the highest threshold <= annual_income.

    `brackets` must be ascending and start at threshold 0, so every
    non-negative income has a bracket.
    """
    selected = brackets[0]
    for bracket in brackets:
        if bracket.threshold <= annual_income:
            selected = bracket
        else:
            break
    return selected


def tax_at(annual_income: float, bracket: TaxBracket) -> float:
    """Tax before rebate for an income that falls in `bracket`."""
    return bracket.base_amount + (annual_income - bracket.threshold) * bracket.rate / 100


def compute_tax(annual_income: float) -> TaxResult:
    """
    Itemized annual and monthly tax for a gross annual income.

    Raises InvalidInputError for negative or non-finite income. Zero income
    reports an effective rate of 0.0.
    """
    require_non_negative("annual_income", annual_income)

    brackets = tax_brackets()
    bracket = select_bracket(annual_income, brackets)
    tax_before_rebate = tax_at(annual_income, bracket)
    annual_tax = max(0.0, tax_before_rebate - PRIMARY_REBATE)

    return TaxResult(
        annual_gross=annual_income,
        brackets=brackets,
        applied_bracket=bracket,
        tax_before_rebate=tax_before_rebate,
        rebate=PRIMARY_REBATE,
        annual_tax=annual_tax,
        monthly_tax=annual_tax / 12,
        effective_rate=unbounded_ratio(annual_tax, annual_income) * 100,
    )


def zero_tax_threshold() -> float:
    """Annual income below which the rebate cancels all tax."""
    first = tax_brackets()[0]
    return first.threshold + PRIMARY_REBATE / (first.rate / 100)


def compute_income_breakdown(inputs: PropertyInputs) -> IncomeBreakdown:
    """Combine local and converted foreign income and apply monthly tax."""
    foreign_income = inputs.monthly_income_foreign * inputs.exchange_rate
    total_gross = inputs.monthly_income_local + foreign_income
    tax = compute_tax(total_gross * 12)

    return IncomeBreakdown(
        local_income=inputs.monthly_income_local,
        foreign_amount=inputs.monthly_income_foreign,
        exchange_rate=inputs.exchange_rate,
        foreign_income=foreign_income,
        total_gross=total_gross,
        tax=tax,
        net_income=total_gross - tax.monthly_tax,
    )
