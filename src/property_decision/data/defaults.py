"""
Default input record used when no saved snapshot is available.
"""

from property_decision.models import PropertyInputs

DEFAULT_INPUTS = PropertyInputs(
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
