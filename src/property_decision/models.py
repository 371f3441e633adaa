"""Pydantic v2 models for the property decision engine."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PropertyInputs(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    # Property and financing
    house_price: float                   # Purchase price
    down_payment: float                  # Cash put down at purchase
    prime_rate: float                    # Prime lending rate, % (e.g. 11.75)
    premium_above_prime: float           # Bank margin over prime, %
    loan_term_years: int                 # Bond term in years

    # Income
    monthly_income_local: float          # Employment income in local currency
    monthly_income_foreign: float        # Employment income in foreign currency
    exchange_rate: float                 # Local units per foreign unit
    rental_income: float                 # Expected monthly rent if the property is let
    monthly_rent: float = 0.0            # Rent currently paid by the household

    # Investment settings
    investment_return_rate: float        # Expected annual return on savings, %

    # Monthly expenses
    personal_allocation: float           # Fixed personal allocation (spending money)
    personal_expenses: float             # Living expenses excluding rent
    property_levies: float               # Levies / rates on the property

    # Savings
    current_savings: Optional[float] = None
    target_down_payment: Optional[float] = None
    monthly_savings: Optional[float] = None   # Overrides the derived monthly savings

    @field_validator(
        "house_price",
        "down_payment",
        "prime_rate",
        "premium_above_prime",
        "monthly_income_local",
        "monthly_income_foreign",
        "exchange_rate",
        "rental_income",
        "monthly_rent",
        "investment_return_rate",
        "personal_allocation",
        "personal_expenses",
        "property_levies",
    )
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must be non-negative")
        return v

    @field_validator("current_savings", "target_down_payment")
    @classmethod
    def validate_optional_non_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("must be non-negative")
        return v

    @field_validator("loan_term_years")
    @classmethod
    def validate_term(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("loan_term_years must be positive")
        return v

    @model_validator(mode="after")
    def validate_down_payment(self) -> "PropertyInputs":
        if self.down_payment > self.house_price:
            raise ValueError(
                f"down_payment {self.down_payment:,.0f} exceeds house_price "
                f"{self.house_price:,.0f}"
            )
        return self

    @property
    def interest_rate(self) -> float:
        return self.prime_rate + self.premium_above_prime

    @property
    def loan_amount(self) -> float:
        return self.house_price - self.down_payment


# ── Tax ──────────────────────────────────────────────────────────────────────

class TaxBracket(BaseModel):
    threshold: float
    rate: float              # Marginal rate, %
    base_amount: float       # Tax owed at exactly `threshold`


class TaxResult(BaseModel):
    annual_gross: float
    brackets: list[TaxBracket]       # Ascending by threshold
    applied_bracket: TaxBracket
    tax_before_rebate: float
    rebate: float
    annual_tax: float                # After rebate, floored at zero
    monthly_tax: float
    effective_rate: float            # annual_tax / annual_gross, %


class IncomeBreakdown(BaseModel):
    local_income: float
    foreign_amount: float            # In foreign currency
    exchange_rate: float
    foreign_income: float            # Converted to local currency
    total_gross: float
    tax: TaxResult
    net_income: float


# ── Loan ─────────────────────────────────────────────────────────────────────

class OriginalSchedule(BaseModel):
    total_interest: float
    total_payments: float
    term_months: int


class AcceleratedSchedule(BaseModel):
    total_interest: float
    total_payments: float
    term_months: int
    years_saved: float
    interest_saved: float
    converged: bool = True           # False when the original schedule was returned


class LoanProjection(BaseModel):
    monthly_payment: float
    extra_payment: float
    original: OriginalSchedule
    accelerated: AcceleratedSchedule


class AmortizationRow(BaseModel):
    month: int
    balance: float           # Outstanding principal at start of month
    interest: float
    principal: float
    payment: float           # interest + principal


# ── Savings ──────────────────────────────────────────────────────────────────

class SavingsStrategy(str, Enum):
    SIMPLE = "simple"                # flat contributions alongside nominal compounding
    COMPOUNDING = "compounding"      # inflation-adjusted compounding, monthly breakdown


class SavingsMilestone(BaseModel):
    month: int
    standard_amount: float   # Flat contributions only
    with_returns: float      # Contributions plus investment returns


class MonthlyBalance(BaseModel):
    month: int
    balance: float
    contribution: float
    returns: float


class MonthsToTarget(BaseModel):
    standard: int
    with_returns: int


class TargetReached(BaseModel):
    standard: bool
    with_returns: bool


class SavingsProjection(BaseModel):
    strategy: SavingsStrategy
    current: float
    target: float
    monthly_contribution: float
    annual_return: float
    inflation_rate: Optional[float] = None
    horizon_months: int
    months_to_target: MonthsToTarget
    target_reached: TargetReached
    milestones: list[SavingsMilestone]
    monthly_breakdown: list[MonthlyBalance] = []
    total_contributions: float
    total_returns: float


# ── Sensitivity ──────────────────────────────────────────────────────────────

class RentalSensitivity(BaseModel):
    variation: int           # % offset from base rental income
    income: float
    available: float
    time_impact: float       # Approximate years shaved off the bond


class VacancyImpact(BaseModel):
    months: int
    lost_income: float
    monthly_impact: float
    new_available: float


class ExchangeRateImpact(BaseModel):
    rate: float
    local_value: float
    net_change: float
    new_available: float


class ForeignIncomeSensitivity(BaseModel):
    variation: int
    amount: float            # In foreign currency
    local_value: float
    net_change: float
    new_available: float


class SensitivityReport(BaseModel):
    base_rental_income: float
    base_available: float
    rental_variations: list[RentalSensitivity]
    vacancy: list[VacancyImpact]
    exchange_rate: list[ExchangeRateImpact]
    foreign_income: list[ForeignIncomeSensitivity]


# ── Consolidated ─────────────────────────────────────────────────────────────

AffordabilityStatus = Literal["Good", "Moderate", "High"]


class PropertyMetrics(BaseModel):
    rental_yield: float              # Gross annual rent / price, %
    net_rental_yield: float          # After vacancy allowance and levies, %
    rental_coverage: float           # Rent / total housing cost, %
    bond_coverage: float             # Rent / bond payment, %
    loan_to_value: float             # %
    foreign_income_dependence: float # Foreign share of gross income, %
    rate_increase_impact: float      # Extra monthly payment after a rate shock


class ConsolidatedResult(BaseModel):
    # Income
    total_monthly_income: float
    monthly_net_income: float
    monthly_tax: float

    # Property
    loan_amount: float
    interest_rate: float
    monthly_bond_payment: float
    total_housing_cost: float

    # Affordability
    housing_to_income_ratio: float   # %, math.inf when net income is zero
    disposable_after_housing: float
    affordability_status: AffordabilityStatus

    # Savings progress
    current_savings: float
    savings_target: float
    down_payment_shortfall: float
    monthly_savings: float
    months_to_target: float          # Whole months, math.inf when unbounded
    current_rent: float

    # Scenarios: available monthly cash
    standard_available: float        # Buy and live in
    rent_out_available: float        # Buy, let it out, keep renting
    rent_and_save_available: float   # Keep renting and save

    metrics: PropertyMetrics


# ── Timeline & wealth ────────────────────────────────────────────────────────

class TimelineEvent(BaseModel):
    month: int
    title: str
    description: str
    kind: Literal["milestone", "warning", "opportunity"]
    value: Optional[float] = None


class WealthPosition(BaseModel):
    scenario: Literal["keep_renting", "buy_live_in", "buy_rent_out"]
    savings: float
    equity: float
    appreciation: float
    net_rental_income: float
    total_position: float
