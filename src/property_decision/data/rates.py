"""
Hardcoded tax tables for the 2024/2025 tax year and sensitivity sweep offsets.
Update these values when the tax tables are published for a new year.
"""

from typing import TypedDict

TAX_YEAR = "2024/2025"

# ── Progressive income tax brackets ──────────────────────────────────────────
# base_amount is the tax owed at exactly `threshold` under the previous bracket.

class BracketEntry(TypedDict):
    threshold: float     # annual taxable income where this bracket starts
    rate: float          # marginal rate in percent
    base_amount: float   # cumulative tax at threshold


TAX_BRACKETS: list[BracketEntry] = [
    {"threshold": 0,         "rate": 18, "base_amount": 0},
    {"threshold": 237_100,   "rate": 26, "base_amount": 42_678},
    {"threshold": 370_500,   "rate": 31, "base_amount": 77_362},
    {"threshold": 512_800,   "rate": 36, "base_amount": 121_475},
    {"threshold": 673_000,   "rate": 39, "base_amount": 179_147},
    {"threshold": 857_900,   "rate": 41, "base_amount": 251_258},
    {"threshold": 1_817_000, "rate": 45, "base_amount": 644_489},
]

# Flat primary rebate, subtracted once from annual tax
PRIMARY_REBATE = 17_235

# ── Affordability bands ──────────────────────────────────────────────────────
# Housing cost as % of net income (inclusive upper bounds)
AFFORDABILITY_GOOD_MAX_PCT = 30.0
AFFORDABILITY_MODERATE_MAX_PCT = 40.0

# ── Amortization ─────────────────────────────────────────────────────────────
# Minimum balance movement per month before a simulation counts as stuck
STUCK_TOLERANCE = 0.01
MAX_STUCK_MONTHS = 3

# ── Sensitivity sweeps ───────────────────────────────────────────────────────
RENTAL_VARIATIONS_PCT: tuple[int, ...] = (-15, -10, -5, 0, 5, 10, 15)
VACANCY_MONTHS: tuple[int, ...] = (1, 2)
EXCHANGE_RATE_FACTORS: tuple[float, ...] = (0.9, 0.95, 1.0, 1.05, 1.1)
FOREIGN_INCOME_VARIATIONS_PCT: tuple[int, ...] = (-10, -5, 0, 5, 10)

# ── Property metrics ─────────────────────────────────────────────────────────
# One vacant month per year, as a share of gross rent
VACANCY_ALLOWANCE = 1 / 12
# Vacancy + maintenance haircut on gross rent for wealth projections
RENTAL_COST_ALLOWANCE = 0.08
# Rate shock (percentage points) for the rate-increase risk metric
RATE_SHOCK_PCT = 2.0
