"""Display formatting shared by the terminal front-end and reports."""

import math
from typing import Optional

from property_decision.config import settings

UNBOUNDED = "∞"


def format_money(amount: float, symbol: Optional[str] = None) -> str:
    """Currency prefix, thousands grouping, no decimals: R1,234,567."""
    if math.isinf(amount):
        return UNBOUNDED if amount > 0 else f"-{UNBOUNDED}"
    prefix = settings.currency_symbol if symbol is None else symbol
    sign = "-" if round(amount) < 0 else ""
    return f"{sign}{prefix}{abs(amount):,.0f}"


def format_percentage(value: float) -> str:
    """One decimal place and a trailing %."""
    if math.isinf(value):
        return UNBOUNDED if value > 0 else f"-{UNBOUNDED}"
    return f"{value:.1f}%"


def format_months(months: float) -> str:
    if math.isinf(months):
        return UNBOUNDED
    months = int(months)
    if months <= 12:
        return f"{months} months"
    return f"{months / 12:.1f} years"
