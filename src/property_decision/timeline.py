"""
Decision timeline: dated checkpoints for the buy-vs-rent decision.

Events:
  - Down payment target: first savings milestone where flat contributions
    meet the target.
  - Rental break-even: months until cumulative appreciation (compounding at
    settings.appreciation_rate) covers the cumulative monthly shortfall
    (bond payment + levies - rental income). Omitted past the cap.
  - Interest rate risk: warning at month 24 when the target is under 24
    months away.
  - Market analysis: fixed checkpoint at month 6.
"""

import math
from typing import Optional

from property_decision.config import settings
from property_decision.models import (
    ConsolidatedResult,
    PropertyInputs,
    SavingsProjection,
    TimelineEvent,
)

RATE_RISK_MONTH = 24
MARKET_ANALYSIS_MONTH = 6


def break_even_months(
    monthly_payment: float,
    rental_income: float,
    property_levies: float,
    appreciation_rate: float,
    property_value: float,
    cap_months: Optional[int] = None,
) -> Optional[int]:
    """
    First month where appreciation gained covers the accumulated shortfall.

    0 when rent already covers the costs; None when the cap is reached first.
    """
    cap = settings.timeline_cap_months if cap_months is None else cap_months
    monthly_shortfall = monthly_payment + property_levies - rental_income
    if monthly_shortfall <= 0:
        return 0

    for month in range(1, cap + 1):
        appreciation = property_value * ((1 + appreciation_rate) ** (month / 12) - 1)
        if appreciation >= monthly_shortfall * month:
            return month
    return None


def build_decision_timeline(
    inputs: PropertyInputs,
    result: ConsolidatedResult,
    projection: SavingsProjection,
) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []
    appreciation_rate = settings.appreciation_rate

    target_milestone = next(
        (m for m in projection.milestones if m.standard_amount >= projection.target),
        None,
    )
    if target_milestone is not None:
        events.append(
            TimelineEvent(
                month=target_milestone.month,
                title="Down Payment Target",
                description="Savings reach required down payment amount",
                kind="milestone",
                value=target_milestone.standard_amount,
            )
        )

    months = break_even_months(
        result.monthly_bond_payment,
        inputs.rental_income,
        inputs.property_levies,
        appreciation_rate,
        inputs.house_price,
    )
    if months is not None:
        events.append(
            TimelineEvent(
                month=months,
                title="Rental Break-Even",
                description="Property appreciation covers accumulated shortfall",
                kind="milestone",
                value=inputs.house_price * (1 + appreciation_rate) ** (months / 12),
            )
        )

    if not math.isinf(result.months_to_target) and result.months_to_target < RATE_RISK_MONTH:
        events.append(
            TimelineEvent(
                month=RATE_RISK_MONTH,
                title="Interest Rate Risk",
                description="Consider locking in rate before potential increases",
                kind="warning",
            )
        )

    events.append(
        TimelineEvent(
            month=MARKET_ANALYSIS_MONTH,
            title="Market Analysis Point",
            description="Evaluate property market trends and price movements",
            kind="opportunity",
        )
    )

    events.sort(key=lambda e: e.month)
    return events
